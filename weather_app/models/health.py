"""Health check response models."""

from enum import Enum

from pydantic import BaseModel


class ServiceStatus(str, Enum):
    """Availability of a collaborator."""

    available = "available"
    not_available = "not_available"


class Dependencies(BaseModel):
    """Status of the weather API and the key-value store."""

    weather_api: ServiceStatus
    store: ServiceStatus


class HealthResponse(BaseModel):
    status: str
    dependencies: Dependencies
