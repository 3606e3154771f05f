"""Fetch lifecycle state."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class LoadingStatus(str, Enum):
    """Stage of the current weather request."""

    idle = "idle"
    loading = "loading"
    loaded = "loaded"
    error = "error"


class LoadingState(BaseModel):
    """Lifecycle of a weather request: idle, loading, then loaded or error."""

    model_config = ConfigDict(frozen=True)

    status: LoadingStatus = LoadingStatus.idle
    message: str | None = None

    @classmethod
    def idle(cls) -> "LoadingState":
        return cls(status=LoadingStatus.idle)

    @classmethod
    def loading(cls) -> "LoadingState":
        return cls(status=LoadingStatus.loading)

    @classmethod
    def loaded(cls) -> "LoadingState":
        return cls(status=LoadingStatus.loaded)

    @classmethod
    def error(cls, message: str) -> "LoadingState":
        return cls(status=LoadingStatus.error, message=message)

    @property
    def is_error(self) -> bool:
        return self.status is LoadingStatus.error
