"""Device location lookup through the platform location provider."""

from abc import ABC, abstractmethod
from enum import Enum

from weather_app.logging_config import logger
from weather_app.models.location import Coordinate


class AuthorizationStatus(str, Enum):
    """Location permission states reported by the platform."""

    not_determined = "not_determined"
    authorized_when_in_use = "authorized_when_in_use"
    authorized_always = "authorized_always"
    denied = "denied"
    restricted = "restricted"


AUTHORIZED = {AuthorizationStatus.authorized_when_in_use, AuthorizationStatus.authorized_always}
REFUSED = {AuthorizationStatus.denied, AuthorizationStatus.restricted}


class LocationError(Exception):
    """Base exception for device location failures."""

    message = "Unable to get your current location."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def description(self) -> str:
        return str(self)


class AccessDeniedError(LocationError):
    message = "Location access denied. Enable it in the settings."


class LocationDisabledError(LocationError):
    message = "Location services are turned off. Enable them in the settings."


class UnableToGetLocationError(LocationError):
    pass


class DeviceLocationProvider(ABC):
    """Platform location API consumed by the core."""

    @abstractmethod
    def services_enabled(self) -> bool:
        """Whether location services are switched on for the device."""

    @abstractmethod
    def authorization_status(self) -> AuthorizationStatus | str:
        """Current permission state; unknown platform values pass through."""

    @abstractmethod
    async def request_permission(self) -> AuthorizationStatus | str:
        """Prompt the user and return the decided permission state."""

    @abstractmethod
    async def request_one_shot_location(self) -> Coordinate:
        """Return a single position fix; raise on technical failure."""


class DeviceLocationService:
    """Resolves the device position into a coordinate or a LocationError."""

    def __init__(self, provider: DeviceLocationProvider):
        self.provider = provider

    async def request_location(self) -> Coordinate:
        """Return the current device coordinate.

        Raises:
            LocationDisabledError: If location services are off.
            AccessDeniedError: If permission is denied or restricted.
            UnableToGetLocationError: If the fix fails or the permission
                state is unknown or still undecided after prompting.
        """
        if not self.provider.services_enabled():
            logger.warning("DEVICE_LOCATION_DISABLED")
            raise LocationDisabledError()

        status = self.provider.authorization_status()
        if status == AuthorizationStatus.not_determined:
            logger.info("DEVICE_LOCATION_PERMISSION_PROMPT")
            status = await self.provider.request_permission()

        if status in AUTHORIZED:
            return await self._one_shot()
        if status in REFUSED:
            logger.warning("DEVICE_LOCATION_ACCESS_DENIED", status=str(status))
            raise AccessDeniedError()
        logger.error("DEVICE_LOCATION_UNKNOWN_STATUS", status=str(status))
        raise UnableToGetLocationError()

    async def _one_shot(self) -> Coordinate:
        try:
            coordinate = await self.provider.request_one_shot_location()
        except LocationError:
            raise
        except Exception as exc:
            logger.error("DEVICE_LOCATION_FIX_FAILED", error=str(exc))
            raise UnableToGetLocationError() from exc
        logger.info("DEVICE_LOCATION_FIX", latitude=coordinate.latitude, longitude=coordinate.longitude)
        return coordinate
