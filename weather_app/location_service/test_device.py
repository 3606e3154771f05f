import asyncio

import pytest

from weather_app.fakes import FakeLocationProvider
from weather_app.location_service.device import (
    AccessDeniedError,
    AuthorizationStatus,
    DeviceLocationService,
    LocationDisabledError,
    UnableToGetLocationError,
)
from weather_app.models.location import Coordinate


def test_authorized_returns_fix():
    provider = FakeLocationProvider(status=AuthorizationStatus.authorized_always)
    coordinate = asyncio.run(DeviceLocationService(provider).request_location())
    assert coordinate == Coordinate(latitude=41.9, longitude=12.48)
    assert coordinate.query == "41.9,12.48"
    assert provider.prompts == 0


def test_undecided_prompts_then_fixes():
    provider = FakeLocationProvider(status=AuthorizationStatus.not_determined)
    asyncio.run(DeviceLocationService(provider).request_location())
    assert provider.prompts == 1
    assert provider.fixes == 1


@pytest.mark.parametrize("status", [AuthorizationStatus.denied, AuthorizationStatus.restricted])
def test_refused_permission(status):
    provider = FakeLocationProvider(status=status)
    with pytest.raises(AccessDeniedError):
        asyncio.run(DeviceLocationService(provider).request_location())
    assert provider.fixes == 0


def test_prompt_denied():
    provider = FakeLocationProvider(
        status=AuthorizationStatus.not_determined,
        prompt_result=AuthorizationStatus.denied,
    )
    with pytest.raises(AccessDeniedError):
        asyncio.run(DeviceLocationService(provider).request_location())


def test_prompt_left_undecided():
    provider = FakeLocationProvider(
        status=AuthorizationStatus.not_determined,
        prompt_result=AuthorizationStatus.not_determined,
    )
    with pytest.raises(UnableToGetLocationError):
        asyncio.run(DeviceLocationService(provider).request_location())


def test_unknown_status():
    provider = FakeLocationProvider(status="provisional")
    with pytest.raises(UnableToGetLocationError):
        asyncio.run(DeviceLocationService(provider).request_location())


def test_services_disabled():
    provider = FakeLocationProvider(enabled=False)
    with pytest.raises(LocationDisabledError, match="turned off"):
        asyncio.run(DeviceLocationService(provider).request_location())


def test_fix_failure_is_wrapped():
    provider = FakeLocationProvider(fix_error=TimeoutError("no fix"))
    with pytest.raises(UnableToGetLocationError) as exc_info:
        asyncio.run(DeviceLocationService(provider).request_location())
    assert isinstance(exc_info.value.__cause__, TimeoutError)
    assert exc_info.value.description == "Unable to get your current location."
