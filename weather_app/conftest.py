import fakeredis
import pytest

from weather_app.fakes import FailingWrites, make_weather_payload
from weather_app.storage.kv_store import KeyValueStore


@pytest.fixture
def weather_payload():
    return make_weather_payload()


@pytest.fixture
def fake_redis():
    client = fakeredis.FakeRedis(decode_responses=True)
    client.flushall()
    return client


@pytest.fixture
def kv_store(fake_redis):
    return KeyValueStore(fake_redis)


@pytest.fixture
def flaky_redis(fake_redis):
    return FailingWrites(fake_redis)


@pytest.fixture
def flaky_kv_store(flaky_redis):
    return KeyValueStore(flaky_redis)
