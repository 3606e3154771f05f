import json

import pytest

from weather_app.models.favorite_city import FavoriteCity
from weather_app.storage.favorites import FavoritesStore


@pytest.fixture
def rome():
    return FavoriteCity(name="Rome", country="Italy", latitude=41.9, longitude=12.48)


@pytest.fixture
def paris():
    return FavoriteCity(name="Paris", country="France", latitude=48.87, longitude=2.33)


def test_add_persists_and_publishes(kv_store, rome):
    store = FavoritesStore(kv_store)
    published = []
    store.publisher.subscribe(published.append)

    assert store.add(rome) is True
    assert store.favorites == [rome]
    assert published[-1] == [rome]
    assert json.loads(kv_store.get("favoriteCities")) == [
        {"name": "Rome", "country": "Italy", "latitude": 41.9, "longitude": 12.48}
    ]


def test_add_equal_value_is_rejected(kv_store, rome):
    store = FavoritesStore(kv_store)
    assert store.add(rome) is True

    twin = FavoriteCity(name="Rome", country="Italy", latitude=41.9, longitude=12.48)
    assert store.add(twin) is False
    assert len(store.favorites) == 1


def test_cities_differing_in_coordinates_are_distinct(kv_store, rome):
    store = FavoritesStore(kv_store)
    store.add(rome)
    assert store.add(rome.model_copy(update={"latitude": 41.8})) is True
    assert len(store.favorites) == 2


def test_remove_absent_city_is_successful_noop(kv_store, rome, paris):
    store = FavoritesStore(kv_store)
    store.add(rome)
    assert store.remove(paris) is True
    assert store.favorites == [rome]


def test_remove_drops_all_duplicates(kv_store, rome, paris):
    kv_store.set(
        "favoriteCities",
        json.dumps([rome.model_dump(), paris.model_dump(), rome.model_dump()]),
    )
    store = FavoritesStore(kv_store)
    assert store.remove(rome) is True
    assert store.favorites == [paris]


def test_is_favorite_lookups(kv_store, rome, paris):
    store = FavoritesStore(kv_store)
    store.add(rome)
    assert store.is_favorite(rome)
    assert not store.is_favorite(paris)
    assert store.is_favorite_named("Rome", "Italy")
    assert not store.is_favorite_named("Rome", "United States of America")


def test_clear_empties_and_publishes(kv_store):
    cities = [
        FavoriteCity(name=f"City {index}", country="Italy", latitude=index, longitude=index)
        for index in range(5)
    ]
    kv_store.set("favoriteCities", json.dumps([city.model_dump() for city in cities]))
    store = FavoritesStore(kv_store)
    assert len(store.favorites) == 5
    published = []
    store.publisher.subscribe(published.append, replay=False)

    assert store.clear() is True
    assert published == [[]]
    assert store.favorites == []
    assert not any(store.is_favorite(city) for city in cities)
    assert json.loads(kv_store.get("favoriteCities")) == []


def test_favorites_reload_from_store(kv_store, rome, paris):
    FavoritesStore(kv_store).add(rome)
    FavoritesStore(kv_store).add(paris)
    assert FavoritesStore(kv_store).favorites == [rome, paris]


def test_corrupt_blob_loads_as_empty(kv_store):
    kv_store.set("favoriteCities", "not json")
    assert FavoritesStore(kv_store).favorites == []


def test_failed_write_rolls_back(flaky_kv_store, flaky_redis, rome, paris):
    store = FavoritesStore(flaky_kv_store)
    store.add(rome)
    published = []
    store.publisher.subscribe(published.append, replay=False)

    flaky_redis.failing = True
    assert store.add(paris) is False
    assert store.remove(rome) is False
    assert store.clear() is False

    assert published == []
    assert store.favorites == [rome]
    assert store.is_favorite(rome)
    assert not store.is_favorite(paris)
