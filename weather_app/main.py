"""FastAPI surface over the client session, with middleware and metrics."""

import time
import uuid
from functools import lru_cache

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from structlog.contextvars import bind_contextvars, clear_contextvars

from weather_app.health.health_check import is_store_available, is_weather_api_available
from weather_app.location_service.search import LocationSearchError
from weather_app.logging_config import logger
from weather_app.models.display import FavoriteToggle, RecentsResponse, WeatherDisplay
from weather_app.models.favorite_city import FavoriteCity
from weather_app.models.health import Dependencies, HealthResponse, ServiceStatus
from weather_app.models.location import LocationSuggestion
from weather_app.session import AppSession
from weather_app.storage.kv_store import key_value_store

app = FastAPI()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "path", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request duration in seconds", ["path"]
)


@lru_cache
def get_session() -> AppSession:
    """Return the process-wide client session backed by Redis."""
    return AppSession(key_value_store())


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Log request details, attach a request ID, and record metrics.

    Args:
        request: Incoming HTTP request.
        call_next: FastAPI handler for the next middleware/app.

    Returns:
        The response produced by the downstream handler.
    """
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    bind_contextvars(request_id=request_id)
    start = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response
    finally:
        duration_s = time.perf_counter() - start
        status_code = getattr(response, "status_code", 500)
        logger.info(
            "HTTP_REQUEST",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round(duration_s * 1000, 2),
        )
        REQUEST_COUNT.labels(
            method=request.method, path=request.url.path, status_code=status_code
        ).inc()
        REQUEST_LATENCY.labels(path=request.url.path).observe(duration_s)
        clear_contextvars()


@app.exception_handler(LocationSearchError)
async def location_search_error_handler(request: Request, exc: LocationSearchError):
    """Convert geocoding failures into 502 responses."""
    return JSONResponse(status_code=502, content={"detail": exc.description})


def storage_failure() -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": "Unable to save changes"})


def build_display(session: AppSession) -> WeatherDisplay:
    weather = session.weather
    return WeatherDisplay(
        location=weather.snapshot.location,
        local_time=weather.local_time,
        temperature=weather.current_temperature,
        feels_like=weather.feels_like_temperature,
        condition=weather.current_condition,
        icon_url=weather.current_condition_icon_url,
        is_daytime=weather.is_daytime,
        humidity=weather.humidity,
        wind_speed=weather.wind_speed,
        wind_direction=weather.wind_direction,
        chance_of_rain=weather.chance_of_rain,
        uv_index=weather.uv_index,
        is_favorite=session.favorites.is_current_city_favorited,
        forecast=weather.forecast_days,
    )


@app.get("/weather", response_model=WeatherDisplay)
async def get_weather(q: str = "", session: AppSession = Depends(get_session)):
    """Fetch weather for a query and return its display fields.

    Args:
        q: Free text or ``"lat,lon"``; empty uses the default location.

    Returns:
        The formatted weather, a 502 carrying the error message, or a 409
        when a newer request replaced this one before it completed.
    """
    snapshot = await session.weather.fetch_weather(q)
    if snapshot is None:
        state = session.weather.loading_state.value
        if state.is_error:
            return JSONResponse(status_code=502, content={"detail": state.message})
        return JSONResponse(
            status_code=409, content={"detail": "Superseded by a newer weather request"}
        )
    return build_display(session)


@app.get("/weather/current", response_model=WeatherDisplay)
async def get_current_weather(session: AppSession = Depends(get_session)):
    """Return the last loaded weather without fetching."""
    if session.weather.snapshot is None:
        return JSONResponse(status_code=404, content={"detail": "No weather loaded"})
    return build_display(session)


@app.get("/locations")
async def search_locations(
    q: str, session: AppSession = Depends(get_session)
) -> list[LocationSuggestion]:
    """Look up location suggestions for a query."""
    return await session.search_service.search(q)


@app.get("/favorites")
async def list_favorites(session: AppSession = Depends(get_session)) -> list[FavoriteCity]:
    return session.favorites.favorite_cities


@app.post("/favorites", status_code=201)
async def add_favorite(city: FavoriteCity, session: AppSession = Depends(get_session)):
    """Bookmark a city; 409 if an equal favorite exists."""
    if session.favorites_store.is_favorite(city):
        return JSONResponse(status_code=409, content={"detail": "Already a favorite"})
    if not session.favorites.add_favorite_city(city):
        return storage_failure()
    return city


@app.delete("/favorites", status_code=204)
async def clear_favorites(session: AppSession = Depends(get_session)):
    if not session.favorites.clear_favorites():
        return storage_failure()
    return Response(status_code=204)


@app.delete("/favorites/{favorite_id}", status_code=204)
async def remove_favorite(favorite_id: str, session: AppSession = Depends(get_session)):
    city = next(
        (city for city in session.favorites.favorite_cities if city.id == favorite_id),
        None,
    )
    if city is None:
        return JSONResponse(status_code=404, content={"detail": "Favorite not found"})
    if not session.favorites.remove_favorite_city(city):
        return storage_failure()
    return Response(status_code=204)


@app.post("/favorites/current", response_model=FavoriteToggle)
async def toggle_current_favorite(session: AppSession = Depends(get_session)):
    """Toggle the favorite status of the displayed location."""
    city = session.favorites.current_city()
    if city is None:
        return JSONResponse(status_code=404, content={"detail": "No weather loaded"})
    session.favorites.error_message = None
    is_favorite = session.favorites.toggle_current_city_favorite()
    if session.favorites.error_message:
        return storage_failure()
    return FavoriteToggle(city=city, is_favorite=is_favorite)


@app.get("/recents", response_model=RecentsResponse)
async def get_recents(session: AppSession = Depends(get_session)):
    return RecentsResponse(
        searches=session.search.recent_searches,
        locations=session.weather.recent_locations,
    )


@app.post("/recents/searches", status_code=201)
async def record_recent_search(
    suggestion: LocationSuggestion, session: AppSession = Depends(get_session)
):
    """Remember a suggestion the user picked."""
    if not session.search.record_search(suggestion):
        return storage_failure()
    return suggestion


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report API health and dependency availability.

    Returns:
        A HealthResponse containing dependency status.
    """
    weather_api_available = await is_weather_api_available()
    return HealthResponse(
        status="ok",
        dependencies=Dependencies(
            weather_api=ServiceStatus.available
            if weather_api_available
            else ServiceStatus.not_available,
            store=is_store_available(),
        ),
    )


@app.get("/metrics")
async def metrics():
    """Expose Prometheus metrics for scraping."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
