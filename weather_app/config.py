"""Runtime configuration read from the environment."""

import os

WEATHER_API_BASE_URL = os.getenv("WEATHER_API_BASE_URL", "https://api.weatherapi.com/v1")
WEATHER_API_KEY = os.getenv("WEATHER_API_KEY", "")
FORECAST_ENDPOINT = "/forecast.json"
SEARCH_ENDPOINT = "/search.json"

DEFAULT_LOCATION = os.getenv("DEFAULT_LOCATION", "Rome")
FORECAST_DAYS = int(os.getenv("FORECAST_DAYS", "3"))
HTTP_TIMEOUT_S = float(os.getenv("HTTP_TIMEOUT_S", "10"))

SEARCH_DEBOUNCE_S = int(os.getenv("SEARCH_DEBOUNCE_MS", "300")) / 1000
MIN_SEARCH_LENGTH = int(os.getenv("MIN_SEARCH_LENGTH", "2"))
RECENTS_LIMIT = int(os.getenv("RECENTS_LIMIT", "5"))

REDIS_HOST = os.getenv("REDIS_HOST", "redis")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

FAVORITE_CITIES_KEY = "favoriteCities"
RECENT_SEARCHES_KEY = "recentSearches"
RECENT_LOCATIONS_KEY = "recentLocations"

NOT_AVAILABLE = "N/A"
