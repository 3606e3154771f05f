"""structlog configuration shared by the whole package."""

import logging

import structlog

from weather_app.config import LOG_LEVEL

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(LOG_LEVEL.upper())
    ),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()
