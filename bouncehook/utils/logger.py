"""Logging setup for the callback service.

Everything the service logs goes through the ``bouncehook`` logger. Library
loggers that are chatty at DEBUG (SQL echo, connection pool churn) are held at
WARNING so the callback trail stays readable.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

from bouncehook.core.config import Settings, settings

LOGGER_NAME = "bouncehook"
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "urllib3", "multipart")


def resolve_level(config: Settings) -> str:
    if config.log_level:
        return config.log_level
    return "DEBUG" if config.environment == "development" else "INFO"


def build_logging_config(config: Settings) -> dict[str, Any]:
    level = resolve_level(config)
    loggers: dict[str, Any] = {
        LOGGER_NAME: {"level": level},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"level": "WARNING"}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "callback": {
                "format": "%(asctime)s %(levelname)-8s [" + config.app_name + "] %(module)s: %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            },
        },
        "handlers": {
            "callback": {
                "class": "logging.StreamHandler",
                "formatter": "callback",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": loggers,
        "root": {"handlers": ["callback"], "level": "WARNING"},
    }


LOGGING_CONFIG = build_logging_config(settings)


def configure_logging() -> None:
    """Apply the logging configuration once at application startup."""

    dictConfig(LOGGING_CONFIG)


logger = logging.getLogger(LOGGER_NAME)
