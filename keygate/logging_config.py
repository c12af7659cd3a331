"""
Logging configuration for Keygate.

Suppresses health check access lines and masks bearer tokens that would
otherwise end up in log output.
"""

import logging
import logging.config
import re
from typing import Any, Dict

BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9\-_]+(?:\.[A-Za-z0-9\-_]*){0,2}", re.IGNORECASE)


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out health check requests from uvicorn access logs."""
        if record.name == "uvicorn.access":
            message = record.getMessage()
            if "/health" in message and "GET" in message:
                return False
        return True


class TokenRedactionFilter(logging.Filter):
    """Replace bearer token values with a placeholder."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = BEARER_PATTERN.sub(r"\1[REDACTED]", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration for the API and uvicorn loggers."""
    def logger_config(handler: str) -> Dict[str, Any]:
        return {"handlers": [handler], "level": level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {"()": HealthCheckFilter},
            "token_redaction_filter": {"()": TokenRedactionFilter},
        },
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["token_redaction_filter"],
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter", "token_redaction_filter"],
            },
        },
        "loggers": {
            "uvicorn": logger_config("default"),
            "uvicorn.error": logger_config("default"),
            "uvicorn.access": logger_config("access"),
            "keygate": logger_config("default"),
        },
        "root": {"level": level, "handlers": ["default"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
