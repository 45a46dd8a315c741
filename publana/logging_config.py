"""
Logging configuration for the Publana API.

Access log lines for health checks are dropped, and token values in admin
revocation paths are masked before they reach any handler.
"""

import logging
import logging.config
import re
from typing import Any, Dict

from publana.modules.tokens import mask_token

# DELETE /admin/tokens/{token} carries the full token in the path
TOKEN_PATH = re.compile(r"(/admin/tokens/)([^/?\s\"]+)")


def mask_token_paths(text: str) -> str:
    """Mask any token embedded in an admin token path."""
    return TOKEN_PATH.sub(lambda m: m.group(1) + mask_token(m.group(2)), text)


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out health check requests from uvicorn access logs."""
        if record.name == "uvicorn.access":
            message = record.getMessage()
            if "/health" in message and "GET" in message:
                return False
        return True


class TokenPathFilter(logging.Filter):
    """Mask bearer tokens in uvicorn access log paths."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, tuple) and record.args:
            record.args = tuple(
                mask_token_paths(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        elif isinstance(record.msg, str):
            record.msg = mask_token_paths(record.msg)
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build the dictConfig for uvicorn and the publana logger tree.

    Args:
        level: Level applied to every configured logger (LOG_LEVEL)
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {"()": HealthCheckFilter},
            "token_path_filter": {"()": TokenPathFilter},
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter", "token_path_filter"],
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
            "publana": {"handlers": ["default"], "level": level, "propagate": False},
            # httpx request lines stay at warning unless debugging
            "httpx": {"handlers": ["default"], "level": "DEBUG" if level == "DEBUG" else "WARNING",
                      "propagate": False},
        },
        "root": {"level": level, "handlers": ["default"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the dict config to the running process."""
    logging.config.dictConfig(get_logging_config(level))
