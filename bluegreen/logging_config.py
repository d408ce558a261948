"""
Logging setup for the CLI and the blue/green services.

uvicorn access lines for GET and HEAD requests to the /health route are
dropped; every other path is logged.
"""

import logging
import logging.config
from typing import Any, Dict, Tuple

HEALTH_PATH = "/health"
HEALTH_METHODS = ("GET", "HEAD")


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access records for requests to the health route."""

    def __init__(self, path: str = HEALTH_PATH, methods: Tuple[str, ...] = HEALTH_METHODS):
        super().__init__()
        self.path = path
        self.methods = tuple(m.upper() for m in methods)

    def _request(self, record: logging.LogRecord) -> Tuple[str, str]:
        # uvicorn logs (client_addr, method, full_path, http_version, status_code)
        if isinstance(record.args, tuple) and len(record.args) >= 3:
            return str(record.args[1]), str(record.args[2])
        parts = record.getMessage().split('"')
        if len(parts) < 2:
            return "", ""
        request_line = parts[1].split()
        if len(request_line) < 2:
            return "", ""
        return request_line[0], request_line[1]

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        method, full_path = self._request(record)
        path = full_path.split("?", 1)[0]
        return not (method.upper() in self.methods and path == self.path)


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with health check suppression."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {
                "()": HealthCheckFilter,
                "path": HEALTH_PATH,
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter"]
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": level,
                "propagate": False
            },
            "bluegreen": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def setup_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
