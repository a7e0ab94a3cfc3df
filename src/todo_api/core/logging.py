"""JSON logging for the todo service, configured through ``dictConfig``."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import current_context

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}
_CONTEXT_ATTRS = ("request_id", "user_id")


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record, with static fields merged in first."""

    def __init__(self, *, static_fields: dict[str, Any] | None = None, datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        entry: dict[str, Any] = {
            **self.static_fields,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _CONTEXT_ATTRS:
            entry[name] = getattr(record, name, None)
        if entry["request_id"] is None:
            entry["request_id"] = "-"

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and key not in _CONTEXT_ATTRS
        }
        for key, value in extras.items():
            entry.setdefault(key, value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """Fill ``request_id``/``user_id`` from the active request unless the caller passed them."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = current_context()
        if getattr(record, "request_id", None) is None:
            record.request_id = context.request_id
        if getattr(record, "user_id", None) is None:
            record.user_id = context.user_id
        return True


def build_logging_config(settings: Settings) -> dict[str, Any]:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    def _isolated(logger_level: int) -> dict[str, Any]:
        return {"handlers": ["console"], "level": logger_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonLogFormatter,
                "static_fields": {
                    "service": settings.project_name,
                    "environment": settings.environment,
                    "version": settings.version,
                },
            }
        },
        "filters": {"request_context": {"()": RequestContextFilter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "json",
                "filters": ["request_context"],
            }
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            "uvicorn": _isolated(level),
            "uvicorn.error": _isolated(level),
            # The access middleware already logs every request.
            "uvicorn.access": _isolated(logging.WARNING),
            "sqlalchemy.engine": _isolated(logging.INFO if settings.db_echo else logging.WARNING),
        },
    }


def configure_logging(settings: Settings) -> None:
    """Install the JSON console handler on the root logger."""

    logging.captureWarnings(True)
    logging.config.dictConfig(build_logging_config(settings))


__all__ = ["JsonLogFormatter", "RequestContextFilter", "build_logging_config", "configure_logging"]
