"""
Structured logging for Gardien.

Every line is one JSON object carrying the service name, the request id of
the HTTP request being served (when there is one) and any extra= fields.
"""

import json
import logging
import sys
import time
from contextvars import ContextVar
from typing import Any, Optional
from uuid import uuid4

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Attributes every LogRecord carries; anything else came in via extra=
_RECORD_ATTRS = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_NOISY_LOGGERS = ("asyncio", "aiosqlite", "httpx", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def __init__(self, service: str = "gardien", **kwargs):
        super().__init__(**kwargs)
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_ctx.get()
        if request_id:
            entry["request_id"] = request_id

        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry["location"] = f"{record.module}:{record.funcName}:{record.lineno}"
        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    service: str = "gardien",
) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: LOG_LEVEL setting (already validated)
        json_logs: JSON lines in production, a readable layout otherwise
        service: Value of the "service" field in JSON lines
    """
    numeric_level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(
            JSONFormatter(service=service, datefmt="%Y-%m-%dT%H:%M:%S")
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind a request id to the current context, generating one if needed."""
    request_id = request_id or str(uuid4())
    request_id_ctx.set(request_id)
    return request_id


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()


def log_timing(
    logger: logging.Logger,
    operation: str,
    started: float,
    **fields: Any,
) -> float:
    """
    Log how long an operation took.

    Args:
        logger: Logger to write to
        operation: Operation name, also emitted as the "operation" field
        started: time.perf_counter() value taken when the operation began
        fields: Extra fields for the log line

    Returns:
        Elapsed milliseconds
    """
    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        f"{operation} took {elapsed_ms}ms",
        extra={"operation": operation, "duration_ms": elapsed_ms, **fields},
    )
    return elapsed_ms
