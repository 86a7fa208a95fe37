"""Logging and metrics."""

from gardien.infrastructure.monitoring.logger import (
    get_logger,
    get_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "get_request_id",
]
