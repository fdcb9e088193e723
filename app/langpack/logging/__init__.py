"""Structured logging for langpack using structlog.

Public API:
    - configure_logging(): Initialize logging
    - get_module_logger(): Get a logger for the calling module
    - bind_resolution_context(): Context manager for broadcast-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - clear_resolution_context(): Clear all bound context
"""

from langpack.logging.setup import (
    configure_logging,
    get_module_logger,
)

from langpack.logging.context import (
    bind_resolution_context,
    get_correlation_id,
    clear_resolution_context,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_resolution_context",
    "get_correlation_id",
    "clear_resolution_context",
]
