"""Resolution context binding for structured logging.

Binds broadcast-scoped context so every log entry made while a field is
fanned out to recipients carries the same correlation id.

Usage:
    from langpack.logging import bind_resolution_context

    with bind_resolution_context(field="greeting.welcome"):
        logger.info("broadcast_started")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_resolution_context(
    correlation_id: Optional[str] = None,
    field: Optional[str] = None,
    language: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind resolution-scoped context to all logs within the block.

    Args:
        correlation_id: Identifier for the operation. Auto-generated if not provided.
        field: Field being resolved.
        language: Language code, when the operation targets a single language.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {}
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if field is not None:
        context["field"] = field

    if language is not None:
        context["language"] = language

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_resolution_context() -> None:
    """Clear all bound context from the logging context."""
    structlog.contextvars.clear_contextvars()
