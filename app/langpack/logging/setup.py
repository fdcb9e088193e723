"""structlog setup for langpack.

Every record carries the resolution context bound by
``bind_resolution_context`` (``correlation_id``, ``field``, ``language``)
ahead of the other keys, so lines from one broadcast read the same in
console and JSON output.

Usage:
    from langpack.logging import get_module_logger

    logger = get_module_logger()
    logger.info("field_not_found", field="greeting.hello")
"""

import inspect
import logging
import sys
from typing import Any, MutableMapping, Optional

import structlog
from structlog.stdlib import BoundLogger

from langpack.configuration import settings

RESOLUTION_KEYS = ("correlation_id", "field", "language")


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def resolution_keys_first(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Move the event name and resolution keys to the front of the record."""
    ordered = {}
    for key in ("event",) + RESOLUTION_KEYS:
        if key in event_dict:
            ordered[key] = event_dict.pop(key)
    ordered.update(event_dict)
    return ordered


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog for the engine.

    Args:
        log_level: Level name, defaults to ``settings.LOG_LEVEL``.
        is_production: JSON output when true, console output otherwise.
            Defaults to ``settings.is_production``.

    Returns:
        The root bound logger.
    """
    if _is_test_environment():
        # Records still pass through structlog, the stdlib root drops them.
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
        return structlog.stdlib.get_logger()

    production = settings.is_production if is_production is None else is_production
    renderer = (
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer(sort_keys=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            resolution_keys_first,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    ``langpack.i18n.processor`` gets ``component="processor"`` and
    ``module_path="langpack.i18n.processor"``.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")
    return logger.bind(component=module.__name__.rsplit(".", 1)[-1], module_path=module.__name__)
