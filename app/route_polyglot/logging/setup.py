"""Structlog configuration and logger setup.

Log events are snake_case names with keyword fields. During development they
render as colored console lines; in production as one JSON object per line.
Everything goes through the standard library logger named ``route_polyglot``
so host applications can route or silence it like any other library.

Usage:
    from route_polyglot.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("loaded_index", locale="en")
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from route_polyglot.configuration import Settings

LOGGER_NAME = "route_polyglot"


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(prod_mode: bool) -> Processor:
    if prod_mode:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _apply(processors: List[Processor], level: int) -> BoundLogger:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.getLogger(LOGGER_NAME).setLevel(level)
    return structlog.stdlib.get_logger(LOGGER_NAME)


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        settings: Settings to read LOG_LEVEL and production mode from.
            Defaults to the cached application settings.
        log_level: Optional override for log level (DEBUG, INFO, WARNING, etc).
        is_production: Optional override for production mode. Controls JSON
            vs console output.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        # bound loggers keep working; nothing is emitted above CRITICAL
        logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
        return _apply(
            [
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logging.CRITICAL + 1,
        )

    if settings is None:
        from route_polyglot.services.providers import get_settings

        settings = get_settings()

    prod_mode = is_production if is_production is not None else settings.is_production
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", level=level)
    return _apply([*_shared_processors(), _renderer(prod_mode)], level)


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_module_logger(**context: Any) -> BoundLogger:
    """Get a logger for the calling module.

    Args:
        **context: Extra fields bound to every event of the logger.

    Returns:
        Logger bound with ``component`` (last module name segment),
        ``module_path`` and ``context``.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown", **context)

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
        **context,
    )
