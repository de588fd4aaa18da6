"""Structured logging.

This package provides centralized logging configuration and utilities
for route-polyglot using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_navigation_context(): Context manager for navigation-scoped logging
    - get_navigation_id(): Get current navigation ID from context
    - clear_navigation_context(): Clear all navigation context

Example:
    from route_polyglot.logging import configure_logging, get_module_logger

    # At application startup
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("module_initialized")
"""

from route_polyglot.logging.setup import configure_logging, get_module_logger
from route_polyglot.logging.context import (
    bind_navigation_context,
    get_navigation_id,
    clear_navigation_context,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_navigation_context",
    "get_navigation_id",
    "clear_navigation_context",
]
