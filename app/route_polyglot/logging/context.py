"""Navigation context binding for structured logging.

Binds navigation-scoped metadata so every log entry emitted while a route
hook runs carries the navigation and route it belongs to.

Usage:
    from route_polyglot.logging import bind_navigation_context

    with bind_navigation_context(route_id="routes/$lang", hook="loader"):
        logger.info("loading_phrases")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_navigation_context(
    navigation_id: Optional[str] = None,
    route_id: Optional[str] = None,
    hook: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind navigation-scoped context to all logs within the block.

    Args:
        navigation_id: Identifier of the navigation tick. Auto-generated if
            not provided.
        route_id: Id of the route whose hook is running.
        hook: Hook name ("loader" or "action").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {"navigation_id": navigation_id or str(uuid.uuid4())}

    if route_id is not None:
        context["route_id"] = route_id

    if hook is not None:
        context["hook"] = hook

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_navigation_id() -> Optional[str]:
    """Get the current navigation ID from the logging context.

    Returns:
        The navigation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("navigation_id")


def clear_navigation_context() -> None:
    """Clear all navigation-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
