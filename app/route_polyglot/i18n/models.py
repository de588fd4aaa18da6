"""Data models for the phrase loading system.

Defines the identifiers, handoff snapshot and route tree structures shared by
the loader, the lookup store and the hook instrumentation.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from route_polyglot.i18n.cancellation import CancellationToken

# namespace -> resource file id, for one locale
Index = Dict[str, str]
# phrase key -> phrase value, for one (locale, namespace)
PhraseSet = Dict[str, Any]


@dataclass(frozen=True)
class LookupKey:
    """Identifies one (locale, namespace) combination.

    Frozen to ensure immutability and hashability for caching.

    Attributes:
        locale: Locale identifier (e.g., "en", "es").
        namespace: Phrase namespace (e.g., "common").
    """

    locale: str
    namespace: str

    def __str__(self) -> str:
        """Return the combined id (e.g., "en-common")."""
        return f"{self.locale}-{self.namespace}"


class HandoffData(BaseModel):
    """Snapshot the server embeds in the initial page for the client.

    Accepts the camelCase keys of the embedded JSON as well as the Python
    field names. Read-only after initialization.

    Attributes:
        locale: Active locale at startup.
        base_url: Base URL the locale directories are served under.
        route_namespaces: Route id -> namespaces the route requires.
        preload: Phrase set URLs the server expects the first navigation to need.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    locale: str
    base_url: str = Field(alias="baseUrl")
    route_namespaces: Dict[str, List[str]] = Field(
        default_factory=dict, alias="routeNamespaces"
    )
    preload: List[str] = Field(default_factory=list)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("route_namespaces", mode="before")
    @classmethod
    def normalize_route_namespaces(cls, v: Any) -> Any:
        """Allow a single namespace string per route."""
        if isinstance(v, Mapping):
            return {
                route_id: [namespaces] if isinstance(namespaces, str) else namespaces
                for route_id, namespaces in v.items()
            }
        return v

    @classmethod
    def from_json(cls, payload: str | bytes) -> "HandoffData":
        """Parse the JSON payload embedded by the server."""
        return cls.model_validate_json(payload)

    def namespaces(self) -> List[str]:
        """All namespaces required by any route, in first-seen order."""
        return unique_namespaces(self.route_namespaces.values())


@dataclass(frozen=True)
class RouteArgs:
    """Arguments a route data-fetch hook is invoked with.

    Attributes:
        params: Route parameters (e.g., {"lang": "es"}).
        request: The request object of the navigation, if any.
        context: Application load context, if any.
        token: Cancellation token scoped to this navigation.
    """

    params: Mapping[str, str] = field(default_factory=dict)
    request: Any = None
    context: Any = None
    token: Optional[CancellationToken] = None


RouteHook = Callable[[RouteArgs], Awaitable[Any]]


@dataclass(eq=False)
class Route:
    """One node of the client route tree.

    Attributes:
        id: Route id (e.g., "routes/$lang").
        loader: Data-fetch hook run on navigation.
        action: Data-fetch hook run on submissions.
        handle: Route handle; ``handle["i18n"]`` declares its namespaces.
        children: Nested routes.
    """

    id: str
    loader: Optional[RouteHook] = None
    action: Optional[RouteHook] = None
    handle: Optional[Mapping[str, Any]] = None
    children: List["Route"] = field(default_factory=list)


@dataclass(frozen=True)
class PreloadDirective:
    """What a navigation wants loaded, as decided by the application.

    Attributes:
        locale: Locale to load and commit; None keeps the active locale.
        namespaces: Namespaces to load; None uses the route's own namespaces.
    """

    locale: Optional[str] = None
    namespaces: Optional[str | List[str]] = None


def get_handle_namespaces(handle: Optional[Mapping[str, Any]]) -> List[str]:
    """Read the namespaces a route handle declares under ``i18n``.

    Args:
        handle: Route handle, e.g. ``{"i18n": "common"}`` or
            ``{"i18n": ["common", "nav"]}``.

    Returns:
        Declared namespaces; empty when the handle declares none.
    """
    if not handle:
        return []
    declared = handle.get("i18n")
    if isinstance(declared, str):
        return [declared]
    if isinstance(declared, (list, tuple)):
        return [ns for ns in declared if isinstance(ns, str)]
    return []


def route_namespaces(routes: Iterable[Route]) -> Dict[str, List[str]]:
    """Build the route id -> namespaces mapping for a route tree."""
    result: Dict[str, List[str]] = {}

    def visit(route: Route) -> None:
        namespaces = get_handle_namespaces(route.handle)
        if namespaces:
            result[route.id] = namespaces
        for child in route.children:
            visit(child)

    for route in routes:
        visit(route)
    return result


def unique_namespaces(groups: Iterable[Iterable[str]]) -> List[str]:
    seen: Dict[str, None] = {}
    for group in groups:
        for namespace in group:
            seen.setdefault(namespace, None)
    return list(seen)
