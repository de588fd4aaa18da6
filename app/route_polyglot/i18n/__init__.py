"""i18n system - lazy, navigation-aware phrase loading.

Loads per-locale indexes and per-namespace phrase sets over HTTP, caches them
for the session, and coordinates locale changes across the route hooks of a
navigation.

Main components:
- cache: ResourceCache, the deduplicating load-once cache
- loader: PhraseLoader resolving index then phrase set
- store: LookupStore of built phrase lookups
- batcher: NavigationBatch and NavigationBatcher for per-tick commits
- session: PolyglotSession owning the session-scoped state
- hooks: HookInstrumentation wrapping route loader/action hooks
"""

from route_polyglot.i18n.batcher import NavigationBatch, NavigationBatcher
from route_polyglot.i18n.cache import ResourceCache
from route_polyglot.i18n.cancellation import CancellationToken
from route_polyglot.i18n.errors import (
    Cancelled,
    IndexLoadFailed,
    LoadError,
    MissingLocaleConfig,
    MissingNamespace,
    PhraseLoadFailed,
    PolyglotError,
    UnknownNamespace,
)
from route_polyglot.i18n.fetcher import ResourceFetcher, ResourceFetchError
from route_polyglot.i18n.hooks import HookInstrumentation
from route_polyglot.i18n.loader import PhraseLoader
from route_polyglot.i18n.lookup import PhraseLookup, build_lookup
from route_polyglot.i18n.models import (
    HandoffData,
    LookupKey,
    PreloadDirective,
    Route,
    RouteArgs,
    get_handle_namespaces,
    route_namespaces,
)
from route_polyglot.i18n.preload import (
    collect_preload_hints,
    read_handoff,
    render_preload_links,
)
from route_polyglot.i18n.session import PolyglotSession
from route_polyglot.i18n.store import LookupStore

__all__ = [
    "Cancelled",
    "CancellationToken",
    "HandoffData",
    "HookInstrumentation",
    "IndexLoadFailed",
    "LoadError",
    "LookupKey",
    "LookupStore",
    "MissingLocaleConfig",
    "MissingNamespace",
    "NavigationBatch",
    "NavigationBatcher",
    "PhraseLoadFailed",
    "PhraseLoader",
    "PhraseLookup",
    "PolyglotError",
    "PolyglotSession",
    "PreloadDirective",
    "ResourceCache",
    "ResourceFetchError",
    "ResourceFetcher",
    "Route",
    "RouteArgs",
    "UnknownNamespace",
    "build_lookup",
    "collect_preload_hints",
    "get_handle_namespaces",
    "read_handoff",
    "render_preload_links",
    "route_namespaces",
]
