"""Session-scoped phrase loading state.

A ``PolyglotSession`` lives as long as the client application. It owns the
index and phrase set caches, the lookup store and the active locale, and is
the single place that turns loaded phrase sets into stored lookups.
"""

import asyncio
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import httpx

from route_polyglot.configuration import Settings
from route_polyglot.i18n.cancellation import CancellationToken
from route_polyglot.i18n.fetcher import ResourceFetcher
from route_polyglot.i18n.loader import PhraseLoader
from route_polyglot.i18n.lookup import LookupBuilder, LookupOptionsGetter, build_lookup
from route_polyglot.i18n.models import HandoffData, LookupKey
from route_polyglot.i18n.store import LookupStore
from route_polyglot.logging import get_module_logger
from route_polyglot.services.providers import create_http_client, get_settings

logger = get_module_logger()

LocaleListener = Callable[[str], None]


class PolyglotSession:
    """Phrase loading state for one client application session.

    Attributes:
        handoff: Startup snapshot from the server.
        loader: PhraseLoader with the session's caches.
        store: LookupStore of built lookups.
        initial_preload: Phrase set URLs the server announced as preloaded.

    Usage:
        async with await PolyglotSession.setup(handoff, manifest) as session:
            await session.load(["checkout"], token, locale="es")
            lookup = session.polyglot("checkout")
    """

    def __init__(
        self,
        handoff: HandoffData,
        loader: PhraseLoader,
        store: Optional[LookupStore] = None,
        builder: LookupBuilder = build_lookup,
        options_getter: Optional[LookupOptionsGetter] = None,
        initial_preload: Optional[Iterable[str]] = None,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.handoff = handoff
        self.loader = loader
        self.store = store if store is not None else LookupStore()
        self.builder = builder
        self.options_getter = options_getter
        self.initial_preload: List[str] = list(
            initial_preload if initial_preload is not None else handoff.preload
        )
        self.settings = settings or get_settings()
        self._locale = handoff.locale
        self._listeners: List[LocaleListener] = []
        self._client = client
        self.log = logger.bind(base_url=handoff.base_url)

    @classmethod
    async def setup(
        cls,
        handoff: HandoffData,
        manifest: Mapping[str, str],
        client: Optional[httpx.AsyncClient] = None,
        builder: LookupBuilder = build_lookup,
        options_getter: Optional[LookupOptionsGetter] = None,
        initial_preload: Optional[Iterable[str]] = None,
        settings: Optional[Settings] = None,
    ) -> "PolyglotSession":
        """Create a session and load every route namespace for the startup locale.

        Args:
            handoff: Startup snapshot from the server.
            manifest: Locale -> index file id.
            client: HTTP client to use. When omitted the session creates one
                and closes it in ``aclose``.
            builder: Lookup builder for loaded phrase sets.
            options_getter: Returns builder options per (locale, namespace).
            initial_preload: Preload hint URLs found in the initial render
                output; defaults to the handoff's list.
            settings: Settings override.

        Returns:
            Ready session whose store holds every route namespace.

        Raises:
            LoadError: If any startup namespace fails to load.
        """
        settings = settings or get_settings()
        owned_client = None
        if client is None:
            client = owned_client = create_http_client(settings)

        loader = PhraseLoader(ResourceFetcher(client, handoff.base_url), manifest)
        session = cls(
            handoff,
            loader,
            builder=builder,
            options_getter=options_getter,
            initial_preload=initial_preload,
            settings=settings,
            client=owned_client,
        )

        namespaces = handoff.namespaces()
        try:
            session.store.merge(await session._build_entries(namespaces, handoff.locale))
        except BaseException:
            await session.aclose()
            raise

        session.log.info(
            "session_ready",
            locale=handoff.locale,
            namespaces=namespaces,
            preload_count=len(session.initial_preload),
        )
        return session

    @property
    def locale(self) -> str:
        """The active locale."""
        return self._locale

    @property
    def route_namespaces(self) -> Dict[str, List[str]]:
        return self.handoff.route_namespaces

    def set_locale(self, locale: str) -> None:
        """Commit ``locale`` as the active locale and notify listeners."""
        if locale == self._locale:
            return
        previous, self._locale = self._locale, locale
        self.log.info("locale_committed", locale=locale, previous_locale=previous)
        for listener in list(self._listeners):
            listener(locale)

    def subscribe(self, listener: LocaleListener) -> Callable[[], None]:
        """Call ``listener(locale)`` on every committed locale change.

        Returns:
            Function removing the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    async def load(
        self,
        namespaces: str | Iterable[str],
        token: Optional[CancellationToken] = None,
        locale: Optional[str] = None,
    ) -> None:
        """Load namespaces and merge their lookups into the store.

        Args:
            namespaces: One namespace or several.
            token: Caller's cancellation token.
            locale: Locale to load; defaults to the active locale. Loading a
                different locale does not commit it.

        Raises:
            LoadError: If any namespace fails; nothing is merged then.
            Cancelled: If ``token`` fires first.
        """
        if isinstance(namespaces, str):
            namespaces = [namespaces]
        target = locale or self._locale
        self.store.merge(await self._build_entries(list(namespaces), target, token))

    def polyglot(self, namespace: Optional[str] = None) -> Any:
        """Return the lookup of ``namespace`` in the active locale.

        Raises:
            UnknownNamespace: If the namespace was not loaded for the active locale.
        """
        namespace = namespace or self.settings.i18n.default_namespace
        return self.store.get(self._locale, namespace)

    async def aclose(self) -> None:
        """Close the HTTP client if the session created it."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PolyglotSession":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _build_entries(
        self,
        namespaces: List[str],
        locale: str,
        token: Optional[CancellationToken] = None,
    ) -> Dict[LookupKey, Any]:
        phrase_sets = await asyncio.gather(
            *(self.loader.load(locale, ns, token) for ns in namespaces)
        )
        entries: Dict[LookupKey, Any] = {}
        for namespace, phrases in zip(namespaces, phrase_sets):
            options = (
                self.options_getter(locale, namespace) if self.options_getter else None
            )
            entries[LookupKey(locale, namespace)] = self.builder(
                locale, namespace, phrases, options
            )
        return entries
