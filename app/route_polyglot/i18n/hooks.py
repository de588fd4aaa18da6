"""Route hook instrumentation.

Wraps the ``loader`` and ``action`` hooks of every route so each navigation
loads the phrase sets its routes need alongside the route's own data, and
commits a requested locale once per navigation tick after all of the tick's
phrase loads have settled.
"""

import asyncio
import dataclasses
import functools
import weakref
from typing import Any, Callable, Dict, Iterable, List, Optional

from route_polyglot.i18n.batcher import NavigationBatch, NavigationBatcher
from route_polyglot.i18n.errors import Cancelled
from route_polyglot.i18n.models import PreloadDirective, Route, RouteArgs, RouteHook
from route_polyglot.i18n.session import PolyglotSession
from route_polyglot.logging import bind_navigation_context, get_module_logger

logger = get_module_logger()

PreloadTranslations = Callable[[RouteArgs], Optional[PreloadDirective]]

HOOK_NAMES = ("loader", "action")


class HookInstrumentation:
    """Instruments a route tree against one session.

    Attributes:
        session: Session whose ``load`` and ``set_locale`` the hooks drive.
        batcher: Source of the per-tick navigation batch.
        preload_translations: Optional callback deciding, per navigation,
            which locale and namespaces to load. Receives the hook arguments
            without the cancellation token.
    """

    def __init__(
        self,
        session: PolyglotSession,
        batcher: Optional[NavigationBatcher] = None,
        preload_translations: Optional[PreloadTranslations] = None,
    ) -> None:
        self.session = session
        self.batcher = batcher if batcher is not None else NavigationBatcher()
        self.preload_translations = preload_translations
        # route -> hook name -> original, unwrapped hook
        self._originals: "weakref.WeakKeyDictionary[Route, Dict[str, RouteHook]]" = (
            weakref.WeakKeyDictionary()
        )

    def instrument(self, routes: Iterable[Route]) -> None:
        """Wrap the hooks of every route in the tree, recursively.

        Instrumenting the same routes again re-wraps the original hooks, never
        the wrappers.
        """
        for route in routes:
            originals = self._originals.setdefault(route, {})
            for name in HOOK_NAMES:
                original = originals.get(name) or getattr(route, name)
                if original is None:
                    continue
                originals[name] = original
                setattr(route, name, self._wrap(route, name, original))
            self.instrument(route.children)

    def original(self, route: Route, name: str) -> Optional[RouteHook]:
        """Return the unwrapped hook of ``route``, if it was instrumented."""
        return self._originals.get(route, {}).get(name)

    def _wrap(self, route: Route, name: str, original: RouteHook) -> RouteHook:
        @functools.wraps(original)
        async def wrapped(args: RouteArgs) -> Any:
            batch = self.batcher.current()
            locale, namespaces = self._resolve(route, args)

            with bind_navigation_context(
                navigation_id=f"tick-{self.batcher.ticks}", route_id=route.id, hook=name
            ):
                load = (
                    asyncio.ensure_future(
                        self.session.load(namespaces, args.token, locale)
                    )
                    if namespaces
                    else None
                )
                all_loaded = batch.register(load)

                result, _ = await asyncio.gather(original(args), _reconcile(load))
                await self._finish(batch, all_loaded, locale)
            return result

        return wrapped

    def _resolve(self, route: Route, args: RouteArgs) -> tuple[Optional[str], List[str]]:
        directive = None
        if self.preload_translations is not None:
            directive = self.preload_translations(dataclasses.replace(args, token=None))
        directive = directive or PreloadDirective()

        namespaces = directive.namespaces
        if namespaces is None:
            namespaces = self.session.route_namespaces.get(route.id, [])
        elif isinstance(namespaces, str):
            namespaces = [namespaces]
        return directive.locale, list(namespaces)

    async def _finish(
        self,
        batch: NavigationBatch,
        all_loaded: "asyncio.Future[None]",
        locale: Optional[str],
    ) -> None:
        if locale and batch.try_commit():
            await all_loaded
            await batch.settled()
            self.session.set_locale(locale)
        else:
            await all_loaded


async def _reconcile(load: Optional["asyncio.Future[None]"]) -> None:
    """Wait for a phrase load without letting it fail the route's own hook."""
    if load is None:
        return
    try:
        await load
    except Cancelled:
        pass
    except Exception as e:
        logger.error("phrase_load_failed_for_route", error=str(e), exc_info=True)
