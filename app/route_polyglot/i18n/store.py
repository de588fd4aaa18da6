"""Store of ready-to-use phrase lookups, keyed by locale and namespace."""

from types import MappingProxyType
from typing import Any, Dict, Mapping

from route_polyglot.i18n.errors import UnknownNamespace
from route_polyglot.i18n.models import LookupKey
from route_polyglot.logging import get_module_logger

logger = get_module_logger()


class LookupStore:
    """Additive mapping of ``LookupKey`` to lookup entries.

    Entries are never mutated. ``merge`` swaps the whole mapping for a new
    one, so a snapshot taken earlier keeps seeing the entries it had.
    """

    def __init__(self, entries: Mapping[LookupKey, Any] | None = None) -> None:
        self._entries: Mapping[LookupKey, Any] = MappingProxyType(dict(entries or {}))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, locale: str, namespace: str) -> Any:
        """Return the lookup for exactly (locale, namespace).

        Raises:
            UnknownNamespace: If that combination was never loaded. There is
                no fallback to another locale.
        """
        try:
            return self._entries[LookupKey(locale, namespace)]
        except KeyError:
            logger.error("unknown_namespace", locale=locale, namespace=namespace)
            raise UnknownNamespace(locale, namespace) from None

    def merge(self, entries: Mapping[LookupKey, Any]) -> None:
        """Add ``entries``; an existing key is replaced by the new value."""
        if not entries:
            return
        merged: Dict[LookupKey, Any] = dict(self._entries)
        merged.update(entries)
        self._entries = MappingProxyType(merged)
        logger.debug("merged_lookups", keys=[str(key) for key in entries])

    def snapshot(self) -> Mapping[LookupKey, Any]:
        """Read-only view of the current entries."""
        return self._entries
