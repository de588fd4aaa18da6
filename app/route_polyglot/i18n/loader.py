"""Phrase set loader.

Resolves a (locale, namespace) pair to its phrase set: the locale's index is
fetched first to find the namespace's file, then the phrase set itself. Both
steps go through a ``ResourceCache`` so each file is requested at most once
per session, and a failed request is retried by the next caller.
"""

from functools import partial
from typing import Any, Mapping, Optional

from route_polyglot.i18n.cache import ResourceCache
from route_polyglot.i18n.cancellation import CancellationToken
from route_polyglot.i18n.errors import (
    IndexLoadFailed,
    MissingLocaleConfig,
    MissingNamespace,
    PhraseLoadFailed,
)
from route_polyglot.i18n.fetcher import ResourceFetcher, ResourceFetchError
from route_polyglot.i18n.models import Index, LookupKey, PhraseSet
from route_polyglot.logging import get_module_logger

logger = get_module_logger()


def is_record_of_strings(value: Any) -> bool:
    """True if ``value`` is a flat mapping of strings to strings."""
    return isinstance(value, dict) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    )


def is_record(value: Any) -> bool:
    """True if ``value`` is a JSON object (not an array or primitive)."""
    return isinstance(value, dict)


class PhraseLoader:
    """Loads phrase sets through the index of their locale.

    Attributes:
        fetcher: ResourceFetcher performing the HTTP requests.
        manifest: Locale -> index file id.
        indexes: Cache of loaded indexes, keyed by locale.
        phrases: Cache of loaded phrase sets, keyed by LookupKey.
    """

    def __init__(
        self,
        fetcher: ResourceFetcher,
        manifest: Mapping[str, str],
        indexes: Optional[ResourceCache[str, Index]] = None,
        phrases: Optional[ResourceCache[LookupKey, PhraseSet]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.manifest = dict(manifest)
        # an empty cache is falsy, so compare against None
        self.indexes: ResourceCache[str, Index] = (
            indexes if indexes is not None else ResourceCache("indexes")
        )
        self.phrases: ResourceCache[LookupKey, PhraseSet] = (
            phrases if phrases is not None else ResourceCache("phrases")
        )

    async def load(
        self,
        locale: str,
        namespace: str,
        token: Optional[CancellationToken] = None,
    ) -> PhraseSet:
        """Load the phrase set of ``namespace`` in ``locale``.

        Args:
            locale: Locale to load.
            namespace: Namespace to load.
            token: Caller's cancellation token.

        Returns:
            The phrase set; concurrent and later callers get the same object.

        Raises:
            MissingLocaleConfig: If the manifest has no index for ``locale``.
            IndexLoadFailed: If the index could not be fetched or is malformed.
            MissingNamespace: If the index has no entry for ``namespace``.
            PhraseLoadFailed: If the phrase set could not be fetched or is malformed.
            Cancelled: If ``token`` fires first.
        """
        key = LookupKey(locale, namespace)
        if key in self.phrases:
            return await self.phrases.join(key, token)

        if not self.manifest.get(locale):
            raise MissingLocaleConfig(locale, namespace)

        index = await self.indexes.get_or_create(
            locale, partial(self._fetch_index, locale), token
        )
        file_id = index.get(namespace)
        if not file_id:
            logger.warning(
                "namespace_missing_from_index", locale=locale, namespace=namespace
            )
            raise MissingNamespace(locale, namespace)

        return await self.phrases.get_or_create(
            key, partial(self._fetch_phrases, locale, namespace, file_id), token
        )

    async def _fetch_index(self, locale: str) -> Index:
        file_id = self.manifest[locale]
        try:
            index = await self.fetcher.get_json(locale, file_id)
        except ResourceFetchError as e:
            logger.error("index_load_failed", locale=locale, reason=str(e))
            raise IndexLoadFailed(locale, str(e)) from e

        if not is_record_of_strings(index):
            logger.error("index_load_failed", locale=locale, reason="Invalid format")
            raise IndexLoadFailed(locale, "Invalid format")

        logger.info("loaded_index", locale=locale, namespace_count=len(index))
        return index

    async def _fetch_phrases(self, locale: str, namespace: str, file_id: str) -> PhraseSet:
        try:
            resource = await self.fetcher.get_json(locale, file_id)
        except ResourceFetchError as e:
            logger.error(
                "phrase_load_failed", locale=locale, namespace=namespace, reason=str(e)
            )
            raise PhraseLoadFailed(locale, namespace, str(e)) from e

        if not is_record(resource):
            logger.error(
                "phrase_load_failed",
                locale=locale,
                namespace=namespace,
                reason="Invalid format",
            )
            raise PhraseLoadFailed(locale, namespace, "Invalid format")

        logger.info(
            "loaded_phrases", locale=locale, namespace=namespace, phrase_count=len(resource)
        )
        return resource
