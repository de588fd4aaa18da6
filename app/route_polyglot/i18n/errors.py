"""Exceptions raised by the phrase loading system.

All loading failures inherit from ``LoadError`` so callers can log them in
one place; ``Cancelled`` stays separate because an aborted navigation is an
expected outcome, not a failure.
"""

from typing import Optional


class PolyglotError(Exception):
    """Base exception for all route-polyglot errors.

    Example:
        try:
            await session.load(["common"], token)
        except PolyglotError as e:
            logger.error("polyglot_error", error=str(e))
    """

    pass


class LoadError(PolyglotError):
    """Base exception for failures while loading an index or phrase set.

    Attributes:
        locale: Locale the load was for.
        namespace: Namespace the load was for, if known.
    """

    def __init__(
        self, message: str, locale: str, namespace: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.namespace = namespace


class MissingLocaleConfig(LoadError):
    """Raised when the manifest has no index file for the requested locale.

    Example:
        >>> await loader.load("de", "common")
        Traceback (most recent call last):
        ...
        MissingLocaleConfig: Missing index for de
    """

    def __init__(self, locale: str, namespace: Optional[str] = None) -> None:
        super().__init__(f"Missing index for {locale}", locale, namespace)


class IndexLoadFailed(LoadError):
    """Raised when the index request fails, returns non-2xx, or is malformed."""

    def __init__(self, locale: str, reason: str) -> None:
        super().__init__(
            f"Could not read index for {locale}. Reason: {reason}", locale
        )
        self.reason = reason


class MissingNamespace(LoadError):
    """Raised when a loaded index has no entry for the requested namespace."""

    def __init__(self, locale: str, namespace: str) -> None:
        super().__init__(
            f"Missing namespace {namespace} on locale {locale}", locale, namespace
        )


class PhraseLoadFailed(LoadError):
    """Raised when a phrase set request fails, returns non-2xx, or is malformed."""

    def __init__(self, locale: str, namespace: str, reason: str) -> None:
        super().__init__(
            f"Failed to load phrases of namespace {namespace} in {locale}. "
            f"Reason: {reason}",
            locale,
            namespace,
        )
        self.reason = reason


class UnknownNamespace(PolyglotError):
    """Raised when a lookup is requested for a combination that was never loaded.

    This is a contract violation by the caller and is not retried.
    """

    def __init__(self, locale: str, namespace: str) -> None:
        super().__init__(f"Unknown namespace {namespace} in {locale}")
        self.locale = locale
        self.namespace = namespace


class Cancelled(PolyglotError):
    """Raised when a caller's cancellation token fires before its load completes."""

    pass
