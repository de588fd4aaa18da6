"""Default phrase lookup objects.

A lookup is bound to one locale and one namespace and never changes after it
is built. The session only builds and stores lookups; applications that need
richer formatting can pass their own builder with the same signature as
``build_lookup``.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from route_polyglot.i18n.models import LookupKey, PhraseSet
from route_polyglot.logging import get_module_logger

logger = get_module_logger()

LookupBuilder = Callable[[str, str, PhraseSet, Optional[Mapping[str, Any]]], Any]
LookupOptionsGetter = Callable[[str, str], Optional[Mapping[str, Any]]]

_DOUBLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")


@dataclass(frozen=True)
class PhraseLookup:
    """Immutable, locale-bound phrase lookup.

    Attributes:
        locale: Locale the phrases are in.
        namespace: Namespace the phrases belong to.
        phrases: Read-only phrase set.
        allow_missing: Return the key instead of raising for unknown phrases.
    """

    locale: str
    namespace: str
    phrases: Mapping[str, Any] = field(default_factory=dict)
    allow_missing: bool = True

    @property
    def key(self) -> LookupKey:
        return LookupKey(self.locale, self.namespace)

    def has(self, phrase_key: str) -> bool:
        return self._resolve(phrase_key) is not None

    def t(self, phrase_key: str, variables: Optional[Dict[str, Any]] = None) -> str:
        """Look up a phrase and interpolate ``{{variable}}`` placeholders.

        Dotted keys ("nav.home") descend into nested phrase values.

        Args:
            phrase_key: Phrase key.
            variables: Values for the placeholders in the phrase.

        Returns:
            Interpolated phrase, or the key itself when the phrase is missing
            and ``allow_missing`` is set.

        Raises:
            KeyError: If the phrase is missing and ``allow_missing`` is False.
            ValueError: If a placeholder has no value in ``variables``.
        """
        message = self._resolve(phrase_key)
        if not isinstance(message, str):
            if self.allow_missing:
                logger.warning(
                    "phrase_not_found",
                    key=phrase_key,
                    locale=self.locale,
                    namespace=self.namespace,
                )
                return phrase_key
            raise KeyError(
                f"Phrase {phrase_key} not found in {self.namespace} ({self.locale})"
            )
        return self._interpolate(message, variables or {})

    def _resolve(self, phrase_key: str) -> Any:
        if phrase_key in self.phrases:
            return self.phrases[phrase_key]
        node: Any = self.phrases
        for part in phrase_key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node

    def _interpolate(self, message: str, variables: Dict[str, Any]) -> str:
        for var_name in _DOUBLE_PATTERN.findall(message):
            if var_name not in variables:
                logger.error(
                    "missing_interpolation_variable",
                    variable=var_name,
                    available_variables=list(variables.keys()),
                )
                raise ValueError(f"Missing interpolation variable: {var_name}")
        return _DOUBLE_PATTERN.sub(lambda m: str(variables[m.group(1)]), message)


def build_lookup(
    locale: str,
    namespace: str,
    phrases: PhraseSet,
    options: Optional[Mapping[str, Any]] = None,
) -> PhraseLookup:
    """Build the default lookup for a loaded phrase set.

    Args:
        locale: Locale of the phrase set.
        namespace: Namespace of the phrase set.
        phrases: Loaded phrase set. Copied, so later mutation of the source
            does not leak into the lookup.
        options: Supports ``allow_missing`` (default True).

    Returns:
        PhraseLookup bound to ``locale`` and ``namespace``.
    """
    options = options or {}
    return PhraseLookup(
        locale=locale,
        namespace=namespace,
        phrases=MappingProxyType(dict(phrases)),
        allow_missing=bool(options.get("allow_missing", True)),
    )
