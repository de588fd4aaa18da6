"""Startup data in the initial render output.

The server marks phrase set files the first navigation will need with
``<link rel="prefetch" data-i18n-preload as="json" href="...">`` tags. The
client reads them back at startup as "already scheduled" bookkeeping; they are
never treated as cache content.

The handoff data itself is embedded as a script assigning a JSON object to a
global, e.g. ``window.__remixPolyglotHandoffData = {...};``.
"""

import html
import re
from html.parser import HTMLParser
from typing import Iterable, List, Optional

from route_polyglot.i18n.models import HandoffData
from route_polyglot.services.providers import get_settings


class _StartupMarkupCollector(HTMLParser):
    """Collects preload link hrefs and inline script bodies."""

    def __init__(self, attribute: str) -> None:
        super().__init__(convert_charrefs=True)
        self.attribute = attribute
        self.hrefs: List[str] = []
        self.scripts: List[str] = []
        self._in_script = False

    def handle_starttag(self, tag, attrs):
        tag = tag.lower()
        if tag == "script":
            self._in_script = True
            self.scripts.append("")
            return
        if tag != "link":
            return
        values = dict(attrs)
        if self.attribute in values and values.get("href"):
            self.hrefs.append(values["href"])

    def handle_startendtag(self, tag, attrs):
        if tag.lower() != "script":
            self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag):
        if tag.lower() == "script":
            self._in_script = False

    def handle_data(self, data):
        if self._in_script:
            self.scripts[-1] += data


def _collect(markup: str, attribute: Optional[str] = None) -> _StartupMarkupCollector:
    collector = _StartupMarkupCollector(
        attribute or get_settings().i18n.preload_attribute
    )
    collector.feed(markup)
    collector.close()
    return collector


def collect_preload_hints(markup: str, attribute: Optional[str] = None) -> List[str]:
    """Return the hrefs of preload links in ``markup``, in document order.

    Args:
        markup: Initial render output.
        attribute: Marker attribute; defaults to the configured
            ``POLYGLOT_PRELOAD_ATTRIBUTE``.
    """
    return _collect(markup, attribute).hrefs


def render_preload_links(hrefs: Iterable[str], attribute: Optional[str] = None) -> str:
    """Render prefetch link tags for ``hrefs``, one per line."""
    attribute = attribute or get_settings().i18n.preload_attribute
    return "\n".join(
        f'<link rel="prefetch" {attribute} as="json" href="{html.escape(href)}">'
        for href in hrefs
    )


def read_handoff(markup: str, global_name: Optional[str] = None) -> HandoffData:
    """Find the embedded handoff script in ``markup`` and parse its payload.

    Args:
        markup: Initial render output.
        global_name: Name of the global the payload is assigned to; defaults
            to the configured ``POLYGLOT_GLOBAL_NAME``.

    Raises:
        ValueError: If no script assigns the global, or its payload is not
            valid handoff data.
    """
    global_name = global_name or get_settings().i18n.global_name
    assignment = re.compile(
        r"(?:window\.)?" + re.escape(global_name) + r"\s*=\s*(\{.*\})\s*;?\s*$",
        re.DOTALL,
    )
    for script in _collect(markup).scripts:
        match = assignment.search(script.strip())
        if match:
            return HandoffData.from_json(match.group(1))
    raise ValueError(f"No handoff data assigned to {global_name}")
