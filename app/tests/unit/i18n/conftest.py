"""Feature-level fixtures for i18n system tests.

Provides a fake resource server and loaders/sessions wired to it.
"""

import pytest

from route_polyglot.i18n import PhraseLoader, ResourceFetcher
from tests.factories.i18n import (
    BASE_URL,
    DEFAULT_MANIFEST,
    FakeResourceServer,
    make_handoff,
)


@pytest.fixture
def resource_server():
    """Fake server with en and es indexes for the common and nav namespaces."""
    return FakeResourceServer()


@pytest.fixture
def http_client(resource_server):
    """AsyncClient routed to the fake server."""
    return resource_server.client()


@pytest.fixture
def manifest():
    return dict(DEFAULT_MANIFEST)


@pytest.fixture
def fetcher(http_client):
    return ResourceFetcher(http_client, BASE_URL)


@pytest.fixture
def loader(fetcher, manifest):
    """PhraseLoader with fresh caches."""
    return PhraseLoader(fetcher, manifest)


@pytest.fixture
def handoff():
    """Handoff for locale en with a root route needing common and a child needing nav."""
    return make_handoff(
        locale="en",
        route_namespaces={"root": ["common"], "root/child": ["nav"]},
        preload=["https://cdn.example.com/i18n/en/common-en.json"],
    )
