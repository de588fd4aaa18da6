"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    BASE_URL,
    DEFAULT_MANIFEST,
    FakeResourceServer,
    make_handoff,
    make_resource_files,
    make_route,
    settle,
)

__all__ = [
    "BASE_URL",
    "DEFAULT_MANIFEST",
    "FakeResourceServer",
    "make_handoff",
    "make_resource_files",
    "make_route",
    "settle",
]
