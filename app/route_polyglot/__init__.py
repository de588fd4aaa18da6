"""route-polyglot - lazy, navigation-aware loading of localized phrase sets.

Subpackages:
- i18n: resource caches, loader, lookup store, navigation batching, hooks
- configuration: pydantic-settings based configuration
- logging: structlog configuration and context helpers
- services: cached providers for settings and HTTP clients
"""
