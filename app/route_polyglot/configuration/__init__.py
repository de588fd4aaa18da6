"""Configuration module - public API.

This module provides centralized configuration management for route-polyglot
using Pydantic BaseSettings with section-based organization.

Exports:
    Settings: Main settings class (aggregator)
    HttpSettings: HTTP transport settings section
    I18nSettings: Phrase loading settings section

Example:
    ```python
    from route_polyglot.services import get_settings

    settings = get_settings()

    timeout = settings.http.timeout_seconds
    namespace = settings.i18n.default_namespace

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from route_polyglot.configuration.sections import HttpSettings, I18nSettings
from route_polyglot.configuration.settings import Settings

__all__ = ["Settings", "HttpSettings", "I18nSettings"]
