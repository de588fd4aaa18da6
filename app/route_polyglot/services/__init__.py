"""Provider functions for shared infrastructure objects."""

from route_polyglot.services.providers import create_http_client, get_settings

__all__ = ["get_settings", "create_http_client"]
