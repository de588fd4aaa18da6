"""HTTP and phrase loading settings sections."""

from pydantic import Field, field_validator

from route_polyglot.configuration.base import SectionSettings


class HttpSettings(SectionSettings):
    """HTTP transport configuration for index and phrase set requests.

    Environment Variables:
        POLYGLOT_HTTP_TIMEOUT_SECONDS: Per-request timeout (default: 10.0)
        POLYGLOT_HTTP_USER_AGENT: User-Agent header sent with every request

    Example:
        ```python
        from route_polyglot.services import get_settings

        timeout = get_settings().http.timeout_seconds
        ```
    """

    timeout_seconds: float = Field(
        default=10.0,
        alias="POLYGLOT_HTTP_TIMEOUT_SECONDS",
        description="Timeout applied to each index or phrase set GET (seconds)",
    )
    user_agent: str = Field(
        default="route-polyglot/1.0",
        alias="POLYGLOT_HTTP_USER_AGENT",
        description="User-Agent header for resource requests",
    )

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError("POLYGLOT_HTTP_TIMEOUT_SECONDS must be positive")
        return v


class I18nSettings(SectionSettings):
    """Phrase loading configuration.

    Environment Variables:
        POLYGLOT_DEFAULT_NAMESPACE: Namespace used when none is given (default: common)
        POLYGLOT_PRELOAD_ATTRIBUTE: Attribute marking preload links in rendered HTML
        POLYGLOT_GLOBAL_NAME: Name of the global the server embeds handoff data under
    """

    default_namespace: str = Field(
        default="common",
        alias="POLYGLOT_DEFAULT_NAMESPACE",
    )
    preload_attribute: str = Field(
        default="data-i18n-preload",
        alias="POLYGLOT_PRELOAD_ATTRIBUTE",
    )
    global_name: str = Field(
        default="__remixPolyglotHandoffData",
        alias="POLYGLOT_GLOBAL_NAME",
    )
