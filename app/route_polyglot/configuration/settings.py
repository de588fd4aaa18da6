"""route-polyglot configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from route_polyglot.configuration.sections import HttpSettings, I18nSettings


class Settings(BaseSettings):
    """route-polyglot configuration settings - main aggregator.

    Aggregates the section settings into a single configuration object:

    - **http**: transport used for index and phrase set requests
    - **i18n**: namespace defaults and handoff/preload naming

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from route_polyglot.services import get_settings

        settings = get_settings()
        timeout = settings.http.timeout_seconds
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    http: HttpSettings
    i18n: I18nSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic section instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "http": HttpSettings,
            "i18n": I18nSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
