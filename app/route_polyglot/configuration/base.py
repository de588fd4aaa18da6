"""Shared base class for settings sections."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class SectionSettings(BaseSettings):
    """Base class for settings sections.

    All section settings should inherit from this class to ensure
    consistent configuration behavior (env file loading, case sensitivity).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
