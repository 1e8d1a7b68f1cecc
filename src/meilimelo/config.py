"""Client configuration and env handling."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """Base settings with common env config."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class MeiliSettings(BaseAppSettings):
    model_config = SettingsConfigDict(env_prefix="MEILI_")

    host: str = "http://localhost:7700"
    secret_key: str | None = None
    timeout: float = 30.0
