"""
Service configuration.

Settings are read from the environment once at startup and passed
explicitly into the HTTP layer. The generators never read them.

Environment variables:
    API_KEY: Optional key required in the X-API-Key header.
    HOST: Interface to bind to. Defaults to 0.0.0.0.
    PORT: Port to listen on. Defaults to 8080.
    LOG_LEVEL: Logging level name. Defaults to INFO.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """
    Runtime settings for the document service.

    Attributes:
        api_key: Key clients must send in X-API-Key. Open access when unset.
        host: Interface to bind to.
        port: Port to listen on.
        log_level: Logging level name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Key required in the X-API-Key header",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface to bind to",
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to listen on",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name",
    )

    @property
    def auth_enabled(self) -> bool:
        """Whether requests must present an API key."""
        return bool(self.api_key)
