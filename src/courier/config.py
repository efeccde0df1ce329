"""Configuration management for Courier."""

from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from courier.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="COURIER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Discord Configuration
    token: str = Field(default="", description="Discord bot token")
    prefix: str = Field(default="p!", description="Command prefix")
    proxy: str | None = Field(default=None, description="Optional HTTP proxy for the Discord gateway")

    # Access Configuration
    role_server: str = Field(default="", description="Id of the server whose roles gate commands")
    role_whitelist: str = Field(default="", description="Comma separated role ids allowed to run commands")

    # News Configuration
    news_footer: str = Field(default="anime@UTS", description="Footer text of news posts")
    news_color: str = Field(default="0099ff", description="Default hex colour of news posts")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")

    @property
    def role_whitelist_ids(self) -> list[str]:
        return [role.strip() for role in self.role_whitelist.split(",") if role.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment and validate the access config.

    Raises:
        ConfigurationError: when the role server or whitelist is missing.
    """
    try:
        settings = Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc

    if not settings.role_server:
        raise ConfigurationError("Role server id must be specified, use the 'COURIER_ROLE_SERVER' env var")
    if not settings.role_whitelist_ids:
        raise ConfigurationError(
            "Whitelist role ids must be specified, use the 'COURIER_ROLE_WHITELIST' env var "
            "for a comma separated list"
        )
    return settings
