"""Configuration management using environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_VIDEOS_URL = "https://raw.githubusercontent.com/myvfc/video-db/main/videos.json"
DEFAULT_PLAYER_URL = "https://player.xsen.fun"


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="HTTP listen port", ge=1, le=65535)
    cors_allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins, '*' allows any origin",
    )
    static_dir: str | None = Field(
        default=None, description="Directory served at the site root (e.g. manifest.json)"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: str = Field(default="development", description="Environment name")

    # Catalog
    videos_url: str = Field(default=DEFAULT_VIDEOS_URL, description="URL of the videos.json catalog")
    xsen_player_url: str = Field(
        default=DEFAULT_PLAYER_URL, description="Base URL of the XSEN embeddable player"
    )
    catalog_initial_delay_seconds: float = Field(
        default=2.5, description="Delay before the first catalog load", ge=0
    )
    catalog_refresh_interval_seconds: float = Field(
        default=15 * 60, description="Interval between catalog reloads", gt=0
    )
    catalog_fetch_timeout_seconds: float = Field(
        default=10.0, description="Timeout for fetching the catalog document", gt=0
    )

    # Search
    tool_search_mode: Literal["scored", "substring"] = Field(
        default="scored", description="Search strategy used by the xsen_search tool"
    )
    default_result_limit: int = Field(
        default=3, description="Number of matches returned when no limit is given", ge=1, le=50
    )

    # Keep-alive heartbeat
    keepalive_enabled: bool = Field(default=True, description="Periodically ping /health")
    keepalive_interval_seconds: float = Field(
        default=5 * 60, description="Interval between keep-alive pings", gt=0
    )

    # MCP Authentication
    mcp_auth_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("mcp_auth_key", "mcp_auth"),
        description="Bearer secret expected on POST /mcp",
    )
    mcp_auth_required: bool | None = Field(
        default=None,
        description="Require the bearer secret on POST /mcp; defaults to whether a secret is set",
    )

    @model_validator(mode="after")
    def _check_auth_settings(self) -> "Config":
        if self.mcp_auth_required and not self.auth_secret:
            raise ValueError("MCP_AUTH_REQUIRED is set but MCP_AUTH_KEY is not configured.")
        return self

    @property
    def auth_secret(self) -> str | None:
        """The configured bearer secret, or None when unset or blank."""
        if self.mcp_auth_key is None:
            return None
        return self.mcp_auth_key.get_secret_value() or None

    @property
    def auth_required(self) -> bool:
        """Whether POST /mcp must carry the bearer secret."""
        if self.mcp_auth_required is None:
            return self.auth_secret is not None
        return self.mcp_auth_required

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config()
