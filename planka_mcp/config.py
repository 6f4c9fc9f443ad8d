"""Runtime configuration loaded from environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__
from .exceptions import ConfigurationError

# MCP revision this server speaks
PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "planka-mcp"


class Settings(BaseSettings):
    """Server settings.

    Values come from the process environment or a local .env file. Planka
    credentials are only checked when a client is actually built, so the
    module can be imported (and tested) without them.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Planka backend
    planka_url: str = Field(default="", description="Planka base URL")
    planka_token: str | None = Field(default=None, description="Pre-issued access token")
    planka_username: str | None = Field(default=None, description="Login for token exchange")
    planka_password: str | None = Field(default=None, description="Password for token exchange")
    planka_timeout: float = Field(default=30.0, gt=0, description="Per-call timeout (seconds)")

    # HTTP transport
    mcp_http_host: str = Field(default="0.0.0.0")
    mcp_http_port: int = Field(default=8080, ge=1, le=65535)
    mcp_cors_allowed_origins: str = Field(default="*")
    mcp_session_idle_ttl: float = Field(
        default=0.0, ge=0, description="Evict idle HTTP sessions after N seconds (0 = never)"
    )

    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)

    @field_validator("planka_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def cors_origins_list(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.mcp_cors_allowed_origins.split(",") if o.strip()]

    @property
    def server_version(self) -> str:
        return __version__

    def require_planka(self) -> None:
        """Fail fast when the Planka connection cannot be configured."""
        if not self.planka_url:
            raise ConfigurationError("PLANKA_URL environment variable is required")
        if self.planka_token:
            return
        if not (self.planka_username and self.planka_password):
            raise ConfigurationError(
                "Either PLANKA_TOKEN or both PLANKA_USERNAME and PLANKA_PASSWORD "
                "environment variables are required"
            )


settings = Settings()
