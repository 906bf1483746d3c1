"""Server configuration management for Toolbench."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


def _default_settings_file() -> Path:
    return Path.home() / ".config" / "toolbench" / "settings.json"


class ServerConfig(BaseSettings):
    """Toolbench server configuration."""

    model_config = {"env_prefix": "TOOLBENCH_", "env_file": ".env", "case_sensitive": False}

    host: str = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=8080, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    settings_file: Path = Field(
        default_factory=_default_settings_file, description="JSON document holding module settings"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase for logging compatibility."""
        return v.upper()

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Create config from environment variables and .env files."""
        return cls()
