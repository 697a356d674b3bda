"""Configuration management for the commit helper server.

Settings are read with Pydantic Settings from:
1. System environment variables
2. MCP server configuration (mcpServers.env)
3. A ``.env`` file in the working directory, if present

Every setting has a default that reproduces the plain behaviour (``git`` on
PATH, stdio transport), so the server runs without any configuration at all.
"""
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    git_executable: str = Field(default="git", alias="GIT_EXECUTABLE", description="Git executable name or path")
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL", description="Logging level for stderr diagnostics")

    # Transport
    transport: Literal["stdio", "http"] = Field(default="stdio", alias="MCP_TRANSPORT", description="MCP transport")
    http_host: str = Field(default="127.0.0.1", alias="HTTP_HOST", description="Bind address in http mode")
    http_port: int = Field(default=8000, alias="HTTP_PORT", description="Bind port in http mode")

    @field_validator("git_executable")
    @classmethod
    def _validate_executable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("git_executable must not be empty")
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        """Accept a standard logging level name, case-insensitively."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("http_port")
    @classmethod
    def _validate_port(cls, value: int) -> int:
        if not 1 <= value <= 65535:
            raise ValueError("http_port must be between 1 and 65535")
        return value


_settings: Optional[Settings] = None


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Returns:
        Settings: Validated settings object

    Raises:
        RuntimeError: If a setting is invalid
    """
    global _settings
    try:
        _settings = Settings()
    except Exception as e:
        raise RuntimeError(f"Configuration error: {e}") from e
    return _settings


def get_settings() -> Settings:
    """Get the current settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
