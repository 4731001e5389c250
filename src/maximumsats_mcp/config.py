"""Configuration management for the MaximumSats MCP server."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from maximumsats_mcp.utils.constants import API_BASE, DEFAULT_TIMEOUT_SECONDS


class Settings(BaseSettings):
    """MaximumSats MCP server settings.

    Every field has a working default; the server needs no environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="MAXIMUMSATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = API_BASE
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
