"""
WireMCP Configuration Module

Centralized configuration management using pydantic-settings.
Loads settings from WIREMCP_* environment variables and .env files.
"""

import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Find the project root (where .env is located)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        env_prefix="WIREMCP_",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    transport: Literal["stdio", "sse", "streamable-http"] = Field(
        default="stdio",
        description="MCP transport used by `wiremcp serve`",
    )

    # ==========================================================================
    # Capture Configuration
    # ==========================================================================
    tshark_path: str = Field(
        default="",
        description="Explicit tshark binary (auto-detected when empty)",
    )
    tshark_timeout: float = Field(
        default=300.0,
        description="Timeout for a single tshark invocation (seconds)",
    )
    default_interface: str = Field(
        default="en0",
        description="Interface used when a tool call does not name one",
    )
    default_duration: int = Field(
        default=5,
        description="Capture duration used when a tool call does not give one (seconds)",
    )

    # ==========================================================================
    # Analysis Configuration
    # ==========================================================================
    max_response_chars: int = Field(
        default=720_000,
        description="Maximum serialized size of list-shaped tool payloads",
    )
    phs_indent_unit: int = Field(
        default=2,
        description="Spaces per nesting level in tshark protocol hierarchy output",
    )

    # ==========================================================================
    # Threat Intelligence
    # ==========================================================================
    blacklist_url: str = Field(
        default="https://urlhaus.abuse.ch/downloads/text/",
        description="URLhaus plain-text blacklist feed",
    )
    blacklist_timeout: float = Field(
        default=30.0,
        description="Blacklist fetch timeout (seconds)",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    # ==========================================================================
    # Paths
    # ==========================================================================
    temp_dir: Path = Field(
        default=Path(tempfile.gettempdir()) / "wiremcp",
        description="Directory for temporary capture files",
    )

    @field_validator("temp_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Ensure temp_dir is a Path object."""
        return Path(v) if isinstance(v, str) else v

    @field_validator("max_response_chars", "phs_indent_unit")
    @classmethod
    def ensure_positive(cls, v: int) -> int:
        """Reject zero or negative sizes."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    def ensure_temp_dir(self) -> Path:
        """Create temp directory if it doesn't exist."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        return self.temp_dir


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience alias
settings = get_settings()
