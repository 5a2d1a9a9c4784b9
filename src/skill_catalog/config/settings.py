"""Configuration and settings management using pydantic-settings."""
import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_prefix="SKILL_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core settings
    env: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="WARNING", description="Log level")
    log_format: str = Field(default="json", description="Log format: json or text")

    # Corpus layout
    repo_root: Path | None = Field(
        default=None,
        description="Corpus repository root (defaults to the working directory)",
    )
    plugin_dir: str = Field(
        default=".claude-plugin",
        description="Directory holding plugin.json and marketplace.json",
    )
    readme_name: str = Field(
        default="README.md",
        description="README that carries the compressed index markers",
    )

    # Index rendering
    index_title: str = Field(
        default="dotnet-skills",
        description="Tag used in the compressed index header and flow line",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Log level must be a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only json and text formats are supported."""
        fmt = v.lower()
        if fmt not in ("json", "text"):
            raise ValueError(f"log_format must be 'json' or 'text', got {v}")
        return fmt

    def resolve_repo_root(self) -> Path:
        """Configured repo root, or the current working directory."""
        return (self.repo_root or Path.cwd()).resolve()


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
