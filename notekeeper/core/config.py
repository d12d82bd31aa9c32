"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.
No hardcoded endpoints in code; all configuration comes from these sources.

Secrets (.env):
    SUPABASE_ANON_KEY, SUPABASE_EMAIL, SUPABASE_PASSWORD

Settings (YAML):
    application.yaml   - App identity and environment
    supabase.yaml      - Project URL, notes table, request timeout
    feedback.yaml      - Alert presenter selection
    logging.yaml       - Logging configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notekeeper.core.config_schema import (
    ApplicationSchema,
    FeedbackSchema,
    LoggingSchema,
    SupabaseSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only keys and credentials."""

    supabase_anon_key: str
    supabase_email: str | None = None
    supabase_password: str | None = None

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._supabase = _load_validated(SupabaseSchema, "supabase.yaml")
        self._feedback = _load_validated(FeedbackSchema, "feedback.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def supabase(self) -> SupabaseSchema:
        """Supabase project settings."""
        return self._supabase

    @property
    def feedback(self) -> FeedbackSchema:
        """Alert presenter settings."""
        return self._feedback

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_supabase_config() -> tuple[str, str, float]:
    """
    Get the Supabase connection parameters.

    Returns:
        Tuple of (base_url, anon_key, timeout_seconds).
    """
    supabase = get_app_config().supabase
    anon_key = get_settings().supabase_anon_key
    return supabase.url.rstrip("/"), anon_key, float(supabase.timeout_seconds)
