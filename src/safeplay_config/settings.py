"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. SAFEPLAY_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. SAFEPLAY_ENV_FILE env var (relative paths resolve against project root)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("SAFEPLAY_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "SafePlay"

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/safeplay.db"
    database_echo: bool = False

    # Password hashing
    bcrypt_rounds: int = 12
    password_min_length: int = 8
    password_max_length: int = BCRYPT_MAX_PASSWORD_BYTES

    # Logging
    log_level: str = "INFO"

    @field_validator("bcrypt_rounds")
    @classmethod
    def _validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            msg = "bcrypt_rounds must be between 4 and 31"
            raise ValueError(msg)
        return v

    @field_validator("password_max_length")
    @classmethod
    def _validate_password_max_length(cls, v: int) -> int:
        if v > BCRYPT_MAX_PASSWORD_BYTES:
            msg = f"password_max_length cannot exceed {BCRYPT_MAX_PASSWORD_BYTES}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _validate_password_bounds(self) -> Settings:
        if self.password_min_length < 1:
            msg = "password_min_length must be positive"
            raise ValueError(msg)
        if self.password_min_length > self.password_max_length:
            msg = "password_min_length cannot exceed password_max_length"
            raise ValueError(msg)
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
