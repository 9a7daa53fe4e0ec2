"""Application configuration module.

Reads settings from environment variables (optionally from a ``.env`` file)
with defaults suitable for a single-process bot deployment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from core.constants import ApiDefaults, DatabaseDefaults, EventDefaults
from core.exceptions import ConfigurationError

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


def _parse_int_list(value: str) -> tuple[int, ...]:
    """Parse comma-separated integers."""
    if not value:
        return ()
    return tuple(int(id_str) for id_str in value.split(",") if id_str.strip())


@dataclass(frozen=True)
class Config:
    bot_token: str
    admin_ids: tuple[int, ...]
    environment: str
    debug: bool
    enable_bot: bool
    database_path: str
    db_pool_size: int
    db_busy_timeout: int
    log_folder: str
    ra_username: str
    ra_web_api_key: str
    ra_api_base_url: str
    word_api_url: str
    http_timeout_seconds: int
    prize_threshold: int

    def validate(self) -> None:
        """Reject settings the event engine cannot run with."""
        if self.http_timeout_seconds <= 0:
            raise ConfigurationError("HTTP_TIMEOUT_SECONDS must be positive")
        if self.db_pool_size <= 0:
            raise ConfigurationError("DB_POOL_SIZE must be positive")
        if self.prize_threshold <= 0:
            raise ConfigurationError("PRIZE_THRESHOLD must be positive")

    def is_admin(self, user_id: int) -> bool:
        return user_id in self.admin_ids


def load_config() -> Config:
    """Load application configuration from environment variables.

    Returns:
        Config: Application configuration with validated values
    """
    config = Config(
        bot_token=_get_str("BOT_TOKEN", "your_bot_token_here"),
        admin_ids=_parse_int_list(_get_str("ADMIN_IDS", "")),
        environment=_get_str("ENVIRONMENT", "development"),
        debug=_get_bool("DEBUG", False),
        enable_bot=_get_bool("ENABLE_BOT", True),
        database_path=_get_str("DATABASE_PATH", "data/wordle_event.sqlite"),
        db_pool_size=_get_int("DB_POOL_SIZE", DatabaseDefaults.POOL_SIZE),
        db_busy_timeout=_get_int("DB_BUSY_TIMEOUT", DatabaseDefaults.BUSY_TIMEOUT),
        log_folder=_get_str("LOG_FOLDER", "logs"),
        ra_username=_get_str("RA_USERNAME", "RABot"),
        ra_web_api_key=_get_str("RA_WEB_API_KEY", ""),
        ra_api_base_url=_get_str("RA_API_BASE_URL", ApiDefaults.RA_API_BASE_URL),
        word_api_url=_get_str("WORD_API_URL", ApiDefaults.WORD_API_URL),
        http_timeout_seconds=_get_int("HTTP_TIMEOUT_SECONDS", ApiDefaults.TIMEOUT_SECONDS),
        prize_threshold=_get_int("PRIZE_THRESHOLD", EventDefaults.PRIZE_THRESHOLD),
    )
    config.validate()

    return config
