"""
Utilities to centralize configuration handling across the lightfoot services.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Simple container for application level settings."""

    app_name: str
    # PostgreSQL database
    db_host: str
    db_port: int
    db_user: str
    db_password: str
    db_name: str
    db_sslmode: str
    db_pool_size: int
    db_max_overflow: int
    # App settings
    secret_key: str
    log_level: str
    debug_mode: bool
    flask_debug: bool
    business_timezone: str
    load_seed_data: bool
    # Deployment
    num_proxies: int
    cors_allowed_origins: str
    # Menu ranges used by the POS and reporting screens
    core_menu_min_id: int
    core_menu_max_id: int
    favorites_min_id: int
    favorites_max_id: int
    favorites_window: int
    favorites_limit: int

    def get_bool(self, key: str, default: bool = False) -> bool:
        """
        Get boolean config value from AppConfig.

        Args:
            key: Configuration key (e.g., 'debug_mode')
            default: Default value if not set (defaults to False)

        Returns:
            bool: Configuration value
        """
        value = getattr(self, key, default)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    def get_int(self, key: str, default: int = 0) -> int:
        """
        Get integer config value from AppConfig.

        Args:
            key: Configuration key (e.g., 'favorites_limit')
            default: Default value if not set (defaults to 0)

        Returns:
            int: Configuration value
        """
        value = getattr(self, key, default)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return default
        return value if isinstance(value, int) else default

    def get_string(self, key: str, default: str = "") -> str:
        value = getattr(self, key, default)
        return str(value) if value is not None else default

    @property
    def sqlalchemy_uri(self) -> str:
        """
        Build a SQLAlchemy PostgreSQL URI using psycopg2 as the driver.

        The format is compatible with SQLAlchemy's engine URL expectations.
        """
        ssl_arg = f"?sslmode={self.db_sslmode}" if self.db_sslmode else ""
        return (
            f"postgresql+psycopg2://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}{ssl_arg}"
        )


def _read_env(name: str, default: str | None = None) -> str:
    """
    Internal helper to fetch environment variables with support for defaults.
    """
    value = os.getenv(name)
    if value is None:
        if default is None:
            raise RuntimeError(f"Missing required environment variable '{name}'")
        value = default
    return value


def read_bool(name: str, default: str = "false") -> bool:
    value = _read_env(name, default)
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_config(app_name: str) -> AppConfig:
    """
    Produce an AppConfig instance populated from environment variables.

    Each service passes its desired `app_name` to keep logs easy to
    differentiate while still reusing the same config loader.
    """
    return AppConfig(
        app_name=app_name,
        db_host=_read_env("POSTGRES_HOST", "localhost"),
        db_port=int(_read_env("POSTGRES_PORT", "5432")),
        db_user=_read_env("POSTGRES_USER", "lightfoot"),
        db_password=_read_env("POSTGRES_PASSWORD", "lightfoot"),
        db_name=_read_env("POSTGRES_DB", "lightfoot"),
        db_sslmode=_read_env("POSTGRES_SSLMODE", "disable"),
        db_pool_size=int(_read_env("DB_POOL_SIZE", "10")),
        db_max_overflow=int(_read_env("DB_MAX_OVERFLOW", "20")),
        secret_key=_read_env("SECRET_KEY", "change-me"),
        log_level=_read_env("LOG_LEVEL", "INFO"),
        debug_mode=read_bool("DEBUG_MODE", "false"),
        flask_debug=read_bool("FLASK_DEBUG", "false"),
        business_timezone=_read_env("BUSINESS_TIMEZONE", "America/Chicago"),
        load_seed_data=read_bool("LOAD_SEED_DATA", "false"),
        num_proxies=int(_read_env("NUM_PROXIES", "0")),
        cors_allowed_origins=_read_env("CORS_ALLOWED_ORIGINS", ""),
        core_menu_min_id=int(_read_env("CORE_MENU_MIN_ID", "4")),
        core_menu_max_id=int(_read_env("CORE_MENU_MAX_ID", "26")),
        favorites_min_id=int(_read_env("FAVORITES_MIN_ID", "4")),
        favorites_max_id=int(_read_env("FAVORITES_MAX_ID", "22")),
        favorites_window=int(_read_env("FAVORITES_WINDOW", "100")),
        favorites_limit=int(_read_env("FAVORITES_LIMIT", "5")),
    )


_active_config: AppConfig | None = None


def set_active_config(config: AppConfig) -> None:
    """Remember the config the running app was built with."""
    global _active_config
    _active_config = config


def get_active_config() -> AppConfig:
    """
    Return the config of the running app, loading one from the environment
    when no app has been created yet (scripts, shell sessions).
    """
    global _active_config
    if _active_config is None:
        _active_config = load_config("lightfoot")
    return _active_config
