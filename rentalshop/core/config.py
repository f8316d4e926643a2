"""Configuration module for the rental-shop contract engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from rentalshop.core.exceptions import ConfigurationError

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    API_BASE_URL: str
    API_TOKEN: str | None
    API_TIMEOUT_SECONDS: int
    DEFAULT_RENTAL_DAYS: int
    RECONCILIATION_LOWER_RATIO: float
    RECONCILIATION_UPPER_RATIO: float
    CURRENCY_SYMBOL: str
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="RentalShop",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        API_BASE_URL=os.getenv("API_BASE_URL", "http://localhost:3000"),
        API_TOKEN=os.getenv("API_TOKEN"),
        API_TIMEOUT_SECONDS=int(os.getenv("API_TIMEOUT_SECONDS", "15")),
        DEFAULT_RENTAL_DAYS=int(os.getenv("DEFAULT_RENTAL_DAYS", "7")),
        RECONCILIATION_LOWER_RATIO=float(os.getenv("RECONCILIATION_LOWER_RATIO", "0.5")),
        RECONCILIATION_UPPER_RATIO=float(os.getenv("RECONCILIATION_UPPER_RATIO", "1.1")),
        CURRENCY_SYMBOL=os.getenv("CURRENCY_SYMBOL", "R$"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
    )
    _validate_config(config)
    return config


def _validate_api_base_url(api_base_url: str) -> None:
    parsed = urlparse(api_base_url)
    if parsed.scheme not in {"http", "https"}:
        raise ConfigurationError("API_BASE_URL must use http:// or https://.")
    if not parsed.hostname:
        raise ConfigurationError("API_BASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_api_base_url(config.API_BASE_URL)

    if config.API_TIMEOUT_SECONDS < 1:
        raise ConfigurationError("API_TIMEOUT_SECONDS must be >= 1.")
    if config.DEFAULT_RENTAL_DAYS < 1:
        raise ConfigurationError("DEFAULT_RENTAL_DAYS must be >= 1.")
    if not 0 <= config.RECONCILIATION_LOWER_RATIO <= 1:
        raise ConfigurationError("RECONCILIATION_LOWER_RATIO must be between 0 and 1.")
    if config.RECONCILIATION_UPPER_RATIO < 1:
        raise ConfigurationError("RECONCILIATION_UPPER_RATIO must be >= 1.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and config.API_BASE_URL.startswith("http://"):
        raise ConfigurationError("Production API_BASE_URL must use https://.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
