"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def resolve_random_seed() -> int | None:
    """Optional seed for the draw service.

    Unset (the default) means the system RNG seeds itself; set RANDOM_SEED to
    make every generated game and simulation reproducible.
    """

    raw = os.getenv("RANDOM_SEED")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    TESTING: bool = False

    # Wager pricing (BRL per simple 6-number bet)
    TICKET_PRICE: float = _env_float("TICKET_PRICE", 6.0)
    MAX_GAMES: int = _env_int("MAX_GAMES", 100)

    # Simulation engine
    SIM_MAX_ITERATIONS: int = _env_int("SIM_MAX_ITERATIONS", 5_000_000)
    SIM_BATCH_SIZE: int = _env_int("SIM_BATCH_SIZE", 10_000)
    SIM_WORKERS: int = _env_int("SIM_WORKERS", 2)
    RANDOM_SEED: int | None = resolve_random_seed()


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Configuration used by the test-suite."""

    DEBUG: bool = False
    TESTING: bool = True
    SIM_BATCH_SIZE: int = 1_000
    SIM_MAX_ITERATIONS: int = 200_000
    SIM_WORKERS: int = 1
    RANDOM_SEED: int | None = 1234


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
