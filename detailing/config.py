"""
Centralized configuration with environment variable overrides.

Scheduling defaults applied to detailers that have not saved their own
timing settings live here, alongside business-wide display values.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Marketplace-wide display settings."""

    name: str = os.getenv("BUSINESS_NAME", "Detailing Near You")
    currency: str = os.getenv("CURRENCY", "usd")


@dataclass(frozen=True)
class SchedulingConfig:
    """Defaults for appointment timing and slot enumeration."""

    default_duration_minutes: int = _safe_int("DEFAULT_DURATION_MINUTES", "120")
    buffer_minutes: int = _safe_int("BUFFER_MINUTES", "30")
    max_appointments_per_slot: int = _safe_int("MAX_APPOINTMENTS_PER_SLOT", "1")
    slot_granularity_minutes: int = _safe_int("SLOT_GRANULARITY_MINUTES", "30")
    booking_horizon_days: int = _safe_int("BOOKING_HORIZON_DAYS", "14")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    scheduling = config.scheduling
    if scheduling.default_duration_minutes < 1:
        raise ValueError(
            f"DEFAULT_DURATION_MINUTES must be >= 1, got {scheduling.default_duration_minutes}"
        )
    if scheduling.buffer_minutes < 0:
        raise ValueError(
            f"BUFFER_MINUTES must be >= 0, got {scheduling.buffer_minutes}"
        )
    if scheduling.max_appointments_per_slot < 1:
        raise ValueError(
            "MAX_APPOINTMENTS_PER_SLOT must be >= 1, "
            f"got {scheduling.max_appointments_per_slot}"
        )
    if not 1 <= scheduling.slot_granularity_minutes <= 1440:
        raise ValueError(
            "SLOT_GRANULARITY_MINUTES must be between 1 and 1440, "
            f"got {scheduling.slot_granularity_minutes}"
        )
    if scheduling.booking_horizon_days < 1:
        raise ValueError(
            f"BOOKING_HORIZON_DAYS must be >= 1, got {scheduling.booking_horizon_days}"
        )
    if not config.business.currency.strip():
        raise ValueError("CURRENCY must not be empty")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
