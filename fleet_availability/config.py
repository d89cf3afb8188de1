"""
Centralized configuration with environment variable overrides.

Trip duration estimates, storage timeouts, blocking statuses, and calendar
colors are configurable here. Nothing is hardcoded in engine or store logic.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

from fleet_availability.logging_context import LOG_FORMAT, install_request_filter

load_dotenv()

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")
_KNOWN_STATUSES = frozenset({"pending", "accepted", "completed", "rejected"})


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _csv_tuple(env_var: str, default: str) -> tuple[str, ...]:
    """Split a comma-separated env var into a tuple of lowercase tokens."""
    raw = os.getenv(env_var, default)
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class AvailabilityConfig:
    """Conflict detection and write-path settings."""

    default_trip_minutes: int = _safe_int("DEFAULT_TRIP_MINUTES", "120")
    storage_timeout_sec: float = _safe_float("STORAGE_TIMEOUT_SEC", "10.0")
    blocking_statuses: tuple[str, ...] = _csv_tuple(
        "BLOCKING_STATUSES", "accepted,completed"
    )


@dataclass(frozen=True)
class CalendarConfig:
    """Presentation settings for projected calendar events."""

    booking_color: str = os.getenv("CALENDAR_BOOKING_COLOR", "#3B82F6")
    unavailable_color: str = os.getenv("CALENDAR_UNAVAILABLE_COLOR", "#EF4444")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    availability: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    service_name: str = os.getenv("SERVICE_NAME", "fleet-availability")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.availability.default_trip_minutes < 1:
        raise ValueError(
            "DEFAULT_TRIP_MINUTES must be >= 1, "
            f"got {config.availability.default_trip_minutes}"
        )
    if config.availability.storage_timeout_sec <= 0:
        raise ValueError(
            "STORAGE_TIMEOUT_SEC must be > 0, "
            f"got {config.availability.storage_timeout_sec}"
        )

    statuses = config.availability.blocking_statuses
    if not statuses:
        raise ValueError("BLOCKING_STATUSES must name at least one status")
    unknown = sorted(set(statuses) - _KNOWN_STATUSES)
    if unknown:
        raise ValueError(f"BLOCKING_STATUSES has unknown values: {unknown}")
    if "rejected" in statuses:
        raise ValueError("BLOCKING_STATUSES must not include 'rejected'")

    for color_name, color_value in [
        ("CALENDAR_BOOKING_COLOR", config.calendar.booking_color),
        ("CALENDAR_UNAVAILABLE_COLOR", config.calendar.unavailable_color),
    ]:
        if not _HEX_COLOR.match(color_value):
            raise ValueError(f"{color_name} must be a #RRGGBB color, got {color_value!r}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=getattr(logging, config.log_level.upper(), logging.INFO),
            format=LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        for handler in root.handlers:
            install_request_filter(handler)
    logger.info("Configuration loaded for '%s'", config.service_name)
    return config


# Singleton instance
settings = load_config()
