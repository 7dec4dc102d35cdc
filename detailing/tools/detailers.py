"""
Mock per-detailer settings store.

In production, availability and timing settings are rows keyed by the
detailer's profile id in the hosted database, saved from the dashboard
settings tab.
"""

import logging

from detailing.schemas.availability_schema import (
    DetailerTimingSettings,
    WeeklyAvailability,
)

logger = logging.getLogger(__name__)

_availability: dict[str, WeeklyAvailability] = {}
_timing: dict[str, DetailerTimingSettings] = {}


def get_weekly_availability(detailer_id: str) -> WeeklyAvailability:
    """Return the detailer's weekly template, or the default one if never saved."""
    return _availability.get(detailer_id) or WeeklyAvailability.default()


def set_weekly_availability(detailer_id: str, availability: WeeklyAvailability) -> None:
    _availability[detailer_id] = availability
    active = [name for name, day in availability.days.items() if day.active]
    logger.info("Availability saved for %s: active on %s", detailer_id, ", ".join(active))


def get_timing_settings(detailer_id: str) -> DetailerTimingSettings:
    """Return the detailer's timing settings, or configured defaults."""
    return _timing.get(detailer_id) or DetailerTimingSettings()


def set_timing_settings(detailer_id: str, timing: DetailerTimingSettings) -> None:
    _timing[detailer_id] = timing
    logger.info(
        "Timing saved for %s: default %d min, buffer %d min, capacity %d",
        detailer_id,
        timing.default_duration_minutes,
        timing.buffer_minutes,
        timing.max_appointments_per_slot,
    )


def reset() -> None:
    """Clear all saved settings. Used by test fixtures for isolation."""
    _availability.clear()
    _timing.clear()
