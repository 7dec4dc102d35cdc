"""Shared test fixtures and helpers."""

from datetime import date
from typing import Optional

import pytest

from detailing.schemas.availability_schema import (
    Appointment,
    DayAvailability,
    DetailerTimingSettings,
    WeeklyAvailability,
)
from detailing.tools import appointments, detailers, services
from detailing.utils import WEEKDAY_NAMES

# 2025-03-17 is a Monday.
MONDAY = date(2025, 3, 17)
SUNDAY = date(2025, 3, 23)


@pytest.fixture(autouse=True)
def reset_stores():
    appointments.reset()
    detailers.reset()
    services.reset()
    yield
    appointments.reset()
    detailers.reset()
    services.reset()


def make_week(
    start: str = "09:00",
    end: str = "18:00",
    inactive: tuple[str, ...] = ("Sunday",),
) -> WeeklyAvailability:
    """Helper to create a template with the same hours on every active day."""
    return WeeklyAvailability(days={
        name: DayAvailability(active=name not in inactive, start=start, end=end)
        for name in WEEKDAY_NAMES
    })


def make_timing(
    default_duration: int = 60, buffer: int = 0, capacity: int = 1
) -> DetailerTimingSettings:
    return DetailerTimingSettings(
        default_duration_minutes=default_duration,
        buffer_minutes=buffer,
        max_appointments_per_slot=capacity,
    )


def make_appointment(
    time: str,
    duration: int = 60,
    day: date = MONDAY,
    detailer_id: str = "det-1",
    appointment_id: Optional[str] = None,
) -> Appointment:
    return Appointment(
        appointment_id=appointment_id or f"AP-{time.replace(':', '')}",
        detailer_id=detailer_id,
        date=day,
        time=time,
        duration_minutes=duration,
    )


@pytest.fixture
def week():
    return make_week()


@pytest.fixture
def timing():
    return make_timing()
