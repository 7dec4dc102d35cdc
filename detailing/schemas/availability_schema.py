"""Availability, timing, service and appointment data models."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from detailing.config import settings
from detailing.utils import WEEKDAY_NAMES, format_clock, parse_clock, weekday_name


def _check_clock(value: str) -> str:
    return format_clock(parse_clock(value))


class DayAvailability(BaseModel):
    """Working window for a single weekday.

    ``end`` earlier than ``start`` marks an overnight shift that runs
    past midnight into the next calendar day.
    """
    active: bool = True
    start: str = "09:00"
    end: str = "18:00"

    @field_validator("start", "end")
    @classmethod
    def validate_clock(cls, value: str) -> str:
        return _check_clock(value)

    @property
    def start_minutes(self) -> int:
        return parse_clock(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_clock(self.end)

    @property
    def is_overnight(self) -> bool:
        return self.end_minutes < self.start_minutes


class WeeklyAvailability(BaseModel):
    """Fixed seven-day template keyed by weekday name."""
    days: dict[str, DayAvailability]

    @field_validator("days")
    @classmethod
    def validate_weekdays(
        cls, value: dict[str, DayAvailability]
    ) -> dict[str, DayAvailability]:
        unknown = sorted(set(value) - set(WEEKDAY_NAMES))
        if unknown:
            raise ValueError(f"Unknown weekday names: {', '.join(unknown)}")
        missing = [name for name in WEEKDAY_NAMES if name not in value]
        if missing:
            raise ValueError(f"Missing weekdays: {', '.join(missing)}")
        return {name: value[name] for name in WEEKDAY_NAMES}

    @classmethod
    def default(cls) -> "WeeklyAvailability":
        """Monday to Saturday 09:00-18:00, closed Sunday."""
        return cls(days={
            name: DayAvailability(active=name != "Sunday", start="09:00", end="18:00")
            for name in WEEKDAY_NAMES
        })

    def for_weekday(self, name: str) -> Optional[DayAvailability]:
        return self.days.get(name)

    def for_date(self, target_date: date) -> Optional[DayAvailability]:
        return self.for_weekday(weekday_name(target_date))


class DetailerTimingSettings(BaseModel):
    """Per-detailer scalar timing configuration."""
    default_duration_minutes: int = Field(
        default_factory=lambda: settings.scheduling.default_duration_minutes, gt=0
    )
    buffer_minutes: int = Field(
        default_factory=lambda: settings.scheduling.buffer_minutes, ge=0
    )
    max_appointments_per_slot: int = Field(
        default_factory=lambda: settings.scheduling.max_appointments_per_slot, ge=1
    )


class Service(BaseModel):
    """A bookable service offered by a detailer."""
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0)

    def effective_duration(self, timing: DetailerTimingSettings) -> int:
        """Explicit duration if the service has one, else the detailer default."""
        if self.duration_minutes is not None:
            return self.duration_minutes
        return timing.default_duration_minutes


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Appointment(BaseModel):
    """A booked appointment. ``duration_minutes`` is captured at booking time."""
    appointment_id: str
    detailer_id: str
    date: date
    time: str
    duration_minutes: int = Field(gt=0)
    service_name: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    status: AppointmentStatus = AppointmentStatus.CONFIRMED
    customer_name: str = ""
    notes: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("time")
    @classmethod
    def validate_clock(cls, value: str) -> str:
        return _check_clock(value)


class RejectionReason(str, Enum):
    NOT_AVAILABLE_THIS_DAY = "not_available_this_day"
    OUTSIDE_HOURS = "outside_hours"
    OVERLAPS = "overlaps"


REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.NOT_AVAILABLE_THIS_DAY: "Not available this day.",
    RejectionReason.OUTSIDE_HOURS: "Outside business hours.",
    RejectionReason.OVERLAPS: "Time slot full.",
}


class BookingDecision(BaseModel):
    """Outcome of validating a proposed booking."""
    accepted: bool
    reason: Optional[RejectionReason] = None
    duration_minutes: int
    message: str = ""

    @classmethod
    def accept(cls, duration_minutes: int) -> "BookingDecision":
        return cls(accepted=True, duration_minutes=duration_minutes, message="Available.")

    @classmethod
    def reject(cls, reason: RejectionReason, duration_minutes: int) -> "BookingDecision":
        return cls(
            accepted=False,
            reason=reason,
            duration_minutes=duration_minutes,
            message=REJECTION_MESSAGES[reason],
        )
