"""
Availability engine for detailer appointment slots.

Converts a weekly availability template, timing settings, a service
duration and the appointments already booked on a date into either the
list of valid slot start times or an accept/reject decision for a
proposed booking.

Both operations are pure: no I/O, no shared state, and "today" is never
read from the system clock. Callers that persist an accepted booking must
serialize attempts per detailer and date (or enforce capacity in storage);
two validations against the same stale snapshot can both pass.

Overnight windows (end earlier than start) are laid out on a single
linear minute axis: the window end and any clock time earlier than the
window start are shifted forward by one day (1440 minutes).
"""

from datetime import date
from typing import Iterable, Optional, Protocol

from detailing.config import settings
from detailing.logging_context import get_detailer_logger
from detailing.schemas.availability_schema import (
    BookingDecision,
    DayAvailability,
    DetailerTimingSettings,
    RejectionReason,
    Service,
    WeeklyAvailability,
)
from detailing.utils import MINUTES_PER_DAY, format_clock, parse_clock

logger = get_detailer_logger(__name__)

SLOT_GRANULARITY_MINUTES = settings.scheduling.slot_granularity_minutes


class BookedInterval(Protocol):
    """Anything with a start clock time and a captured duration."""

    time: str
    duration_minutes: int


def _window(day: DayAvailability) -> tuple[int, int]:
    start = day.start_minutes
    end = day.end_minutes
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def _on_axis(clock_minutes: int, window_start: int, overnight: bool) -> int:
    if overnight and clock_minutes < window_start:
        return clock_minutes + MINUTES_PER_DAY
    return clock_minutes


def shift_position(time: str, day: Optional[DayAvailability]) -> int:
    """Minutes of ``time`` on the day's linear axis.

    In an overnight shift, times after midnight come after the evening
    ones. Without a template entry the plain clock minutes are returned.
    """
    minutes = parse_clock(time)
    if day is None:
        return minutes
    return _on_axis(minutes, day.start_minutes, day.is_overnight)


def occupied_interval(
    appointment: BookedInterval,
    buffer_minutes: int,
    window_start: int,
    overnight: bool,
) -> tuple[int, int]:
    """Return the ``[start, end)`` minutes an appointment removes from availability."""
    start = _on_axis(parse_clock(appointment.time), window_start, overnight)
    return start, start + appointment.duration_minutes + buffer_minutes


def _count_overlaps(
    candidate: int,
    total_needed: int,
    existing: list[BookedInterval],
    buffer_minutes: int,
    window_start: int,
    overnight: bool,
) -> int:
    candidate_end = candidate + total_needed
    count = 0
    for appointment in existing:
        appt_start, appt_end = occupied_interval(
            appointment, buffer_minutes, window_start, overnight
        )
        if candidate < appt_end and appt_start < candidate_end:
            count += 1
    return count


def enumerate_available_slots(
    weekly_availability: WeeklyAvailability,
    timing_settings: DetailerTimingSettings,
    service_duration: Optional[int],
    existing_appointments: Iterable[BookedInterval],
    target_date: date,
) -> list[str]:
    """
    List every ``HH:MM`` start time on ``target_date`` that can take a booking.

    Candidates are walked every SLOT_GRANULARITY_MINUTES from the window
    start. A candidate is kept while the service plus buffer still ends
    inside the window and fewer than ``max_appointments_per_slot``
    existing bookings overlap it.

    Args:
        weekly_availability: The detailer's seven-day template.
        timing_settings: Buffer, capacity and default duration.
        service_duration: Minutes for the service; ``None`` uses the default.
        existing_appointments: Bookings already on ``target_date``.
        target_date: The calendar date to schedule.

    Returns:
        Ascending list of slot start times. Empty when the detailer does
        not work that day or nothing fits.
    """
    day = weekly_availability.for_date(target_date)
    if day is None or not day.active:
        logger.debug("No availability on %s", target_date.isoformat())
        return []

    if service_duration is None:
        service_duration = timing_settings.default_duration_minutes
    if service_duration <= 0:
        raise ValueError(f"service_duration must be positive, got {service_duration}")

    start, end = _window(day)
    overnight = day.is_overnight
    buffer_minutes = timing_settings.buffer_minutes
    total_needed = service_duration + buffer_minutes
    existing = list(existing_appointments)

    slots: list[str] = []
    candidate = start
    while candidate + total_needed <= end:
        overlaps = _count_overlaps(
            candidate, total_needed, existing, buffer_minutes, start, overnight
        )
        if overlaps < timing_settings.max_appointments_per_slot:
            slots.append(format_clock(candidate))
        candidate += SLOT_GRANULARITY_MINUTES

    logger.debug(
        "%d slots on %s for %d-minute service", len(slots), target_date.isoformat(),
        service_duration,
    )
    return slots


def validate_booking(
    weekly_availability: WeeklyAvailability,
    timing_settings: DetailerTimingSettings,
    service: Optional[Service],
    existing_appointments: Iterable[BookedInterval],
    target_date: date,
    target_time: str,
) -> BookingDecision:
    """
    Re-check a chosen start time before it is committed.

    The returned decision carries the effective duration so the caller
    can stamp it onto the persisted appointment. A ``None`` service books
    with the detailer's default duration.
    """
    if service is not None:
        duration = service.effective_duration(timing_settings)
    else:
        duration = timing_settings.default_duration_minutes
    buffer_minutes = timing_settings.buffer_minutes
    total_needed = duration + buffer_minutes

    day = weekly_availability.for_date(target_date)
    if day is None or not day.active:
        logger.debug("Rejected %s %s: inactive day", target_date.isoformat(), target_time)
        return BookingDecision.reject(RejectionReason.NOT_AVAILABLE_THIS_DAY, duration)

    start, end = _window(day)
    overnight = day.is_overnight
    candidate = _on_axis(parse_clock(target_time), start, overnight)

    if candidate < start or candidate + total_needed > end:
        logger.debug("Rejected %s %s: outside hours", target_date.isoformat(), target_time)
        return BookingDecision.reject(RejectionReason.OUTSIDE_HOURS, duration)

    overlaps = _count_overlaps(
        candidate, total_needed, list(existing_appointments), buffer_minutes, start, overnight
    )
    if overlaps >= timing_settings.max_appointments_per_slot:
        logger.debug(
            "Rejected %s %s: %d overlapping bookings",
            target_date.isoformat(), target_time, overlaps,
        )
        return BookingDecision.reject(RejectionReason.OVERLAPS, duration)

    return BookingDecision.accept(duration)
