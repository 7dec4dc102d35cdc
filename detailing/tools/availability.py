"""
Caller-facing availability lookups.

Loads a detailer's template, timing settings and booked appointments from
the stores, runs the availability engine, and shapes the result for the
booking pages.
"""

from datetime import date, timedelta
from typing import Optional, TypedDict

from detailing.config import settings
from detailing.logging_context import detailer_context, get_detailer_logger
from detailing.scheduling.engine import enumerate_available_slots, validate_booking
from detailing.tools.appointments import list_appointments
from detailing.tools.detailers import get_timing_settings, get_weekly_availability
from detailing.tools.services import get_service
from detailing.utils import weekday_name

logger = get_detailer_logger(__name__)


class AvailabilityResult(TypedDict):
    """Result from check_availability."""

    available: bool
    slots: list[str]
    next_available: Optional[str]
    message: str


class DateAvailability(TypedDict):
    """Summary of availability for a single date."""

    date: str
    day_name: str
    slot_count: int


def _service_duration(detailer_id: str, service_name: Optional[str]) -> Optional[int]:
    if not service_name:
        return None
    service = get_service(detailer_id, service_name)
    if service is None:
        raise ValueError(f"Service '{service_name}' is not offered by detailer {detailer_id}")
    return service.effective_duration(get_timing_settings(detailer_id))


def get_slots(detailer_id: str, day: date, service_name: Optional[str] = None) -> list[str]:
    """Available slot start times for a detailer, date and optional service.

    Raises:
        ValueError: If the detailer does not offer ``service_name``.
    """
    return enumerate_available_slots(
        get_weekly_availability(detailer_id),
        get_timing_settings(detailer_id),
        _service_duration(detailer_id, service_name),
        list_appointments(detailer_id, day),
        day,
    )


def check_availability(
    detailer_id: str,
    day: date,
    service_name: Optional[str] = None,
    preferred_time: Optional[str] = None,
) -> AvailabilityResult:
    """
    Check appointment availability for a detailer on a given date.

    With a preferred time the proposal is validated directly and the
    rejection reason becomes the message. Otherwise all open slots are
    returned. When nothing fits, ``next_available`` points at the first
    later date with an open slot.
    """
    with detailer_context(detailer_id):
        service = get_service(detailer_id, service_name) if service_name else None
        if service_name and service is None:
            return {
                "available": False,
                "slots": [],
                "next_available": None,
                "message": f"Service '{service_name}' is not offered by this detailer.",
            }

        if preferred_time:
            decision = validate_booking(
                get_weekly_availability(detailer_id),
                get_timing_settings(detailer_id),
                service,
                list_appointments(detailer_id, day),
                day,
                preferred_time,
            )
            if decision.accepted:
                return {
                    "available": True,
                    "slots": [preferred_time],
                    "next_available": None,
                    "message": f"Available on {day.isoformat()} at {preferred_time}.",
                }
            return {
                "available": False,
                "slots": [],
                "next_available": _find_next_available(detailer_id, day, service_name),
                "message": decision.message,
            }

        slots = get_slots(detailer_id, day, service_name)
        if slots:
            return {
                "available": True,
                "slots": slots,
                "next_available": None,
                "message": f"{len(slots)} time slots available on {day.isoformat()}.",
            }

        return {
            "available": False,
            "slots": [],
            "next_available": _find_next_available(detailer_id, day, service_name),
            "message": f"No slots available on {day.isoformat()}.",
        }


def get_available_dates(
    detailer_id: str,
    start_date: date,
    service_name: Optional[str] = None,
    limit: int = 5,
    horizon_days: Optional[int] = None,
) -> list[DateAvailability]:
    """Get the next N dates, from ``start_date`` onward, with at least one open slot."""
    if horizon_days is None:
        horizon_days = settings.scheduling.booking_horizon_days
    with detailer_context(detailer_id):
        results: list[DateAvailability] = []
        for offset in range(horizon_days):
            day = start_date + timedelta(days=offset)
            slots = get_slots(detailer_id, day, service_name)
            if slots:
                results.append(
                    {
                        "date": day.isoformat(),
                        "day_name": weekday_name(day),
                        "slot_count": len(slots),
                    }
                )
            if len(results) >= limit:
                break
        return results


def _find_next_available(
    detailer_id: str, after: date, service_name: Optional[str]
) -> Optional[str]:
    for offset in range(1, settings.scheduling.booking_horizon_days + 1):
        day = after + timedelta(days=offset)
        slots = get_slots(detailer_id, day, service_name)
        if slots:
            return f"{day.isoformat()} {slots[0]}"
    logger.debug("No availability for %s within booking horizon", detailer_id)
    return None
