"""
Mock appointment store.

In production, appointments live in the hosted database's ``appointments``
table. Booking here validates against the current snapshot of the day and
persists in the same critical section, keyed by detailer and date, so two
concurrent attempts cannot both pass validation against stale data.
"""

import threading
import uuid
from datetime import date
from typing import Optional, TypedDict

from detailing.logging_context import detailer_context, get_detailer_logger
from detailing.schemas.availability_schema import (
    Appointment,
    AppointmentStatus,
    Service,
)
from detailing.scheduling.engine import shift_position, validate_booking
from detailing.tools.detailers import get_timing_settings, get_weekly_availability
from detailing.tools.services import get_service

logger = get_detailer_logger(__name__)


class BookingResult(TypedDict, total=False):
    """Result from book_appointment, accept_lead, or cancel_appointment."""

    success: bool
    message: str
    appointment_id: str
    reason: Optional[str]
    details: Appointment


_appointments: dict[str, Appointment] = {}

# Keys hash onto a fixed pool of locks.
LOCK_POOL_SIZE = 64
_day_locks: tuple[threading.Lock, ...] = tuple(threading.Lock() for _ in range(LOCK_POOL_SIZE))


def _lock_for(detailer_id: str, day: date) -> threading.Lock:
    return _day_locks[hash((detailer_id, day)) % LOCK_POOL_SIZE]


def list_appointments(detailer_id: str, day: date) -> list[Appointment]:
    """Return the detailer's non-cancelled appointments on a date, ordered by time.

    Ordering follows the working shift, so in an overnight shift the
    after-midnight appointments come last.
    """
    shift = get_weekly_availability(detailer_id).for_date(day)
    return sorted(
        (
            appt for appt in _appointments.values()
            if appt.detailer_id == detailer_id
            and appt.date == day
            and appt.status != AppointmentStatus.CANCELLED
        ),
        key=lambda appt: shift_position(appt.time, shift),
    )


def book_appointment(
    detailer_id: str,
    day: date,
    time: str,
    service_name: Optional[str] = None,
    customer_name: str = "",
    notes: str = "",
    status: AppointmentStatus = AppointmentStatus.CONFIRMED,
) -> BookingResult:
    """Validate a proposed booking and persist it when accepted.

    The stored appointment carries the duration computed during
    validation, so later slot calculations use the booked length even if
    the service or the detailer default changes afterwards.
    """
    with detailer_context(detailer_id):
        service: Optional[Service] = None
        if service_name:
            service = get_service(detailer_id, service_name)
            if service is None:
                return {
                    "success": False,
                    "message": f"Service '{service_name}' is not offered by this detailer.",
                }

        with _lock_for(detailer_id, day):
            decision = validate_booking(
                get_weekly_availability(detailer_id),
                get_timing_settings(detailer_id),
                service,
                list_appointments(detailer_id, day),
                day,
                time,
            )
            if not decision.accepted:
                logger.info(
                    "Booking rejected on %s at %s: %s",
                    day.isoformat(), time, decision.reason.value,
                )
                return {
                    "success": False,
                    "reason": decision.reason.value,
                    "message": decision.message,
                }

            appointment = Appointment(
                appointment_id=f"AP-{uuid.uuid4().hex[:8].upper()}",
                detailer_id=detailer_id,
                date=day,
                time=time,
                duration_minutes=decision.duration_minutes,
                service_name=service.name if service else None,
                price=service.price if service else 0.0,
                status=status,
                customer_name=customer_name,
                notes=notes,
            )
            _appointments[appointment.appointment_id] = appointment

        logger.info(
            "Appointment %s booked on %s at %s (%d min)",
            appointment.appointment_id, day.isoformat(), appointment.time,
            appointment.duration_minutes,
        )
        return {
            "success": True,
            "appointment_id": appointment.appointment_id,
            "reason": None,
            "message": (
                f"Booked {appointment.service_name or 'appointment'} "
                f"on {day.isoformat()} at {appointment.time}."
            ),
            "details": appointment,
        }


def _not_pending(appointment_id: str, appointment: Optional[Appointment]) -> BookingResult:
    if appointment is None:
        return {"success": False, "message": f"Appointment {appointment_id} not found."}
    return {
        "success": False,
        "appointment_id": appointment_id,
        "message": (
            f"Appointment {appointment_id} is {appointment.status.value}, not a pending lead."
        ),
    }


def accept_lead(appointment_id: str) -> BookingResult:
    """Confirm a pending lead after re-checking it against the rest of the day.

    Status is read and written under the day's lock, so a cancellation
    that lands first is never overwritten.
    """
    lead = _appointments.get(appointment_id)
    if lead is None or lead.status != AppointmentStatus.PENDING:
        return _not_pending(appointment_id, lead)

    with detailer_context(lead.detailer_id), _lock_for(lead.detailer_id, lead.date):
        lead = _appointments.get(appointment_id)
        if lead is None or lead.status != AppointmentStatus.PENDING:
            return _not_pending(appointment_id, lead)

        # The lead keeps the duration stamped when it was requested.
        stamped = Service(
            name=lead.service_name or "appointment",
            price=lead.price,
            duration_minutes=lead.duration_minutes,
        )
        others = [
            appt for appt in list_appointments(lead.detailer_id, lead.date)
            if appt.appointment_id != appointment_id
        ]
        decision = validate_booking(
            get_weekly_availability(lead.detailer_id),
            get_timing_settings(lead.detailer_id),
            stamped,
            others,
            lead.date,
            lead.time,
        )
        if not decision.accepted:
            return {
                "success": False,
                "appointment_id": appointment_id,
                "reason": decision.reason.value,
                "message": decision.message,
            }
        confirmed = lead.model_copy(update={"status": AppointmentStatus.CONFIRMED})
        _appointments[appointment_id] = confirmed
        logger.info("Lead accepted: %s", appointment_id)

    return {
        "success": True,
        "appointment_id": appointment_id,
        "reason": None,
        "message": f"Appointment {appointment_id} confirmed.",
        "details": confirmed,
    }


def cancel_appointment(appointment_id: str) -> BookingResult:
    """Cancel an appointment so it no longer occupies capacity."""
    appointment = _appointments.get(appointment_id)
    if appointment is None:
        return {"success": False, "message": f"Appointment {appointment_id} not found."}

    with detailer_context(appointment.detailer_id), \
            _lock_for(appointment.detailer_id, appointment.date):
        appointment = _appointments[appointment_id]
        cancelled = appointment.model_copy(update={"status": AppointmentStatus.CANCELLED})
        _appointments[appointment_id] = cancelled
        logger.info("Appointment cancelled: %s", appointment_id)

    return {
        "success": True,
        "appointment_id": appointment_id,
        "message": f"Appointment {appointment_id} has been cancelled.",
        "details": cancelled,
    }


def get_appointment(appointment_id: str) -> Optional[Appointment]:
    """Retrieve an appointment by id."""
    return _appointments.get(appointment_id)


def reset() -> None:
    """Clear all appointments. Used by test fixtures for isolation."""
    _appointments.clear()
