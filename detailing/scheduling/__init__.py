from detailing.scheduling.engine import (
    SLOT_GRANULARITY_MINUTES,
    enumerate_available_slots,
    occupied_interval,
    shift_position,
    validate_booking,
)

__all__ = [
    "SLOT_GRANULARITY_MINUTES",
    "enumerate_available_slots",
    "occupied_interval",
    "shift_position",
    "validate_booking",
]
