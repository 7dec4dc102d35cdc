"""Shared clock and calendar helpers used across the scheduling modules."""

from datetime import date, datetime

MINUTES_PER_DAY = 1440

WEEKDAY_NAMES: tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def parse_clock(value: str) -> int:
    """Convert an ``HH:MM`` clock string to minutes since midnight.

    Examples:
        >>> parse_clock("09:30")
        570
        >>> parse_clock("00:00")
        0

    Raises:
        ValueError: If the value is not a valid 24-hour clock time.
    """
    parsed = datetime.strptime(value.strip(), "%H:%M")
    return parsed.hour * 60 + parsed.minute


def format_clock(minutes: int) -> str:
    """Convert minutes since midnight back to ``HH:MM``, wrapping past midnight.

    Examples:
        >>> format_clock(570)
        '09:30'
        >>> format_clock(1500)
        '01:00'
    """
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def weekday_name(value: date) -> str:
    """Return the English weekday name for a date, e.g. ``"Monday"``."""
    return WEEKDAY_NAMES[value.weekday()]


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a date."""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()
