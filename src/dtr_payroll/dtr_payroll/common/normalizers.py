"""Field normalizers for Daily-Time-Record CSV values.

All functions are pure: they take the raw text found in a CSV cell and return
a canonical value, or raise `InvalidFormatError`.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.exceptions import InvalidFormatError

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_TRUE_VALUES = {"yes", "1", "true"}
ZERO_CLOCK = "00:00:00"


def _clock_parts(raw: str, field_name: str) -> tuple[int, int, int]:
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) > 3:
        raise InvalidFormatError(f"Invalid {field_name} format: {raw!r}")

    values: list[int] = []
    for p in parts:
        if not p.isdecimal():
            raise InvalidFormatError(f"Invalid {field_name} format: {raw!r}")
        values.append(int(p))

    while len(values) < 3:
        values.append(0)
    return values[0], values[1], values[2]


def _format_clock(hours: int, minutes: int, seconds: int) -> str:
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def normalize_time(raw: Optional[str]) -> str:
    """Normalize `H`, `H:MM` or `H:MM:SS` into `HH:MM:SS`.

    Missing or empty values become midnight. A single component is read as
    whole hours.
    """
    if raw is None or not str(raw).strip():
        return ZERO_CLOCK
    return _format_clock(*_clock_parts(str(raw).strip(), "time"))


def normalize_duration(raw: Optional[str]) -> str:
    """Same rules as `normalize_time`; hours may exceed 23."""
    if raw is None:
        return ZERO_CLOCK
    text = str(raw).strip()
    if not text or text == "0":
        return ZERO_CLOCK
    return _format_clock(*_clock_parts(text, "duration"))


def month_name_to_first_of_month(name: Optional[str], year: int) -> date:
    key = (name or "").strip().lower()
    if key not in MONTH_NAMES:
        raise InvalidFormatError(f"Invalid month name: {name!r}")
    return date(int(year), MONTH_NAMES.index(key) + 1, 1)


def month_name(month: int) -> str:
    """1 -> 'January'."""
    if not 1 <= int(month) <= 12:
        raise InvalidFormatError(f"Invalid month number: {month!r}")
    return MONTH_NAMES[int(month) - 1].capitalize()


def normalize_entry_date(raw: Optional[str]) -> date:
    """Parse `M/D/YYYY` into a date."""
    text = (raw or "").strip()
    parts = text.split("/")
    if len(parts) != 3 or not all(p.strip().isdecimal() for p in parts):
        raise InvalidFormatError(f"Invalid date format: {raw!r} (expected M/D/YYYY)")

    month, day, year = (int(p) for p in parts)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidFormatError(f"Invalid date: {raw!r}") from exc


def normalize_boolean(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    return str(raw).strip().lower() in _TRUE_VALUES


def duration_to_decimal_hours(value: Optional[str]) -> Decimal:
    """`HH:MM:SS` -> hours + minutes/60. Seconds are not counted."""
    if not value:
        return Decimal(0)
    hours, minutes, _ = _clock_parts(str(value).strip(), "duration")
    return Decimal(hours) + Decimal(minutes) / Decimal(60)
