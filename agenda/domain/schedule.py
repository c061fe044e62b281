"""Shared scheduling value types: weekdays, clock times and calendar dates."""

import re
from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator


CLOCK_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


class Weekday(StrEnum):
    """Canonical English weekday names used as recurrence keys."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


# Indexed like date.weekday(): Monday == 0
WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)
WEEKEND: frozenset[Weekday] = frozenset({Weekday.SATURDAY, Weekday.SUNDAY})


def weekday_of(day: date) -> Weekday:
    """Return the canonical weekday of a calendar date."""
    return WEEKDAYS[day.weekday()]


def is_weekend(day: date) -> bool:
    return weekday_of(day) in WEEKEND


def week_start(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


def clock_to_minutes(value: str) -> int:
    """Convert an `HH:mm` clock string into minutes since midnight."""
    match = CLOCK_PATTERN.match(value)
    if not match:
        msg = f"Invalid clock time: {value!r} (expected HH:mm)"
        raise ValueError(msg)
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_clock(minutes: int) -> str:
    """Format minutes since midnight as `HH:mm`."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _normalize_clock(value: str) -> str:
    return minutes_to_clock(clock_to_minutes(value.strip()))


def _truncate_to_date(value: Any) -> Any:
    """Accept ISO dates and timestamps, keeping only the calendar day."""
    value = _blank_to_none(value)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[10] in "T ":  # noqa: PLR2004
        return value[:10]
    return value


ClockTime = Annotated[str, AfterValidator(_normalize_clock)]
OptionalClock = Annotated[ClockTime | None, BeforeValidator(_blank_to_none)]
CalendarDate = Annotated[date, BeforeValidator(_truncate_to_date)]
OptionalDate = Annotated[date | None, BeforeValidator(_truncate_to_date)]
