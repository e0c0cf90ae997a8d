"""
Weekly operating hours of a provider.

A provider has one entry per weekday. Days without an entry are closed.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from .exceptions import ValidationError
from .models import TimeInterval, WallClockTime, Weekday


@dataclass(frozen=True)
class OperatingHours:
    """
    Open or closed state of one weekday with its opening and closing time.

    Invariant: a closed day has no times; an open day has both and closes
    strictly after it opens.
    """
    weekday: Weekday
    is_closed: bool = True
    start_time: Optional[WallClockTime] = None
    end_time: Optional[WallClockTime] = None

    def __post_init__(self):
        if not isinstance(self.weekday, Weekday):
            try:
                object.__setattr__(self, "weekday", Weekday(self.weekday))
            except ValueError as exc:
                raise ValidationError(f"day_of_week must be between 0 and 6, got {self.weekday!r}") from exc
        validate(self)

    @classmethod
    def closed(cls, weekday: Weekday) -> "OperatingHours":
        return cls(weekday=weekday, is_closed=True)

    @classmethod
    def open(cls, weekday: Weekday, start: WallClockTime, end: WallClockTime) -> "OperatingHours":
        return cls(weekday=weekday, is_closed=False, start_time=start, end_time=end)

    def open_interval(self, day: date) -> TimeInterval | None:
        """
        Get the open period for a specific date.
        Returns None if the day is closed.
        """
        if self.is_closed:
            return None
        return TimeInterval.on(day, self.start_time, self.end_time)

    def __str__(self) -> str:
        if self.is_closed:
            return f"{self.weekday.label}: closed"
        return f"{self.weekday.label}: {self.start_time} - {self.end_time}"


def validate(hours: OperatingHours) -> None:
    """
    Check the closed/open invariant of a single day.

    Raises:
        ValidationError: If the entry is inconsistent
    """
    if not isinstance(hours.weekday, Weekday):
        raise ValidationError(f"Unknown weekday: {hours.weekday!r}")

    label = hours.weekday.label

    for name, value in (("start_time", hours.start_time), ("end_time", hours.end_time)):
        if value is not None and not isinstance(value, WallClockTime):
            raise ValidationError(f"{label}: {name} must be a WallClockTime, got {value!r}")

    if hours.is_closed:
        if hours.start_time is not None or hours.end_time is not None:
            raise ValidationError(f"{label} is closed and must not have opening times")
        return

    if hours.start_time is None or hours.end_time is None:
        raise ValidationError(f"{label} is open and needs both a start and an end time")

    if hours.end_time <= hours.start_time:
        raise ValidationError(
            f"{label}: end time {hours.end_time} must be after start time {hours.start_time}"
        )


def validate_week(hours: Iterable[OperatingHours]) -> None:
    """
    Check a provider's full weekly configuration.

    Every entry must be valid, no weekday may appear twice and at least
    one day has to be open.

    Raises:
        ValidationError: If the configuration is rejected
    """
    entries = list(hours)
    seen: set[Weekday] = set()

    for entry in entries:
        validate(entry)
        if entry.weekday in seen:
            raise ValidationError(f"Duplicate operating hours for {entry.weekday.label}")
        seen.add(entry.weekday)

    if not any(not entry.is_closed for entry in entries):
        raise ValidationError("At least one day of the week must be open")


def hours_for(all_hours: Iterable[OperatingHours], weekday: Weekday) -> OperatingHours:
    """Look up one weekday, falling back to closed when no entry exists."""
    for entry in all_hours:
        if entry.weekday == weekday:
            return entry
    return OperatingHours.closed(weekday)


def full_week(all_hours: Iterable[OperatingHours]) -> List[OperatingHours]:
    """Return exactly seven entries, Sunday first, filling gaps with closed days."""
    entries = list(all_hours)
    return [hours_for(entries, weekday) for weekday in Weekday]


def default_week() -> List[OperatingHours]:
    """Onboarding default: weekdays 09:00 - 17:00, weekends closed."""
    opening = WallClockTime(9, 0)
    closing = WallClockTime(17, 0)
    return [
        OperatingHours.open(weekday, opening, closing)
        if Weekday.MONDAY <= weekday <= Weekday.FRIDAY
        else OperatingHours.closed(weekday)
        for weekday in Weekday
    ]
