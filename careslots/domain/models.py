"""
Domain models for wall-clock times, intervals, slots and bookings.

Every value here is timezone-naive: times and instants are compared exactly
as written, never converted through UTC.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum, IntEnum

import pendulum
from pendulum import Date, DateTime

from .exceptions import InvalidInterval, InvalidTimeValue, TimeParseError

# "9:00", "09:00" and "09:00:00" are all sent by the booking API
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


class Ordering(Enum):
    """Result of comparing two wall-clock times."""
    BEFORE = -1
    EQUAL = 0
    AFTER = 1


class Weekday(IntEnum):
    """Day of the week, numbered the way the booking API does (0=Sunday)."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Return the weekday a calendar date falls on."""
        return cls(day.isoweekday() % 7)

    @property
    def label(self) -> str:
        return self.name.title()


@dataclass(frozen=True, order=True)
class WallClockTime:
    """
    A time of day with minute precision and no date or timezone.

    Invariant: 0 <= hour <= 23 and 0 <= minute <= 59.
    """
    hour: int
    minute: int = 0

    def __post_init__(self):
        for name, value, upper in (("hour", self.hour, 23), ("minute", self.minute, 59)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTimeValue(f"{name.title()} must be an integer, got {value!r}")
            if not 0 <= value <= upper:
                raise InvalidTimeValue(f"{name.title()} must be between 0 and {upper}, got {value}")

    @classmethod
    def parse(cls, value: str) -> "WallClockTime":
        """
        Parse an "HH:mm" string as delivered by the operating-hours source.

        A trailing ":00" seconds component is tolerated. Anything else,
        including non-zero seconds, raises TimeParseError.
        """
        if not isinstance(value, str):
            raise TimeParseError(f"Expected a time string in HH:mm format, got {value!r}")

        match = _TIME_PATTERN.match(value.strip())
        if not match:
            raise TimeParseError(f"Invalid time '{value}', expected HH:mm")

        hour, minute, second = match.groups()
        if second is not None and int(second) != 0:
            raise TimeParseError(f"Invalid time '{value}', seconds are not supported")

        try:
            return cls(hour=int(hour), minute=int(minute))
        except InvalidTimeValue as exc:
            raise TimeParseError(f"Invalid time '{value}': {exc}") from exc

    @classmethod
    def from_time(cls, value: time) -> "WallClockTime":
        return cls(hour=value.hour, minute=value.minute)

    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def to_time(self) -> time:
        return time(hour=self.hour, minute=self.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def compare(a: WallClockTime, b: WallClockTime) -> Ordering:
    """Compare two wall-clock times lexicographically on (hour, minute)."""
    if a < b:
        return Ordering.BEFORE
    if a > b:
        return Ordering.AFTER
    return Ordering.EQUAL


def to_instant(day: date, at: WallClockTime) -> DateTime:
    """Combine a calendar date and a wall-clock time into a naive instant."""
    return pendulum.naive(day.year, day.month, day.day, at.hour, at.minute)


def wall_clock(instant: datetime) -> DateTime:
    """
    Return the naive wall-clock reading of an instant.

    Aware values such as ``pendulum.now()`` keep their local reading and lose
    the offset, the same way ``parse_instant`` treats offsets in strings.
    """
    if not isinstance(instant, datetime):
        raise InvalidTimeValue(f"Expected a datetime, got {instant!r}")
    return pendulum.instance(instant).naive()


def parse_date(value: str) -> Date:
    """Parse a YYYY-MM-DD calendar date."""
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except (TypeError, ValueError) as exc:
        raise TimeParseError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def parse_instant(value: str) -> DateTime:
    """
    Parse an ISO 8601 datetime string into a naive wall-clock instant.

    An explicit UTC offset in the string is dropped, keeping the local
    wall-clock reading as written.
    """
    if not isinstance(value, str):
        raise TimeParseError(f"Expected an ISO datetime string, got {value!r}")

    try:
        parsed = pendulum.parse(value)
    except (TypeError, ValueError) as exc:
        raise TimeParseError(f"Invalid datetime '{value}': {exc}") from exc

    if not isinstance(parsed, DateTime):
        raise TimeParseError(f"Invalid datetime '{value}', expected a date and a time")

    return parsed.naive()


@dataclass(frozen=True)
class TimeInterval:
    """
    A half-open interval [start, end) between two naive instants.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        object.__setattr__(self, "start", wall_clock(self.start))
        object.__setattr__(self, "end", wall_clock(self.end))

        if self.start >= self.end:
            raise InvalidInterval(f"Start time {self.start} must be before end time {self.end}")

    @classmethod
    def on(cls, day: date, start: WallClockTime, end: WallClockTime) -> "TimeInterval":
        """Build the interval between two wall-clock times on one date."""
        return cls(start=to_instant(day, start), end=to_instant(day, end))

    @property
    def date(self) -> Date:
        return self.start.date()

    def is_single_day(self) -> bool:
        """True when start and end share a calendar date."""
        return self.start.date() == self.end.date()

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps another. Touching endpoints do not overlap."""
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeInterval") -> bool:
        """Check if the other interval lies entirely within this one."""
        return self.start <= other.start and other.end <= self.end

    def __str__(self) -> str:
        if self.is_single_day():
            return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('HH:mm')}"
        return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('YYYY-MM-DD HH:mm')}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    return a.overlaps(b)


def contains(outer: TimeInterval, inner: TimeInterval) -> bool:
    return outer.contains(inner)


@dataclass(frozen=True)
class Slot:
    """
    One bookable unit of fixed duration, generated on demand.
    """
    interval: TimeInterval
    duration_minutes: int

    @property
    def start(self) -> DateTime:
        return self.interval.start

    @property
    def end(self) -> DateTime:
        return self.interval.end

    @property
    def start_time(self) -> WallClockTime:
        return WallClockTime(hour=self.start.hour, minute=self.start.minute)

    @property
    def end_time(self) -> WallClockTime:
        return WallClockTime(hour=self.end.hour, minute=self.end.minute)


class AppointmentStatus(str, Enum):
    """Lifecycle status of an appointment in the booking store."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"

    @property
    def is_occupying(self) -> bool:
        """Whether an appointment with this status still reserves its time."""
        return self in _OCCUPYING_STATUSES


_OCCUPYING_STATUSES = frozenset(
    {AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED}
)


@dataclass(frozen=True)
class BookedInterval:
    """
    The time an existing appointment takes up, tagged with its status.
    """
    interval: TimeInterval
    status: AppointmentStatus = AppointmentStatus.CONFIRMED

    @property
    def is_occupying(self) -> bool:
        return self.status.is_occupying
