"""
Tests for domain models.
"""

import pendulum
import pytest

from careslots.domain.exceptions import InvalidInterval, InvalidTimeValue, TimeParseError
from careslots.domain.models import (
    AppointmentStatus,
    BookedInterval,
    Ordering,
    TimeInterval,
    WallClockTime,
    Weekday,
    compare,
    contains,
    overlaps,
    parse_date,
    parse_instant,
    to_instant,
)


def _at(value: str):
    return pendulum.parse(value).naive()


def _interval(start: str, end: str) -> TimeInterval:
    return TimeInterval(start=_at(start), end=_at(end))


class TestWallClockTime:
    """Tests for WallClockTime."""

    def test_create_valid_time(self):
        """Test creating a valid wall-clock time."""
        t = WallClockTime(13, 30)

        assert t.hour == 13
        assert t.minute == 30
        assert t.minutes_since_midnight() == 810
        assert str(t) == "13:30"

    @pytest.mark.parametrize("hour, minute", [(24, 0), (-1, 0), (12, 60), (12, -5)])
    def test_out_of_range_raises_error(self, hour, minute):
        """Out-of-range fields are rejected, never clamped."""
        with pytest.raises(InvalidTimeValue):
            WallClockTime(hour, minute)

    def test_non_integer_raises_error(self):
        """Test that non-integer fields are rejected."""
        with pytest.raises(InvalidTimeValue):
            WallClockTime("9", 0)

    @pytest.mark.parametrize(
        "text, expected",
        [("09:00", WallClockTime(9, 0)), ("9:05", WallClockTime(9, 5)), ("17:30:00", WallClockTime(17, 30))],
    )
    def test_parse(self, text, expected):
        """Test parsing the formats the booking API sends."""
        assert WallClockTime.parse(text) == expected

    @pytest.mark.parametrize("text", ["25:00", "12:60", "9am", "", "09:00:30", "0900"])
    def test_parse_malformed_raises_error(self, text):
        """Malformed strings raise TimeParseError instead of guessing."""
        with pytest.raises(TimeParseError):
            WallClockTime.parse(text)

    def test_parse_none_raises_error(self):
        """Test that a missing value cannot be parsed."""
        with pytest.raises(TimeParseError):
            WallClockTime.parse(None)

    def test_compare(self):
        """Test lexicographic comparison on (hour, minute)."""
        assert compare(WallClockTime(9, 0), WallClockTime(9, 30)) is Ordering.BEFORE
        assert compare(WallClockTime(10, 0), WallClockTime(9, 59)) is Ordering.AFTER
        assert compare(WallClockTime(9, 0), WallClockTime(9, 0)) is Ordering.EQUAL


class TestInstants:
    """Tests for dates and instants."""

    def test_to_instant(self):
        """Test combining a date and a time."""
        instant = to_instant(pendulum.date(2024, 11, 25), WallClockTime(7, 15))

        assert instant == pendulum.naive(2024, 11, 25, 7, 15)
        assert instant.tzinfo is None

    def test_weekday_numbering_starts_on_sunday(self):
        """Weekdays use 0=Sunday like the booking API."""
        assert Weekday.of(pendulum.date(2024, 11, 24)) is Weekday.SUNDAY
        assert Weekday.of(pendulum.date(2024, 11, 25)) is Weekday.MONDAY
        assert Weekday.of(pendulum.date(2024, 11, 23)) is Weekday.SATURDAY
        assert Weekday.SATURDAY.label == "Saturday"

    def test_parse_date(self):
        """Test parsing a calendar date."""
        assert parse_date("2024-11-25") == pendulum.date(2024, 11, 25)

    def test_parse_date_malformed(self):
        """Test that a malformed date raises TimeParseError."""
        with pytest.raises(TimeParseError):
            parse_date("25.11.2024")

    def test_parse_instant_keeps_wall_clock(self):
        """An offset in the string is dropped, the wall-clock reading stays."""
        instant = parse_instant("2024-11-25T10:00:00+02:00")

        assert instant.tzinfo is None
        assert instant.hour == 10
        assert instant.day == 25

    def test_parse_instant_malformed(self):
        """Test that a malformed datetime raises TimeParseError."""
        with pytest.raises(TimeParseError):
            parse_instant("not a datetime")


class TestTimeInterval:
    """Tests for TimeInterval model."""

    def test_create_valid_interval(self):
        """Test creating a valid interval."""
        interval = _interval("2024-11-25 09:00", "2024-11-25 17:00")

        assert interval.duration_minutes() == 480
        assert interval.is_single_day()
        assert interval.date == pendulum.date(2024, 11, 25)
        assert str(interval) == "2024-11-25 09:00 - 17:00"

    def test_invalid_interval_raises_error(self):
        """Test that an interval ending before it starts is rejected."""
        with pytest.raises(InvalidInterval, match="Start time .* must be before end time"):
            _interval("2024-11-25 17:00", "2024-11-25 09:00")

    def test_aware_bounds_keep_wall_clock_reading(self):
        """Test that timezone-aware bounds are stored as naive wall-clock instants."""
        interval = TimeInterval(
            start=pendulum.datetime(2024, 11, 25, 9, tz="America/New_York"),
            end=pendulum.datetime(2024, 11, 25, 10, tz="America/New_York"),
        )

        assert interval.start == pendulum.naive(2024, 11, 25, 9)
        assert interval.end.tzinfo is None
        assert interval.overlaps(_interval("2024-11-25 09:30", "2024-11-25 11:00"))

    def test_non_datetime_bound_raises_error(self):
        """Test that bounds must be datetimes."""
        with pytest.raises(InvalidTimeValue):
            TimeInterval(start="2024-11-25 09:00", end=pendulum.naive(2024, 11, 25, 10))

    def test_zero_length_interval_raises_error(self):
        """Test that an empty interval is rejected."""
        with pytest.raises(ValueError):
            _interval("2024-11-25 09:00", "2024-11-25 09:00")

    def test_on_builds_from_wall_clock_times(self):
        """Test building an interval on a date."""
        interval = TimeInterval.on(pendulum.date(2024, 11, 25), WallClockTime(9), WallClockTime(9, 30))

        assert interval.start == pendulum.naive(2024, 11, 25, 9)
        assert interval.end == pendulum.naive(2024, 11, 25, 9, 30)

    def test_overlaps(self):
        """Test half-open overlap detection."""
        tr1 = _interval("2024-11-25 09:00", "2024-11-25 12:00")
        tr2 = _interval("2024-11-25 11:00", "2024-11-25 14:00")
        tr3 = _interval("2024-11-25 14:00", "2024-11-25 17:00")

        assert overlaps(tr1, tr2)
        assert overlaps(tr2, tr1)
        assert not overlaps(tr1, tr3)

    def test_touching_intervals_do_not_overlap(self):
        """Adjacent intervals sharing a boundary are not conflicting, in both directions."""
        first = _interval("2024-11-25 09:00", "2024-11-25 10:00")
        second = _interval("2024-11-25 10:00", "2024-11-25 11:00")

        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_same_time_on_other_day_does_not_overlap(self):
        """Instants compare by date first."""
        monday = _interval("2024-11-25 09:00", "2024-11-25 10:00")
        tuesday = _interval("2024-11-26 09:00", "2024-11-26 10:00")

        assert not monday.overlaps(tuesday)

    def test_contains(self):
        """Test containment including shared boundaries."""
        outer = _interval("2024-11-25 09:00", "2024-11-25 17:00")

        assert contains(outer, _interval("2024-11-25 09:00", "2024-11-25 10:00"))
        assert contains(outer, _interval("2024-11-25 16:00", "2024-11-25 17:00"))
        assert contains(outer, outer)
        assert not contains(outer, _interval("2024-11-25 16:30", "2024-11-25 17:30"))
        assert not contains(outer, _interval("2024-11-25 08:59", "2024-11-25 09:30"))

    def test_multi_day_interval(self):
        """Test that an interval crossing midnight is reported as such."""
        overnight = _interval("2024-11-25 23:00", "2024-11-26 01:00")

        assert not overnight.is_single_day()
        assert overnight.duration_minutes() == 120


class TestBookedInterval:
    """Tests for BookedInterval and appointment statuses."""

    @pytest.mark.parametrize(
        "status, occupying",
        [
            (AppointmentStatus.PENDING, True),
            (AppointmentStatus.CONFIRMED, True),
            (AppointmentStatus.COMPLETED, True),
            (AppointmentStatus.CANCELLED, False),
            (AppointmentStatus.NO_SHOW, False),
        ],
    )
    def test_occupying_statuses(self, status, occupying):
        """Only pending, confirmed and completed appointments reserve time."""
        booked = BookedInterval(
            interval=_interval("2024-11-25 10:00", "2024-11-25 11:00"),
            status=status,
        )

        assert booked.is_occupying is occupying
