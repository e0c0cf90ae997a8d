"""
Conversion of raw booking-API records into domain values.

Operating hours arrive as
``{day_of_week, start_time: "HH:mm" | None, end_time: "HH:mm" | None, is_closed}``
and appointments as ``{start_time: ISO datetime, end_time: ISO datetime, status}``.
"""

from typing import Any, Iterable, List, Mapping

from ..domain.exceptions import ValidationError
from ..domain.models import AppointmentStatus, BookedInterval, TimeInterval, WallClockTime, parse_instant
from ..domain.operating_hours import OperatingHours


def _require_mapping(record: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(record, Mapping):
        raise ValidationError(f"{kind} record must be a mapping, got {type(record).__name__}")
    return record


def parse_operating_hours_record(record: Mapping[str, Any]) -> OperatingHours:
    """
    Build one OperatingHours entry from an API record.

    Raises:
        TimeParseError: If start_time or end_time is malformed
        ValidationError: If the record is missing fields or inconsistent
    """
    record = _require_mapping(record, "Operating hours")

    if "day_of_week" not in record:
        raise ValidationError("Operating hours record is missing day_of_week")

    day_of_week = record["day_of_week"]
    if isinstance(day_of_week, bool) or not isinstance(day_of_week, int):
        raise ValidationError(f"day_of_week must be an integer, got {day_of_week!r}")

    raw_start = record.get("start_time")
    raw_end = record.get("end_time")
    is_closed = record.get("is_closed", False)
    if is_closed not in (True, False):
        raise ValidationError(f"is_closed must be a boolean, got {is_closed!r}")

    if is_closed:
        # Closed days sometimes still carry stale times from the form
        return OperatingHours.closed(day_of_week)

    return OperatingHours(
        weekday=day_of_week,
        is_closed=False,
        start_time=WallClockTime.parse(raw_start) if raw_start is not None else None,
        end_time=WallClockTime.parse(raw_end) if raw_end is not None else None,
    )


def parse_operating_hours(records: Iterable[Mapping[str, Any]]) -> List[OperatingHours]:
    return [parse_operating_hours_record(record) for record in records]


def parse_status(value: Any) -> AppointmentStatus:
    try:
        return AppointmentStatus(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown appointment status: {value!r}") from exc


def parse_booking_record(record: Mapping[str, Any]) -> BookedInterval:
    """
    Build one BookedInterval from an API appointment record.

    Raises:
        TimeParseError: If a datetime is malformed
        InvalidInterval: If the appointment does not end after it starts
        ValidationError: If fields are missing or the status is unknown
    """
    record = _require_mapping(record, "Appointment")

    for key in ("start_time", "end_time", "status"):
        if key not in record:
            raise ValidationError(f"Appointment record is missing {key}")

    return BookedInterval(
        interval=TimeInterval(
            start=parse_instant(record["start_time"]),
            end=parse_instant(record["end_time"]),
        ),
        status=parse_status(record["status"]),
    )


def parse_bookings(records: Iterable[Mapping[str, Any]]) -> List[BookedInterval]:
    """Parse appointment records, keeping only those that occupy their time."""
    bookings = [parse_booking_record(record) for record in records]
    return [booking for booking in bookings if booking.is_occupying]
