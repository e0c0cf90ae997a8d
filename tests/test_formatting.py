"""
Tests for slot display formatting.
"""

import pendulum
import pytest

from careslots.domain.formatting import format_12h, format_slot, serialize_slots, slot_payload, slots_response
from careslots.domain.models import Slot, TimeInterval, WallClockTime


def _slot(start_hour: int, start_minute: int, minutes: int) -> Slot:
    start = pendulum.naive(2024, 11, 25, start_hour, start_minute)
    return Slot(interval=TimeInterval(start=start, end=start.add(minutes=minutes)), duration_minutes=minutes)


@pytest.mark.parametrize(
    "value, expected",
    [
        (WallClockTime(0, 5), "12:05 AM"),
        (WallClockTime(9, 0), "9:00 AM"),
        (WallClockTime(12, 0), "12:00 PM"),
        (WallClockTime(13, 30), "1:30 PM"),
        (WallClockTime(23, 59), "11:59 PM"),
    ],
)
def test_format_12h(value, expected):
    """Test 12-hour display of wall-clock times."""
    assert format_12h(value) == expected


def test_format_slot():
    """Test the display text of a slot."""
    assert format_slot(_slot(11, 30, 60)) == "11:30 AM - 12:30 PM"


def test_slot_payload():
    """The payload carries HH:mm times, display text and the ISO start."""
    payload = slot_payload(_slot(7, 0, 30))

    assert payload == {
        "start_time": "07:00",
        "end_time": "07:30",
        "formatted_time": "7:00 AM - 7:30 AM",
        "datetime": "2024-11-25T07:00:00",
    }


def test_serialize_slots_keeps_order():
    """Test serializing several slots."""
    payloads = serialize_slots([_slot(9, 0, 30), _slot(9, 30, 30)])

    assert [payload["start_time"] for payload in payloads] == ["09:00", "09:30"]


def test_slots_response_envelope():
    """Test the response envelope around the slot payloads."""
    response = slots_response("42", pendulum.date(2024, 11, 25), [_slot(9, 0, 30), _slot(9, 30, 30)])

    assert response["provider_id"] == "42"
    assert response["date"] == "2024-11-25"
    assert response["total_slots"] == 2
    assert [slot["start_time"] for slot in response["available_slots"]] == ["09:00", "09:30"]


def test_slots_response_without_slots():
    """Test that an empty day still reports its envelope."""
    response = slots_response("42", pendulum.date(2024, 11, 30), [])

    assert response == {"provider_id": "42", "date": "2024-11-30", "available_slots": [], "total_slots": 0}
