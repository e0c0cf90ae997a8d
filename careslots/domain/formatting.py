"""
Display formatting for slots, kept apart from the availability logic.
"""

from datetime import date
from typing import Any, Dict, Iterable, List

from .models import Slot, WallClockTime


def format_12h(value: WallClockTime) -> str:
    """Format a wall-clock time as 12-hour text, e.g. "1:30 PM"."""
    suffix = "PM" if value.hour >= 12 else "AM"
    display_hour = value.hour % 12 or 12
    return f"{display_hour}:{value.minute:02d} {suffix}"


def format_slot(slot: Slot) -> str:
    """
    Format the slot for display.
    Format: 9:00 AM - 10:00 AM
    """
    return f"{format_12h(slot.start_time)} - {format_12h(slot.end_time)}"


def slot_payload(slot: Slot) -> Dict[str, str]:
    """Shape one slot the way the booking UI consumes it."""
    return {
        "start_time": str(slot.start_time),
        "end_time": str(slot.end_time),
        "formatted_time": format_slot(slot),
        "datetime": slot.start.isoformat(),
    }


def serialize_slots(slots: Iterable[Slot]) -> List[Dict[str, str]]:
    return [slot_payload(slot) for slot in slots]


def slots_response(provider_id: str, day: date, slots: Iterable[Slot]) -> Dict[str, Any]:
    """Wrap the slot payloads in the envelope the time-slots endpoint returns."""
    available = serialize_slots(slots)
    return {
        "provider_id": provider_id,
        "date": day.isoformat(),
        "available_slots": available,
        "total_slots": len(available),
    }
