"""
Domain layer - Pure availability logic without external dependencies.
"""

from .conflict_resolver import ConflictResolver, filter_available, has_conflict
from .exceptions import (
    CareslotsError,
    InvalidInterval,
    InvalidTimeValue,
    SlotUnavailable,
    SourceError,
    TimeParseError,
    ValidationError,
)
from .models import (
    AppointmentStatus,
    BookedInterval,
    Slot,
    TimeInterval,
    WallClockTime,
    Weekday,
)
from .operating_hours import OperatingHours, hours_for, validate, validate_week
from .slot_generator import CandidateSlots, SlotGenerator

__all__ = [
    "AppointmentStatus",
    "BookedInterval",
    "CandidateSlots",
    "CareslotsError",
    "ConflictResolver",
    "InvalidInterval",
    "InvalidTimeValue",
    "OperatingHours",
    "Slot",
    "SlotGenerator",
    "SlotUnavailable",
    "SourceError",
    "TimeInterval",
    "TimeParseError",
    "ValidationError",
    "WallClockTime",
    "Weekday",
    "filter_available",
    "has_conflict",
    "hours_for",
    "validate",
    "validate_week",
]
