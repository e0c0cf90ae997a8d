"""
Domain-specific exception hierarchy for appointment availability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TimeInterval


class CareslotsError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeValue(CareslotsError, ValueError):
    """Raised when a wall-clock time is constructed out of range."""


class InvalidInterval(CareslotsError, ValueError):
    """Raised when an interval does not end strictly after it starts."""


class TimeParseError(CareslotsError, ValueError):
    """Raised when an upstream time or datetime string cannot be parsed."""


class ValidationError(CareslotsError, ValueError):
    """Raised when an operating-hours configuration is inconsistent."""


class SourceError(CareslotsError):
    """Raised when provider data cannot be fetched from an external store."""


class SlotUnavailable(CareslotsError):
    """
    Raised at booking time when the requested interval can no longer be booked.

    This is the expected outcome of a stale read: the client showed the slot
    as free but another booking landed first.
    """

    def __init__(self, provider_id: str, interval: "TimeInterval") -> None:
        self.provider_id = provider_id
        self.interval = interval
        super().__init__(
            f"The requested time {interval} is no longer available for provider "
            f"{provider_id}. Please refresh the available slots and try again."
        )
