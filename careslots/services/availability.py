"""
Application service answering availability queries for providers.

The service loads operating hours and bookings through two source protocols
and delegates the actual computation to the domain-level ``SlotGenerator``
and ``ConflictResolver``. It keeps no state between calls, so concurrent
queries never share anything mutable.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Protocol

from pendulum import DateTime

from ..domain.conflict_resolver import ConflictResolver
from ..domain.exceptions import SlotUnavailable
from ..domain.models import BookedInterval, Slot, TimeInterval, WallClockTime, Weekday, to_instant, wall_clock
from ..domain.operating_hours import OperatingHours, full_week, hours_for, validate_week
from ..domain.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)


class OperatingHoursSource(Protocol):
    """Protocol describing where a provider's weekly hours come from."""

    def get_operating_hours(self, provider_id: str) -> List[OperatingHours]:
        """Return the configured entries; an empty list means nothing is set up."""


class BookingSource(Protocol):
    """Protocol describing where a provider's existing appointments come from."""

    def get_bookings(
        self,
        provider_id: str,
        start: DateTime,
        end: DateTime,
    ) -> List[BookedInterval]:
        """Return appointments overlapping [start, end)."""


def day_window(day: date) -> TimeInterval:
    """The whole calendar day as a half-open interval."""
    start = to_instant(day, WallClockTime(0, 0))
    return TimeInterval(start=start, end=start.add(days=1))


class AvailabilityService:
    """
    Orchestrates operating-hours lookup, slot generation and conflict checks.

    Dependency inversion toward the two source protocols makes it easy to
    plug in the REST client, the JSON store or a stub in tests.
    """

    def __init__(
        self,
        hours_source: OperatingHoursSource,
        booking_source: BookingSource,
    ) -> None:
        self._hours_source = hours_source
        self._booking_source = booking_source

    def get_operating_hours(self, provider_id: str) -> List[OperatingHours]:
        """Return the provider's seven weekday entries, closed where missing."""
        return full_week(self._hours_source.get_operating_hours(provider_id))

    def validate_operating_hours(self, provider_id: str) -> None:
        """
        Run the weekly checks on the entries exactly as the source returns them.

        Raises:
            ValidationError: If the configuration is rejected
        """
        validate_week(self._hours_source.get_operating_hours(provider_id))

    def get_available_slots(
        self,
        provider_id: str,
        day: date,
        duration_minutes: int,
        *,
        not_before: Optional[DateTime] = None,
    ) -> List[Slot]:
        """
        Compute the bookable slots of a provider on one date.

        Args:
            provider_id: Provider to query
            day: Calendar date
            duration_minutes: Length of each slot
            not_before: Optional "now" instant; earlier slots are left out

        Returns:
            Chronological list of free, non-overlapping slots
        """
        hours = self._hours_source.get_operating_hours(provider_id)
        candidates = SlotGenerator(hours).generate(day, duration_minutes, not_before=not_before)

        if candidates.hours.is_closed:
            logger.debug("Provider %s is closed on %s", provider_id, day)
            return []

        window = day_window(day)
        booked = self._booking_source.get_bookings(provider_id, window.start, window.end)
        available = ConflictResolver(booked).filter_available(candidates)

        logger.debug(
            "Provider %s on %s: %d free slot(s) of %d minutes against %d booking(s)",
            provider_id,
            day,
            len(available),
            duration_minutes,
            len(booked),
        )
        return available

    def is_bookable(self, provider_id: str, candidate: TimeInterval) -> bool:
        """
        Check whether an interval can be booked right now.

        The candidate must sit inside the open period of its weekday and must
        not overlap any occupying appointment.
        """
        if not candidate.is_single_day():
            logger.debug("Rejecting %s for provider %s: spans more than one day", candidate, provider_id)
            return False

        hours = hours_for(
            self._hours_source.get_operating_hours(provider_id),
            Weekday.of(candidate.date),
        )
        open_period = hours.open_interval(candidate.date)

        if open_period is None or not open_period.contains(candidate):
            logger.debug("Rejecting %s for provider %s: outside operating hours", candidate, provider_id)
            return False

        booked = self._booking_source.get_bookings(provider_id, candidate.start, candidate.end)

        if ConflictResolver(booked).has_conflict(candidate):
            logger.debug("Rejecting %s for provider %s: overlaps a booking", candidate, provider_id)
            return False

        return True

    def ensure_bookable(self, provider_id: str, candidate: TimeInterval) -> None:
        """
        Gate for booking creation.

        Must be called by the booking store while it holds its lock on the
        provider, immediately before inserting the appointment.

        Raises:
            SlotUnavailable: If the interval cannot be booked
        """
        if not self.is_bookable(provider_id, candidate):
            logger.warning("Slot %s for provider %s is no longer available", candidate, provider_id)
            raise SlotUnavailable(provider_id, candidate)

    def get_free_periods(self, provider_id: str, day: date) -> List[TimeInterval]:
        """Return the maximal free ranges inside the provider's open period on a date."""
        hours = hours_for(
            self._hours_source.get_operating_hours(provider_id),
            Weekday.of(day),
        )
        open_period = hours.open_interval(day)

        if open_period is None:
            return []

        booked = self._booking_source.get_bookings(provider_id, open_period.start, open_period.end)
        return ConflictResolver(booked).free_periods(open_period)

    def is_open_at(self, provider_id: str, instant: datetime) -> bool:
        """
        Check whether the provider is open at an instant ("Open now").

        The open period is half-open, so the provider counts as closed from
        the closing minute on.
        """
        moment = wall_clock(instant)
        hours = hours_for(
            self._hours_source.get_operating_hours(provider_id),
            Weekday.of(moment.date()),
        )
        open_period = hours.open_interval(moment.date())

        return open_period is not None and open_period.start <= moment < open_period.end

    def is_date_selectable(self, provider_id: str, day: date, today: date) -> bool:
        """
        Check whether a date may be picked in the booking calendar.

        Past dates and weekdays the provider is closed on are not selectable.
        """
        if day < today:
            return False

        hours = hours_for(self._hours_source.get_operating_hours(provider_id), Weekday.of(day))
        return not hours.is_closed
