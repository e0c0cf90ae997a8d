"""
Booking conflict checks against a provider's existing appointments.

Only occupying appointments (pending, confirmed, completed) block time.
Cancelled and no-show appointments are ignored everywhere in this module.
"""

from typing import Iterable, List

from .models import BookedInterval, Slot, TimeInterval


def occupied_intervals(booked: Iterable[BookedInterval]) -> List[TimeInterval]:
    """Return the intervals of occupying appointments, sorted by start time."""
    return sorted(
        (entry.interval for entry in booked if entry.is_occupying),
        key=lambda interval: interval.start,
    )


class ConflictResolver:
    """
    Filters candidate slots and validates proposed bookings.

    The instance holds a snapshot of one provider's bookings; it never
    mutates them.
    """

    def __init__(self, booked: Iterable[BookedInterval]):
        self._occupied = occupied_intervals(booked)

    @property
    def occupied(self) -> List[TimeInterval]:
        return list(self._occupied)

    def has_conflict(self, candidate: TimeInterval) -> bool:
        """True if any occupying booking overlaps the candidate interval."""
        for interval in self._occupied:
            if interval.start >= candidate.end:
                # Sorted by start, nothing later can overlap
                break
            if interval.overlaps(candidate):
                return True
        return False

    def filter_available(self, slots: Iterable[Slot]) -> List[Slot]:
        """Keep the slots no occupying booking overlaps, in input order."""
        return [slot for slot in slots if not self.has_conflict(slot.interval)]

    def free_periods(self, open_period: TimeInterval) -> List[TimeInterval]:
        """
        Subtract occupied time from an open period, yielding free ranges.

        Example:
        Open: 09:00 - 17:00
        Booked: [10:00-11:00, 10:30-12:00, 14:00-15:00]
        Result: [09:00-10:00, 12:00-14:00, 15:00-17:00]
        """
        free_ranges: List[TimeInterval] = []
        current_start = open_period.start

        for busy in self._merged_occupied():
            if not busy.overlaps(open_period):
                continue

            # Clip busy range to the open period
            clipped_busy_start = max(busy.start, open_period.start)
            clipped_busy_end = min(busy.end, open_period.end)

            if current_start < clipped_busy_start:
                free_ranges.append(TimeInterval(start=current_start, end=clipped_busy_start))

            current_start = max(current_start, clipped_busy_end)

        if current_start < open_period.end:
            free_ranges.append(TimeInterval(start=current_start, end=open_period.end))

        return free_ranges

    def _merged_occupied(self) -> List[TimeInterval]:
        """
        Merge overlapping or adjacent occupied intervals.

        Example: [09:00-10:00, 10:00-11:00] -> [09:00-11:00]
        """
        if not self._occupied:
            return []

        merged: List[TimeInterval] = [self._occupied[0]]

        for current in self._occupied[1:]:
            last = merged[-1]

            if current.start <= last.end:
                merged[-1] = TimeInterval(start=last.start, end=max(last.end, current.end))
            else:
                merged.append(current)

        return merged


def filter_available(slots: Iterable[Slot], booked: Iterable[BookedInterval]) -> List[Slot]:
    """Keep slots that overlap no occupying booking, preserving order."""
    return ConflictResolver(booked).filter_available(slots)


def has_conflict(candidate: TimeInterval, booked: Iterable[BookedInterval]) -> bool:
    """
    True iff an occupying booking overlaps the candidate.

    This is the authoritative check at booking-creation time. The booking
    store must run it and the insert under one lock or transaction.
    """
    return ConflictResolver(booked).has_conflict(candidate)
