"""
Candidate slot generation from operating hours.

Pure domain logic: no I/O, no clock reads. The caller supplies the date and
the slot duration.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, Optional

from pendulum import DateTime

from .exceptions import ValidationError
from .models import Slot, TimeInterval, Weekday, wall_clock
from .operating_hours import OperatingHours, hours_for

MAX_DURATION_MINUTES = 24 * 60


def _check_duration(duration_minutes: int) -> int:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise ValidationError(f"duration_minutes must be an integer, got {duration_minutes!r}")
    if not 0 < duration_minutes <= MAX_DURATION_MINUTES:
        raise ValidationError(
            f"duration_minutes must be between 1 and {MAX_DURATION_MINUTES}, got {duration_minutes}"
        )
    return duration_minutes


@dataclass(frozen=True)
class CandidateSlots:
    """
    Lazy, finite and restartable sequence of slots for one day.

    Each iteration walks the open period again from the opening time, so the
    same object can be consumed any number of times.
    """
    hours: OperatingHours
    day: date
    duration_minutes: int
    not_before: Optional[DateTime] = None

    def __post_init__(self):
        if self.not_before is not None:
            object.__setattr__(self, "not_before", wall_clock(self.not_before))

    def __iter__(self) -> Iterator[Slot]:
        open_period = self.hours.open_interval(self.day)

        if open_period is None:
            return

        current = open_period.start

        while True:
            slot_end = current.add(minutes=self.duration_minutes)
            candidate = TimeInterval(start=current, end=slot_end)

            # A partial final step is dropped, never truncated
            if not open_period.contains(candidate):
                return

            if self.not_before is None or candidate.start >= self.not_before:
                yield Slot(interval=candidate, duration_minutes=self.duration_minutes)

            current = slot_end


class SlotGenerator:
    """
    Builds candidate slots from a provider's weekly operating hours.

    Algorithm:
    1. Resolve the weekday of the requested date
    2. Look up that day's operating hours (missing days are closed)
    3. Step from opening to closing time in slot-sized increments
    4. Keep only slots that end at or before closing time
    """

    def __init__(self, operating_hours: Iterable[OperatingHours]):
        self.operating_hours = list(operating_hours)

    def generate(
        self,
        day: date,
        duration_minutes: int,
        not_before: Optional[DateTime] = None,
    ) -> CandidateSlots:
        """
        Produce the candidate slots for a date.

        Args:
            day: Calendar date to generate slots for
            duration_minutes: Length of every slot
            not_before: Optional instant; slots starting earlier are skipped

        Returns:
            Restartable iterable of Slot objects in chronological order
        """
        hours = hours_for(self.operating_hours, Weekday.of(day))
        return CandidateSlots(
            hours=hours,
            day=day,
            duration_minutes=_check_duration(duration_minutes),
            not_before=not_before,
        )
