"""
Service layer helpers that orchestrate sources and domain logic.
"""

from .availability import AvailabilityService, BookingSource, OperatingHoursSource

__all__ = ["AvailabilityService", "BookingSource", "OperatingHoursSource"]
