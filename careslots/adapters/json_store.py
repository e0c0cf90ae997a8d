"""
File-backed provider store for running without the booking API.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from pendulum import DateTime

from ..domain.exceptions import SourceError
from ..domain.models import BookedInterval, TimeInterval
from ..domain.operating_hours import OperatingHours
from .records import parse_bookings, parse_operating_hours

logger = logging.getLogger(__name__)


class JsonProviderStore:
    """
    Serves operating hours and appointments from a JSON document.

    Expected layout::

        {
          "providers": {
            "42": {
              "operating_hours": [{"day_of_week": 1, "start_time": "09:00", ...}],
              "appointments": [{"start_time": "2024-11-25T10:00:00", ...}]
            }
          }
        }

    The store implements both source protocols of the availability service.
    Records are parsed on every call, so the store holds no derived state.
    """

    def __init__(self, data: Mapping[str, Any]):
        providers = data.get("providers", {}) if isinstance(data, Mapping) else None
        if not isinstance(providers, Mapping):
            raise SourceError("Provider data must contain a 'providers' mapping")
        self._providers: Dict[str, Mapping[str, Any]] = {
            str(key): value for key, value in providers.items()
        }

    @classmethod
    def from_file(cls, data_file: Path) -> "JsonProviderStore":
        """
        Load provider data from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            SourceError: If the file is not valid JSON
        """
        if not data_file.exists():
            raise FileNotFoundError(f"Provider data file not found: {data_file}")

        try:
            with open(data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise SourceError(f"Invalid JSON in {data_file}: {exc}") from exc

        logger.debug("Loaded provider data from %s", data_file)
        return cls(data)

    def provider_ids(self) -> List[str]:
        return sorted(self._providers)

    def _provider(self, provider_id: str) -> Mapping[str, Any]:
        provider = self._providers.get(str(provider_id))
        if provider is None:
            logger.debug("No data for provider %s, treating as unconfigured", provider_id)
            return {}
        return provider

    def get_operating_hours(self, provider_id: str) -> List[OperatingHours]:
        records = self._provider(provider_id).get("operating_hours") or []
        return parse_operating_hours(records)

    def get_bookings(
        self,
        provider_id: str,
        start: DateTime,
        end: DateTime,
    ) -> List[BookedInterval]:
        """Return occupying appointments that overlap [start, end)."""
        records = self._provider(provider_id).get("appointments") or []
        window = TimeInterval(start=start, end=end)
        return [
            booking for booking in parse_bookings(records)
            if booking.interval.overlaps(window)
        ]
