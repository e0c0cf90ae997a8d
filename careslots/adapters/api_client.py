"""
REST client for the booking API's provider schedule and appointment data.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pendulum import DateTime

from ..domain.exceptions import SourceError
from ..domain.models import BookedInterval
from ..domain.operating_hours import OperatingHours
from .records import parse_bookings, parse_operating_hours

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Client for the booking API.

    Uses ``/providers/{id}/schedule-info`` for operating hours and
    ``/providers/{id}/appointments`` for existing bookings.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 10,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Root URL of the booking API
            token: Optional bearer token
            timeout_seconds: Per-request timeout
            session: Optional requests session to reuse
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.headers = {"Accept": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s %s", url, params or {})

        try:
            response = self.session.get(
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise SourceError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise SourceError(f"Response from {url} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SourceError(f"Response from {url} must be a JSON object")

        return data

    def get_operating_hours(self, provider_id: str) -> List[OperatingHours]:
        """
        Fetch a provider's weekly operating hours.

        Response format:
        {
            "operating_hours": [
                {"day_of_week": 1, "day_name": "Monday",
                 "start_time": "09:00", "end_time": "17:00", "is_closed": false}
            ]
        }
        """
        data = self._get(f"/providers/{provider_id}/schedule-info")
        return parse_operating_hours(data.get("operating_hours") or [])

    def get_bookings(
        self,
        provider_id: str,
        start: DateTime,
        end: DateTime,
    ) -> List[BookedInterval]:
        """
        Fetch occupying appointments of a provider overlapping [start, end).

        Response format:
        {
            "appointments": [
                {"start_time": "2024-11-25T10:00:00",
                 "end_time": "2024-11-25T11:00:00", "status": "confirmed"}
            ]
        }
        """
        data = self._get(
            f"/providers/{provider_id}/appointments",
            params={"start": start.isoformat(), "end": end.isoformat()},
        )
        return parse_bookings(data.get("appointments") or [])
