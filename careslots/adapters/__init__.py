"""
Adapters layer - External provider and booking data sources.
"""

from .api_client import ApiClient
from .json_store import JsonProviderStore

__all__ = ["ApiClient", "JsonProviderStore"]
