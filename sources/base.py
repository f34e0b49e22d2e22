# sources/base.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class FetchError(Exception):
    """Raised when a source cannot produce a host listing this cycle."""


class BaseHostSource(ABC):
    """Abstract base class for anything that can list monitored hosts."""

    @abstractmethod
    def list_hosts(self) -> List[Dict]:
        """Retrieves the current, complete host listing.

        Returns:
            A list of dictionaries, each one host as the scanner reports it.
            The dictionaries should have at least the keys 'Uuid' (or 'id'),
            'State' and 'LastChecked'. Records are not validated here.

        Raises:
            FetchError: If the listing could not be retrieved or is not a list.
        """

    @staticmethod
    def _check_listing(payload: Any, origin: str) -> List[Dict]:
        if not isinstance(payload, list):
            raise FetchError(f"Expected a JSON array of hosts from {origin}, got {type(payload).__name__}")
        return payload
