# sources/api.py
import logging
from typing import Dict, List

import requests

from .base import BaseHostSource, FetchError

logger = logging.getLogger(__name__)

class ApiHostSource(BaseHostSource):
    """Implementation of BaseHostSource for the scanner's HTTP host listing."""

    def __init__(self, config):
        self.config = config
        self.url = config.get("url", "http://localhost:5000/api/host")
        self.timeout = config.get("timeout", 5)
        self.session = requests.Session()

    def list_hosts(self) -> List[Dict]:
        """GETs the full host collection from the scanner."""
        try:
            response = self.session.get(self.url, timeout=self.timeout, headers={"Accept": "application/json"})
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as err:
            raise FetchError(f"Error fetching hosts from {self.url}: {err}") from err
        except ValueError as err:
            raise FetchError(f"Invalid JSON from {self.url}: {err}") from err

        hosts = self._check_listing(payload, self.url)
        logger.debug(f"Fetched {len(hosts)} hosts from {self.url}")
        return hosts
