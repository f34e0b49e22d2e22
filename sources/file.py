# sources/file.py
import logging
from pathlib import Path
from typing import Dict, List

from data import load_host_data
from .base import BaseHostSource, FetchError

logger = logging.getLogger(__name__)

class FileHostSource(BaseHostSource):
    """Reads the host listing from a JSON file, e.g. one the scanner dumps periodically."""

    def __init__(self, config):
        self.config = config
        self.path = Path(config.get("path", "hosts.json"))

    def list_hosts(self) -> List[Dict]:
        try:
            payload = load_host_data(self.path)
        except (OSError, ValueError) as err:
            raise FetchError(f"Error reading hosts from {self.path}: {err}") from err
        hosts = self._check_listing(payload, str(self.path))
        logger.debug("Read %d hosts from %s", len(hosts), self.path)
        return hosts
