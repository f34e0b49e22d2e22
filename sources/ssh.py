# sources/ssh.py
import json
import logging
from typing import Dict, List

from .base import BaseHostSource, FetchError
from utils import SSHClient

logger = logging.getLogger(__name__)

class SshHostSource(BaseHostSource):
    """Fetches the host listing from a remote scanner box over SSH.

    The configured command must print the JSON host array on stdout, for
    example by querying the scanner's API from the scanner host itself.
    """

    def __init__(self, config):
        self.config = config
        self.host = config.get("host")
        self.user = config.get("user")
        self.password = config.get("password")
        self.port = config.get("port", 22)
        self.command = config.get("command", "curl -s http://localhost:5000/api/host")
        self.ssh_timeout = config.get("ssh_timeout", 10)

    def list_hosts(self) -> List[Dict]:
        """Runs the listing command remotely and parses its output."""
        ssh_client = SSHClient(hostname=self.host, username=self.user, password=self.password,
                               port=self.port, timeout=self.ssh_timeout)
        if not ssh_client.connect():
            raise FetchError(f"Could not connect to {self.host}")
        try:
            output = ssh_client.execute_command(self.command)
        finally:
            ssh_client.close()

        if not output.strip():
            raise FetchError(f"No output from '{self.command}' on {self.host}")
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as err:
            raise FetchError(f"Invalid JSON from {self.host}: {err}") from err
        return self._check_listing(payload, self.host)
