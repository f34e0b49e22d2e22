# utils.py
import logging
from typing import Any, Iterable, Mapping, Optional

import paramiko

logger = logging.getLogger(__name__)

def first_present(data: Mapping[str, Any], keys: Iterable[str], default: Any = None) -> Any:
    """Returns the value of the first key in keys that data contains."""
    for key in keys:
        if key in data:
            return data[key]
    return default

class SSHClient:
    """A utility class for handling SSH connections and command execution."""

    def __init__(self, hostname: str, username: str, password: Optional[str] = None,
                  port: int = 22, timeout: int = 10):
        self.hostname = hostname
        self.username = username
        self.password = password
        self.port = port
        self.timeout = timeout
        self.client: Optional[paramiko.SSHClient] = None

    def connect(self) -> bool:
        """Connects to the SSH server, using a password if set, else keys and agent."""
        self.client = paramiko.SSHClient()
        self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            if self.password:
                self.client.connect(hostname=self.hostname, port=self.port, username=self.username,
                                        password=self.password, timeout=self.timeout)
            else:
                # Non-interactive: runs inside the polling loop, so never prompt.
                self.client.connect(hostname=self.hostname, port=self.port, username=self.username,
                                        timeout=self.timeout, look_for_keys=True, allow_agent=True)
            return True
        except (paramiko.SSHException, OSError) as e:
            logger.error(f"Error connecting to {self.hostname}: {e}")
            self.close()
            return False

    def execute_command(self, command: str) -> str:
        """Executes a command on the connected SSH server and returns its stdout."""
        if not self.client:
            raise RuntimeError("SSH client not connected. Call connect() first.")
        try:
            stdin, stdout, stderr = self.client.exec_command(command, timeout=self.timeout)
            output = stdout.read().decode()
            error = stderr.read().decode().strip()
            if error:
                logger.warning(f"Command '{command}' returned error: {error}")
            return output
        except UnicodeDecodeError as e:
            logger.error(f"Command '{command}' produced output that is not UTF-8: {e}")
            return ""
        except (paramiko.SSHException, OSError) as e:
            logger.error(f"Error executing command '{command}': {e}")
            return ""

    def close(self):
        """Closes the SSH connection."""
        if self.client:
            self.client.close()
            self.client = None
