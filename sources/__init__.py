# sources/__init__.py
from dynaconf import Dynaconf

from .base import BaseHostSource, FetchError
from .api import ApiHostSource  # Import all concrete implementations
from .file import FileHostSource
from .ssh import SshHostSource

def get_source(config: Dynaconf) -> BaseHostSource:
    """Source factory: returns an instance of the configured host source class."""

    source_type = config.get("general", {}).get("source_type", "api")

    if source_type == "api":
        return ApiHostSource(config.get("api_source", {}))
    elif source_type == "file":
        return FileHostSource(config.get("file_source", {}))
    elif source_type == "ssh":
        return SshHostSource(config.get("ssh_source", {}))
    else:
        raise ValueError(f"Unsupported source type: {source_type}")
