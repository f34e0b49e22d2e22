# data.py
import json
import logging
from typing import Any, Iterable, List, Dict
from pathlib import Path

logger = logging.getLogger(__name__)

def load_host_data(json_file: Path) -> Any:
    """Loads a host listing from a JSON file.

    Args:
        json_file (Path): Path to the JSON file.

    Returns:
        The decoded JSON document; callers check it is a list of hosts.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with json_file.open("r", encoding="utf-8") as file:
        return json.load(file)

def build_dashboard_view(hosts: Iterable, stats) -> Dict[str, Any]:
    """Builds the JSON document the presentation layer renders."""
    return {
        "hosts": [host.to_dict() for host in hosts],
        "stats": stats.to_dict(),
    }

def save_dashboard_view(hosts: List, stats, json_file: Path) -> bool:
    """Saves the current host list and statistics to a JSON file.

    The file is written to a temporary sibling first and then renamed over
    the target, so readers never see a half-written view.

    Args:
        hosts (List): HostRecord objects in display order.
        stats: The DashboardStats for those hosts.
        json_file (Path): Path to the JSON file.

    Returns:
        bool: True if the file was written.
    """
    tmp_file = json_file.with_name(json_file.name + ".tmp")
    try:
        with tmp_file.open("w", encoding="utf-8") as file:
            json.dump(build_dashboard_view(hosts, stats), file, indent=4, default=str)
        tmp_file.replace(json_file)
        return True
    except OSError as err:
        logger.error("File system error while saving dashboard view: %s", err)
    except (TypeError, ValueError) as err:
        logger.error("Could not serialize dashboard view: %s", err)
        tmp_file.unlink(missing_ok=True)
    return False
