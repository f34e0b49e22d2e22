# dashboard.py
import argparse
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from dynaconf import Dynaconf

from data import save_dashboard_view
from host import HostRecord, MalformedRecordError, WIRE_KEYS
from sources import get_source, BaseHostSource, FetchError
from stats import DashboardStats, compute_stats
from utils import first_present

# Load settings
config = Dynaconf(
    settings_files=['config/settings.toml'],
    envvar_prefix="HOSTDASH",
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 1000

class DashboardView(NamedTuple):
    """A consistent pair of host list and the statistics computed from it."""
    hosts: Tuple[HostRecord, ...]
    stats: DashboardStats

@dataclass
class MergeResult:
    """What one snapshot did to the canonical host list."""
    added: List[Any] = field(default_factory=list)
    updated: List[Any] = field(default_factory=list)
    unchanged: List[Any] = field(default_factory=list)
    pruned: List[Any] = field(default_factory=list)
    skipped: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.pruned)

class DashboardEngine:
    """Owns the canonical host list and merges host listings into it.

    Hosts are kept in order of first appearance. A host seen again is replaced
    in place by its newest record. Hosts missing from a later listing are kept
    as last seen unless prune_missing is set.
    """

    def __init__(self, prune_missing: bool = False):
        self.prune_missing = prune_missing
        self._lock = threading.Lock()
        self._index: Dict[Any, int] = {}
        # Replaced in a single assignment so readers on other threads always
        # see hosts and stats that belong together.
        self._view = DashboardView(hosts=(), stats=compute_stats(()))

    @property
    def hosts(self) -> List[HostRecord]:
        return list(self._view.hosts)

    @property
    def stats(self) -> DashboardStats:
        return self._view.stats

    def view(self) -> DashboardView:
        return self._view

    def get_host(self, host_id) -> Optional[HostRecord]:
        for host in self._view.hosts:
            if host.id == host_id:
                return host
        return None

    def apply_snapshot(self, snapshot: Iterable) -> MergeResult:
        """Merges one complete host listing into the canonical list.

        Args:
            snapshot: Host entries as dictionaries from a source, or HostRecord objects.

        Returns:
            MergeResult: Ids added, updated, unchanged and pruned, plus the
            position and reason of every entry that was skipped.
        """
        with self._lock:
            hosts = list(self._view.hosts)
            index = dict(self._index)
            result = MergeResult()
            seen = set()

            for position, item in enumerate(snapshot):
                try:
                    record = _to_record(item)
                except MalformedRecordError as err:
                    logger.warning(f"Skipping host record at position {position}: {err}")
                    result.skipped.append((position, str(err)))
                    # A known host with a bad record is not "missing".
                    if isinstance(item, Mapping):
                        record_id = first_present(item, WIRE_KEYS["id"])
                        if isinstance(record_id, (str, int)):
                            seen.add(record_id)
                    continue

                seen.add(record.id)
                i = index.get(record.id)
                if i is None:
                    index[record.id] = len(hosts)
                    hosts.append(record)
                    result.added.append(record.id)
                    logger.debug(f"Added host {record.id} ({record.host or ''}) - {record.state}")
                elif hosts[i] == record:
                    result.unchanged.append(record.id)
                else:
                    if hosts[i].state != record.state:
                        logger.info(f"Host {record.id} ({record.host or ''}) changed state: {hosts[i].state} -> {record.state}")
                    hosts[i] = record
                    result.updated.append(record.id)

            if self.prune_missing:
                result.pruned = [host.id for host in hosts if host.id not in seen]
                if result.pruned:
                    hosts = [host for host in hosts if host.id in seen]
                    index = {host.id: i for i, host in enumerate(hosts)}
                    logger.info(f"Pruned {len(result.pruned)} hosts missing from the latest listing")

            self._index = index
            self._view = DashboardView(hosts=tuple(hosts), stats=compute_stats(hosts))
            return result

    def poll_once(self, source: BaseHostSource) -> Optional[MergeResult]:
        """Runs one poll cycle: fetch, merge, recompute.

        Returns:
            The MergeResult, or None if the source failed and nothing changed.
        """
        try:
            snapshot = source.list_hosts()
        except FetchError as err:
            logger.warning(f"Poll failed, keeping previous view: {err}")
            return None

        result = self.apply_snapshot(snapshot)
        stats = self.stats
        logger.debug(
            f"Poll merged: {len(result.added)} added, {len(result.updated)} updated, "
            f"{len(result.skipped)} skipped; {stats.scanned_count}/{stats.host_count} scanned, "
            f"{stats.state_counts.get('vulnerable', 0)} vulnerable"
        )
        return result

    def run(self, source: BaseHostSource, interval: float = DEFAULT_POLL_INTERVAL_MS / 1000,
            stop_event: Optional[threading.Event] = None,
            on_update: Optional[Callable[["DashboardEngine"], None]] = None,
            max_cycles: Optional[int] = None) -> int:
        """Polls source until stop_event is set or max_cycles cycles have run.

        The wait for the next cycle only starts once the previous cycle is
        finished, so a slow fetch delays polls instead of overlapping them.
        on_update is called after every successful cycle.

        Returns:
            int: The number of cycles run.
        """
        if stop_event is None:
            stop_event = threading.Event()
        cycles = 0
        while not stop_event.is_set():
            try:
                result = self.poll_once(source)
                if result is not None and on_update:
                    on_update(self)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Unexpected error during poll cycle")
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            stop_event.wait(interval)
        return cycles

def _to_record(item) -> HostRecord:
    if isinstance(item, HostRecord):
        return item.normalized()
    return HostRecord.from_dict(item)

def view_writer(output_file: Path) -> Callable[[DashboardEngine], None]:
    """Returns an on_update callback that writes the engine's view to output_file."""
    def write(engine: DashboardEngine) -> None:
        view = engine.view()
        save_dashboard_view(list(view.hosts), view.stats, output_file)
    return write

def main(argv=None):
    parser = argparse.ArgumentParser(description="Live host status dashboard")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--once", action="store_true", help="Poll a single time and exit")
    parser.add_argument("--interval-ms", type=int, help="Poll interval in milliseconds")
    parser.add_argument("--output", type=Path, help="Write the dashboard view to this JSON file after each poll")
    parser.add_argument("--prune-missing", action="store_true",
                        help="Drop hosts that disappear from the listing instead of keeping them")
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    general = config.get("general", {})
    interval_ms = args.interval_ms if args.interval_ms is not None else general.get("poll_interval_ms", DEFAULT_POLL_INTERVAL_MS)
    output_file = args.output or (Path(general["output_file"]) if general.get("output_file") else None)
    engine = DashboardEngine(prune_missing=args.prune_missing or bool(general.get("prune_missing", False)))
    source = get_source(config)

    logger.info(f"Polling {type(source).__name__} every {interval_ms} ms")
    stop_event = threading.Event()
    try:
        engine.run(
            source,
            interval=interval_ms / 1000,
            stop_event=stop_event,
            on_update=view_writer(output_file) if output_file else None,
            max_cycles=1 if args.once else None,
        )
    except KeyboardInterrupt:
        stop_event.set()
        logger.info("Stopped")

    stats = engine.stats
    logger.info(f"{stats.host_count} hosts, {stats.scanned_count} scanned, states: {stats.state_counts}")

if __name__ == "__main__":
    main()
