# poll.py
from dynaconf import Dynaconf

from dashboard import DashboardEngine
from sources import get_source  # Import the factory

config = Dynaconf(
    settings_files=['config/settings.toml'],
    envvar_prefix="HOSTDASH",
)
def main():
    """Simple test script to fetch the host listing once and display it."""

    source = get_source(config)  # Use the factory
    engine = DashboardEngine()
    if engine.poll_once(source) is None:
        print("Could not fetch host listing, see log for details.")
        return

    for host in engine.hosts:
        print(f"{host.state or '?':<18} {host.last_checked or 'not scanned':<32} {host.host or host.id}")

    print(engine.stats.to_dict())

if __name__ == "__main__":
    main()
