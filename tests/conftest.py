from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pytest
from dynaconf import Dynaconf

from sources.base import BaseHostSource, FetchError


class StaticSource(BaseHostSource):
    """Serves queued listings in order; a queued exception is raised instead."""

    def __init__(self, *listings):
        self.listings = list(listings)
        self.calls = 0

    def list_hosts(self) -> List[Dict]:
        self.calls += 1
        listing = self.listings.pop(0) if len(self.listings) > 1 else self.listings[0]
        if isinstance(listing, Exception):
            raise listing
        return listing


def scanner_host(uuid: str, state, last_checked=None, host: str = "") -> Dict:
    return {
        "Uuid": uuid,
        "Host": host or f"{uuid}.example.com:443",
        "OriginalHost": host or f"{uuid}.example.com:443",
        "LastChecked": last_checked,
        "TimeVerified": None,
        "LastError": None,
        "State": state,
    }


@pytest.fixture()
def first_listing() -> List[Dict]:
    return [
        scanner_host("a", 0, "2014-04-09T10:00:00Z"),
        scanner_host("b", 1),
        scanner_host("c", 4, "2014-04-09T10:00:02Z"),
    ]


@pytest.fixture()
def make_source():
    return StaticSource


@pytest.fixture()
def fetch_error() -> FetchError:
    return FetchError("connection refused")


@pytest.fixture()
def settings_factory(tmp_path: Path):
    def build(text: str) -> Dynaconf:
        path = tmp_path / "settings.toml"
        path.write_text(text, encoding="utf-8")
        return Dynaconf(settings_files=[str(path)])
    return build


@pytest.fixture()
def scanner_record():
    return scanner_host
