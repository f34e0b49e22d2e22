from __future__ import annotations

import pytest

import dashboard
from dashboard import DashboardEngine


@pytest.fixture()
def captured_run(monkeypatch, make_source, first_listing):
    calls = {}

    def fake_run(self, source, **kwargs):
        calls.update(kwargs)
        return 1

    monkeypatch.setattr(DashboardEngine, "run", fake_run)
    monkeypatch.setattr(dashboard, "get_source", lambda config: make_source(first_listing))
    return calls


def test_zero_interval_is_honoured(captured_run) -> None:
    dashboard.main(["--once", "--interval-ms", "0"])
    assert captured_run["interval"] == 0
    assert captured_run["max_cycles"] == 1


def test_interval_defaults_to_one_second(captured_run) -> None:
    dashboard.main(["--once"])
    assert captured_run["interval"] == 1
