from __future__ import annotations

from unittest import mock

import paramiko
import pytest

from utils import SSHClient, first_present


def test_first_present_prefers_earlier_keys() -> None:
    data = {"Uuid": "a", "id": "b", "LastChecked": None}
    assert first_present(data, ("Uuid", "id")) == "a"
    assert first_present(data, ("id", "Uuid")) == "b"
    assert first_present(data, ("LastChecked", "lastChecked"), default="x") is None
    assert first_present(data, ("missing",), default="x") == "x"


def test_ssh_connect_failure_returns_false(monkeypatch) -> None:
    fake = mock.Mock()
    fake.connect.side_effect = paramiko.SSHException("no route")
    monkeypatch.setattr(paramiko, "SSHClient", lambda: fake)

    client = SSHClient("scanner", "ops", timeout=1)
    assert client.connect() is False
    assert client.client is None
    fake.close.assert_called_once()


def test_ssh_execute_command(monkeypatch) -> None:
    fake = mock.Mock()
    stdout, stderr = mock.Mock(), mock.Mock()
    stdout.read.return_value = b"[]\n"
    stderr.read.return_value = b""
    fake.exec_command.return_value = (mock.Mock(), stdout, stderr)
    monkeypatch.setattr(paramiko, "SSHClient", lambda: fake)

    client = SSHClient("scanner", "ops", password="secret")
    assert client.connect()
    assert fake.connect.call_args.kwargs["password"] == "secret"
    assert client.execute_command("cat hosts.json") == "[]\n"
    client.close()
    assert client.client is None


def test_ssh_execute_requires_connection() -> None:
    with pytest.raises(RuntimeError):
        SSHClient("scanner", "ops").execute_command("true")


def test_ssh_execute_invalid_utf8(monkeypatch) -> None:
    fake = mock.Mock()
    stdout, stderr = mock.Mock(), mock.Mock()
    stdout.read.return_value = b"\xff\xfe[]"
    stderr.read.return_value = b""
    fake.exec_command.return_value = (mock.Mock(), stdout, stderr)
    monkeypatch.setattr(paramiko, "SSHClient", lambda: fake)

    client = SSHClient("scanner", "ops")
    assert client.connect()
    assert client.execute_command("cat hosts.json") == ""
