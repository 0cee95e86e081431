from __future__ import annotations

import socket
import subprocess

import pytest

from waitloop.errors import ConfigurationError
from waitloop.probes import command_succeeds, parse_address, port_open


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("localhost:5432", ("localhost", 5432)),
        (" 127.0.0.1:80 ", ("127.0.0.1", 80)),
        ("[::1]:8080", ("::1", 8080)),
    ],
)
def test_parse_address(value: str, expected: tuple[str, int]) -> None:
    assert parse_address(value) == expected


@pytest.mark.parametrize("value", ["localhost", ":80", "host:http", "host:0", "host:70000"])
def test_parse_address_rejects_invalid_values(value: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_address(value)


def test_port_open_detects_listening_socket() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        port = server.getsockname()[1]

        assert port_open("127.0.0.1", port) is True


def test_port_open_returns_false_on_connection_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(*args: object, **kwargs: object) -> socket.socket:
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(socket, "create_connection", refuse)

    assert port_open("127.0.0.1", 9) is False


def test_command_succeeds_returns_completed_process_on_zero_exit() -> None:
    calls: list[list[str]] = []

    def runner(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls.append(args)
        assert kwargs == {"capture_output": True, "text": True, "check": False}
        return subprocess.CompletedProcess(args, 0, stdout="ready\n", stderr="")

    completed = command_succeeds(("pg_isready",), runner=runner)

    assert completed is not None
    assert completed.stdout == "ready\n"
    assert calls == [["pg_isready"]]


def test_command_succeeds_returns_none_on_failure() -> None:
    def runner(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(args, 2, stdout="", stderr="no response")

    assert command_succeeds(["pg_isready"], runner=runner) is None


def test_missing_command_is_a_configuration_error() -> None:
    def runner(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        raise FileNotFoundError(args[0])

    with pytest.raises(ConfigurationError, match="Command not found: nope"):
        command_succeeds(["nope"], runner=runner)
