"""Ready-made operations for common wait conditions."""

from __future__ import annotations

import logging as py_logging
import socket
import subprocess
from collections.abc import Callable, Sequence

from waitloop.errors import ConfigurationError

logger = py_logging.getLogger(__name__)

CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]


def parse_address(value: str) -> tuple[str, int]:
    host, sep, port_text = value.strip().rpartition(":")
    if not sep or not host or not port_text.isdigit():
        raise ConfigurationError(
            f"Invalid address: {value}",
            hint="Use HOST:PORT, for example localhost:5432.",
        )
    port = int(port_text)
    if not 0 < port < 65536:
        raise ConfigurationError(f"Invalid port: {port}", hint="Ports range from 1 to 65535.")
    return host.strip("[]"), port


def port_open(host: str, port: int, connect_timeout: float = 1.0) -> bool:
    try:
        with socket.create_connection((host, port), timeout=connect_timeout):
            return True
    except OSError as exc:
        logger.debug("Connection to %s:%s failed: %s", host, port, exc)
        return False


def command_succeeds(
    argv: Sequence[str],
    *,
    runner: CommandRunner = subprocess.run,
) -> subprocess.CompletedProcess[str] | None:
    try:
        completed = runner(list(argv), capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        raise ConfigurationError(
            f"Command not found: {argv[0]}",
            hint="Check the command name and PATH.",
        ) from exc
    if completed.returncode != 0:
        logger.debug(
            "Command exited returncode=%s command=%s stderr=%s",
            completed.returncode,
            list(argv),
            (completed.stderr or "").strip(),
        )
        return None
    return completed
