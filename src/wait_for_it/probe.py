"""Poll a TCP address until it accepts connections."""

from __future__ import annotations

import logging
import socket
import time
from enum import Enum
from typing import Callable

import click
from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    stop_never,
    wait_fixed,
)

from .errors import ProbeUnavailableError

logger = logging.getLogger("wait-for-it")

POLL_INTERVAL = 1
CONNECT_TIMEOUT = 5.0


class Outcome(Enum):
    """Result of waiting for an address."""

    SUCCESS = 0
    TIMEOUT = 1

    @property
    def exit_code(self) -> int:
        return self.value


def ensure_probe_available() -> None:
    """Fail fast when the runtime cannot open TCP sockets."""

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        raise ProbeUnavailableError(
            f"TCP sockets are required but cannot be created here: {exc}"
        ) from exc
    sock.close()


def check_port(host: str, port: int, timeout: float = CONNECT_TIMEOUT) -> bool:
    """Return True if ``host:port`` completes a TCP handshake."""

    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except (OSError, UnicodeError) as exc:
        logger.debug("Connection to %s:%s failed: %s", host, port, exc)
        return False


def _status(message: str, quiet: bool) -> None:
    if not quiet:
        click.echo(message, err=True)


def wait_for_port(
    host: str,
    port: int,
    timeout: int,
    *,
    quiet: bool = False,
    sleep: Callable[[float], None] = time.sleep,
    connect: Callable[[str, int], bool] = check_port,
) -> Outcome:
    """Poll ``host:port`` once per second until it answers or ``timeout`` runs out.

    ``timeout`` counts attempts, each followed by a one second pause when it
    fails, so a dead address is given up on after ``timeout`` seconds; ``0``
    polls forever.
    """

    address = f"{host}:{port}"
    if timeout:
        _status(f"Waiting for {address}...", quiet)
    else:
        _status(f"Waiting for {address} without a timeout...", quiet)

    attempts = 0

    def _attempt() -> bool:
        nonlocal attempts
        attempts += 1
        return connect(host, port)

    def _give_up(retry_state: RetryCallState) -> bool:
        sleep(POLL_INTERVAL)
        return False

    retrying = Retrying(
        stop=stop_after_attempt(timeout) if timeout else stop_never,
        wait=wait_fixed(POLL_INTERVAL),
        retry=retry_if_result(lambda available: not available),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        retry_error_callback=_give_up,
        sleep=sleep,
    )
    if retrying(_attempt):
        _status(f"{address} is available after {attempts - 1} seconds", quiet)
        return Outcome.SUCCESS

    click.echo(f"Timeout occurred after waiting {timeout} seconds for {address}", err=True)
    return Outcome.TIMEOUT


__all__ = [
    "CONNECT_TIMEOUT",
    "Outcome",
    "POLL_INTERVAL",
    "check_port",
    "ensure_probe_available",
    "wait_for_port",
]
