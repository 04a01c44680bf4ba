"""Command line parsing for wait-for-it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from .errors import UsageError, ValidationError

DEFAULT_TIMEOUT = 15
MAX_PORT = 65535

_VALUE_OPTIONS = {
    "-h": "host",
    "--host": "host",
    "-p": "port",
    "--port": "port",
    "-t": "timeout",
    "--timeout": "timeout",
}
_SWITCHES = {
    "-s": "strict",
    "--strict": "strict",
    "-q": "quiet",
    "--quiet": "quiet",
}
_VERBOSE = {"-v", "--verbose"}


@dataclass(frozen=True)
class WaitConfig:
    """Target address, polling options and the command to run afterwards."""

    host: str
    port: int
    timeout: int = DEFAULT_TIMEOUT
    quiet: bool = False
    strict: bool = False
    verbose: int = 0
    command: Tuple[str, ...] = ()

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


def is_non_negative_integer(value: str) -> bool:
    """Return True for a non-empty string of ASCII digits."""

    return value.isascii() and value.isdigit()


def validate_timeout(value: str) -> int:
    """Parse a timeout in seconds, rejecting anything but ASCII digits."""

    if not is_non_negative_integer(value):
        raise ValidationError(f"timeout must be a non-negative integer: got '{value}'")
    return int(value)


def validate_port(value: str) -> int:
    """Parse a port number: ASCII digits no greater than 65535."""

    if not is_non_negative_integer(value):
        raise ValidationError(f"port must be a number: got '{value}'")
    port = int(value)
    if port > MAX_PORT:
        raise ValidationError(f"port must be between 0 and {MAX_PORT}: got '{value}'")
    return port


def parse_args(argv: Sequence[str]) -> WaitConfig:
    """Build a :class:`WaitConfig` from raw command line tokens.

    Tokens are read left to right. Option parsing ends at ``--`` or at the
    first token that is neither an option nor a ``HOST:PORT`` pair; that token
    and everything after it form the child command.
    """

    args = list(argv)
    values: Dict[str, str] = {}
    switches = {"strict": False, "quiet": False}
    verbose = 0
    command: Tuple[str, ...] = ()

    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "--":
            command = tuple(args[index + 1 :])
            break
        if arg in _VALUE_OPTIONS:
            if index + 1 >= len(args):
                raise UsageError(f"option {arg} requires a value")
            values[_VALUE_OPTIONS[arg]] = args[index + 1]
            index += 2
            continue
        name, sep, value = arg.partition("=")
        if sep and name.startswith("--") and name in _VALUE_OPTIONS:
            values[_VALUE_OPTIONS[name]] = value
        elif arg in _SWITCHES:
            switches[_SWITCHES[arg]] = True
        elif arg in _VERBOSE:
            verbose += 1
        elif arg.startswith("-"):
            raise UsageError(f"Unknown argument: {arg}")
        elif ":" in arg:
            values["host"], _, values["port"] = arg.partition(":")
        else:
            command = tuple(args[index:])
            break
        index += 1

    host = values.get("host", "")
    port = values.get("port", "")
    if not host or not port:
        raise UsageError("you need to provide a host and port to test.")

    timeout = validate_timeout(values.get("timeout", str(DEFAULT_TIMEOUT)))
    return WaitConfig(
        host=host,
        port=validate_port(port),
        timeout=timeout,
        quiet=switches["quiet"],
        strict=switches["strict"],
        verbose=verbose,
        command=command,
    )


__all__ = [
    "DEFAULT_TIMEOUT",
    "WaitConfig",
    "is_non_negative_integer",
    "parse_args",
    "validate_port",
    "validate_timeout",
]
