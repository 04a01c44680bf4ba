"""Errors reported by the wait-for-it command line."""

from __future__ import annotations

from typing import IO, Any, Optional

import click


class UsageError(click.UsageError):
    """Missing or malformed arguments; prints the command help."""

    exit_code = 1

    def show(self, file: Optional[IO[Any]] = None) -> None:
        if file is None:
            file = click.get_text_stream("stderr")
        if self.ctx is not None:
            click.echo(self.ctx.get_help(), file=file)
            click.echo(file=file)
        click.echo(f"Error: {self.format_message()}", file=file)


class ValidationError(click.ClickException):
    """A port or timeout value that is not a number."""

    exit_code = 2


class ProbeUnavailableError(click.ClickException):
    """The runtime cannot open TCP sockets."""

    exit_code = 2


class CommandError(click.ClickException):
    """The child command could not be executed."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code
