"""Hand control over to the child command once the wait is over."""

from __future__ import annotations

import logging
import os
import sys
from typing import Sequence

import click

from .config import WaitConfig
from .errors import CommandError
from .probe import Outcome

logger = logging.getLogger("wait-for-it")


def exec_command(argv: Sequence[str]) -> None:
    """Replace the current process with ``argv``; arguments are passed verbatim."""

    args = list(argv)
    logger.info("Executing %s", args)
    sys.stdout.flush()
    sys.stderr.flush()
    for handler in logging.getLogger().handlers:
        handler.flush()
    try:
        os.execvp(args[0], args)
    except FileNotFoundError as exc:
        raise CommandError(f"{args[0]}: command not found", exit_code=127) from exc
    except OSError as exc:
        raise CommandError(f"{args[0]}: cannot execute: {exc.strerror or exc}", exit_code=126) from exc


def dispatch(config: WaitConfig, outcome: Outcome) -> int:
    """Run the child command if allowed and return the exit code otherwise."""

    if not config.command:
        return outcome.exit_code
    if outcome is not Outcome.SUCCESS and config.strict:
        click.echo("Strict mode: command will not be executed due to timeout.", err=True)
        return outcome.exit_code
    exec_command(config.command)
    return outcome.exit_code


__all__ = ["dispatch", "exec_command"]
