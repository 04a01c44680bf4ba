"""CLI entry point for wait-for-it."""

from __future__ import annotations

import logging
from typing import List

import click

from .__about__ import __version__
from .config import WaitConfig, parse_args
from .dispatch import dispatch
from .errors import UsageError
from .probe import ensure_probe_available, wait_for_port

logger = logging.getLogger("wait-for-it")

_RAW_ARGS = "wait_for_it.raw_args"


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


class RawArgsCommand(click.Command):
    """Click command that keeps its argument list untouched.

    click drops ``--`` while parsing, but it decides where the child command
    starts, so the original tokens are stashed for :func:`parse_args`.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.meta[_RAW_ARGS] = list(args)
        return super().parse_args(ctx, args)


def run(config: WaitConfig) -> int:
    """Wait for the configured address and dispatch the child command."""

    ensure_probe_available()
    logger.debug("Waiting with %s", config)
    outcome = wait_for_port(config.host, config.port, config.timeout, quiet=config.quiet)
    return dispatch(config, outcome)


@click.command(
    cls=RawArgsCommand,
    options_metavar="",
    context_settings={
        "help_option_names": ["--help"],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "allow_interspersed_args": False,
    },
)
@click.version_option(__version__, prog_name="wait-for-it")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Wait for a TCP host:port to accept connections, then run a command.

    \b
    Usage:
      wait-for-it HOST:PORT [-s] [-t TIMEOUT] [-- COMMAND ARGS]
      wait-for-it -h HOST -p PORT [-s] [-t TIMEOUT] [-- COMMAND ARGS]

    \b
      -h HOST | --host=HOST       Host or IP under test
      -p PORT | --port=PORT       TCP port under test
                                  Alternatively, specify host and port as HOST:PORT
      -s | --strict               Only execute COMMAND if the test succeeds
      -q | --quiet                Don't output any status messages
      -t TIMEOUT | --timeout=TIMEOUT
                                  Timeout in seconds, zero for no timeout (default 15)
      -v | --verbose              Log diagnostics, repeat for debug output
      -- COMMAND ARGS             Execute COMMAND with ARGS after the test finishes
    """

    try:
        config = parse_args(ctx.meta.get(_RAW_ARGS, ctx.args))
    except UsageError as exc:
        exc.ctx = ctx
        raise
    _configure_logging(config.verbose)
    ctx.exit(run(config))


__all__ = ["cli", "run", "__version__"]
