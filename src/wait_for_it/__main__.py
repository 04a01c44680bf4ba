"""Run wait-for-it as `python -m wait_for_it HOST:PORT [-- COMMAND ARGS]`."""

from __future__ import annotations

from . import cli


def main() -> None:
    cli(prog_name="wait-for-it")


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
