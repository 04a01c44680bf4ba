import importlib

import pytest

from wait_for_it.config import WaitConfig
from wait_for_it.dispatch import dispatch, exec_command
from wait_for_it.errors import CommandError
from wait_for_it.probe import Outcome

dispatch_module = importlib.import_module("wait_for_it.dispatch")


@pytest.fixture
def exec_calls(monkeypatch):
    calls: list[tuple[str, list[str]]] = []

    def _fake_execvp(file, args):
        calls.append((file, list(args)))

    monkeypatch.setattr(dispatch_module.os, "execvp", _fake_execvp)
    return calls


def _config(*command: str, strict: bool = False) -> WaitConfig:
    return WaitConfig(host="localhost", port=80, strict=strict, command=command)


@pytest.mark.parametrize("outcome", list(Outcome))
def test_without_command_exit_code_follows_outcome(outcome, exec_calls):
    assert dispatch(_config(), outcome) == outcome.exit_code
    assert exec_calls == []


def test_success_execs_command_verbatim(exec_calls):
    dispatch(_config("sh", "-c", 'echo "$1"', "--", "a b"), Outcome.SUCCESS)
    assert exec_calls == [("sh", ["sh", "-c", 'echo "$1"', "--", "a b"])]


def test_timeout_still_execs_without_strict(exec_calls):
    dispatch(_config("echo", "hi"), Outcome.TIMEOUT)
    assert exec_calls == [("echo", ["echo", "hi"])]


def test_strict_timeout_skips_command(exec_calls, capsys):
    assert dispatch(_config("echo", "hi", strict=True), Outcome.TIMEOUT) == 1
    assert exec_calls == []
    assert "Strict mode: command will not be executed due to timeout." in capsys.readouterr().err


def test_strict_success_execs_command(exec_calls):
    dispatch(_config("echo", "hi", strict=True), Outcome.SUCCESS)
    assert exec_calls == [("echo", ["echo", "hi"])]


def test_missing_command_exits_127(monkeypatch):
    def _not_found(file, args):
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(dispatch_module.os, "execvp", _not_found)

    with pytest.raises(CommandError, match="no-such-tool: command not found") as excinfo:
        exec_command(["no-such-tool"])
    assert excinfo.value.exit_code == 127


def test_unexecutable_command_exits_126(monkeypatch):
    def _denied(file, args):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(dispatch_module.os, "execvp", _denied)

    with pytest.raises(CommandError, match="cannot execute: Permission denied") as excinfo:
        exec_command(["./script.sh"])
    assert excinfo.value.exit_code == 126
