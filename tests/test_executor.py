import threading
import time

import pytest

from shellrun import executor
from shellrun.constants import ErrorKind
from shellrun.errors import CommandFailed, CommandTimeout, LaunchFailed, OutputTooLarge
from shellrun.executor import CommandRunner
from shellrun.models import CommandSpec


def _runner(**kwargs):
    kwargs.setdefault("warn", lambda *a: None)
    return CommandRunner(**kwargs)


def test_success_both_modes():
    runner = _runner()
    assert runner.execute("echo hello", 5) == "hello"
    assert runner.execute_strict("echo hello", 5) == "hello"


def test_echo_n_round_trip():
    assert executor.execute('echo -n "abc"', 5) == "abc"


def test_trailing_whitespace_trimmed():
    runner = _runner()
    assert runner.execute(r"printf 'hello\n\t \r\n'", 5) == "hello"
    assert runner.execute(r"printf '  x  \n'", 5) == "  x"


def test_stdout_and_stderr_combined():
    assert _runner().execute("echo a; echo b 1>&2; echo c", 5) == "a\nb\nc"


def test_nonzero_exit_lenient_returns_output():
    assert _runner().execute("echo out; exit 3", 5) == "out"


def test_nonzero_exit_strict_fails():
    result = _runner().run(CommandSpec("echo out; exit 3", 5, strict=True))
    assert not result.ok
    assert result.output == ""
    assert result.error.kind == ErrorKind.COMMAND_FAILED
    assert str(result.error) == "Command execution failed: exit status 3"


def test_timeout_lenient():
    start = time.monotonic()
    with pytest.raises(CommandTimeout, match="Timeout while executing a shell script."):
        _runner().execute("sleep 5", 0.2)
    assert time.monotonic() - start < 3


def test_timeout_strict_reports_command_failure():
    with pytest.raises(CommandFailed, match="signal: "):
        _runner().execute_strict("sleep 5", 0.2)


def test_timeout_kills_whole_group():
    # the backgrounded sleep holds the pipe open; only a group kill releases it
    start = time.monotonic()
    with pytest.raises(CommandTimeout):
        _runner().execute("sleep 5 & sleep 5", 0.2)
    assert time.monotonic() - start < 3


def test_output_too_large_both_modes():
    runner = _runner(max_output_bytes=2048)
    with pytest.raises(OutputTooLarge, match="exceeded limit of 2 KB"):
        runner.execute("head -c 4096 /dev/zero", 5)
    with pytest.raises(OutputTooLarge):
        runner.execute_strict("head -c 4096 /dev/zero", 5)


def test_output_limit_boundary():
    with pytest.raises(OutputTooLarge):
        _runner(max_output_bytes=4).execute("printf abcd", 5)
    assert _runner(max_output_bytes=5).execute("printf abcd", 5) == "abcd"


def test_overflow_checked_after_nonzero_exit_in_lenient_mode():
    with pytest.raises(OutputTooLarge):
        _runner(max_output_bytes=16).execute("head -c 64 /dev/zero; exit 1", 5)


def test_launch_failure_missing_shell():
    result = _runner(shell="/nonexistent/sh").run(CommandSpec("echo hi", 5))
    assert isinstance(result.error, LaunchFailed)
    assert str(result.error).startswith("Cannot execute command:")


def test_signal_failure_is_only_logged(monkeypatch):
    warnings = []

    def _refuse(pgid, *args):
        raise ProcessLookupError("no such process")

    monkeypatch.setattr(executor, "terminate_group", _refuse)
    runner = CommandRunner(warn=lambda fmt, *args: warnings.append(fmt % args))
    with pytest.raises(CommandTimeout):
        runner.execute("sleep 0.5", 0.05)
    assert len(warnings) == 1
    assert warnings[0].startswith("failed to kill [sleep 0.5]")
    assert warnings[0].endswith("(signal_failed)")


def test_concurrent_runs_are_isolated():
    runner = _runner()
    results = {}

    def _slow():
        results["slow"] = runner.run(CommandSpec("sleep 0.6; echo ok", 5))

    t = threading.Thread(target=_slow)
    t.start()
    with pytest.raises(CommandTimeout):
        runner.execute("sleep 5", 0.2)
    t.join()
    assert results["slow"].ok
    assert results["slow"].output == "ok"


def test_background_returns_promptly():
    start = time.monotonic()
    _runner().run_background("sleep 2")
    assert time.monotonic() - start < 1


def test_background_ignores_exit_status():
    executor.execute_background("exit 7")


def test_background_launch_failure(tmp_path):
    runner = _runner(cwd=tmp_path / "missing")
    with pytest.raises(LaunchFailed, match="Cannot execute command:"):
        runner.run_background("echo hi")


def test_embedded_null_byte_is_launch_failure():
    runner = _runner()
    result = runner.run(CommandSpec("echo a\x00b", 5))
    assert isinstance(result.error, LaunchFailed)
    assert str(result.error).startswith("Cannot execute command:")
    with pytest.raises(LaunchFailed, match="Cannot execute command:"):
        runner.run_background("echo a\x00b")


def test_strict_failure_disarms_timer(monkeypatch):
    kills = []
    monkeypatch.setattr(executor, "terminate_group", lambda pgid, *args: kills.append(pgid))
    with pytest.raises(CommandFailed, match="exit status 2"):
        _runner().execute_strict("exit 2", 0.3)
    time.sleep(0.6)
    assert kills == []
