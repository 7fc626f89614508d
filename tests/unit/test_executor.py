"""Tests for the spawn_exec entry point (real child processes)."""

import os
import shlex
import signal
import time
from unittest.mock import patch

import pytest

from xspawn import (
    ArgumentError,
    EnvironmentBuildError,
    OptionsError,
    SpawnError,
    spawn_exec,
)

pytestmark = pytest.mark.skipif(
    not hasattr(os, "posix_spawn"), reason="requires os.posix_spawn"
)


class Unprintable:
    def __str__(self):
        raise RuntimeError("no string form")


def _write_cmd(expr, path):
    """Shell snippet writing ``expr`` (unquoted shell expression) to path."""
    return f"printf %s {expr} > {shlex.quote(str(path))}"


def test_blocking_returns_exit_code(ledger):
    assert spawn_exec(["sh", "-c", "exit 7"], ledger=ledger) == 7
    assert ledger.allocated == 3
    assert ledger.outstanding == 0


def test_zero_exit():
    assert spawn_exec(["true"]) == 0


def test_non_blocking_returns_pid_immediately():
    start = time.monotonic()
    pid = spawn_exec(["sleep", "5"], {"block": False})
    elapsed = time.monotonic() - start

    try:
        assert pid > 0
        assert elapsed < 2
        # Still running: the exec call did not wait for it
        assert os.waitpid(pid, os.WNOHANG) == (0, 0)
    finally:
        os.kill(pid, signal.SIGKILL)
        os.waitpid(pid, 0)


def test_file_overrides_target_and_keeps_argv0(tmp_path, sh):
    out = tmp_path / "argv0.txt"
    code = spawn_exec(["bar", "-c", _write_cmd('"$0"', out)], {"file": sh})

    assert code == 0
    assert out.read_text() == "bar"


def test_file_resolved_on_path(tmp_path):
    out = tmp_path / "argv0.txt"
    code = spawn_exec(["custom-name", "-c", _write_cmd('"$0"', out)], {"file": "sh"})

    assert code == 0
    assert out.read_text() == "custom-name"


def test_custom_environment_replaces_ambient(tmp_path, sh, monkeypatch, ledger):
    monkeypatch.setenv("XSPAWN_AMBIENT", "leaked")
    out = tmp_path / "env.txt"
    cmd = _write_cmd('"$FOO:${XSPAWN_AMBIENT-unset}"', out)

    code = spawn_exec(
        [sh, "-c", cmd], {"env": {"FOO": "bar baz"}, "usePath": False}, ledger=ledger
    )

    assert code == 0
    assert out.read_text() == "bar baz:unset"
    assert ledger.outstanding == 0


def test_omitted_env_inherits_ambient(tmp_path, sh, monkeypatch):
    monkeypatch.setenv("XSPAWN_AMBIENT", "inherited")
    before = dict(os.environ)
    out = tmp_path / "env.txt"

    assert spawn_exec([sh, "-c", _write_cmd('"$XSPAWN_AMBIENT"', out)]) == 0
    assert out.read_text() == "inherited"
    assert dict(os.environ) == before


def test_stdout_redirected_to_descriptor(tmp_path, stdout_identity):
    out = tmp_path / "out.txt"
    before = stdout_identity()

    with open(out, "wb") as f:
        code = spawn_exec(["sh", "-c", "echo hello"], {"stdout": f.fileno()})

    assert code == 0
    assert out.read_bytes() == b"hello\n"
    assert stdout_identity() == before


def test_stdout_accepts_file_object(tmp_path):
    out = tmp_path / "out.txt"
    with open(out, "wb") as f:
        spawn_exec(["sh", "-c", "echo via-file-object"], {"stdout": f})

    assert out.read_bytes() == b"via-file-object\n"


def test_stdout_restored_after_spawn_failure(tmp_path, stdout_identity, ledger):
    before = stdout_identity()

    with open(tmp_path / "out.txt", "wb") as f:
        with pytest.raises(SpawnError):
            spawn_exec(
                ["/nonexistent/xspawn-test"],
                {"stdout": f.fileno(), "usePath": False},
                ledger=ledger,
            )

    assert stdout_identity() == before
    assert ledger.outstanding == 0


def test_redirection_failure_still_spawns(tmp_path):
    out = tmp_path / "out.txt"
    with patch("xspawn.redirect.os.dup", side_effect=OSError(24, "EMFILE")):
        code = spawn_exec(["sh", "-c", _write_cmd("ran", out)], {"stdout": 1})

    assert code == 0
    assert out.read_text() == "ran"


def test_missing_program_raises_spawn_error(ledger):
    with pytest.raises(SpawnError, match=r"exec error \(spawn failed\)"):
        spawn_exec(
            ["/nonexistent/xspawn-test", "arg"],
            {"usePath": False, "env": {"A": "1"}, "file": "/nonexistent/xspawn-test"},
            ledger=ledger,
        )

    assert ledger.allocated == 4
    assert ledger.outstanding == 0


def test_missing_program_on_path_raises_spawn_error():
    with pytest.raises(SpawnError):
        spawn_exec(["xspawn-definitely-not-installed"])


def test_bad_argument_fails_before_spawn(ledger):
    with patch("xspawn.executor.spawn_process") as spawn:
        with pytest.raises(ArgumentError):
            spawn_exec(["echo", Unprintable()], ledger=ledger)

    spawn.assert_not_called()
    assert ledger.outstanding == 0


def test_empty_args_rejected():
    with patch("xspawn.executor.spawn_process") as spawn:
        with pytest.raises(ArgumentError, match="at least one"):
            spawn_exec([], {"file": "true"})

    spawn.assert_not_called()


def test_bad_environment_fails_before_spawn(ledger):
    with patch("xspawn.executor.spawn_process") as spawn:
        with pytest.raises(EnvironmentBuildError):
            spawn_exec(["true"], {"env": {"A": "1", "B": Unprintable()}}, ledger=ledger)

    spawn.assert_not_called()
    assert ledger.allocated == 2
    assert ledger.outstanding == 0


def test_bad_file_option_fails_before_spawn(ledger):
    with patch("xspawn.executor.spawn_process") as spawn:
        with pytest.raises(OptionsError, match="file"):
            spawn_exec(["true"], {"file": Unprintable()}, ledger=ledger)

    spawn.assert_not_called()
    assert ledger.outstanding == 0


def test_bad_options_rejected():
    with pytest.raises(OptionsError):
        spawn_exec(["true"], "block=false")
