"""Pytest configuration and shared fixtures."""

import os
import shutil

import pytest
from click.testing import CliRunner

from xspawn.cli import cli
from xspawn.native import NativeLedger


@pytest.fixture(autouse=True)
def clear_xspawn_env(monkeypatch):
    """Keep a developer's XSPAWN_* settings out of the tests."""
    monkeypatch.delenv("XSPAWN_LOG_LEVEL", raising=False)


@pytest.fixture
def ledger():
    """Fresh allocation ledger, isolated from the process-wide one."""
    return NativeLedger()


@pytest.fixture
def sh():
    """Absolute path to a POSIX shell."""
    path = shutil.which("sh")
    if path is None:
        pytest.skip("sh not available")
    return path


@pytest.fixture
def stdout_identity():
    """Return a callable giving the (device, inode) currently bound to fd 1."""

    def _identity():
        st = os.fstat(1)
        return st.st_dev, st.st_ino

    return _identity


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args.

    Usage:
        result = invoke(["exec", "--", "sh", "-c", "exit 3"])
        assert result.exit_code == 3
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke
