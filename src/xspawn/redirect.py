"""Scoped redirection of the process's stdout descriptor."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

STDOUT_FILENO = 1


@dataclass
class RedirectionState:
    """Save-slot holding the original stdout while a redirection is active."""

    saved: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.saved is not None


def _flush_output() -> None:
    for stream in (sys.stdout, sys.__stdout__, sys.stderr, sys.__stderr__):
        if stream is not None:
            stream.flush()


def _save_and_rebind(fd: int) -> Optional[int]:
    saved = None
    try:
        saved = os.dup(STDOUT_FILENO)
        os.dup2(fd, STDOUT_FILENO)
    except OSError as err:
        # Redirection failure is not fatal: the spawn goes ahead with the
        # current stdout.
        if saved is not None:
            os.close(saved)
        logger.info("stdout redirection to fd %s failed, not redirecting: %s", fd, err)
        return None
    return saved


@contextmanager
def redirect_stdout(fd: Optional[int]) -> Iterator[RedirectionState]:
    """Rebind fd 1 to ``fd`` for the duration of the block.

    With ``fd`` None nothing happens. The original stdout is restored on
    every exit path, including exceptions raised inside the block.

    Yields:
        RedirectionState, inactive if no redirection took place
    """
    state = RedirectionState()
    if fd is None:
        yield state
        return

    _flush_output()
    state.saved = _save_and_rebind(fd)
    try:
        yield state
    finally:
        try:
            _flush_output()
        finally:
            if state.saved is not None:
                saved, state.saved = state.saved, None
                try:
                    os.dup2(saved, STDOUT_FILENO)
                finally:
                    os.close(saved)


__all__ = ["RedirectionState", "redirect_stdout"]
