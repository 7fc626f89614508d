"""Exec driver: create a child process from a native argv (no shell)."""

import logging
import os
from collections.abc import Mapping
from typing import List

from ..errors import SpawnError

logger = logging.getLogger(__name__)

HAVE_POSIX_SPAWN = hasattr(os, "posix_spawn")


def wait(pid: int) -> int:
    """Wait for a child and return its exit code.

    A child killed by a signal yields the negated signal number.
    """
    try:
        _, status = os.waitpid(pid, 0)
    except ChildProcessError as err:
        raise SpawnError("exec error (wait failed)") from err
    return os.waitstatus_to_exitcode(status)


def _spawn_windows(
    target: bytes, argv: List[bytes], env: Mapping, use_path: bool, block: bool
) -> int:
    mode = os.P_WAIT if block else os.P_NOWAIT
    spawn = os.spawnvpe if use_path else os.spawnve
    text_env = {os.fsdecode(k): os.fsdecode(v) for k, v in env.items()}
    return spawn(
        mode, os.fsdecode(target), [os.fsdecode(a) for a in argv], text_env
    )


def spawn_process(
    target: bytes,
    argv: List[bytes],
    env: Mapping,
    *,
    use_path: bool = True,
    block: bool = True,
) -> int:
    """
    Create a child process running ``target``.

    Args:
        target: Executable name or path
        argv: Argument vector; argv[0] need not match target
        env: Complete environment for the child
        use_path: Search PATH for target (otherwise a direct path)
        block: Wait for the child to finish

    Returns:
        Exit code when block is True, otherwise the child's pid
        (a process handle on Windows)

    Raises:
        SpawnError: If the OS cannot create the process
    """
    try:
        if not HAVE_POSIX_SPAWN:
            return _spawn_windows(target, argv, env, use_path, block)
        spawn = os.posix_spawnp if use_path else os.posix_spawn
        pid = spawn(target, argv, env)
    except OSError as err:
        logger.debug("spawn of %r failed: %s", target, err)
        raise SpawnError("exec error (spawn failed)") from err

    logger.debug("spawned %r as pid %d (block=%s)", target, pid, block)
    if not block:
        return pid
    return wait(pid)


__all__ = ["HAVE_POSIX_SPAWN", "spawn_process", "wait"]
