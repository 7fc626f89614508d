"""Exec entry point.

Marshals the argument vector and environment block, brackets the spawn
with the optional stdout redirection, and releases every native resource
before returning or raising.
"""

import logging
from contextlib import ExitStack
from typing import Any, Iterable, Optional

from .argv import ArgumentVector
from .drivers.exec import spawn_process
from .environ import environment_block
from .errors import ArgumentError, OptionsError
from .models import SpawnOptions
from .native import DEFAULT_LEDGER, NativeLedger, native_string
from .redirect import redirect_stdout

logger = logging.getLogger(__name__)


def spawn_exec(
    args: Iterable[Any],
    options: Optional[Any] = None,
    *,
    ledger: Optional[NativeLedger] = None,
) -> int:
    """
    Run a program with argv ``args``.

    Args:
        args: Program name followed by its arguments, each string-coercible
        options: Mapping or SpawnOptions with keys
            block (default True): wait for the child and return its exit code
            usePath (default True): search PATH for the program
            stdout: descriptor or file object to use as the child's stdout
            file: program to run instead of args[0]
            env: complete environment for the child (default: inherited)
        ledger: Allocation ledger (default: process-wide ledger)

    Returns:
        Exit code if block, otherwise the child's pid

    Raises:
        OptionsError: Malformed options
        ArgumentError: args unusable, or empty
        EnvironmentBuildError: env unusable
        SpawnError: The OS could not create the process
    """
    opts = SpawnOptions.parse(options)
    ledger = ledger or DEFAULT_LEDGER

    with ExitStack() as stack:
        argv = stack.enter_context(ArgumentVector.marshal(args, ledger))
        if len(argv) == 0:
            raise ArgumentError("args must contain at least one element")
        env = stack.enter_context(environment_block(opts.env, ledger))

        if opts.file is not None:
            try:
                target = stack.enter_context(native_string(opts.file, ledger))
            except Exception as err:
                raise OptionsError(f"file is not usable as a string: {err}") from err
        else:
            target = argv.program

        with redirect_stdout(opts.stdout_fd):
            result = spawn_process(
                target,
                argv.as_list(),
                env.as_mapping(),
                use_path=opts.use_path,
                block=opts.block,
            )

    logger.debug("exec %r -> %d", target, result)
    return result


__all__ = ["spawn_exec"]
