"""Environment block construction.

A block is either borrowed (the process's own environment, never touched) or
owned (``KEY=VALUE`` native strings built from a caller mapping and released
exactly once).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from .errors import EnvironmentBuildError
from .native import DEFAULT_LEDGER, NativeLedger, to_native


@dataclass(frozen=True)
class BorrowedEnvironment:
    """The ambient environment of the current process."""

    def as_mapping(self) -> Mapping:
        return os.environ


@dataclass
class OwnedEnvironment:
    """Environment entries built for one spawn."""

    entries: List[bytes] = field(default_factory=list)
    ledger: NativeLedger = field(default=DEFAULT_LEDGER, repr=False)

    def as_mapping(self) -> Dict[bytes, bytes]:
        # Keys never contain "=", so the first one splits the entry.
        return dict(entry.split(b"=", 1) for entry in self.entries)

    def release(self) -> None:
        count = len(self.entries)
        self.entries = []
        if count:
            self.ledger.release(count)


EnvironmentBlock = Union[BorrowedEnvironment, OwnedEnvironment]


def _native_key(key: Any) -> bytes:
    if not isinstance(key, (str, bytes)):
        raise TypeError(f"key {key!r} is not a string")
    data = to_native(key)
    if not data:
        raise ValueError("empty key")
    if b"=" in data:
        raise ValueError(f"key {key!r} contains '='")
    return data


def build_environment(
    env: Optional[Any], ledger: Optional[NativeLedger] = None
) -> EnvironmentBlock:
    """Build the environment block for a spawn.

    Entries follow ``env.items()`` iteration order, which for a ``dict`` is
    insertion order. No other ordering is promised.

    Args:
        env: Mapping of names to string-coercible values, or None for the
            ambient environment
        ledger: Allocation ledger (default: process-wide ledger)

    Returns:
        BorrowedEnvironment when env is None, otherwise OwnedEnvironment

    Raises:
        EnvironmentBuildError: If env cannot be enumerated or an entry cannot
            be coerced. Entries built so far are released first.
    """
    if env is None:
        return BorrowedEnvironment()

    ledger = ledger or DEFAULT_LEDGER
    if not isinstance(env, Mapping):
        raise EnvironmentBuildError(
            f"env must be a mapping, not {type(env).__name__}"
        )
    try:
        items = list(env.items())
    except Exception as err:
        raise EnvironmentBuildError(f"cannot enumerate env: {err}") from err

    block = OwnedEnvironment(ledger=ledger)
    for key, value in items:
        try:
            name = _native_key(key)
            data = to_native(value)
        except Exception as err:
            block.release()
            raise EnvironmentBuildError(
                f"env entry {key!r} is not usable: {err}"
            ) from err
        ledger.acquire()
        block.entries.append(name + b"=" + data)
    return block


@contextmanager
def environment_block(
    env: Optional[Any], ledger: Optional[NativeLedger] = None
) -> Iterator[EnvironmentBlock]:
    """Build an environment block and release it when the block exits."""
    block = build_environment(env, ledger)
    try:
        yield block
    finally:
        if isinstance(block, OwnedEnvironment):
            block.release()


__all__ = [
    "BorrowedEnvironment",
    "EnvironmentBlock",
    "OwnedEnvironment",
    "build_environment",
    "environment_block",
]
