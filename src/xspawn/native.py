"""Native string coercion and allocation bookkeeping.

A *native string* is the bytes form of a value as the OS sees it: encoded
with the filesystem encoding and free of NUL bytes. Each native string held
by an argument vector or environment block is counted in a ``NativeLedger``
so tests can check that everything acquired during a call was released.
"""

from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from typing import Any, Iterator


def to_native(value: Any) -> bytes:
    """Coerce a dynamic value to a native string.

    ``bytes`` pass through, ``str`` and ``os.PathLike`` use the filesystem
    encoding, anything else goes through ``str()``. Errors raised by a
    value's ``__str__`` propagate unchanged.

    Raises:
        TypeError: If value is None
        ValueError: If the result contains a NUL byte
    """
    if value is None:
        raise TypeError("None is not a string")
    if isinstance(value, bytes):
        data = value
    elif isinstance(value, (str, os.PathLike)):
        data = os.fsencode(value)
    else:
        data = os.fsencode(str(value))

    if b"\0" in data:
        raise ValueError("embedded null byte")
    return data


class NativeLedger:
    """Counts native string acquisitions and releases."""

    def __init__(self):
        self._lock = threading.Lock()
        self.allocated = 0
        self.released = 0

    @property
    def outstanding(self) -> int:
        return self.allocated - self.released

    def acquire(self, count: int = 1) -> None:
        with self._lock:
            self.allocated += count

    def release(self, count: int = 1) -> None:
        with self._lock:
            if count > self.allocated - self.released:
                raise RuntimeError("release of native strings that are not held")
            self.released += count

    def __repr__(self) -> str:
        return (
            f"NativeLedger(allocated={self.allocated}, released={self.released})"
        )


DEFAULT_LEDGER = NativeLedger()


@contextmanager
def native_string(value: Any, ledger: NativeLedger) -> Iterator[bytes]:
    """Hold one native string for the duration of a ``with`` block."""
    data = to_native(value)
    ledger.acquire()
    try:
        yield data
    finally:
        ledger.release()


__all__ = ["DEFAULT_LEDGER", "NativeLedger", "native_string", "to_native"]
