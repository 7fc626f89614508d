"""Argument marshalling: dynamic sequence -> native argument vector."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from .errors import ArgumentError
from .native import DEFAULT_LEDGER, NativeLedger, to_native


class ArgumentVector:
    """Owned native argument strings for one spawn.

    Use as a context manager; entries are released on exit.
    """

    def __init__(self, entries: List[bytes], ledger: NativeLedger):
        self._entries = entries
        self._ledger = ledger

    @classmethod
    def marshal(
        cls, args: Iterable[Any], ledger: Optional[NativeLedger] = None
    ) -> "ArgumentVector":
        """Convert every element of ``args`` to a native string.

        Args:
            args: Ordered collection of string-coercible values
            ledger: Allocation ledger (default: process-wide ledger)

        Returns:
            ArgumentVector with one entry per element

        Raises:
            ArgumentError: If args is not a collection or an element cannot
                be coerced. Entries converted so far are released first.
        """
        ledger = ledger or DEFAULT_LEDGER

        if args is None or isinstance(args, (str, bytes, Mapping)):
            raise ArgumentError(
                f"args must be a sequence of strings, not {type(args).__name__}"
            )
        try:
            values = list(args)
        except TypeError as err:
            raise ArgumentError(
                f"args must be a sequence of strings, not {type(args).__name__}"
            ) from err
        except Exception as err:
            raise ArgumentError(f"cannot enumerate args: {err}") from err

        vector = cls([], ledger)
        for index, value in enumerate(values):
            try:
                data = to_native(value)
            except Exception as err:
                vector.release()
                raise ArgumentError(
                    f"args[{index}] is not usable as a string: {err}"
                ) from err
            ledger.acquire()
            vector._entries.append(data)
        return vector

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> bytes:
        return self._entries[index]

    def __iter__(self):
        return iter(self._entries)

    @property
    def program(self) -> Optional[bytes]:
        """First entry, conventionally the program name."""
        return self._entries[0] if self._entries else None

    def terminated(self) -> List[Optional[bytes]]:
        """Entries followed by the ``None`` sentinel."""
        return [*self._entries, None]

    def as_list(self) -> List[bytes]:
        return list(self._entries)

    def release(self) -> None:
        """Release all entries. Calling again is a no-op."""
        count = len(self._entries)
        self._entries = []
        if count:
            self._ledger.release(count)

    def __enter__(self) -> "ArgumentVector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


__all__ = ["ArgumentVector"]
