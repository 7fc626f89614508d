"""Drivers: OS process-creation primitives."""

from .exec import spawn_process, wait

__all__ = ["spawn_process", "wait"]
