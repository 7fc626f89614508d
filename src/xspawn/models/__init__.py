"""Pydantic models for the exec call surface."""

from .options import SpawnOptions

__all__ = ["SpawnOptions"]
