"""xspawn: launch child processes from a dynamic call site."""

from .errors import (
    ArgumentError,
    EnvironmentBuildError,
    ExecError,
    OptionsError,
    SpawnError,
)
from .executor import spawn_exec
from .models import SpawnOptions

__all__ = [
    "__version__",
    "ArgumentError",
    "EnvironmentBuildError",
    "ExecError",
    "OptionsError",
    "SpawnError",
    "SpawnOptions",
    "spawn_exec",
]

__version__ = "0.0.1"
