"""Exceptions raised by the exec layer.

Every failure a caller can observe is an ``ExecError`` subclass. Marshalling
errors (arguments, environment, options) are raised before any child process
exists; ``SpawnError`` is raised only once marshalling has succeeded.
"""


class ExecError(Exception):
    """Base class for exec failures."""

    pass


class ArgumentError(ExecError):
    """Argument collection or one of its elements is not usable as a string."""

    pass


class EnvironmentBuildError(ExecError):
    """The ``env`` mapping cannot be enumerated or an entry cannot be coerced."""

    pass


class OptionsError(ExecError):
    """The options bag is malformed."""

    pass


class SpawnError(ExecError):
    """The OS could not create the child process."""

    pass


__all__ = [
    "ArgumentError",
    "EnvironmentBuildError",
    "ExecError",
    "OptionsError",
    "SpawnError",
]
