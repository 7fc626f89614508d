"""Logging setup for the command-line entry point."""

import logging
import sys


def configure_logging(level: str = "WARNING") -> None:
    """Attach a stderr handler to the root logger.

    Stdout is left untouched; it belongs to the programs being run.
    """
    resolved = getattr(logging, str(level).upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(resolved)

    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
