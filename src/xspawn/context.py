"""Runtime settings resolution."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    log_level: str


def resolve_settings(log_level_option: Optional[str]) -> Settings:
    """Resolve settings.

    Resolution order:
    1. --log-level CLI flag
    2. $XSPAWN_LOG_LEVEL environment variable
    3. WARNING

    Reads fresh from the environment each time.
    """
    if log_level_option:
        return Settings(log_level=log_level_option.upper())

    env_level = os.environ.get("XSPAWN_LOG_LEVEL")
    if env_level:
        return Settings(log_level=env_level.upper())

    return Settings(log_level=DEFAULT_LOG_LEVEL)
