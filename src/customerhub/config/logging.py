"""Root logger setup for the command-line entry point."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def log_level_from_env(default: str = "INFO") -> int:
    """Resolve ``CUSTOMERHUB_LOG_LEVEL`` (a level name such as DEBUG) to a number."""

    name = optional_env_var("CUSTOMERHUB_LOG_LEVEL", default).upper()
    level = logging.getLevelNamesMapping().get(name)
    if level is None:
        raise ConfigurationError(f"Unknown log level in CUSTOMERHUB_LOG_LEVEL: {name!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger once; ``force=True`` replaces existing handlers."""

    logging.basicConfig(
        level=log_level_from_env() if level is None else level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
