"""Shared logging helpers."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError


def resolve_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``LOG_LEVEL`` or ``default`` when unset."""

    name = optional_env_var("LOG_LEVEL")
    if name is None:
        return default
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level: {name}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    comes from ``LOG_LEVEL`` (INFO when unset) and the format is terse enough for
    CLI output. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level if level is not None else resolve_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
