"""Configuration for pipes."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Checked in order; the first existing file wins.
ENV_PATHS: List[Path] = [
    Path.home() / ".conduit" / ".env",
    Path.cwd() / ".env",
]

_TRUTHY = {"1", "true", "yes", "on"}


def load_env(paths: Optional[List[Path]] = None) -> Optional[Path]:
    """Load the first ``.env`` file found, without overriding the environment.

    Returns:
        The path that was loaded, or *None* when no file exists.
    """
    for env_path in paths if paths is not None else ENV_PATHS:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.debug("Loaded environment from %s", env_path)
            return env_path
    return None


@dataclass
class PipeConfig:
    """Per-pipe settings.

    Attributes:
        name: Label shown in ``repr()`` and in log records (default: None)
        trace: Log every ``send()`` and its arguments at DEBUG level (default: False)
    """

    name: Optional[str] = None
    trace: bool = False

    @classmethod
    def from_env(cls, paths: Optional[List[Path]] = None) -> "PipeConfig":
        """Build a config from ``CONDUIT_PIPE_NAME`` / ``CONDUIT_TRACE``.

        A ``.env`` file is loaded first (see :func:`load_env`); variables
        already present in the process environment take precedence.
        """
        load_env(paths)
        name = os.environ.get("CONDUIT_PIPE_NAME") or None
        trace = os.environ.get("CONDUIT_TRACE", "").strip().lower() in _TRUTHY
        return cls(name=name, trace=trace)
