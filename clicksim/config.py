from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

# Game rules
BASELINE_TICK_MS = 1000
MIN_TICK_MS = 250
SCHEMA_VERSION = 1
STORAGE_KEY = "clicker-simf-save-v1"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _default_save_dir() -> Path:
    return Path(os.environ.get("CLICKSIM_SAVE_DIR", Path.home() / ".clicksim"))


@dataclass
class EngineConfig:
    """Deployment settings for a play session."""

    name: str = "Clicker Simf"
    save_dir: Path = field(default_factory=_default_save_dir)
    storage_key: str = STORAGE_KEY
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> EngineConfig:
        return cls(
            save_dir=_default_save_dir(),
            storage_key=os.environ.get("CLICKSIM_STORAGE_KEY", STORAGE_KEY),
            log_level=os.environ.get("CLICKSIM_LOG_LEVEL", "WARNING").upper(),
        )


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Route clicksim logs to stderr (stdout is reserved for MCP stdio)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger = logging.getLogger("clicksim")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
