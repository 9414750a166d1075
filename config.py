"""Centralized configuration for environment variables."""

import logging
import os
from pathlib import Path

DATA_DIR_ENV = "SCOREBOOK_DATA_DIR"
LOG_LEVEL_ENV = "SCOREBOOK_LOG_LEVEL"
DEFAULT_INNINGS_ENV = "SCOREBOOK_DEFAULT_INNINGS"

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data" / "games"
DEFAULT_INNINGS = 9


def get_data_dir() -> Path:
    """Return the directory that holds stored games."""
    value = os.environ.get(DATA_DIR_ENV, "")
    return Path(value) if value else DEFAULT_DATA_DIR


def get_log_level() -> int:
    """Return the configured logging level, INFO if unset or unrecognised."""
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_default_innings() -> int:
    """Return the scheduled inning count for new games."""
    try:
        innings = int(os.environ.get(DEFAULT_INNINGS_ENV, DEFAULT_INNINGS))
    except ValueError:
        return DEFAULT_INNINGS
    return innings if innings >= 1 else DEFAULT_INNINGS


def configure_logging() -> None:
    """Set up root logging for entry points (CLI, web app)."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
