"""
Configuration loader for the tracker.

Reads tracker.env from the config directory. TRACKER_DB_PATH in the
environment overrides the database location.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import envparse

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tracker.env"
DB_PATH_ENV_VAR = "TRACKER_DB_PATH"
DEFAULT_DB_PATH = Path("data") / "db.json"
DEFAULT_JSON_INDENT = 2
CONFIG_KEYS = ("DB_PATH", "JSON_INDENT")


@dataclass
class TrackerConfig:
    """Tracker configuration from tracker.env"""
    db_path: Path
    indent: int = DEFAULT_JSON_INDENT


def load_tracker_config(config_dir: Path) -> TrackerConfig:
    """Load tracker.env (if present) and return TrackerConfig.

    Relative DB_PATH values resolve against config_dir.

    Raises:
        ValueError: If tracker.env has invalid syntax or unknown keys
    """
    config_dir = Path(config_dir)
    env_file = config_dir / CONFIG_FILENAME
    env = envparse.load_env(env_file, allowed_keys=CONFIG_KEYS) if env_file.exists() else {}

    db_path = Path(os.environ.get(DB_PATH_ENV_VAR) or env.get("DB_PATH") or DEFAULT_DB_PATH)
    if not db_path.is_absolute():
        db_path = config_dir / db_path

    indent = DEFAULT_JSON_INDENT
    raw_indent = env.get("JSON_INDENT")
    if raw_indent is not None:
        try:
            indent = int(raw_indent)
            if indent < 0:
                raise ValueError(raw_indent)
        except ValueError:
            logger.warning(
                f"Invalid JSON_INDENT '{raw_indent}', using default {DEFAULT_JSON_INDENT}"
            )
            indent = DEFAULT_JSON_INDENT

    return TrackerConfig(db_path=db_path, indent=indent)
