"""
tracker init - Create an empty database file.
"""

from tracker.db import JSONFileDatabase
from tracker.lib.config import TrackerConfig


def cmd_init(args, config: TrackerConfig) -> int:
    """Create the database file if it doesn't exist yet."""
    database = JSONFileDatabase(config.db_path, indent=config.indent)
    if database.initialize():
        print(f"Created empty database at {config.db_path}")
    else:
        print(f"Database already exists at {config.db_path}")
    return 0
