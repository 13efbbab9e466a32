"""
Storage backends for the tracker database.

The facade talks to a Database; JSONFileDatabase keeps the whole DBState
in one JSON file. See test_utils.MockDB for the in-memory variant.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from tracker.db.errors import DecodeError, StorageIOError
from tracker.db.models import DBState
from tracker.lib.validate import ValidationError, validate, validate_before_write

logger = logging.getLogger(__name__)

SCHEMA_NAME = "db_state"


class Database(ABC):
    """Read/write access to a whole DBState snapshot."""

    @abstractmethod
    def read_db(self) -> DBState:
        """Return the current snapshot."""

    @abstractmethod
    def write_db(self, db_state: DBState) -> None:
        """Replace the stored snapshot with db_state."""


def decode_state(content: bytes | str, source: Path = None) -> DBState:
    """Parse and validate a JSON document into a snapshot.

    Raises:
        DecodeError: If content is not UTF-8 JSON, doesn't match the schema,
            or breaks the id/ownership rules
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Database is not valid UTF-8: {e}", source) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e}", source) from e

    if not isinstance(data, dict):
        raise DecodeError("Expected a JSON object at top level", source)

    try:
        validate(data, SCHEMA_NAME)
    except ValidationError as e:
        raise DecodeError(str(e), source) from e

    db_state = DBState.from_dict(data)
    problems = db_state.integrity_errors()
    if problems:
        raise DecodeError("Inconsistent database: " + "; ".join(problems), source)
    return db_state


class JSONFileDatabase(Database):
    """Database stored as a single JSON document on disk.

    Writes overwrite the file in place; a failed write may leave a
    truncated file behind.
    """

    def __init__(self, file_path: Path, indent: int = 2):
        self.file_path = Path(file_path)
        self.indent = indent

    def read_db(self) -> DBState:
        try:
            content = self.file_path.read_bytes()
        except OSError as e:
            raise StorageIOError(self.file_path, f"Failed to read database ({e.strerror or e})") from e

        db_state = decode_state(content, self.file_path)
        logger.debug(
            f"Read {len(db_state.epics)} epic(s), {len(db_state.stories)} story(s) "
            f"from {self.file_path}"
        )
        return db_state

    def write_db(self, db_state: DBState) -> None:
        data = db_state.to_dict()
        try:
            validate_before_write(data, SCHEMA_NAME, self.file_path)
        except ValidationError as e:
            raise DecodeError(str(e)) from e

        problems = db_state.integrity_errors()
        if problems:
            raise DecodeError(
                f"Refusing to write inconsistent database to {self.file_path}: " + "; ".join(problems)
            )

        try:
            self.file_path.write_text(json.dumps(data, indent=self.indent), encoding="utf-8")
        except OSError as e:
            raise StorageIOError(self.file_path, f"Failed to write database ({e.strerror or e})") from e
        logger.debug(f"Wrote database to {self.file_path} (last_item_id={db_state.last_item_id})")

    def initialize(self) -> bool:
        """Create the file with an empty snapshot if it doesn't exist.

        Returns:
            True if the file was created, False if it already existed
        """
        if self.file_path.exists():
            return False
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(self.file_path.parent, f"Failed to create directory ({e.strerror or e})") from e
        self.write_db(DBState.empty())
        logger.debug(f"Initialized empty database at {self.file_path}")
        return True
