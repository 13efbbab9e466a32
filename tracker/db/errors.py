"""
Errors raised by the tracker database.

Every failure from the storage layer is a TrackerError, so callers can
catch one type and present it.
"""

from pathlib import Path


class TrackerError(Exception):
    """Base class for tracker database errors."""


class StorageIOError(TrackerError):
    """Database file could not be read or written."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class DecodeError(TrackerError):
    """Stored content is not a valid tracker document."""

    def __init__(self, message: str, path: Path = None):
        self.path = path
        super().__init__(message + (f" in {path}" if path else ""))


class NotFoundError(TrackerError):
    """Referenced epic or story does not exist."""

    def __init__(self, kind: str, item_id: int, message: str = None):
        self.kind = kind
        self.item_id = item_id
        super().__init__(message or f"Could not find {kind} {item_id} in database")


class StoryNotInEpicError(NotFoundError):
    """Story exists (or not) but is not owned by the given epic."""

    def __init__(self, epic_id: int, story_id: int):
        self.epic_id = epic_id
        self.story_id = story_id
        super().__init__(
            "story", story_id,
            f"Story {story_id} not found in stories of epic {epic_id}",
        )
