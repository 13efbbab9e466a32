"""
Tracker database.

Epics own stories; the whole state lives in one JSON document that is
read, modified and written back on every operation.
"""

from tracker.db.models import DBState, Epic, Status, Story
from tracker.db.errors import (
    TrackerError,
    StorageIOError,
    DecodeError,
    NotFoundError,
    StoryNotInEpicError,
)
from tracker.db.backends import Database, JSONFileDatabase, decode_state
from tracker.db.store import JiraDatabase

__all__ = [
    "DBState",
    "Epic",
    "Status",
    "Story",
    "TrackerError",
    "StorageIOError",
    "DecodeError",
    "NotFoundError",
    "StoryNotInEpicError",
    "Database",
    "JSONFileDatabase",
    "decode_state",
    "JiraDatabase",
]
