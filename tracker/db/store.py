"""
Tracker database facade.

Every operation reads the whole snapshot, checks its preconditions,
mutates the copy and writes it back. A failed precondition raises before
anything is written, so the stored snapshot is left as it was.

Invariants kept across calls:
  - last_item_id >= every epic and story id; ids are never reused
  - every id in an epic's `stories` list exists in the stories mapping
  - each story id appears in exactly one epic's `stories` list
"""

import dataclasses
import logging
from pathlib import Path

from tracker.db.backends import Database, JSONFileDatabase
from tracker.db.errors import NotFoundError, StoryNotInEpicError
from tracker.db.models import DBState, Epic, Status, Story

logger = logging.getLogger(__name__)


class JiraDatabase:
    """Create, update and delete epics and stories on top of a Database."""

    def __init__(self, database: Database):
        self.database = database

    @classmethod
    def from_file(cls, file_path: Path, indent: int = 2) -> "JiraDatabase":
        """Build a facade backed by a JSON file."""
        return cls(JSONFileDatabase(file_path, indent=indent))

    def read_db(self) -> DBState:
        return self.database.read_db()

    def get_epic(self, epic_id: int) -> Epic:
        """Look up an epic by id.

        Raises:
            NotFoundError: If the epic doesn't exist
        """
        return _get_epic(self.database.read_db(), epic_id)

    def get_story(self, story_id: int) -> Story:
        """Look up a story by id.

        Raises:
            NotFoundError: If the story doesn't exist
        """
        return _get_story(self.database.read_db(), story_id)

    def create_epic(self, epic: Epic) -> int:
        """Store a new epic and return its id.

        The stored epic starts with no stories; membership is only ever
        added through create_story.
        """
        parsed = self.database.read_db()

        new_id = _next_id(parsed)
        parsed.epics[new_id] = dataclasses.replace(epic, stories=[])

        self.database.write_db(parsed)
        logger.debug(f"Created epic {new_id}")
        return new_id

    def create_story(self, story: Story, epic_id: int) -> int:
        """Store a new story under epic_id and return its id.

        Raises:
            NotFoundError: If the epic doesn't exist
        """
        parsed = self.database.read_db()
        epic = _get_epic(parsed, epic_id)

        new_id = _next_id(parsed)
        parsed.stories[new_id] = dataclasses.replace(story)
        epic.stories.append(new_id)

        self.database.write_db(parsed)
        logger.debug(f"Created story {new_id} in epic {epic_id}")
        return new_id

    def delete_epic(self, epic_id: int) -> list[int]:
        """Delete an epic together with all of its stories.

        Returns:
            Ids of the stories removed with the epic

        Raises:
            NotFoundError: If the epic doesn't exist
        """
        parsed = self.database.read_db()
        epic = _get_epic(parsed, epic_id)

        for story_id in epic.stories:
            parsed.stories.pop(story_id, None)
        del parsed.epics[epic_id]

        self.database.write_db(parsed)
        logger.debug(f"Deleted epic {epic_id} and {len(epic.stories)} story(s)")
        return list(epic.stories)

    def delete_story(self, epic_id: int, story_id: int) -> None:
        """Delete a story from its owning epic.

        Raises:
            NotFoundError: If the epic doesn't exist
            StoryNotInEpicError: If the story isn't in that epic's stories
        """
        parsed = self.database.read_db()
        epic = _get_epic(parsed, epic_id)

        if story_id not in epic.stories:
            raise StoryNotInEpicError(epic_id, story_id)

        epic.stories.remove(story_id)
        parsed.stories.pop(story_id, None)

        self.database.write_db(parsed)
        logger.debug(f"Deleted story {story_id} from epic {epic_id}")

    def update_epic_status(self, epic_id: int, status: Status) -> None:
        """Set an epic's status.

        Raises:
            NotFoundError: If the epic doesn't exist
        """
        parsed = self.database.read_db()
        _get_epic(parsed, epic_id).status = status
        self.database.write_db(parsed)

    def update_story_status(self, story_id: int, status: Status) -> None:
        """Set a story's status.

        Raises:
            NotFoundError: If the story doesn't exist
        """
        parsed = self.database.read_db()
        _get_story(parsed, story_id).status = status
        self.database.write_db(parsed)


def _next_id(db_state: DBState) -> int:
    """Allocate the next item id, bumping the counter in place."""
    db_state.last_item_id += 1
    return db_state.last_item_id


def _get_epic(db_state: DBState, epic_id: int) -> Epic:
    epic = db_state.epics.get(epic_id)
    if epic is None:
        raise NotFoundError("epic", epic_id)
    return epic


def _get_story(db_state: DBState, story_id: int) -> Story:
    story = db_state.stories.get(story_id)
    if story is None:
        raise NotFoundError("story", story_id)
    return story
