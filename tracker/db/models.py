"""
Data models for the tracker database.

A DBState is the whole persisted document: the id counter plus the epic
and story mappings. Ids are ints in memory and decimal strings in JSON.
"""

from dataclasses import dataclass, field
from enum import Enum


class Status(Enum):
    """Workflow status shared by epics and stories."""
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"

    @classmethod
    def parse(cls, value: str) -> "Status":
        """Parse a status token, case-insensitive ("in_progress" works)."""
        token = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(token)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown status '{value}' (expected one of: {valid})") from None


@dataclass
class Story:
    """A unit of work owned by exactly one epic."""
    name: str
    description: str
    status: Status = Status.OPEN

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        return cls(
            name=data["name"],
            description=data["description"],
            status=Status(data["status"]),
        )


@dataclass
class Epic:
    """A top-level work item.

    `stories` is the membership record: ids of the stories this epic owns,
    in creation order.
    """
    name: str
    description: str
    status: Status = Status.OPEN
    stories: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "stories": list(self.stories),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Epic":
        return cls(
            name=data["name"],
            description=data["description"],
            status=Status(data["status"]),
            stories=[int(story_id) for story_id in data["stories"]],
        )


@dataclass
class DBState:
    """Complete persisted state of the tracker."""
    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict)
    stories: dict[int, Story] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "DBState":
        return cls()

    def to_dict(self) -> dict:
        return {
            "last_item_id": self.last_item_id,
            "epics": {str(epic_id): epic.to_dict() for epic_id, epic in self.epics.items()},
            "stories": {str(story_id): story.to_dict() for story_id, story in self.stories.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DBState":
        return cls(
            last_item_id=int(data["last_item_id"]),
            epics={int(k): Epic.from_dict(v) for k, v in data["epics"].items()},
            stories={int(k): Story.from_dict(v) for k, v in data["stories"].items()},
        )

    def integrity_errors(self) -> list[str]:
        """List violations of the id and ownership rules (empty if none).

        - last_item_id is at least every epic and story id
        - every story id an epic lists exists in `stories`
        - no story id is listed by more than one epic
        - every story is listed by some epic
        """
        errors = []

        highest = max([*self.epics, *self.stories], default=0)
        if highest > self.last_item_id:
            errors.append(f"last_item_id {self.last_item_id} is below existing id {highest}")

        owners: dict[int, int] = {}
        for epic_id, epic in sorted(self.epics.items()):
            for story_id in epic.stories:
                if story_id not in self.stories:
                    errors.append(f"epic {epic_id} lists missing story {story_id}")
                if story_id in owners:
                    errors.append(
                        f"story {story_id} is listed by epics {owners[story_id]} and {epic_id}"
                    )
                else:
                    owners[story_id] = epic_id

        for story_id in sorted(set(self.stories) - set(owners)):
            errors.append(f"story {story_id} is not owned by any epic")

        return errors
