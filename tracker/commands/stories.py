"""
tracker story commands - show, add, set status, remove.
"""

from tracker.db import JiraDatabase, Story


def cmd_show_story(args, db: JiraDatabase) -> int:
    """Show a single story."""
    story = db.get_story(args.story_id)

    print(f"Story {args.story_id}: {story.name}")
    print(f"Status: {story.status.value}")
    if story.description:
        print()
        print(story.description)
    return 0


def cmd_add_story(args, db: JiraDatabase) -> int:
    """Create a story inside an epic."""
    story = Story(name=args.name, description=args.description or "")
    story_id = db.create_story(story, args.epic_id)
    print(f"Created story {story_id} in epic {args.epic_id}")
    return 0


def cmd_set_story_status(args, db: JiraDatabase) -> int:
    """Update a story's status."""
    db.update_story_status(args.story_id, args.status)
    print(f"Story {args.story_id} -> {args.status.value}")
    return 0


def cmd_rm_story(args, db: JiraDatabase) -> int:
    """Delete a story from its epic."""
    db.delete_story(args.epic_id, args.story_id)
    print(f"Deleted story {args.story_id} from epic {args.epic_id}")
    return 0
