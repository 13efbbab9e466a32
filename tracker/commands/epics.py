"""
tracker epic commands - list, show, add, set status, remove.
"""

from tracker.db import Epic, JiraDatabase, NotFoundError


def _truncate(text: str, width: int) -> str:
    return text[:width - 3] + "..." if len(text) > width else text


def cmd_epics(args, db: JiraDatabase) -> int:
    """List all epics."""
    state = db.read_db()

    if not state.epics:
        print("Epics: none")
        print()
        print("Get started:")
        print("  tracker add-epic <name>")
        return 0

    print("Epics")
    print("-" * 60)
    for epic_id in sorted(state.epics):
        epic = state.epics[epic_id]
        print(f"  {epic_id:<6} {epic.status.value:<12} {_truncate(epic.name, 30):<30} "
              f"{len(epic.stories)} story(s)")
    print()
    print(f"{len(state.epics)} epic(s), {len(state.stories)} story(s)")
    return 0


def cmd_show_epic(args, db: JiraDatabase) -> int:
    """Show an epic and its stories."""
    state = db.read_db()
    epic = state.epics.get(args.epic_id)
    if epic is None:
        raise NotFoundError("epic", args.epic_id)

    print(f"Epic {args.epic_id}: {epic.name}")
    print(f"Status: {epic.status.value}")
    if epic.description:
        print()
        print(epic.description)
    print()

    if not epic.stories:
        print("Stories: none")
        return 0

    print("Stories")
    print("-" * 60)
    for story_id in epic.stories:
        story = state.stories[story_id]
        print(f"  {story_id:<6} {story.status.value:<12} {_truncate(story.name, 40)}")
    return 0


def cmd_add_epic(args, db: JiraDatabase) -> int:
    """Create an epic."""
    epic_id = db.create_epic(Epic(name=args.name, description=args.description or ""))
    print(f"Created epic {epic_id}")
    return 0


def cmd_set_epic_status(args, db: JiraDatabase) -> int:
    """Update an epic's status."""
    db.update_epic_status(args.epic_id, args.status)
    print(f"Epic {args.epic_id} -> {args.status.value}")
    return 0


def cmd_rm_epic(args, db: JiraDatabase) -> int:
    """Delete an epic and all of its stories."""
    removed = db.delete_epic(args.epic_id)
    print(f"Deleted epic {args.epic_id} ({len(removed)} story(s) removed)")
    return 0
