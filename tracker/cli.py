#!/usr/bin/env python3
"""Tracker CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from tracker.db import JiraDatabase, Status, TrackerError
from tracker.lib.config import load_tracker_config
from tracker.commands import init as cmd_init_module
from tracker.commands import epics as cmd_epics_module
from tracker.commands import stories as cmd_stories_module


def status_arg(value: str) -> Status:
    """argparse type for status tokens."""
    try:
        return Status.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='tracker', description='Minimal epic/story tracker')
    parser.add_argument('--config-dir', type=Path, default=Path.cwd(),
                        help='Directory holding tracker.env (default: current directory)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # tracker init
    p_init = subparsers.add_parser('init', help='Create an empty database file')
    p_init.set_defaults(func=cmd_init_module.cmd_init, needs_db=False)

    # tracker epics
    p_epics = subparsers.add_parser('epics', help='List epics')
    p_epics.set_defaults(func=cmd_epics_module.cmd_epics)

    # tracker show-epic
    p_show_epic = subparsers.add_parser('show-epic', help='Show epic details')
    p_show_epic.add_argument('epic_id', type=int, help='Epic ID')
    p_show_epic.set_defaults(func=cmd_epics_module.cmd_show_epic)

    # tracker show-story
    p_show_story = subparsers.add_parser('show-story', help='Show story details')
    p_show_story.add_argument('story_id', type=int, help='Story ID')
    p_show_story.set_defaults(func=cmd_stories_module.cmd_show_story)

    # tracker add-epic
    p_add_epic = subparsers.add_parser('add-epic', help='Create epic')
    p_add_epic.add_argument('name', help='Epic name')
    p_add_epic.add_argument('-d', '--description', default='', help='Epic description')
    p_add_epic.set_defaults(func=cmd_epics_module.cmd_add_epic)

    # tracker add-story
    p_add_story = subparsers.add_parser('add-story', help='Create story in an epic')
    p_add_story.add_argument('epic_id', type=int, help='Owning epic ID')
    p_add_story.add_argument('name', help='Story name')
    p_add_story.add_argument('-d', '--description', default='', help='Story description')
    p_add_story.set_defaults(func=cmd_stories_module.cmd_add_story)

    # tracker set-epic-status
    p_set_epic = subparsers.add_parser('set-epic-status', help='Update epic status')
    p_set_epic.add_argument('epic_id', type=int, help='Epic ID')
    p_set_epic.add_argument('status', type=status_arg, help='open, in_progress, resolved, closed')
    p_set_epic.set_defaults(func=cmd_epics_module.cmd_set_epic_status)

    # tracker set-story-status
    p_set_story = subparsers.add_parser('set-story-status', help='Update story status')
    p_set_story.add_argument('story_id', type=int, help='Story ID')
    p_set_story.add_argument('status', type=status_arg, help='open, in_progress, resolved, closed')
    p_set_story.set_defaults(func=cmd_stories_module.cmd_set_story_status)

    # tracker rm-epic
    p_rm_epic = subparsers.add_parser('rm-epic', help='Delete epic and its stories')
    p_rm_epic.add_argument('epic_id', type=int, help='Epic ID')
    p_rm_epic.set_defaults(func=cmd_epics_module.cmd_rm_epic)

    # tracker rm-story
    p_rm_story = subparsers.add_parser('rm-story', help='Delete story from epic')
    p_rm_story.add_argument('epic_id', type=int, help='Owning epic ID')
    p_rm_story.add_argument('story_id', type=int, help='Story ID')
    p_rm_story.set_defaults(func=cmd_stories_module.cmd_rm_story)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_tracker_config(args.config_dir)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        if not getattr(args, 'needs_db', True):
            return args.func(args, config)
        db = JiraDatabase.from_file(config.db_path, indent=config.indent)
        return args.func(args, db)
    except TrackerError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
