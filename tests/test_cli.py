"""Tests for tracker.cli entrypoint and commands."""

import json
from argparse import Namespace

import pytest

from tracker.cli import main
from tracker.commands.epics import cmd_rm_epic, cmd_show_epic
from tracker.db import Epic, JiraDatabase, NotFoundError, Story
from tracker.db.test_utils import MockDB
from tracker.lib.config import DB_PATH_ENV_VAR


@pytest.fixture
def run(tmp_path, monkeypatch, capsys):
    """Run the CLI against a database in tmp_path."""
    monkeypatch.delenv(DB_PATH_ENV_VAR, raising=False)

    def _run(*argv):
        code = main(["--config-dir", str(tmp_path), *argv])
        out, err = capsys.readouterr()
        return code, out, err

    return _run


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "data" / "db.json"


class TestInit:
    """Test tracker init."""

    def test_creates_database(self, run, db_file):
        code, out, _ = run("init")
        assert code == 0
        assert "Created empty database" in out
        assert json.loads(db_file.read_text()) == {"last_item_id": 0, "epics": {}, "stories": {}}

    def test_existing_database_untouched(self, run, db_file):
        run("init")
        run("add-epic", "keep me")

        code, out, _ = run("init")

        assert code == 0
        assert "already exists" in out
        assert "1" in json.loads(db_file.read_text())["epics"]


class TestEpicCommands:
    """Test epic subcommands."""

    def test_add_and_list(self, run):
        run("init")
        code, out, _ = run("add-epic", "Login", "-d", "User login flow")
        assert code == 0
        assert "Created epic 1" in out

        code, out, _ = run("epics")
        assert code == 0
        assert "Login" in out
        assert "OPEN" in out
        assert "1 epic(s), 0 story(s)" in out

    def test_list_empty(self, run):
        run("init")
        _, out, _ = run("epics")
        assert "Epics: none" in out

    def test_show_epic_lists_stories(self, run):
        run("init")
        run("add-epic", "Login")
        run("add-story", "1", "Password reset")

        code, out, _ = run("show-epic", "1")

        assert code == 0
        assert "Epic 1: Login" in out
        assert "Password reset" in out

    def test_set_status(self, run, db_file):
        run("init")
        run("add-epic", "Login")

        code, out, _ = run("set-epic-status", "1", "in_progress")

        assert code == 0
        assert "Epic 1 -> IN_PROGRESS" in out
        assert json.loads(db_file.read_text())["epics"]["1"]["status"] == "IN_PROGRESS"

    def test_invalid_status_rejected_by_parser(self, run):
        run("init")
        run("add-epic", "Login")
        with pytest.raises(SystemExit) as exc_info:
            run("set-epic-status", "1", "done")
        assert exc_info.value.code == 2

    def test_rm_epic_cascades(self, run, db_file):
        run("init")
        run("add-epic", "Login")
        run("add-story", "1", "a")
        run("add-story", "1", "b")

        code, out, _ = run("rm-epic", "1")

        assert code == 0
        assert "2 story(s) removed" in out
        data = json.loads(db_file.read_text())
        assert data["epics"] == {}
        assert data["stories"] == {}
        assert data["last_item_id"] == 3


class TestStoryCommands:
    """Test story subcommands."""

    def test_add_story_to_missing_epic(self, run):
        run("init")
        code, _, err = run("add-story", "999", "orphan")
        assert code == 1
        assert "ERROR: Could not find epic 999" in err

    def test_show_and_update_story(self, run):
        run("init")
        run("add-epic", "Login")
        run("add-story", "1", "Password reset", "-d", "Email a link")

        code, out, _ = run("set-story-status", "2", "resolved")
        assert code == 0

        code, out, _ = run("show-story", "2")
        assert "Story 2: Password reset" in out
        assert "Status: RESOLVED" in out
        assert "Email a link" in out

    def test_rm_story_wrong_epic(self, run):
        run("init")
        run("add-epic", "A")
        run("add-epic", "B")
        run("add-story", "1", "owned by A")

        code, _, err = run("rm-story", "2", "3")

        assert code == 1
        assert "not found in stories of epic 2" in err

    def test_rm_story(self, run, db_file):
        run("init")
        run("add-epic", "A")
        run("add-story", "1", "s")

        code, out, _ = run("rm-story", "1", "2")

        assert code == 0
        data = json.loads(db_file.read_text())
        assert data["epics"]["1"]["stories"] == []
        assert data["stories"] == {}


class TestErrors:
    """Test error reporting and exit codes."""

    def test_missing_database(self, run):
        code, _, err = run("epics")
        assert code == 1
        assert "ERROR: Failed to read database" in err

    def test_corrupt_database(self, run, db_file):
        db_file.parent.mkdir(parents=True)
        db_file.write_text('{ "last_item_id": 0, "epics": {')

        code, _, err = run("epics")

        assert code == 1
        assert "Invalid JSON" in err

    def test_bad_config(self, run, tmp_path):
        (tmp_path / "tracker.env").write_text("garbage\n")
        code, _, err = run("epics")
        assert code == 2
        assert "Invalid configuration" in err


class CountingDB(MockDB):
    """MockDB that counts reads."""

    def __init__(self):
        super().__init__()
        self.reads = 0

    def read_db(self):
        self.reads += 1
        return super().read_db()


class TestEpicCommandReads:
    """Epic commands read the database once."""

    @pytest.fixture
    def counting(self):
        backend = CountingDB()
        db = JiraDatabase(backend)
        epic_id = db.create_epic(Epic(name="Login", description=""))
        db.create_story(Story(name="a", description=""), epic_id)
        backend.reads = 0
        return backend, db

    def test_show_epic_single_read(self, counting, capsys):
        backend, db = counting

        assert cmd_show_epic(Namespace(epic_id=1), db) == 0

        assert backend.reads == 1
        assert "Epic 1: Login" in capsys.readouterr().out

    def test_show_missing_epic(self, counting):
        _, db = counting
        with pytest.raises(NotFoundError, match="Could not find epic 7"):
            cmd_show_epic(Namespace(epic_id=7), db)

    def test_rm_epic_single_read(self, counting, capsys):
        backend, db = counting

        assert cmd_rm_epic(Namespace(epic_id=1), db) == 0

        assert backend.reads == 1
        assert "1 story(s) removed" in capsys.readouterr().out
        assert db.read_db().stories == {}
