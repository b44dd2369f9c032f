"""Comprehensive tests for CLI module."""

import json
from pathlib import Path

import pytest

from taskmaster.cli import build_description, create_parser, main
from taskmaster.models import Priority
from taskmaster.storage import JsonStorage
from taskmaster.store import TaskStore


class TestParser:
    """Tests for argument parsing."""

    def test_create_parser(self):
        """Test that parser is created with correct subcommands."""
        parser = create_parser()
        assert parser.prog == "taskmaster"

        with pytest.raises(SystemExit):
            parser.parse_args(["--help"])

    def test_parser_add_command_joins_words(self):
        args = create_parser().parse_args(["add", "Buy", "milk"])
        assert args.command == "add"
        assert args.description == ["Buy", "milk"]

    @pytest.mark.parametrize(
        "argv, command",
        [
            (["a", "x"], "a"),
            (["ch", "1", "x"], "ch"),
            (["l"], "l"),
            (["c", "1"], "c"),
            (["d", "1"], "d"),
            (["clr"], "clr"),
            (["i"], "i"),
        ],
    )
    def test_parser_aliases(self, argv, command):
        args = create_parser().parse_args(argv)
        assert args.command == command
        assert callable(args.handler)

    def test_parser_id_must_be_integer(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["complete", "abc"])

    def test_parser_add_requires_description(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["add"])

    def test_build_description(self):
        assert build_description(["  Buy", "milk  "]) == "Buy milk"
        assert build_description([" "]) == ""


class TestMain:
    """Tests for running commands through main()."""

    @pytest.fixture
    def task_file(self, tmp_path, monkeypatch):
        """Point the CLI at a temporary task file."""
        path = tmp_path / "tasks.json"
        monkeypatch.setenv("TASKMASTER_FILE", str(path))
        monkeypatch.setenv("TASKMASTER_HISTORY", str(tmp_path / "history"))
        return path

    def load(self, task_file):
        store = TaskStore(JsonStorage(task_file))
        store.load()
        return store

    def test_no_command_prints_help(self, task_file, capsys):
        assert main([]) == 1
        assert "usage: taskmaster" in capsys.readouterr().out

    def test_add(self, task_file, capsys):
        assert main(["add", "Buy", "milk"]) == 0

        assert capsys.readouterr().out == "Added Task #1: Buy milk\n"
        store = self.load(task_file)
        assert [(t.id, t.description) for t in store] == [(1, "Buy milk")]

    def test_add_empty_description_fails(self, task_file, capsys):
        assert main(["add", "  "]) == 1

        assert "Error: Field 'Description' needs a value, please provide one" in capsys.readouterr().err
        assert not task_file.exists()

    def test_list_empty(self, task_file, capsys):
        assert main(["list"]) == 0
        assert capsys.readouterr().out == "No tasks, all done!\n"

    def test_list(self, task_file, capsys):
        main(["add", "first"])
        main(["add", "second"])
        main(["complete", "2"])
        capsys.readouterr()

        assert main(["l"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Your tasks:",
            " 1: ◆ [·] first",
            " 2: ◆ [✓] second",
        ]

    def test_complete(self, task_file, capsys):
        main(["add", "Finish"])
        capsys.readouterr()

        assert main(["c", "1"]) == 0
        assert capsys.readouterr().out == "Completed Task: Finish\n"
        assert self.load(task_file).get(1).completed is True

    def test_complete_missing_task(self, task_file, capsys):
        assert main(["complete", "5"]) == 1
        assert "Error: Task with id 5 not found" in capsys.readouterr().err

    def test_up_and_down(self, task_file, capsys):
        main(["add", "Shift"])
        assert main(["up", "1"]) == 0
        assert self.load(task_file).get(1).priority == Priority.HIGH
        assert main(["down", "1"]) == 0
        assert main(["down", "1"]) == 0
        assert self.load(task_file).get(1).priority == Priority.LOW
        assert "Deprioritized Task: Shift" in capsys.readouterr().out

    def test_change(self, task_file, capsys):
        main(["add", "Old"])
        capsys.readouterr()

        assert main(["change", "1", "Brand", "new"]) == 0
        out = capsys.readouterr().out
        assert "Description of task 1 changed." in out
        assert 'Old: "Old"' in out
        assert 'New: "Brand new"' in out
        assert self.load(task_file).get(1).description == "Brand new"

    def test_delete_keeps_other_ids(self, task_file, capsys):
        for name in ("A", "B", "C"):
            main(["add", name])
        assert main(["d", "2"]) == 0
        main(["add", "D"])

        store = self.load(task_file)
        assert [(t.id, t.description) for t in store] == [(1, "A"), (3, "C"), (4, "D")]

    def test_clear(self, task_file, capsys):
        for name in ("A", "B", "C"):
            main(["add", name])
        main(["complete", "1"])
        main(["complete", "3"])
        capsys.readouterr()

        assert main(["clr"]) == 0
        assert capsys.readouterr().out == "Cleared 2 completed tasks\n"
        assert [t.description for t in self.load(task_file)] == ["B"]

    def test_failed_command_does_not_save(self, task_file, capsys):
        main(["add", "A"])
        before = task_file.read_text(encoding="utf-8")

        assert main(["delete", "9"]) == 1
        assert task_file.read_text(encoding="utf-8") == before

    def test_malformed_file(self, task_file, capsys):
        task_file.write_text("{not json")

        assert main(["list"]) == 1
        assert "Error: Error parsing/serializing JSON data" in capsys.readouterr().err
        assert task_file.read_text() == "{not json"

    def test_legacy_file_is_migrated_on_save(self, task_file, capsys):
        task_file.write_text(json.dumps([{"description": "old", "completed": False}]))

        assert main(["add", "new"]) == 0

        data = json.loads(task_file.read_text(encoding="utf-8"))
        assert [(r["id"], r["description"], r["priority"]) for r in data] == [
            (1, "old", "Medium"),
            (2, "new", "Medium"),
        ]

    def test_file_option_overrides_environment(self, task_file, tmp_path, capsys):
        other = tmp_path / "other.json"
        assert main(["--file", str(other), "add", "Elsewhere"]) == 0
        assert other.exists()
        assert not task_file.exists()

    def test_interactive(self, task_file, capsys, monkeypatch):
        lines = iter(["add from shell", "c 1", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        assert main(["interactive"]) == 0

        store = self.load(task_file)
        assert store.get(1).description == "from shell"
        assert store.get(1).completed is True
        assert "Added task with ID 1." in capsys.readouterr().out


class TestWithoutHomeDirectory:
    """The home directory is only needed for paths that are not given."""

    @pytest.fixture(autouse=True)
    def no_home(self, monkeypatch):
        def unknown_home(cls):
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Path, "home", classmethod(unknown_home))
        monkeypatch.delenv("TASKMASTER_FILE", raising=False)
        monkeypatch.delenv("TASKMASTER_HISTORY", raising=False)

    def test_file_option_is_enough(self, tmp_path, capsys):
        task_file = tmp_path / "tasks.json"

        assert main(["--file", str(task_file), "add", "No home"]) == 0
        assert main(["--file", str(task_file), "list"]) == 0
        assert " 1: ◆ [·] No home" in capsys.readouterr().out

    def test_missing_task_file_location_is_an_error(self, capsys):
        assert main(["list"]) == 1
        assert "Error: An unknown error occured: Could not determine home directory" in capsys.readouterr().err

    def test_interactive_runs_without_history(self, tmp_path, capsys, monkeypatch):
        task_file = tmp_path / "tasks.json"
        lines = iter(["add shell task", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        assert main(["--file", str(task_file), "interactive"]) == 0
        assert json.loads(task_file.read_text(encoding="utf-8"))[0]["description"] == "shell task"
