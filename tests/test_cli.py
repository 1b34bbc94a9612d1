"""Tests for the CLI host: command dispatch, recomposition and recreation."""

import random

import pytest

import cli as cli_module
from cli import CLI
from models import TodoIcon, TodoItem
from saved_state import SavedStateRegistry
from screen import ANSI_RE, EDITING_BANNER
from todos import TodoViewModel


def frame_text(app):
    return "\n".join(ANSI_RE.sub('', line) for line in app.frame)


@pytest.fixture
def vm():
    return TodoViewModel()


@pytest.fixture
def app(vm):
    return CLI(vm, alt_screen=False, rng=random.Random(5))


class TestCommands:
    def test_add_inline(self, app, vm):
        app.handle_command("add buy milk")
        assert [item.task for item in vm.items] == ["buy milk"]
        assert app.message is None
        assert "1. buy milk" in frame_text(app)

    def test_type_icon_then_add(self, app, vm):
        app.handle_command("type walk the dog")
        assert "walk the dog" in frame_text(app)
        app.handle_command("icon event")
        app.handle_command("add")
        assert vm.items[0].task == "walk the dog"
        assert vm.items[0].icon is TodoIcon.EVENT
        assert app.screen.entry.text == ""

    def test_add_blank_is_refused(self, app, vm):
        app.handle_command("add")
        assert vm.items == ()
        assert app.message == "Title required."

    def test_icon_before_text(self, app):
        app.handle_command("icon done")
        assert app.message == "Type a task before choosing an icon."

    def test_edit_text_done(self, app, vm):
        app.handle_command("add buy milk")
        original = vm.items[0]
        app.handle_command("edit 1")
        assert vm.currently_editing == original
        assert EDITING_BANNER in frame_text(app)
        app.handle_command("text buy oat milk")
        app.handle_command("icon done")
        assert vm.items[0] == original.copy(task="buy oat milk", icon=TodoIcon.DONE)
        app.handle_command("done")
        assert vm.currently_editing is None
        assert "New task:" in frame_text(app)

    def test_add_refused_while_editing(self, app, vm):
        app.handle_command("add one")
        app.handle_command("edit 1")
        app.handle_command("add two")
        assert len(vm.items) == 1
        assert app.message == "Finish editing first ('done')."

    def test_rm_row_and_rm_editing(self, app, vm):
        for task in ("a", "b", "c"):
            app.handle_command(f"add {task}")
        app.handle_command("rm 2")
        assert [item.task for item in vm.items] == ["a", "c"]
        app.handle_command("edit 2")
        app.handle_command("rm")
        assert [item.task for item in vm.items] == ["a"]
        assert vm.currently_editing is None

    @pytest.mark.parametrize("line,message", [
        ("edit x", "Usage: edit <n>"),
        ("edit 9", "No task #9."),
        ("rm x", "Invalid row."),
        ("rm", "Not editing; use 'rm <n>' to remove a task."),
        ("text hello", "Not editing; use 'edit <n>' first."),
        ("icon", "Usage: icon <square|done|event|privacy|trash>"),
        ("fly", "Unknown command. Type 'help' for instructions."),
    ])
    def test_errors(self, app, vm, line, message):
        app.handle_command(line)
        assert app.message == message
        assert vm.items == ()

    def test_random(self, app, vm):
        app.handle_command("random")
        assert len(vm.items) == 1
        assert "1. " in frame_text(app)

    def test_external_change_recomposes(self, app, vm):
        vm.add_item(TodoItem("added elsewhere"))
        assert "added elsewhere" in frame_text(app)

    def test_close_stops_listening(self, app, vm):
        app.close()
        vm.add_item(TodoItem("unseen"))
        assert "unseen" not in frame_text(app)


class TestReconfiguration:
    def test_draft_text_survives_recreation(self, app):
        app.handle_command("type half typed")
        app.handle_command("icon privacy")
        old_screen = app.screen
        app.recreate_screen()
        assert app.screen is not old_screen
        assert app.screen.entry.text == "half typed"
        assert app.screen.entry.icon is TodoIcon.SQUARE

    def test_resize_triggers_recreation(self, app, monkeypatch):
        app.handle_command("type keep me")
        monkeypatch.setattr(cli_module, "_terminal_size", lambda: cli_module.os.terminal_size((100, 40)))
        old_screen = app.screen
        app._check_reconfiguration()
        assert app.screen is not old_screen
        assert app.screen.entry.text == "keep me"

    def test_shared_registry_is_consumed(self, vm):
        registry = SavedStateRegistry()
        registry.save("todo_screen", {"text": "restored"})
        app = CLI(vm, alt_screen=False, registry=registry)
        assert app.screen.entry.text == "restored"
        assert "todo_screen" not in registry


class TestRun:
    def test_exit(self, app, monkeypatch, capsys):
        lines = iter(["add buy milk", "", "exit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        app.run()
        out = capsys.readouterr().out
        assert "buy milk" in out
        assert out.rstrip().endswith("Goodbye.")

    def test_eof(self, app, monkeypatch, capsys):
        def raise_eof(prompt=""):
            raise EOFError
        monkeypatch.setattr("builtins.input", raise_eof)
        app.run()
        assert "Interrupted. Goodbye." in capsys.readouterr().out

    def test_help(self, app, monkeypatch, capsys):
        lines = iter(["help", "", "exit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        app.run()
        assert "Commands:" in capsys.readouterr().out
