"""Command-line interface loop for the to-do list.

The CLI plays the host role: it owns the view model reference, builds the
screen with callbacks bound to it, and recomposes whenever the view model
reports a change. The screen is recreated on terminal resize; its saved
instance state carries the draft text across.
"""
import logging
import os
import random
import shutil
from typing import List, Optional
from todos import TodoViewModel
from screen import TodoScreen, TodoScreenCallbacks
from saved_state import SavedStateRegistry

logger = logging.getLogger(__name__)

DEFAULT_SIZE = (80, 24)


# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


def _terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size(DEFAULT_SIZE)


class CLI:
    def __init__(self, view_model: TodoViewModel, alt_screen: bool = True,
                 registry: Optional[SavedStateRegistry] = None,
                 rng: Optional[random.Random] = None):
        self.view_model: TodoViewModel = view_model
        self.alt_screen: bool = alt_screen
        self.registry: SavedStateRegistry = registry or SavedStateRegistry()
        self._rng = rng
        self._size = _terminal_size()
        self.frame: List[str] = []
        self.message: Optional[str] = None
        self.screen: TodoScreen = self._build_screen()
        self._unsubscribe = view_model.subscribe(self._on_state_changed)
        self.recompose()

    # -------------------- composition --------------------
    def _build_screen(self) -> TodoScreen:
        saved = self.registry.consume(TodoScreen.SAVED_STATE_KEY)
        return TodoScreen(TodoScreenCallbacks.bind(self.view_model), saved_state=saved, rng=self._rng)

    def _on_state_changed(self, view_model: TodoViewModel) -> None:
        logger.debug("state changed: %s", view_model)
        self.recompose()

    def recompose(self) -> None:
        self.frame = self.screen.compose(
            self.view_model.items, self.view_model.currently_editing, self._size.columns
        )

    def recreate_screen(self) -> None:
        """Tear the screen down and build a fresh one from its saved state."""
        self.registry.save(TodoScreen.SAVED_STATE_KEY, self.screen.save_instance_state())
        self.screen = self._build_screen()
        self.recompose()
        logger.info("screen recreated at %sx%s", self._size.columns, self._size.lines)

    def _check_reconfiguration(self) -> None:
        size = _terminal_size()
        if size != self._size:
            self._size = size
            self.recreate_screen()

    def close(self) -> None:
        self._unsubscribe()

    # -------------------- main loop --------------------
    def draw(self) -> None:
        _clear_screen()
        print("To-do list:")
        for line in self.frame:
            print(line)
        if self.message:
            print(f"\n{self.message}")
            self.message = None

    def run(self) -> None:
        """Main REPL loop; the list is cleared/redrawn each cycle.

        Uses the terminal's alternate screen (if enabled) so prior renders
        do not remain in scrollback history.
        """
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                self._check_reconfiguration()
                self.draw()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the list...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            self.close()
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return
        cmd = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ''
        if cmd == 'type':
            self.message = self._cmd_type(rest)
        elif cmd == 'icon':
            self.message = self._cmd_icon(rest)
        elif cmd == 'add':
            self.message = self._cmd_add(rest)
        elif cmd == 'edit':
            self.message = self._cmd_edit(rest)
        elif cmd == 'text':
            self.message = self._cmd_text(rest)
        elif cmd == 'done':
            self.screen.finish_edit()
        elif cmd in ('rm', 'remove'):
            self.message = self._cmd_rm(rest)
        elif cmd == 'random':
            self.screen.add_random()
        else:
            self.message = "Unknown command. Type 'help' for instructions."

    # ---- individual command helpers ----
    def _cmd_type(self, text: str) -> Optional[str]:
        if self.screen.editing:
            return "Finish editing first ('done')."
        self.screen.type_entry_text(text)
        self.recompose()
        return None

    def _cmd_icon(self, name: str) -> Optional[str]:
        if not name:
            return "Usage: icon <square|done|event|privacy|trash>"
        if self.screen.editing:
            return self.screen.change_edit_icon(name)
        result = self.screen.pick_entry_icon(name)
        self.recompose()
        return result

    def _cmd_add(self, text: str) -> Optional[str]:
        if self.screen.editing:
            return "Finish editing first ('done')."
        if text:  # inline shorthand
            self.screen.type_entry_text(text)
        result = self.screen.submit_entry()
        self.recompose()
        return result

    def _cmd_edit(self, raw: str) -> Optional[str]:
        row = _parse_row(raw)
        if row is None:
            return "Usage: edit <n>"
        return self.screen.start_edit(row)

    def _cmd_text(self, text: str) -> Optional[str]:
        return self.screen.change_edit_text(text)

    def _cmd_rm(self, raw: str) -> Optional[str]:
        if not raw:
            return self.screen.remove_editing()
        row = _parse_row(raw)
        if row is None:
            return "Invalid row."
        return self.screen.remove_row(row)

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  type <text>         Set the text of the next task")
        print("  icon <name>         Pick an icon (square/done/event/privacy/trash)")
        print("  add                 Add the typed task (disabled while text is blank)")
        print("  add <text...>       Shorthand: type and add in one step")
        print("  random              Add a random task")
        print("  edit <n>            Open task n in the inline editor")
        print("  text <text>         Replace the text of the task being edited")
        print("  done                Close the inline editor")
        print("  rm <n>              Remove task n (or 'rm' alone while editing)")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Exit (the list is not saved)")


def _parse_row(raw: str) -> Optional[int]:
    raw = raw.strip().rstrip('.')
    if not raw.isdigit():
        return None
    return int(raw)
