"""Presentation layer: renders a to-do snapshot and raises events.

The screen never touches the view model. It is handed the items and the
currently edited item, turns them into lines of text, and reports user
intents through TodoScreenCallbacks. The only state it owns is the draft
for the next item and the per-row icon tints.
"""
from __future__ import annotations
import random
import re
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence
from models import TodoIcon, TodoItem, generate_random_todo_item
from saved_state import Bundle
from theme import (color, tint, BOLD, REVERSE, HEADER_COLOR, ROW_NUMBER_COLOR,
                   EDIT_COLOR, DISABLED_COLOR, EMPTY_COLOR)

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
MIN_WIDTH = 32
TINT_RANGE = (0.3, 0.9)
EDITING_BANNER = "Editing item"


@dataclass
class TodoScreenCallbacks:
    on_add_item: Callable[[TodoItem], None]
    on_remove_item: Callable[[TodoItem], None]
    on_start_edit: Callable[[TodoItem], None]
    on_edit_item_change: Callable[[TodoItem], None]
    on_edit_done: Callable[[], None]

    @classmethod
    def bind(cls, view_model) -> "TodoScreenCallbacks":
        """Wire every event to the matching TodoViewModel method."""
        return cls(
            on_add_item=view_model.add_item,
            on_remove_item=view_model.remove_item,
            on_start_edit=view_model.on_edit_item_selected,
            on_edit_item_change=view_model.on_edit_item_change,
            on_edit_done=view_model.on_edit_done,
        )


@dataclass
class EntryDraft:
    """Text and icon typed for the next item, before it is submitted.

    Only `text` is saveable; the icon is remembered for the life of the
    screen and falls back to the default after a recreation.
    """
    text: str = ""
    icon: TodoIcon = field(default_factory=TodoIcon.default)

    @property
    def can_submit(self) -> bool:
        return bool(self.text.strip())

    @property
    def icons_visible(self) -> bool:
        return self.can_submit

    def submit(self, on_item_complete: Callable[[TodoItem], None]) -> Optional[TodoItem]:
        if not self.can_submit:
            return None
        item = TodoItem(self.text, self.icon)
        on_item_complete(item)
        self.text = ""
        self.icon = TodoIcon.default()
        return item

    def save(self) -> Bundle:
        return {"text": self.text}

    @classmethod
    def restore(cls, bundle: Optional[Bundle]) -> "EntryDraft":
        if not bundle:
            return cls()
        return cls(text=str(bundle.get("text", "")))


class TodoScreen:
    SAVED_STATE_KEY = "todo_screen"

    def __init__(self, callbacks: TodoScreenCallbacks, saved_state: Optional[Bundle] = None,
                 rng: Optional[random.Random] = None):
        self.callbacks = callbacks
        self.entry = EntryDraft.restore(saved_state)
        self._rng = rng or random.Random()
        self._tints: Dict[uuid.UUID, float] = {}
        self._items: Sequence[TodoItem] = ()
        self._editing: Optional[TodoItem] = None

    def save_instance_state(self) -> Bundle:
        return self.entry.save()

    # -------------------- composition --------------------
    def compose(self, items: Sequence[TodoItem], currently_editing: Optional[TodoItem],
                width: int = 80) -> List[str]:
        """Render a snapshot; later interactions refer to these rows."""
        self._items = tuple(items)
        self._editing = currently_editing
        width = max(MIN_WIDTH, width)
        lines: List[str] = []
        if currently_editing is None:
            lines.extend(self._entry_input(width))
        else:
            lines.append(color(EDITING_BANNER.center(width).rstrip(), HEADER_COLOR))
        lines.append(color('-' * width, HEADER_COLOR))
        if not self._items:
            lines.append(color('(no tasks yet)', EMPTY_COLOR))
        for number, item in enumerate(self._items, start=1):
            if currently_editing is not None and currently_editing.id == item.id:
                lines.extend(self._inline_editor(number, currently_editing, width))
            else:
                lines.append(self._row(number, item, width))
        lines.append('')
        lines.append(color('random', BOLD) + ' - Add random item')
        return lines

    def _entry_input(self, width: int) -> List[str]:
        button = '[ Add ]'
        button = color(button, BOLD) if self.entry.can_submit else color(button, DISABLED_COLOR)
        text = self.entry.text or color('<type a task>', DISABLED_COLOR)
        label = 'New task: '
        room = width - len(label) - len('[ Add ]') - 1
        lines = [label + _pad(_truncate(text, room), room) + ' ' + button]
        if self.entry.icons_visible:
            lines.append(_icon_row(self.entry.icon))
        return lines

    def _inline_editor(self, number: int, item: TodoItem, width: int) -> List[str]:
        prefix = color(f"{number}.", ROW_NUMBER_COLOR, BOLD) + ' > '
        actions = '[done] [rm]'
        room = width - _visible_len(prefix) - len(actions) - 1
        head = prefix + color(_pad(_truncate(item.task, room), room), EDIT_COLOR) + ' ' + actions
        return [head, _icon_row(item.icon)]

    def _row(self, number: int, item: TodoItem, width: int) -> str:
        prefix = color(f"{number}.", ROW_NUMBER_COLOR, BOLD) + ' '
        room = width - _visible_len(prefix) - 2
        return prefix + _pad(_truncate(item.task, room), room) + ' ' + color(item.icon.glyph, tint(self.tint_for(item)))

    def tint_for(self, item: TodoItem) -> float:
        """Random icon alpha, remembered per item id for the life of the screen."""
        if item.id not in self._tints:
            low, high = TINT_RANGE
            self._tints[item.id] = low + self._rng.random() * (high - low)
        return self._tints[item.id]

    # -------------------- entry interactions --------------------
    def type_entry_text(self, text: str) -> None:
        self.entry.text = text

    def pick_entry_icon(self, name: str) -> Optional[str]:
        if not self.entry.icons_visible:
            return "Type a task before choosing an icon."
        try:
            self.entry.icon = TodoIcon.parse(name)
        except ValueError as exc:
            return str(exc)
        return None

    def submit_entry(self) -> Optional[str]:
        if self.entry.submit(self.callbacks.on_add_item) is None:
            return "Title required."
        return None

    def add_random(self) -> TodoItem:
        item = generate_random_todo_item(self._rng)
        self.callbacks.on_add_item(item)
        return item

    # -------------------- row interactions --------------------
    def _row_item(self, row: int) -> Optional[TodoItem]:
        if 1 <= row <= len(self._items):
            return self._items[row - 1]
        return None

    def start_edit(self, row: int) -> Optional[str]:
        item = self._row_item(row)
        if item is None:
            return f'No task #{row}.'
        self.callbacks.on_start_edit(item)
        return None

    def remove_row(self, row: int) -> Optional[str]:
        item = self._row_item(row)
        if item is None:
            return f'No task #{row}.'
        self.callbacks.on_remove_item(item)
        return None

    # -------------------- inline editor interactions --------------------
    def change_edit_text(self, text: str) -> Optional[str]:
        if self._editing is None:
            return "Not editing; use 'edit <n>' first."
        self.callbacks.on_edit_item_change(self._editing.copy(task=text))
        return None

    def change_edit_icon(self, name: str) -> Optional[str]:
        if self._editing is None:
            return "Not editing; use 'edit <n>' first."
        try:
            icon = TodoIcon.parse(name)
        except ValueError as exc:
            return str(exc)
        self.callbacks.on_edit_item_change(self._editing.copy(icon=icon))
        return None

    def finish_edit(self) -> None:
        self.callbacks.on_edit_done()

    def remove_editing(self) -> Optional[str]:
        if self._editing is None:
            return "Not editing; use 'rm <n>' to remove a task."
        self.callbacks.on_remove_item(self._editing)
        return None

    @property
    def editing(self) -> bool:
        return self._editing is not None


def _icon_row(selected: TodoIcon) -> str:
    cells = []
    for icon in TodoIcon:
        label = f"{icon.glyph} {icon.name.lower()}"
        cells.append(color(f"[{label}]", REVERSE) if icon is selected else f" {label} ")
    return '   ' + ' '.join(cells)


def _visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


def _truncate(text: str, limit: int) -> str:
    limit = max(1, limit)
    if _visible_len(text) <= limit:
        return text
    return ANSI_RE.sub('', text)[:limit - 1] + '…'


def _pad(text: str, width: int) -> str:
    return text + ' ' * max(0, width - _visible_len(text))
