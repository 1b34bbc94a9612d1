"""Data models for the terminal to-do application.

Items are immutable values: editing an item produces a new TodoItem that
keeps the original id, so the screen can find "the same" row after a change.
"""
from __future__ import annotations
import random
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class TodoIcon(Enum):
    """Display-only icons a task can carry (glyph, description)."""
    SQUARE = ("□", "Expand")
    DONE = ("✓", "Done")
    EVENT = ("◷", "Event")
    PRIVACY = ("⚿", "Privacy")
    TRASH = ("♻", "Restore")

    @property
    def glyph(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]

    @classmethod
    def default(cls) -> "TodoIcon":
        return cls.SQUARE

    @classmethod
    def parse(cls, name: str) -> "TodoIcon":
        """Resolve a typed icon name or unique prefix (case-insensitive)."""
        key = name.strip().upper()
        if not key:
            raise ValueError("Icon name required.")
        if key in cls.__members__:
            return cls.__members__[key]
        matches = [icon for icon in cls if icon.name.startswith(key)]
        if len(matches) != 1:
            raise ValueError(f"Unknown icon: {name}")
        return matches[0]


@dataclass(frozen=True)
class TodoItem:
    """A single to-do entry.

    Fields:
        task: Free text shown in the row.
        icon: One of TodoIcon; display only.
        id: Process-unique id assigned at creation, never changed by edits.
    """
    task: str
    icon: TodoIcon = field(default_factory=TodoIcon.default)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def copy(self, **changes) -> "TodoItem":
        return replace(self, **changes)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"TodoItem(task={self.task!r}, icon={self.icon.name}, id={str(self.id)[:8]})"


RANDOM_TASKS = (
    "Learn compose",
    "Learn state",
    "Build dynamic UIs",
    "Learn Unidirectional Data Flow",
    "Integrate LiveData",
    "Integrate ViewModel",
    "Remember to savedState!",
    "Build stateless composables",
    "Use state from stateless composables",
)


def generate_random_todo_item(rng: Optional[random.Random] = None) -> TodoItem:
    """Build an item with a canned task and a random icon."""
    rng = rng or random
    return TodoItem(rng.choice(RANDOM_TASKS), rng.choice(list(TodoIcon)))
