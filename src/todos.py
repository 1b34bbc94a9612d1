"""State holder for the to-do screen.

TodoViewModel owns the item list and the single item under edit. Consumers
read `items` / `currently_editing` and change state only through the event
methods; listeners registered with `subscribe` are told after each change.
"""
import logging
from typing import Callable, List, Optional, Tuple
from models import TodoItem

logger = logging.getLogger(__name__)

NO_EDIT = -1

Listener = Callable[["TodoViewModel"], None]


class EditContractError(RuntimeError):
    """An edit was pushed for an item that is not the one being edited."""


class TodoViewModel:
    def __init__(self) -> None:
        self._items: List[TodoItem] = []
        self._edit_position: int = NO_EDIT
        self._listeners: List[Listener] = []

    # -------------------- state --------------------
    @property
    def items(self) -> Tuple[TodoItem, ...]:
        return tuple(self._items)

    @property
    def currently_editing(self) -> Optional[TodoItem]:
        """Item at the edit position, or None when nothing valid is selected."""
        if 0 <= self._edit_position < len(self._items):
            return self._items[self._edit_position]
        return None

    # -------------------- observation --------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _snapshot(self):
        return tuple(self._items), self.currently_editing

    def _notify_if_changed(self, before) -> None:
        if before == self._snapshot():
            return
        for listener in list(self._listeners):
            listener(self)

    def _index_of(self, item: TodoItem) -> int:
        for idx, existing in enumerate(self._items):
            if existing.id == item.id:
                return idx
        return NO_EDIT

    # -------------------- events --------------------
    def add_item(self, item: TodoItem) -> None:
        before = self._snapshot()
        self._items.append(item)
        logger.debug("added %s (%d items)", item.id, len(self._items))
        self._notify_if_changed(before)

    def remove_item(self, item: TodoItem) -> None:
        """Remove the item with `item.id` if present, then end any edit."""
        before = self._snapshot()
        idx = self._index_of(item)
        if idx != NO_EDIT:
            del self._items[idx]
            logger.debug("removed %s", item.id)
        else:
            logger.debug("remove ignored, %s not found", item.id)
        self._edit_position = NO_EDIT
        self._notify_if_changed(before)

    def on_edit_done(self) -> None:
        before = self._snapshot()
        self._edit_position = NO_EDIT
        self._notify_if_changed(before)

    def on_edit_item_selected(self, item: TodoItem) -> None:
        before = self._snapshot()
        self._edit_position = self._index_of(item)
        logger.debug("editing position -> %d", self._edit_position)
        self._notify_if_changed(before)

    def on_edit_item_change(self, item: TodoItem) -> None:
        current = self.currently_editing
        if current is None:
            logger.error("edit change for %s with no item under edit", item.id)
            raise EditContractError("No item is currently being edited.")
        if current.id != item.id:
            logger.error("edit change for %s while editing %s", item.id, current.id)
            raise EditContractError(
                "You can only change an item with the same id as the currently edited item."
            )
        before = self._snapshot()
        self._items[self._edit_position] = item
        self._notify_if_changed(before)

    def __str__(self) -> str:
        editing = self.currently_editing
        label = editing.task if editing else 'nothing'
        return f'Todo: {len(self._items)} items, editing {label}'
