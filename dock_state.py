"""
Order and gesture state of the dock.

DockOrderState holds the ordered dock items together with the transient
hover/drag indices. The dock window reports pointer and drag events into it
and re-renders from the listener callbacks.

Every operation is total: invalid indices and unknown items are ignored
rather than raised, so a fast or abandoned gesture can never break the dock.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DockItem:
    """A dock entry. Identity is by value, reordering finds items by equality."""
    name: str
    icon: str = ""

    @classmethod
    def from_config(cls, config):
        """Build an item from an items.json entry."""
        if not isinstance(config, dict):
            raise ValueError(f"Item entry must be an object, got {type(config).__name__}")
        name = config.get('name', '')
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Item entry has no name")
        icon = config.get('icon', '') or ''
        if not isinstance(icon, str):
            raise ValueError(f"Item '{name}' has an invalid icon value")
        return cls(name=name, icon=icon)

    def to_config(self):
        return {'name': self.name, 'icon': self.icon}


class DockOrderState:
    """Ordered dock items plus the hovered and dragged indices.

    Duplicate items are accepted; a reorder by value then moves the first
    equal item.
    """

    def __init__(self, items=()):
        self.items = list(items)
        self.hovered_index = None
        self.dragged_index = None
        self._listeners = []

    def add_listener(self, callback):
        """Register callback(state), called after each mutation that changed the state."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _snapshot(self):
        return (list(self.items), self.hovered_index, self.dragged_index)

    def _notify_if_changed(self, before):
        if self._snapshot() == before:
            return
        for callback in list(self._listeners):
            callback(self)

    def _is_valid_index(self, index):
        return isinstance(index, int) and 0 <= index < len(self.items)

    def index_of(self, item):
        """Index of the first item equal to item, or None."""
        try:
            return self.items.index(item)
        except ValueError:
            return None

    def begin_drag(self, item_index):
        if not self._is_valid_index(item_index):
            return
        before = self._snapshot()
        self.dragged_index = item_index
        self._notify_if_changed(before)

    def update_hover(self, target_index):
        """A dragged item moved over a drop slot. Any slot accepts any item."""
        if not self._is_valid_index(target_index):
            return
        before = self._snapshot()
        self.hovered_index = target_index
        self._notify_if_changed(before)

    def end_hover(self):
        """The drag left the drop region without dropping."""
        before = self._snapshot()
        self.hovered_index = None
        self.dragged_index = None
        self._notify_if_changed(before)

    def enter_item(self, item_index):
        """Plain pointer hover, no drag involved."""
        if not self._is_valid_index(item_index):
            return
        before = self._snapshot()
        self.hovered_index = item_index
        self._notify_if_changed(before)

    def exit_item(self):
        before = self._snapshot()
        self.hovered_index = None
        self._notify_if_changed(before)

    def commit_reorder(self, dropped_item, target_index):
        """Move dropped_item to target_index and clear the gesture state.

        The target is a position in the list after the item has been removed,
        so dropping C of [A, B, C, D] at 0 gives [C, A, B, D]. An unknown item
        or an invalid target leaves the order as it is.
        """
        before = self._snapshot()
        current_index = self.index_of(dropped_item)
        if current_index is not None and self._is_valid_index(target_index):
            item = self.items.pop(current_index)
            self.items.insert(target_index, item)
        self.hovered_index = None
        self.dragged_index = None
        self._notify_if_changed(before)
