import pytest

from dock_state import DockItem, DockOrderState

A, B, C, D = (DockItem(name) for name in "ABCD")


@pytest.fixture
def state():
    return DockOrderState([A, B, C, D])


def test_initial_state():
    state = DockOrderState((A, B))
    assert state.items == [A, B]
    assert state.hovered_index is None
    assert state.dragged_index is None


def test_items_are_copied():
    source = [A, B]
    state = DockOrderState(source)
    state.commit_reorder(B, 0)
    assert source == [A, B]


def test_commit_reorder_moves_to_front(state):
    state.commit_reorder(C, 0)
    assert state.items == [C, A, B, D]


def test_commit_reorder_moves_backward(state):
    state.commit_reorder(A, 2)
    assert state.items == [B, C, A, D]


def test_commit_reorder_to_last_slot(state):
    state.commit_reorder(B, 3)
    assert state.items == [A, C, D, B]


def test_commit_reorder_same_slot_keeps_order(state):
    state.commit_reorder(B, 1)
    assert state.items == [A, B, C, D]


def test_commit_reorder_unknown_item(state):
    state.begin_drag(1)
    state.update_hover(2)
    state.commit_reorder(DockItem("Z"), 0)
    assert state.items == [A, B, C, D]
    assert state.hovered_index is None
    assert state.dragged_index is None


@pytest.mark.parametrize("target", [-1, 4, 10, None])
def test_commit_reorder_invalid_target(state, target):
    state.commit_reorder(C, target)
    assert state.items == [A, B, C, D]


def test_commit_reorder_clears_gesture(state):
    state.begin_drag(2)
    state.update_hover(0)
    state.commit_reorder(C, 0)
    assert (state.hovered_index, state.dragged_index) == (None, None)


def test_commit_reorder_equal_value_is_found(state):
    state.commit_reorder(DockItem("C"), 0)
    assert state.items == [C, A, B, D]


def test_commit_reorder_duplicates_move_first_match():
    state = DockOrderState([A, B, A])
    state.commit_reorder(A, 1)
    assert state.items == [B, A, A]


def test_begin_drag(state):
    state.begin_drag(2)
    assert state.dragged_index == 2
    assert state.hovered_index is None


@pytest.mark.parametrize("index", [-1, 4, None])
def test_begin_drag_invalid_index_ignored(state, index):
    state.begin_drag(index)
    assert state.dragged_index is None


def test_update_hover_always_accepts(state):
    state.begin_drag(0)
    for target in range(4):
        state.update_hover(target)
        assert state.hovered_index == target
    assert state.dragged_index == 0


def test_update_hover_out_of_range_ignored(state):
    state.update_hover(1)
    state.update_hover(7)
    assert state.hovered_index == 1


def test_end_hover_after_begin_drag(state):
    state.begin_drag(3)
    state.update_hover(1)
    state.end_hover()
    assert (state.hovered_index, state.dragged_index) == (None, None)


def test_end_hover_is_idempotent(state):
    state.begin_drag(1)
    state.update_hover(2)
    state.end_hover()
    once = (list(state.items), state.hovered_index, state.dragged_index)
    state.end_hover()
    assert (list(state.items), state.hovered_index, state.dragged_index) == once


def test_pointer_hover_leaves_drag_alone(state):
    state.begin_drag(0)
    state.enter_item(2)
    assert state.hovered_index == 2
    state.exit_item()
    assert state.hovered_index is None
    assert state.dragged_index == 0


def test_enter_item_invalid_index_ignored(state):
    state.enter_item(9)
    assert state.hovered_index is None


def test_index_of(state):
    assert state.index_of(C) == 2
    assert state.index_of(DockItem("Z")) is None


def test_listener_called_on_change(state):
    calls = []
    state.add_listener(calls.append)
    state.enter_item(1)
    state.commit_reorder(D, 0)
    assert calls == [state, state]


def test_listener_not_called_without_change(state):
    calls = []
    state.add_listener(calls.append)
    state.end_hover()
    state.begin_drag(10)
    state.commit_reorder(DockItem("Z"), 0)
    assert calls == []


def test_listener_added_once_and_removed(state):
    calls = []
    state.add_listener(calls.append)
    state.add_listener(calls.append)
    state.enter_item(0)
    assert len(calls) == 1
    state.remove_listener(calls.append)
    state.enter_item(1)
    assert len(calls) == 1


def test_dock_item_equality():
    assert DockItem("Phone", "call-start") == DockItem("Phone", "call-start")
    assert DockItem("Phone", "call-start") != DockItem("Phone", "")


def test_dock_item_config():
    item = DockItem.from_config({"name": "Camera", "icon": "camera-photo"})
    assert item == DockItem("Camera", "camera-photo")
    assert item.to_config() == {"name": "Camera", "icon": "camera-photo"}
    assert DockItem.from_config({"name": "Notes"}).icon == ""


@pytest.mark.parametrize("config", [
    {},
    {"name": ""},
    {"name": "   "},
    {"name": 3},
    {"name": "Camera", "icon": 5},
    ["Camera"],
])
def test_dock_item_invalid_config(config):
    with pytest.raises(ValueError):
        DockItem.from_config(config)
