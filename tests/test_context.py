import threading

import pytest

from select_typeahead.config import TypeaheadConfig
from select_typeahead.context import SelectContext, SelectCursor, TimerRoot, resolve_cost_model
from select_typeahead.adaptive import AdaptiveKeyboard
from select_typeahead.layouts import KeyboardLayout
from select_typeahead.options import OptionState


def test_typeahead_focuses_best_match(fruit, root):
    ctx = SelectContext(fruit, root=root)
    ctx.set_open(True)
    assert ctx.add_to_typeahead_buffer("b") == 1
    assert ctx.add_to_typeahead_buffer("a") == 1
    assert ctx.typeahead_buffer == "ba"
    assert ctx.focus_state.current_focus == 1


def test_typeahead_restarts_idle_timer(fruit, root):
    ctx = SelectContext(fruit, root=root, config=TypeaheadConfig(typeahead_timeout_ms=250))
    ctx.set_open(True)
    ctx.add_to_typeahead_buffer("c")
    ctx.add_to_typeahead_buffer("h")
    assert len(root.scheduled) == 1
    (ms, _), = root.scheduled.values()
    assert ms == 250

    root.fire_all()
    assert ctx.typeahead_buffer == ""
    # focus stays where the typeahead put it
    assert ctx.focus_state.current_focus == 2


def test_buffer_starts_over_after_idle(fruit, root):
    ctx = SelectContext(fruit, root=root)
    ctx.set_open(True)
    ctx.add_to_typeahead_buffer("c")
    root.fire_all()
    ctx.add_to_typeahead_buffer("a")
    assert ctx.typeahead_buffer == "a"
    assert ctx.focus_state.current_focus == 0


def test_closing_clears_buffer(fruit, root):
    ctx = SelectContext(fruit, root=root)
    ctx.set_open(True)
    ctx.add_to_typeahead_buffer("b")
    ctx.set_open(False)
    assert ctx.typeahead_buffer == ""
    assert root.scheduled == {}


def test_typing_while_closed_is_ignored(fruit, root):
    ctx = SelectContext(fruit, root=root)
    assert ctx.add_to_typeahead_buffer("b") is None
    assert ctx.typeahead_buffer == ""
    assert root.scheduled == {}


def test_select_current_item(fruit, root):
    selected = []
    ctx = SelectContext(fruit, root=root, on_select=lambda value, text: selected.append((value, text)))
    ctx.set_open(True)
    ctx.add_to_typeahead_buffer("c")
    cursor = ctx.select_current_item()
    assert cursor == SelectCursor("cherry", "Cherry")
    assert ctx.cursor == cursor
    assert selected == [("cherry", "Cherry")]


def test_select_requires_open_list_and_focus(fruit, root):
    ctx = SelectContext(fruit, root=root)
    assert ctx.select_current_item() is None
    ctx.set_open(True)
    assert ctx.select_current_item() is None
    ctx.focus_state.set_focus(0)
    ctx.set_open(False)
    assert ctx.select_current_item() is None


def test_learning_and_corrections_reach_keyboard(fruit, root):
    ctx = SelectContext(fruit, root=root)
    ctx.learn_from_keyboard_event("KeyQ", "q")
    ctx.record_user_correction("x", "ж")
    assert ctx.keyboard.physical_mappings == {"KeyQ": "q"}
    assert ctx.keyboard.learned_cost("x", "ж") == pytest.approx(0.9)


def test_disabled_options_never_take_typeahead_focus(root):
    ctx = SelectContext(root=root)
    ctx.options.add(OptionState(0, "apple", "Apple", disabled=True))
    ctx.options.add(OptionState(1, "banana", "Banana"))
    ctx.set_open(True)
    assert ctx.add_to_typeahead_buffer("a") == 1


def test_static_layout_from_config():
    keyboard = AdaptiveKeyboard()
    assert resolve_cost_model(TypeaheadConfig(), keyboard) is keyboard
    assert resolve_cost_model(TypeaheadConfig(layout="Dvorak"), keyboard) is KeyboardLayout.DVORAK
    with pytest.raises(ValueError):
        resolve_cost_model(TypeaheadConfig(layout="nope"), keyboard)


def test_timer_root_fires_and_cancels():
    root = TimerRoot()
    fired = threading.Event()
    root.after(10, fired.set)
    assert fired.wait(2.0)

    cancelled = threading.Event()
    after_id = root.after(200, cancelled.set)
    root.after_cancel(after_id)
    assert not cancelled.wait(0.4)
