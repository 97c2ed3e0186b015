"""State shared by one select list: options, focus and the typeahead buffer."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .adaptive import AdaptiveKeyboard
from .config import TypeaheadConfig
from .layouts import KeyboardLayout
from .options import FocusState, OptionList
from .text_search import CostModel, best_match

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectCursor:
    value: Any
    text_value: str


class TimerRoot:
    """``after``/``after_cancel`` scheduler backed by :class:`threading.Timer`.

    Mirrors the tkinter API so a Tk root can be passed in its place.
    """

    def __init__(self) -> None:
        self._timers: dict[str, threading.Timer] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def after(self, ms: int, func: Callable[[], None]) -> str:
        after_id = f"after#{next(self._ids)}"

        def _fire() -> None:
            with self._lock:
                if self._timers.pop(after_id, None) is None:
                    return  # cancelled
            func()

        timer = threading.Timer(ms / 1000, _fire)
        timer.daemon = True
        with self._lock:
            self._timers[after_id] = timer
        timer.start()
        return after_id

    def after_cancel(self, after_id: str) -> None:
        with self._lock:
            timer = self._timers.pop(after_id, None)
        if timer is not None:
            timer.cancel()


def resolve_cost_model(config: TypeaheadConfig, keyboard: AdaptiveKeyboard) -> CostModel:
    """Static layout named in ``config``, or the adaptive keyboard."""
    if config.layout.lower() == "adaptive":
        return keyboard
    return KeyboardLayout.from_name(config.layout)


class SelectContext:
    def __init__(
        self,
        options: OptionList | None = None,
        keyboard: AdaptiveKeyboard | None = None,
        root: Any = None,
        config: TypeaheadConfig | None = None,
        on_select: Optional[Callable[[Any, str], None]] = None,
    ) -> None:
        self.config = config or TypeaheadConfig()
        self.options = options if options is not None else OptionList()
        self.keyboard = keyboard or AdaptiveKeyboard.from_config(self.config)
        self.cost_model = resolve_cost_model(self.config, self.keyboard)
        self.focus_state = FocusState(self.options, roving_loop=self.config.roving_loop)
        self.root = root or TimerRoot()
        self.on_select = on_select

        self.open = False
        self.cursor: SelectCursor | None = None
        self.typeahead_buffer = ""
        self._clear_id: str | None = None
        # The idle timer may fire on another thread.
        self._lock = threading.RLock()

    # ───────── open / close ──────────────────────────────────────────────

    def set_open(self, is_open: bool) -> None:
        if is_open == self.open:
            return
        self.open = is_open
        log.debug("Select %s", "opened" if is_open else "closed")
        if not is_open:
            self.clear_typeahead()

    def toggle(self) -> None:
        self.set_open(not self.open)

    # ───────── learning ──────────────────────────────────────────────────

    def learn_from_keyboard_event(self, physical_code: str, logical_char: str) -> None:
        """Learn which character the physical key ``physical_code`` produces."""
        self.keyboard.learn_from_event(physical_code, logical_char)

    def record_user_correction(self, typed: str, intended: str) -> None:
        """Record a "did you mean" correction to improve future matching."""
        self.keyboard.record_correction(typed, intended)

    # ───────── typeahead ─────────────────────────────────────────────────

    def _cancel_clear(self) -> None:
        if self._clear_id is not None:
            self.root.after_cancel(self._clear_id)
            self._clear_id = None

    def clear_typeahead(self) -> None:
        with self._lock:
            self._cancel_clear()
            if self.typeahead_buffer:
                log.debug("Typeahead buffer %r cleared", self.typeahead_buffer)
            self.typeahead_buffer = ""

    def _on_idle(self) -> None:
        with self._lock:
            self._clear_id = None
            self.typeahead_buffer = ""

    def add_to_typeahead_buffer(self, text: str) -> int | None:
        """Append ``text`` and move focus to the best matching option.

        Restarts the idle timer that empties the buffer. Ignored while the
        list is closed. Returns the focused index.
        """
        if not self.open or not text:
            return self.focus_state.current_focus

        with self._lock:
            self._cancel_clear()
            self.typeahead_buffer += text
            typeahead = self.typeahead_buffer
            self._clear_id = self.root.after(self.config.typeahead_timeout_ms, self._on_idle)

        match = best_match(self.cost_model, typeahead, self.options)
        log.debug("Typeahead %r matched %s", typeahead, match)
        if match is not None:
            self.focus_state.set_focus(match)
        return self.focus_state.current_focus

    # ───────── selection ─────────────────────────────────────────────────

    def select_current_item(self) -> SelectCursor | None:
        """Select the focused option if the list is open."""
        if not self.open:
            return None
        option = self.options.get(self.focus_state.current_focus)
        if option is None or option.disabled:
            return None
        self.cursor = SelectCursor(option.value, option.text_value)
        log.debug("Selected %r", option.text_value)
        if self.on_select is not None:
            self.on_select(option.value, option.text_value)
        return self.cursor
