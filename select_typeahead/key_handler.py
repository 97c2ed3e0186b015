from __future__ import annotations

import logging

from .context import SelectContext
from .key_types import Action, physical_code

log = logging.getLogger(__name__)


class SelectKeyHandler:
    """Translate key presses into :class:`SelectContext` operations.

    ``key`` may be an :class:`Action`, an action name, a single character,
    or a pynput ``Key``/``KeyCode``.
    """

    def __init__(self, ctx: SelectContext) -> None:
        self.ctx = ctx

    @staticmethod
    def _resolve(key) -> tuple[Action | None, str | None]:
        if isinstance(key, Action):
            return key, None
        if isinstance(key, str):
            if len(key) == 1:
                return None, key
            return Action.from_os_key(key), None
        char = getattr(key, "char", None)
        if isinstance(char, str) and len(char) == 1:
            return None, char
        return Action.from_os_key(key), None

    def on_key(self, key, code: str | None = None) -> None:
        action, char = self._resolve(key)
        if code is None:
            code = physical_code(key)
        log.debug("Key %r (code=%s, open=%s)", char or action, code, self.ctx.open)

        if char is not None:
            if code is not None:
                self.ctx.learn_from_keyboard_event(code, char)
            if char == " ":
                action = Action.space
            else:
                self.ctx.add_to_typeahead_buffer(char)
                return

        if action is None:
            return

        if not self.ctx.open:
            self._on_closed(action)
        else:
            self._on_open(action)

    def _on_closed(self, action: Action) -> None:
        focus = self.ctx.focus_state
        if action == Action.up:
            self.ctx.set_open(True)
            focus.focus_last()
        elif action == Action.down:
            self.ctx.set_open(True)
            focus.focus_first()
        elif action in (Action.enter, Action.space):
            self.ctx.set_open(True)
            if focus.current_focus is None:
                focus.focus_first()

    def _on_open(self, action: Action) -> None:
        ctx = self.ctx
        focus = ctx.focus_state
        if action in (Action.up, Action.down, Action.home, Action.end):
            ctx.clear_typeahead()
            {
                Action.up: focus.focus_prev,
                Action.down: focus.focus_next,
                Action.home: focus.focus_first,
                Action.end: focus.focus_last,
            }[action]()
        elif action == Action.space:
            ctx.select_current_item()
        elif action == Action.enter:
            ctx.select_current_item()
            ctx.set_open(False)
        elif action == Action.esc:
            ctx.set_open(False)
