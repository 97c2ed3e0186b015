from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Iterator, Optional

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionState:
    index: int                 # tab order key, unique within one list
    value: Any
    text_value: str            # text the typeahead is matched against
    disabled: bool = False
    id: Optional[str] = None

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"option index must be non-negative (got {self.index})")


class OptionList(Sequence[OptionState]):
    """Options ordered by :attr:`OptionState.index`.

    Indices need not be contiguous. Positional access (``options[0]``)
    follows index order; use :meth:`get` to look an option up by index.
    """

    def __init__(self, options: Iterable[OptionState] = ()):
        self._keys: list[int] = []
        self._items: dict[int, OptionState] = {}
        for option in options:
            self.add(option)

    def __len__(self) -> int:
        return len(self._keys)

    def __getitem__(self, position):
        if isinstance(position, slice):
            return [self._items[k] for k in self._keys[position]]
        return self._items[self._keys[position]]

    def __iter__(self) -> Iterator[OptionState]:
        for key in self._keys:
            yield self._items[key]

    def __contains__(self, option) -> bool:
        if isinstance(option, OptionState):
            return self._items.get(option.index) == option
        return option in self._items

    def add(self, option: OptionState) -> None:
        """Register ``option``, replacing any option with the same index."""
        if option.index not in self._items:
            bisect.insort(self._keys, option.index)
        self._items[option.index] = option

    def remove(self, index: int) -> OptionState | None:
        option = self._items.pop(index, None)
        if option is not None:
            del self._keys[bisect.bisect_left(self._keys, index)]
        return option

    def get(self, index: int | None) -> OptionState | None:
        if index is None:
            return None
        return self._items.get(index)

    def position_of(self, index: int) -> int | None:
        if index not in self._items:
            return None
        return bisect.bisect_left(self._keys, index)

    def enabled(self) -> list[OptionState]:
        return [opt for opt in self if not opt.disabled]


class FocusState:
    """Roving focus over an :class:`OptionList`, skipping disabled options."""

    def __init__(self, options: OptionList, roving_loop: bool = True) -> None:
        self.options = options
        self.roving_loop = roving_loop
        self.current_focus: int | None = None
        # Last focused index; survives ``set_focus(None)``.
        self.recent_focus: int | None = None

    def set_focus(self, index: int | None) -> None:
        if index is not None:
            self.recent_focus = index
        if index != self.current_focus:
            log.debug("Focus %s -> %s", self.current_focus, index)
        self.current_focus = index

    def _current_position(self) -> int | None:
        if self.current_focus is None:
            return None
        return self.options.position_of(self.current_focus)

    def _focus_enabled(self, position: int, reverse: bool) -> None:
        items = list(self.options)
        before = items[:position]
        after = items[position + 1:]
        if not reverse:
            candidates = after + (before if self.roving_loop else [])
        else:
            candidates = before[::-1] + (after[::-1] if self.roving_loop else [])

        for option in candidates:
            if not option.disabled:
                self.set_focus(option.index)
                return

    def focus_next(self) -> None:
        position = self._current_position()
        if position is None:
            return self.focus_first()
        self._focus_enabled(position, reverse=False)

    def focus_prev(self) -> None:
        position = self._current_position()
        if position is None:
            return self.focus_last()
        self._focus_enabled(position, reverse=True)

    def focus_first(self) -> None:
        enabled = self.options.enabled()
        if enabled:
            self.set_focus(enabled[0].index)

    def focus_last(self) -> None:
        enabled = self.options.enabled()
        if enabled:
            self.set_focus(enabled[-1].index)
