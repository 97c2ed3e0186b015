"""Keyboard layout tables and key-distance helpers."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from enum import Enum, auto


class KeyboardLayout(str, Enum):
    def _generate_next_value_(name, *_):
        return name.lower()

    QWERTY     = auto()
    COLEMAK_DH = auto()
    COLEMAK    = auto()
    DVORAK     = auto()
    WORKMAN    = auto()
    AZERTY     = auto()
    QWERTZ     = auto()
    UNKNOWN    = auto()

    @classmethod
    def from_name(cls, name: str) -> "KeyboardLayout":
        """Parse ``name`` ignoring case and punctuation (``"Colemak-DH"``)."""
        wanted = re.sub(r"[^a-z0-9]", "", name.lower())
        for layout in cls:
            if layout.value.replace("_", "") == wanted:
                return layout
        raise ValueError(f"unknown keyboard layout {name!r}")

    def position(self, char: str) -> tuple[int, int] | None:
        return position(self, char)

    def substitution_cost(self, a: str, b: str) -> float:
        return substitution_cost(self, a, b)


# Row-major 4x10 grids: digit row, top row, home row, bottom row.
_GRIDS: dict[KeyboardLayout, tuple[str, str, str, str]] = {
    KeyboardLayout.QWERTY: (
        "1234567890",
        "qwertyuiop",
        "asdfghjkl;",
        "zxcvbnm,./",
    ),
    KeyboardLayout.COLEMAK_DH: (
        "1234567890",
        "qwfpbjluy;",
        "arstgmneio",
        "xcdvzkh,./",
    ),
    KeyboardLayout.COLEMAK: (
        "1234567890",
        "qwfpgjluy;",
        "arstdhneio",
        "zxcvbkm,./",
    ),
    KeyboardLayout.DVORAK: (
        "1234567890",
        "',.pyfgcrl",
        "aoeuidhtns",
        ";qjkxbmwvz",
    ),
    KeyboardLayout.WORKMAN: (
        "1234567890",
        "qdrwbjfup;",
        "ashtgyneoi",
        "zxmcvkl,./",
    ),
    KeyboardLayout.AZERTY: (
        "1234567890",
        "azertyuiop",
        "qsdfghjklm",
        "wxcvbn,;:!",
    ),
    KeyboardLayout.QWERTZ: (
        "1234567890",
        "qwertzuiop",
        "asdfghjklö",
        "yxcvbnm,.-",
    ),
}

# Candidate order for ``guess``; earlier layouts win ties.
KNOWN_LAYOUTS: tuple[KeyboardLayout, ...] = tuple(_GRIDS)

_POSITIONS: dict[KeyboardLayout, dict[str, tuple[int, int]]] = {
    layout: {
        ch: (row_idx, col_idx)
        for row_idx, row in enumerate(grid)
        for col_idx, ch in enumerate(row)
    }
    for layout, grid in _GRIDS.items()
}

# Physical keys, named like DOM ``KeyboardEvent.code``, mapped to the
# character printed on them on a US QWERTY board.
PHYSICAL_KEYS: dict[str, str] = {
    **{f"Key{c.upper()}": c for c in "abcdefghijklmnopqrstuvwxyz"},
    **{f"Digit{d}": d for d in "0123456789"},
    "Semicolon": ";",
    "Comma": ",",
    "Period": ".",
    "Slash": "/",
}

# Universal grid: a physical key sits where its QWERTY character sits.
_PHYSICAL_POSITIONS: dict[str, tuple[int, int]] = {
    code: _POSITIONS[KeyboardLayout.QWERTY][ch] for code, ch in PHYSICAL_KEYS.items()
}


def code_to_char(code: str) -> str | None:
    """Return the QWERTY character engraved on physical key ``code``."""
    return PHYSICAL_KEYS.get(code)


def position(layout: KeyboardLayout, char: str) -> tuple[int, int] | None:
    """Return ``(row, col)`` of ``char`` in ``layout`` or ``None``."""
    table = _POSITIONS.get(layout)
    if table is None:
        return None
    return table.get(char.lower())


def _grid_distance(a: tuple[int, int], b: tuple[int, int]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def substitution_cost(layout: KeyboardLayout, a: str, b: str) -> float:
    """Cost of reading ``a`` as ``b`` based on key distance in ``layout``.

    Identical characters are free. Characters missing from the layout get
    the maximal cost of 1.0; everything else scales with grid distance and
    is clamped to ``[0.1, 1.0]`` so that neighbouring keys are never free.
    """
    if a == b:
        return 0.0
    a_pos = position(layout, a)
    b_pos = position(layout, b)
    if a_pos is None or b_pos is None:
        return 1.0
    return min(max(_grid_distance(a_pos, b_pos) / 10.0, 0.1), 1.0)


def physical_key_distance(code_a: str, code_b: str) -> float | None:
    """Euclidean distance between two physical keys on the universal grid."""
    a_pos = _PHYSICAL_POSITIONS.get(code_a)
    b_pos = _PHYSICAL_POSITIONS.get(code_b)
    if a_pos is None or b_pos is None:
        return None
    return _grid_distance(a_pos, b_pos)


def _physical_char(key: str) -> str | None:
    # Accept either a key code ("KeyQ") or the QWERTY character itself ("q").
    char = code_to_char(key)
    if char is None and len(key) == 1:
        char = key.lower()
    return char


def guess(observed: Mapping[str, str]) -> KeyboardLayout:
    """Guess the active layout from ``physical -> logical`` observations.

    Every known layout scores one point per observation whose physical key
    produces the observed character in that layout. The best score wins,
    ties going to the earliest entry of :data:`KNOWN_LAYOUTS`. Without any
    consistent observation the result is :attr:`KeyboardLayout.UNKNOWN`.
    """
    qwerty = _POSITIONS[KeyboardLayout.QWERTY]
    physical_positions = []
    for key, logical in observed.items():
        char = _physical_char(key)
        pos = qwerty.get(char) if char is not None else None
        if pos is not None:
            physical_positions.append((pos, logical.lower()))

    best, best_score = KeyboardLayout.UNKNOWN, 0
    for layout in KNOWN_LAYOUTS:
        table = _POSITIONS[layout]
        score = sum(1 for pos, logical in physical_positions if table.get(logical) == pos)
        if score > best_score:
            best, best_score = layout, score
    return best
