from __future__ import annotations

from enum import Enum, auto


# Keys a select list reacts to besides printable characters. Names match
# pynput.keyboard.Key attributes.
class Action(str, Enum):
    def _generate_next_value_(name, *_):
        return name

    up    = auto()
    down  = auto()
    home  = auto()
    end   = auto()
    enter = auto()
    esc   = auto()
    space = auto()

    def to_os_key(self):
        """Return the matching :class:`pynput.keyboard.Key` or ``None``."""
        from pynput.keyboard import Key as OSKey
        return getattr(OSKey, self.value, None)

    @classmethod
    def from_os_key(cls, key) -> "Action | None":
        """Map a :class:`pynput.keyboard.Key` (or its name) to an action."""
        name = key if isinstance(key, str) else getattr(key, "name", None)
        if name is None:
            return None
        return cls.__members__.get(name)


# Windows virtual-key codes for letters and digits equal their ASCII
# uppercase codepoints.
_VK_LETTERS = range(0x41, 0x5B)
_VK_DIGITS = range(0x30, 0x3A)


def physical_code(key) -> str | None:
    """Best-effort ``KeyA``/``Digit0`` style code for a pynput ``KeyCode``."""
    vk = getattr(key, "vk", None)
    if vk in _VK_LETTERS:
        return f"Key{chr(vk)}"
    if vk in _VK_DIGITS:
        return f"Digit{chr(vk)}"
    return None
