"""Adaptive substitution costs learned from keyboard events."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from .config import TypeaheadConfig
from .layouts import KeyboardLayout, guess, physical_key_distance

log = logging.getLogger(__name__)

# Small groups of phonetically similar characters across scripts
# (Latin, Cyrillic, Greek, Arabic, Bengali).
PHONETIC_GROUPS: tuple[frozenset[str], ...] = tuple(
    frozenset(group)
    for group in (
        "aаαاআ",   # a
        "bбβبব",   # b
        "sсσسস",   # s
        "tтτتত",   # t
        "nнνنন",   # n
        "rрρرর",   # r
        "lлλلল",   # l
        "mмμمম",   # m
        "kкκكক",   # k
        "pпπپপ",   # p
        "fфφفফ",   # f
        "oоοوও",   # o
        "eеεهএ",   # e
        "iиιيই",   # i
        "uуυوউ",   # u
        "dдδدদ",   # d
        "gгγجগ",   # g
        "hхηهহ",   # h
        "vвβوভ",   # v
        "zзζزজ",   # z
        "yйυي",    # y
    )
)


def unicode_similarity_cost(a: str, b: str) -> float:
    """Nearby codepoints are often related; 100 codepoints apart is unrelated."""
    return min(max(abs(ord(a) - ord(b)) / 100.0, 0.1), 1.0)


def phonetic_similarity_cost(a: str, b: str) -> float:
    for group in PHONETIC_GROUPS:
        if a in group and b in group:
            return 0.2
    return 1.0


@dataclass
class AdaptiveKeyboard:
    """Substitution costs for one select list, refined as the user types.

    ``confusion`` holds costs learned from explicit corrections and
    ``physical_mappings`` the character last produced by each physical key.
    Equality only looks at those two; the layout guess and the tuning knobs
    are derived or configured.
    """

    confusion: dict[tuple[str, str], float] = field(default_factory=dict)
    physical_mappings: dict[str, str] = field(default_factory=dict)
    layout: KeyboardLayout = field(default=KeyboardLayout.UNKNOWN, compare=False)
    decay: float = field(default=0.9, compare=False, repr=False)
    floor: float = field(default=0.1, compare=False, repr=False)
    physical_weight: float = field(default=0.3, compare=False, repr=False)

    @classmethod
    def from_config(cls, config: TypeaheadConfig) -> "AdaptiveKeyboard":
        return cls(
            decay=config.correction_decay,
            floor=config.correction_floor,
            physical_weight=config.physical_weight,
        )

    def learn_from_event(self, physical_code: str, logical_char: str) -> None:
        """Record that ``physical_code`` just produced ``logical_char``."""
        if len(logical_char) != 1:
            raise ValueError(f"expected a single character, got {logical_char!r}")
        self.physical_mappings[physical_code] = logical_char.lower()
        layout = guess(self.physical_mappings)
        if layout != self.layout:
            log.debug("Keyboard layout guess changed: %s -> %s", self.layout.value, layout.value)
            self.layout = layout

    def record_correction(self, typed: str, intended: str) -> None:
        """Make ``typed`` cheaper to substitute for ``intended``."""
        if typed == intended:
            return
        current = self.learned_cost(typed, intended)
        cost = max(self.floor, (1.0 if current is None else current) * self.decay)
        self.confusion[(typed, intended)] = cost
        log.debug("Correction %r -> %r, cost now %.3f", typed, intended, cost)

    def learned_cost(self, a: str, b: str) -> float | None:
        cost = self.confusion.get((a, b))
        if cost is None:
            cost = self.confusion.get((b, a))
        return cost

    def _code_for(self, char: str) -> str | None:
        for code, mapped in self.physical_mappings.items():
            if mapped == char:
                return code
        return None

    def physical_cost(self, a: str, b: str) -> float | None:
        """Distance between the keys that produced ``a`` and ``b``, if known."""
        code_a = self._code_for(a.lower())
        code_b = self._code_for(b.lower())
        if code_a is None or code_b is None:
            return None
        distance = physical_key_distance(code_a, code_b)
        if distance is None:
            return None
        return min(max(distance * 0.1, 0.0), 1.0) * self.physical_weight

    def substitution_cost(self, a: str, b: str) -> float:
        """Cost of reading ``a`` as ``b``, from most to least specific evidence."""
        if a == b:
            return 0.0

        learned = self.learned_cost(a, b)
        if learned is not None:
            return learned

        physical = self.physical_cost(a, b)
        if physical is not None:
            return physical

        return min(
            unicode_similarity_cost(a, b),
            phonetic_similarity_cost(a.lower(), b.lower()),
        )
