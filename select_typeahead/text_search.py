"""Typeahead matching: which option does the typed text most likely mean?"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Callable, Protocol

import numpy as np

from .options import OptionState


class CostModel(Protocol):
    """Anything able to price a character substitution.

    Both :class:`~select_typeahead.layouts.KeyboardLayout` and
    :class:`~select_typeahead.adaptive.AdaptiveKeyboard` qualify.
    """

    def substitution_cost(self, a: str, b: str) -> float:
        ...


def recency_bias(position: int, total_length: int) -> float:
    """Weight of ``position``; later positions weigh at least as much."""
    return (math.log(position + 1.5) / math.log(total_length + 1.5)) ** 4


def levenshtein_distance(
    typed: Sequence[str],
    target: Sequence[str],
    substitution_cost: Callable[[str, str], float],
) -> float:
    """Recency weighted edit distance from ``typed`` to ``target``.

    Recent keystrokes (the end of ``typed``) are expensive to drop, as are
    the leading characters of ``target``. Substitutions cost
    ``substitution_cost(a, b)`` scaled by the keystroke's recency. The
    result is normalized by the cost of discarding either string entirely.
    Not symmetric: swapping the arguments changes the result.
    """
    n, m = len(typed), len(target)
    typed_bias = np.array([recency_bias(i, n) for i in range(n + 1)])
    target_bias = np.array([recency_bias(j, m) for j in range(m + 1)])

    dp = np.zeros((n + 1, m + 1))
    dp[0, :] = np.cumsum((1.0 - target_bias) * 0.5)
    dp[:, 0] = np.cumsum(typed_bias * 0.5)

    for i in range(1, n + 1):
        a = typed[i - 1]
        for j in range(1, m + 1):
            b = target[j - 1]
            cost = 0.0 if a == b else substitution_cost(a, b)
            dp[i, j] = min(
                # dropping an old keystroke is cheap
                dp[i - 1, j] + typed_bias[i],
                # skipping an untyped target character is cheap late in the target
                dp[i, j - 1] + (1.0 - target_bias[j]),
                dp[i - 1, j - 1] + cost * 2.0 * typed_bias[i],
            )

    max_possible = max(dp[n, 0], dp[0, m])
    return float(dp[n, m] / max_possible)


def normalized_distance(typed: Sequence[str], target: Sequence[str], cost_model: CostModel) -> float:
    """Compare the start of ``target`` against the most recent keystrokes."""
    target = target[: len(typed)]
    typed = typed[len(typed) - len(target):]
    return levenshtein_distance(typed, target, cost_model.substitution_cost)


def best_match(
    cost_model: CostModel,
    typeahead: str,
    options: Iterable[OptionState],
) -> int | None:
    """Return the index of the enabled option closest to ``typeahead``.

    ``None`` when nothing has been typed or no option can take focus. Ties
    go to the first option in iteration order.
    """
    if not typeahead:
        return None

    best_index, best_distance = None, math.inf
    for option in options:
        if option.disabled:
            continue
        distance = normalized_distance(typeahead, option.text_value, cost_model)
        if distance < best_distance:
            best_index, best_distance = option.index, distance
    return best_index
