import pytest

from select_typeahead.layouts import (
    _GRIDS,
    KeyboardLayout,
    code_to_char,
    guess,
    physical_key_distance,
    position,
    substitution_cost,
)


def test_position_lookup():
    assert position(KeyboardLayout.QWERTY, "q") == (1, 0)
    assert position(KeyboardLayout.QWERTY, "Q") == (1, 0)
    assert position(KeyboardLayout.DVORAK, "q") == (3, 1)
    assert position(KeyboardLayout.QWERTY, "ö") is None
    assert position(KeyboardLayout.QWERTZ, "ö") == (2, 9)
    assert position(KeyboardLayout.UNKNOWN, "a") is None


def test_each_character_appears_once_per_layout():
    for layout, grid in _GRIDS.items():
        chars = "".join(grid)
        assert len(chars) == 40, layout
        assert len(set(chars)) == 40, layout


def test_substitution_cost_identity_and_bounds():
    for layout in KeyboardLayout:
        assert substitution_cost(layout, "a", "a") == 0.0
        for a, b in [("q", "w"), ("a", "/"), ("1", "m"), ("α", "β"), ("x", "中")]:
            assert 0.0 <= substitution_cost(layout, a, b) <= 1.0


def test_adjacent_keys_are_cheaper_than_distant_ones():
    assert substitution_cost(KeyboardLayout.QWERTY, "q", "w") < substitution_cost(
        KeyboardLayout.QWERTY, "q", "p"
    )
    assert substitution_cost(KeyboardLayout.QWERTY, "q", "w") == pytest.approx(0.1)
    assert substitution_cost(KeyboardLayout.QWERTY, "q", "p") == pytest.approx(0.9)


def test_unknown_characters_cost_the_maximum():
    assert substitution_cost(KeyboardLayout.QWERTY, "α", "β") == 1.0
    assert substitution_cost(KeyboardLayout.UNKNOWN, "a", "s") == 1.0


def test_layout_methods_delegate():
    assert KeyboardLayout.COLEMAK.position("t") == (2, 3)
    assert KeyboardLayout.COLEMAK.substitution_cost("t", "t") == 0.0


def test_from_name():
    assert KeyboardLayout.from_name("qwerty") is KeyboardLayout.QWERTY
    assert KeyboardLayout.from_name("Colemak-DH") is KeyboardLayout.COLEMAK_DH
    assert KeyboardLayout.from_name("colemakdh") is KeyboardLayout.COLEMAK_DH
    with pytest.raises(ValueError):
        KeyboardLayout.from_name("bepo")


def test_guess_from_characters():
    assert guess({"q": "q", "w": "w", "e": "e"}) == KeyboardLayout.QWERTY
    assert guess({}) == KeyboardLayout.UNKNOWN


def test_guess_from_key_codes():
    observed = {"KeyQ": "q", "KeyW": "w", "KeyE": "f", "KeyR": "p"}
    # Colemak and Colemak-DH agree on these keys; the earlier candidate wins.
    assert guess(observed) == KeyboardLayout.COLEMAK_DH

    assert guess({"KeyQ": "a", "KeyA": "q", "KeyW": "z"}) == KeyboardLayout.AZERTY
    assert guess({"KeyY": "z", "KeyZ": "y"}) == KeyboardLayout.QWERTZ


def test_guess_prefers_highest_score():
    # All three keys agree with Dvorak, only one with QWERTY.
    observed = {"KeyS": "o", "KeyD": "e", "KeyA": "a"}
    assert guess(observed) == KeyboardLayout.DVORAK


def test_guess_without_consistent_layout_is_unknown():
    assert guess({"KeyA": "ф", "KeyS": "ы"}) == KeyboardLayout.UNKNOWN
    assert guess({"Backquote": "`"}) == KeyboardLayout.UNKNOWN


def test_code_to_char():
    assert code_to_char("KeyA") == "a"
    assert code_to_char("Digit7") == "7"
    assert code_to_char("Semicolon") == ";"
    assert code_to_char("Enter") is None


def test_physical_key_distance():
    for code in ("KeyA", "Digit0", "Slash"):
        assert physical_key_distance(code, code) == 0.0
    assert physical_key_distance("KeyA", "KeyS") == pytest.approx(1.0)
    assert physical_key_distance("KeyQ", "KeyA") == pytest.approx(1.0)
    assert physical_key_distance("KeyQ", "KeyS") == pytest.approx(2 ** 0.5)
    assert physical_key_distance("KeyA", "Backquote") is None
    assert physical_key_distance("Nope", "KeyA") is None
