import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from select_typeahead.options import OptionList, OptionState


class DummyRoot:
    def __init__(self):
        self.scheduled = {}
        self._next = 0

    def after(self, ms, func):
        self._next += 1
        after_id = f"id{self._next}"
        self.scheduled[after_id] = (ms, func)
        return after_id

    def after_cancel(self, after_id):
        self.scheduled.pop(after_id, None)

    def fire_all(self):
        pending, self.scheduled = self.scheduled, {}
        for _, func in pending.values():
            func()


@pytest.fixture
def root():
    return DummyRoot()


@pytest.fixture
def fruit():
    return OptionList(
        OptionState(index=i, value=label.lower(), text_value=label)
        for i, label in enumerate(["Apple", "Banana", "Cherry"])
    )
