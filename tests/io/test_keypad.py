"""Tests for the CHIP-8 keypad."""

from __future__ import annotations

import pytest

from pychip8.io import KEYPAD_LAYOUT, Keypad, lookup_key


def test_layout_is_row_major() -> None:
    order = "1234qwerasdfzxcv"

    assert [KEYPAD_LAYOUT[name] for name in order] == list(range(16))


def test_lookup_is_case_insensitive_and_ignores_unmapped() -> None:
    assert lookup_key("Q") == 4
    assert lookup_key("v") == 15
    assert lookup_key("5") is None
    assert lookup_key("left shift") is None


def test_set_press_and_release() -> None:
    keypad = Keypad()

    keypad.set(0xA, True)
    assert keypad.is_pressed(0xA)
    assert keypad.first_pressed() == 0xA

    keypad.set(0xA, False)
    assert not keypad.is_pressed(0xA)
    assert keypad.first_pressed() is None


def test_first_pressed_prefers_lowest_index() -> None:
    keypad = Keypad()
    keypad.set(9, True)
    keypad.set(2, True)

    assert keypad.first_pressed() == 2


@pytest.mark.parametrize("index", [-1, 16])
def test_set_rejects_out_of_range_index(index: int) -> None:
    keypad = Keypad()

    with pytest.raises(ValueError):
        keypad.set(index, True)

    assert keypad.first_pressed() is None
