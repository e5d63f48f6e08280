"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


# Host keys in row-major order onto logical key indices 0-15.
KEYPAD_LAYOUT: Mapping[str, int] = {
    "1": 0x0,
    "2": 0x1,
    "3": 0x2,
    "4": 0x3,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0x7,
    "a": 0x8,
    "s": 0x9,
    "d": 0xA,
    "f": 0xB,
    "z": 0xC,
    "x": 0xD,
    "c": 0xE,
    "v": 0xF,
}


def lookup_key(key_name: str) -> int | None:
    """Return the keypad index for a host key name, or ``None`` if unmapped."""

    return KEYPAD_LAYOUT.get(key_name.lower())


@dataclass
class Keypad:
    """State of the sixteen CHIP-8 keys."""

    _pressed: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)

    def set(self, index: int, pressed: bool) -> None:
        if not 0 <= index < KEY_COUNT:
            raise ValueError(f"key index {index} outside 0-{KEY_COUNT - 1}")
        self._pressed[index] = pressed
        if debug_enabled("input"):
            debug_log("input", "key=%X pressed=%s", index, pressed)

    def is_pressed(self, index: int) -> bool:
        return self._pressed[index]

    def first_pressed(self) -> int | None:
        for index, pressed in enumerate(self._pressed):
            if pressed:
                return index
        return None

