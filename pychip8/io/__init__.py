"""Input devices for the CHIP-8 Python port."""

from .keypad import KEY_COUNT, KEYPAD_LAYOUT, Keypad, lookup_key

__all__ = [
    "KEY_COUNT",
    "KEYPAD_LAYOUT",
    "Keypad",
    "lookup_key",
]
