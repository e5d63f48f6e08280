"""Category-gated debug output for the CHIP-8 emulator.

Set ``CHIP8_DEBUG`` to a comma-separated list of categories (``cpu``,
``input``, ``audio``, ``perf``, ``trace``) or to ``all``.
"""

from __future__ import annotations

import os
from typing import FrozenSet

ENV_VARIABLE = "CHIP8_DEBUG"

_categories: FrozenSet[str] | None = None


def parse_categories(value: str) -> FrozenSet[str]:
    return frozenset(part.strip().lower() for part in value.split(",") if part.strip())


def _active_categories() -> FrozenSet[str]:
    global _categories
    if _categories is None:
        _categories = parse_categories(os.environ.get(ENV_VARIABLE, ""))
    return _categories


def reload_categories() -> None:
    """Forget the cached categories so ``CHIP8_DEBUG`` is read again."""

    global _categories
    _categories = None


def debug_enabled(category: str | None = None) -> bool:
    active = _active_categories()
    if not active:
        return False
    if category is None or "all" in active:
        return True
    return category.lower() in active


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
