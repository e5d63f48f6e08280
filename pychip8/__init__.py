"""Python CHIP-8 emulator.

The interpreter core lives in :mod:`pychip8.cpu` and :mod:`pychip8.video`;
the remaining sub-packages wire it to memory, input, audio and a Pygame window
used by ``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
