"""Reading CHIP-8 ROM images from disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.cpu import MAX_PROGRAM_SIZE, LoadError


@dataclass
class RomImage:
    """Raw program bytes together with the name they were loaded from."""

    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def load_rom(stream: BinaryIO, name: str = "") -> RomImage:
    """Read a ROM image from ``stream`` and check that it fits program memory."""

    data = stream.read()
    if not 1 <= len(data) <= MAX_PROGRAM_SIZE:
        raise LoadError(f"ROM {name or '<stream>'} is {len(data)} bytes; expected 1-{MAX_PROGRAM_SIZE}")
    return RomImage(name=name, data=bytes(data))


def load_rom_from_path(path: Path) -> RomImage:
    path = Path(path)
    with path.open("rb") as stream:
        return load_rom(stream, path.name)
