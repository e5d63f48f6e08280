"""Tests for reading CHIP-8 ROM images."""

from __future__ import annotations

import io

import pytest

from pychip8.cpu import MAX_PROGRAM_SIZE, LoadError
from pychip8.loader import load_rom, load_rom_from_path


def test_load_rom_from_path(tmp_path) -> None:
    rom_path = tmp_path / "pong.ch8"
    rom_path.write_bytes(b"\x00\xE0\x12\x00")

    image = load_rom_from_path(rom_path)

    assert image.name == "pong.ch8"
    assert image.data == b"\x00\xE0\x12\x00"
    assert image.size == 4


def test_load_rom_accepts_maximum_size() -> None:
    image = load_rom(io.BytesIO(bytes(MAX_PROGRAM_SIZE)))

    assert image.size == MAX_PROGRAM_SIZE


@pytest.mark.parametrize("length", [0, MAX_PROGRAM_SIZE + 1])
def test_load_rom_rejects_bad_sizes(length: int) -> None:
    with pytest.raises(LoadError):
        load_rom(io.BytesIO(bytes(length)), "bad.ch8")


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rom_from_path(tmp_path / "missing.ch8")
