"""Tests for the Chip8App host wiring (no pygame window is opened)."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pychip8.ui.app import AppConfig, Chip8App


def fake_pygame(key_name: str):
    return SimpleNamespace(key=SimpleNamespace(name=lambda code: key_name))


def write_rom(path: Path, data: bytes = b"\x12\x00") -> Path:
    path.write_bytes(data)
    return path


class RecordingBeeper:
    def __init__(self) -> None:
        self.states: list[bool] = []

    def set_state(self, enabled: bool) -> None:
        self.states.append(enabled)


def test_create_machine_uses_config(tmp_path: Path) -> None:
    rom_path = write_rom(tmp_path / "spin.ch8")
    app = Chip8App(AppConfig(rom_path=rom_path, clock_speed=120))

    machine = app._create_machine(rom_path)

    assert app.machine is machine
    assert machine.config.instructions_per_frame == 2
    assert machine.interpreter.memory.load16(0x200) == 0x1200


def test_create_machine_requires_rom(tmp_path: Path) -> None:
    app = Chip8App(AppConfig())

    with pytest.raises(RuntimeError):
        app._create_machine(None)
    with pytest.raises(RuntimeError, match="not found"):
        app._create_machine(tmp_path / "missing.ch8")


def test_create_machine_rejects_empty_rom(tmp_path: Path) -> None:
    rom_path = write_rom(tmp_path / "empty.ch8", b"")
    app = Chip8App(AppConfig(rom_path=rom_path))

    with pytest.raises(RuntimeError, match="Invalid ROM"):
        app._create_machine(rom_path)


def test_key_events_reach_keypad(tmp_path: Path) -> None:
    rom_path = write_rom(tmp_path / "spin.ch8")
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)

    app._handle_key_event(fake_pygame("w"), 119, pressed=True)
    assert machine.interpreter.keypad.is_pressed(5)

    app._handle_key_event(fake_pygame("w"), 119, pressed=False)
    assert not machine.interpreter.keypad.is_pressed(5)


def test_unmapped_keys_are_ignored(tmp_path: Path) -> None:
    rom_path = write_rom(tmp_path / "spin.ch8")
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)

    app._handle_key_event(fake_pygame("space"), 32, pressed=True)

    assert machine.interpreter.keypad.first_pressed() is None


def test_step_frame_reports_stack_underflow(tmp_path: Path) -> None:
    rom_path = write_rom(tmp_path / "ret.ch8", b"\x00\xEE")
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)

    with pytest.raises(RuntimeError, match="Stack underflow"):
        app._step_frame(machine)


def test_step_frame_reports_illegal_instruction(tmp_path: Path) -> None:
    rom_path = write_rom(tmp_path / "bad.ch8", b"\xFF\xFF")
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)

    with pytest.raises(RuntimeError, match="invalid instructions"):
        app._step_frame(machine)


def test_sound_timer_of_one_is_audible_for_one_frame(tmp_path: Path) -> None:
    # V1 := 1; ST := V1; spin
    rom_path = write_rom(tmp_path / "beep.ch8", bytes.fromhex("6101F1181204"))
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)
    beeper = RecordingBeeper()
    app._beeper = beeper

    app._step_frame(machine)
    app._update_sound(machine)
    app._step_frame(machine)
    app._update_sound(machine)

    assert beeper.states == [True, False]
    assert machine.interpreter.state.sound_timer == 0


def test_sound_lasts_as_many_frames_as_the_timer(tmp_path: Path) -> None:
    rom_path = write_rom(tmp_path / "spin.ch8")
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)
    beeper = RecordingBeeper()
    app._beeper = beeper

    machine.interpreter.state.sound_timer = 3
    for _ in range(4):
        app._step_frame(machine)
        app._update_sound(machine)

    assert beeper.states == [True, True, True, False]
