"""Pygame frontend for the CHIP-8 emulator."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.audio import ToneBeeper
from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError, IllegalInstruction, Interpreter, LoadError, StackUnderflow
from pychip8.io import lookup_key
from pychip8.loader import load_rom_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Renderer


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 emulator frontend."""

    rom_path: Optional[Path] = None
    clock_speed: int = 600
    sound_enabled: bool = True
    window_size: tuple[int, int] = (640, 320)
    fullscreen: bool = False
    truncate_jump_target: bool = False


class Chip8App:
    """Thin wrapper around the Pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: ToneBeeper | None = None
        self._renderer = Renderer()
        self._perf_enabled = debug_enabled("perf")
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        machine = self._create_machine(self._config.rom_path)
        self._machine = machine

        if self._config.sound_enabled:
            pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption("CHIP-8 Emulator (Python)")

        try:
            if self._config.sound_enabled:
                self._initialise_audio(pygame)

            flags = pygame.FULLSCREEN if self._config.fullscreen else 0
            screen = pygame.display.set_mode(self._config.window_size, flags)
            clock = pygame.time.Clock()
            interpreter = machine.interpreter
            self._running = True

            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                frame_start = time.perf_counter()
                executed = self._step_frame(machine)
                self._update_sound(machine)

                if interpreter.needs_redraw():
                    self._present(pygame, screen, interpreter)

                if self._perf_enabled:
                    debug_log(
                        "perf",
                        "frame=%d instructions=%d frame_ms=%.3f",
                        machine.frame_count,
                        executed,
                        (time.perf_counter() - frame_start) * 1000.0,
                    )

                clock.tick(_FRAME_RATE)
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def _initialise_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return

        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = ToneBeeper(sample_rate=mixer_state[0])
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    def _create_machine(self, rom_path: Path | None) -> Machine:
        if rom_path is None:
            raise RuntimeError("ROM image is required; pass a ROM path")
        if not rom_path.exists():
            raise RuntimeError(f"ROM file not found: {rom_path}")

        try:
            image = load_rom_from_path(rom_path)
        except OSError as exc:
            raise RuntimeError(f"Unable to read ROM file {rom_path}: {exc}") from exc
        except LoadError as exc:
            raise RuntimeError(f"Invalid ROM file {rom_path}: {exc}") from exc

        machine = create_machine(
            MachineConfig(
                rom_image=image.data,
                clock_speed=self._config.clock_speed,
                truncate_jump_target=self._config.truncate_jump_target,
            ),
            trace=self._trace_recorder,
        )
        self._machine = machine
        return machine

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        name = pygame.key.name(key_code)
        index = lookup_key(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s key=%s pressed=%s", name, index, pressed)
        if index is None:
            return
        machine.interpreter.deliver_key_event(index, pressed)

    def _step_frame(self, machine: Machine) -> int:
        try:
            return machine.run_frame()
        except (CPUError, MemoryAccessError) as exc:
            self._running = False
            if self._trace_recorder is not None:
                self._trace_recorder.dump("trace", limit=64)
            raise RuntimeError(_describe_failure(exc)) from exc

    def _update_sound(self, machine: Machine) -> None:
        if self._beeper is None:
            return
        self._beeper.set_state(machine.sound_active)

    def _present(self, pygame, screen, interpreter: Interpreter) -> None:
        frame = self._renderer.render(interpreter.framebuffer)
        surface = pygame.transform.scale(frame.to_surface(), screen.get_size())
        screen.blit(surface, (0, 0))
        pygame.display.flip()
        interpreter.clear_redraw()


def _describe_failure(exc: Exception) -> str:
    if isinstance(exc, StackUnderflow):
        return f"Stack underflow, possibly corrupted ROM: {exc}"
    if isinstance(exc, IllegalInstruction):
        return f"ROM contains invalid instructions: {exc}"
    if isinstance(exc, MemoryAccessError):
        return f"Memory access out of range: {exc}"
    return f"Emulation stopped: {exc}"


_FRAME_RATE = 60
