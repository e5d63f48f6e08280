"""CHIP-8 machine assembly and frame scheduling."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError, Interpreter
from pychip8.utils import TraceRecorder


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    rom_image: bytes = b""
    clock_speed: int = 600
    frame_rate: int = 60
    truncate_jump_target: bool = False
    seed: Optional[int] = None

    @property
    def instructions_per_frame(self) -> int:
        return max(0, self.clock_speed // self.frame_rate)


@dataclass
class Machine:
    """Aggregates the interpreter with the clock settings that drive it."""

    interpreter: Interpreter
    config: MachineConfig
    trace: TraceRecorder | None = None
    frame_count: int = 0
    sound_active: bool = False

    def run_frame(self) -> int:
        """Run one frame's worth of instructions, then tick the timers once.

        ``sound_active`` is sampled between the two, so a sound timer set to
        ``n`` during a frame stays audible for ``n`` frames. Returns the number
        of instructions executed.
        """

        interpreter = self.interpreter
        trace = self.trace
        executed = 0
        for _ in range(self.config.instructions_per_frame):
            if trace is not None:
                state_before = interpreter.state.clone()
                try:
                    decoded = interpreter.step()
                except (CPUError, MemoryAccessError):
                    trace.record_step(state_before, None, note="fault")
                    raise
                trace.record_step(state_before, decoded.opcode, mnemonic=decoded.mnemonic)
            else:
                interpreter.step()
            executed += 1
        self.sound_active = interpreter.sound_should_play()
        interpreter.tick_timers()
        self.frame_count += 1
        return executed


def create_machine(config: MachineConfig, *, trace: TraceRecorder | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    if config.clock_speed < 0:
        raise ValueError(f"clock speed must not be negative: {config.clock_speed}")
    if config.frame_rate <= 0:
        raise ValueError(f"frame rate must be positive: {config.frame_rate}")

    interpreter = Interpreter(
        config.rom_image,
        random_source=random.Random(config.seed),
        truncate_jump_target=config.truncate_jump_target,
    )
    return Machine(interpreter=interpreter, config=config, trace=trace)
