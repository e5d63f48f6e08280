"""Recent-instruction history for post-mortem diagnostics."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Sequence

from .debug import debug_log


@dataclass(frozen=True)
class TraceEntry:
    """Interpreter state captured just before an instruction ran."""

    pc: int
    opcode: int | None
    mnemonic: str
    i: int
    delay_timer: int
    sound_timer: int
    stack_depth: int
    registers: bytes
    note: str = ""

    def format(self) -> str:
        # Addresses are 12-bit on CHIP-8, so three hex digits suffice.
        opcode = "????" if self.opcode is None else f"{self.opcode:04X}"
        line = (
            f"{self.pc:03X}: {opcode} {self.mnemonic or '?':<4} "
            f"I={self.i:03X} DT={self.delay_timer:02X} ST={self.sound_timer:02X} "
            f"SP={self.stack_depth} V={self.registers.hex(' ').upper()}"
        )
        if self.note:
            line += f" ({self.note})"
        return line


class TraceRecorder:
    """Keeps the last ``capacity`` executed steps, oldest first."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._history: Deque[TraceEntry] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._history)

    def record_step(self, cpu_state, opcode: int | None, *, mnemonic: str = "", note: str = "") -> None:
        self._history.append(
            TraceEntry(
                pc=cpu_state.pc & 0xFFFF,
                opcode=None if opcode is None else opcode & 0xFFFF,
                mnemonic=mnemonic,
                i=cpu_state.i & 0xFFFF,
                delay_timer=cpu_state.delay_timer,
                sound_timer=cpu_state.sound_timer,
                stack_depth=len(cpu_state.stack),
                registers=bytes(cpu_state.v),
                note=note,
            )
        )

    def entries(self, limit: int | None = None) -> Iterator[TraceEntry]:
        """Yield the newest ``limit`` entries (all when ``None``) in execution order."""

        skip = 0 if limit is None else max(len(self._history) - max(limit, 0), 0)
        for position, entry in enumerate(self._history):
            if position >= skip:
                yield entry

    def last_entry(self) -> TraceEntry | None:
        return self._history[-1] if self._history else None

    def format_entries(self, limit: int | None = None) -> Sequence[str]:
        return [entry.format() for entry in self.entries(limit)]

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, "%s", line)
