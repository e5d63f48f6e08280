"""CHIP-8 interpreter: machine state and the fetch/decode/execute engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from pychip8.bus import MEMORY_SIZE, Memory, MemoryAccessError
from pychip8.io import KEY_COUNT, Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FONT_SET, FONT_START, Framebuffer, glyph_address

from .opcodes import OPCODE_TABLE, DecodedInstruction, OpcodeGroup, lookup


class CPUError(Exception):
    """Base error for interpreter failures."""


class LoadError(CPUError):
    """Raised when a ROM image cannot be placed in program memory."""


class IllegalInstruction(CPUError):
    """Raised when the interpreter fetches an opcode with no defined meaning."""

    def __init__(self, opcode: int, pc: int) -> None:
        super().__init__(f"illegal instruction {opcode:04X} at {pc:#05x}")
        self.opcode = opcode
        self.pc = pc


class StackUnderflow(CPUError):
    """Raised when a subroutine return finds an empty call stack."""


PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file, stack and timers."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x000
    pc: int = PROGRAM_START
    stack: list[int] = field(default_factory=list)
    delay_timer: int = 0
    sound_timer: int = 0

    def clone(self) -> "CPUState":
        return CPUState(
            bytearray(self.v),
            self.i,
            self.pc,
            list(self.stack),
            self.delay_timer,
            self.sound_timer,
        )


class Interpreter:
    """Executes CHIP-8 programs against its own memory, keypad and framebuffer.

    ``random_source`` supplies the bytes for ``Cxnn`` and only needs a
    ``getrandbits`` method. ``truncate_jump_target`` reproduces interpreters
    that narrow the ``Bnnn`` target to eight bits.
    """

    def __init__(
        self,
        rom: bytes,
        *,
        random_source: random.Random | None = None,
        truncate_jump_target: bool = False,
        instruction_table: Sequence[OpcodeGroup | None] = OPCODE_TABLE,
    ) -> None:
        if not 1 <= len(rom) <= MAX_PROGRAM_SIZE:
            raise LoadError(f"ROM size {len(rom)} outside 1-{MAX_PROGRAM_SIZE} bytes")

        self.memory = Memory(0x000, MEMORY_SIZE)
        self.memory.load_image(FONT_START, FONT_SET)
        self.memory.load_image(PROGRAM_START, bytes(rom))

        self.state = CPUState()
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()
        self.instruction_table = instruction_table
        self.truncate_jump_target = truncate_jump_target
        self.instruction_count = 0
        self.halted = False
        self._random = random_source if random_source is not None else random.Random()
        self._redraw = False

    # ------------------------------------------------------------------
    # Host interface

    def deliver_key_event(self, key_index: int, pressed: bool) -> None:
        self.keypad.set(key_index, pressed)

    def tick_timers(self) -> None:
        """Count both timers down by one, stopping at zero."""

        state = self.state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    def sound_should_play(self) -> bool:
        return self.state.sound_timer != 0

    def needs_redraw(self) -> bool:
        return self._redraw

    def clear_redraw(self) -> None:
        self._redraw = False

    def step(self) -> DecodedInstruction:
        """Execute a single instruction and return it in decoded form.

        A failing instruction halts the interpreter; every later call raises
        :class:`CPUError` without touching the machine state.
        """

        if self.halted:
            raise CPUError("interpreter halted by an earlier fault")

        try:
            decoded = self._execute_next()
        except (CPUError, MemoryAccessError):
            self.halted = True
            raise
        self.instruction_count += 1
        return decoded

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_cls(self, _: DecodedInstruction) -> None:
        self.framebuffer.clear()
        self._redraw = True

    def op_ret(self, _: DecodedInstruction) -> None:
        if not self.state.stack:
            raise StackUnderflow(f"return at {(self.state.pc - 2) & 0xFFFF:#05x} with an empty call stack")
        self.state.pc = self.state.stack.pop()

    def op_call(self, op: DecodedInstruction) -> None:
        self.state.stack.append(self.state.pc)
        self.state.pc = op.nnn

    def op_jp(self, op: DecodedInstruction) -> None:
        self.state.pc = op.nnn

    def op_se_imm(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] == op.nn:
            self._skip()

    def op_sne_imm(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] != op.nn:
            self._skip()

    def op_se_reg(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] == self.state.v[op.y]:
            self._skip()

    def op_sne_reg(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] != self.state.v[op.y]:
            self._skip()

    def op_ld_imm(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = op.nn

    def op_add_imm(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] = (v[op.x] + op.nn) & 0xFF

    def op_ld_reg(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] = v[op.y]

    def op_or(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] |= v[op.y]

    def op_and(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] &= v[op.y]

    def op_xor(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[op.x] ^= v[op.y]

    def op_add_reg(self, op: DecodedInstruction) -> None:
        v = self.state.v
        total = v[op.x] + v[op.y]
        v[op.x] = total & 0xFF
        v[FLAG_REGISTER] = 1 if total > 0xFF else 0

    def op_sub(self, op: DecodedInstruction) -> None:
        v = self.state.v
        minuend, subtrahend = v[op.x], v[op.y]
        v[op.x] = (minuend - subtrahend) & 0xFF
        v[FLAG_REGISTER] = 1 if minuend >= subtrahend else 0

    def op_subn(self, op: DecodedInstruction) -> None:
        v = self.state.v
        minuend, subtrahend = v[op.y], v[op.x]
        v[op.x] = (minuend - subtrahend) & 0xFF
        v[FLAG_REGISTER] = 1 if minuend >= subtrahend else 0

    def op_shr(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[FLAG_REGISTER] = v[op.x] & 0x01
        v[op.x] >>= 1

    def op_shl(self, op: DecodedInstruction) -> None:
        v = self.state.v
        v[FLAG_REGISTER] = 1 if v[op.x] & 0x80 else 0
        v[op.x] = (v[op.x] << 1) & 0xFF

    def op_ld_index(self, op: DecodedInstruction) -> None:
        self.state.i = op.nnn

    def op_jp_offset(self, op: DecodedInstruction) -> None:
        target = op.nnn + self.state.v[0]
        mask = 0xFF if self.truncate_jump_target else 0xFFFF
        self.state.pc = target & mask

    def op_rnd(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = self._random.getrandbits(8) & op.nn

    def op_drw(self, op: DecodedInstruction) -> None:
        v = self.state.v
        origin_x = v[op.x]
        origin_y = v[op.y]
        collision = False

        for row in range(op.n):
            sprite = self.memory.load8(self.state.i + row)
            for column in range(8):
                if not sprite & (0x80 >> column):
                    continue
                if not self.framebuffer.toggle(origin_x + column, origin_y + row):
                    collision = True

        v[FLAG_REGISTER] = 1 if collision else 0
        self._redraw = True

    def op_skp(self, op: DecodedInstruction) -> None:
        if self._key_pressed(self.state.v[op.x]):
            self._skip()

    def op_sknp(self, op: DecodedInstruction) -> None:
        if not self._key_pressed(self.state.v[op.x]):
            self._skip()

    def op_ld_from_delay(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = self.state.delay_timer

    def op_wait_key(self, op: DecodedInstruction) -> None:
        key = self.keypad.first_pressed()
        if key is None:
            # Re-fetch this instruction on the next step until a key is held.
            self.state.pc = (self.state.pc - 2) & 0xFFFF
            return
        self.state.v[op.x] = key

    def op_ld_delay(self, op: DecodedInstruction) -> None:
        self.state.delay_timer = self.state.v[op.x]

    def op_ld_sound(self, op: DecodedInstruction) -> None:
        self.state.sound_timer = self.state.v[op.x]

    def op_add_index(self, op: DecodedInstruction) -> None:
        self.state.i = (self.state.i + self.state.v[op.x]) & 0xFFFF

    def op_ld_glyph(self, op: DecodedInstruction) -> None:
        self.state.i = glyph_address(self.state.v[op.x])

    def op_bcd(self, op: DecodedInstruction) -> None:
        value = self.state.v[op.x]
        address = self.state.i
        self.memory.store8(address, value // 100)
        self.memory.store8(address + 1, (value // 10) % 10)
        self.memory.store8(address + 2, value % 10)

    def op_store_registers(self, op: DecodedInstruction) -> None:
        for offset in range(op.x + 1):
            self.memory.store8(self.state.i + offset, self.state.v[offset])

    def op_load_registers(self, op: DecodedInstruction) -> None:
        for offset in range(op.x + 1):
            self.state.v[offset] = self.memory.load8(self.state.i + offset)

    # ------------------------------------------------------------------
    # Helpers

    def _execute_next(self) -> DecodedInstruction:
        pc_before = self.state.pc
        opcode = self.memory.load16(pc_before)
        self.state.pc = (pc_before + 2) & 0xFFFF

        decoded = self._decode(opcode, pc_before)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%04x opcode=%04x %s", pc_before, opcode, decoded.mnemonic)

        handler = getattr(self, decoded.instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{decoded.instruction.handler}' not implemented")
        handler(decoded)
        return decoded

    def _decode(self, opcode: int, pc: int) -> DecodedInstruction:
        instruction = lookup(opcode, self.instruction_table)
        if instruction is None:
            raise IllegalInstruction(opcode, pc)
        return DecodedInstruction(opcode, instruction)

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _key_pressed(self, key: int) -> bool:
        if not 0 <= key < KEY_COUNT:
            raise CPUError(f"key index {key:#04x} out of range")
        return self.keypad.is_pressed(key)
