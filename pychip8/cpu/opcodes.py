"""Opcode metadata and the two-level decode table for the CHIP-8 CPU."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Iterable, List, Mapping, Sequence


class Selector(Enum):
    """Opcode field that picks an instruction inside a primary-nibble group."""

    NONE = auto()
    LOW_NIBBLE = auto()
    LOW_BYTE = auto()
    WORD = auto()

    def extract(self, opcode: int) -> int | None:
        if self is Selector.LOW_NIBBLE:
            return opcode & 0x000F
        if self is Selector.LOW_BYTE:
            return opcode & 0x00FF
        if self is Selector.WORD:
            return opcode & 0xFFFF
        return None


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 instruction."""

    primary: int
    mnemonic: str
    handler: str
    key: int | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.primary <= 0xF:
            raise ValueError(f"primary nibble out of range: {self.primary}")


@dataclass(frozen=True)
class OpcodeGroup:
    """Instructions sharing a primary nibble."""

    selector: Selector
    entries: Mapping[int | None, Instruction]

    def lookup(self, opcode: int) -> Instruction | None:
        key = self.selector.extract(opcode)
        instruction = self.entries.get(key)
        if instruction is None and key is not None:
            # Groups may carry a catch-all entry registered without a key.
            instruction = self.entries.get(None)
        return instruction


@dataclass(frozen=True)
class DecodedInstruction:
    """An opcode split into its operand fields, bound to its instruction."""

    opcode: int
    instruction: Instruction

    @property
    def mnemonic(self) -> str:
        return self.instruction.mnemonic

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0x0F

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0x0F

    @property
    def n(self) -> int:
        return self.opcode & 0x000F

    @property
    def nn(self) -> int:
        return self.opcode & 0x00FF

    @property
    def nnn(self) -> int:
        return self.opcode & 0x0FFF


GROUP_SELECTORS: Mapping[int, Selector] = {
    0x0: Selector.WORD,
    0x1: Selector.NONE,
    0x2: Selector.NONE,
    0x3: Selector.NONE,
    0x4: Selector.NONE,
    0x5: Selector.NONE,
    0x6: Selector.NONE,
    0x7: Selector.NONE,
    0x8: Selector.LOW_NIBBLE,
    0x9: Selector.NONE,
    0xA: Selector.NONE,
    0xB: Selector.NONE,
    0xC: Selector.NONE,
    0xD: Selector.NONE,
    0xE: Selector.LOW_BYTE,
    0xF: Selector.LOW_BYTE,
}


class OpcodeTable:
    """Mutable builder for the 16-entry primary table."""

    _TABLE_SIZE: Final[int] = 0x10

    def __init__(self, selectors: Mapping[int, Selector] = GROUP_SELECTORS) -> None:
        self._selectors = dict(selectors)
        self._groups: List[dict[int | None, Instruction]] = [{} for _ in range(self._TABLE_SIZE)]

    def register(self, instruction: Instruction) -> None:
        group = self._groups[instruction.primary]
        if instruction.key is not None and self._selectors[instruction.primary] is Selector.NONE:
            raise ValueError(f"group {instruction.primary:X} does not take secondary keys")
        if instruction.key in group:
            existing = group[instruction.key]
            raise ValueError(
                f"opcode {instruction.primary:X}/{instruction.key} already registered as {existing.mnemonic}")
        group[instruction.key] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[OpcodeGroup | None]:
        table: list[OpcodeGroup | None] = []
        for primary, entries in enumerate(self._groups):
            if not entries:
                table.append(None)
                continue
            table.append(OpcodeGroup(self._selectors[primary], dict(entries)))
        return tuple(table)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[OpcodeGroup | None]:
    """Build the primary-nibble lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


def lookup(opcode: int, table: Sequence[OpcodeGroup | None]) -> Instruction | None:
    """Return the instruction for ``opcode`` or ``None`` when it is undefined."""

    group = table[(opcode >> 12) & 0x0F]
    if group is None:
        return None
    return group.lookup(opcode)


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0x0, "CLS", "op_cls", 0x00E0),
    Instruction(0x0, "RET", "op_ret", 0x00EE),
    # Legacy machine-code call, executed as a plain subroutine call.
    Instruction(0x0, "SYS", "op_call"),
    Instruction(0x1, "JP", "op_jp"),
    Instruction(0x2, "CALL", "op_call"),
    Instruction(0x3, "SE", "op_se_imm"),
    Instruction(0x4, "SNE", "op_sne_imm"),
    Instruction(0x5, "SE", "op_se_reg"),
    Instruction(0x6, "LD", "op_ld_imm"),
    Instruction(0x7, "ADD", "op_add_imm"),
    # Register ALU
    Instruction(0x8, "LD", "op_ld_reg", 0x0),
    Instruction(0x8, "OR", "op_or", 0x1),
    Instruction(0x8, "AND", "op_and", 0x2),
    Instruction(0x8, "XOR", "op_xor", 0x3),
    Instruction(0x8, "ADD", "op_add_reg", 0x4),
    Instruction(0x8, "SUB", "op_sub", 0x5),
    Instruction(0x8, "SHR", "op_shr", 0x6),
    Instruction(0x8, "SUBN", "op_subn", 0x7),
    Instruction(0x8, "SHL", "op_shl", 0xE),
    Instruction(0x9, "SNE", "op_sne_reg"),
    Instruction(0xA, "LDI", "op_ld_index"),
    Instruction(0xB, "JPV0", "op_jp_offset"),
    Instruction(0xC, "RND", "op_rnd"),
    Instruction(0xD, "DRW", "op_drw"),
    # Keypad
    Instruction(0xE, "SKP", "op_skp", 0x9E),
    Instruction(0xE, "SKNP", "op_sknp", 0xA1),
    # Timers, index and memory transfers
    Instruction(0xF, "LDDT", "op_ld_from_delay", 0x07),
    Instruction(0xF, "LDK", "op_wait_key", 0x0A),
    Instruction(0xF, "STDT", "op_ld_delay", 0x15),
    Instruction(0xF, "STST", "op_ld_sound", 0x18),
    Instruction(0xF, "ADDI", "op_add_index", 0x1E),
    Instruction(0xF, "LDF", "op_ld_glyph", 0x29),
    Instruction(0xF, "BCD", "op_bcd", 0x33),
    Instruction(0xF, "STR", "op_store_registers", 0x55),
    Instruction(0xF, "LDR", "op_load_registers", 0x65),
)


OPCODE_TABLE: Sequence[OpcodeGroup | None] = build_instruction_table(DEFAULT_INSTRUCTIONS)
