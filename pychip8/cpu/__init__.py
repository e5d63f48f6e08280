"""CPU package for the CHIP-8 Python port."""

from .core import (
    FLAG_REGISTER,
    MAX_PROGRAM_SIZE,
    PROGRAM_START,
    CPUError,
    CPUState,
    IllegalInstruction,
    Interpreter,
    LoadError,
    StackUnderflow,
)
from . import opcodes

__all__ = [
    "Interpreter",
    "CPUState",
    "CPUError",
    "LoadError",
    "IllegalInstruction",
    "StackUnderflow",
    "FLAG_REGISTER",
    "MAX_PROGRAM_SIZE",
    "PROGRAM_START",
    "opcodes",
]
