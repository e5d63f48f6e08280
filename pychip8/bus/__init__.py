"""Bus-related helpers for the CHIP-8 Python port."""

from .memory import MEMORY_SIZE, Memory, MemoryAccessError

__all__ = [
    "MEMORY_SIZE",
    "Memory",
    "MemoryAccessError",
]
