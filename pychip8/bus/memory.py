"""Memory for the CHIP-8 Python port.

CHIP-8 exposes a flat 4 KiB address space. Unlike the original interpreter,
which indexed its byte array with raw register values, every access here is
bounds checked so that a corrupted ROM produces a reportable error instead of
silently reading or writing outside the machine.
"""

from __future__ import annotations

from dataclasses import dataclass

MEMORY_SIZE = 0x1000


class MemoryAccessError(Exception):
    """Raised when a program touches an address outside the mapped memory."""

    def __init__(self, address: int, start: int, end: int) -> None:
        super().__init__(f"address {address:#06x} outside memory {start:#06x}-{end:#06x}")
        self.address = address


@dataclass
class Memory:
    """Simple byte-addressable memory region."""

    start: int = 0x000
    length: int = MEMORY_SIZE

    def __post_init__(self) -> None:
        if self.start < 0 or self.length <= 0:
            raise ValueError("memory region must have a positive length and non-negative start")
        self._data = bytearray(self.length)

    def get_end_address(self) -> int:
        return self.start + self.length - 1

    def _offset(self, address: int) -> int:
        offset = address - self.start
        if not 0 <= offset < self.length:
            raise MemoryAccessError(address, self.start, self.get_end_address())
        return offset

    def load8(self, address: int) -> int:
        return self._data[self._offset(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._offset(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word, as CHIP-8 stores its opcodes."""

        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def load_image(self, address: int, data: bytes) -> None:
        """Copy ``data`` into memory starting at ``address``."""

        if not data:
            return
        first = self._offset(address)
        self._offset(address + len(data) - 1)
        self._data[first : first + len(data)] = data

    def snapshot(self) -> bytes:
        return bytes(self._data)


__all__ = ["MEMORY_SIZE", "Memory", "MemoryAccessError"]
