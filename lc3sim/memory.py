"""Memory model for the LC-3 simulator."""

from typing import Iterable, Optional

from .bits import WORD_MASK
from .isa import MEMORY_SIZE


class Memory:
    """Flat word-addressed store covering the full 16-bit address space.

    Addresses and values are masked to 16 bits, so every access is valid
    and address arithmetic wraps around at 0xFFFF.
    """

    def __init__(self, initial_values: Optional[dict[int, int]] = None):
        self._data: list[int] = [0] * MEMORY_SIZE

        if initial_values:
            for addr, val in initial_values.items():
                self.write(addr, val)

    def read(self, addr: int) -> int:
        """Read word from memory address."""
        return self._data[addr & WORD_MASK]

    def write(self, addr: int, value: int) -> None:
        """Write 16-bit value to memory address."""
        self._data[addr & WORD_MASK] = value & WORD_MASK

    def load(self, origin: int, words: Iterable[int]) -> None:
        """Write consecutive words starting at origin."""
        for offset, word in enumerate(words):
            self.write(origin + offset, word)

    def get_watched(self, addresses: list[int]) -> dict[str, int]:
        """Get values at watched addresses as string-keyed dict."""
        return {str(addr): self._data[addr] for addr in addresses if 0 <= addr < MEMORY_SIZE}

    def snapshot(self) -> list[int]:
        """Return a copy of the entire memory."""
        return self._data.copy()
