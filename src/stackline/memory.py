"""
Flat memory store shared by global and local variables.

Globals occupy the low addresses for the whole run.  Each call appends its
locals above them and releases exactly those cells when its block ends, so the
live locals of the innermost call are always the highest addresses.  No alias
to a local cell may outlive its call, which is what makes truncation safe.
"""

import logging
from typing import Dict, List

from .errors import BoundsViolation, MemoryFault

logger = logging.getLogger("stackline.memory")


class Memory:
    """Index-addressed array of integer cells with bounds checking."""

    def __init__(self, size: int = 0):
        if size < 0:
            raise MemoryFault(f"Cannot create memory with negative size {size}")
        self._cells: List[int] = [0] * size
        self._allocations = 0
        self._releases = 0
        self._writes = 0
        self._high_water = size

    def _check(self, address: int) -> None:
        if not isinstance(address, int):
            raise TypeError(f"Address must be integer, got {type(address).__name__}")
        if address < 0 or address >= len(self._cells):
            raise BoundsViolation(
                f"Address {address} out of bounds for memory of length {len(self._cells)}"
            )

    def __getitem__(self, address: int) -> int:
        self._check(address)
        return self._cells[address]

    def __setitem__(self, address: int, value: int):
        self._check(address)
        self._writes += 1
        self._cells[address] = value

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self):
        return iter(self._cells)

    def __repr__(self):
        return f"Memory({self._cells!r})"

    def allocate(self) -> int:
        """Append one zeroed cell and return its address."""
        self._cells.append(0)
        self._allocations += 1
        self._high_water = max(self._high_water, len(self._cells))
        address = len(self._cells) - 1
        logger.debug("allocated address %d", address)
        return address

    def release(self, count: int) -> None:
        """Drop the *count* highest cells."""
        if count < 0 or count > len(self._cells):
            raise BoundsViolation(
                f"Cannot release {count} cell(s) from memory of length {len(self._cells)}"
            )
        if count:
            del self._cells[-count:]
        self._releases += count
        logger.debug("released %d cell(s), length now %d", count, len(self._cells))

    def snapshot(self) -> List[int]:
        return list(self._cells)

    def get_stats(self) -> Dict:
        """Get usage statistics"""
        return {
            "length": len(self._cells),
            "allocations": self._allocations,
            "releases": self._releases,
            "writes": self._writes,
            "high_water": self._high_water,
        }
