from typing import List, Tuple

from .registers import MEM_SIZE


class Memory:
    """100 decimal cells held as an immutable snapshot.

    Writers take a list copy, change it and commit it back; the previous
    snapshot is never touched, so readers may keep a reference to it.
    """

    def __init__(self):
        self.cells: Tuple[int, ...] = (0,) * MEM_SIZE

    def read(self, addr: int) -> int:
        """Read one cell"""
        return self.cells[addr % MEM_SIZE]

    def copy(self) -> List[int]:
        """Writable copy of the current snapshot"""
        return list(self.cells)

    def commit(self, cells: List[int]) -> Tuple[int, ...]:
        """Replace the snapshot with a finished copy and return it."""
        if len(cells) != MEM_SIZE:
            raise ValueError(f"Memory image must have {MEM_SIZE} cells, got {len(cells)}")
        self.cells = tuple(cells)
        return self.cells
