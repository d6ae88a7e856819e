import re
import struct
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .registers import PROGRAM_SIZE, PROGRAM_START

MAX_PACKED = 9999          # exclusive upper bound of a stored program cell
_WIRE = struct.Struct(f">{PROGRAM_SIZE}h")   # 50 big-endian int16


class ProgramDataError(ValueError):
    """A program image holds a value that cannot be packed."""


@dataclass(frozen=True)
class ProgramData:
    """Packed image of the program region (cells 50..99).

    Equality and hashing are element-wise over the 50 values.
    """
    packed: Tuple[int, ...]

    def __post_init__(self):
        values = tuple(self.packed)
        if len(values) != PROGRAM_SIZE:
            raise ProgramDataError(f"Program image needs {PROGRAM_SIZE} values, got {len(values)}")
        for offset, v in enumerate(values):
            if not isinstance(v, int) or not 0 <= v < MAX_PACKED:
                raise ProgramDataError(
                    f"Cell {PROGRAM_START + offset} holds {v!r}, outside [0, {MAX_PACKED})")
        object.__setattr__(self, "packed", values)

    @classmethod
    def from_cells(cls, cells: Sequence[int]) -> "ProgramData":
        """Pack cells 50..99 of a full memory image."""
        return cls(tuple(cells[PROGRAM_START:PROGRAM_START + PROGRAM_SIZE]))

    def __iter__(self):
        return iter(self.packed)

    def __len__(self) -> int:
        return len(self.packed)

    # ── transport ──────────────────────────────────────────────
    def to_bytes(self) -> bytes:
        return _WIRE.pack(*self.packed)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ProgramData":
        if len(data) != _WIRE.size:
            raise ProgramDataError(f"Expected {_WIRE.size} bytes, got {len(data)}")
        return cls(_WIRE.unpack(data))

    def to_text(self) -> str:
        """Ten values per line, in address order."""
        rows = [self.packed[i:i + 10] for i in range(0, PROGRAM_SIZE, 10)]
        return "\n".join(" ".join(f"{v:04d}" for v in row) for row in rows) + "\n"

    @classmethod
    def from_text(cls, text: str) -> "ProgramData":
        tokens = [t for t in re.split(r"[\s,]+", text) if t]
        try:
            values: Iterable[int] = [int(t, 10) for t in tokens]
        except ValueError as e:
            raise ProgramDataError(f"Program image must be decimal integers: {e}") from e
        return cls(tuple(values))
