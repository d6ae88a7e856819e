from typing import List

from .registers import CELL_MODULUS, CMP, OP_A, OP_B, OP_C, SUB, SUM, TRN


class ALU:
    """Derived registers: SUM/SUB/CMP/TRN are pure functions of A, B and C."""
    OPS = {
        SUM: lambda a, b, c: (a + b) % CELL_MODULUS,
        SUB: lambda a, b, c: (a - b + CELL_MODULUS) % CELL_MODULUS,  # never negative
        CMP: lambda a, b, c: 1 if a > b else 0,
        TRN: lambda a, b, c: a if c != 0 else b,
    }

    @classmethod
    def execute(cls, target: int, a: int, b: int, c: int = 0) -> int:
        try:
            return cls.OPS[target](a, b, c)
        except KeyError as e:
            raise ValueError(f"Cell {target} is not a derived register") from e

    @classmethod
    def recompute(cls, cells: List[int]) -> None:
        """Refresh the derived cells of a writable memory copy in place."""
        a, b, c = cells[OP_A], cells[OP_B], cells[OP_C]
        for target, op in cls.OPS.items():
            cells[target] = op(a, b, c)
