from typing import Dict, Optional

MEM_SIZE = 100            # cells 00..99
PROGRAM_START = 50        # 00..49 data, 50..99 program
PROGRAM_SIZE = MEM_SIZE - PROGRAM_START
CELL_MODULUS = 10000      # 4 decimal digits
HISTORY_CAPACITY = 100

HALT = 0
PC = 1
OP_A = 2
OP_B = 3
SUM = 4
SUB = 5
CMP = 6
TRN = 7
OP_C = 8
TMP = 9
TMP2 = 10
OUT = 11
INP = 12

SPECIAL_REGS: Dict[int, str] = {
    HALT: "HALT",
    PC: "PC",
    OP_A: "A",
    OP_B: "B",
    SUM: "SUM",
    SUB: "SUB",
    CMP: "CMP",
    TRN: "TRN",
    OP_C: "C",
    TMP: "TMP",
    TMP2: "TMP2",
    OUT: "OUT",
    INP: "INP",
}
DERIVED_REGS = (SUM, SUB, CMP, TRN)

_BY_NAME = {name: addr for addr, name in SPECIAL_REGS.items()}


def register_name(addr: int) -> str:
    """Symbolic name of a cell, or its two-digit address."""
    return SPECIAL_REGS.get(addr, f"{addr:02d}")


def address_of(token: str) -> Optional[int]:
    """Inverse of register_name(); None when the token names no cell."""
    token = token.strip().upper()
    if token in _BY_NAME:
        return _BY_NAME[token]
    if token.isdigit() and 0 <= int(token) < MEM_SIZE:
        return int(token)
    return None


def in_program_region(addr: int) -> bool:
    return PROGRAM_START <= addr < MEM_SIZE
