"""Program builder and mnemonic text format for the MOV-only machine.

Every instruction is a single decimal word ``SSDD``: copy cell SS into cell
DD. The word 0000 stops the machine.

    MOV src, dst     ; generic move
    INP dst          ; MOV INP, dst
    OUT src          ; MOV src, OUT
    SETA/SETB/SETC s ; MOV s, A / B / C
    HALT             ; 0000

Operands are two-digit decimal addresses or the special cell names
(PC, A, B, SUM, SUB, CMP, TRN, C, TMP, TMP2, OUT, INP, HALT).
"""
import re
from typing import Iterator, List, MutableSequence, Sequence, Tuple

from .registers import (CMP, HALT, INP, MEM_SIZE, OP_A, OP_B, OP_C, OUT,
                        PROGRAM_START, SUB, SUM, TMP, TRN, address_of,
                        register_name)


class AssemblyError(ValueError):
    def __init__(self, lineno: int, message: str):
        super().__init__(f"Line {lineno}: {message}")
        self.lineno = lineno


def encode(src: int, dst: int) -> int:
    return (src % 100) * 100 + (dst % 100)


class Assembler:
    """Sequential builder for the program region; every call returns self."""

    def __init__(self, start: int = PROGRAM_START, end: int = MEM_SIZE):
        self.range = range(start, end)
        self.instr: List[int] = []

    def mov(self, src: int, dst: int) -> "Assembler":
        self.instr.append(encode(src, dst))
        return self

    def inp(self, dst: int) -> "Assembler":
        return self.mov(INP, dst)

    def out(self, src: int) -> "Assembler":
        return self.mov(src, OUT)

    def set_a(self, src: int) -> "Assembler":
        return self.mov(src, OP_A)

    def set_b(self, src: int) -> "Assembler":
        return self.mov(src, OP_B)

    def set_c(self, src: int) -> "Assembler":
        return self.mov(src, OP_C)

    def halt(self) -> "Assembler":
        return self.mov(HALT, HALT)

    def __len__(self) -> int:
        return len(self.instr)

    def write_to(self, cells: MutableSequence[int]) -> None:
        """Store the words from the start of the range; later cells keep their values."""
        if len(self.instr) > len(self.range):
            raise ValueError(
                f"Program of {len(self.instr)} words does not fit in {len(self.range)} cells")
        for addr, word in zip(self.range, self.instr):
            cells[addr] = word


def default_program() -> Assembler:
    """Demo: read A and B, output A-B when A > B, otherwise A+B."""
    return (Assembler()
            .inp(OP_A)
            .inp(OP_B)
            .set_c(CMP)
            .mov(SUM, TMP)
            .mov(SUB, OP_A)
            .mov(TMP, OP_B)
            .out(TRN)
            .halt())


# ───────────────────────────── text format ─────────────────────────────
_SETTERS = {"SETA": OP_A, "SETB": OP_B, "SETC": OP_C}
_SETTER_NAMES = {addr: name for name, addr in _SETTERS.items()}


def disassemble(word: int) -> str:
    """Render one instruction word as a mnemonic line."""
    if word == 0:
        return "HALT"
    src, dst = word // 100, word % 100
    if src == INP:
        return f"INP {register_name(dst)}"
    if dst == OUT:
        return f"OUT {register_name(src)}"
    if dst in _SETTER_NAMES:
        return f"{_SETTER_NAMES[dst]} {register_name(src)}"
    return f"MOV {register_name(src)}, {register_name(dst)}"


def listing(cells: Sequence[int], start: int = PROGRAM_START) -> Iterator[Tuple[int, int, str]]:
    """(address, word, mnemonic) for every cell of the program region."""
    for addr in range(start, MEM_SIZE):
        word = cells[addr]
        yield addr, word, disassemble(word)


def _operand(tok: str, lineno: int) -> int:
    addr = address_of(tok)
    if addr is None:
        raise AssemblyError(lineno, f"unknown operand {tok!r}")
    return addr


def assemble_source(text: str) -> Assembler:
    """Parse mnemonic lines (``;`` starts a comment) into an Assembler."""
    asm = Assembler()
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = re.sub(r";.*$", "", line).strip()
        if not line:
            continue

        if re.fullmatch(r"HALT", line, re.I):
            asm.halt()
            continue

        m = re.fullmatch(r"MOV\s+(\w+)\s*[,\s]\s*(\w+)", line, re.I)
        if m:
            asm.mov(_operand(m.group(1), lineno), _operand(m.group(2), lineno))
            continue

        m = re.fullmatch(r"(INP|OUT|SETA|SETB|SETC)\s+(\w+)", line, re.I)
        if m:
            op, addr = m.group(1).upper(), _operand(m.group(2), lineno)
            if op == "INP":
                asm.inp(addr)
            elif op == "OUT":
                asm.out(addr)
            else:
                asm.mov(addr, _SETTERS[op])
            continue

        raise AssemblyError(lineno, f"syntax error: {line!r}")
    return asm
