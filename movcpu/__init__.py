"""MOV-only CPU simulator core."""
from .alu import ALU
from .assembler import Assembler, AssemblyError, assemble_source, default_program, disassemble
from .cpu_core import Decoded, Simulator, decode_instruction
from .history import HistoryBuffer, HistoryEntry
from .program import ProgramData, ProgramDataError

__all__ = [
    "ALU",
    "Assembler",
    "AssemblyError",
    "Decoded",
    "HistoryBuffer",
    "HistoryEntry",
    "ProgramData",
    "ProgramDataError",
    "Simulator",
    "assemble_source",
    "decode_instruction",
    "default_program",
    "disassemble",
]
