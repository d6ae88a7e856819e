import logging
from typing import NamedTuple, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from .alu import ALU
from .assembler import Assembler, default_program
from .history import HistoryBuffer, HistoryEntry
from .memory import Memory
from .program import ProgramData
from .registers import (HALT, MEM_SIZE, OP_A, OP_B, OP_C, OUT, PC,
                        PROGRAM_START, in_program_region)

logger = logging.getLogger(__name__)

# phase names reported through Simulator.phase_entered
PHASES = ("decode", "read_pointer", "write_pointer", "copy", "advance")


class Decoded(NamedTuple):
    src: int
    dst: int


def decode_instruction(value: int) -> Decoded:
    """SSDD -> (source SS, destination DD)"""
    return Decoded(value // 100, value % 100)


class Simulator(QObject):
    """
    MOV-only machine: 100 decimal cells, one instruction (copy src -> dst).
    ─────────────────────────────────────────────────────
    • step()      : decode → read/write pointers → copy → PC+1 → derived regs
    • step_back() : undo the last step from the history buffer
    • reset()     : clear registers and history, keep the program
    Every mutation publishes a fresh memory snapshot through memory_changed.
    """

    memory_changed = Signal(object)                   # tuple of 100 ints
    pointers_changed = Signal(object, object, object)  # read, write, pc (int | None)
    output = Signal(object)                           # emitted value, None = "no output"
    history_empty_changed = Signal(bool)
    program_reloaded = Signal(int)
    phase_entered = Signal(str)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.mem = Memory()
        self.history = HistoryBuffer()
        self.read_pointer: Optional[int] = None
        self.write_pointer: Optional[int] = None
        self.pc_pointer: Optional[int] = None
        self.last_output: Optional[int] = None
        self.program_reload_counter = 0
        self._history_empty = True

        self.reset_memory()
        self.reset_program()

    # ───────────────────────────── state ─────────────────────────────
    @property
    def memory(self) -> Tuple[int, ...]:
        return self.mem.cells

    @property
    def history_empty(self) -> bool:
        return self._history_empty

    @property
    def is_halted(self) -> bool:
        """The machine is halted whenever the word at PC is 0."""
        return self.mem.read(self.mem.read(PC)) == 0

    def _publish(self, cells) -> None:
        self.memory_changed.emit(self.mem.commit(cells))

    def _emit_output(self, value: Optional[int]) -> None:
        self.last_output = value
        self.output.emit(value)

    def _sync_history_flag(self) -> None:
        empty = self.history.empty
        if empty != self._history_empty:
            self._history_empty = empty
            self.history_empty_changed.emit(empty)

    def _set_pointers(self, read: Optional[int], write: Optional[int], pc: Optional[int]) -> None:
        self.read_pointer, self.write_pointer, self.pc_pointer = read, write, pc
        self.pointers_changed.emit(read, write, pc)

    def decode_current_instruction(self) -> Optional[Decoded]:
        """Preview the pending instruction; both pointers are None on halt."""
        cells = self.mem.cells
        pc = cells[PC]
        instr = cells[pc % MEM_SIZE]
        if instr == 0:
            self._set_pointers(None, None, pc)
            return None
        decoded = decode_instruction(instr)
        self._set_pointers(decoded.src, decoded.dst, pc)
        return decoded

    # ───────────────────────────── runner ─────────────────────────────
    def step(self) -> None:
        """One instruction cycle; a no-op while halted."""
        cells = self.mem.copy()
        pc_before = cells[PC]
        instr = cells[pc_before % MEM_SIZE]

        # Phase 1: decode
        self.phase_entered.emit("decode")
        if instr == 0:
            return

        # Phase 2/3: read and write pointers
        src, dst = decode_instruction(instr)
        self.phase_entered.emit("read_pointer")
        self.phase_entered.emit("write_pointer")

        self.history.push(HistoryEntry(
            pc_before=pc_before,
            instr=instr,
            src=src,
            dst=dst,
            value_src=cells[src],
            value_dst=cells[dst],
        ))

        # Phase 4: copy
        self.phase_entered.emit("copy")
        value = cells[src]
        cells[dst] = value

        # Phase 5: PC + 1, derived registers
        self.phase_entered.emit("advance")
        cells[PC] = (cells[PC] + 1) % MEM_SIZE
        ALU.recompute(cells)
        logger.debug("step PC=%02d %04d: [%02d]=%d -> [%02d]", pc_before, instr, src, value, dst)

        self._publish(cells)
        if dst == OUT:
            self._emit_output(value)
        self._sync_history_flag()
        self.decode_current_instruction()

    def step_back(self) -> bool:
        """Undo the most recent step. False when there is nothing to undo."""
        entry = self.history.pop()
        if entry is None:
            return False

        cells = self.mem.copy()
        cells[PC] = entry.pc_before
        cells[entry.dst] = entry.value_dst
        ALU.recompute(cells)
        logger.debug("step back to PC=%02d, [%02d]=%d", entry.pc_before, entry.dst, entry.value_dst)

        self._publish(cells)
        self.decode_current_instruction()
        self._emit_output(None)
        self._sync_history_flag()
        return True

    # ───────────────────────────── resets ─────────────────────────────
    def reset_memory(self) -> None:
        """Clear cells 00..49 and point PC at the program; the program stays."""
        cells = self.mem.copy()
        cells[:PROGRAM_START] = [0] * PROGRAM_START
        cells[HALT] = 0
        cells[PC] = PROGRAM_START
        cells[OP_A] = cells[OP_B] = cells[OP_C] = 0
        ALU.recompute(cells)
        self._publish(cells)
        self.decode_current_instruction()
        self._emit_output(None)
        logger.info("memory reset")

    def reset_program(self) -> None:
        """Replace cells 50..99 with the default demonstration program."""
        cells = self.mem.copy()
        cells[PROGRAM_START:] = [0] * (MEM_SIZE - PROGRAM_START)
        default_program().write_to(cells)
        self._publish(cells)
        self.decode_current_instruction()
        self._bump_reload_counter()
        logger.info("default program loaded")

    def reset(self) -> None:
        """Memory reset plus an empty history."""
        self.reset_memory()
        self.history.clear()
        self._sync_history_flag()

    def _bump_reload_counter(self) -> None:
        self.program_reload_counter += 1
        self.program_reloaded.emit(self.program_reload_counter)

    # ───────────────────────────── editing ─────────────────────────────
    def update_memory(self, address: int, value: int) -> None:
        """Single-cell edit; editing the program region drops the history."""
        if not 0 <= address < MEM_SIZE:
            return
        cells = self.mem.copy()
        cells[address] = value
        ALU.recompute(cells)
        self._publish(cells)
        if in_program_region(address):
            self.history.clear()
            self._sync_history_flag()
        self.decode_current_instruction()

    def get_program_data(self) -> ProgramData:
        return ProgramData.from_cells(self.mem.cells)

    def update_program_data(self, data: ProgramData) -> None:
        cells = self.mem.copy()
        cells[PROGRAM_START:] = list(data.packed)
        self._publish(cells)
        self.reset()
        self._bump_reload_counter()
        logger.info("program image loaded")

    def load_program(self, asm: Assembler) -> None:
        """Clear the program region and assemble into it, then reset."""
        cells = self.mem.copy()
        cells[PROGRAM_START:] = [0] * (MEM_SIZE - PROGRAM_START)
        asm.write_to(cells)
        self.update_program_data(ProgramData.from_cells(cells))
