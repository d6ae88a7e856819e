import logging
from collections import deque
from typing import Deque, List, Optional

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from .cpu_core import Simulator
from .registers import CELL_MODULUS, INP, OUT

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 50  # 20 Hz


class RunController(QObject):
    """
    Step / Run / Pause / Reset on top of a Simulator.
    Run uses a QTimer that calls step() until the machine halts.
    Keeps the output log and feeds queued values into INP.
    """

    running_changed = Signal(bool)
    output_log_changed = Signal(list)

    def __init__(self, simulator: Optional[Simulator] = None,
                 interval_ms: int = DEFAULT_INTERVAL_MS, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.sim = simulator if simulator is not None else Simulator(self)
        self.output_log: List[int] = []
        self.pending_input: Deque[int] = deque()

        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.tick)

        self.sim.output.connect(self._on_output)

    # ───────────────────────────── state ─────────────────────────────
    @property
    def is_running(self) -> bool:
        return self.timer.isActive()

    @property
    def is_halted(self) -> bool:
        return self.sim.is_halted

    @property
    def waiting_for_input(self) -> bool:
        return self.sim.read_pointer == INP

    @Slot(object)
    def _on_output(self, value):
        if value is None:
            return
        self.output_log.append(value)
        self.output_log_changed.emit(list(self.output_log))

    # ───────────────────────────── input ─────────────────────────────
    def set_input(self, value: int) -> None:
        """Write a 4-digit value into the INP cell."""
        if not 0 <= value < CELL_MODULUS:
            raise ValueError(f"Input must be in 0..{CELL_MODULUS - 1}, got {value}")
        self.sim.update_memory(INP, value)

    def queue_input(self, *values: int) -> None:
        for v in values:
            if not 0 <= v < CELL_MODULUS:
                raise ValueError(f"Input must be in 0..{CELL_MODULUS - 1}, got {v}")
        self.pending_input.extend(values)

    # ───────────────────────────── commands ─────────────────────────────
    @Slot()
    def step(self) -> None:
        if self.waiting_for_input and self.pending_input:
            self.set_input(self.pending_input.popleft())
        self.sim.step()

    @Slot()
    def step_back(self) -> bool:
        entry = self.sim.history.peek()
        if not self.sim.step_back():
            return False
        if entry.dst == OUT and self.output_log:
            self.output_log.pop()
            self.output_log_changed.emit(list(self.output_log))
        return True

    @Slot()
    def tick(self) -> None:
        if self.sim.is_halted:
            self.pause()
            return
        self.step()
        if self.sim.is_halted:
            self.pause()

    @Slot()
    def run(self) -> None:
        if self.is_running:
            return
        self.timer.start()
        logger.info("running every %d ms", self.timer.interval())
        self.running_changed.emit(True)

    @Slot()
    def pause(self) -> None:
        if not self.is_running:
            return
        self.timer.stop()
        logger.info("paused")
        self.running_changed.emit(False)

    @Slot()
    def toggle_run(self) -> None:
        if self.is_running:
            self.pause()
        else:
            self.run()

    @Slot()
    def reset(self) -> None:
        self.pause()
        self.sim.reset()
        self.pending_input.clear()
        self.output_log.clear()
        self.output_log_changed.emit([])

    @Slot()
    def clear_program(self) -> None:
        self.pause()
        self.sim.reset_program()
        self.reset()

    def run_to_halt(self, max_steps: int) -> int:
        """Step synchronously until halt; returns the number of steps taken."""
        steps = 0
        while not self.sim.is_halted and steps < max_steps:
            self.step()
            steps += 1
        if not self.sim.is_halted:
            logger.warning("stopped after %d steps without reaching HALT", steps)
        return steps
