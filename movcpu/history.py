import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from .registers import HISTORY_CAPACITY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """State captured before a step mutates memory.

    value_dst is the destination cell *before* the move, which together with
    pc_before is enough to undo the step exactly.
    """
    pc_before: int
    instr: int
    src: int
    dst: int
    value_src: int
    value_dst: int


class HistoryBuffer:
    """Bounded undo stack; the oldest entry is evicted once full."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        self.capacity = capacity
        self._entries: Deque[HistoryEntry] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    @property
    def empty(self) -> bool:
        return not self._entries

    def push(self, entry: HistoryEntry) -> None:
        if len(self._entries) >= self.capacity:
            dropped = self._entries.popleft()
            logger.debug("history full, dropping step at PC=%02d", dropped.pc_before)
        self._entries.append(entry)

    def pop(self) -> Optional[HistoryEntry]:
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()
