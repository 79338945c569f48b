import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class DocumentSnapshot:
    lines: list[str] = field(default_factory=lambda: [""])
    cursor_row: int = 0
    cursor_column: int = 0


class HistoryLog:
    """Undo/redo stacks of whole-document snapshots.

    Each recorded edit costs a full copy of the line list. That keeps undo
    trivially exact but grows with document size; ``max_entries`` bounds
    the undo stack when set (unbounded by default).
    """

    def __init__(self, max_entries: Optional[int] = None):
        # A bounded deque drops its oldest entry on append
        self._undo_stack: deque[DocumentSnapshot] = deque(maxlen=max_entries)
        self._redo_stack: list[DocumentSnapshot] = []

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()

    def record(self, snapshot: DocumentSnapshot):
        self._undo_stack.append(snapshot)
        # Any new edit invalidates redo history
        self._redo_stack.clear()

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def undo(self, buffer) -> bool:
        if not self._undo_stack:
            return False
        previous = self._undo_stack.pop()
        self._redo_stack.append(buffer._snapshot())
        buffer._apply_snapshot(previous)
        logger.debug("undo: %d left, %d redoable", len(self._undo_stack), len(self._redo_stack))
        return True

    def redo(self, buffer) -> bool:
        if not self._redo_stack:
            return False
        following = self._redo_stack.pop()
        self._undo_stack.append(buffer._snapshot())
        buffer._apply_snapshot(following)
        logger.debug("redo: %d left, %d undoable", len(self._redo_stack), len(self._undo_stack))
        return True
