import logging
from abc import ABC, abstractmethod
from typing import Optional

from .selection import CursorPosition, SelectionModel, SelectionRange
from .undo import DocumentSnapshot, HistoryLog

logger = logging.getLogger(__name__)


class Viewport(ABC):
    _buffer: "Optional[DocumentBuffer]" = None
    vertical_offset: int = 0
    horizontal_offset: int = 0

    @property
    def buffer(self):
        assert self._buffer
        return self._buffer

    @abstractmethod
    def adjust_horizontal(self):
        """Re-clamp horizontal_offset so the cursor column is visible.

        Called by the buffer after every operation that moves the cursor.
        """

    def reset(self):
        self.vertical_offset = 0
        self.horizontal_offset = 0


class DocumentBuffer:
    lines: list[str]
    cursor: CursorPosition
    viewport: Viewport

    def __init__(self, viewport: Viewport, lines: Optional[list[str]] = None):
        self.viewport = viewport
        self.viewport._buffer = self
        self.lines = list(lines) if lines else [""]
        self.cursor = CursorPosition()
        self.selection = SelectionModel()
        self.history = HistoryLog()
        # Bumped on every recorded mutation, undo and redo
        self.revision = 0

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.row]

    # --- History plumbing ---
    def _snapshot(self) -> DocumentSnapshot:
        return DocumentSnapshot(list(self.lines), self.cursor.row, self.cursor.column)

    def _apply_snapshot(self, snapshot: DocumentSnapshot):
        self.lines = list(snapshot.lines) or [""]
        self.cursor = CursorPosition(snapshot.cursor_row, snapshot.cursor_column)
        self._clamp_cursor()
        self.selection.clear()
        self.revision += 1

    def _record(self):
        self.history.record(self._snapshot())
        self.revision += 1

    def _clamp_cursor(self):
        if not self.lines:
            self.lines = [""]
        self.cursor.row = max(0, min(self.cursor.row, len(self.lines) - 1))
        self.cursor.column = max(0, min(self.cursor.column, len(self.lines[self.cursor.row])))

    # --- Selection access ---
    def selection_range(self) -> Optional[SelectionRange]:
        return self.selection.normalized_range()

    def selected_text(self) -> Optional[str]:
        """Text under an effective selection, or None."""
        if not self.selection.has_effective_selection():
            return None
        return SelectionModel.extract_text(self.lines, self.selection.normalized_range())

    def select_all(self):
        self.selection.select_all(self.lines)

    # --- Mutations ---
    def insert_character(self, c: str):
        """Insert one character at the cursor, replacing any selection.

        Replacing a selection and inserting is a single undo step.
        """
        self._record()
        if self.selection.has_effective_selection():
            self._remove_range(self.selection.normalized_range())
        self._clamp_cursor()
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        self.lines[row] = line[:col] + c + line[col:]
        self.cursor.column = col + len(c)
        self.selection.clear()
        self.viewport.adjust_horizontal()

    def insert_line_break(self):
        self._record()
        if self.selection.has_effective_selection():
            self._remove_range(self.selection.normalized_range())
        self._clamp_cursor()
        self._split_line()
        self.selection.clear()
        self.viewport.adjust_horizontal()

    def delete_backward(self):
        if self.selection.has_effective_selection():
            self.delete_selection()
            return
        self.selection.clear()
        self._clamp_cursor()
        row, col = self.cursor.row, self.cursor.column
        if row == 0 and col == 0:
            return
        self._record()
        if col > 0:
            line = self.lines[row]
            self.lines[row] = line[:col - 1] + line[col:]
            self.cursor.column = col - 1
        else:
            current = self.lines.pop(row)
            previous = self.lines[row - 1]
            self.lines[row - 1] = previous + current
            self.cursor.row = row - 1
            self.cursor.column = len(previous)
        self.viewport.adjust_horizontal()

    def delete_selection(self):
        """Delete the normalized selection range; degenerate ranges only clear."""
        if not self.selection.has_effective_selection():
            self.selection.clear()
            return
        self._record()
        self._remove_range(self.selection.normalized_range())
        self.selection.clear()
        self.viewport.adjust_horizontal()

    def _remove_range(self, selection_range: SelectionRange):
        start, end = selection_range
        if start.row == end.row:
            line = self.lines[start.row]
            self.lines[start.row] = line[:start.column] + line[end.column:]
        else:
            head = self.lines[start.row][:start.column]
            end_line = self.lines[end.row]
            tail = end_line[min(end.column, len(end_line)):]
            self.lines[start.row] = head + tail
            # Rows shift up as they go, so always delete right after start
            for _ in range(end.row - start.row):
                del self.lines[start.row + 1]
        self.cursor = CursorPosition(start.row, start.column)
        self._clamp_cursor()

    def _split_line(self):
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        self.lines[row] = line[:col]
        self.lines.insert(row + 1, line[col:])
        self.cursor.row = row + 1
        self.cursor.column = 0

    def paste_text(self, text: str):
        """Insert externally supplied text at the cursor as one undo step.

        Line breaks in ``text`` are ``\\n`` (``\\r\\n`` is accepted too).
        """
        if not text:
            return
        text = text.replace("\r\n", "\n")
        self._record()
        if self.selection.has_effective_selection():
            self._remove_range(self.selection.normalized_range())
        self._clamp_cursor()
        parts = text.split("\n")
        for i, part in enumerate(parts):
            row, col = self.cursor.row, self.cursor.column
            line = self.lines[row]
            self.lines[row] = line[:col] + part + line[col:]
            self.cursor.column = col + len(part)
            if i < len(parts) - 1:
                self._split_line()
        self.selection.clear()
        self.viewport.adjust_horizontal()

    def cut_selection(self) -> Optional[str]:
        """Delete the selection and return its text, or None if there was none."""
        text = self.selected_text()
        self.delete_selection()
        return text

    def undo(self) -> bool:
        changed = self.history.undo(self)
        if changed:
            self.viewport.adjust_horizontal()
        return changed

    def redo(self) -> bool:
        changed = self.history.redo(self)
        if changed:
            self.viewport.adjust_horizontal()
        return changed

    # --- Whole-document I/O ---
    def load(self, text: str):
        """Replace the document with ``text``.

        Lines are split on ``\\n`` only, so ``serialize()`` gives back exactly
        the loaded text, trailing newline included.
        """
        self.lines = text.split("\n")
        self.cursor = CursorPosition()
        self.selection.clear()
        self.history.clear()
        self.viewport.reset()
        self.revision += 1
        logger.debug("loaded %d lines", len(self.lines))

    def serialize(self) -> str:
        return "\n".join(self.lines)

    def search(self, query: str) -> bool:
        """Move the cursor to the next literal match of ``query``.

        Rows from the cursor row to the end are scanned first, then rows from
        the top up to (not including) the cursor row. Each row is searched
        from its start. Returns False, leaving the cursor alone, when the
        query is empty or absent.
        """
        if not query:
            return False
        current = self.cursor.row
        order = list(range(current, len(self.lines))) + list(range(0, current))
        for row in order:
            pos = self.lines[row].find(query)
            if pos != -1:
                self.cursor = CursorPosition(row, pos)
                self.selection.clear()
                self.viewport.adjust_horizontal()
                return True
        return False

    def count_words(self) -> int:
        return sum(len(line.split()) for line in self.lines)
