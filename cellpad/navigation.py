from typing import Callable

from .constants import EditorConstants
from .model import Viewport
from .unicode import BLANKS, cluster_index_at, display_width, grapheme_boundaries


class NavigationEngine(Viewport):
    """Cursor motion and scroll-offset bookkeeping for one viewport.

    Owns no text: it reads the buffer's lines and adjusts the buffer's
    cursor. ``width`` and ``height`` are the text area's size in cells and
    must be supplied by the renderer before the adjust calls; a width of 0
    means "not known yet" and falls back to DEFAULT_VIEW_WIDTH.
    """

    width: int
    height: int

    def __init__(self, width: int = 0, height: int = 0,
                 accel_baseline: int = EditorConstants.ACCEL_BASELINE,
                 accel_ceiling: int = EditorConstants.ACCEL_CEILING):
        self.width = width
        self.height = height
        self.vertical_offset = 0
        self.horizontal_offset = 0
        self.accel_baseline = accel_baseline
        self.accel_ceiling = accel_ceiling
        self.accel_counter = accel_baseline

    def set_viewport(self, width: int, height: int):
        self.width = max(0, width)
        self.height = max(0, height)

    # --- Character motion ---
    def move_left(self):
        cursor = self.buffer.cursor
        if cursor.column > 0:
            cursor.column -= 1
        elif cursor.row > 0:
            cursor.row -= 1
            cursor.column = len(self.buffer.lines[cursor.row])

    def move_right(self):
        cursor = self.buffer.cursor
        if cursor.column < len(self.buffer.lines[cursor.row]):
            cursor.column += 1
        elif cursor.row + 1 < self.buffer.line_count:
            cursor.row += 1
            cursor.column = 0

    def move_up(self):
        cursor = self.buffer.cursor
        if cursor.row > 0:
            cursor.row -= 1
            # No remembered column: clamp from wherever we are now
            cursor.column = min(cursor.column, len(self.buffer.lines[cursor.row]))

    def move_down(self):
        cursor = self.buffer.cursor
        if cursor.row + 1 < self.buffer.line_count:
            cursor.row += 1
            cursor.column = min(cursor.column, len(self.buffer.lines[cursor.row]))

    # --- Word motion ---
    def word_left(self):
        """Move back to the nearest space/tab before the cursor.

        At column 0 the cursor jumps to the end of the previous line without
        consuming anything there.
        """
        cursor = self.buffer.cursor
        if cursor.column == 0:
            if cursor.row > 0:
                cursor.row -= 1
                cursor.column = len(self.buffer.lines[cursor.row])
            return
        line = self.buffer.lines[cursor.row]
        bounds = grapheme_boundaries(line)
        idx = cluster_index_at(bounds, min(cursor.column, len(line)))
        while idx > 0:
            idx -= 1
            if line[bounds[idx]:bounds[idx + 1]] in BLANKS:
                break
        cursor.column = bounds[idx]

    def word_right(self):
        """Move past the current word and the blank run that follows it.

        At the end of a line the cursor jumps to column 0 of the next line;
        at the end of the document it stays put.
        """
        cursor = self.buffer.cursor
        line = self.buffer.lines[cursor.row]
        if cursor.column >= len(line):
            if cursor.row + 1 < self.buffer.line_count:
                cursor.row += 1
                cursor.column = 0
            return
        bounds = grapheme_boundaries(line)
        count = len(bounds) - 1
        idx = cluster_index_at(bounds, cursor.column)
        while idx < count and line[bounds[idx]:bounds[idx + 1]] not in BLANKS:
            idx += 1
        while idx < count and line[bounds[idx]:bounds[idx + 1]] in BLANKS:
            idx += 1
        cursor.column = bounds[idx]

    # --- Accelerated motion ---
    def accelerated_left(self):
        for _ in range(self.accel_counter):
            self.move_left()
        self._accelerate()

    def accelerated_right(self):
        for _ in range(self.accel_counter):
            self.move_right()
        self._accelerate()

    def _accelerate(self):
        self.accel_counter = min(self.accel_counter * 2, self.accel_ceiling)

    def reset_acceleration(self):
        self.accel_counter = self.accel_baseline

    # --- Line, page and document motion ---
    def line_start(self):
        self.buffer.cursor.column = 0

    def line_end(self):
        self.buffer.cursor.column = len(self.buffer.current_line)

    def page_up(self):
        cursor = self.buffer.cursor
        cursor.row = max(0, cursor.row - self._page_rows())
        cursor.column = min(cursor.column, len(self.buffer.lines[cursor.row]))

    def page_down(self):
        cursor = self.buffer.cursor
        cursor.row = min(self.buffer.line_count - 1, cursor.row + self._page_rows())
        cursor.column = min(cursor.column, len(self.buffer.lines[cursor.row]))

    def document_start(self):
        self.buffer.cursor.row = 0
        self.buffer.cursor.column = 0

    def document_end(self):
        self.buffer.cursor.row = self.buffer.line_count - 1
        self.buffer.cursor.column = len(self.buffer.lines[-1])

    def _page_rows(self) -> int:
        return max(1, self.height)

    def perform(self, motion: Callable[[], None], extend: bool = False):
        """Run a motion, then update the selection and the scroll offsets.

        With ``extend`` the selection grows from the pre-motion position;
        otherwise any selection is dropped.
        """
        old_point = self.buffer.cursor.copy()
        motion()
        if extend:
            self.buffer.selection.begin_or_extend(old_point, self.buffer.cursor)
        else:
            self.buffer.selection.clear()
        self.adjust()

    # --- Scrolling ---
    def scroll_up(self):
        if self.vertical_offset > 0:
            self.vertical_offset -= 1

    def scroll_down(self):
        if self.vertical_offset < self.buffer.line_count - 1:
            self.vertical_offset += 1

    def adjust_vertical(self):
        rows = max(1, self.height)
        row = self.buffer.cursor.row
        if row < self.vertical_offset:
            self.vertical_offset = row
        elif row >= self.vertical_offset + rows:
            self.vertical_offset = row - rows + 1
        self.vertical_offset = min(self.vertical_offset, self.buffer.line_count - 1)

    def adjust_horizontal(self):
        available = self.width or EditorConstants.DEFAULT_VIEW_WIDTH
        cursor = self.buffer.cursor
        line = self.buffer.lines[cursor.row]
        width = display_width(line[:cursor.column])
        if width < self.horizontal_offset:
            self.horizontal_offset = width
        elif width >= self.horizontal_offset + available:
            self.horizontal_offset = width - available + 1

    def adjust(self):
        self.adjust_vertical()
        self.adjust_horizontal()

    def cursor_display_column(self) -> int:
        """Cursor's display column relative to the horizontal offset."""
        cursor = self.buffer.cursor
        line = self.buffer.lines[cursor.row]
        return max(0, display_width(line[:cursor.column]) - self.horizontal_offset)
