"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
import termios
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import blessed

from .constants import EditorConstants
from .unicode import display_width, visible_span

logger = logging.getLogger(__name__)


@contextmanager
def control_keys_passthrough(extra_lflags: int = 0):
    """Clear IXON/IXOFF and IEXTEN (plus ``extra_lflags``) on stdin while active.

    Without this the tty driver eats Ctrl-S/Ctrl-Q for flow control and
    Ctrl-V as literal-next. Terminals that refuse are logged and left as is.
    """
    saved = None
    try:
        saved = termios.tcgetattr(sys.stdin)
        changed = list(saved)
        changed[0] &= ~(termios.IXON | termios.IXOFF)
        changed[3] &= ~(termios.IEXTEN | extra_lflags)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, changed)
    except (termios.error, AttributeError, OSError, ValueError) as e:
        logger.warning(f"Could not adjust terminal flags: {e}")
    try:
        yield
    finally:
        if saved is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, saved)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not restore terminal flags: {e}")


def line_number_width(total_lines: int) -> int:
    """Digits needed for the line-number gutter (never fewer than two)."""
    return max(len(str(total_lines)), EditorConstants.MIN_LINE_NUMBER_DIGITS)


def scrollbar_thumb(total: int, visible: int, offset: int) -> Optional[int]:
    """Row of the scrollbar thumb, or None when everything fits."""
    if visible <= 0 or total <= visible:
        return None
    max_scroll = total - visible
    ratio = min(offset, max_scroll) / max_scroll
    return round(ratio * (visible - 1))


def header_text(path: Optional[Path]) -> str:
    if path is None:
        return EditorConstants.NEW_FILE_HEADER
    full = str(path)
    limit = EditorConstants.HEADER_PATH_LIMIT
    truncated = full[:limit] + "..." if len(full) > limit else full
    return f"File: {path.name or 'Unknown'} | {truncated}"


def status_text(mode_name: str, line_count: int, row: int, column: int) -> str:
    return EditorConstants.STATUS_TEMPLATE.format(
        mode=mode_name, lines=line_count, row=row + 1, col=column + 1)


def selection_columns(selection_range, row: int, line_length: int) -> Optional[tuple[int, int]]:
    """Code point columns of ``row`` covered by a normalized selection."""
    if selection_range is None:
        return None
    start, end = selection_range
    if row < start.row or row > end.row:
        return None
    first = start.column if row == start.row else 0
    last = end.column if row == end.row else line_length
    return (min(first, line_length), min(last, line_length))


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies', sigint_event=False)
            self._curtsies_input.__enter__()
            self._curtsies_active = True

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)
            except OSError as e:
                logger.warning(f"Could not restore terminal input mode: {e}")
            finally:
                self._curtsies_input = None
                self._curtsies_active = False
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def get_key(self, timeout=None):
        """Get a single key token, or None when ``timeout`` expires.

        Args:
            timeout: Seconds to wait (None blocks, 0 polls)
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height

    def clear_screen(self):
        print(self.term.home + self.term.clear, end='')

    def _write(self, y: int, x: int, text: str):
        print(self.term.move(y, x) + text, end='')

    def draw_bar(self, y: int, x: int, width: int, text: str, reverse: bool = False):
        """Draw a one-row bar (header or status), padded or cut to ``width``."""
        start, end = visible_span(text, 0, width)
        shown = text[start:end]
        padded = shown + ' ' * max(0, width - display_width(shown))
        if reverse:
            padded = self.term.reverse + padded + self.term.normal
        self._write(y, x, padded)

    def draw_text_area(self, buffer, viewport, top: int, left: int, width: int, height: int,
                       follow_cursor: bool = True) -> Optional[tuple[int, int]]:
        """Paint gutter, text and scrollbar for ``height`` rows at (top, left).

        Reads the viewport's offsets as-is; callers adjust them beforehand.
        Returns the cursor's screen (y, x) when it is inside the area.
        """
        digits = line_number_width(buffer.line_count)
        gutter = digits + 1
        text_width = max(1, width - gutter - EditorConstants.SCROLLBAR_COLUMNS)
        start_row = viewport.vertical_offset
        selection_range = buffer.selection_range() if buffer.selection.has_effective_selection() else None
        thumb = scrollbar_thumb(buffer.line_count, height, start_row)

        for i in range(height):
            row = start_row + i
            y = top + i
            if row < buffer.line_count:
                number = f"{row + 1:>{digits}} "
                if row == buffer.cursor.row:
                    number = self.term.reverse + number[:-1] + self.term.normal + ' '
                self._write(y, left, number)
                self._write(y, left + gutter, self._compose_row(
                    buffer.lines[row], row, viewport.horizontal_offset, text_width, selection_range))
            else:
                self._write(y, left, ' ' * (gutter + text_width))
            bar = '█' if thumb == i else ' '
            self._write(y, left + gutter + text_width, bar)

        cursor = buffer.cursor
        if follow_cursor and start_row <= cursor.row < start_row + height:
            x = viewport.cursor_display_column()
            if x < text_width:
                return (top + cursor.row - start_row, left + gutter + x)
        return None

    def _compose_row(self, line: str, row: int, h_offset: int, width: int, selection_range) -> str:
        """Visible slice of one line, with the selected part in reverse video."""
        a, b = visible_span(line, h_offset, width)
        shown_width = display_width(line[a:b])
        padding = ' ' * max(0, width - shown_width)
        cols = selection_columns(selection_range, row, len(line))
        if cols is None:
            return line[a:b] + padding
        sel_a, sel_b = max(cols[0], a), min(cols[1], b)
        if sel_a >= sel_b:
            return line[a:b] + padding
        return (line[a:sel_a] + self.term.reverse + line[sel_a:sel_b] + self.term.normal
                + line[sel_b:b] + padding)

    def draw_file_tree(self, browser, top: int, left: int, width: int, height: int):
        """Draw the directory path, entry list with scrollbar, and a status row."""
        path_rows = 2
        list_height = max(0, height - path_rows - 1)
        path_label = f"Path: {browser.current_path}"
        for i in range(path_rows):
            chunk = path_label[i * width:(i + 1) * width]
            self.draw_bar(top + i, left, width, chunk)

        list_width = max(1, width - 1)
        entries = browser.visible_entries(list_height)
        thumb = scrollbar_thumb(len(browser.snapshot), list_height, browser.scroll_offset)
        for i in range(list_height):
            y = top + path_rows + i
            if i < len(entries):
                index, entry = entries[i]
                label = f"{i + 1}: {entry.name}{'/' if entry.is_dir else ''}"
                self.draw_bar(y, left, list_width, label, reverse=(index == browser.selected))
            else:
                self.draw_bar(y, left, list_width, '')
            self._write(y, left + list_width, '█' if thumb == i else ' ')

        self.draw_bar(top + height - 1, left, width, f"FileTree: {len(browser.snapshot)} entries")

    def draw_help(self, help_lines: list[str]):
        self.clear_screen()
        for i, line in enumerate(help_lines[:self.height]):
            self._write(i, 0, line)
        print(self.term.hide_cursor, end='', flush=True)

    def draw_popup(self, title: str, text: str):
        """Draw a three-row boxed prompt in the middle of the screen."""
        box_width = max(len(title) + 4, (self.width * 60) // 100)
        box_width = min(box_width, self.width)
        left = max(0, (self.width - box_width) // 2)
        top = max(0, (self.height * 40) // 100)
        inner = box_width - 2
        title_bar = f" {title} "[:inner]
        self._write(top, left, "┌" + title_bar + "─" * (inner - len(title_bar)) + "┐")
        shown = text[-(inner - 1):] if inner > 1 else ''
        self._write(top + 1, left, "│" + shown.ljust(inner) + "│")
        self._write(top + 2, left, "└" + "─" * inner + "┘")
        self.place_cursor(top + 1, left + 1 + len(shown))

    def place_cursor(self, y: int, x: int):
        print(self.term.move(y, x) + self.term.normal_cursor, end='', flush=True)

    def hide_cursor(self):
        print(self.term.hide_cursor, end='', flush=True)
