from dataclasses import dataclass
from typing import Optional


@dataclass
class CursorPosition:
    row: int = 0
    column: int = 0

    def __lt__(self, other):
        if self.row != other.row:
            return self.row < other.row
        return self.column < other.column

    def __le__(self, other):
        return not other < self

    def copy(self) -> "CursorPosition":
        return CursorPosition(self.row, self.column)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.column)


SelectionRange = tuple[CursorPosition, CursorPosition]


class SelectionModel:
    """Anchor/live pair tracked while the user extends a selection.

    The anchor stays where the selection began; the live point follows the
    cursor. Consumers always go through ``normalized_range()`` so they never
    have to care which end was set first.
    """

    def __init__(self):
        self.anchor: Optional[CursorPosition] = None
        self.live: Optional[CursorPosition] = None

    def begin_or_extend(self, old_point: CursorPosition, new_point: CursorPosition):
        """Extend the selection after a motion from ``old_point`` to ``new_point``.

        A motion with no selection in progress anchors the selection at the
        position the cursor had before it moved.
        """
        if self.anchor is None:
            self.anchor = old_point.copy()
        self.live = new_point.copy()

    def clear(self):
        self.anchor = None
        self.live = None

    @property
    def active(self) -> bool:
        return self.anchor is not None and self.live is not None

    def has_effective_selection(self) -> bool:
        """True when the selection spans at least one position."""
        return self.active and self.anchor != self.live

    def normalized_range(self) -> Optional[SelectionRange]:
        if not self.active:
            return None
        if self.live < self.anchor:
            return (self.live.copy(), self.anchor.copy())
        return (self.anchor.copy(), self.live.copy())

    def select_all(self, lines: list[str]):
        last_row = len(lines) - 1
        self.anchor = CursorPosition(0, 0)
        self.live = CursorPosition(last_row, len(lines[last_row]))

    @staticmethod
    def extract_text(lines: list[str], selection_range: SelectionRange) -> str:
        """Return the text spanned by a normalized range.

        Rows strictly inside a multi-row range contribute their whole text
        followed by a line break; columns past a line's end are clamped.
        """
        start, end = selection_range
        if start.row == end.row:
            line = lines[start.row]
            return line[min(start.column, len(line)):min(end.column, len(line))]

        parts = []
        for row in range(start.row, end.row + 1):
            line = lines[row]
            if row == start.row:
                parts.append(line[min(start.column, len(line)):])
            elif row == end.row:
                parts.append(line[:min(end.column, len(line))])
            else:
                parts.append(line)
        return "\n".join(parts)
