"""Test clipboard paste into the buffer."""

from cellpad import CursorPosition, DocumentBuffer, NavigationEngine


def make(lines, cursor=(0, 0)):
    b = DocumentBuffer(NavigationEngine(80, 10), lines)
    b.cursor = CursorPosition(*cursor)
    return b


def test_multiline_paste_is_one_undo_step():
    b = make(["ac"], (0, 1))

    b.paste_text("X\nY\nZ")

    assert b.lines == ["aX", "Y", "Zc"]
    assert b.cursor == CursorPosition(2, 1)
    assert b.history.undo_depth == 1

    b.undo()
    assert b.lines == ["ac"]
    assert b.cursor == CursorPosition(0, 1)


def test_paste_with_trailing_newline():
    b = make(["end"], (0, 0))
    b.paste_text("start\n")
    assert b.lines == ["start", "end"]
    assert b.cursor == CursorPosition(1, 0)


def test_paste_replaces_selection():
    b = make(["hello world"])
    b.selection.anchor = CursorPosition(0, 0)
    b.selection.live = CursorPosition(0, 5)

    b.paste_text("bye")

    assert b.lines == ["bye world"]
    b.undo()
    assert b.lines == ["hello world"]


def test_crlf_is_normalized():
    b = make([""])
    b.paste_text("a\r\nb")
    assert b.lines == ["a", "b"]


def test_empty_paste_records_nothing():
    b = make(["abc"])
    b.paste_text("")
    assert b.lines == ["abc"]
    assert b.history.undo_depth == 0
