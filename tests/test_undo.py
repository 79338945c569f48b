"""Test undo/redo history."""

import pytest

from cellpad import CursorPosition, DocumentBuffer, DocumentSnapshot, HistoryLog, NavigationEngine


def make_buffer(lines):
    return DocumentBuffer(NavigationEngine(80, 10), lines)


def state(buffer):
    return (list(buffer.lines), buffer.cursor.as_tuple())


def test_newline_then_undo_restores_lines_and_cursor():
    b = make_buffer(["abc", "def"])
    b.cursor = CursorPosition(0, 3)

    b.insert_line_break()
    assert b.lines == ["abc", "", "def"]
    assert b.cursor == CursorPosition(1, 0)

    assert b.undo() is True
    assert b.lines == ["abc", "def"]
    assert b.cursor == CursorPosition(0, 3)

    assert b.redo() is True
    assert b.lines == ["abc", "", "def"]
    assert b.cursor == CursorPosition(1, 0)


def test_undo_and_redo_on_empty_stacks_are_silent():
    b = make_buffer(["abc"])
    assert b.undo() is False
    assert b.redo() is False
    assert b.lines == ["abc"]


def test_new_edit_clears_redo():
    b = make_buffer([""])
    b.insert_character("a")
    b.insert_character("b")
    b.undo()
    assert b.history.can_redo()

    b.insert_character("c")

    assert not b.history.can_redo()
    assert b.lines == ["ac"]


def _select(b, anchor, live):
    b.selection.anchor = CursorPosition(*anchor)
    b.selection.live = CursorPosition(*live)
    b.cursor = CursorPosition(*live)


@pytest.mark.parametrize("setup,op", [
    (lambda b: setattr(b, 'cursor', CursorPosition(0, 2)), lambda b: b.insert_character("x")),
    (lambda b: setattr(b, 'cursor', CursorPosition(1, 1)), lambda b: b.insert_line_break()),
    (lambda b: setattr(b, 'cursor', CursorPosition(1, 0)), lambda b: b.delete_backward()),
    (lambda b: setattr(b, 'cursor', CursorPosition(2, 3)), lambda b: b.delete_backward()),
    (lambda b: _select(b, (0, 1), (2, 2)), lambda b: b.delete_selection()),
    (lambda b: _select(b, (2, 4), (0, 0)), lambda b: b.insert_character("y")),
    (lambda b: setattr(b, 'cursor', CursorPosition(1, 2)), lambda b: b.paste_text("p\nq\n")),
])
def test_undo_and_redo_are_exact_inverses(setup, op):
    b = make_buffer(["first", "second", "third"])
    setup(b)
    before = state(b)

    op(b)
    after = state(b)
    assert after != before

    b.undo()
    assert state(b) == before

    b.redo()
    assert state(b) == after


def test_undo_clears_selection():
    b = make_buffer(["abc"])
    b.insert_character("x")
    b.select_all()

    b.undo()

    assert not b.selection.active


def test_history_bound_drops_oldest():
    log = HistoryLog(max_entries=2)
    for i in range(3):
        log.record(DocumentSnapshot([str(i)]))

    assert log.undo_depth == 2


def test_bounded_history_keeps_newest_steps():
    b = make_buffer([""])
    b.history = HistoryLog(max_entries=2)
    for ch in "abcd":
        b.insert_character(ch)

    assert b.undo() and b.undo()
    assert b.lines == ["ab"]
    assert b.undo() is False

    assert b.redo() and b.redo()
    assert b.lines == ["abcd"]
    assert b.history.undo_depth == 2


def test_load_clears_history():
    b = make_buffer(["abc"])
    b.insert_character("x")
    b.load("fresh")
    assert not b.history.can_undo()
    assert b.undo() is False
