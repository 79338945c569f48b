"""Test selection functionality."""

import unittest

from cellpad import CursorPosition, DocumentBuffer, NavigationEngine, SelectionModel


class TestSelectionModel(unittest.TestCase):
    """Test anchor/live bookkeeping."""

    def test_no_anchor_means_no_range(self):
        s = SelectionModel()
        self.assertIsNone(s.normalized_range())
        self.assertFalse(s.has_effective_selection())

    def test_normalized_range_orders_points(self):
        s = SelectionModel()
        s.anchor = CursorPosition(2, 1)
        s.live = CursorPosition(0, 4)

        start, end = s.normalized_range()

        self.assertEqual(start, CursorPosition(0, 4))
        self.assertEqual(end, CursorPosition(2, 1))

    def test_normalized_range_same_row(self):
        s = SelectionModel()
        s.anchor = CursorPosition(1, 7)
        s.live = CursorPosition(1, 3)
        self.assertEqual(s.normalized_range(), (CursorPosition(1, 3), CursorPosition(1, 7)))

    def test_begin_or_extend_anchors_at_old_point_once(self):
        s = SelectionModel()
        s.begin_or_extend(CursorPosition(0, 0), CursorPosition(0, 1))
        s.begin_or_extend(CursorPosition(0, 1), CursorPosition(0, 2))

        self.assertEqual(s.anchor, CursorPosition(0, 0))
        self.assertEqual(s.live, CursorPosition(0, 2))

    def test_live_point_is_a_copy(self):
        s = SelectionModel()
        cursor = CursorPosition(0, 1)
        s.begin_or_extend(CursorPosition(0, 0), cursor)
        cursor.column = 9
        self.assertEqual(s.live, CursorPosition(0, 1))

    def test_degenerate_selection(self):
        s = SelectionModel()
        s.anchor = CursorPosition(0, 2)
        s.live = CursorPosition(0, 2)
        self.assertTrue(s.active)
        self.assertFalse(s.has_effective_selection())

    def test_select_all(self):
        s = SelectionModel()
        s.select_all(["ab", "cde"])
        self.assertEqual(s.anchor, CursorPosition(0, 0))
        self.assertEqual(s.live, CursorPosition(1, 3))

    def test_clear(self):
        s = SelectionModel()
        s.select_all(["ab"])
        s.clear()
        self.assertFalse(s.active)


class TestExtractText(unittest.TestCase):

    def test_single_row(self):
        text = SelectionModel.extract_text(["hello world"], (CursorPosition(0, 6), CursorPosition(0, 11)))
        self.assertEqual(text, "world")

    def test_multi_row_reconstructs_line_breaks(self):
        lines = ["hello", "big", "world"]
        text = SelectionModel.extract_text(lines, (CursorPosition(0, 2), CursorPosition(2, 3)))
        self.assertEqual(text, "llo\nbig\nwor")

    def test_whole_rows(self):
        lines = ["one", "two", "three"]
        text = SelectionModel.extract_text(lines, (CursorPosition(0, 0), CursorPosition(2, 5)))
        self.assertEqual(text, "one\ntwo\nthree")

    def test_columns_are_clamped(self):
        text = SelectionModel.extract_text(["abc"], (CursorPosition(0, 1), CursorPosition(0, 99)))
        self.assertEqual(text, "bc")


class TestBufferSelection(unittest.TestCase):

    def setUp(self):
        self.buffer = DocumentBuffer(NavigationEngine(80, 10), [
            "The quick brown fox",
            "jumps over the lazy dog",
        ])

    def test_selected_text_none_without_selection(self):
        self.assertIsNone(self.buffer.selected_text())

    def test_selected_text(self):
        self.buffer.selection.anchor = CursorPosition(0, 16)
        self.buffer.selection.live = CursorPosition(1, 5)
        self.assertEqual(self.buffer.selected_text(), "fox\njumps")

    def test_select_all_text(self):
        self.buffer.select_all()
        self.assertEqual(self.buffer.selected_text(), "The quick brown fox\njumps over the lazy dog")


if __name__ == '__main__':
    unittest.main()
