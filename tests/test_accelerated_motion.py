from cellpad import CursorPosition, DocumentBuffer, NavigationEngine


def test_counter_doubles_after_each_jump():
    nav = NavigationEngine(80, 10)
    b = DocumentBuffer(nav, ["x" * 100])

    nav.accelerated_right()
    assert b.cursor.column == 8
    assert nav.accel_counter == 16

    nav.accelerated_right()
    assert b.cursor.column == 24
    assert nav.accel_counter == 32


def test_counter_is_capped_at_ceiling():
    nav = NavigationEngine(80, 10, accel_baseline=8, accel_ceiling=32)
    DocumentBuffer(nav, ["x" * 200])

    for _ in range(3):
        nav.accelerated_right()

    assert nav.accel_counter == 32


def test_reset_returns_to_baseline():
    nav = NavigationEngine(80, 10)
    DocumentBuffer(nav, ["x" * 100])
    nav.accelerated_right()
    nav.accelerated_right()

    nav.reset_acceleration()

    assert nav.accel_counter == 8


def test_accelerated_motion_crosses_lines():
    nav = NavigationEngine(80, 10, accel_baseline=5)
    b = DocumentBuffer(nav, ["abc", "defgh"])

    nav.accelerated_right()
    assert b.cursor == CursorPosition(1, 1)

    nav.reset_acceleration()
    nav.accelerated_left()
    assert b.cursor == CursorPosition(0, 0)


def test_accelerated_left_stops_at_document_start():
    nav = NavigationEngine(80, 10)
    b = DocumentBuffer(nav, ["abc"])
    b.cursor = CursorPosition(0, 2)

    nav.accelerated_left()

    assert b.cursor == CursorPosition(0, 0)
