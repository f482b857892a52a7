from app.models.enums import TabKind
from app.services.drawing import DrawingSurface, INITIAL_CANVAS_HEIGHT, SIGNATURE_CANVAS_HEIGHT
from helpers import decode_data_url


def _ink_pixels(surface: DrawingSurface) -> int:
    return sum(1 for value in surface.image.convert("L").getdata() if value < 128)


def _attached(width=200, height=100, ratio=1.0) -> DrawingSurface:
    surface = DrawingSurface(width, height, device_pixel_ratio=ratio)
    surface.setup()
    surface.attach()
    return surface


def test_setup_respects_device_pixel_ratio():
    surface = _attached(200, 100, ratio=2.0)

    assert surface.image.size == (400, 200)
    assert _ink_pixels(surface) == 0


def test_stroke_draws_segments():
    surface = _attached()

    surface.pointer_down(1, 10, 10)
    surface.pointer_move(1, 100, 50)
    surface.pointer_move(1, 150, 20)
    surface.pointer_up(1)

    assert _ink_pixels(surface) > 50
    assert not surface.drawing


def test_moves_without_pointer_down_are_ignored():
    surface = _attached()

    surface.pointer_move(1, 100, 50)

    assert _ink_pixels(surface) == 0


def test_events_ignored_while_detached():
    surface = DrawingSurface(200, 100)
    surface.setup()

    surface.pointer_down(1, 10, 10)
    surface.pointer_move(1, 100, 50)

    assert _ink_pixels(surface) == 0


def test_leave_and_cancel_end_the_stroke():
    surface = _attached()

    surface.pointer_down(1, 10, 10)
    surface.pointer_leave(1)
    surface.pointer_move(1, 100, 50)
    assert _ink_pixels(surface) == 0

    surface.pointer_down(2, 10, 10)
    surface.pointer_cancel(2)
    surface.pointer_move(2, 100, 50)
    assert _ink_pixels(surface) == 0


def test_other_pointers_do_not_join_the_stroke():
    surface = _attached()

    surface.pointer_down(1, 10, 10)
    surface.pointer_move(7, 100, 50)

    assert _ink_pixels(surface) == 0


def test_points_outside_canvas_are_clamped():
    surface = _attached(200, 100)

    surface.pointer_down(1, 100, 50)
    surface.pointer_move(1, 500, 50)
    surface.pointer_up(1)

    # ink reaches the right edge but nothing wraps or errors
    assert surface.image.convert("L").getpixel((199, 50)) < 128
    assert surface._clamp(-20, 300) == (0.0, 100.0)


def test_clear_discards_strokes_and_keeps_drawing_mode():
    surface = _attached()
    surface.pointer_down(1, 10, 10)
    surface.pointer_move(1, 100, 50)
    surface.pointer_up(1)

    surface.clear()

    assert _ink_pixels(surface) == 0
    assert surface.attached
    assert surface.stroke_count == 0


def test_setup_for_kind_resizes_canvas():
    surface = DrawingSurface()

    surface.setup_for(TabKind.INITIAL)
    assert surface.image.height == INITIAL_CANVAS_HEIGHT

    surface.setup_for(TabKind.SIGNATURE)
    assert surface.image.height == SIGNATURE_CANVAS_HEIGHT


def test_export_is_a_snapshot():
    surface = _attached()
    surface.pointer_down(1, 10, 10)
    surface.pointer_move(1, 100, 50)

    before = surface.export()
    surface.pointer_move(1, 190, 90)
    after = surface.export()

    assert before != after
    assert decode_data_url(before).size == (200, 100)


def test_export_before_setup_is_none():
    assert DrawingSurface().export() is None


def test_stroke_continues_after_clear():
    surface = _attached()
    surface.pointer_down(1, 10, 10)
    surface.pointer_move(1, 50, 50)

    surface.clear()
    surface.pointer_move(1, 80, 80)
    assert _ink_pixels(surface) == 0

    surface.pointer_move(1, 150, 80)
    surface.pointer_up(1)

    ink = surface.image.convert("L")
    assert ink.getpixel((115, 80)) < 128
    assert ink.getpixel((30, 30)) >= 128
