import sys
from pathlib import Path

import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from mandelgrid.errors import InvalidArgument
from mandelgrid.viewport import DEFAULT_BOUNDS, DEFAULT_STEP, Bounds, Viewport


@pytest.fixture
def view():
    return Viewport(700, 400)


def assert_bounds_close(a, b):
    assert a == pytest.approx(b, abs=1e-12)


def test_default_framing(view):
    assert view.bounds == (-2.5, -1.0, 1.0, 1.0)
    assert view.step == DEFAULT_STEP
    assert view.scale == pytest.approx((3.5 / 700, 2.0 / 400))


def test_bounds_derived_values():
    b = Bounds(-2.5, -1.0, 1.0, 1.0)
    assert b.xrange == 3.5
    assert b.yrange == 2.0
    assert b.center == (-0.75, 0.0)


@pytest.mark.parametrize("corners", [
    (0.0, 0.0, 0.0, 1.0),
    (1.0, 0.0, 0.0, 1.0),
    (0.0, 1.0, 1.0, -1.0),
    (0.0, 0.0, float("inf"), 1.0),
])
def test_degenerate_bounds_rejected(corners):
    with pytest.raises(InvalidArgument):
        Bounds(*corners)


def test_pixel_to_complex_center_of_square_grid():
    view = Viewport(64, 64)
    x, y = view.pixel_to_complex(32, 32)
    assert x == pytest.approx(-0.75)
    assert y == pytest.approx(0.0)
    assert view.pixel_to_complex(0, 0) == (-2.5, 1.0)


def test_pan_is_reversible(view):
    start = view.bounds
    view.pan(37, -12)
    assert view.bounds != start
    view.pan(-37, 12)
    assert_bounds_close(view.bounds, start)


def test_pan_direction_and_size(view):
    sx, sy = view.scale
    start = view.bounds
    view.pan(10, 20)
    assert view.bounds.x_min == pytest.approx(start.x_min + 10 * sx)
    assert view.bounds.y_max == pytest.approx(start.y_max - 20 * sy)
    assert view.bounds.xrange == pytest.approx(start.xrange)
    assert view.bounds.yrange == pytest.approx(start.yrange)


def test_zero_pan_is_noop(view):
    start = view.bounds
    view.pan(0, 0).shift(0, 0)
    assert view.bounds is start


def test_zoom_one_is_noop(view):
    start = view.bounds
    view.zoom(1.0)
    assert view.bounds == start
    assert view.step == DEFAULT_STEP


def test_zoom_in_keeps_center_and_scales_step(view):
    center = view.bounds.center
    view.zoom(0.5)
    assert view.bounds.xrange == pytest.approx(1.75)
    assert view.bounds.yrange == pytest.approx(1.0)
    assert view.bounds.center == pytest.approx(center)
    assert view.step == pytest.approx(DEFAULT_STEP * 0.5)

    view.zoom(4.0)
    assert view.bounds.xrange == pytest.approx(7.0)
    assert view.step == pytest.approx(DEFAULT_STEP * 2.0)


@pytest.mark.parametrize("factor", [0, -0.5, float("nan"), float("inf"), "2", None, True])
def test_zoom_rejects_bad_factor(view, factor):
    with pytest.raises(InvalidArgument):
        view.zoom(factor)


def test_shift_uses_step(view):
    start = view.bounds
    view.shift(2, -1)
    assert view.bounds.x_min == pytest.approx(start.x_min + 0.5)
    assert view.bounds.y_min == pytest.approx(start.y_min - 0.25)


def test_reset_restores_framing_and_step(view):
    view.zoom(0.3).pan(50, 50).shift(1, 1)
    view.reset()
    assert view.bounds == DEFAULT_BOUNDS
    assert view.step == DEFAULT_STEP


def test_drag_content_follows_mouse(view):
    start = view.bounds
    sx, sy = view.scale
    # drag right and down by (20, 10) pixels
    view.drag_to(100, 100, 120, 110)
    assert view.bounds.x_min == pytest.approx(start.x_min - 20 * sx)
    assert view.bounds.y_min == pytest.approx(start.y_min + 10 * sy)


def test_drag_without_motion_is_noop(view):
    start = view.bounds
    view.drag_to(5, 5, 5, 5)
    assert view.bounds is start


def test_resize_preserves_center_and_scale(view):
    center = view.bounds.center
    scale = view.scale
    view.resize(1400, 300)
    assert view.width == 1400
    assert view.height == 300
    assert view.bounds.center == pytest.approx(center)
    assert view.scale == pytest.approx(scale)


@pytest.mark.parametrize("size", [(0, 100), (100, -1), (10.5, 10)])
def test_resize_rejects_bad_dimensions(view, size):
    with pytest.raises(InvalidArgument):
        view.resize(*size)


def test_constructor_rejects_bad_dimensions():
    with pytest.raises(InvalidArgument):
        Viewport(0, 10)


def test_from_scale():
    view = Viewport.from_scale(800, 400, center=(0.0, 0.0), scale=1 / 400)
    assert view.bounds == pytest.approx((-1.0, -0.5, 1.0, 0.5))
    assert view.scale == pytest.approx((1 / 400, 1 / 400))
    with pytest.raises(InvalidArgument):
        Viewport.from_scale(800, 400, scale=0)


def test_methods_chain(view):
    assert view.pan(1, 1).zoom(0.9).resize(300, 200).reset() is view


def test_snapshot_and_restore(view):
    saved = view.snapshot()
    view.zoom(0.5).resize(100, 80).pan(7, 7)
    view.restore(saved)
    assert view.bounds == DEFAULT_BOUNDS
    assert (view.width, view.height) == (700, 400)
    assert view.step == DEFAULT_STEP
