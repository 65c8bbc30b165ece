import math

import pytest

from closepairs.catalog import Point
from closepairs.point_generator import full_catalog_extent
from closepairs.viewport import (
    MAX_ZOOM,
    MIN_ZOOM,
    Dimensions,
    DragState,
    ViewState,
    ViewportController,
)


def make_viewport(width=800, height=600, extent=2.0):
    return ViewportController(dimensions=Dimensions(width, height), extent=extent)


def test_defaults():
    viewport = ViewportController()
    assert viewport.view == ViewState(zoom=1.0, pan_x=0.0, pan_y=0.0)
    assert viewport.dimensions == Dimensions(800, 600)
    assert viewport.drag_state is DragState.IDLE


def test_base_scale_uses_the_smaller_side():
    viewport = make_viewport(800, 600, extent=2.0)
    assert viewport.base_scale == pytest.approx(120.0)
    assert viewport.scale == pytest.approx(120.0)


def test_default_extent_comes_from_full_catalog():
    viewport = ViewportController(dimensions=Dimensions(800, 600))
    assert viewport.base_scale == pytest.approx(600 * 0.4 / full_catalog_extent())


def test_to_screen_inverts_y():
    viewport = make_viewport()
    assert viewport.center == (400.0, 300.0)
    assert viewport.to_screen(Point(0.0, 0.0)) == (400.0, 300.0)
    x, y = viewport.to_screen(Point(1.0, 1.0))
    assert x == pytest.approx(520.0)
    assert y == pytest.approx(180.0)


def test_scale_follows_zoom():
    viewport = make_viewport()
    viewport.zoom_in()
    assert viewport.scale == pytest.approx(120.0 * 1.1)


def test_wheel_direction():
    viewport = make_viewport()
    viewport.zoom_by_wheel(100)
    assert viewport.zoom == pytest.approx(0.9)
    viewport.zoom_by_wheel(-100)
    assert viewport.zoom == pytest.approx(0.99)
    viewport.zoom_by_wheel(0)
    assert viewport.zoom == pytest.approx(1.089)


def test_zoom_in_clamps_at_max():
    viewport = make_viewport()
    for _ in range(200):
        viewport.zoom_in()
    assert viewport.zoom == MAX_ZOOM == 10


def test_zoom_out_clamps_at_min():
    viewport = make_viewport()
    for _ in range(200):
        viewport.zoom_out()
    assert viewport.zoom == MIN_ZOOM == 0.4


def test_drag_tracks_pointer_from_start():
    viewport = make_viewport()
    viewport.start_drag(100, 100)
    assert viewport.drag_state is DragState.DRAGGING

    viewport.drag_to(130, 90)
    assert viewport.pan == (30, -10)

    viewport.end_drag()
    assert viewport.drag_state is DragState.IDLE


def test_second_drag_continues_from_current_pan():
    viewport = make_viewport()
    viewport.start_drag(100, 100)
    viewport.drag_to(130, 90)
    viewport.end_drag()

    viewport.start_drag(50, 50)
    viewport.drag_to(60, 60)
    assert viewport.pan == (40, 0)


def test_moves_while_idle_are_ignored():
    viewport = make_viewport()
    viewport.drag_to(500, 500)
    assert viewport.pan == (0.0, 0.0)

    viewport.start_drag(0, 0)
    viewport.end_drag()
    viewport.drag_to(500, 500)
    assert viewport.pan == (0, 0)


def test_end_drag_when_idle_is_a_no_op():
    viewport = make_viewport()
    viewport.end_drag()
    assert viewport.drag_state is DragState.IDLE


def test_reset_restores_defaults():
    viewport = make_viewport()
    for _ in range(5):
        viewport.zoom_in()
    viewport.start_drag(0, 0)
    viewport.drag_to(42, -17)
    viewport.end_drag()

    view = viewport.reset()
    assert view == ViewState()
    assert viewport.zoom == 1
    assert viewport.pan == (0, 0)

    # Reset is unconditional
    assert viewport.reset() == ViewState()


def test_view_snapshots_are_immutable():
    viewport = make_viewport()
    view = viewport.view
    viewport.zoom_in()
    assert view.zoom == 1.0
    with pytest.raises(AttributeError):
        view.zoom = 3.0


@pytest.mark.parametrize("window, expected", [
    ((1920, 1080), Dimensions(800, 600)),
    ((500, 500), Dimensions(452, 300)),
    ((848, 800), Dimensions(800, 600)),
    ((10, 10), Dimensions(0, 0)),
])
def test_dimensions_from_window(window, expected):
    assert Dimensions.from_window(*window) == expected


def test_resize_changes_scale_but_not_view():
    viewport = make_viewport()
    viewport.zoom_in()
    viewport.resize(448, 1000)
    assert viewport.dimensions == Dimensions(400, 600)
    assert viewport.base_scale == pytest.approx(80.0)
    assert viewport.zoom == pytest.approx(1.1)


def test_marker_radius_shrinks_with_sqrt_zoom():
    viewport = make_viewport()
    assert viewport.marker_radius() == pytest.approx(3.0)
    for _ in range(200):
        viewport.zoom_in()
    assert viewport.marker_radius() == pytest.approx(3.0 / math.sqrt(10))


def test_mutations_return_the_new_snapshot():
    viewport = make_viewport()

    assert viewport.zoom_in() == viewport.view
    viewport.start_drag(0, 0)
    moved = viewport.drag_to(5, 5)
    assert moved.pan == (5, 5)
    assert viewport.end_drag() is moved
    assert viewport.reset() == ViewState()
