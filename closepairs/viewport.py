"""
Viewport Controller - Single source of truth for zoom, pan and surface size.

This controller owns the view state for one client page and turns it into
the affine transform used for drawing:

    scale   = base_scale * zoom
    screenX = centerX + x * scale
    screenY = centerY - y * scale      (Y axis points up)

base_scale only depends on the surface size and on the extent of the full
catalog point cloud, so changing n never rescales the drawing.

Dragging is a two-state machine (Idle, Dragging). A drag starts on mouse
down and ends on mouse up or when the pointer leaves the surface.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from closepairs.catalog import Point
from closepairs.point_generator import full_catalog_extent

logger = logging.getLogger(__name__)

MIN_ZOOM = 0.4
MAX_ZOOM = 10.0
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9

# Fraction of the surface the full point cloud may span from the center
EXTENT_FRACTION = 0.4

MAX_WIDTH = 800
MAX_HEIGHT = 600
# Room taken by the page chrome around the surface
WIDTH_MARGIN = 48
HEIGHT_MARGIN = 200

BASE_MARKER_RADIUS = 3.0


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot of zoom and pan."""
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    @property
    def pan(self) -> Tuple[float, float]:
        return (self.pan_x, self.pan_y)


@dataclass(frozen=True)
class Dimensions:
    width: float = MAX_WIDTH
    height: float = MAX_HEIGHT

    @classmethod
    def from_window(cls, window_width: float, window_height: float) -> "Dimensions":
        """Surface size for a browser window, capped at 800x600."""
        return cls(
            width=max(0, min(MAX_WIDTH, window_width - WIDTH_MARGIN)),
            height=max(0, min(MAX_HEIGHT, window_height - HEIGHT_MARGIN)),
        )


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


class ViewportController:
    """Manages zoom/pan state and maps point coordinates to the screen."""

    def __init__(self, dimensions: Optional[Dimensions] = None, extent: Optional[float] = None):
        self._view = ViewState()
        self._dimensions = dimensions or Dimensions()
        self._extent = extent if extent else full_catalog_extent()
        self._drag_state = DragState.IDLE
        self._drag_origin: Tuple[float, float] = (0.0, 0.0)

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def zoom(self) -> float:
        return self._view.zoom

    @property
    def pan(self) -> Tuple[float, float]:
        return self._view.pan

    @property
    def dimensions(self) -> Dimensions:
        return self._dimensions

    @property
    def drag_state(self) -> DragState:
        return self._drag_state

    @property
    def is_dragging(self) -> bool:
        return self._drag_state is DragState.DRAGGING

    # --- Derived transform ---

    @property
    def base_scale(self) -> float:
        return min(
            self._dimensions.width * EXTENT_FRACTION / self._extent,
            self._dimensions.height * EXTENT_FRACTION / self._extent,
        )

    @property
    def scale(self) -> float:
        return self.base_scale * self._view.zoom

    @property
    def center(self) -> Tuple[float, float]:
        return (self._dimensions.width / 2, self._dimensions.height / 2)

    def to_screen(self, point: Point) -> Tuple[float, float]:
        """Map a point to surface coordinates (before pan is applied)."""
        center_x, center_y = self.center
        scale = self.scale
        return (center_x + point.x * scale, center_y - point.y * scale)

    def marker_radius(self) -> float:
        """Markers shrink with sqrt(zoom) so dense clouds stay readable."""
        return BASE_MARKER_RADIUS / math.sqrt(self._view.zoom)

    # --- Zoom ---

    def zoom_by(self, factor: float) -> ViewState:
        self._view = replace(self._view, zoom=clamp_zoom(self._view.zoom * factor))
        return self._view

    def zoom_in(self) -> ViewState:
        return self.zoom_by(ZOOM_IN_FACTOR)

    def zoom_out(self) -> ViewState:
        return self.zoom_by(ZOOM_OUT_FACTOR)

    def zoom_by_wheel(self, delta_y: float) -> ViewState:
        """Scrolling down (positive delta) zooms out, anything else zooms in."""
        if delta_y > 0:
            return self.zoom_out()
        return self.zoom_in()

    # --- Pan / drag state machine ---

    def start_drag(self, x: float, y: float) -> ViewState:
        self._drag_state = DragState.DRAGGING
        self._drag_origin = (x - self._view.pan_x, y - self._view.pan_y)
        return self._view

    def drag_to(self, x: float, y: float) -> ViewState:
        if self._drag_state is not DragState.DRAGGING:
            return self._view
        origin_x, origin_y = self._drag_origin
        self._view = replace(self._view, pan_x=x - origin_x, pan_y=y - origin_y)
        return self._view

    def end_drag(self) -> ViewState:
        self._drag_state = DragState.IDLE
        return self._view

    # --- Reset / resize ---

    def reset(self) -> ViewState:
        self._view = ViewState()
        logger.debug("View reset")
        return self._view

    def resize(self, window_width: float, window_height: float) -> Dimensions:
        self._dimensions = Dimensions.from_window(window_width, window_height)
        logger.debug(f"Surface resized to {self._dimensions.width}x{self._dimensions.height}")
        return self._dimensions
