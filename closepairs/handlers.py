"""
Viewport Handlers - Event handlers for the drawing surface in app.py

This module keeps gesture handling (wheel, drag, resize, reset, slider)
out of the page function so app.py stays focused on layout.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from closepairs.catalog import clamp_n
from closepairs.viewport import ViewportController

logger = logging.getLogger(__name__)

# Seconds between forwarded events; trailing events still deliver the last one
MOUSE_MOVE_THROTTLE = 0.02
WHEEL_THROTTLE = 0.05
RESIZE_THROTTLE = 0.1


def _unwrap(event: Any) -> Any:
    """NiceGUI events carry their payload in .args; plain payloads pass through."""
    return event.args if hasattr(event, 'args') else event


def normalize_pointer_payload(event: Any) -> Optional[Tuple[float, float]]:
    """
    Extract pointer coordinates from a mouse event payload.

    Accepts dicts with clientX/clientY (or x/y) and [x, y] sequences.
    Returns None when no coordinates can be read.
    """
    raw = _unwrap(event)

    if isinstance(raw, dict):
        x = raw.get('clientX', raw.get('x'))
        y = raw.get('clientY', raw.get('y'))
    elif isinstance(raw, (list, tuple)) and len(raw) >= 2:
        x, y = raw[0], raw[1]
    else:
        return None

    try:
        return float(x), float(y)
    except (TypeError, ValueError):
        return None


def normalize_wheel_payload(event: Any) -> Optional[float]:
    """Extract deltaY from a wheel event payload."""
    raw = _unwrap(event)

    if isinstance(raw, dict):
        delta = raw.get('deltaY')
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        delta = raw
    else:
        return None

    try:
        return float(delta)
    except (TypeError, ValueError):
        return None


def normalize_resize_payload(event: Any) -> Optional[Tuple[float, float]]:
    """Extract the browser window size from a resize event payload."""
    raw = _unwrap(event)

    if isinstance(raw, dict):
        width = raw.get('width', raw.get('innerWidth'))
        height = raw.get('height', raw.get('innerHeight'))
    elif isinstance(raw, (list, tuple)) and len(raw) >= 2:
        width, height = raw[0], raw[1]
    else:
        return None

    try:
        return float(width), float(height)
    except (TypeError, ValueError):
        return None


def setup_viewport_handlers(
    state: Dict[str, Any],
    viewport: ViewportController,
    refresh_scene: Callable[[], None],
    refresh_pan: Callable[[], None],
) -> Dict[str, Callable]:
    """
    Set up all drawing surface event handlers.

    Args:
        state: Page state dictionary (holds 'n')
        viewport: ViewportController owned by the page
        refresh_scene: Redraws points, lines and readouts
        refresh_pan: Moves the surface to the current pan offset

    Returns:
        Dict with handler functions for binding to UI events
    """

    def on_mouse_down(event):
        """Start dragging the surface."""
        position = normalize_pointer_payload(event)
        if position is None:
            logger.debug(f"Ignoring mousedown without coordinates: {_unwrap(event)!r}")
            return
        viewport.start_drag(*position)

    def on_mouse_move(event):
        """Follow the pointer while a drag is active."""
        if not viewport.is_dragging:
            return
        position = normalize_pointer_payload(event)
        if position is None:
            logger.debug(f"Ignoring mousemove without coordinates: {_unwrap(event)!r}")
            return
        viewport.drag_to(*position)
        refresh_pan()

    def on_mouse_up(event=None):
        viewport.end_drag()

    def on_mouse_leave(event=None):
        viewport.end_drag()

    def on_wheel(event):
        """Zoom in or out by one step."""
        delta = normalize_wheel_payload(event)
        if delta is None:
            logger.debug(f"Ignoring wheel event without deltaY: {_unwrap(event)!r}")
            return
        viewport.zoom_by_wheel(delta)
        refresh_scene()

    def on_resize(event):
        """Recompute the surface size from the browser window."""
        size = normalize_resize_payload(event)
        if size is None:
            logger.debug(f"Ignoring resize event without size: {_unwrap(event)!r}")
            return
        viewport.resize(*size)
        refresh_scene()
        refresh_pan()

    def on_reset(event=None):
        viewport.reset()
        refresh_scene()
        refresh_pan()

    def on_n_change(event):
        """Slider moved: select how many catalog vectors take part."""
        raw = event.value if hasattr(event, 'value') else _unwrap(event)
        try:
            n = clamp_n(raw)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring invalid n: {raw!r}")
            return
        if n == state.get('n'):
            return
        state['n'] = n
        logger.info(f"Using {n} vectors")
        refresh_scene()

    return {
        'on_mouse_down': on_mouse_down,
        'on_mouse_move': on_mouse_move,
        'on_mouse_up': on_mouse_up,
        'on_mouse_leave': on_mouse_leave,
        'on_wheel': on_wheel,
        'on_resize': on_resize,
        'on_reset': on_reset,
        'on_n_change': on_n_change,
    }


def bind_surface_events(surface, handlers: Dict[str, Callable]) -> None:
    """
    Attach the gesture handlers to the drawing surface element.

    Wheel events are throttled because each one redraws the whole point cloud.
    """
    surface.on('mousedown', handlers['on_mouse_down'], ['clientX', 'clientY'])
    surface.on('mousemove', handlers['on_mouse_move'], ['clientX', 'clientY'], throttle=MOUSE_MOVE_THROTTLE)
    surface.on('mouseup', handlers['on_mouse_up'], [])
    surface.on('mouseleave', handlers['on_mouse_leave'], [])
    surface.on('wheel.prevent', handlers['on_wheel'], ['deltaY'], throttle=WHEEL_THROTTLE)
