"""
Scene builder for the close pairs drawing.

This module converts points and close pairs into screen-space primitives
using the viewport transform, and renders those primitives as SVG markup
for the NiceGUI page. It also formats the text readouts under the drawing.
"""

from typing import Any, Dict, List, Sequence

from closepairs.catalog import Point
from closepairs.close_pairs import ClosePair, close_pair_count
from closepairs.viewport import ViewportController

GRID_SIZE = 40
VISIBLE_GRID_LINES = 41
HALF_GRID_LINES = VISIBLE_GRID_LINES // 2

GRID_STYLE = {'stroke': '#f0f0f0', 'width': 1}
AXIS_STYLE = {'stroke': '#ddd', 'width': 2}
PAIR_LINE_STYLE = {'stroke': '#666', 'width': 0.2, 'opacity': 0.8}
MARKER_FILL = '#4299e1'


def _line(x1: float, y1: float, x2: float, y2: float) -> Dict[str, float]:
    return {'x1': x1, 'y1': y1, 'x2': x2, 'y2': y2}


def build_grid(viewport: ViewportController) -> List[Dict[str, float]]:
    """
    Grid lines at a fixed spacing scaled by zoom, centered on the origin.

    Lines run from -size to 2*size so panning does not expose the edges.
    """
    width, height = viewport.dimensions.width, viewport.dimensions.height
    center_x, center_y = viewport.center
    spacing = GRID_SIZE * viewport.zoom

    lines = []
    for i in range(-HALF_GRID_LINES, HALF_GRID_LINES + 1):
        x = center_x + i * spacing
        y = center_y + i * spacing
        lines.append(_line(x, -height, x, height * 2))
        lines.append(_line(-width, y, width * 2, y))
    return lines


def build_axes(viewport: ViewportController) -> List[Dict[str, float]]:
    width, height = viewport.dimensions.width, viewport.dimensions.height
    center_x, center_y = viewport.center
    return [
        _line(-width, center_y, width * 2, center_y),
        _line(center_x, -height, center_x, height * 2),
    ]


def build_scene(
    points: Sequence[Point],
    pairs: Sequence[ClosePair],
    viewport: ViewportController,
) -> Dict[str, Any]:
    """
    Build screen-space primitives for one frame.

    Returns:
        Dict with 'width', 'height', 'pan', 'grid', 'axes', 'pair_lines'
        and 'markers'. Coordinates exclude pan, which is applied as a
        translation of the whole surface.
    """
    pair_lines = []
    for original, duplicate in pairs:
        x1, y1 = viewport.to_screen(original)
        x2, y2 = viewport.to_screen(duplicate)
        pair_lines.append(_line(x1, y1, x2, y2))

    radius = viewport.marker_radius()
    markers = []
    for point in points:
        cx, cy = viewport.to_screen(point)
        markers.append({'cx': cx, 'cy': cy, 'r': radius})

    return {
        'width': viewport.dimensions.width,
        'height': viewport.dimensions.height,
        'pan': viewport.pan,
        'grid': build_grid(viewport),
        'axes': build_axes(viewport),
        'pair_lines': pair_lines,
        'markers': markers,
    }


def _fmt(value: float) -> str:
    text = f'{value:.2f}'.rstrip('0').rstrip('.')
    return '0' if text == '-0' else text


def _svg_line(line: Dict[str, float], attrs: str) -> str:
    return (
        f'<line x1="{_fmt(line["x1"])}" y1="{_fmt(line["y1"])}" '
        f'x2="{_fmt(line["x2"])}" y2="{_fmt(line["y2"])}" {attrs}/>'
    )


def render_svg(scene: Dict[str, Any]) -> str:
    """
    Render a scene to SVG markup.

    Pan is not part of the markup: the page translates the element holding
    the SVG, and overflow stays visible so the grid fills the panned area.
    """
    width, height = scene['width'], scene['height']
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(width)}" height="{_fmt(height)}" '
        f'viewBox="0 0 {_fmt(width)} {_fmt(height)}" style="overflow: visible; display: block">',
        '<g>',
    ]

    grid_attrs = f'stroke="{GRID_STYLE["stroke"]}" stroke-width="{GRID_STYLE["width"]}"'
    parts.extend(_svg_line(line, grid_attrs) for line in scene['grid'])

    axis_attrs = f'stroke="{AXIS_STYLE["stroke"]}" stroke-width="{AXIS_STYLE["width"]}"'
    parts.extend(_svg_line(line, axis_attrs) for line in scene['axes'])

    pair_attrs = (
        f'stroke="{PAIR_LINE_STYLE["stroke"]}" stroke-width="{PAIR_LINE_STYLE["width"]}" '
        f'stroke-opacity="{PAIR_LINE_STYLE["opacity"]}"'
    )
    parts.extend(_svg_line(line, pair_attrs) for line in scene['pair_lines'])

    for marker in scene['markers']:
        parts.append(
            f'<circle cx="{_fmt(marker["cx"])}" cy="{_fmt(marker["cy"])}" '
            f'r="{_fmt(marker["r"])}" fill="{MARKER_FILL}"/>'
        )

    parts.append('</g></svg>')
    return ''.join(parts)


def build_readouts(n: int, points: Sequence[Point], zoom: float) -> Dict[str, str]:
    """Text shown around the drawing."""
    return {
        'n_label': f'n = {2 ** n} points',
        'points': f'Total points: {len(points)}',
        'close_pairs': f'Close pairs: {close_pair_count(n)}',
        'zoom': f'Zoom: {zoom:.2f}x',
    }
