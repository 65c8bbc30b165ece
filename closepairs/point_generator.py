"""
Point Generator - subset sums of a vector prefix.

Starting from the origin, each vector in turn is added to every point found
so far. After all vectors are processed the working set holds every subset
sum (the empty subset being the origin).

Points are deduplicated by exact coordinate equality, so two sums that differ
only in their last bits stay distinct. Summation order is fixed (point + vector,
one vector at a time) which keeps the realized point set reproducible.
"""

import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Sequence, Tuple

from closepairs.catalog import CATALOG, ORIGIN, Point, Vector, active_vectors

logger = logging.getLogger(__name__)


def generate_points(vectors: Iterable[Vector]) -> List[Point]:
    """
    Return all subset sums of `vectors` in order of discovery.

    The origin comes first; then, for each vector processed in turn, the new
    points it produces from the points that existed before it. The result has
    at most 2**len(vectors) entries. Bounds are not checked here: callers
    slice the catalog with an already clamped n.
    """
    # dict keeps insertion order and gives exact-equality membership
    found: Dict[Point, None] = {ORIGIN: None}

    for vector in vectors:
        for point in list(found):
            found.setdefault(point.translate(vector), None)

    return list(found)


def max_extent(points: Sequence[Point]) -> float:
    """
    Largest absolute coordinate over x and y.

    Each axis falls back to 1 when its maximum is 0, so the result is
    always usable as a divisor.
    """
    max_x = max((abs(p.x) for p in points), default=0.0) or 1.0
    max_y = max((abs(p.y) for p in points), default=0.0) or 1.0
    return max(max_x, max_y)


@lru_cache(maxsize=None)
def full_catalog_extent() -> float:
    """Maximum extent over the point cloud of the full 13-vector catalog."""
    extent = max_extent(generate_points(CATALOG))
    logger.debug(f"Full catalog extent: {extent:.6f}")
    return extent


@lru_cache(maxsize=None)
def points_for(n: int) -> Tuple[Point, ...]:
    """Cached point set for the first n catalog vectors."""
    points = tuple(generate_points(active_vectors(n)))
    logger.debug(f"Generated {len(points)} points for n={n}")
    return points
