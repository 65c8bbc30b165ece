"""
Close-Pair Deriver.

Pairs each point in the first half of a point list with the same point
shifted by the last active vector. The pairs only drive the connector lines
in the drawing: the second point is computed and need not be part of the
point list.

The close-pair count shown to the user comes from a fixed table and is not
derived from these pairs.
"""

from functools import lru_cache
from typing import List, Sequence, Tuple

from closepairs.catalog import Point, Vector, active_vectors
from closepairs.point_generator import points_for

ClosePair = Tuple[Point, Point]

# Displayed close-pair counts indexed by n; n beyond the table shows 0
CLOSE_PAIR_COUNTS = (0, 1, 4, 12, 32, 80, 192, 448, 1024, 2304, 5120)


def get_close_pairs(points: Sequence[Point], vectors: Sequence[Vector]) -> List[ClosePair]:
    """
    Return floor(len(points) / 2) pairs (points[i], points[i] + last vector).

    With no vectors there is nothing to offset by and the result is empty.
    """
    if not vectors:
        return []

    last_vector = vectors[-1]
    return [(points[i], points[i].translate(last_vector)) for i in range(len(points) // 2)]


def close_pair_count(n: int) -> int:
    """Look up the displayed close-pair count for n."""
    if 0 <= n < len(CLOSE_PAIR_COUNTS):
        return CLOSE_PAIR_COUNTS[n]
    return 0


@lru_cache(maxsize=None)
def pairs_for(n: int) -> Tuple[ClosePair, ...]:
    """Cached close pairs for the first n catalog vectors."""
    return tuple(get_close_pairs(points_for(n), active_vectors(n)))
