"""
Vector catalog and coordinate types.

The catalog is a fixed, ordered list of 13 unit vectors. Only a prefix of it
(the first n entries) takes part in point generation at any time.
"""

from typing import List, NamedTuple, Tuple


class Vector(NamedTuple):
    """Immutable 2D unit vector."""
    x: float
    y: float


class Point(NamedTuple):
    """2D coordinate produced by summing a subset of catalog vectors."""
    x: float
    y: float

    def translate(self, vector: Vector) -> "Point":
        return Point(self.x + vector.x, self.y + vector.y)


ORIGIN = Point(0.0, 0.0)

CATALOG: Tuple[Vector, ...] = (
    Vector(0.7071067811865476, -0.7071067811865475),
    Vector(0.8660254037844387, 0.49999999999999994),
    Vector(-0.2588190451025207, 0.9659258262890683),
    Vector(-0.6427876096865393, -0.766044443118978),
    Vector(0.9396926207859084, -0.3420201433256687),
    Vector(-0.1736481776669303, -0.984807753012208),
    Vector(0.42261826174069944, 0.9063077870366499),
    Vector(-0.9063077870366499, 0.42261826174069944),
    Vector(0.573576436351046, 0.8191520442889918),
    Vector(-0.8191520442889918, 0.573576436351046),
    Vector(0.08715574274765817, -0.9961946980917455),
    Vector(-0.9961946980917455, -0.08715574274765817),
    Vector(0.3090169943749474, 0.9510565162951535),
)

# Largest n the slider offers
MAX_N = 12


def clamp_n(n) -> int:
    """Coerce n to an int within [0, MAX_N]."""
    return max(0, min(MAX_N, int(n)))


def active_vectors(n) -> List[Vector]:
    """Return the first n catalog vectors (n is clamped first)."""
    return list(CATALOG[:clamp_n(n)])
