import math
from itertools import combinations

import pytest

from closepairs.catalog import CATALOG, MAX_N, ORIGIN, Point, Vector, active_vectors
from closepairs.point_generator import full_catalog_extent, generate_points, max_extent, points_for


def subset_sums(vectors):
    sums = []
    for size in range(len(vectors) + 1):
        for subset in combinations(vectors, size):
            sums.append((sum(v.x for v in subset), sum(v.y for v in subset)))
    return sums


def has_close_point(target, points, tol=1e-9):
    return any(math.isclose(target[0], p[0], abs_tol=tol) and math.isclose(target[1], p[1], abs_tol=tol)
               for p in points)


def test_no_vectors_yields_only_the_origin():
    assert generate_points([]) == [ORIGIN]
    assert generate_points(active_vectors(0)) == [Point(0.0, 0.0)]


@pytest.mark.parametrize("n", range(0, MAX_N + 1))
def test_point_count_is_bounded_by_two_to_the_n(n):
    points = generate_points(CATALOG[:n])
    assert 1 <= len(points) <= 2 ** n


@pytest.mark.parametrize("n", range(0, 5))
def test_small_prefixes_have_no_collisions(n):
    assert len(generate_points(CATALOG[:n])) == 2 ** n


@pytest.mark.parametrize("n", [1, 3, 6, 8])
def test_points_are_exactly_the_subset_sums(n):
    vectors = CATALOG[:n]
    points = generate_points(vectors)
    sums = subset_sums(vectors)

    for s in sums:
        assert has_close_point(s, points), f"subset sum {s} missing"
    for p in points:
        assert has_close_point(p, sums), f"unexpected point {p}"


def test_two_vector_scenario_in_discovery_order():
    points = generate_points(CATALOG[:2])
    rounded = [(round(p.x, 4), round(p.y, 4)) for p in points]
    assert rounded == [
        (0.0, 0.0),
        (0.7071, -0.7071),
        (0.866, 0.5),
        (1.5731, -0.2071),
    ]


def test_origin_comes_first_and_order_follows_discovery():
    a, b, c = Vector(1.0, 0.0), Vector(0.0, 2.0), Vector(-4.0, 0.0)
    assert generate_points([a, b, c]) == [
        Point(0.0, 0.0), Point(1.0, 0.0),
        Point(0.0, 2.0), Point(1.0, 2.0),
        Point(-4.0, 0.0), Point(-3.0, 0.0), Point(-4.0, 2.0), Point(-3.0, 2.0),
    ]


def test_exact_duplicates_are_merged():
    v = Vector(1.0, 0.0)
    # 0, v, 2v: subsets {v1} and {v2} coincide
    assert generate_points([v, v]) == [Point(0.0, 0.0), Point(1.0, 0.0), Point(2.0, 0.0)]


def test_sums_returning_to_the_origin_are_merged():
    points = generate_points([Vector(-0.0, 1.0), Vector(0.0, -1.0)])
    # (0,1) + (0,-1) lands back on the origin
    assert len(points) == 3


def test_generation_is_idempotent():
    first = generate_points(CATALOG[:7])
    second = generate_points(CATALOG[:7])
    assert first == second
    assert first is not second


def test_points_for_uses_clamped_prefix():
    assert points_for(3) == tuple(generate_points(CATALOG[:3]))
    assert points_for(3) is points_for(3)


def test_max_extent_falls_back_to_one_for_flat_clouds():
    assert max_extent([ORIGIN]) == 1.0
    assert max_extent([Point(0.0, 0.0), Point(0.0, 0.5)]) == 1.0
    assert max_extent([Point(-3.0, 0.5), Point(2.0, -1.0)]) == 3.0


def test_full_catalog_extent_covers_all_points():
    extent = full_catalog_extent()
    for p in points_for(MAX_N):
        assert abs(p.x) <= extent
        assert abs(p.y) <= extent
    assert extent == max_extent(generate_points(CATALOG))
