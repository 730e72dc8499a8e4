import numbers
import random

import numpy as np
import pytest

from tsp_core import (
    City, DistanceMatrix, Point, Tour, generate_default_path, path_length,
    DEFAULT_PATH_JITTER,
)


def test_path_length_empty_and_single_point():
    assert path_length([]) == 0.0
    assert path_length([Point(3, 4)]) == 0.0


def test_path_length_sums_segments():
    path = [Point(0, 0), Point(3, 4), Point(3, 10)]
    assert path_length(path) == pytest.approx(11.0)


def test_default_path_endpoints_and_point_count():
    rng = random.Random(1)
    start, end = Point(10, 20), Point(300, 200)
    for _ in range(50):
        path = generate_default_path(start, end, rng)
        assert path[0] == start
        assert path[-1] == end
        assert 2 <= len(path) - 2 <= 4


def test_default_path_offsets_stay_within_jitter():
    rng = random.Random(5)
    start, end = Point(0, 0), Point(100, 50)
    path = generate_default_path(start, end, rng, jitter=7)
    n = len(path) - 2
    for i, p in enumerate(path[1:-1], start=1):
        assert abs(p.x - int(100 * i / (n + 1))) <= 7
        assert abs(p.y - int(50 * i / (n + 1))) <= 7


def test_default_path_interpolation_truncates_toward_zero():
    rng = random.Random(3)
    path = generate_default_path(Point(0, 0), Point(-10, 0), rng, jitter=0)
    n = len(path) - 2
    xs = [p.x for p in path[1:-1]]
    assert xs == [int(-10 * i / (n + 1)) for i in range(1, n + 1)]
    assert all(p.y == 0 for p in path)


def test_default_path_rejects_inverted_range():
    with pytest.raises(ValueError):
        generate_default_path(Point(0, 0), Point(1, 1), random.Random(), min_points=5, max_points=2)


def test_explicit_road_is_directional_and_overwritten():
    a, b = City(0, 0, 0), City(1, 10, 0)
    a.add_road_to(b, [a.location, Point(5, 5), b.location])
    assert a.has_road_to(b)
    assert not b.has_road_to(a)

    a.add_road_to(b, [a.location, b.location])
    assert a.get_road_to(b) == [Point(0, 0), Point(10, 0)]
    assert a.distance_to(b) == pytest.approx(10.0)
    assert a.road_count() == 1


def test_roads_accessor_does_not_expose_internal_map():
    a, b = City(0, 0, 0), City(1, 10, 0)
    a.add_road_to(b, [a.location, b.location])
    roads = a.roads()
    roads[b].append(Point(99, 99))
    roads.clear()
    assert a.get_road_to(b) == [Point(0, 0), Point(10, 0)]


def test_cached_default_path_is_stable_and_not_explicit():
    a = City(0, 0, 0, rng=random.Random(2))
    b = City(1, 200, 100)
    first = a.get_road_to(b)
    assert a.get_road_to(b) == first
    assert a.distance_to(b) == pytest.approx(path_length(first))
    assert a.road_count() == 0
    assert first[0] == a.location and first[-1] == b.location


def test_uncached_default_path_is_rerolled():
    a = City(0, 0, 0, rng=random.Random(2), cache_default_paths=False)
    b = City(1, 200, 100)
    paths = {tuple(a.get_road_to(b)) for _ in range(20)}
    assert len(paths) > 1
    assert a.road_count() == 0


def test_default_path_jitter_is_small_variant():
    a = City(0, 0, 0, rng=random.Random(8), cache_default_paths=False)
    b = City(1, 100, 0)
    for _ in range(30):
        path = a.get_road_to(b)
        n = len(path) - 2
        for i, p in enumerate(path[1:-1], start=1):
            assert abs(p.y) <= DEFAULT_PATH_JITTER
            assert abs(p.x - int(100 * i / (n + 1))) <= DEFAULT_PATH_JITTER


def test_road_to_self_has_zero_length():
    a = City(0, 4, 4)
    assert a.get_road_to(a) == [Point(4, 4)]
    assert a.distance_to(a) == 0.0


def test_city_identity_is_by_id():
    assert City(1, 0, 0) == City(1, 50, 50)
    assert City(1, 0, 0) != City(2, 0, 0)
    assert len({City(1, 0, 0), City(1, 5, 5)}) == 1


def test_city_location_is_read_only():
    a = City(0, 1, 2)
    with pytest.raises(AttributeError):
        a.location = Point(5, 5)
    assert (a.x, a.y) == (1, 2)


def test_tour_distance_is_cyclic(straight_cities):
    cities = straight_cities([(0, 0), (3, 0), (3, 4)])
    tour = Tour(cities)
    assert tour.get_total_distance() == pytest.approx(12.0)
    assert tour.ids() == [0, 1, 2]
    assert len(tour) == 3


def test_tour_of_one_city_has_zero_distance():
    assert Tour([City(0, 5, 5)]).get_total_distance() == 0.0
    assert Tour().get_total_distance() == 0.0


def test_distance_matrix_keeps_direction():
    a, b = City(0, 0, 0), City(1, 10, 0)
    a.add_road_to(b, [a.location, Point(0, 10), Point(10, 10), b.location])
    b.add_road_to(a, [b.location, a.location])

    dm = DistanceMatrix([a, b])
    assert dm.get_distance(a, b) == pytest.approx(30.0)
    assert dm.get_distance(b, a) == pytest.approx(10.0)
    assert dm.get_distance_by_index(0, 0) == 0.0


def test_distance_matrix_unknown_city():
    dm = DistanceMatrix([City(0, 0, 0)])
    with pytest.raises(KeyError):
        dm.get_distance(City(5, 1, 1), City(0, 0, 0))


def test_numpy_integer_coordinates_use_integer_interpolation():
    rng = random.Random(3)
    start = Point(np.int64(0), np.int64(0))
    end = Point(np.int64(-10), np.int64(0))
    path = generate_default_path(start, end, rng, jitter=0)
    n = len(path) - 2
    assert [p.x for p in path[1:-1]] == [int(-10 * i / (n + 1)) for i in range(1, n + 1)]
    assert all(isinstance(p.x, numbers.Integral) for p in path)


def test_integer_cities_get_integer_path_points():
    a = City(0, 0, 0, rng=random.Random(4))
    b = City(1, 333, 77)
    for p in a.get_road_to(b):
        assert isinstance(p.x, int) and isinstance(p.y, int)
