"""
Road-Network TSP - Core Module
Contains the fundamental data structures: points, road paths, cities and tours.
"""

import math
import numbers
import random
from typing import Dict, List, NamedTuple, Optional, Union

import numpy as np


DEFAULT_PATH_JITTER = 20
MIN_PATH_POINTS = 2
MAX_PATH_POINTS = 4


class Point(NamedTuple):
    """Immutable 2D point. Generated cities and paths use integer coordinates."""
    x: Union[int, float]
    y: Union[int, float]


Path = List[Point]


def path_length(path: Path) -> float:
    """Total polyline length of a path (0 for fewer than two points)."""
    if len(path) < 2:
        return 0.0

    coords = np.asarray(path, dtype=float)
    steps = np.diff(coords, axis=0)
    return float(np.sum(np.hypot(steps[:, 0], steps[:, 1])))


def _interpolate(a, b, k: int, n: int):
    # integer coordinates interpolate with truncation toward zero
    if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
        return a + int((b - a) * k / n)
    return a + (b - a) * k / n


def generate_default_path(
    start: Point,
    end: Point,
    rng: random.Random,
    jitter: int = DEFAULT_PATH_JITTER,
    min_points: int = MIN_PATH_POINTS,
    max_points: int = MAX_PATH_POINTS
) -> Path:
    """
    Generate a winding path from start to end.

    Intermediate points are spread evenly along the straight line and each
    axis is pushed by a random integer offset in [-jitter, jitter].

    Args:
        start: First point of the path
        end: Last point of the path
        rng: Random source
        jitter: Maximum offset per axis
        min_points: Minimum number of intermediate points
        max_points: Maximum number of intermediate points

    Returns:
        List of points beginning at start and ending at end
    """
    if min_points > max_points:
        raise ValueError(f"min_points ({min_points}) > max_points ({max_points})")

    path = [Point(start.x, start.y)]
    n_points = rng.randint(min_points, max_points)

    for i in range(1, n_points + 1):
        mid_x = _interpolate(start.x, end.x, i, n_points + 1)
        mid_y = _interpolate(start.y, end.y, i, n_points + 1)

        mid_x += rng.randint(-jitter, jitter)
        mid_y += rng.randint(-jitter, jitter)
        path.append(Point(mid_x, mid_y))

    path.append(Point(end.x, end.y))
    return path


class City:
    """
    A city in the road graph.

    Explicit roads are directed: a road from A to B says nothing about B to A.
    When no explicit road exists, get_road_to() falls back to a generated
    default path. With cache_default_paths=False that path is re-rolled on
    every call, so distance_to() is not stable between calls.
    """

    def __init__(
        self,
        id: int,
        x: float,
        y: float,
        rng: Optional[random.Random] = None,
        cache_default_paths: bool = True
    ):
        self._id = id
        self._location = Point(x, y)
        self._roads: Dict['City', Path] = {}
        self._default_paths: Dict['City', Path] = {}
        self.rng = rng or random.Random()
        self.cache_default_paths = cache_default_paths

    @property
    def id(self) -> int:
        return self._id

    @property
    def location(self) -> Point:
        return self._location

    @property
    def x(self) -> float:
        return self._location.x

    @property
    def y(self) -> float:
        return self._location.y

    def add_road_to(self, other: 'City', path: Path):
        """Record an explicit road to another city, replacing any previous one."""
        self._roads[other] = list(path)

    def has_road_to(self, other: 'City') -> bool:
        return other in self._roads

    def roads(self) -> Dict['City', Path]:
        """Copy of the explicit roads, keyed by destination."""
        return {dest: list(path) for dest, path in self._roads.items()}

    def road_count(self) -> int:
        return len(self._roads)

    def get_road_to(self, other: 'City') -> Path:
        """Explicit road to other, or a default path when none was added."""
        if other is self:
            return [self._location]

        if other in self._roads:
            return list(self._roads[other])

        if not self.cache_default_paths:
            return self._generate_default_path(other)

        if other not in self._default_paths:
            self._default_paths[other] = self._generate_default_path(other)
        return list(self._default_paths[other])

    def _generate_default_path(self, other: 'City') -> Path:
        return generate_default_path(self._location, other.location, self.rng,
                                     jitter=DEFAULT_PATH_JITTER)

    def distance_to(self, other: 'City') -> float:
        """Length of the road to another city."""
        return path_length(self.get_road_to(other))

    def __repr__(self):
        return f"City({self._id}, {self.x}, {self.y})"

    def __eq__(self, other):
        if not isinstance(other, City):
            return False
        return self._id == other._id

    def __hash__(self):
        return hash(self._id)


class Tour:
    """Represents a tour (solution) as an ordered sequence of cities."""

    def __init__(self, cities: List[City] = None, distance: Optional[float] = None):
        self.cities = list(cities) if cities else []
        self._distance = distance

    def get_total_distance(self) -> float:
        """Total cyclic distance, computed from road lengths if not supplied."""
        if self._distance is not None:
            return self._distance

        n = len(self.cities)
        legs = [self.cities[i].distance_to(self.cities[i + 1]) for i in range(n - 1)]
        if n > 1:
            legs.append(self.cities[-1].distance_to(self.cities[0]))

        self._distance = math.fsum(legs)
        return self._distance

    def ids(self) -> List[int]:
        return [city.id for city in self.cities]

    def clone(self) -> 'Tour':
        return Tour(self.cities.copy(), self._distance)

    def __len__(self):
        return len(self.cities)

    def __iter__(self):
        return iter(self.cities)

    def __repr__(self):
        return f"Tour(cities={len(self.cities)}, distance={self.get_total_distance():.2f})"

    def __getitem__(self, index):
        return self.cities[index]


class DistanceMatrix:
    """
    Snapshot of directed road distances between every pair of cities.

    Road distances are asymmetric, so both triangles are filled.
    """

    def __init__(self, cities: List[City]):
        self.cities = cities
        self.n = len(cities)
        self.matrix = np.zeros((self.n, self.n))
        self.city_to_index = {city: i for i, city in enumerate(cities)}

        for i in range(self.n):
            for j in range(self.n):
                if i != j:
                    self.matrix[i][j] = cities[i].distance_to(cities[j])

    def get_distance(self, city1: City, city2: City) -> float:
        """Get precomputed distance between two cities."""
        i = self.city_to_index[city1]
        j = self.city_to_index[city2]
        return float(self.matrix[i][j])

    def get_distance_by_index(self, i: int, j: int) -> float:
        """Get distance by city indices."""
        return float(self.matrix[i][j])
