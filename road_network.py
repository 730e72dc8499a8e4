"""
Road-Network TSP - Road Generation
Builds the random directed road graph the solver operates on.
"""

import random
from typing import List, Optional

from tsp_core import City, Path, generate_default_path


ROAD_PROBABILITY = 0.4
ROAD_JITTER = 30


class RoadNetwork:
    """
    One-shot generator of explicit roads between cities.

    For every ordered pair of distinct cities a road is added with the given
    probability. Roads are directed, and generating again adds more roads
    on top of the existing ones.
    """

    def __init__(
        self,
        cities: List[City],
        probability: float = ROAD_PROBABILITY,
        jitter: int = ROAD_JITTER,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        verbose: bool = False
    ):
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Road probability must be in [0, 1], got {probability}")
        if jitter < 0:
            raise ValueError(f"Road jitter must be non-negative, got {jitter}")

        self.cities = cities
        self.probability = probability
        self.jitter = jitter
        self.rng = rng or random.Random(seed)
        self.verbose = verbose

    def generate_roads(self) -> int:
        """Add random roads between the cities. Returns the number added."""
        added = 0
        for city1 in self.cities:
            for city2 in self.cities:
                if city1 is city2:
                    continue
                if self.rng.random() < self.probability:
                    city1.add_road_to(city2, self.generate_road_path(city1, city2))
                    added += 1

        if self.verbose:
            n = len(self.cities)
            print(f"[RoadNetwork] Added {added} roads over {n * (n - 1)} city pairs")

        return added

    def generate_road_path(self, from_city: City, to_city: City) -> Path:
        """Winding path between two cities, wider than the default fallback."""
        return generate_default_path(from_city.location, to_city.location, self.rng,
                                     jitter=self.jitter)


def build_road_network(cities: List[City], **kwargs) -> List[City]:
    """Generate roads once over the cities and return them."""
    RoadNetwork(cities, **kwargs).generate_roads()
    return cities


def generate_random_cities(
    n: int,
    width: int = 700,
    height: int = 500,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    cache_default_paths: bool = True
) -> List[City]:
    """
    Generate random cities for testing.

    Args:
        n: Number of cities to generate
        width: Width of the area
        height: Height of the area
        rng: Random source shared by the cities for their default paths
        seed: Seed used when no rng is given
        cache_default_paths: Memoise generated default paths per city

    Returns:
        List of cities with ids 0..n-1 at integer coordinates
    """
    if n < 0:
        raise ValueError(f"Number of cities must be non-negative, got {n}")

    rng = rng or random.Random(seed)
    cities = []
    for i in range(n):
        x = rng.randrange(width)
        y = rng.randrange(height)
        cities.append(City(i, x, y, rng=rng, cache_default_paths=cache_default_paths))
    return cities
