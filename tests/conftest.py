import matplotlib

matplotlib.use("Agg")

import pytest

from tsp_core import City


def connect_straight(cities):
    """Give every ordered pair an explicit straight two-point road."""
    for a in cities:
        for b in cities:
            if a is not b:
                a.add_road_to(b, [a.location, b.location])
    return cities


@pytest.fixture
def straight_cities():
    def build(coords):
        cities = [City(i, x, y) for i, (x, y) in enumerate(coords)]
        return connect_straight(cities)
    return build
