import math
import time
from typing import List, Optional

from tsp_core import City, Tour, DistanceMatrix


class TSPSolver:
    """
    Tour optimizer over road distances:
    - nearest neighbour construction from the first city
    - 2-opt improvement of whatever tour is currently held
    - every run replaces current_tour / current_distance
    """

    def __init__(
        self,
        cities: List[City],
        distance_matrix: Optional[DistanceMatrix] = None,
        verbose: bool = False
    ):
        self.cities = list(cities)
        self.distance_matrix = distance_matrix
        self.verbose = verbose

        self.current_tour = Tour()
        self.current_distance = 0.0
        self.history = []

    # --------------------------------------------------------
    def _distance(self, a: City, b: City) -> float:
        if self.distance_matrix is not None:
            return self.distance_matrix.get_distance(a, b)
        return a.distance_to(b)

    def calculate_tour_distance(self, tour: List[City]) -> float:
        """Sum of consecutive road distances plus the edge back to the start."""
        legs = [self._distance(tour[i], tour[i + 1]) for i in range(len(tour) - 1)]
        if len(tour) > 1:
            legs.append(self._distance(tour[-1], tour[0]))
        # order independent: the same legs always sum to the same value
        return math.fsum(legs)

    def calculate_total_distance(self) -> float:
        """Recompute the distance of the current tour and store it."""
        self.current_distance = self.calculate_tour_distance(self.current_tour.cities)
        self.current_tour = Tour(self.current_tour.cities, self.current_distance)
        return self.current_distance

    def get_current_distance(self) -> float:
        return self.current_distance

    def set_tour(self, cities: List[City]) -> Tour:
        """Install an arbitrary starting tour (must be a permutation of the cities)."""
        cities = list(cities)
        if len(cities) != len(self.cities) or set(cities) != set(self.cities):
            raise ValueError("Tour must visit every city exactly once")

        self.current_tour = Tour(cities)
        self.calculate_total_distance()
        return self.current_tour.clone()

    # --------------------------------------------------------
    # NEAREST NEIGHBOUR
    # --------------------------------------------------------
    def nearest_neighbor(self) -> Tour:
        n = len(self.cities)
        if n == 0:
            self.current_tour = Tour([], 0.0)
            self.current_distance = 0.0
            return self.current_tour.clone()

        visited = [False] * n
        current = self.cities[0]
        order = [current]
        visited[0] = True

        while len(order) < n:
            min_distance = math.inf
            next_index = -1

            for i in range(n):
                if visited[i]:
                    continue
                d = self._distance(current, self.cities[i])
                if d < min_distance:
                    min_distance = d
                    next_index = i

            current = self.cities[next_index]
            order.append(current)
            visited[next_index] = True

        self.current_tour = Tour(order)
        self.calculate_total_distance()

        if self.verbose:
            print(f"[NN] Tour over {n} cities | Distance = {self.current_distance:.2f}")

        return self.current_tour.clone()

    # --------------------------------------------------------
    # 2-OPT
    # --------------------------------------------------------
    def two_opt(self) -> Tour:
        """
        Improve the current tour by segment reversals until a full pass
        accepts no move. An improving move is accepted as soon as it is
        found and becomes the baseline for the rest of the pass.
        """
        t0 = time.time()
        tour = list(self.current_tour.cities)
        n = len(tour)

        self.history = [(0.0, self.calculate_tour_distance(tour))]
        passes = 0

        improved = True
        while improved:
            improved = False
            passes += 1
            best_distance = self.calculate_tour_distance(tour)

            for i in range(n - 1):
                for j in range(i + 1, n):
                    candidate = tour[:i] + tour[i:j + 1][::-1] + tour[j + 1:]
                    d = self.calculate_tour_distance(candidate)

                    if d < best_distance:
                        tour = candidate
                        best_distance = d
                        improved = True
                        self.history.append((time.time() - t0, d))

            if self.verbose:
                print(f"[2-opt] Pass {passes} | Best = {best_distance:.2f}")

        self.current_tour = Tour(tour)
        self.calculate_total_distance()
        return self.current_tour.clone()

    # --------------------------------------------------------
    def solve(self, use_2opt=True):
        """
        Nearest neighbour followed by optional 2-opt.

        Returns:
            tour, log of (elapsed seconds, distance)
        """
        t0 = time.time()
        tour = self.nearest_neighbor()
        log = [(0.0, tour.get_total_distance())]

        if use_2opt:
            offset = time.time() - t0
            tour = self.two_opt()
            log.extend((offset + t, d) for t, d in self.history[1:])

        return tour, log
