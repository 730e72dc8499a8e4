"""
Road-Network TSP - Visualization Module
Draw the road network and animate tours along their roads.
"""

import matplotlib.pyplot as plt
import matplotlib.animation as animation
from typing import List, Tuple

from tsp_core import City, Path, Tour


ROAD_COLOR = '#dcdcdc'


def _path_xy(path: Path) -> Tuple[List[float], List[float]]:
    return [p.x for p in path], [p.y for p in path]


class RoadNetworkVisualizer:
    """Visualize cities, their roads and tours over those roads."""

    def __init__(self, figsize=(10, 7), show: bool = True):
        self.figsize = figsize
        self.show = show

    def draw_network(self, ax, cities: List[City]):
        """Draw every road between every ordered pair of cities."""
        for city1 in cities:
            for city2 in cities:
                if city1 is city2:
                    continue
                xs, ys = _path_xy(city1.get_road_to(city2))
                ax.plot(xs, ys, color=ROAD_COLOR, linewidth=1, zorder=1)

    def draw_cities(self, ax, cities: List[City]):
        """Start city in green, the rest in red, ids annotated."""
        if not cities:
            return

        ax.scatter([c.x for c in cities[1:]], [c.y for c in cities[1:]],
                   c='red', s=60, zorder=3)
        ax.scatter([cities[0].x], [cities[0].y], c='green', s=120, zorder=4)

        for city in cities:
            ax.annotate(str(city.id), (city.x, city.y),
                        xytext=(4, 4), textcoords='offset points', fontsize=8)

    def _prepare_axes(self, ax, title: str):
        ax.set_title(title, fontsize=14, weight='bold')
        ax.set_aspect('equal')
        # screen coordinates: y grows downwards
        ax.invert_yaxis()

    def plot_network(self, cities: List[City], title: str = "Road Network",
                     save_path: str = None):
        """Plot the cities and all roads between them."""
        fig, ax = plt.subplots(figsize=self.figsize)
        self.draw_network(ax, cities)
        self.draw_cities(ax, cities)
        self._prepare_axes(ax, title)

        self._finish(fig, save_path)
        return fig

    def plot_tour(
        self,
        tour: Tour,
        cities: List[City],
        title: str = "TSP Tour",
        save_path: str = None
    ):
        """
        Plot a tour following its road geometry, over the road network.

        Args:
            tour: The tour to visualize
            cities: All cities (for the network and the markers)
            title: Plot title
            save_path: Optional path to save the figure
        """
        fig, ax = plt.subplots(figsize=self.figsize)
        self.draw_network(ax, cities)

        n = len(tour)
        for i in range(n):
            xs, ys = _path_xy(tour[i].get_road_to(tour[(i + 1) % n]))
            ax.plot(xs, ys, 'b-', linewidth=2, zorder=2)

        self.draw_cities(ax, cities)
        self._prepare_axes(ax, f"{title}\nTotal Distance: {tour.get_total_distance():.2f}")

        self._finish(fig, save_path)
        return fig

    def reveal_tour(self, fig, ax, tour: Tour, interval: int = 300):
        """
        Reveal the tour on ax one leg per frame: current leg red, earlier legs blue.

        Returns the FuncAnimation so the caller keeps it alive.
        """
        n = len(tour)
        legs = [_path_xy(tour[i].get_road_to(tour[(i + 1) % n])) for i in range(n)]
        lines = [ax.plot([], [], linewidth=2, zorder=2)[0] for _ in legs]

        def update(frame):
            for i, line in enumerate(lines):
                if i < frame:
                    line.set_data(*legs[i])
                    line.set_color('blue')
                elif i == frame:
                    line.set_data(*legs[i])
                    line.set_color('red')
                else:
                    line.set_data([], [])
            return lines

        return animation.FuncAnimation(fig, update, frames=n + 1,
                                       interval=interval, blit=False, repeat=False)

    def animate_tour(self, tour: Tour, cities: List[City], interval: int = 300,
                     title: str = "TSP Tour"):
        """Animated tour over the road network in its own figure."""
        fig, ax = plt.subplots(figsize=self.figsize)
        self.draw_network(ax, cities)
        self.draw_cities(ax, cities)
        self._prepare_axes(ax, f"{title}\nTotal Distance: {tour.get_total_distance():.2f}")

        anim = self.reveal_tour(fig, ax, tour, interval=interval)
        if self.show:
            plt.show()
        return anim

    def plot_convergence(
        self,
        history: List[Tuple[float, float]],
        title: str = "2-opt Convergence",
        save_path: str = None
    ):
        """
        Plot the distance after every accepted 2-opt move.

        Args:
            history: (elapsed seconds, distance) pairs
            title: Plot title
            save_path: Optional path to save the figure
        """
        fig, ax = plt.subplots(figsize=(10, 6))
        distances = [d for _, d in history]
        moves = range(len(distances))

        ax.plot(moves, distances, 'b-', linewidth=2, label='Distance')
        ax.fill_between(moves, distances, alpha=0.3)

        if distances:
            initial, final = distances[0], distances[-1]
            improvement = ((initial - final) / initial) * 100 if initial > 0 else 0.0
            ax.axhline(y=final, color='g', linestyle='--',
                       linewidth=1.5, label=f'Final: {final:.2f}')
            ax.axhline(y=initial, color='r', linestyle='--',
                       linewidth=1.5, label=f'Initial: {initial:.2f}')
            title = f"{title}\nImprovement: {improvement:.2f}%"

        ax.set_xlabel('Accepted move', fontsize=12)
        ax.set_ylabel('Tour distance', fontsize=12)
        ax.set_title(title, fontsize=14, weight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=10)

        self._finish(fig, save_path)
        return fig

    def _finish(self, fig, save_path):
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Figure saved to {save_path}")

        if self.show:
            plt.show()
