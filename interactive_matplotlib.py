"""
Interactive Road-Network TSP - Matplotlib Version
Generate a road network, then build and improve a tour with the buttons.
"""

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.widgets import Button
from typing import List, Optional

from tsp_core import City, Tour
from road_network import RoadNetwork, generate_random_cities
from tsp_solver import TSPSolver
from visualization import RoadNetworkVisualizer


class InteractiveRoadTSP:
    """Road network viewer with Nearest Neighbor / 2-opt buttons."""

    def __init__(
        self,
        n_cities: int = 20,
        width: int = 700,
        height: int = 500,
        probability: float = 0.4,
        seed: Optional[int] = None,
        cache_default_paths: bool = True,
        show: bool = True
    ):
        self.n_cities = n_cities
        self.width = width
        self.height = height
        self.probability = probability
        self.seed = seed
        self.cache_default_paths = cache_default_paths

        self.cities: List[City] = []
        self.solver: Optional[TSPSolver] = None
        self.current_solution: Optional[Tour] = None
        self.animation: Optional[FuncAnimation] = None
        self.drawer = RoadNetworkVisualizer(show=False)

        self.fig = plt.figure(figsize=(12, 8))
        self.fig.canvas.manager.set_window_title('Road-Network TSP Solver')
        self.ax_canvas = self.fig.add_axes([0.05, 0.15, 0.9, 0.8])

        self.create_buttons()
        self.new_network(None)

        if show:
            plt.show()

    def create_buttons(self):
        """Create control buttons."""
        ax_nn = self.fig.add_axes([0.05, 0.03, 0.18, 0.06])
        self.btn_nn = Button(ax_nn, 'Nearest Neighbor', color='#3498db', hovercolor='#2980b9')
        self.btn_nn.on_clicked(self.run_nearest_neighbor)

        ax_2opt = self.fig.add_axes([0.25, 0.03, 0.18, 0.06])
        self.btn_2opt = Button(ax_2opt, '2-opt Improvement', color='#2ecc71', hovercolor='#27ae60')
        self.btn_2opt.on_clicked(self.run_two_opt)

        ax_new = self.fig.add_axes([0.45, 0.03, 0.14, 0.06])
        self.btn_new = Button(ax_new, 'New Network', color='#f39c12', hovercolor='#e67e22')
        self.btn_new.on_clicked(self.new_network)

        self.distance_label = self.fig.text(0.63, 0.055, 'Distance: ', fontsize=12)

    def new_network(self, event):
        """Regenerate cities and roads."""
        self.cities = generate_random_cities(
            self.n_cities, self.width, self.height,
            seed=self.seed, cache_default_paths=self.cache_default_paths
        )
        # a fixed seed would otherwise give the same network every click
        if self.seed is not None:
            self.seed += 1

        RoadNetwork(self.cities, probability=self.probability,
                    rng=self.cities[0].rng if self.cities else None).generate_roads()
        self.solver = TSPSolver(self.cities)
        self.current_solution = None
        self.distance_label.set_text('Distance: ')
        self.redraw()

    def run_nearest_neighbor(self, event):
        self.show_solution(self.solver.nearest_neighbor())

    def run_two_opt(self, event):
        self.show_solution(self.solver.two_opt())

    def show_solution(self, tour: Tour):
        """Replay the new tour leg by leg, one leg every 300 ms."""
        self.current_solution = tour
        self.distance_label.set_text(f"Distance: {self.solver.get_current_distance():.2f}")
        self.redraw()

        if len(tour) > 1:
            self.animation = self.drawer.reveal_tour(self.fig, self.ax_canvas, tour, interval=300)
        self.fig.canvas.draw_idle()

    def stop_animation(self):
        # a finished animation has already dropped its event source
        if self.animation is not None and self.animation.event_source is not None:
            self.animation.event_source.stop()
        self.animation = None

    def redraw(self):
        """Network and cities only; tours are drawn by the animation."""
        self.stop_animation()
        ax = self.ax_canvas
        ax.clear()
        self.drawer.draw_network(ax, self.cities)
        self.drawer.draw_cities(ax, self.cities)
        ax.set_aspect('equal')
        ax.invert_yaxis()
        ax.set_title(f"{len(self.cities)} cities", fontsize=14, fontweight='bold')
        self.fig.canvas.draw_idle()


if __name__ == "__main__":
    InteractiveRoadTSP()
