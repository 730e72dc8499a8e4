"""
Road-Network TSP - Main Application
Generate cities and roads, then solve with nearest neighbour and 2-opt.
"""

import argparse
import sys

from road_network import RoadNetwork, generate_random_cities
from tsp_solver import TSPSolver


def solve_demo(args):
    """Build one road network and run both algorithms on it."""
    print(f"\nGenerating {args.cities} cities on a {args.width}x{args.height} map...")
    cities = generate_random_cities(
        args.cities, args.width, args.height,
        seed=args.seed, cache_default_paths=not args.no_cache
    )

    network = RoadNetwork(cities, probability=args.probability,
                          rng=cities[0].rng if cities else None, verbose=True)
    network.generate_roads()

    solver = TSPSolver(cities, verbose=True)

    print("\n" + "=" * 60)
    print("NEAREST NEIGHBOUR")
    print("=" * 60)
    nn_tour = solver.nearest_neighbor()
    nn_distance = solver.get_current_distance()
    print(f"Order:    {nn_tour.ids()}")
    print(f"Distance: {nn_distance:.2f}")

    tour = nn_tour
    if not args.no_2opt:
        print("\n" + "=" * 60)
        print("2-OPT IMPROVEMENT")
        print("=" * 60)
        tour = solver.two_opt()
        print(f"Order:    {tour.ids()}")
        print(f"Distance: {solver.get_current_distance():.2f}")
        if nn_distance > 0:
            gain = (nn_distance - solver.get_current_distance()) / nn_distance * 100
            print(f"Improvement: {gain:.2f}%")

    if args.save:
        from visualization import RoadNetworkVisualizer

        RoadNetworkVisualizer(show=False).plot_tour(tour, cities, title="Road-Network TSP",
                                                   save_path=args.save)

    if not args.no_viz:
        from visualization import RoadNetworkVisualizer

        visualizer = RoadNetworkVisualizer()
        visualizer.plot_network(cities)
        visualizer.animate_tour(tour, cities, title="Road-Network TSP")
        if not args.no_2opt:
            visualizer.plot_convergence(solver.history)


def main(argv=None):
    """Main entry point for the road-network TSP application."""
    parser = argparse.ArgumentParser(
        description="Road-Network TSP - nearest neighbour and 2-opt over winding roads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 20 cities, plot the improved tour
  python main.py --cities 20

  # Reproducible run without plots
  python main.py --seed 7 --no-viz

  # Button-driven viewer
  python main.py --interactive

  # Compare NN and NN+2-opt over 10 seeds
  python main.py --benchmark --runs 10
        """
    )

    parser.add_argument('--cities', type=int, default=20,
                        help='Number of cities to generate (default: 20)')
    parser.add_argument('--width', type=int, default=700,
                        help='Map width (default: 700)')
    parser.add_argument('--height', type=int, default=500,
                        help='Map height (default: 500)')
    parser.add_argument('--probability', type=float, default=0.4,
                        help='Chance of an explicit road per city pair (default: 0.4)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for cities and roads')
    parser.add_argument('--no-cache', action='store_true',
                        help='Re-roll default paths on every lookup')
    parser.add_argument('--no-2opt', action='store_true',
                        help='Stop after nearest neighbour')
    parser.add_argument('--interactive', action='store_true',
                        help='Open the interactive viewer')
    parser.add_argument('--benchmark', action='store_true',
                        help='Run the multi-seed benchmark')
    parser.add_argument('--runs', type=int, default=10,
                        help='Benchmark runs (default: 10)')
    parser.add_argument('--save', type=str, default=None,
                        help='Save the final tour figure to this path')
    parser.add_argument('--no-viz', action='store_true',
                        help='Disable visualizations')

    args = parser.parse_args(argv)

    try:
        if args.interactive:
            from interactive_matplotlib import InteractiveRoadTSP
            InteractiveRoadTSP(n_cities=args.cities, width=args.width, height=args.height,
                               probability=args.probability, seed=args.seed,
                               cache_default_paths=not args.no_cache)
        elif args.benchmark:
            from benchmark import run_benchmark, summarize
            df = run_benchmark(n_cities=args.cities, runs=args.runs,
                               base_seed=args.seed if args.seed is not None else 42,
                               probability=args.probability,
                               width=args.width, height=args.height,
                               cache_default_paths=not args.no_cache)
            print(df.to_string(index=False))
            print()
            print(summarize(df).to_string(index=False))
        else:
            solve_demo(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
