import time
import numpy as np
import pandas as pd
from tqdm import tqdm

from road_network import RoadNetwork, generate_random_cities
from tsp_solver import TSPSolver


# ================================
# CONFIGURATION
# ================================
N_CITIES = 20
RUNS = 10
BASE_SEED = 42
WIDTH = 700
HEIGHT = 500


# =============================================================
# SINGLE RUN
# =============================================================
def run_once(n_cities, seed, probability=0.4, width=WIDTH, height=HEIGHT,
             cache_default_paths=True):
    cities = generate_random_cities(n_cities, width, height, seed=seed,
                                    cache_default_paths=cache_default_paths)
    RoadNetwork(cities, probability=probability, rng=cities[0].rng if cities else None).generate_roads()
    solver = TSPSolver(cities)

    start = time.time()
    solver.nearest_neighbor()
    nn_time = time.time() - start
    nn_dist = solver.get_current_distance()

    start = time.time()
    solver.two_opt()
    opt_time = time.time() - start
    opt_dist = solver.get_current_distance()

    improvement = (nn_dist - opt_dist) / nn_dist * 100 if nn_dist > 0 else 0.0

    return {
        "seed": seed,
        "n_cities": n_cities,
        "width": width,
        "height": height,
        "cached": cache_default_paths,
        "roads": sum(c.road_count() for c in cities),
        "nn_dist": nn_dist,
        "two_opt_dist": opt_dist,
        "improvement_pct": improvement,
        "nn_time": nn_time,
        "two_opt_time": opt_time,
        "accepted_moves": len(solver.history) - 1,
    }


# =============================================================
# MULTI-SEED BENCHMARK
# =============================================================
def run_benchmark(n_cities=N_CITIES, runs=RUNS, base_seed=BASE_SEED,
                  probability=0.4, width=WIDTH, height=HEIGHT,
                  cache_default_paths=True, progress=True):
    rows = []
    for r in tqdm(range(runs), desc=f"{n_cities} cities", disable=not progress):
        rows.append(run_once(n_cities, base_seed + r, probability=probability,
                             width=width, height=height,
                             cache_default_paths=cache_default_paths))
    return pd.DataFrame(rows)


def summarize(df):
    """Mean / best / spread of the per-run results."""
    return pd.DataFrame([{
        "runs": len(df),
        "avg_nn_dist": float(np.mean(df["nn_dist"])),
        "avg_two_opt_dist": float(np.mean(df["two_opt_dist"])),
        "best_two_opt_dist": float(np.min(df["two_opt_dist"])),
        "std_two_opt_dist": float(np.std(df["two_opt_dist"])),
        "avg_improvement_pct": float(np.mean(df["improvement_pct"])),
        "avg_two_opt_time": float(np.mean(df["two_opt_time"])),
    }])


if __name__ == "__main__":
    df = run_benchmark()
    print("\n=== Per-run results ===")
    print(df.to_string(index=False))
    print("\n=== Summary ===")
    print(summarize(df).to_string(index=False))
