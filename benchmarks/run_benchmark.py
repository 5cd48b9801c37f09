"""Benchmark runner for MOME on the bi-objective test suite.

This script runs MOME on every problem in benchmarks.problems, compares the
global front against the reference front with IGD, GD and hypervolume, and
saves the results as JSON, the fronts as CSV and an overlay plot per
problem. Plotting needs matplotlib (the benchmark extra).

Usage:
    uv run python benchmarks/run_benchmark.py
"""

import csv
import json
import logging
import sys
import time
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np

from benchmarks.fronts import FRONTS
from benchmarks.metrics import gd, hypervolume, igd, reference_point
from benchmarks.problems import PROBLEMS, Problem
from mome import MOMEConfig, MOMEResult, mome

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
BINS_PER_DIM = 20
EVALUATIONS_PER_GENERATION = 100
N_GENERATIONS = 200
INITIAL_RANDOM = 200
MUTATION_SIGMA = 0.05
MAX_PER_CELL = 8
N_RUNS = 5
SEEDS = list(range(N_RUNS))

RESULTS_DIR = Path(__file__).parent / "results"


def make_config(problem: Problem) -> MOMEConfig:
    """Build the run configuration for one problem.

    The mutation step is relative to the width of the decision space, so one
    setting serves problems bounded by [0, 1] and by [-100, 100] alike.
    """
    lower, upper = problem.bounds
    return MOMEConfig(
        n_vars=problem.n_vars,
        n_obj=2,
        bins_per_dim=BINS_PER_DIM,
        lower=lower,
        upper=upper,
        evaluations_per_generation=EVALUATIONS_PER_GENERATION,
        generations=N_GENERATIONS,
        initial_random=INITIAL_RANDOM,
        mutation_sigma=MUTATION_SIGMA * (upper - lower),
        max_per_cell=MAX_PER_CELL,
    )


def run_mome(problem: Problem, seed: int) -> tuple[MOMEResult, float]:
    """Run MOME on one problem.

    Returns:
        Tuple of (result, elapsed_time_seconds).
    """
    config = make_config(problem)
    start_time = time.perf_counter()
    result = mome(problem.evaluate, config, seed=seed)
    elapsed = time.perf_counter() - start_time
    return result, elapsed


def write_front_csv(path: Path, front: np.ndarray) -> None:
    """Write 2D points to CSV with an f1,f2 header."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["f1", "f2"])
        writer.writerows(front.tolist())


def save_overlay(path: Path, title: str, reference: np.ndarray, approx: np.ndarray) -> None:
    """Save a plot of the reference front and the found front.

    Raises:
        ImportError: If matplotlib is not installed.
    """
    try:
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt
    except ImportError as exc:
        raise ImportError("matplotlib is required for plotting. Install with: pip install matplotlib") from exc

    fig, ax = plt.subplots(figsize=(9, 6))
    ax.plot(reference[:, 0], reference[:, 1], ".", markersize=2, color="tab:blue", label="Reference front")
    ax.scatter(approx[:, 0], approx[:, 1], s=12, color="tab:red", label="MOME global front")
    ax.set_xlabel("f1")
    ax.set_ylabel("f2")
    ax.set_title(title)
    ax.legend()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Fronts of the first seed of every problem are written to RESULTS_DIR.

    Returns:
        Dictionary containing metadata and results.
    """
    timestamp = datetime.now(UTC).isoformat()

    metadata = {
        "timestamp": timestamp,
        "parameters": {
            "bins_per_dim": BINS_PER_DIM,
            "evaluations_per_generation": EVALUATIONS_PER_GENERATION,
            "n_generations": N_GENERATIONS,
            "initial_random": INITIAL_RANDOM,
            "mutation_sigma": MUTATION_SIGMA,
            "max_per_cell": MAX_PER_CELL,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    total_runs = len(PROBLEMS) * N_RUNS
    current_run = 0

    for problem_name, problem in PROBLEMS.items():
        reference = FRONTS[problem_name]()
        ref_point = reference_point(reference)
        write_front_csv(RESULTS_DIR / f"{problem_name}_reference.csv", reference)

        for seed in SEEDS:
            current_run += 1
            logger.info(f"Running [{current_run}/{total_runs}]: {problem_name} (seed={seed})")

            result, elapsed = run_mome(problem, seed)
            front = result.pareto_objectives
            summary = result.summary

            entry = {
                "problem": problem_name,
                "seed": seed,
                "igd": igd(reference, front),
                "gd": gd(front, reference),
                "hypervolume": hypervolume(front, ref_point),
                "front_size": len(front),
                "filled_cells": summary.n_cells,
                "coverage": summary.coverage,
                "mean_cell_size": summary.mean_cell_size,
                "acceptance_rate": result.acceptance_rate,
                "evaluations": result.evaluations,
                "time_seconds": elapsed,
            }
            results.append(entry)

            logger.info(
                f"  IGD: {entry['igd']:.4f}, GD: {entry['gd']:.4f}, HV: {entry['hypervolume']:.4f}, "
                f"front: {len(front)}, Time: {elapsed:.2f}s"
            )

            if seed == SEEDS[0]:
                write_front_csv(RESULTS_DIR / f"{problem_name}_front.csv", front)
                save_overlay(
                    RESULTS_DIR / f"{problem_name}_overlay.png",
                    f"{problem_name}: reference front vs MOME global front",
                    reference,
                    front,
                )

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    data = defaultdict(lambda: defaultdict(list))
    for r in results["results"]:
        for key in ("igd", "gd", "hypervolume", "time_seconds"):
            data[r["problem"]][key].append(r[key])

    print("\n" + "=" * 80)
    print("BENCHMARK SUMMARY")
    print("=" * 80)
    print(
        f"\nParameters: bins={BINS_PER_DIM}, generations={N_GENERATIONS}, "
        f"evaluations/generation={EVALUATIONS_PER_GENERATION}, runs={N_RUNS}"
    )
    print()

    header = f"{'Problem':<18}{'IGD':>20}{'GD':>20}{'HV':>20}{'Time (s)':>10}"
    print(header)
    print("-" * len(header))

    for problem in data:
        row = f"{problem:<18}"
        for key in ("igd", "gd", "hypervolume"):
            values = data[problem][key]
            row += f"{np.mean(values):>11.4f} +/- {np.std(values):.4f}"
        row += f"{np.mean(data[problem]['time_seconds']):>10.2f}"
        print(row)

    print("-" * len(header))
    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting MOME benchmark suite")
    logger.info(f"Parameters: bins={BINS_PER_DIM}, generations={N_GENERATIONS}, runs={N_RUNS}")

    RESULTS_DIR.mkdir(parents=True, exist_ok=True)
    results = run_benchmark()

    output_path = RESULTS_DIR / "benchmark_results.json"
    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")

    print_summary(results)


if __name__ == "__main__":
    main()
