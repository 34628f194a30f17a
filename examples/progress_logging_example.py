"""Example demonstrating per-phase progress reporting and solver logging."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from bipartite_flow import (  # noqa: E402
    PhaseInfo,
    build_problem,
    maximum_matching_size,
    solve_bipartite_matching,
)


def main() -> None:
    """Solve a staircase-shaped problem that needs several phases."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 70)
    print("PHASE PROGRESS DEMONSTRATION")
    print("=" * 70)

    # Worker i can take jobs i and i+1; listing job i+1 first forces the
    # first phase into a poor greedy matching that later phases repair.
    size = 8
    workers = [f"worker_{i}" for i in range(size)]
    jobs = [f"job_{i}" for i in range(size)]
    edges = []
    for i in range(size):
        if i + 1 < size:
            edges.append((i + 1, size + i + 2))
        edges.append((i + 1, size + i + 1))

    problem = build_problem(nodes=[*workers, *jobs], edges=edges, left_count=size)
    print(f"\n  Workers: {size}, Jobs: {size}, Edges: {len(edges)}")

    def progress_callback(info: PhaseInfo) -> None:
        print(
            f"  Phase {info.phase}: path length {info.distance}, "
            f"{info.augmentations} augmentations, {info.retreats} retreats, "
            f"matching size {info.matching_size} ({info.elapsed_time * 1000:.2f} ms)"
        )

    result = solve_bipartite_matching(problem, progress_callback=progress_callback)

    print(f"\nStatus: {result.status}")
    print(f"Matching size: {result.size} (reference: {maximum_matching_size(problem)})")
    if result.history is not None:
        print(f"Path lengths per phase: {result.history.distances}")


if __name__ == "__main__":
    main()
