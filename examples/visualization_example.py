"""Example: draw a bipartite graph and its maximum matching.

Requires the optional visualization dependencies:
    pip install 'bipartite_flow[visualization]'
"""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from bipartite_flow import (  # noqa: E402
    load_problem,
    solve_bipartite_matching,
    visualize_matching,
    visualize_problem,
)


def main() -> None:
    base_dir = Path(__file__).resolve().parent
    problem = load_problem(base_dir / "program3data.txt")
    result = solve_bipartite_matching(problem)

    try:
        fig = visualize_problem(problem)
        fig.savefig(base_dir / "program3_graph.png", dpi=150, bbox_inches="tight")
        fig = visualize_matching(problem, result)
        fig.savefig(base_dir / "program3_matching.png", dpi=150, bbox_inches="tight")
    except ImportError as exc:
        print(f"Skipping visualization: {exc}")
        return

    print(f"Saved program3_graph.png and program3_matching.png ({result.size} matches)")


if __name__ == "__main__":
    main()
