"""Example script: read program3data.txt and print the maximum matching."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from bipartite_flow import (  # noqa: E402
    InvalidProblemError,
    format_matching,
    load_problem,
    save_result,
    solve_bipartite_matching,
)


def main() -> int:
    base_dir = Path(__file__).resolve().parent
    problem_path = base_dir / "program3data.txt"
    output_path = base_dir / "program3_solution.json"

    try:
        problem = load_problem(problem_path)
    except FileNotFoundError:
        print(f"Error: Cannot open {problem_path.name} file.", file=sys.stderr)
        return 1
    except InvalidProblemError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    result = solve_bipartite_matching(problem)
    save_result(output_path, result)

    print(format_matching(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
