"""Public solver entrypoints."""

from __future__ import annotations

from pathlib import Path

from .blocking_flow import BlockingFlowMatcher
from .data import MatchingProblem, MatchingResult, ProgressCallback, SolverOptions
from .io import load_problem as load_problem_file
from .io import save_result as save_result_file
from .utils import ensure_valid_matching


def solve_bipartite_matching(
    problem: MatchingProblem,
    options: SolverOptions | None = None,
    max_phases: int | None = None,
    progress_callback: ProgressCallback | None = None,
) -> MatchingResult:
    """Compute a maximum matching with the blocking-flow algorithm.

    This is the main entry point. The bipartite graph is turned into a
    unit-capacity flow network; every phase builds a BFS level graph and
    saturates it with vertex-disjoint shortest augmenting paths found by a
    depth-first search with retreat.

    Args:
        problem: The matching problem to solve.
        options: Solver configuration options. If None, uses defaults.
        max_phases: Maximum number of phases. Overrides options.max_phases if provided.
        progress_callback: Optional callback receiving PhaseInfo after every phase.

    Returns:
        MatchingResult containing:
        - pairs: Matched (left, right) display names in edge input order
        - status: 'optimal' or 'phase_limit'
        - phases, augmentations, retreats: Solver statistics
        - history: Per-phase statistics (PhaseHistory)

    Raises:
        InvalidProblemError: If the problem is malformed.
        MatchingIntegrityError: If options.verify_matching is set and the
                                result fails the conservation check.

    Time Complexity:
        O(sqrt(V) * V^2) in the worst case with the node-removal scan used on
        retreat; phases are bounded by the left partition size.

    Examples:
        >>> from bipartite_flow import build_problem, solve_bipartite_matching
        >>> problem = build_problem(["A", "B", "X", "Y"], [(1, 3), (1, 4), (2, 3)])
        >>> result = solve_bipartite_matching(problem)
        >>> result.pairs
        [('A', 'Y'), ('B', 'X')]
        >>> result.size
        2

    See Also:
        - MatchingProblem: Problem definition structure
        - SolverOptions: Configuration
        - MatchingResult: Solution output format
    """
    if options is None:
        options = SolverOptions(max_phases=max_phases)
    elif max_phases is not None:
        options = SolverOptions(
            max_phases=max_phases,
            verify_matching=options.verify_matching,
            record_history=options.record_history,
        )

    # Instantiate a fresh solver each call; the graph is mutated in place.
    matcher = BlockingFlowMatcher(problem, options=options)
    result = matcher.solve(progress_callback=progress_callback)
    if options.verify_matching:
        ensure_valid_matching(problem, result)
    return result


def load_problem(path: str | Path) -> MatchingProblem:
    """Load a matching problem from a JSON or text file.

    Files ending in ``.json`` are parsed as JSON; anything else is read in the
    whitespace-separated text format (node count, names, edge count, 1-based
    index pairs).

    Args:
        path: Path to the problem file.

    Returns:
        MatchingProblem instance ready to solve.

    Raises:
        FileNotFoundError: If file does not exist.
        InvalidProblemError: If the file is malformed or the problem is invalid.
    """
    return load_problem_file(path)


def save_result(path: str | Path, result: MatchingResult) -> None:
    """Save a matching to a JSON file.

    Args:
        path: Path where JSON file will be written.
        result: MatchingResult from solve_bipartite_matching().
    """
    save_result_file(path, result)
