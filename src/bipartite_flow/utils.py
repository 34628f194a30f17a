"""Utility functions for analyzing and validating matching solutions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import maximum_bipartite_matching

from .data import MatchingProblem, MatchingResult
from .exceptions import MatchingIntegrityError


@dataclass
class ValidationResult:
    """Results from validating a matching.

    Attributes:
        is_valid: True if every node is matched at most once and every pair
                  is backed by an edge of the problem.
        errors: List of validation error messages (empty if valid).
        match_counts: Dict mapping node names to the number of pairs using them.
        unknown_pairs: Pairs in the result with no corresponding problem edge.
    """

    is_valid: bool
    errors: list[str]
    match_counts: dict[str, int]
    unknown_pairs: list[tuple[str, str]]


def validate_matching(problem: MatchingProblem, result: MatchingResult) -> ValidationResult:
    """Validate that a result is a matching of the problem's graph.

    Checks:
    - Conservation: no node is an endpoint of more than one matched pair
    - Every matched pair corresponds to an edge of the problem
    - ``result.pairs`` and ``result.edges`` describe the same matches

    Args:
        problem: Problem definition with nodes and edges.
        result: Solution to validate.

    Returns:
        ValidationResult with detailed information about any violations.
    """
    errors: list[str] = []
    problem_edges = set(problem.edges)

    node_count = len(problem.nodes)
    out_of_range = [
        edge for edge in result.edges if not all(0 <= index < node_count for index in edge)
    ]
    if out_of_range:
        return ValidationResult(
            is_valid=False,
            errors=[f"Matched edge {edge} references a missing node" for edge in out_of_range],
            match_counts={},
            unknown_pairs=[],
        )

    named_edges = [(problem.nodes[source], problem.nodes[dest]) for source, dest in result.edges]
    if named_edges != list(result.pairs):
        errors.append("Matched pairs do not correspond to matched edge indices")

    unknown_pairs = [
        (problem.nodes[source], problem.nodes[dest])
        for source, dest in result.edges
        if (source, dest) not in problem_edges
    ]
    for left, right in unknown_pairs:
        errors.append(f"Pair {left} / {right} is not an edge of the problem")

    match_counts: Counter[str] = Counter()
    for left, right in result.pairs:
        match_counts[left] += 1
        match_counts[right] += 1
    for name, count in sorted(match_counts.items()):
        if count > 1:
            errors.append(f"Node '{name}' is matched {count} times")

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        match_counts=dict(match_counts),
        unknown_pairs=unknown_pairs,
    )


def ensure_valid_matching(problem: MatchingProblem, result: MatchingResult) -> None:
    """Raise MatchingIntegrityError if ``result`` is not a valid matching of ``problem``."""
    validation = validate_matching(problem, result)
    if not validation.is_valid:
        raise MatchingIntegrityError(
            f"Matching failed verification with {len(validation.errors)} error(s): "
            f"{validation.errors[0]}",
            errors=validation.errors,
        )


def biadjacency_matrix(problem: MatchingProblem) -> csr_matrix:
    """Return the problem's left x right biadjacency matrix in CSR form."""
    left_size = problem.left_count
    right_size = len(problem.nodes) - left_size
    if problem.edges:
        rows = np.fromiter((source for source, _ in problem.edges), dtype=np.int64)
        cols = np.fromiter((dest - left_size for _, dest in problem.edges), dtype=np.int64)
    else:
        rows = np.empty(0, dtype=np.int64)
        cols = np.empty(0, dtype=np.int64)
    data = np.ones(len(rows), dtype=np.int32)
    return csr_matrix((data, (rows, cols)), shape=(left_size, right_size))


def maximum_matching_size(problem: MatchingProblem) -> int:
    """Compute the maximum matching size independently with scipy.

    Useful to cross-check a MatchingResult produced by the blocking-flow
    solver.
    """
    if problem.left_count == 0 or problem.left_count == len(problem.nodes):
        return 0
    matches = maximum_bipartite_matching(biadjacency_matrix(problem), perm_type="column")
    return int(np.count_nonzero(matches >= 0))


def unmatched_nodes(
    problem: MatchingProblem, result: MatchingResult
) -> tuple[list[str], list[str]]:
    """Return (left, right) node names not covered by the matching, in problem order."""
    matched = {name for pair in result.pairs for name in pair}
    left = [name for name in problem.left_nodes if name not in matched]
    right = [name for name in problem.right_nodes if name not in matched]
    return left, right
