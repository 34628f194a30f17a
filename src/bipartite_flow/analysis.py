"""Structural analysis of bipartite matching problems.

This module inspects a problem before it is solved: partition sizes, node
degrees, isolated nodes, and a cheap upper bound on the matching size. The
solver logs the result at the start of every solve.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .data import MatchingProblem


class GraphKind(Enum):
    """Coarse classification of a bipartite graph."""

    EMPTY = "empty"
    EDGELESS = "edgeless"
    COMPLETE = "complete"
    BALANCED = "balanced"
    UNBALANCED = "unbalanced"


@dataclass
class GraphStructure:
    """Detected structure and properties of a matching problem.

    Attributes:
        kind: The coarse classification
        left_size: Number of left-partition nodes
        right_size: Number of right-partition nodes
        edge_count: Number of edges
        degrees: Degree of every node, keyed by display name
        isolated_left: Left nodes without any edge
        isolated_right: Right nodes without any edge
        density: edge_count / (left_size * right_size), 0.0 when either side is empty
        matching_upper_bound: min(non-isolated left, non-isolated right)
    """

    kind: GraphKind
    left_size: int
    right_size: int
    edge_count: int
    degrees: dict[str, int]
    isolated_left: list[str]
    isolated_right: list[str]
    density: float
    matching_upper_bound: int


def analyze_graph_structure(problem: MatchingProblem) -> GraphStructure:
    """Analyze a matching problem to detect its structure.

    Args:
        problem: The matching problem to analyze

    Returns:
        GraphStructure describing the detected properties

    Examples:
        >>> problem = build_problem(["A", "B", "X", "Y"], [(1, 3), (2, 4)])
        >>> structure = analyze_graph_structure(problem)
        >>> structure.matching_upper_bound
        2
    """
    left = problem.left_nodes
    right = problem.right_nodes

    degrees = {name: 0 for name in problem.nodes}
    for source, dest in problem.edges:
        degrees[problem.nodes[source]] += 1
        degrees[problem.nodes[dest]] += 1

    isolated_left = [name for name in left if degrees[name] == 0]
    isolated_right = [name for name in right if degrees[name] == 0]

    possible_pairs = len(left) * len(right)
    density = len(problem.edges) / possible_pairs if possible_pairs else 0.0
    upper_bound = min(len(left) - len(isolated_left), len(right) - len(isolated_right))

    return GraphStructure(
        kind=_detect_graph_kind(problem, possible_pairs),
        left_size=len(left),
        right_size=len(right),
        edge_count=len(problem.edges),
        degrees=degrees,
        isolated_left=isolated_left,
        isolated_right=isolated_right,
        density=density,
        matching_upper_bound=upper_bound,
    )


def _detect_graph_kind(problem: MatchingProblem, possible_pairs: int) -> GraphKind:
    if not problem.nodes:
        return GraphKind.EMPTY
    if not problem.edges:
        return GraphKind.EDGELESS
    if len(problem.edges) == possible_pairs:
        return GraphKind.COMPLETE
    if len(problem.left_nodes) == len(problem.right_nodes):
        return GraphKind.BALANCED
    return GraphKind.UNBALANCED


def get_structure_info(structure: GraphStructure) -> dict[str, Any]:
    """Get human-readable information about the analyzed structure.

    Args:
        structure: The analyzed graph structure

    Returns:
        Dictionary with structure details, suitable for logging ``extra``
    """
    info: dict[str, Any] = {
        "kind": structure.kind.value,
        "left_size": structure.left_size,
        "right_size": structure.right_size,
        "edge_count": structure.edge_count,
        "isolated_nodes": len(structure.isolated_left) + len(structure.isolated_right),
        "density": structure.density,
        "matching_upper_bound": structure.matching_upper_bound,
    }

    if structure.kind == GraphKind.EMPTY:
        info["description"] = "Empty graph: nothing to match"
    elif structure.kind == GraphKind.EDGELESS:
        info["description"] = (
            f"Edgeless graph: |U|={structure.left_size}, |V|={structure.right_size}, no edges"
        )
    elif structure.kind == GraphKind.COMPLETE:
        info["description"] = (
            f"Complete bipartite graph K({structure.left_size},{structure.right_size})"
        )
    else:
        info["description"] = (
            f"Bipartite graph: |U|={structure.left_size}, |V|={structure.right_size}, "
            f"{structure.edge_count} edges"
        )

    return info
