"""Visualization utilities for bipartite matching problems and solutions.

This module draws the bipartite graph and its matching using matplotlib and
networkx.

Example:
    >>> from bipartite_flow import visualize_matching
    >>>
    >>> fig = visualize_matching(problem, result)
    >>> fig.savefig("matching.png")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .data import MatchingProblem, MatchingResult

logger = logging.getLogger(__name__)

# Check for optional dependencies
try:
    import matplotlib.pyplot as plt
    import networkx as nx  # type: ignore[import-untyped,unused-ignore]
    from matplotlib.figure import Figure

    _HAS_VISUALIZATION_DEPS = True
except ImportError:
    _HAS_VISUALIZATION_DEPS = False
    Figure = Any  # type: ignore[misc, assignment]


def _check_dependencies() -> None:
    """Check if visualization dependencies are installed."""
    if not _HAS_VISUALIZATION_DEPS:
        msg = (
            "Visualization requires optional dependencies. "
            "Install with: pip install 'bipartite_flow[visualization]'"
        )
        raise ImportError(msg)


def _build_graph(problem: MatchingProblem) -> Any:
    G = nx.Graph()
    G.add_nodes_from(problem.left_nodes, bipartite=0)
    G.add_nodes_from(problem.right_nodes, bipartite=1)
    G.add_edges_from((problem.nodes[source], problem.nodes[dest]) for source, dest in problem.edges)
    return G


def _compute_layout(G: Any, problem: MatchingProblem, layout: str) -> dict[Any, Any]:
    layout_funcs = {
        "bipartite": lambda graph: nx.bipartite_layout(graph, problem.left_nodes),
        "spring": nx.spring_layout,
        "circular": nx.circular_layout,
    }
    if layout not in layout_funcs:
        logger.warning(f"Unknown layout '{layout}', using 'bipartite'")
        layout = "bipartite"
    if not problem.left_nodes and layout == "bipartite":
        # bipartite_layout needs at least one node on the first side.
        return nx.circular_layout(G)
    return layout_funcs[layout](G)


def visualize_problem(
    problem: MatchingProblem,
    layout: str = "bipartite",
    figsize: tuple[float, float] = (10, 8),
    node_size: int = 900,
    font_size: int = 10,
    title: str | None = None,
) -> Figure:
    """Draw the bipartite graph with left nodes in green and right nodes in blue.

    Args:
        problem: Matching problem to visualize
        layout: Graph layout algorithm ("bipartite", "spring", "circular")
        figsize: Figure size (width, height) in inches
        node_size: Size of node markers
        font_size: Font size for labels
        title: Custom title for the plot (default: "Bipartite Graph")

    Returns:
        matplotlib Figure object

    Raises:
        ImportError: If matplotlib or networkx are not installed
    """
    _check_dependencies()

    G = _build_graph(problem)
    fig, ax = plt.subplots(figsize=figsize)
    pos = _compute_layout(G, problem, layout)

    _draw_partitions(G, pos, problem, ax, node_size)
    nx.draw_networkx_edges(G, pos, edge_color="gray", ax=ax)
    nx.draw_networkx_labels(G, pos, font_size=font_size, ax=ax)

    ax.set_title(title or "Bipartite Graph", fontsize=14, fontweight="bold")
    if problem.nodes:
        ax.legend(loc="upper left", fontsize=font_size)
    ax.axis("off")

    plt.tight_layout()
    return fig


def visualize_matching(
    problem: MatchingProblem,
    result: MatchingResult,
    layout: str = "bipartite",
    figsize: tuple[float, float] = (10, 8),
    node_size: int = 900,
    font_size: int = 10,
    show_unmatched_edges: bool = True,
    title: str | None = None,
) -> Figure:
    """Draw the bipartite graph with the matching highlighted.

    Matched edges are drawn thick and red; the remaining edges are drawn thin
    and gray unless ``show_unmatched_edges`` is False. A text box reports the
    matching size and the number of phases.

    Args:
        problem: Matching problem
        result: Matching from solve_bipartite_matching()
        layout: Graph layout algorithm ("bipartite", "spring", "circular")
        figsize: Figure size (width, height) in inches
        node_size: Size of node markers
        font_size: Font size for labels
        show_unmatched_edges: Whether to draw edges outside the matching
        title: Custom title for the plot (default: "Maximum Matching (size N)")

    Returns:
        matplotlib Figure object

    Raises:
        ImportError: If matplotlib or networkx are not installed

    Example:
        >>> problem = build_problem(["A", "B", "X", "Y"], [(1, 3), (1, 4), (2, 3)])
        >>> result = solve_bipartite_matching(problem)
        >>> fig = visualize_matching(problem, result)
        >>> fig.savefig("matching.png")
    """
    _check_dependencies()

    G = _build_graph(problem)
    fig, ax = plt.subplots(figsize=figsize)
    pos = _compute_layout(G, problem, layout)

    _draw_partitions(G, pos, problem, ax, node_size)

    matched = set(result.pairs)
    matched_edges = [edge for edge in G.edges() if edge in matched or edge[::-1] in matched]
    unmatched_edges = [edge for edge in G.edges() if edge not in matched_edges]

    if show_unmatched_edges and unmatched_edges:
        nx.draw_networkx_edges(
            G, pos, edgelist=unmatched_edges, edge_color="gray", width=1.0, alpha=0.5, ax=ax
        )
    if matched_edges:
        nx.draw_networkx_edges(
            G,
            pos,
            edgelist=matched_edges,
            edge_color="red",
            width=3.0,
            ax=ax,
            label="Matched",
        )

    nx.draw_networkx_labels(G, pos, font_size=font_size, ax=ax)

    ax.set_title(
        title or f"Maximum Matching (size {result.size})", fontsize=14, fontweight="bold"
    )
    if problem.nodes:
        ax.legend(loc="upper left", fontsize=font_size)
    ax.axis("off")

    stats_text = f"Status: {result.status}\nMatches: {result.size}\nPhases: {result.phases}"
    ax.text(
        0.02,
        0.02,
        stats_text,
        transform=ax.transAxes,
        fontsize=font_size,
        verticalalignment="bottom",
        bbox={"boxstyle": "round", "facecolor": "wheat", "alpha": 0.5},
    )

    plt.tight_layout()
    return fig


def _draw_partitions(
    G: Any, pos: dict[Any, Any], problem: MatchingProblem, ax: Any, node_size: int
) -> None:
    if problem.left_nodes:
        nx.draw_networkx_nodes(
            G,
            pos,
            nodelist=problem.left_nodes,
            node_color="lightgreen",
            node_size=node_size,
            ax=ax,
            label="Left partition",
        )
    if problem.right_nodes:
        nx.draw_networkx_nodes(
            G,
            pos,
            nodelist=problem.right_nodes,
            node_color="lightblue",
            node_size=node_size,
            ax=ax,
            label="Right partition",
        )
