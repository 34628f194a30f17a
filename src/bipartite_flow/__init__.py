"""High-level entrypoints for the blocking-flow bipartite matching library."""

from .analysis import GraphKind, GraphStructure, analyze_graph_structure, get_structure_info
from .blocking_flow import BlockingFlowMatcher
from .data import (
    MatchingProblem,
    MatchingResult,
    PhaseInfo,
    ProgressCallback,
    SolverOptions,
    build_problem,
)
from .diagnostics import PhaseHistory, PhaseStats
from .exceptions import (
    GraphStateError,
    InvalidProblemError,
    MatchingIntegrityError,
    MatchingSolverError,
    OutOfRangeNodeIndexError,
    SolverConfigurationError,
)
from .graph import Edge, FlowGraph, Node
from .io import format_matching, parse_text_problem, problem_from_biadjacency
from .solver import load_problem, save_result, solve_bipartite_matching
from .utils import (
    ValidationResult,
    ensure_valid_matching,
    maximum_matching_size,
    unmatched_nodes,
    validate_matching,
)
from .visualization import visualize_matching, visualize_problem

__version__ = "0.1.0"

__all__ = [
    # Main API
    "build_problem",
    "load_problem",
    "solve_bipartite_matching",
    "save_result",
    "format_matching",
    "parse_text_problem",
    "problem_from_biadjacency",
    # Data model
    "MatchingProblem",
    "MatchingResult",
    "SolverOptions",
    # Graph core
    "FlowGraph",
    "Node",
    "Edge",
    "BlockingFlowMatcher",
    # Progress tracking
    "ProgressCallback",
    "PhaseInfo",
    # Diagnostics
    "PhaseHistory",
    "PhaseStats",
    # Analysis
    "GraphKind",
    "GraphStructure",
    "analyze_graph_structure",
    "get_structure_info",
    # Utilities
    "validate_matching",
    "ensure_valid_matching",
    "maximum_matching_size",
    "unmatched_nodes",
    "ValidationResult",
    # Visualization
    "visualize_problem",
    "visualize_matching",
    # Exceptions
    "MatchingSolverError",
    "InvalidProblemError",
    "OutOfRangeNodeIndexError",
    "GraphStateError",
    "SolverConfigurationError",
    "MatchingIntegrityError",
    # Version
    "__version__",
]
