"""Custom exceptions for the bipartite matching library."""

from __future__ import annotations


class MatchingSolverError(Exception):
    """Base exception for all matching solver errors.

    All custom exceptions in the bipartite_flow package inherit from this class,
    allowing users to catch all solver-related errors with a single except clause.

    Example:
        try:
            result = solve_bipartite_matching(problem)
        except MatchingSolverError as e:
            print(f"Solver error: {e}")
    """


class InvalidProblemError(MatchingSolverError):
    """Raised when a matching problem definition is invalid or malformed.

    This includes:
    - Duplicate node names
    - Edges referencing nodes that do not exist
    - Duplicate edges
    - Edges that do not run from the left partition to the right partition
    - Malformed text or JSON input

    Example:
        InvalidProblemError("Edge (3, 1) must run from the left partition to the right partition")
    """


class OutOfRangeNodeIndexError(MatchingSolverError, IndexError):
    """Raised when a node id or adjacency index falls outside the graph.

    Lookups never fall back to a different node; callers get this error
    instead of a plausible-looking but wrong value.

    Example:
        OutOfRangeNodeIndexError("Node index 7 out of range.", index=7, size=6)
    """

    def __init__(self, message: str, index: int | None = None, size: int | None = None):
        """Initialize with message and the offending index."""
        super().__init__(message)
        self.index = index
        self.size = size


class GraphStateError(MatchingSolverError):
    """Raised when graph operations are called in the wrong lifecycle stage.

    The residual graph is built exactly once, after every node and edge has
    been added. Building it twice, adding nodes afterwards, or asking for a
    level graph before it exists raises this error.
    """


class SolverConfigurationError(MatchingSolverError):
    """Raised when solver configuration or options are invalid.

    Example:
        SolverConfigurationError("max_phases must be positive, got 0")
    """


class MatchingIntegrityError(MatchingSolverError):
    """Raised when a computed matching fails the post-solve integrity check.

    Attributes:
        errors: Human-readable descriptions of every violation found.

    Example:
        MatchingIntegrityError(
            "Matching failed verification",
            errors=["Node 'A' is matched 2 times"],
        )
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        """Initialize with message and the list of violations."""
        super().__init__(message)
        self.errors = list(errors) if errors else []
