"""Core data structures for bipartite matching problems."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .exceptions import InvalidProblemError, SolverConfigurationError

if TYPE_CHECKING:
    from .diagnostics import PhaseHistory


@dataclass
class MatchingProblem:
    """Encapsulates a bipartite matching problem.

    Nodes are identified by their position in ``nodes``. The first
    ``left_count`` names form the left partition and the remaining names form
    the right partition. Edges are stored as 0-based ``(source, dest)`` index
    pairs and always run from the left partition to the right partition.

    Attributes:
        nodes: Ordered node display names (left partition first).
        edges: 0-based (source_index, dest_index) pairs.
        left_count: Number of nodes in the left partition.

    Examples:
        >>> problem = MatchingProblem(
        ...     nodes=["A", "B", "X", "Y"],
        ...     edges=[(0, 2), (0, 3), (1, 2)],
        ...     left_count=2,
        ... )
        >>> problem.validate()
        >>> problem.left_nodes
        ['A', 'B']

    See Also:
        - build_problem(): Construct from 1-based input pairs.
        - solve_bipartite_matching(): Compute a maximum matching.
    """

    nodes: list[str]
    edges: list[tuple[int, int]]
    left_count: int

    @property
    def left_nodes(self) -> list[str]:
        return self.nodes[: self.left_count]

    @property
    def right_nodes(self) -> list[str]:
        return self.nodes[self.left_count :]

    def validate(self) -> None:
        node_count = len(self.nodes)
        if not 0 <= self.left_count <= node_count:
            raise InvalidProblemError(
                f"Partition boundary {self.left_count} is outside the node list "
                f"(0..{node_count}). The left partition must be a prefix of the node list."
            )

        seen_names: set[str] = set()
        for name in self.nodes:
            if name in seen_names:
                raise InvalidProblemError(
                    f"Duplicate node name '{name}'. Each node must have a unique display name."
                )
            seen_names.add(name)

        seen_edges: set[tuple[int, int]] = set()
        for source, dest in self.edges:
            for index in (source, dest):
                if not 0 <= index < node_count:
                    raise InvalidProblemError(
                        f"Edge ({source}, {dest}) references node index {index}, but the "
                        f"problem only has {node_count} nodes."
                    )
            if not (source < self.left_count <= dest):
                raise InvalidProblemError(
                    f"Edge {self.nodes[source]} -> {self.nodes[dest]} must run from the left "
                    f"partition (first {self.left_count} nodes) to the right partition."
                )
            if (source, dest) in seen_edges:
                raise InvalidProblemError(
                    f"Duplicate edge {self.nodes[source]} -> {self.nodes[dest]}. "
                    f"Each pair of nodes may be connected at most once."
                )
            seen_edges.add((source, dest))


@dataclass
class MatchingResult:
    """Represents the output of a maximum matching computation.

    Attributes:
        pairs: Matched (left name, right name) pairs in edge input order.
        edges: The same matches as 0-based (source_index, dest_index) pairs.
        status: Solution status:
                - 'optimal': No augmenting path remains; the matching is maximum
                - 'phase_limit': Stopped after SolverOptions.max_phases phases
        phases: Number of phases that found at least one augmenting path.
        augmentations: Total augmenting paths applied.
        retreats: Total dead-end retreats taken during path search.
        history: Per-phase statistics, or None when history recording is off.

    Examples:
        >>> result = solve_bipartite_matching(problem)
        >>> result.size
        2
        >>> result.pairs
        [('A', 'Y'), ('B', 'X')]
    """

    pairs: list[tuple[str, str]] = field(default_factory=list)
    edges: list[tuple[int, int]] = field(default_factory=list)
    status: str = "optimal"
    phases: int = 0
    augmentations: int = 0
    retreats: int = 0
    history: PhaseHistory | None = None

    @property
    def size(self) -> int:
        return len(self.pairs)


@dataclass(frozen=True)
class PhaseInfo:
    """Progress information provided after each phase.

    Attributes:
        phase: 1-based phase number.
        distance: Source-to-sink distance in this phase's level graph.
        augmentations: Augmenting paths applied during this phase.
        retreats: Dead-end retreats taken during this phase.
        matching_size: Matching size after this phase.
        elapsed_time: Elapsed time in seconds since solve started.
    """

    phase: int
    distance: int
    augmentations: int
    retreats: int
    matching_size: int
    elapsed_time: float


# Type alias for progress callback function
ProgressCallback = Callable[[PhaseInfo], None]


@dataclass
class SolverOptions:
    """Configuration options for the blocking-flow matching solver.

    Attributes:
        max_phases: Maximum number of phases to run. None (default) runs until
                    no augmenting path remains. When the limit is hit the result
                    has status 'phase_limit' and holds a valid, possibly
                    non-maximum, matching.
        verify_matching: Check the final matching for conservation (no node
                         matched twice, every pair backed by an input edge) and
                         raise MatchingIntegrityError on failure (default: True).
        record_history: Keep per-phase statistics in MatchingResult.history
                        (default: True).

    Examples:
        >>> options = SolverOptions(max_phases=3)
        >>> result = solve_bipartite_matching(problem, options=options)
    """

    max_phases: int | None = None
    verify_matching: bool = True
    record_history: bool = True

    def __post_init__(self) -> None:
        if self.max_phases is not None:
            if isinstance(self.max_phases, bool) or not isinstance(self.max_phases, int):
                raise SolverConfigurationError(
                    f"max_phases must be an integer or None, got {self.max_phases!r}."
                )
            if self.max_phases <= 0:
                raise SolverConfigurationError(
                    f"max_phases must be positive, got {self.max_phases}. "
                    f"Use None to run until the matching is maximum."
                )


def build_problem(
    nodes: Iterable[str],
    edges: Iterable[Sequence[int]],
    left_count: int | None = None,
    index_base: int = 1,
) -> MatchingProblem:
    """Factory helper used by the IO layer to assemble a MatchingProblem.

    Edge indices are given in ``index_base`` (1-based by default, matching the
    input files) and converted to 0-based. When ``left_count`` is omitted the
    first half of the nodes forms the left partition.
    """
    names = [str(name) for name in nodes]
    boundary = len(names) // 2 if left_count is None else int(left_count)

    edge_pairs: list[tuple[int, int]] = []
    for edge in edges:
        if len(edge) != 2:
            raise InvalidProblemError(
                f"Invalid edge specification: {edge!r}. Each edge must be a "
                f"(source_index, dest_index) pair."
            )
        edge_pairs.append((int(edge[0]) - index_base, int(edge[1]) - index_base))

    problem = MatchingProblem(nodes=names, edges=edge_pairs, left_count=boundary)
    problem.validate()
    return problem
