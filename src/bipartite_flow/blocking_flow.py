"""Blocking-flow maximum bipartite matching."""

from __future__ import annotations

import logging
import time

from .analysis import analyze_graph_structure, get_structure_info
from .data import MatchingProblem, MatchingResult, PhaseInfo, ProgressCallback, SolverOptions
from .diagnostics import PhaseHistory, PhaseStats
from .graph import FlowGraph, graph_from_problem


class BlockingFlowMatcher:
    """Maximum bipartite matching via phases of shortest augmenting paths.

    The problem is wrapped into a unit-capacity flow network between a
    synthetic source and sink. Every phase layers the residual graph by BFS
    distance from the source and then consumes a blocking flow of that level
    graph with a depth-first search that advances along the first remaining
    arc, augments when it reaches the sink, and retreats (deleting the node
    for the rest of the phase) when it hits a dead end.

    Attributes:
        problem: The MatchingProblem instance to solve.
        options: Solver configuration.
        graph: The FlowGraph mutated by the search.

    See Also:
        - solve_bipartite_matching(): Public API wrapper
        - FlowGraph: Residual and level graph management

    Note:
        Instances are single-use. Use solve_bipartite_matching() instead of
        instantiating this class directly.
    """

    def __init__(self, problem: MatchingProblem, options: SolverOptions | None = None):
        self.options = options if options is not None else SolverOptions()
        self.logger = logging.getLogger(__name__)

        problem.validate()
        self.problem = problem
        self.structure = analyze_graph_structure(problem)

        if self.logger.isEnabledFor(logging.INFO):
            info = get_structure_info(self.structure)
            self.logger.info(f"Detected graph structure: {info['description']}", extra=info)

        self.graph: FlowGraph = graph_from_problem(problem.nodes, problem.edges, problem.left_count)
        self.history = PhaseHistory()
        self.augmentations = 0
        self.retreats = 0

    def solve(self, progress_callback: ProgressCallback | None = None) -> MatchingResult:
        """Run phases until no augmenting path remains or the phase limit is hit.

        Args:
            progress_callback: Optional function called with PhaseInfo after
                               every phase that augmented.

        Returns:
            MatchingResult with matched pairs and solver statistics.
        """
        start_time = time.time()
        max_phases = self.options.max_phases
        status = "optimal"
        phase = 0

        self.logger.info(
            "Starting blocking-flow matching",
            extra={
                "nodes": len(self.problem.nodes),
                "edges": len(self.problem.edges),
                "left_size": self.problem.left_count,
                "max_phases": max_phases,
            },
        )

        while self.graph.create_level_graph():
            if max_phases is not None and phase >= max_phases:
                status = "phase_limit"
                self.logger.warning(
                    "Phase limit reached before the matching was proven maximum",
                    extra={"phases": phase, "max_phases": max_phases},
                )
                break

            phase += 1
            stats = self._run_phase(phase)
            self.history.record_phase(stats)

            elapsed = time.time() - start_time
            self.logger.info(
                "Phase complete",
                extra={
                    "phase": phase,
                    "distance": stats.distance,
                    "augmentations": stats.augmentations,
                    "retreats": stats.retreats,
                    "matching_size": self.augmentations,
                    "elapsed_ms": elapsed * 1000,
                },
            )

            if progress_callback is not None:
                progress_callback(
                    PhaseInfo(
                        phase=phase,
                        distance=stats.distance,
                        augmentations=stats.augmentations,
                        retreats=stats.retreats,
                        matching_size=self.augmentations,
                        elapsed_time=elapsed,
                    )
                )

        if not self.history.is_distance_increasing():
            self.logger.warning(
                "Augmenting path lengths did not increase between phases",
                extra={"distances": self.history.distances},
            )

        result = self._build_result(status, phase)
        self.logger.info(
            "Matching complete",
            extra={
                "status": status,
                "matching_size": result.size,
                "phases": phase,
                "augmentations": self.augmentations,
                "retreats": self.retreats,
                "elapsed_ms": (time.time() - start_time) * 1000,
            },
        )
        return result

    def _run_phase(self, phase: int) -> PhaseStats:
        # Consume a blocking flow of the current level graph.
        graph = self.graph
        source = graph.source_id
        sink = graph.sink_id
        distance = graph.get_node(sink).level

        current = source
        current_path: list[int] = []
        augmentations = 0
        retreats = 0
        advances = 0

        while graph.has_level_successor(source):
            if current == sink:
                current_path.append(current)
                graph.apply_augmenting_path(current_path)
                augmentations += 1
                if self.logger.isEnabledFor(logging.DEBUG):
                    self.logger.debug(
                        "Augmented along path",
                        extra={"phase": phase, "path": list(current_path)},
                    )
                current = source
                current_path = []
            elif not graph.has_level_successor(current):
                graph.remove_node_and_incoming_edges(current)
                retreats += 1
                current = current_path.pop()
            else:
                current_path.append(current)
                current = graph.first_level_successor(current)
                advances += 1

        self.augmentations += augmentations
        self.retreats += retreats
        return PhaseStats(
            phase=phase,
            distance=distance,
            augmentations=augmentations,
            retreats=retreats,
            advances=advances,
        )

    def _build_result(self, status: str, phases: int) -> MatchingResult:
        pairs: list[tuple[str, str]] = []
        edges: list[tuple[int, int]] = []
        # Node list index equals node id once source and sink are in place.
        for edge in self.graph.matched_edges():
            pairs.append(
                (self.graph.get_node(edge.source_id).name, self.graph.get_node(edge.dest_id).name)
            )
            edges.append((edge.source_id - 1, edge.dest_id - 1))

        return MatchingResult(
            pairs=pairs,
            edges=edges,
            status=status,
            phases=phases,
            augmentations=self.augmentations,
            retreats=self.retreats,
            history=self.history if self.options.record_history else None,
        )
