"""Flow network for unit-capacity bipartite matching.

The graph keeps nodes and edges in dense integer-indexed lists. Once every
node and edge has been added, ``create_residual_graph`` wraps the bipartite
graph between a synthetic source (id 0) and sink (id N + 1) and derives the
residual adjacency. Each phase of the blocking-flow driver then rebuilds the
level graph from the residual graph and prunes it as paths are consumed.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

from .exceptions import GraphStateError, InvalidProblemError, OutOfRangeNodeIndexError

logger = logging.getLogger(__name__)

SOURCE_ID = 0  # Synthetic source node id.
INFINITY_SENTINEL = -1  # Sink's residual successor; marks unconditional reachability.
UNREACHED = -1  # Level of nodes the current phase's BFS did not reach.


@dataclass
class Node:
    """A graph node with its per-phase BFS level.

    Attributes:
        id: Dense integer id. Original nodes use 1..N, the source 0, the sink N + 1.
        name: Display name (empty for the synthetic source and sink).
        level: Distance from the source in the current phase's level graph.
    """

    id: int
    name: str
    level: int = 0


@dataclass
class Edge:
    """A directed unit-capacity edge.

    Attributes:
        source_id: Id of the left-partition endpoint.
        dest_id: Id of the right-partition endpoint.
        carries_flow: True while the edge is part of the matching.
    """

    source_id: int
    dest_id: int
    carries_flow: bool = False


class FlowGraph:
    """Nodes, edges, and the residual/level adjacency derived from them.

    Lifecycle:
        1. ``add_node`` / ``add_edge`` populate the bipartite graph.
        2. ``create_residual_graph`` runs once and appends source and sink.
        3. Each phase calls ``create_level_graph`` and then mutates the level
           graph through ``apply_augmenting_path`` and
           ``remove_node_and_incoming_edges``.

    Examples:
        >>> graph = FlowGraph()
        >>> for index, name in enumerate(["A", "X"], start=1):
        ...     graph.add_node(Node(id=index, name=name))
        >>> graph.add_edge(1, 2)
        >>> graph.create_residual_graph(left_count=1)
        >>> graph.create_level_graph()
        True
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._edge_index: dict[tuple[int, int], int] = {}
        self._residual_graph: list[list[int]] = []
        self._level_graph: list[list[int]] = []
        self._left_count = 0
        self._residual_built = False

    # ------------------------------------------------------------------ nodes

    def add_node(self, node: Node) -> None:
        if self._residual_built:
            raise GraphStateError("Cannot add nodes after the residual graph has been created.")
        expected = len(self._nodes) + 1
        if node.id != expected:
            raise InvalidProblemError(
                f"Node '{node.name}' has id {node.id}, expected {expected}. "
                f"Original nodes must be added with consecutive ids starting at 1."
            )
        self._nodes.append(node)

    @property
    def nodes(self) -> Sequence[Node]:
        return tuple(self._nodes)

    def get_node(self, index: int) -> Node:
        """Return the node stored at ``index`` in the node list.

        Before the residual graph exists the list holds only original nodes,
        so index ``i`` is the node with id ``i + 1``. Afterwards the source sits
        at index 0 and indices equal ids.

        Raises:
            OutOfRangeNodeIndexError: If ``index`` is outside the node list.
        """
        self._check_index(index, len(self._nodes), "Node index")
        return self._nodes[index]

    @property
    def source_id(self) -> int:
        return SOURCE_ID

    @property
    def sink_id(self) -> int:
        self._require_residual()
        return len(self._nodes) - 1

    @property
    def left_count(self) -> int:
        return self._left_count

    # ------------------------------------------------------------------ edges

    def add_edge(self, source_id: int, dest_id: int, carries_flow: bool = False) -> None:
        if self._residual_built:
            raise GraphStateError("Cannot add edges after the residual graph has been created.")
        node_count = len(self._nodes)
        for node_id in (source_id, dest_id):
            if not 1 <= node_id <= node_count:
                raise OutOfRangeNodeIndexError(
                    f"Edge endpoint {node_id} is not an original node id (1..{node_count}).",
                    index=node_id,
                    size=node_count,
                )
        key = (source_id, dest_id)
        if key in self._edge_index:
            raise InvalidProblemError(f"Duplicate edge {source_id} -> {dest_id}.")
        self._edge_index[key] = len(self._edges)
        self._edges.append(Edge(source_id, dest_id, carries_flow))

    @property
    def edges(self) -> Sequence[Edge]:
        return tuple(self._edges)

    def matched_edges(self) -> list[Edge]:
        """Edges currently carrying flow, in insertion order."""
        return [edge for edge in self._edges if edge.carries_flow]

    # --------------------------------------------------------- residual graph

    def create_residual_graph(self, left_count: int | None = None) -> None:
        """Wrap the bipartite graph between a synthetic source and sink.

        Args:
            left_count: Number of original nodes in the left partition. The
                        first ``left_count`` nodes (ids 1..left_count) are left,
                        the rest right. Defaults to half of the nodes.

        Raises:
            GraphStateError: If the residual graph was already created.
            InvalidProblemError: If ``left_count`` is outside 0..N.
        """
        if self._residual_built:
            raise GraphStateError("The residual graph has already been created.")

        total_nodes = len(self._nodes)
        if left_count is None:
            left_count = total_nodes // 2
        if not 0 <= left_count <= total_nodes:
            raise InvalidProblemError(
                f"Partition boundary {left_count} is outside 0..{total_nodes}."
            )

        sink_id = total_nodes + 1
        residual: list[list[int]] = [[] for _ in range(total_nodes + 2)]
        residual[SOURCE_ID].extend(range(1, left_count + 1))
        for edge in self._edges:
            residual[edge.source_id].append(edge.dest_id)
        for node_id in range(left_count + 1, total_nodes + 1):
            residual[node_id].append(sink_id)
        residual[sink_id].append(INFINITY_SENTINEL)

        self._nodes.insert(0, Node(id=SOURCE_ID, name="", level=0))
        self._nodes.append(Node(id=sink_id, name="", level=0))
        self._residual_graph = residual
        self._level_graph = [[] for _ in residual]
        self._left_count = left_count
        self._residual_built = True

    @property
    def residual_graph(self) -> Sequence[Sequence[int]]:
        return tuple(tuple(adjacent) for adjacent in self._residual_graph)

    def residual_graph_at(self, node_id: int) -> tuple[int, ...]:
        self._check_index(node_id, len(self._residual_graph), "Residual graph index")
        return tuple(self._residual_graph[node_id])

    def update_residual_graph(self, path: Sequence[int]) -> None:
        """Reverse every residual arc used by ``path``."""
        if not self._is_usable_path(path):
            return
        for current, following in zip(path, path[1:]):
            adjacent = self._residual_graph[current]
            if following in adjacent:
                adjacent.remove(following)
                self._residual_graph[following].append(current)

    # ------------------------------------------------------------ level graph

    def create_level_graph(self) -> bool:
        """Layer the residual graph by BFS distance from the source.

        Only arcs from level L to level L + 1 survive. Returns True if the
        sink was reached, meaning at least one augmenting path exists.
        """
        if not self._nodes:
            logger.info("Graph is empty; no augmenting path exists")
            return False
        self._require_residual()

        for node in self._nodes:
            node.level = UNREACHED
        self._nodes[SOURCE_ID].level = 0

        level_graph: list[list[int]] = [[] for _ in self._residual_graph]
        has_path_to_sink = False
        queue: deque[int] = deque([SOURCE_ID])

        while queue:
            current = queue.popleft()
            next_level = self._nodes[current].level + 1
            kept: list[int] = []
            for neighbor in self._residual_graph[current]:
                if neighbor == INFINITY_SENTINEL:
                    has_path_to_sink = True
                    break
                target = self._nodes[neighbor]
                if target.level == UNREACHED:
                    target.level = next_level
                    queue.append(neighbor)
                    kept.append(neighbor)
                elif target.level == next_level:
                    kept.append(neighbor)
            level_graph[current] = kept

        self._level_graph = level_graph
        return has_path_to_sink

    @property
    def level_graph(self) -> Sequence[Sequence[int]]:
        return tuple(tuple(adjacent) for adjacent in self._level_graph)

    def level_graph_at(self, node_id: int) -> tuple[int, ...]:
        self._check_index(node_id, len(self._level_graph), "Level graph index")
        return tuple(self._level_graph[node_id])

    def has_level_successor(self, node_id: int) -> bool:
        self._check_index(node_id, len(self._level_graph), "Level graph index")
        return bool(self._level_graph[node_id])

    def first_level_successor(self, node_id: int) -> int:
        self._check_index(node_id, len(self._level_graph), "Level graph index")
        adjacent = self._level_graph[node_id]
        if not adjacent:
            raise GraphStateError(f"Node {node_id} has no successor in the level graph.")
        return adjacent[0]

    def update_level_graph(self, path: Sequence[int]) -> None:
        """Drop the level-graph arcs consumed by ``path``."""
        if not self._is_usable_path(path):
            return
        for current, following in zip(path, path[1:]):
            adjacent = self._level_graph[current]
            if following in adjacent:
                adjacent.remove(following)

    def remove_node_and_incoming_edges(self, node_id: int) -> None:
        """Remove a dead-end node from the level graph for the rest of the phase."""
        self._check_index(node_id, len(self._level_graph), "Level graph index")
        self._level_graph[node_id].clear()
        for adjacent in self._level_graph:
            if node_id in adjacent:
                adjacent[:] = [neighbor for neighbor in adjacent if neighbor != node_id]

    # ------------------------------------------------------------------- flow

    def augment_flow(self, path: Sequence[int]) -> None:
        """Push one unit of flow along ``path``.

        Forward edges start carrying flow; edges traversed backwards (through
        a reversed residual arc) are cancelled.
        """
        if not self._is_usable_path(path):
            return
        for current, following in zip(path, path[1:]):
            forward = self._edge_index.get((current, following))
            if forward is not None:
                self._edges[forward].carries_flow = True
            backward = self._edge_index.get((following, current))
            if backward is not None:
                self._edges[backward].carries_flow = False

    def apply_augmenting_path(self, path: Sequence[int]) -> None:
        """Augment along ``path`` and update both auxiliary graphs as one step."""
        if not self._is_usable_path(path):
            return
        self.augment_flow(path)
        self.update_residual_graph(path)
        self.update_level_graph(path)

    # --------------------------------------------------------------- helpers

    def _require_residual(self) -> None:
        if not self._residual_built:
            raise GraphStateError(
                "The residual graph has not been created. Call create_residual_graph() "
                "after adding all nodes and edges."
            )

    def _is_usable_path(self, path: Sequence[int]) -> bool:
        if len(path) < 2:
            logger.debug("Ignoring path with fewer than two nodes", extra={"path": list(path)})
            return False
        self._require_residual()
        for node_id in path:
            self._check_index(node_id, len(self._residual_graph), "Path node")
        return True

    @staticmethod
    def _check_index(index: int, size: int, label: str) -> None:
        if not 0 <= index < size:
            raise OutOfRangeNodeIndexError(
                f"{label} {index} out of range for graph with {size} entries.",
                index=index,
                size=size,
            )


def graph_from_problem(
    names: Sequence[str],
    edges: Sequence[tuple[int, int]],
    left_count: int | None = None,
) -> FlowGraph:
    """Populate a FlowGraph from names and 0-based edge pairs, then build its residual graph."""
    graph = FlowGraph()
    for offset, name in enumerate(names):
        graph.add_node(Node(id=offset + 1, name=name))
    for source, dest in edges:
        graph.add_edge(graph.get_node(source).id, graph.get_node(dest).id)
    graph.create_residual_graph(left_count)
    return graph
