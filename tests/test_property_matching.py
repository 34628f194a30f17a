import sys
from pathlib import Path
from typing import List, Tuple

import pytest

hypothesis = pytest.importorskip("hypothesis")
nx = pytest.importorskip("networkx")
from hypothesis import HealthCheck, given, settings  # type: ignore  # noqa: E402
from hypothesis import strategies as st  # type: ignore  # noqa: E402

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from bipartite_flow.data import build_problem  # noqa: E402
from bipartite_flow.graph import UNREACHED, graph_from_problem  # noqa: E402
from bipartite_flow.solver import solve_bipartite_matching  # noqa: E402
from bipartite_flow.utils import maximum_matching_size, validate_matching  # noqa: E402


@st.composite
def _bipartite_instances(draw) -> Tuple[List[str], List[Tuple[int, int]], int]:
    # Random left/right sizes with an arbitrary subset of the possible edges.
    left_size = draw(st.integers(min_value=0, max_value=7))
    right_size = draw(st.integers(min_value=0, max_value=7))
    names = [f"L{i}" for i in range(left_size)] + [f"R{j}" for j in range(right_size)]

    possible = [(i + 1, left_size + j + 1) for i in range(left_size) for j in range(right_size)]
    chosen = draw(st.lists(st.sampled_from(possible), unique=True)) if possible else []
    edges = draw(st.permutations(chosen)) if chosen else []
    return names, list(edges), left_size


def _networkx_matching_size(problem) -> int:
    graph = nx.Graph()
    graph.add_nodes_from(problem.left_nodes, bipartite=0)
    graph.add_nodes_from(problem.right_nodes, bipartite=1)
    graph.add_edges_from((problem.nodes[s], problem.nodes[d]) for s, d in problem.edges)
    matching = nx.bipartite.hopcroft_karp_matching(graph, top_nodes=problem.left_nodes)
    return len(matching) // 2


@settings(max_examples=75, suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(_bipartite_instances())
def test_matching_is_maximum_and_valid(instance: Tuple[List[str], List[Tuple[int, int]], int]):
    # Property: the blocking-flow matching agrees in size with two independent references.
    names, edges, left_count = instance
    problem = build_problem(names, edges, left_count=left_count)

    result = solve_bipartite_matching(problem)

    assert result.status == "optimal"
    assert result.size == _networkx_matching_size(problem)
    assert result.size == maximum_matching_size(problem)
    assert validate_matching(problem, result).is_valid


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(_bipartite_instances())
def test_phase_distances_strictly_increase(instance: Tuple[List[str], List[Tuple[int, int]], int]):
    names, edges, left_count = instance
    problem = build_problem(names, edges, left_count=left_count)

    result = solve_bipartite_matching(problem)

    assert result.history is not None
    assert result.history.is_distance_increasing()
    assert result.history.within_phase_bound(left_count)
    assert all(distance % 2 == 1 for distance in result.history.distances)


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(_bipartite_instances())
def test_level_graph_arcs_advance_one_level(instance: Tuple[List[str], List[Tuple[int, int]], int]):
    # Property: every arc kept by the BFS goes from level L to level L + 1.
    names, edges, left_count = instance
    problem = build_problem(names, edges, left_count=left_count)
    graph = graph_from_problem(problem.nodes, problem.edges, problem.left_count)

    graph.create_level_graph()

    for node in graph.nodes:
        for successor in graph.level_graph_at(node.id):
            assert node.level != UNREACHED
            assert graph.get_node(successor).level == node.level + 1
