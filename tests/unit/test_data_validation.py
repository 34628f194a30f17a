"""Tests for MatchingProblem validation and build_problem."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from bipartite_flow.data import MatchingProblem, MatchingResult, build_problem  # noqa: E402
from bipartite_flow.exceptions import InvalidProblemError  # noqa: E402


def test_build_problem_converts_one_based_edges():
    problem = build_problem(["A", "B", "X", "Y"], [(1, 3), (2, 4)])
    assert problem.edges == [(0, 2), (1, 3)]
    assert problem.left_count == 2
    assert problem.left_nodes == ["A", "B"]
    assert problem.right_nodes == ["X", "Y"]


def test_build_problem_accepts_zero_based_edges():
    problem = build_problem(["A", "X"], [(0, 1)], index_base=0)
    assert problem.edges == [(0, 1)]


def test_build_problem_odd_node_count_defaults_to_floor_half():
    problem = build_problem(["A", "X", "Y"], [(1, 2), (1, 3)])
    assert problem.left_count == 1


def test_explicit_left_count_overrides_half():
    problem = build_problem(["A", "B", "C", "X"], [(3, 4)], left_count=3)
    assert problem.left_nodes == ["A", "B", "C"]


def test_duplicate_node_names_rejected():
    with pytest.raises(InvalidProblemError, match="Duplicate node name 'A'"):
        build_problem(["A", "A"], [])


def test_edge_index_out_of_range_rejected():
    with pytest.raises(InvalidProblemError, match="references node index 4"):
        build_problem(["A", "X"], [(1, 5)])


def test_zero_index_in_one_based_input_rejected():
    with pytest.raises(InvalidProblemError, match="references node index -1"):
        build_problem(["A", "X"], [(0, 2)])


def test_edge_within_left_partition_rejected():
    with pytest.raises(InvalidProblemError, match="must run from the left"):
        build_problem(["A", "B", "X", "Y"], [(1, 2)])


def test_edge_from_right_to_left_rejected():
    with pytest.raises(InvalidProblemError, match="must run from the left"):
        build_problem(["A", "B", "X", "Y"], [(3, 1)])


def test_duplicate_edges_rejected():
    with pytest.raises(InvalidProblemError, match="Duplicate edge A -> X"):
        build_problem(["A", "X"], [(1, 2), (1, 2)])


def test_malformed_edge_tuple_rejected():
    with pytest.raises(InvalidProblemError, match="Invalid edge specification"):
        build_problem(["A", "X"], [(1, 2, 3)])


def test_partition_boundary_validated():
    problem = MatchingProblem(nodes=["A", "X"], edges=[], left_count=3)
    with pytest.raises(InvalidProblemError, match="Partition boundary 3"):
        problem.validate()


def test_empty_problem_is_valid():
    problem = build_problem([], [])
    assert problem.nodes == []
    assert problem.left_count == 0


def test_matching_result_size():
    result = MatchingResult(pairs=[("A", "X"), ("B", "Y")], edges=[(0, 2), (1, 3)])
    assert result.size == 2
    assert MatchingResult().size == 0
