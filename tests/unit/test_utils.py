"""Tests for matching validation utilities."""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from bipartite_flow import (  # noqa: E402
    MatchingResult,
    build_problem,
    maximum_matching_size,
    solve_bipartite_matching,
    unmatched_nodes,
    validate_matching,
)
from bipartite_flow.utils import biadjacency_matrix  # noqa: E402


def _scenario():
    return build_problem(["A", "B", "X", "Y"], [(1, 3), (1, 4), (2, 3)])


class TestValidateMatching:
    def test_solver_output_is_valid(self):
        problem = _scenario()
        result = solve_bipartite_matching(problem)
        validation = validate_matching(problem, result)

        assert validation.is_valid
        assert validation.errors == []
        assert validation.match_counts == {"A": 1, "Y": 1, "B": 1, "X": 1}

    def test_node_matched_twice(self):
        problem = _scenario()
        result = MatchingResult(pairs=[("A", "X"), ("B", "X")], edges=[(0, 2), (1, 2)])
        validation = validate_matching(problem, result)

        assert not validation.is_valid
        assert "Node 'X' is matched 2 times" in validation.errors

    def test_pair_without_edge(self):
        problem = _scenario()
        result = MatchingResult(pairs=[("B", "Y")], edges=[(1, 3)])
        validation = validate_matching(problem, result)

        assert not validation.is_valid
        assert validation.unknown_pairs == [("B", "Y")]

    def test_pairs_and_edges_disagree(self):
        problem = _scenario()
        result = MatchingResult(pairs=[("A", "Y")], edges=[(0, 2)])
        validation = validate_matching(problem, result)

        assert not validation.is_valid
        assert "Matched pairs do not correspond to matched edge indices" in validation.errors

    def test_edge_outside_problem(self):
        problem = _scenario()
        result = MatchingResult(pairs=[("A", "?")], edges=[(0, 9)])
        validation = validate_matching(problem, result)

        assert not validation.is_valid
        assert len(validation.errors) == 1

    def test_empty_matching_is_valid(self):
        validation = validate_matching(_scenario(), MatchingResult())
        assert validation.is_valid


class TestMaximumMatchingSize:
    def test_scenario(self):
        assert maximum_matching_size(_scenario()) == 2

    def test_no_edges(self):
        assert maximum_matching_size(build_problem(["A", "X"], [])) == 0

    def test_one_sided_problem(self):
        problem = build_problem(["A", "B"], [], left_count=2)
        assert maximum_matching_size(problem) == 0

    def test_star(self):
        problem = build_problem(["A", "X", "Y", "Z"], [(1, 2), (1, 3), (1, 4)], left_count=1)
        assert maximum_matching_size(problem) == 1

    def test_biadjacency_shape(self):
        matrix = biadjacency_matrix(_scenario())
        assert matrix.shape == (2, 2)
        assert matrix.toarray().tolist() == [[1, 1], [1, 0]]


def test_unmatched_nodes():
    problem = build_problem(["A", "B", "C", "X", "Y"], [(1, 4), (2, 4), (3, 5)], left_count=3)
    result = solve_bipartite_matching(problem)

    left, right = unmatched_nodes(problem, result)
    assert result.size == 2
    assert left == ["B"]
    assert right == []
