"""Tests for per-phase diagnostics."""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from bipartite_flow import build_problem, solve_bipartite_matching  # noqa: E402
from bipartite_flow.diagnostics import PhaseHistory, PhaseStats  # noqa: E402


class TestPhaseHistory:
    def test_empty_history(self):
        history = PhaseHistory()
        assert len(history) == 0
        assert history.distances == []
        assert history.is_distance_increasing()
        assert history.within_phase_bound(0)

    def test_totals(self):
        history = PhaseHistory()
        history.record_phase(
            PhaseStats(phase=1, distance=3, augmentations=2, retreats=1, advances=7)
        )
        history.record_phase(
            PhaseStats(phase=2, distance=5, augmentations=1, retreats=0, advances=5)
        )

        assert len(history) == 2
        assert history.distances == [3, 5]
        assert history.total_augmentations == 3
        assert history.total_retreats == 1
        assert history.summary() == {
            "phases": 2,
            "distances": [3, 5],
            "augmentations": 3,
            "retreats": 1,
        }

    def test_non_increasing_distances_detected(self):
        history = PhaseHistory()
        history.record_phase(
            PhaseStats(phase=1, distance=5, augmentations=1, retreats=0, advances=4)
        )
        history.record_phase(
            PhaseStats(phase=2, distance=5, augmentations=1, retreats=0, advances=4)
        )
        assert not history.is_distance_increasing()

    def test_phase_bound(self):
        history = PhaseHistory()
        history.record_phase(
            PhaseStats(phase=1, distance=3, augmentations=1, retreats=0, advances=3)
        )
        history.record_phase(
            PhaseStats(phase=2, distance=5, augmentations=1, retreats=0, advances=5)
        )
        assert history.within_phase_bound(2)
        assert not history.within_phase_bound(1)


def test_solver_history_matches_result():
    problem = build_problem(["A", "B", "X", "Y"], [(1, 3), (1, 4), (2, 3)])
    result = solve_bipartite_matching(problem)

    assert result.history is not None
    assert len(result.history) == result.phases
    assert result.history.total_augmentations == result.augmentations == result.size
    assert result.history.total_retreats == result.retreats
    assert [stats.phase for stats in result.history.phases] == [1, 2]
