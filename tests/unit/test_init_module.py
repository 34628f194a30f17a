"""Unit tests for __init__.py module public API."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

import bipartite_flow  # noqa: E402
from bipartite_flow import visualization  # noqa: E402


class TestPublicApi:
    def test_version(self):
        assert bipartite_flow.__version__ == "0.1.0"

    def test_all_names_are_exported(self):
        for name in bipartite_flow.__all__:
            assert hasattr(bipartite_flow, name), name

    def test_main_entrypoints_are_callable(self):
        assert callable(bipartite_flow.solve_bipartite_matching)
        assert callable(bipartite_flow.build_problem)
        assert callable(bipartite_flow.load_problem)
        assert callable(bipartite_flow.format_matching)


class TestVisualizationDependencies:
    """The visualization helpers fail loudly when matplotlib/networkx are absent."""

    def test_missing_dependencies_raise_import_error(self, monkeypatch):
        monkeypatch.setattr(visualization, "_HAS_VISUALIZATION_DEPS", False)
        problem = bipartite_flow.build_problem(["A", "X"], [(1, 2)])

        with pytest.raises(ImportError, match="Visualization requires optional dependencies"):
            bipartite_flow.visualize_problem(problem)

        result = bipartite_flow.solve_bipartite_matching(problem)
        with pytest.raises(ImportError, match="Visualization requires optional dependencies"):
            bipartite_flow.visualize_matching(problem, result)
