"""File I/O helpers for bipartite matching problems."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any

import numpy as np
from scipy import sparse

from .data import MatchingProblem, MatchingResult, build_problem
from .exceptions import InvalidProblemError


def _normalize_edges(raw: Iterable[Any], names: Sequence[str]) -> list[tuple[int, int]]:
    # Accept 1-based index pairs or {"source": name, "target": name} objects.
    positions = {name: offset + 1 for offset, name in enumerate(names)}
    edges: list[tuple[int, int]] = []
    for edge in raw:
        if isinstance(edge, Mapping):
            if "source" not in edge or "target" not in edge:
                raise InvalidProblemError(
                    f"Invalid edge specification: {edge}. Each edge object must have "
                    f"'source' and 'target' fields."
                )
            try:
                edges.append((positions[str(edge["source"])], positions[str(edge["target"])]))
            except KeyError as exc:
                raise InvalidProblemError(
                    f"Edge {edge} references unknown node {exc.args[0]!r}."
                ) from exc
        elif isinstance(edge, Sequence) and not isinstance(edge, str) and len(edge) == 2:
            edges.append((int(edge[0]), int(edge[1])))
        else:
            raise InvalidProblemError(
                f"Invalid edge specification: {edge!r}. Use a [source, dest] pair of 1-based "
                f"node indices or a {{'source': ..., 'target': ...}} object."
            )
    return edges


def load_problem(path: str | Path) -> MatchingProblem:
    """Load a matching instance from a JSON file, or a text file for other suffixes."""
    path = Path(path)
    if path.suffix.lower() != ".json":
        return load_text_problem(path)

    with path.open("r", encoding="utf-8") as fh:
        try:
            payload: MutableMapping[str, Any] = json.load(fh)
        except json.JSONDecodeError as exc:
            raise InvalidProblemError(f"Malformed JSON in {path.name}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise InvalidProblemError("Problem JSON must be an object.")

    nodes = payload.get("nodes")
    edges = payload.get("edges")
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise InvalidProblemError(
            "Invalid problem format: JSON must include 'nodes' and 'edges' arrays. "
            f"Got nodes type: {type(nodes).__name__}, edges type: {type(edges).__name__}"
        )
    names = [str(name) for name in nodes]
    # Defer to the core builder so validation rules remain centralized in one place.
    return build_problem(
        nodes=names,
        edges=_normalize_edges(edges, names),
        left_count=payload.get("left_count"),
    )


def parse_text_problem(text: str, left_count: int | None = None) -> MatchingProblem:
    """Parse the whitespace-separated problem format.

    The format is: node count, that many node names, edge count, then that
    many pairs of 1-based node indices. Left-partition names come first.

    Example:
        4
        Alice Bob Xavier Yolanda
        3
        1 3
        1 4
        2 3
    """
    tokens = text.split()
    position = 0

    def next_int(what: str) -> int:
        nonlocal position
        if position >= len(tokens):
            raise InvalidProblemError(f"Unexpected end of input while reading {what}.")
        token = tokens[position]
        position += 1
        try:
            return int(token)
        except ValueError as exc:
            raise InvalidProblemError(f"Expected an integer for {what}, got {token!r}.") from exc

    node_count = next_int("the node count")
    if node_count < 0:
        raise InvalidProblemError(f"Node count must be non-negative, got {node_count}.")
    if position + node_count > len(tokens):
        raise InvalidProblemError(
            f"Expected {node_count} node names, found {len(tokens) - position}."
        )
    names = tokens[position : position + node_count]
    position += node_count

    edge_count = next_int("the edge count")
    if edge_count < 0:
        raise InvalidProblemError(f"Edge count must be non-negative, got {edge_count}.")
    edges = [
        (next_int(f"edge {index + 1} source"), next_int(f"edge {index + 1} destination"))
        for index in range(edge_count)
    ]

    if position != len(tokens):
        raise InvalidProblemError(
            f"Unexpected trailing input after {edge_count} edges: {tokens[position]!r}."
        )
    return build_problem(nodes=names, edges=edges, left_count=left_count)


def load_text_problem(path: str | Path, left_count: int | None = None) -> MatchingProblem:
    """Load a matching instance stored in the whitespace-separated text format."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_text_problem(text, left_count=left_count)


def problem_from_biadjacency(
    matrix: Any,
    left_names: Sequence[str] | None = None,
    right_names: Sequence[str] | None = None,
) -> MatchingProblem:
    """Build a problem from a left x right biadjacency matrix.

    Accepts anything ``numpy.asarray`` understands or a scipy sparse matrix.
    Non-zero entries are edges. Default names are ``L1..Ln`` and ``R1..Rm``.
    """
    if sparse.issparse(matrix):
        coo = sparse.coo_matrix(matrix)
        coo.sum_duplicates()
        shape = coo.shape
        mask = coo.data != 0
        entries = sorted(zip(coo.row[mask].tolist(), coo.col[mask].tolist()))
    else:
        dense = np.asarray(matrix)
        if dense.ndim != 2:
            raise InvalidProblemError(
                f"Biadjacency matrix must be two-dimensional, got shape {dense.shape}."
            )
        shape = dense.shape
        rows, cols = np.nonzero(dense)
        entries = list(zip(rows.tolist(), cols.tolist()))

    left_size, right_size = shape
    left = list(left_names) if left_names is not None else [f"L{i + 1}" for i in range(left_size)]
    right = (
        list(right_names) if right_names is not None else [f"R{j + 1}" for j in range(right_size)]
    )
    if len(left) != left_size or len(right) != right_size:
        raise InvalidProblemError(
            f"Name lists ({len(left)} left, {len(right)} right) do not match matrix shape "
            f"{left_size}x{right_size}."
        )

    return build_problem(
        nodes=[*left, *right],
        edges=[(row, left_size + col) for row, col in entries],
        left_count=left_size,
        index_base=0,
    )


def format_matching(result: MatchingResult) -> str:
    """Render matched pairs one per line followed by the total count."""
    lines = [f"{left} / {right}" for left, right in result.pairs]
    lines.append(f"{result.size} total matches")
    return "\n".join(lines)


def save_result(path: str | Path, result: MatchingResult) -> None:
    """Persist a matching result to JSON."""
    data: dict[str, Any] = {
        "status": result.status,
        "size": result.size,
        "phases": result.phases,
        "augmentations": result.augmentations,
        "pairs": [{"left": left, "right": right} for left, right in result.pairs],
    }
    if result.history is not None:
        data["distances"] = result.history.distances
    with Path(path).open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, sort_keys=False)
