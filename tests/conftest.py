"""Shared pytest fixtures and graph builders for digraphkit tests."""

from __future__ import annotations

from collections.abc import Generator, Iterable
from typing import Any

import pytest

from digraphkit.core.digraph import Digraph
from digraphkit.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def graph() -> Digraph[str, float]:
    """Empty graph with string vertex payloads and float edge payloads."""
    return Digraph()


@pytest.fixture
def cycle3() -> Digraph[str, float]:
    """Strongly connected 3-cycle: 1 -> 2 -> 3 -> 1."""
    return build_graph([1, 2, 3], [(1, 2, 1.0), (2, 3, 1.0), (3, 1, 1.0)])


@pytest.fixture
def weighted() -> Digraph[str, float]:
    """1 -> 2 (1), 2 -> 3 (1), 1 -> 3 (5): the detour through 2 is cheaper."""
    return build_graph([1, 2, 3], [(1, 2, 1.0), (2, 3, 1.0), (1, 3, 5.0)])


@pytest.fixture
def _clean_telemetry() -> Generator[None]:
    """Restore telemetry state after a test enables it."""
    yield
    disable_telemetry()
    _current_span.set(None)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def build_graph(
    vertices: Iterable[int],
    edges: Iterable[tuple[int, int, Any]] = (),
) -> Digraph[Any, Any]:
    """Build a graph whose vertex payloads are ``f"v{key}"``."""
    g: Digraph[Any, Any] = Digraph()
    for vertex in vertices:
        g.add_vertex(vertex, f"v{vertex}")
    for from_vertex, to_vertex, info in edges:
        g.add_edge(from_vertex, to_vertex, info)
    return g


def snapshot(g: Digraph[Any, Any]) -> tuple[list[int], list[tuple[int, int]], int, int]:
    """Capture the observable structure of *g* for before/after comparison."""
    return (sorted(g.vertices()), sorted(g.edges()), g.vertex_count(), g.edge_count())
