"""Reachability and strong connectivity.

Two strategies decide strong connectivity:

- ``"dfs"``: one depth-first traversal per start vertex, stopping at the
  first vertex that cannot reach the whole graph. O(V·(V+E)).
- ``"kosaraju"``: a graph is strongly connected iff an arbitrary vertex
  reaches every vertex and every vertex reaches it, i.e. one forward and one
  reverse traversal. O(V+E).

All traversals are iterative so deep graphs never hit the recursion limit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from digraphkit.core.digraph import Digraph

type ConnectivityMethod = Literal["dfs", "kosaraju"]

CONNECTIVITY_METHODS: tuple[str, ...] = ("dfs", "kosaraju")


def _depth_first(start: int, neighbors: Callable[[int], Iterable[int]]) -> set[int]:
    """Return every key reachable from *start*, *start* included."""
    visited: set[int] = {start}
    stack = [start]
    while stack:
        vertex = stack.pop()
        for neighbor in neighbors(vertex):
            if neighbor not in visited:
                visited.add(neighbor)
                stack.append(neighbor)
    return visited


def reachable_from(graph: Digraph[Any, Any], start: int) -> set[int]:
    """Return the keys reachable from *start* by following outgoing edges.

    Raises:
        VertexNotFoundError: If *start* is not in the graph.
    """
    graph.successors(start)  # raises for an unknown start
    return _depth_first(start, graph.successors)


def is_strongly_connected(
    graph: Digraph[Any, Any],
    method: ConnectivityMethod = "dfs",
) -> bool:
    """Return True if every vertex of *graph* reaches every other vertex.

    An empty graph is strongly connected vacuously, and a single vertex is
    strongly connected trivially.
    """
    if method not in CONNECTIVITY_METHODS:
        msg = f"Unknown connectivity method {method!r}; expected one of {CONNECTIVITY_METHODS}"
        raise ValueError(msg)

    total = graph.vertex_count()
    if total <= 1:
        return True

    if method == "kosaraju":
        root = graph.vertices()[0]
        if len(_depth_first(root, graph.successors)) != total:
            return False
        return len(_depth_first(root, graph.predecessors)) == total

    return all(len(_depth_first(vertex, graph.successors)) == total for vertex in graph.vertices())


def strongly_connected_components(graph: Digraph[Any, Any]) -> list[list[int]]:
    """Partition the vertices into strongly connected components (Kosaraju).

    Pass one records vertices by DFS finish time; pass two walks the reversed
    edges in decreasing finish order, each walk collecting one component.
    Components are sorted internally and listed in discovery order.
    """
    visited: set[int] = set()
    order: list[int] = []

    for root in graph.vertices():
        if root in visited:
            continue
        visited.add(root)
        stack: list[tuple[int, Iterator[int]]] = [(root, iter(graph.successors(root)))]
        while stack:
            vertex, pending = stack[-1]
            for neighbor in pending:
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append((neighbor, iter(graph.successors(neighbor))))
                    break
            else:
                stack.pop()
                order.append(vertex)

    assigned: set[int] = set()
    components: list[list[int]] = []
    for root in reversed(order):
        if root in assigned:
            continue
        component = [root]
        assigned.add(root)
        frontier = [root]
        while frontier:
            vertex = frontier.pop()
            for source in graph.predecessors(vertex):
                if source not in assigned:
                    assigned.add(source)
                    component.append(source)
                    frontier.append(source)
        components.append(sorted(component))
    return components
