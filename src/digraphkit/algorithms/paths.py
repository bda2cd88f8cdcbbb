"""Single-source shortest paths (Dijkstra) over caller-supplied weights.

Distances, predecessors and the finalized set are all keyed by vertex key,
so keys may be sparse, negative, or arbitrarily large.

The priority queue uses lazy deletion: a vertex whose distance improves is
pushed again, and stale entries are discarded when popped if the vertex is
already finalized. A finalized vertex is never relaxed again, so the
predecessor map stays a tree even when validation is off and a weight is
negative. Ties in distance pop the smaller key first.
"""

from __future__ import annotations

import heapq
import math
from typing import TYPE_CHECKING, Any

from digraphkit.domain.errors import InvalidEdgeWeightError, VertexNotFoundError
from digraphkit.domain.types import DistanceMap, PredecessorMap, WeightFunc

if TYPE_CHECKING:
    from digraphkit.core.digraph import Digraph


def dijkstra[E](
    graph: Digraph[Any, E],
    start: int,
    edge_weight: WeightFunc[E],
    *,
    validate: bool = True,
) -> tuple[DistanceMap, PredecessorMap]:
    """Return ``(distances, predecessors)`` for every vertex from *start*."""
    if start not in graph:
        raise VertexNotFoundError(start)

    distance: DistanceMap = {vertex: math.inf for vertex in graph.vertices()}
    predecessor: PredecessorMap = {vertex: vertex for vertex in graph.vertices()}
    finalized: set[int] = set()

    distance[start] = 0.0
    queue: list[tuple[float, int]] = [(0.0, start)]

    while queue:
        dist, vertex = heapq.heappop(queue)
        if vertex in finalized:
            continue
        finalized.add(vertex)

        for to, info in graph.out_edges(vertex):
            weight = edge_weight(info)
            if validate and (weight < 0 or math.isnan(weight)):
                raise InvalidEdgeWeightError(vertex, to, weight)
            if to in finalized:
                continue
            candidate = dist + weight
            if candidate < distance[to]:
                distance[to] = candidate
                predecessor[to] = vertex
                heapq.heappush(queue, (candidate, to))

    return distance, predecessor


def find_shortest_paths[E](
    graph: Digraph[Any, E],
    start: int,
    edge_weight: WeightFunc[E],
    *,
    validate: bool = True,
) -> PredecessorMap:
    """Return the predecessor tree of cheapest paths from *start*.

    Every vertex key of *graph* appears in the result. *start* and every
    vertex unreachable from it map to themselves.

    Args:
        graph: The graph to search.
        start: Key of the source vertex.
        edge_weight: Pure function turning an edge payload into a weight.
        validate: Reject negative and NaN weights with
            :class:`InvalidEdgeWeightError`.

    Raises:
        VertexNotFoundError: If *start* is not in the graph.
    """
    _, predecessor = dijkstra(graph, start, edge_weight, validate=validate)
    return predecessor


def shortest_distances[E](
    graph: Digraph[Any, E],
    start: int,
    edge_weight: WeightFunc[E],
    *,
    validate: bool = True,
) -> DistanceMap:
    """Return the cheapest path cost from *start* to every vertex.

    Unreachable vertices have distance ``math.inf``.
    """
    distance, _ = dijkstra(graph, start, edge_weight, validate=validate)
    return distance


def path_to(predecessors: PredecessorMap, start: int, target: int) -> list[int]:
    """Rebuild the vertex sequence from *start* to *target*.

    Returns ``[start]`` when *target* is *start*, and an empty list when
    *target* was never reached or its predecessor chain cycles without
    reaching *start*.

    Raises:
        VertexNotFoundError: If *target* is not a key of *predecessors*.
    """
    if target not in predecessors:
        raise VertexNotFoundError(target)
    if target == start:
        return [start]

    path = [target]
    current = target
    for _ in range(len(predecessors)):
        previous = predecessors[current]
        if previous == current:
            return []
        path.append(previous)
        if previous == start:
            path.reverse()
            return path
        current = previous
    return []
