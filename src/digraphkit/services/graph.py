"""DigraphService — result-typed access to a Digraph.

Every graph operation is exposed here returning :class:`ServiceResult`
instead of raising, so callers can branch on ``result.ok`` and
``result.error.code``. Exceptions other than ``DigraphError`` propagate.
The read-only algorithms are ``@traced``.
"""

from __future__ import annotations

import math
from typing import Any

from digraphkit.algorithms import connectivity, paths
from digraphkit.domain.errors import DigraphError
from digraphkit.domain.types import WeightFunc
from digraphkit.services.base import BaseService
from digraphkit.services.result import ServiceResult
from digraphkit.services.telemetry import trace_span, traced


class DigraphService(BaseService):
    """Handles graph mutation, queries and analysis."""

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_vertex(self, vertex: int, info: Any = None) -> ServiceResult:
        try:
            self._graph.add_vertex(vertex, info)
        except DigraphError as exc:
            return self._failure("add_vertex", exc)
        return ServiceResult(
            ok=True,
            op="add_vertex",
            data={"vertex": vertex, "vertex_count": self._graph.vertex_count()},
        )

    def add_edge(self, from_vertex: int, to_vertex: int, info: Any = None) -> ServiceResult:
        try:
            self._graph.add_edge(from_vertex, to_vertex, info)
        except DigraphError as exc:
            return self._failure("add_edge", exc)
        return ServiceResult(
            ok=True,
            op="add_edge",
            data={
                "from": from_vertex,
                "to": to_vertex,
                "edge_count": self._graph.edge_count(),
            },
        )

    def remove_vertex(self, vertex: int) -> ServiceResult:
        """Remove *vertex*; ``data["removed_edges"]`` counts the incident edges dropped."""
        before = self._graph.edge_count()
        try:
            self._graph.remove_vertex(vertex)
        except DigraphError as exc:
            return self._failure("remove_vertex", exc)
        return ServiceResult(
            ok=True,
            op="remove_vertex",
            data={"vertex": vertex, "removed_edges": before - self._graph.edge_count()},
        )

    def remove_edge(self, from_vertex: int, to_vertex: int) -> ServiceResult:
        try:
            self._graph.remove_edge(from_vertex, to_vertex)
        except DigraphError as exc:
            return self._failure("remove_edge", exc)
        return ServiceResult(
            ok=True,
            op="remove_edge",
            data={"from": from_vertex, "to": to_vertex},
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def vertex_info(self, vertex: int) -> ServiceResult:
        try:
            info = self._graph.vertex_info(vertex)
        except DigraphError as exc:
            return self._failure("vertex_info", exc)
        return ServiceResult(ok=True, op="vertex_info", data={"vertex": vertex, "info": info})

    def edge_info(self, from_vertex: int, to_vertex: int) -> ServiceResult:
        try:
            info = self._graph.edge_info(from_vertex, to_vertex)
        except DigraphError as exc:
            return self._failure("edge_info", exc)
        return ServiceResult(
            ok=True,
            op="edge_info",
            data={"from": from_vertex, "to": to_vertex, "info": info},
        )

    def vertices(self) -> ServiceResult:
        keys = self._graph.vertices()
        return ServiceResult(ok=True, op="vertices", data={"count": len(keys), "vertices": keys})

    def edges(self, vertex: int | None = None) -> ServiceResult:
        """List all edges, or only those leaving *vertex*."""
        try:
            pairs = self._graph.edges() if vertex is None else self._graph.edges(vertex)
        except DigraphError as exc:
            return self._failure("edges", exc)
        return ServiceResult(ok=True, op="edges", data={"count": len(pairs), "edges": pairs})

    def counts(self, vertex: int | None = None) -> ServiceResult:
        """Report graph-wide counts, or the out-degree of *vertex*."""
        if vertex is None:
            return ServiceResult(
                ok=True,
                op="counts",
                data={
                    "vertex_count": self._graph.vertex_count(),
                    "edge_count": self._graph.edge_count(),
                },
            )
        try:
            out_degree = self._graph.edge_count(vertex)
        except DigraphError as exc:
            return self._failure("counts", exc)
        return ServiceResult(ok=True, op="counts", data={"vertex": vertex, "edge_count": out_degree})

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    @traced
    def strong_connectivity(self) -> ServiceResult:
        """Decide strong connectivity with the configured method."""
        method = self._settings.algorithms.connectivity_method
        with trace_span("is_strongly_connected") as span:
            connected = connectivity.is_strongly_connected(self._graph, method)
            if span:
                span.annotate("method", method)
                span.annotate("vertices", self._graph.vertex_count())
                span.annotate("edges", self._graph.edge_count())
        return ServiceResult(
            ok=True,
            op="strong_connectivity",
            data={
                "strongly_connected": connected,
                "method": method,
                "vertex_count": self._graph.vertex_count(),
            },
        )

    @traced
    def components(self) -> ServiceResult:
        """Partition the graph into strongly connected components."""
        with trace_span("kosaraju"):
            found = connectivity.strongly_connected_components(self._graph)
        found.sort(key=len, reverse=True)
        return ServiceResult(
            ok=True,
            op="components",
            data={"count": len(found), "components": found},
        )

    @traced
    def shortest_paths(self, start_vertex: int, edge_weight: WeightFunc[Any]) -> ServiceResult:
        """Run Dijkstra from *start_vertex*.

        ``data`` holds the predecessor tree, the distance of every vertex
        (``None`` when unreachable) and the explicit path to every reached
        vertex. A warning lists how many vertices were unreachable.
        """
        validate = self._settings.algorithms.validate_weights
        try:
            with trace_span("dijkstra") as span:
                distances, predecessors = paths.dijkstra(
                    self._graph, start_vertex, edge_weight, validate=validate
                )
                if span:
                    span.annotate("vertices", self._graph.vertex_count())
        except DigraphError as exc:
            return self._failure("shortest_paths", exc)

        unreachable = sorted(v for v, d in distances.items() if math.isinf(d))
        reached = {
            v: paths.path_to(predecessors, start_vertex, v)
            for v, d in distances.items()
            if not math.isinf(d)
        }
        warnings: list[str] = []
        if unreachable:
            warnings.append(f"{len(unreachable)} vertex(es) unreachable from {start_vertex}")

        return ServiceResult(
            ok=True,
            op="shortest_paths",
            data={
                "start": start_vertex,
                "predecessors": predecessors,
                "distances": {v: (None if math.isinf(d) else d) for v, d in distances.items()},
                "paths": reached,
                "unreachable": unreachable,
            },
            warnings=warnings,
        )
