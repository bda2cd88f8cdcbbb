"""Conversion between :class:`Digraph` and ``networkx.DiGraph``.

Payloads travel under a single attribute (``info``) on nodes and edges.
Only in-memory objects are converted; no file format is read or written.
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from digraphkit.core.digraph import Digraph

INFO_ATTR = "info"

type _Graph = nx.DiGraph


def to_networkx(graph: Digraph[Any, Any]) -> _Graph:
    """Build a NetworkX DiGraph mirroring *graph*.

    Adds all vertices first (so isolated vertices appear in the result),
    then every edge with its payload. Payloads are shared, not copied.
    """
    g: _Graph = nx.DiGraph()
    for vertex in graph.vertices():
        g.add_node(vertex, **{INFO_ATTR: graph.vertex_info(vertex)})
    for from_vertex, to_vertex in graph.edges():
        g.add_edge(
            from_vertex,
            to_vertex,
            **{INFO_ATTR: graph.edge_info(from_vertex, to_vertex)},
        )
    return g


def from_networkx(g: _Graph) -> Digraph[Any, Any]:
    """Build a :class:`Digraph` from a NetworkX DiGraph.

    Node keys must be ``int``. Missing ``info`` attributes become ``None``.

    Raises:
        TypeError: If *g* is undirected, a multigraph, or has a non-int node.
    """
    if not g.is_directed() or g.is_multigraph():
        msg = f"Expected a simple directed graph, got {type(g).__name__}"
        raise TypeError(msg)

    graph: Digraph[Any, Any] = Digraph()
    for node, attrs in g.nodes(data=True):
        if not isinstance(node, int) or isinstance(node, bool):
            msg = f"Vertex keys must be int, got {node!r}"
            raise TypeError(msg)
        graph.add_vertex(node, attrs.get(INFO_ATTR))
    for source, target, attrs in g.edges(data=True):
        graph.add_edge(source, target, attrs.get(INFO_ATTR))
    return graph
