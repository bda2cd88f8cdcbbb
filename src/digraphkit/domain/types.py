"""Shared type aliases for vertex keys, edges, and weight policies."""

from __future__ import annotations

from collections.abc import Callable

type VertexKey = int
type EdgeKey = tuple[int, int]
type PredecessorMap = dict[int, int]
type DistanceMap = dict[int, float]

# Pure function from an edge payload to a non-negative weight.
type WeightFunc[E] = Callable[[E], float]
