from __future__ import annotations

import math
from typing import Iterator

from src.domain.models import Edge, EdgeId, VertexId


class Graph:
    """Append-only directed weighted graph.

    The vertex count is fixed at construction. Edge ids are assigned
    sequentially from 0 in insertion order and never reused, so anything
    keyed by EdgeId (labels, the routes table) stays valid for the life of
    the graph.
    """

    __slots__ = ("_vertex_count", "_edges", "_incidence")

    def __init__(self, vertex_count: int) -> None:
        if vertex_count < 0:
            raise ValueError(f"Invalid vertex count: {vertex_count}")
        self._vertex_count = vertex_count
        self._edges: list[Edge] = []
        self._incidence: list[list[EdgeId]] = [[] for _ in range(vertex_count)]

    def add_edge(self, edge: Edge) -> EdgeId:
        for vertex in (edge.from_, edge.to):
            if not 0 <= vertex < self._vertex_count:
                raise ValueError(f"Vertex {vertex} out of range")
        if math.isnan(edge.weight) or edge.weight < 0:
            raise ValueError(f"Invalid edge weight: {edge.weight}")

        edge_id = len(self._edges)
        self._edges.append(edge)
        self._incidence[edge.from_].append(edge_id)
        return edge_id

    def get_edge(self, edge_id: EdgeId) -> Edge:
        return self._edges[edge_id]

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def edges(self) -> Iterator[tuple[EdgeId, Edge]]:
        return enumerate(self._edges)

    def edges_from(self, vertex: VertexId) -> Iterator[tuple[EdgeId, Edge]]:
        """Outgoing edges of `vertex` in insertion order."""

        return ((edge_id, self._edges[edge_id]) for edge_id in self._incidence[vertex])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            self._vertex_count == other._vertex_count and self._edges == other._edges
        )

    def __repr__(self) -> str:
        return (
            f"Graph(vertex_count={self._vertex_count}, "
            f"edge_count={len(self._edges)})"
        )
