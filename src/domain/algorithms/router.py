from __future__ import annotations

import logging

from src.domain.exceptions import CorruptedSnapshotError, RoutingError
from src.domain.models import RouteEntry, RoutePath, RoutesTable, VertexId

from .graph import Graph

logger = logging.getLogger(__name__)


class Router:
    """All-pairs shortest paths over an immutable Graph.

    The dense routes table is computed once (Floyd-Warshall, O(V^3)) or
    restored from persisted state; queries only read it. The diagonal of
    the table is always empty: a self-route costs nothing and carries no
    edges.
    """

    __slots__ = ("_graph", "_routes")

    def __init__(self, graph: Graph, routes: RoutesTable) -> None:
        self._graph = graph
        self._routes = routes

    @classmethod
    def build(cls, graph: Graph) -> "Router":
        routes = compute_routes_table(graph)
        logger.info(
            "Routes table computed",
            extra={"vertex_count": graph.vertex_count, "edge_count": graph.edge_count},
        )
        return cls(graph, routes)

    @classmethod
    def restore(cls, graph: Graph, routes: RoutesTable) -> "Router":
        """Adopt a precomputed table after checking it against `graph`."""

        validate_routes_table(graph, routes)
        return cls(graph, routes)

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def routes(self) -> RoutesTable:
        return self._routes

    def entry(self, from_: VertexId, to: VertexId) -> RouteEntry | None:
        return self._routes[from_][to]

    def find_route(self, from_: VertexId, to: VertexId) -> RoutePath | None:
        """Cheapest path from `from_` to `to`, or None when `to` is unreachable."""

        if from_ == to:
            return RoutePath(total_weight=0.0, edges=())

        entry = self._routes[from_][to]
        if entry is None:
            return None

        edges: list[int] = []
        current = to
        # Each step strictly shortens the remaining chain; a longer walk means
        # the table is inconsistent with the graph.
        for _ in range(self._graph.edge_count + 1):
            if current == from_:
                break
            step = self._routes[from_][current]
            if step is None or step.prev_edge is None:
                raise RoutingError(f"Broken route chain {from_} -> {to} at {current}")
            edges.append(step.prev_edge)
            current = self._graph.get_edge(step.prev_edge).from_
        else:
            raise RoutingError(f"Route chain {from_} -> {to} does not terminate")

        edges.reverse()
        return RoutePath(total_weight=entry.weight, edges=tuple(edges))


def compute_routes_table(graph: Graph) -> RoutesTable:
    n = graph.vertex_count
    routes: RoutesTable = [[None] * n for _ in range(n)]

    for edge_id, edge in graph.edges():
        if edge.from_ == edge.to:
            continue
        current = routes[edge.from_][edge.to]
        if current is None or edge.weight < current.weight:
            routes[edge.from_][edge.to] = RouteEntry(
                weight=edge.weight, prev_edge=edge_id
            )

    for k in range(n):
        row_k = routes[k]
        for i in range(n):
            if i == k:
                continue
            row_i = routes[i]
            ik = row_i[k]
            if ik is None:
                continue
            for j, kj in enumerate(row_k):
                if kj is None or j == i:
                    continue
                weight = ik.weight + kj.weight
                ij = row_i[j]
                if ij is None or weight < ij.weight:
                    row_i[j] = RouteEntry(weight=weight, prev_edge=kj.prev_edge)

    return routes


def validate_routes_table(graph: Graph, routes: RoutesTable) -> None:
    """Raise CorruptedSnapshotError unless `routes` is a plausible table for `graph`."""

    n = graph.vertex_count
    if len(routes) != n:
        raise CorruptedSnapshotError(
            f"Routes table has {len(routes)} rows, graph has {n} vertices"
        )

    for i, row in enumerate(routes):
        if len(row) != n:
            raise CorruptedSnapshotError(
                f"Routes row {i} has {len(row)} cells, expected {n}"
            )
        for j, entry in enumerate(row):
            if entry is None:
                continue
            if i == j:
                raise CorruptedSnapshotError(f"Diagonal cell {i} must be empty")
            if not entry.weight >= 0:
                raise CorruptedSnapshotError(
                    f"Invalid weight {entry.weight} at ({i}, {j})"
                )
            if entry.prev_edge is None:
                raise CorruptedSnapshotError(f"Missing prev edge at ({i}, {j})")
            if not 0 <= entry.prev_edge < graph.edge_count:
                raise CorruptedSnapshotError(
                    f"Edge {entry.prev_edge} out of range at ({i}, {j})"
                )
            if graph.get_edge(entry.prev_edge).to != j:
                raise CorruptedSnapshotError(
                    f"Edge {entry.prev_edge} does not end at vertex {j}"
                )
