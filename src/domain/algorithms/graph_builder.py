from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.domain.exceptions import MissingDistanceError
from src.domain.models import (
    Bus,
    Edge,
    EdgeId,
    EdgeLabel,
    RoutingSettings,
    TransportCatalogue,
    VertexId,
)

from .graph import Graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransitGraph:
    """Graph built from a catalogue plus the lookups needed to read it back."""

    graph: Graph
    vertex_by_stop: dict[str, VertexId]
    stop_by_vertex: tuple[str, ...]
    labels: tuple[EdgeLabel, ...] = field(default_factory=tuple)

    def label(self, edge_id: EdgeId) -> EdgeLabel:
        return self.labels[edge_id]


def build_transit_graph(
    catalogue: TransportCatalogue, settings: RoutingSettings
) -> TransitGraph:
    """Turn the catalogue into a graph where one edge is one uninterrupted ride.

    Vertices are stops in catalogue insertion order. For every bus and every
    direction it drives, each pair of stops (i, j), i < j, becomes an edge
    weighing the boarding wait plus the riding time from i to j. Edges are
    added bus by bus in catalogue order, so replaying the build on the same
    catalogue reproduces the same edge ids.
    """

    stop_by_vertex = tuple(stop.name for stop in catalogue.stops)
    vertex_by_stop = {name: vertex for vertex, name in enumerate(stop_by_vertex)}

    graph = Graph(len(stop_by_vertex))
    labels: list[EdgeLabel] = []

    for bus in catalogue.buses:
        for direction in _directions(bus):
            _add_ride_edges(
                graph, labels, catalogue, settings, bus, direction, vertex_by_stop
            )

    logger.info(
        "Transit graph built",
        extra={
            "vertex_count": graph.vertex_count,
            "edge_count": graph.edge_count,
            "bus_count": len(catalogue.buses),
        },
    )

    return TransitGraph(
        graph=graph,
        vertex_by_stop=vertex_by_stop,
        stop_by_vertex=stop_by_vertex,
        labels=tuple(labels),
    )


def _directions(bus: Bus) -> tuple[tuple[str, ...], ...]:
    if bus.is_roundtrip:
        return (bus.stops,)
    return (bus.stops, tuple(reversed(bus.stops)))


def _add_ride_edges(
    graph: Graph,
    labels: list[EdgeLabel],
    catalogue: TransportCatalogue,
    settings: RoutingSettings,
    bus: Bus,
    stops: tuple[str, ...],
    vertex_by_stop: dict[str, VertexId],
) -> None:
    # Every segment distance must be known before any edge of the line is added.
    segment_times: list[float] = []
    for a, b in zip(stops, stops[1:]):
        meters = catalogue.get_distance(a, b)
        if meters is None:
            raise MissingDistanceError(a, b, bus.name)
        segment_times.append(settings.travel_time(meters))

    for i in range(len(stops)):
        ride_time = 0.0
        for j in range(i + 1, len(stops)):
            ride_time += segment_times[j - 1]
            graph.add_edge(
                Edge(
                    from_=vertex_by_stop[stops[i]],
                    to=vertex_by_stop[stops[j]],
                    weight=settings.wait_time + ride_time,
                )
            )
            labels.append(EdgeLabel(bus=bus.name, span_count=j - i))
