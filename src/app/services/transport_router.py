from __future__ import annotations

import logging
from dataclasses import dataclass

from src.domain.algorithms.graph import Graph
from src.domain.algorithms.graph_builder import TransitGraph, build_transit_graph
from src.domain.algorithms.router import Router
from src.domain.exceptions import CorruptedSnapshotError, UnknownStopError
from src.domain.models import (
    BusItem,
    Itinerary,
    RoutesTable,
    RoutingSettings,
    TransportCatalogue,
    WaitItem,
)
from src.domain.models.bus import BusStat, StopStat

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransportRouter:
    """Answers stop-to-stop itinerary queries over a frozen network.

    Owns everything a query needs: the catalogue (stop names), the transit
    graph with its edge labels and the precomputed router.
    """

    catalogue: TransportCatalogue
    settings: RoutingSettings
    transit: TransitGraph
    router: Router

    @classmethod
    def build(
        cls, catalogue: TransportCatalogue, settings: RoutingSettings
    ) -> "TransportRouter":
        transit = build_transit_graph(catalogue, settings)
        return cls(
            catalogue=catalogue,
            settings=settings,
            transit=transit,
            router=Router.build(transit.graph),
        )

    @classmethod
    def restore(
        cls,
        catalogue: TransportCatalogue,
        settings: RoutingSettings,
        graph: Graph,
        routes: RoutesTable,
    ) -> "TransportRouter":
        """Rebuild from persisted state without recomputing the routes table.

        The edge labels are not persisted; they are recovered by replaying the
        graph build on the restored catalogue, which must reproduce the
        persisted graph exactly.
        """

        transit = build_transit_graph(catalogue, settings)
        if transit.graph != graph:
            raise CorruptedSnapshotError(
                "Persisted graph does not match the graph built from the persisted "
                f"catalogue ({graph!r} vs {transit.graph!r})"
            )
        return cls(
            catalogue=catalogue,
            settings=settings,
            transit=transit,
            router=Router.restore(transit.graph, routes),
        )

    @property
    def graph(self) -> Graph:
        return self.transit.graph

    @property
    def routes(self) -> RoutesTable:
        return self.router.routes

    def find_route(self, from_stop: str, to_stop: str) -> Itinerary | None:
        """Fastest itinerary between two stops; None when they are not connected.

        Raises UnknownStopError if either stop is not in the catalogue.
        """

        from_vertex = self._vertex(from_stop)
        to_vertex = self._vertex(to_stop)

        path = self.router.find_route(from_vertex, to_vertex)
        if path is None:
            logger.debug(
                "No route", extra={"from_stop": from_stop, "to_stop": to_stop}
            )
            return None

        items: list[WaitItem | BusItem] = []
        for edge_id in path.edges:
            edge = self.transit.graph.get_edge(edge_id)
            label = self.transit.label(edge_id)
            items.append(
                WaitItem(
                    stop_name=self.transit.stop_by_vertex[edge.from_],
                    time=self.settings.wait_time,
                )
            )
            items.append(
                BusItem(
                    bus=label.bus,
                    span_count=label.span_count,
                    time=edge.weight - self.settings.wait_time,
                )
            )

        logger.debug(
            "Route found",
            extra={
                "from_stop": from_stop,
                "to_stop": to_stop,
                "total_time": path.total_weight,
                "rides": len(path.edges),
            },
        )
        return Itinerary(total_time=path.total_weight, items=tuple(items))

    def bus_stat(self, name: str) -> BusStat | None:
        return self.catalogue.bus_stat(name)

    def stop_stat(self, name: str) -> StopStat | None:
        return self.catalogue.stop_stat(name)

    def _vertex(self, stop_name: str) -> int:
        try:
            return self.transit.vertex_by_stop[stop_name]
        except KeyError:
            raise UnknownStopError(stop_name) from None
