from __future__ import annotations

import logging
from dataclasses import dataclass

from src.app.ports.output import ICatalogueRepository, ISnapshotRepository
from src.domain.exceptions import UnknownBusError, UnknownStopError
from src.domain.models import Itinerary, RoutingSettings, TransportCatalogue
from src.domain.models.bus import BusStat, StopStat
from src.domain.serialization.snapshot_codec import (
    RoutingSnapshot,
    decode_snapshot,
    encode_snapshot,
)

from .transport_router import TransportRouter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoutingService:
    """Application service (use case) for building, persisting and querying routes.

    This layer orchestrates ports. Domain stays pure.
    """

    snapshot_repository: ISnapshotRepository
    catalogue_repository: ICatalogueRepository | None = None

    _router: TransportRouter | None = None

    def build(
        self, catalogue: TransportCatalogue, settings: RoutingSettings
    ) -> TransportRouter:
        """Build an in-memory router without touching the snapshot store."""

        self._router = TransportRouter.build(catalogue, settings)
        return self._router

    def make_base(self) -> TransportRouter:
        """Build the router from the catalogue and persist it as a snapshot."""

        if self.catalogue_repository is None:
            raise RuntimeError("Catalogue repository not configured")

        source = self.catalogue_repository.load_catalogue()
        router = TransportRouter.build(source.catalogue, source.settings)
        self.snapshot_repository.save(
            encode_snapshot(
                RoutingSnapshot(
                    catalogue=router.catalogue,
                    settings=router.settings,
                    graph=router.graph,
                    routes=router.routes,
                )
            )
        )
        self._router = router
        return router

    def restore(self) -> TransportRouter:
        """Load the persisted snapshot; the live router changes only on success."""

        snapshot = decode_snapshot(self.snapshot_repository.load())
        router = TransportRouter.restore(
            snapshot.catalogue, snapshot.settings, snapshot.graph, snapshot.routes
        )
        self._router = router
        logger.info(
            "Router restored",
            extra={
                "vertex_count": router.graph.vertex_count,
                "edge_count": router.graph.edge_count,
            },
        )
        return router

    @property
    def router(self) -> TransportRouter:
        if self._router is None:
            raise RuntimeError("Router not loaded")
        return self._router

    def find_route(self, *, from_stop: str, to_stop: str) -> Itinerary | None:
        return self.router.find_route(from_stop, to_stop)

    def bus_stat(self, name: str) -> BusStat:
        stat = self.router.bus_stat(name)
        if stat is None:
            raise UnknownBusError(name)
        return stat

    def stop_stat(self, name: str) -> StopStat:
        stat = self.router.stop_stat(name)
        if stat is None:
            raise UnknownStopError(name)
        return stat
