from __future__ import annotations

from uuid import uuid4

import pytest

from src.adapters.persistence.s3_snapshot_repository import S3SnapshotRepository
from src.app.services.routing_service import RoutingService
from src.app.services.transport_router import TransportRouter
from src.domain.models import (
    Bus,
    GeoPoint,
    RoutingSettings,
    Stop,
    TransportCatalogue,
)
from src.domain.serialization.snapshot_codec import RoutingSnapshot, encode_snapshot


def _router() -> TransportRouter:
    catalogue = TransportCatalogue()
    for name, lon in (("A", 0.0), ("B", 0.01), ("C", 0.02)):
        catalogue.add_stop(Stop(name=name, location=GeoPoint(lat=0.0, lon=lon)))
    catalogue.set_distance("A", "B", 1000.0)
    catalogue.set_distance("B", "C", 2000.0)
    catalogue.add_bus(Bus(name="14", stops=("A", "B", "C"), is_roundtrip=True))
    return TransportRouter.build(
        catalogue, RoutingSettings(wait_time=5.0, velocity=60.0)
    )


@pytest.mark.integration
def test_s3_snapshot_repository_round_trip(snapshot_bucket: str) -> None:
    repo = S3SnapshotRepository(
        bucket=snapshot_bucket, key=f"snapshots/{uuid4()}.snapshot"
    )
    router = _router()
    payload = encode_snapshot(
        RoutingSnapshot(
            catalogue=router.catalogue,
            settings=router.settings,
            graph=router.graph,
            routes=router.routes,
        )
    )

    repo.save(payload)
    assert repo.load() == payload

    service = RoutingService(snapshot_repository=repo)
    service.restore()
    itinerary = service.find_route(from_stop="A", to_stop="C")
    assert itinerary is not None
    assert itinerary.total_time == pytest.approx(8.0)


@pytest.mark.integration
def test_s3_snapshot_repository_missing_key_raises(snapshot_bucket: str) -> None:
    repo = S3SnapshotRepository(
        bucket=snapshot_bucket, key=f"missing/{uuid4()}.snapshot"
    )

    with pytest.raises(FileNotFoundError):
        repo.load()
