from __future__ import annotations

import logging
import os
from functools import lru_cache

from src.adapters.aws import AwsRuntimeConfig
from src.adapters.persistence import (
    JsonCatalogueRepository,
    LocalSnapshotRepository,
    S3SnapshotRepository,
)
from src.app.ports.output import ISnapshotRepository
from src.app.services.routing_service import RoutingService

logger = logging.getLogger(__name__)


def get_snapshot_repository() -> ISnapshotRepository:
    if AwsRuntimeConfig.from_env().snapshots_in_s3:
        return S3SnapshotRepository()
    return LocalSnapshotRepository()


@lru_cache(maxsize=1)
def get_routing_service() -> RoutingService:
    """Process-wide service, restored once from the configured snapshot.

    The routes table is read-only after restore, so concurrent requests can
    share it.
    """

    catalogue_repository = None
    if os.getenv("CATALOGUE_PATH"):
        catalogue_repository = JsonCatalogueRepository()

    service = RoutingService(
        snapshot_repository=get_snapshot_repository(),
        catalogue_repository=catalogue_repository,
    )
    try:
        service.restore()
    except FileNotFoundError:
        if catalogue_repository is None:
            raise
        logger.warning("No snapshot found, building from catalogue")
        service.make_base()
    return service
