from .catalogue_repository import CatalogueSource, ICatalogueRepository
from .snapshot_repository import ISnapshotRepository

__all__ = [
    "CatalogueSource",
    "ICatalogueRepository",
    "ISnapshotRepository",
]
