from .json_catalogue_repository import JsonCatalogueRepository
from .local_snapshot_repository import LocalSnapshotRepository
from .s3_snapshot_repository import S3SnapshotRepository

__all__ = [
    "JsonCatalogueRepository",
    "LocalSnapshotRepository",
    "S3SnapshotRepository",
]
