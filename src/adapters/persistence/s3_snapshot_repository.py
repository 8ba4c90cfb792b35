from __future__ import annotations

import logging
from dataclasses import dataclass

from src.adapters.aws import AwsRuntimeConfig, s3_client
from src.app.ports.output import ISnapshotRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class S3SnapshotRepository(ISnapshotRepository):
    """Routing snapshot stored as one S3 object.

    Bucket and key default to AwsRuntimeConfig (SNAPSHOT_BUCKET, SNAPSHOT_KEY).
    """

    bucket: str | None = None
    key: str | None = None

    def _location(self) -> tuple[AwsRuntimeConfig, str, str]:
        cfg = AwsRuntimeConfig.from_env()
        bucket = self.bucket or cfg.snapshot_bucket
        if not bucket:
            raise RuntimeError("Missing SNAPSHOT_BUCKET")
        return cfg, bucket, self.key or cfg.snapshot_key

    def save(self, payload: bytes) -> None:
        cfg, bucket, key = self._location()
        s3_client(cfg).put_object(Bucket=bucket, Key=key, Body=payload)
        logger.info(
            "Snapshot uploaded",
            extra={"bucket": bucket, "key": key, "bytes": len(payload)},
        )

    def load(self) -> bytes:
        cfg, bucket, key = self._location()
        s3 = s3_client(cfg)
        try:
            obj = s3.get_object(Bucket=bucket, Key=key)
        except s3.exceptions.NoSuchKey as exc:
            raise FileNotFoundError(f"s3://{bucket}/{key}") from exc
        return obj["Body"].read()
