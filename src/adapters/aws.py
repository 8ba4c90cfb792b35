from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

import boto3
from botocore.client import BaseClient

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
else:
    S3Client = BaseClient  # type: ignore[misc,assignment]

DEFAULT_SNAPSHOT_KEY = "snapshots/transport.snapshot"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


@dataclass(frozen=True, slots=True)
class AwsRuntimeConfig:
    """Where snapshots live in S3 and how boto3 reaches it.

    Env vars:
      - SNAPSHOT_BUCKET / SNAPSHOT_KEY: snapshot object location
      - ENDPOINT_URL: explicit endpoint override (LocalStack)
      - USE_LOCALSTACK + LOCALSTACK_ENDPOINT_URL: LocalStack fallback
      - AWS_REGION: defaults to eu-west-1
    """

    region: str
    endpoint_url: str | None
    use_localstack: bool = False
    snapshot_bucket: str | None = None
    snapshot_key: str = DEFAULT_SNAPSHOT_KEY

    @staticmethod
    def from_env() -> "AwsRuntimeConfig":
        return AwsRuntimeConfig(
            region=os.getenv("AWS_REGION", "eu-west-1"),
            endpoint_url=_env_str("ENDPOINT_URL"),
            use_localstack=_env_bool("USE_LOCALSTACK", False),
            snapshot_bucket=_env_str("SNAPSHOT_BUCKET"),
            snapshot_key=_env_str("SNAPSHOT_KEY") or DEFAULT_SNAPSHOT_KEY,
        )

    @property
    def snapshots_in_s3(self) -> bool:
        return self.snapshot_bucket is not None

    def resolved_endpoint_url(self) -> str | None:
        if self.endpoint_url:
            return self.endpoint_url
        if self.use_localstack:
            return os.getenv("LOCALSTACK_ENDPOINT_URL", "http://localhost:4566")
        return None


def s3_client(cfg: AwsRuntimeConfig | None = None) -> S3Client:
    cfg = cfg or AwsRuntimeConfig.from_env()
    session = boto3.session.Session(region_name=cfg.region)
    return session.client("s3", endpoint_url=cfg.resolved_endpoint_url())
