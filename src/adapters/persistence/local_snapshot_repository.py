from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import ISnapshotRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocalSnapshotRepository(ISnapshotRepository):
    """Stores the routing snapshot as a single file.

    Env vars:
      - SNAPSHOT_PATH (default: data/transport.snapshot)
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("SNAPSHOT_PATH") or "data/transport.snapshot"
        return Path(value)

    def save(self, payload: bytes) -> None:
        path = self._path()
        path.parent.mkdir(parents=True, exist_ok=True)

        # Readers never see a half-written snapshot.
        tmp = path.with_suffix(path.suffix + ".tmp")
        with open(tmp, "wb") as fp:
            fp.write(payload)
        os.replace(tmp, path)
        logger.info("Snapshot saved", extra={"path": str(path), "bytes": len(payload)})

    def load(self) -> bytes:
        path = self._path()
        with open(path, "rb") as fp:
            return fp.read()
