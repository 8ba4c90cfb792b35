from __future__ import annotations

from abc import ABC, abstractmethod


class ISnapshotRepository(ABC):
    """Storage port for the encoded routing snapshot (opaque bytes)."""

    @abstractmethod
    def save(self, payload: bytes) -> None:
        """Store the snapshot, replacing any previous one as a whole."""

    @abstractmethod
    def load(self) -> bytes:
        """Return the stored snapshot; raise FileNotFoundError if there is none."""
