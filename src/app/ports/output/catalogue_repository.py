from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domain.models import RoutingSettings, TransportCatalogue


@dataclass(frozen=True, slots=True)
class CatalogueSource:
    """A loaded network description: stops/buses/distances plus routing constants."""

    catalogue: TransportCatalogue
    settings: RoutingSettings
    snapshot_path: str | None = None


class ICatalogueRepository(ABC):
    """Port for loading the transit network description."""

    @abstractmethod
    def load_catalogue(self) -> CatalogueSource:
        raise NotImplementedError
