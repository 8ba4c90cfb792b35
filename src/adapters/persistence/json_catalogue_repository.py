from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from src.app.ports.output import CatalogueSource, ICatalogueRepository
from src.domain.models import (
    Bus,
    GeoPoint,
    RoutingSettings,
    Stop,
    TransportCatalogue,
)


def parse_catalogue_document(document: Mapping[str, Any]) -> CatalogueSource:
    """Build a catalogue from a `base_requests` document.

    Stops go in first, in document order (this fixes the vertex ids), then
    road distances, then buses.
    """

    requests = list(document.get("base_requests") or [])
    stop_requests = [r for r in requests if r.get("type") == "Stop"]
    bus_requests = [r for r in requests if r.get("type") == "Bus"]

    catalogue = TransportCatalogue()
    for req in stop_requests:
        catalogue.add_stop(
            Stop(
                name=str(req["name"]),
                location=GeoPoint.from_mapping(req),
            )
        )

    for req in stop_requests:
        for to_stop, meters in (req.get("road_distances") or {}).items():
            catalogue.set_distance(str(req["name"]), str(to_stop), float(meters))

    for req in bus_requests:
        catalogue.add_bus(
            Bus(
                name=str(req["name"]),
                stops=tuple(str(s) for s in req.get("stops") or ()),
                is_roundtrip=bool(req.get("is_roundtrip", False)),
            )
        )

    raw_settings = document.get("routing_settings")
    if not raw_settings:
        raise ValueError("Catalogue document has no routing_settings")
    settings = RoutingSettings(
        wait_time=float(raw_settings["bus_wait_time"]),
        velocity=float(raw_settings["bus_velocity"]),
    )

    snapshot_path = (document.get("serialization_settings") or {}).get("file")

    return CatalogueSource(
        catalogue=catalogue,
        settings=settings,
        snapshot_path=str(snapshot_path) if snapshot_path else None,
    )


@dataclass(slots=True)
class JsonCatalogueRepository(ICatalogueRepository):
    """Loads the transit network from a JSON document.

    Env vars:
      - CATALOGUE_PATH: path to the JSON file (default: data/catalogue.json)
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("CATALOGUE_PATH") or "data/catalogue.json"
        return Path(value)

    def load_catalogue(self) -> CatalogueSource:
        with self._path().open("r", encoding="utf-8") as fp:
            document = json.load(fp)
        return parse_catalogue_document(document)
