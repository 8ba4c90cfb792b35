from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Stop coordinates in degrees. Only bus statistics use them."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "GeoPoint":
        """Read `latitude`/`longitude` keys as used by catalogue documents."""

        return cls(lat=float(raw["latitude"]), lon=float(raw["longitude"]))
