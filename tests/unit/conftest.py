from __future__ import annotations

import pytest

from src.domain.models import (
    Bus,
    GeoPoint,
    RoutingSettings,
    Stop,
    TransportCatalogue,
)


def make_catalogue(
    stops: dict[str, tuple[float, float]],
    distances: dict[tuple[str, str], float],
    buses: list[Bus],
) -> TransportCatalogue:
    catalogue = TransportCatalogue()
    for name, (lat, lon) in stops.items():
        catalogue.add_stop(Stop(name=name, location=GeoPoint(lat=lat, lon=lon)))
    for (a, b), meters in distances.items():
        catalogue.set_distance(a, b, meters)
    for bus in buses:
        catalogue.add_bus(bus)
    return catalogue


@pytest.fixture
def settings() -> RoutingSettings:
    return RoutingSettings(wait_time=5.0, velocity=60.0)


@pytest.fixture
def line_catalogue() -> TransportCatalogue:
    """A -> B -> C on one round-trip bus; 1000 m then 2000 m."""

    return make_catalogue(
        stops={"A": (55.60, 37.20), "B": (55.61, 37.21), "C": (55.62, 37.22)},
        distances={("A", "B"): 1000.0, ("B", "C"): 2000.0},
        buses=[Bus(name="14", stops=("A", "B", "C"), is_roundtrip=True)],
    )


@pytest.fixture
def transfer_catalogue() -> TransportCatalogue:
    """Bus 1 shuttles A-B, bus 2 shuttles B-D, bus 3 shuttles E-F (isolated)."""

    return make_catalogue(
        stops={
            "A": (55.60, 37.20),
            "B": (55.61, 37.21),
            "D": (55.63, 37.23),
            "E": (55.70, 37.30),
            "F": (55.71, 37.31),
        },
        distances={("A", "B"): 1000.0, ("B", "D"): 3000.0, ("E", "F"): 500.0},
        buses=[
            Bus(name="1", stops=("A", "B")),
            Bus(name="2", stops=("B", "D")),
            Bus(name="3", stops=("E", "F")),
        ],
    )


@pytest.fixture
def catalogue_factory():
    return make_catalogue
