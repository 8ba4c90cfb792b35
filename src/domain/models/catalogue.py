from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from src.domain.algorithms import geo_utils
from src.domain.exceptions import UnknownStopError

from .bus import Bus, BusStat, StopStat
from .stop import Stop


@dataclass(slots=True)
class TransportCatalogue:
    """In-memory store of stops, bus lines and road distances.

    Everything is kept in insertion order: the order in which stops were
    added is the order in which they become graph vertices.
    """

    _stops: dict[str, Stop] = field(default_factory=dict)
    _buses: dict[str, Bus] = field(default_factory=dict)
    _distances: dict[tuple[str, str], float] = field(default_factory=dict)
    _buses_by_stop: dict[str, set[str]] = field(default_factory=dict)

    def add_stop(self, stop: Stop) -> None:
        self._stops[stop.name] = stop
        self._buses_by_stop.setdefault(stop.name, set())

    def add_bus(self, bus: Bus) -> None:
        for name in bus.stops:
            if name not in self._stops:
                raise UnknownStopError(name)
        self._buses[bus.name] = bus
        for name in bus.stops:
            self._buses_by_stop[name].add(bus.name)

    def set_distance(self, from_stop: str, to_stop: str, meters: float) -> None:
        for name in (from_stop, to_stop):
            if name not in self._stops:
                raise UnknownStopError(name)
        if meters < 0:
            raise ValueError(f"Negative distance {from_stop} -> {to_stop}: {meters}")
        self._distances[(from_stop, to_stop)] = float(meters)

    def get_distance(self, from_stop: str, to_stop: str) -> float | None:
        """Road distance in meters; falls back to the reverse direction."""

        distance = self._distances.get((from_stop, to_stop))
        if distance is None:
            distance = self._distances.get((to_stop, from_stop))
        return distance

    def find_stop(self, name: str) -> Stop | None:
        return self._stops.get(name)

    def find_bus(self, name: str) -> Bus | None:
        return self._buses.get(name)

    @property
    def stops(self) -> tuple[Stop, ...]:
        return tuple(self._stops.values())

    @property
    def buses(self) -> tuple[Bus, ...]:
        return tuple(self._buses.values())

    def iter_distances(self) -> Iterator[tuple[str, str, float]]:
        for (from_stop, to_stop), meters in self._distances.items():
            yield from_stop, to_stop, meters

    def bus_stat(self, name: str) -> BusStat | None:
        bus = self._buses.get(name)
        if bus is None:
            return None

        route = bus.route_stops
        road_length = float(
            sum(self.get_distance(a, b) or 0.0 for a, b in zip(route, route[1:]))
        )
        geo_length = geo_utils.polyline_length_m(
            [self._stops[n].location for n in route]
        )

        return BusStat(
            name=bus.name,
            stop_count=len(route),
            unique_stop_count=len(set(route)),
            route_length=road_length,
            curvature=road_length / geo_length if geo_length > 0 else 0.0,
        )

    def stop_stat(self, name: str) -> StopStat | None:
        if name not in self._stops:
            return None
        return StopStat(name=name, buses=tuple(sorted(self._buses_by_stop[name])))
