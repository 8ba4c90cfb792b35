from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Bus:
    """A bus line.

    `stops` is the sequence as listed in the input. A round-trip line already
    closes the loop (first stop repeated at the end); a non-round-trip line
    drives the sequence forward and then back along the same stops.
    """

    name: str
    stops: tuple[str, ...]
    is_roundtrip: bool = False

    @property
    def route_stops(self) -> tuple[str, ...]:
        if self.is_roundtrip or len(self.stops) < 2:
            return self.stops
        return self.stops + tuple(reversed(self.stops[:-1]))


@dataclass(frozen=True, slots=True)
class BusStat:
    name: str
    stop_count: int
    unique_stop_count: int
    route_length: float  # meters, road distances
    curvature: float


@dataclass(frozen=True, slots=True)
class StopStat:
    name: str
    buses: tuple[str, ...] = ()
