from __future__ import annotations

import math
from dataclasses import dataclass

VertexId = int
EdgeId = int


@dataclass(frozen=True, slots=True)
class RoutingSettings:
    """Global routing constants.

    wait_time is in minutes, velocity in km/h.
    """

    wait_time: float
    velocity: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.wait_time) or self.wait_time < 0:
            raise ValueError(f"Invalid wait time: {self.wait_time}")
        if not math.isfinite(self.velocity) or self.velocity <= 0:
            raise ValueError(f"Invalid velocity: {self.velocity}")

    def travel_time(self, meters: float) -> float:
        """Minutes needed to ride `meters` at the configured velocity."""

        return meters / (self.velocity * 1000.0 / 60.0)


@dataclass(frozen=True, slots=True)
class Edge:
    from_: VertexId
    to: VertexId
    weight: float


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """Best known cost of a (from, to) pair and the last edge used to reach `to`."""

    weight: float
    prev_edge: EdgeId | None = None


# Dense V x V matrix; None means no path.
RoutesTable = list[list[RouteEntry | None]]


@dataclass(frozen=True, slots=True)
class RoutePath:
    total_weight: float
    edges: tuple[EdgeId, ...] = ()


@dataclass(frozen=True, slots=True)
class EdgeLabel:
    """Presentation data for an edge: which bus, how many stops ridden."""

    bus: str
    span_count: int
