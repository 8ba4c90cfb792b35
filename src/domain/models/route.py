from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ItemType(str, Enum):
    WAIT = "Wait"
    BUS = "Bus"


@dataclass(frozen=True, slots=True)
class WaitItem:
    stop_name: str
    time: float

    @property
    def type(self) -> ItemType:
        return ItemType.WAIT


@dataclass(frozen=True, slots=True)
class BusItem:
    bus: str
    span_count: int
    time: float

    @property
    def type(self) -> ItemType:
        return ItemType.BUS


@dataclass(frozen=True, slots=True)
class Itinerary:
    total_time: float
    items: tuple[WaitItem | BusItem, ...] = field(default_factory=tuple)

    @property
    def ride_count(self) -> int:
        return sum(1 for item in self.items if isinstance(item, BusItem))
