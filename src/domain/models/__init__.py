from .bus import Bus, BusStat, StopStat
from .geo import GeoPoint
from .route import BusItem, ItemType, Itinerary, WaitItem
from .routing import (
    Edge,
    EdgeId,
    EdgeLabel,
    RouteEntry,
    RoutePath,
    RoutesTable,
    RoutingSettings,
    VertexId,
)
from .stop import Stop
from .catalogue import TransportCatalogue

__all__ = [
    "Bus",
    "BusItem",
    "BusStat",
    "Edge",
    "EdgeId",
    "EdgeLabel",
    "GeoPoint",
    "ItemType",
    "Itinerary",
    "RouteEntry",
    "RoutePath",
    "RoutesTable",
    "RoutingSettings",
    "Stop",
    "StopStat",
    "TransportCatalogue",
    "VertexId",
    "WaitItem",
]
