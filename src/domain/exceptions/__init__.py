from .routing import (
    CorruptedSnapshotError,
    MissingDistanceError,
    RoutingError,
    TransportError,
    UnknownBusError,
    UnknownStopError,
)

__all__ = [
    "CorruptedSnapshotError",
    "MissingDistanceError",
    "RoutingError",
    "TransportError",
    "UnknownBusError",
    "UnknownStopError",
]
