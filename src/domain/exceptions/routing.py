from __future__ import annotations


class TransportError(Exception):
    """Base exception for the transport domain."""


class UnknownStopError(TransportError):
    """Raised when a stop name is not present in the catalogue."""

    def __init__(self, stop_name: str) -> None:
        super().__init__(f"Unknown stop: {stop_name}")
        self.stop_name = stop_name


class UnknownBusError(TransportError):
    def __init__(self, bus_name: str) -> None:
        super().__init__(f"Unknown bus: {bus_name}")
        self.bus_name = bus_name


class RoutingError(TransportError):
    """Base exception for routing graph / table failures."""


class MissingDistanceError(RoutingError):
    """A bus drives between two adjacent stops with no known road distance."""

    def __init__(
        self, from_stop: str, to_stop: str, bus_name: str | None = None
    ) -> None:
        where = f" on bus {bus_name}" if bus_name else ""
        super().__init__(f"No distance between {from_stop} and {to_stop}{where}")
        self.from_stop = from_stop
        self.to_stop = to_stop
        self.bus_name = bus_name


class CorruptedSnapshotError(RoutingError):
    """Persisted routing state failed an integrity check on load."""
