"""Binary snapshot format for the routing state.

One snapshot holds the catalogue, the routing settings, the graph and the
precomputed routes table, so a process can start serving queries without
recomputing shortest paths. All integers and floats are little-endian.

Layout::

    b"TRSN" u16 version
    catalogue   u32 stops    {str name, f64 lat, f64 lon}
                u32 dists    {u32 from, u32 to, f64 meters}
                u32 buses    {str name, u8 roundtrip, u32 n, n x u32 stop}
    settings    f64 wait_time, f64 velocity
    graph       u32 vertex_count, u32 edge_count {u32 from, u32 to, f64 weight}
    routes      u32 rows {u32 cells {u8 present [f64 weight, u8 has_prev [u32 edge]]}}

Strings are u32 byte length followed by UTF-8. Stop references are indexes
into the stop list. Edges are stored in edge id order; decoding re-adds them
in the same order, which is what keeps edge ids stable.
"""

from __future__ import annotations

import io
import logging
import struct
from dataclasses import dataclass

from src.domain.algorithms.graph import Graph
from src.domain.exceptions import CorruptedSnapshotError
from src.domain.models import (
    Bus,
    Edge,
    GeoPoint,
    RouteEntry,
    RoutesTable,
    RoutingSettings,
    Stop,
    TransportCatalogue,
)

logger = logging.getLogger(__name__)

MAGIC = b"TRSN"
VERSION = 1

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_F64 = struct.Struct("<d")
_EDGE = struct.Struct("<IId")
_DISTANCE = struct.Struct("<IId")
_POINT = struct.Struct("<dd")


@dataclass(frozen=True, slots=True)
class RoutingSnapshot:
    catalogue: TransportCatalogue
    settings: RoutingSettings
    graph: Graph
    routes: RoutesTable


class _Writer:
    __slots__ = ("_buf",)

    def __init__(self) -> None:
        self._buf = io.BytesIO()

    def pack(self, fmt: struct.Struct, *values) -> None:
        self._buf.write(fmt.pack(*values))

    def raw(self, value: bytes) -> None:
        self._buf.write(value)

    def string(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.pack(_U32, len(raw))
        self._buf.write(raw)

    def getvalue(self) -> bytes:
        return self._buf.getvalue()


class _Reader:
    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    def unpack(self, fmt: struct.Struct) -> tuple:
        end = self._pos + fmt.size
        if end > len(self._data):
            raise CorruptedSnapshotError(
                f"Truncated snapshot: need {fmt.size} bytes at offset {self._pos}"
            )
        values = fmt.unpack_from(self._data, self._pos)
        self._pos = end
        return values

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def u8(self) -> int:
        return self.unpack(_U8)[0]

    def u32(self) -> int:
        return self.unpack(_U32)[0]

    def f64(self) -> float:
        return self.unpack(_F64)[0]

    def flag(self) -> bool:
        value = self.u8()
        if value not in (0, 1):
            raise CorruptedSnapshotError(
                f"Invalid presence marker {value} at offset {self._pos - 1}"
            )
        return value == 1

    def raw(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise CorruptedSnapshotError(f"Truncated snapshot at offset {self._pos}")
        value = bytes(self._data[self._pos : end])
        self._pos = end
        return value

    def string(self) -> str:
        raw = self.raw(self.u32())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptedSnapshotError(f"Invalid UTF-8 string: {exc}") from exc

    def expect_end(self) -> None:
        if self._pos != len(self._data):
            raise CorruptedSnapshotError(
                f"{len(self._data) - self._pos} trailing bytes after snapshot"
            )


# Graph


def _write_graph(w: _Writer, graph: Graph) -> None:
    w.pack(_U32, graph.vertex_count)
    w.pack(_U32, graph.edge_count)
    for _, edge in graph.edges():
        w.pack(_EDGE, edge.from_, edge.to, edge.weight)


def _read_graph(r: _Reader, expected_vertices: int | None = None) -> Graph:
    vertex_count = r.u32()
    if expected_vertices is not None and vertex_count != expected_vertices:
        raise CorruptedSnapshotError(
            f"Graph has {vertex_count} vertices, "
            f"catalogue has {expected_vertices} stops"
        )
    edge_count = r.u32()
    if edge_count * _EDGE.size > r.remaining:
        raise CorruptedSnapshotError(f"Truncated snapshot: {edge_count} edges declared")
    graph = Graph(vertex_count)
    for edge_id in range(edge_count):
        from_, to, weight = r.unpack(_EDGE)
        try:
            graph.add_edge(Edge(from_=from_, to=to, weight=weight))
        except ValueError as exc:
            raise CorruptedSnapshotError(f"Invalid edge {edge_id}: {exc}") from exc
    return graph


def encode_graph(graph: Graph) -> bytes:
    w = _Writer()
    _write_graph(w, graph)
    return w.getvalue()


def decode_graph(data: bytes) -> Graph:
    r = _Reader(data)
    graph = _read_graph(r)
    r.expect_end()
    return graph


# Routes table


def _write_routes(w: _Writer, routes: RoutesTable) -> None:
    w.pack(_U32, len(routes))
    for row in routes:
        w.pack(_U32, len(row))
        for entry in row:
            if entry is None:
                w.pack(_U8, 0)
                continue
            w.pack(_U8, 1)
            w.pack(_F64, entry.weight)
            if entry.prev_edge is None:
                w.pack(_U8, 0)
            else:
                w.pack(_U8, 1)
                w.pack(_U32, entry.prev_edge)


def _read_routes(r: _Reader) -> RoutesTable:
    routes: RoutesTable = []
    for _ in range(r.u32()):
        row: list[RouteEntry | None] = []
        for _ in range(r.u32()):
            if not r.flag():
                row.append(None)
                continue
            weight = r.f64()
            prev_edge = r.u32() if r.flag() else None
            row.append(RouteEntry(weight=weight, prev_edge=prev_edge))
        routes.append(row)
    return routes


def encode_routes(routes: RoutesTable) -> bytes:
    w = _Writer()
    _write_routes(w, routes)
    return w.getvalue()


def decode_routes(data: bytes) -> RoutesTable:
    r = _Reader(data)
    routes = _read_routes(r)
    r.expect_end()
    return routes


# Catalogue and settings


def _write_catalogue(w: _Writer, catalogue: TransportCatalogue) -> None:
    stops = catalogue.stops
    index = {stop.name: i for i, stop in enumerate(stops)}

    w.pack(_U32, len(stops))
    for stop in stops:
        w.string(stop.name)
        w.pack(_POINT, stop.location.lat, stop.location.lon)

    distances = list(catalogue.iter_distances())
    w.pack(_U32, len(distances))
    for from_stop, to_stop, meters in distances:
        w.pack(_DISTANCE, index[from_stop], index[to_stop], meters)

    buses = catalogue.buses
    w.pack(_U32, len(buses))
    for bus in buses:
        w.string(bus.name)
        w.pack(_U8, 1 if bus.is_roundtrip else 0)
        w.pack(_U32, len(bus.stops))
        for name in bus.stops:
            w.pack(_U32, index[name])


def _read_catalogue(r: _Reader) -> TransportCatalogue:
    catalogue = TransportCatalogue()
    names: list[str] = []

    for _ in range(r.u32()):
        name = r.string()
        lat, lon = r.unpack(_POINT)
        try:
            location = GeoPoint(lat=lat, lon=lon)
        except ValueError as exc:
            raise CorruptedSnapshotError(f"Stop {name}: {exc}") from exc
        catalogue.add_stop(Stop(name=name, location=location))
        names.append(name)

    def stop_name(index: int) -> str:
        if index >= len(names):
            raise CorruptedSnapshotError(f"Stop index {index} out of range")
        return names[index]

    for _ in range(r.u32()):
        from_index, to_index, meters = r.unpack(_DISTANCE)
        if not meters >= 0:
            raise CorruptedSnapshotError(f"Invalid distance {meters}")
        catalogue.set_distance(stop_name(from_index), stop_name(to_index), meters)

    for _ in range(r.u32()):
        name = r.string()
        is_roundtrip = r.flag()
        stops = tuple(stop_name(r.u32()) for _ in range(r.u32()))
        catalogue.add_bus(Bus(name=name, stops=stops, is_roundtrip=is_roundtrip))

    return catalogue


def _read_settings(r: _Reader) -> RoutingSettings:
    wait_time = r.f64()
    velocity = r.f64()
    try:
        return RoutingSettings(wait_time=wait_time, velocity=velocity)
    except ValueError as exc:
        raise CorruptedSnapshotError(str(exc)) from exc


# Whole snapshot


def encode_snapshot(snapshot: RoutingSnapshot) -> bytes:
    w = _Writer()
    w.raw(MAGIC)
    w.pack(_U16, VERSION)
    _write_catalogue(w, snapshot.catalogue)
    w.pack(_F64, snapshot.settings.wait_time)
    w.pack(_F64, snapshot.settings.velocity)
    _write_graph(w, snapshot.graph)
    _write_routes(w, snapshot.routes)

    payload = w.getvalue()
    logger.info(
        "Snapshot encoded",
        extra={
            "bytes": len(payload),
            "vertex_count": snapshot.graph.vertex_count,
            "edge_count": snapshot.graph.edge_count,
        },
    )
    return payload


def decode_snapshot(data: bytes) -> RoutingSnapshot:
    """Decode a snapshot; structural problems raise CorruptedSnapshotError.

    This only checks the format. Consistency between graph, table and
    catalogue is checked when the router is restored from the snapshot.
    """

    r = _Reader(data)
    if r.raw(len(MAGIC)) != MAGIC:
        raise CorruptedSnapshotError("Not a routing snapshot (bad magic)")
    (version,) = r.unpack(_U16)
    if version != VERSION:
        raise CorruptedSnapshotError(f"Unsupported snapshot version {version}")

    catalogue = _read_catalogue(r)
    settings = _read_settings(r)
    graph = _read_graph(r, expected_vertices=len(catalogue.stops))
    routes = _read_routes(r)
    r.expect_end()

    return RoutingSnapshot(
        catalogue=catalogue, settings=settings, graph=graph, routes=routes
    )
