from __future__ import annotations

import httpx
import pytest

from src.adapters.api.dependencies import get_routing_service
from src.app.ports.output import CatalogueSource
from src.app.services.routing_service import RoutingService
from src.main import app


class _MemorySnapshots:
    def __init__(self) -> None:
        self.payload = b""

    def save(self, payload: bytes) -> None:
        self.payload = payload

    def load(self) -> bytes:
        return self.payload


class _StaticCatalogue:
    def __init__(self, source) -> None:
        self.source = source

    def load_catalogue(self):
        return self.source


@pytest.fixture
def routing_service(transfer_catalogue, settings) -> RoutingService:
    service = RoutingService(
        snapshot_repository=_MemorySnapshots(),
        catalogue_repository=_StaticCatalogue(
            CatalogueSource(catalogue=transfer_catalogue, settings=settings)
        ),
    )
    service.make_base()
    return service


@pytest.fixture
def client(routing_service: RoutingService):
    app.dependency_overrides[get_routing_service] = lambda: routing_service
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    yield httpx.AsyncClient(transport=transport, base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_returns_itinerary(client: httpx.AsyncClient) -> None:
    async with client:
        resp = await client.post("/routes", json={"from_stop": "A", "to_stop": "D"})

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["found"] is True
    assert payload["total_time"] == pytest.approx(14.0)
    assert [item["type"] for item in payload["items"]] == ["Wait", "Bus", "Wait", "Bus"]
    assert payload["items"][0] == {"type": "Wait", "stop_name": "A", "time": 5.0}
    assert payload["items"][1]["bus"] == "1"
    assert payload["items"][1]["span_count"] == 1


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_without_connection_reports_not_found(
    client: httpx.AsyncClient,
) -> None:
    async with client:
        resp = await client.post("/routes", json={"from_stop": "A", "to_stop": "E"})

    assert resp.status_code == 200
    assert resp.json() == {"found": False, "items": []}


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_unknown_stop_is_404(client: httpx.AsyncClient) -> None:
    async with client:
        resp = await client.post(
            "/routes", json={"from_stop": "A", "to_stop": "Atlantis"}
        )

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Unknown stop: Atlantis"


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_bus_and_stop_stats(client: httpx.AsyncClient) -> None:
    async with client:
        bus = await client.get("/buses/1")
        stop = await client.get("/stops/B")
        missing = await client.get("/buses/404")

    assert bus.status_code == 200
    assert bus.json()["stop_count"] == 3
    assert bus.json()["route_length"] == 2000.0
    assert stop.json() == {"name": "B", "buses": ["1", "2"]}
    assert missing.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_unexpected_errors_are_json(client: httpx.AsyncClient) -> None:
    class _Broken:
        def find_route(self, *, from_stop: str, to_stop: str):
            raise RuntimeError("Router not loaded")

    app.dependency_overrides[get_routing_service] = lambda: _Broken()
    async with client:
        resp = await client.post("/routes", json={"from_stop": "A", "to_stop": "B"})

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Router not loaded"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_health(client: httpx.AsyncClient) -> None:
    async with client:
        resp = await client.get("/health")

    assert resp.json() == {"status": "ok"}
