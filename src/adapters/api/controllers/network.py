from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_routing_service
from src.adapters.api.schemas.network import BusStatSchema, StopStatSchema
from src.app.services.routing_service import RoutingService

router = APIRouter(tags=["network"])


@router.get("/buses/{name}", response_model=BusStatSchema)
def get_bus(
    name: str,
    service: RoutingService = Depends(get_routing_service),
) -> BusStatSchema:
    stat = service.bus_stat(name)
    return BusStatSchema(
        name=stat.name,
        stop_count=stat.stop_count,
        unique_stop_count=stat.unique_stop_count,
        route_length=stat.route_length,
        curvature=stat.curvature,
    )


@router.get("/stops/{name}", response_model=StopStatSchema)
def get_stop(
    name: str,
    service: RoutingService = Depends(get_routing_service),
) -> StopStatSchema:
    stat = service.stop_stat(name)
    return StopStatSchema(name=stat.name, buses=list(stat.buses))
