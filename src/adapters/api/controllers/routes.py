from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_routing_service
from src.adapters.api.schemas.routes import (
    RouteItemSchema,
    RouteRequestSchema,
    RouteSchema,
)
from src.app.services.routing_service import RoutingService
from src.domain.models import BusItem, Itinerary

router = APIRouter(tags=["routes"])


def _itinerary_to_schema(itinerary: Itinerary | None) -> RouteSchema:
    if itinerary is None:
        return RouteSchema(found=False)

    items: list[RouteItemSchema] = []
    for item in itinerary.items:
        if isinstance(item, BusItem):
            items.append(
                RouteItemSchema(
                    type="Bus",
                    bus=item.bus,
                    span_count=item.span_count,
                    time=item.time,
                )
            )
        else:
            items.append(
                RouteItemSchema(type="Wait", stop_name=item.stop_name, time=item.time)
            )

    return RouteSchema(found=True, total_time=itinerary.total_time, items=items)


@router.post("/routes", response_model=RouteSchema, response_model_exclude_none=True)
def find_route(
    req: RouteRequestSchema,
    service: RoutingService = Depends(get_routing_service),
) -> RouteSchema:
    itinerary = service.find_route(from_stop=req.from_stop, to_stop=req.to_stop)
    return _itinerary_to_schema(itinerary)
