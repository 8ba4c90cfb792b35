from __future__ import annotations

from pydantic import BaseModel


class BusStatSchema(BaseModel):
    name: str
    stop_count: int
    unique_stop_count: int
    route_length: float
    curvature: float


class StopStatSchema(BaseModel):
    name: str
    buses: list[str] = []
