from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RouteRequestSchema(BaseModel):
    from_stop: str = Field(..., min_length=1)
    to_stop: str = Field(..., min_length=1)


class RouteItemSchema(BaseModel):
    type: Literal["Wait", "Bus"]
    time: float
    stop_name: str | None = None
    bus: str | None = None
    span_count: int | None = None


class RouteSchema(BaseModel):
    found: bool
    total_time: float | None = None
    items: list[RouteItemSchema] = []
