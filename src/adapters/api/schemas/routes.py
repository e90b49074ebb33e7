from __future__ import annotations

from pydantic import BaseModel, Field


class RouteRequestSchema(BaseModel):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    max_paths: int | None = Field(default=None, ge=1, le=50)


class StationRefSchema(BaseModel):
    stop_id: str
    name: str


class PathSchema(BaseModel):
    stops: list[StationRefSchema]
    total_time_min: int
    transfers: int
    transfer_points: list[StationRefSchema] = []


class RoutePlanSchema(BaseModel):
    origin: str
    destination: str
    origin_stop_ids: list[str]
    destination_stop_ids: list[str]
    routes: list[PathSchema] = []


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class StopSchema(BaseModel):
    id: str
    name: str
    location: GeoPointSchema | None = None
    location_type: int | None = None
    parent_stop_id: str | None = None


class StationSearchSchema(BaseModel):
    query: str
    stations: list[str] = []
