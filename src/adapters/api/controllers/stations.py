from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_routing_service
from src.adapters.api.schemas.routes import GeoPointSchema, StationSearchSchema, StopSchema
from src.app.services.routing_service import RoutingService

router = APIRouter(prefix="/stations", tags=["stations"])


@router.get("/search", response_model=StationSearchSchema)
async def search_stations(
    q: str = Query(..., min_length=1),
    service: RoutingService = Depends(get_routing_service),
) -> StationSearchSchema:
    names = await service.search_stations(query=q, limit=10)
    return StationSearchSchema(query=q, stations=names)


@router.get("/{stop_id}", response_model=StopSchema)
async def get_station(
    stop_id: str,
    service: RoutingService = Depends(get_routing_service),
) -> StopSchema:
    stop = await service.get_station(stop_id=stop_id)
    if stop is None:
        raise HTTPException(status_code=404, detail="Station not found")
    return StopSchema(
        id=stop.id,
        name=stop.name,
        location=(
            GeoPointSchema(lat=stop.location.lat, lon=stop.location.lon)
            if stop.location
            else None
        ),
        location_type=stop.location_type,
        parent_stop_id=stop.parent_stop_id,
    )
