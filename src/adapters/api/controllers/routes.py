from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.adapters.api.dependencies import get_routing_service
from src.adapters.api.schemas.routes import (
    PathSchema,
    RoutePlanSchema,
    RouteRequestSchema,
    StationRefSchema,
)
from src.app.services.routing_service import RoutingService
from src.domain.exceptions import StationNotFound
from src.domain.models import RoutePlan

router = APIRouter(tags=["routes"])


def _plan_to_schema(plan: RoutePlan) -> RoutePlanSchema:
    def ref(stop_id: str) -> StationRefSchema:
        return StationRefSchema(stop_id=stop_id, name=plan.station_name(stop_id))

    return RoutePlanSchema(
        origin=plan.origin,
        destination=plan.destination,
        origin_stop_ids=list(plan.origin_stop_ids),
        destination_stop_ids=list(plan.destination_stop_ids),
        routes=[
            PathSchema(
                stops=[ref(s) for s in path.path],
                total_time_min=path.total_time_min,
                transfers=path.transfers,
                transfer_points=[ref(s) for s in path.transfer_points],
            )
            for path in plan.paths
        ],
    )


@router.post("/routes", response_model=RoutePlanSchema)
async def find_routes(
    req: RouteRequestSchema,
    service: RoutingService = Depends(get_routing_service),
) -> RoutePlanSchema:
    try:
        plan = await service.find_routes(
            origin=req.origin,
            destination=req.destination,
            max_paths=req.max_paths,
        )
    except StationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _plan_to_schema(plan)
