from __future__ import annotations

from src.adapters.persistence.local_gtfs_repository import LocalGtfsScheduleRepository
from src.adapters.settings import RouteFinderSettings
from src.app.services.routing_service import RoutingService


def get_routing_service() -> RoutingService:
    settings = RouteFinderSettings.from_env()

    # A fresh repository per request: every query reads its own snapshot.
    return RoutingService(
        schedule_repository=LocalGtfsScheduleRepository(base_path=settings.gtfs_path),
        max_paths=settings.max_paths,
        strategy=settings.search_strategy,
    )
