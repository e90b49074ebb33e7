from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from src.app.ports.output import IScheduleRepository
from src.domain.algorithms.path_search import SearchStrategy
from src.domain.algorithms.station_resolver import StationResolver
from src.domain.exceptions import DataSourceError, StationNotFound
from src.domain.models import RoutePlan, Stop

from .route_finder import RouteFinder
from .schedule_snapshot import ScheduleSnapshot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoutingService:
    """Application service (use case) for transit route finding.

    Every query loads a fresh snapshot and builds its own graph.
    """

    schedule_repository: IScheduleRepository
    max_paths: int = 5
    strategy: SearchStrategy = SearchStrategy.FIFO

    async def find_routes(
        self, *, origin: str, destination: str, max_paths: int | None = None
    ) -> RoutePlan:
        limit = self.max_paths if max_paths is None else max_paths
        logger.info("Finding routes from %r to %r", origin, destination)

        snapshot = await ScheduleSnapshot.load(self.schedule_repository)

        # Building and searching are CPU-bound and run in a worker thread.
        return await asyncio.to_thread(self._plan, snapshot, origin, destination, limit)

    def _plan(
        self, snapshot: ScheduleSnapshot, origin: str, destination: str, limit: int
    ) -> RoutePlan:
        stations = RouteFinder.resolve_station_names(snapshot, origin, destination)
        if not stations.origin_stop_ids:
            raise StationNotFound(origin)
        if not stations.destination_stop_ids:
            raise StationNotFound(destination)

        finder = RouteFinder(source=snapshot, strategy=self.strategy)
        finder.build()
        paths = finder.find_paths(
            stations.origin_stop_ids, stations.destination_stop_ids, limit
        )

        if paths:
            logger.info("Found %d routes from %r to %r", len(paths), origin, destination)
        else:
            logger.info("No routes found between %r and %r", origin, destination)

        names: dict[str, str] = {}
        for path in paths:
            for stop_id in path.path:
                names[stop_id] = finder.get_station_name(stop_id)

        return RoutePlan(
            origin=origin,
            destination=destination,
            origin_stop_ids=stations.origin_stop_ids,
            destination_stop_ids=stations.destination_stop_ids,
            paths=tuple(paths),
            station_names=names,
        )

    async def search_stations(self, *, query: str, limit: int = 10) -> list[str]:
        stops = await self._load_stops()
        resolver = StationResolver.from_stops(stops)
        return await asyncio.to_thread(resolver.search, query, limit=limit)

    async def get_station(self, *, stop_id: str) -> Stop | None:
        stops = await self._load_stops()
        return next((s for s in stops if s.id == stop_id), None)

    async def _load_stops(self) -> tuple[Stop, ...]:
        try:
            return tuple(await asyncio.to_thread(self.schedule_repository.load_stops))
        except DataSourceError:
            raise
        except Exception as exc:
            raise DataSourceError(f"Failed to load stops: {exc}") from exc
