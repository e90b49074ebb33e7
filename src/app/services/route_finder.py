from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from src.app.ports.output import IScheduleRepository
from src.domain.algorithms.graph_builder import GraphBuilder
from src.domain.algorithms.path_search import PathSearchEngine, SearchStrategy
from src.domain.algorithms.station_resolver import StationResolver
from src.domain.exceptions import IngestionOrderError
from src.domain.models import PathResult, StationResolution, Stop, TransitGraph

logger = logging.getLogger(__name__)


class RouteFinderState(str, Enum):
    UNINITIALIZED = "uninitialized"
    STOPS_LOADED = "stops_loaded"
    STOP_TIMES_LOADED = "stop_times_loaded"
    TRANSFERS_LOADED = "transfers_loaded"


@dataclass(slots=True)
class RouteFinder:
    """Per-query facade over graph building and path search.

    Ingestion runs stops -> stop times -> transfers; only then is the graph
    searchable. Nothing is cached across queries: build one per query.
    """

    source: IScheduleRepository
    strategy: SearchStrategy = SearchStrategy.FIFO
    builder: GraphBuilder = field(default_factory=GraphBuilder)
    state: RouteFinderState = field(default=RouteFinderState.UNINITIALIZED, init=False)

    @property
    def graph(self) -> TransitGraph:
        return self.builder.graph

    def ingest_stops(self) -> list[Stop]:
        self._require(RouteFinderState.UNINITIALIZED, "ingest stops")
        stops = self.builder.ingest_stops(self.source.load_stops())
        self.state = RouteFinderState.STOPS_LOADED
        return stops

    def ingest_stop_times(self) -> None:
        self._require(RouteFinderState.STOPS_LOADED, "ingest stop times")
        self.builder.ingest_stop_times(self.source.load_stop_visits())
        self.state = RouteFinderState.STOP_TIMES_LOADED

    def ingest_transfers(self) -> None:
        self._require(RouteFinderState.STOP_TIMES_LOADED, "ingest transfers")
        self.builder.ingest_transfers(self.source.load_transfers())
        self.state = RouteFinderState.TRANSFERS_LOADED

    def build(self) -> list[Stop]:
        stops = self.ingest_stops()
        self.ingest_stop_times()
        self.ingest_transfers()
        return stops

    def find_paths(
        self,
        origin_ids: Sequence[str],
        dest_ids: Sequence[str],
        max_paths: int = 5,
    ) -> list[PathResult]:
        self._require(RouteFinderState.TRANSFERS_LOADED, "search")
        engine = PathSearchEngine(graph=self.builder.graph, strategy=self.strategy)
        return engine.find_paths(origin_ids, dest_ids, max_paths)

    def get_station_name(self, stop_id: str) -> str:
        return self.builder.station_names.get(stop_id, stop_id)

    @staticmethod
    def resolve_station_names(
        source: IScheduleRepository, origin_name: str, destination_name: str
    ) -> StationResolution:
        stops = tuple(source.load_stops())
        resolver = StationResolver.from_stops(stops)

        resolution = StationResolution(
            origin_stop_ids=resolver.resolve(origin_name),
            destination_stop_ids=resolver.resolve(destination_name),
            stops=stops,
        )
        logger.info(
            "Resolved %r to %d stops and %r to %d stops",
            origin_name,
            len(resolution.origin_stop_ids),
            destination_name,
            len(resolution.destination_stop_ids),
        )
        return resolution

    def _require(self, expected: RouteFinderState, action: str) -> None:
        if self.state is not expected:
            raise IngestionOrderError(
                f"Cannot {action} in state {self.state.value!r}; "
                f"expected {expected.value!r}"
            )
