class RoutingError(Exception):
    """Base exception for route calculation failures."""


class StationNotFound(RoutingError):
    """Raised when a station name or id resolves to no stops at all."""

    def __init__(self, query: str) -> None:
        super().__init__(f"No such station: {query!r}")
        self.query = query


class MalformedScheduleError(RoutingError):
    """Raised when a schedule row cannot be parsed (e.g. a bad arrival time)."""


class DataSourceError(RoutingError):
    """Raised when a bulk read from the schedule data source fails."""


class IngestionOrderError(RoutingError):
    """Raised when ingestion steps or searches run out of the required order."""


class GraphFrozenError(RoutingError):
    """Raised when ingesting into a graph that was frozen read-only."""
