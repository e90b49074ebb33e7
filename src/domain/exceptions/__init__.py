from .routing import (
    DataSourceError,
    GraphFrozenError,
    IngestionOrderError,
    MalformedScheduleError,
    RoutingError,
    StationNotFound,
)

__all__ = [
    "DataSourceError",
    "GraphFrozenError",
    "IngestionOrderError",
    "MalformedScheduleError",
    "RoutingError",
    "StationNotFound",
]
