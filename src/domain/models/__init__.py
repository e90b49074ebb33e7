from .graph import DirectLine, TransitGraph
from .route import PathResult, RoutePlan, StationResolution
from .schedule import ScheduledStopVisit, TransferEdge
from .stop import GeoPoint, Stop

__all__ = [
    "DirectLine",
    "GeoPoint",
    "PathResult",
    "RoutePlan",
    "ScheduledStopVisit",
    "StationResolution",
    "Stop",
    "TransferEdge",
    "TransitGraph",
]
