from __future__ import annotations

from dataclasses import dataclass, field

from .stop import Stop


@dataclass(frozen=True, slots=True)
class PathResult:
    """One computed route between a specific origin and destination stop."""

    path: tuple[str, ...]
    total_time_min: int
    transfers: int = 0
    transfer_points: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Path must contain at least one stop")
        if self.total_time_min < 0:
            raise ValueError(f"Invalid total time: {self.total_time_min}")
        if not (0 <= self.transfers <= len(self.path) - 1):
            raise ValueError(
                f"Invalid transfer count {self.transfers} for a path of "
                f"{len(self.path)} stops"
            )

    @property
    def origin(self) -> str:
        return self.path[0]

    @property
    def destination(self) -> str:
        return self.path[-1]


@dataclass(frozen=True, slots=True)
class StationResolution:
    origin_stop_ids: tuple[str, ...]
    destination_stop_ids: tuple[str, ...]
    stops: tuple[Stop, ...] = ()


@dataclass(frozen=True, slots=True)
class RoutePlan:
    """Ranked paths for one origin/destination query, with station names."""

    origin: str
    destination: str
    origin_stop_ids: tuple[str, ...]
    destination_stop_ids: tuple[str, ...]
    paths: tuple[PathResult, ...] = field(default_factory=tuple)
    station_names: dict[str, str] = field(default_factory=dict)

    def station_name(self, stop_id: str) -> str:
        return self.station_names.get(stop_id, stop_id)
