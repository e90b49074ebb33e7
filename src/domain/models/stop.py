from __future__ import annotations

from dataclasses import dataclass

PARENT_STATION = 1


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")


@dataclass(frozen=True, slots=True)
class Stop:
    """A boarding point (platform) or a parent station.

    `parent_stop_id` is a back-reference only: stops form a forest, the parent
    does not own its children.
    """

    id: str
    name: str
    location: GeoPoint | None = None
    location_type: int | None = None
    parent_stop_id: str | None = None

    @property
    def is_parent_station(self) -> bool:
        return self.location_type == PARENT_STATION
