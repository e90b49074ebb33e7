from .local_gtfs_repository import LocalGtfsScheduleRepository

__all__ = [
    "LocalGtfsScheduleRepository",
]
