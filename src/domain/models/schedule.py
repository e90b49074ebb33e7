from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TRANSFER_MIN = 5


@dataclass(frozen=True, slots=True)
class ScheduledStopVisit:
    """One stop_times row joined with its trip.

    `arrival_time` stays the raw GTFS string ("H:M[:S]", hours may exceed 23);
    it is parsed and validated when the graph is built.
    """

    trip_id: str
    stop_id: str
    arrival_time: str
    stop_sequence: int


@dataclass(frozen=True, slots=True)
class TransferEdge:
    from_stop_id: str
    to_stop_id: str
    transfer_type: int = 0
    min_transfer_time: int | None = None  # seconds

    def __post_init__(self) -> None:
        if self.min_transfer_time is not None and self.min_transfer_time < 0:
            raise ValueError(
                f"Negative min_transfer_time for transfer "
                f"{self.from_stop_id} -> {self.to_stop_id}: {self.min_transfer_time}"
            )

    @property
    def minutes(self) -> int:
        if self.min_transfer_time is None:
            return DEFAULT_TRANSFER_MIN
        # Half-up, so 150s is 3 minutes rather than banker's 2.
        return int(self.min_transfer_time / 60 + 0.5)
