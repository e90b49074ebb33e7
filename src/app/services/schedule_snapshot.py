from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Sequence

from src.app.ports.output import IScheduleRepository
from src.domain.exceptions import DataSourceError
from src.domain.models import ScheduledStopVisit, Stop, TransferEdge


@dataclass(frozen=True, slots=True)
class ScheduleSnapshot(IScheduleRepository):
    """Read-only, in-memory copy of the schedule rows for one query."""

    stops: tuple[Stop, ...] = ()
    stop_visits: tuple[ScheduledStopVisit, ...] = ()
    transfers: tuple[TransferEdge, ...] = ()

    def load_stops(self) -> Sequence[Stop]:
        return self.stops

    def load_stop_visits(self) -> Sequence[ScheduledStopVisit]:
        return self.stop_visits

    def load_transfers(self) -> Sequence[TransferEdge]:
        return self.transfers

    @classmethod
    async def load(cls, repository: IScheduleRepository) -> ScheduleSnapshot:
        """Issue the three bulk reads concurrently; all must succeed."""

        try:
            stops, visits, transfers = await asyncio.gather(
                asyncio.to_thread(repository.load_stops),
                asyncio.to_thread(repository.load_stop_visits),
                asyncio.to_thread(repository.load_transfers),
            )
        except DataSourceError:
            raise
        except Exception as exc:
            raise DataSourceError(f"Failed to load schedule data: {exc}") from exc

        return cls(stops=tuple(stops), stop_visits=tuple(visits), transfers=tuple(transfers))
