from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from src.domain.models import ScheduledStopVisit, Stop, TransferEdge


class IScheduleRepository(ABC):
    """Read-only port for the schedule rows a query is built from.

    The three reads are independent of each other and may run concurrently.
    Implementations raise DataSourceError when a read fails.
    """

    @abstractmethod
    def load_stops(self) -> Sequence[Stop]:
        raise NotImplementedError

    @abstractmethod
    def load_stop_visits(self) -> Sequence[ScheduledStopVisit]:
        """Stop times joined with their trips."""

    @abstractmethod
    def load_transfers(self) -> Sequence[TransferEdge]:
        raise NotImplementedError
