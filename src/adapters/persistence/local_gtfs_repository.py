from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterator, TypeVar

from src.app.ports.output import IScheduleRepository
from src.domain.exceptions import DataSourceError
from src.domain.models import GeoPoint, ScheduledStopVisit, Stop, TransferEdge

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _text(row: dict[str, Any], key: str) -> str:
    return (row.get(key) or "").strip()


def _optional_int(raw: str) -> int | None:
    return int(raw) if raw else None


@dataclass(slots=True)
class LocalGtfsScheduleRepository(IScheduleRepository):
    """Reads schedule rows from a directory of GTFS .txt files.

    Env vars:
      - GTFS_PATH: directory containing stops.txt, stop_times.txt, and
        optionally trips.txt and transfers.txt

    Notes:
      - When trips.txt exists, stop times of unknown trips are dropped
        (the rows are joined with their trip).
      - arrival_time is passed through raw; a blank value falls back to
        departure_time and is validated when the graph is built.
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_PATH") or "data/gtfs"
        return Path(value)

    def load_stops(self) -> list[Stop]:
        def parse(row: dict[str, Any]) -> Stop | None:
            stop_id = _text(row, "stop_id")
            if not stop_id:
                return None
            lat = _text(row, "stop_lat")
            lon = _text(row, "stop_lon")
            return Stop(
                id=stop_id,
                name=_text(row, "stop_name") or stop_id,
                location=GeoPoint(lat=float(lat), lon=float(lon)) if lat and lon else None,
                location_type=_optional_int(_text(row, "location_type")),
                parent_stop_id=_text(row, "parent_station") or None,
            )

        return self._read("stops.txt", parse)

    def load_stop_visits(self) -> list[ScheduledStopVisit]:
        def parse(row: dict[str, Any]) -> ScheduledStopVisit | None:
            trip_id = _text(row, "trip_id")
            stop_id = _text(row, "stop_id")
            if not trip_id or not stop_id:
                return None
            return ScheduledStopVisit(
                trip_id=trip_id,
                stop_id=stop_id,
                arrival_time=_text(row, "arrival_time") or _text(row, "departure_time"),
                stop_sequence=int(_text(row, "stop_sequence")),
            )

        visits = self._read("stop_times.txt", parse)

        trip_ids = self._trip_ids()
        if trip_ids is None:
            return visits

        joined = [v for v in visits if v.trip_id in trip_ids]
        if len(joined) != len(visits):
            logger.warning(
                "Dropped %d stop times referencing unknown trips",
                len(visits) - len(joined),
            )
        return joined

    def load_transfers(self) -> list[TransferEdge]:
        def parse(row: dict[str, Any]) -> TransferEdge | None:
            from_id = _text(row, "from_stop_id")
            to_id = _text(row, "to_stop_id")
            if not from_id or not to_id:
                return None
            return TransferEdge(
                from_stop_id=from_id,
                to_stop_id=to_id,
                transfer_type=_optional_int(_text(row, "transfer_type")) or 0,
                min_transfer_time=_optional_int(_text(row, "min_transfer_time")),
            )

        if not (self._base() / "transfers.txt").exists():
            logger.info("transfers.txt not found, no explicit transfers")
            return []
        return self._read("transfers.txt", parse)

    def _trip_ids(self) -> set[str] | None:
        if not (self._base() / "trips.txt").exists():
            return None
        ids = self._read("trips.txt", lambda row: _text(row, "trip_id") or None)
        return set(ids)

    def _read(self, filename: str, parse: Callable[[dict[str, Any]], T | None]) -> list[T]:
        path = self._base() / filename
        out: list[T] = []
        try:
            for line_no, row in self._rows(path):
                try:
                    item = parse(row)
                except (TypeError, ValueError) as exc:
                    raise DataSourceError(f"{path}:{line_no}: {exc}") from exc
                if item is not None:
                    out.append(item)
        except OSError as exc:
            raise DataSourceError(f"Cannot read {path}: {exc}") from exc

        logger.debug("Read %d rows from %s", len(out), path)
        return out

    @staticmethod
    def _rows(path: Path) -> Iterator[tuple[int, dict[str, Any]]]:
        with path.open("r", encoding="utf-8-sig", newline="") as fp:
            reader = csv.DictReader(fp)
            for row in reader:
                yield reader.line_num, row
