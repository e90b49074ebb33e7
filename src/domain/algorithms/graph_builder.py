from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from src.domain.algorithms.schedule_time import minutes_between_seconds, parse_schedule_time
from src.domain.exceptions import GraphFrozenError, MalformedScheduleError
from src.domain.models import (
    DirectLine,
    ScheduledStopVisit,
    Stop,
    TransferEdge,
    TransitGraph,
)

logger = logging.getLogger(__name__)

VARIANT_TRANSFER_MIN = 2

_DIRECTION_SUFFIX_RE = re.compile(r"[NS]$")


def base_station_id(stop_id: str) -> str:
    """Strip one trailing direction suffix: "101N" and "101S" both give "101"."""

    return _DIRECTION_SUFFIX_RE.sub("", stop_id)


@dataclass(slots=True)
class GraphBuilder:
    """Turns stop, stop-visit and transfer rows into a TransitGraph.

    Steps must run in order: stops, stop times, transfers. Variant transfers
    are derived from the source stops: every stop-time stop and every
    transfer origin. A stop reached only as a transfer target gets none.
    """

    graph: TransitGraph = field(default_factory=TransitGraph)
    station_names: dict[str, str] = field(default_factory=dict)

    def ingest_stops(self, stops: Iterable[Stop]) -> list[Stop]:
        loaded = list(stops)
        for stop in loaded:
            self.station_names[stop.id] = stop.name

        logger.info("Processed %d stops", len(loaded))
        return loaded

    def ingest_stop_times(self, visits: Iterable[ScheduledStopVisit]) -> None:
        self._ensure_mutable()

        # Parse everything up front so a bad row leaves the graph untouched.
        by_trip: dict[str, list[tuple[int, ScheduledStopVisit]]] = {}
        for visit in visits:
            try:
                arrival_s = parse_schedule_time(visit.arrival_time)
            except MalformedScheduleError as exc:
                raise MalformedScheduleError(
                    f"{exc} (trip {visit.trip_id!r}, stop {visit.stop_id!r}, "
                    f"sequence {visit.stop_sequence})"
                ) from exc
            by_trip.setdefault(visit.trip_id, []).append((arrival_s, visit))

        adjacency = self.graph.adjacency
        for trip_id, entries in by_trip.items():
            # list.sort is stable: equal sequences keep input order.
            entries.sort(key=lambda x: x[1].stop_sequence)

            line = DirectLine(
                trip_id=trip_id, stops=tuple(v.stop_id for _, v in entries)
            )
            for (a_s, a), (b_s, b) in zip(entries, entries[1:]):
                minutes = minutes_between_seconds(a_s, b_s)
                adjacency.add_edge(a.stop_id, b.stop_id)
                line.travel_times_min[(a.stop_id, b.stop_id)] = minutes
                self.graph.travel_times_min[(trip_id, a.stop_id, b.stop_id)] = minutes

            # Terminal stops and single-stop trips still become nodes.
            for _, visit in entries:
                adjacency.add_node(visit.stop_id)

            self.graph.add_line(line)

        logger.info(
            "Processed %d trips with %d stops",
            len(by_trip),
            adjacency.number_of_nodes(),
        )

    def ingest_transfers(self, transfers: Iterable[TransferEdge]) -> None:
        self._ensure_mutable()

        count = 0
        for transfer in transfers:
            self.graph.add_transfer(transfer.from_stop_id, transfer.to_stop_id, transfer.minutes)
            count += 1

        variant_count = self._add_variant_transfers()
        logger.info(
            "Processed %d transfers (%d derived between station variants)",
            count,
            variant_count,
        )

    def _add_variant_transfers(self) -> int:
        variants_by_base: dict[str, list[str]] = {}
        for stop_id in list(self.graph.source_stops):
            variants_by_base.setdefault(base_station_id(stop_id), []).append(stop_id)

        added = 0
        for variants in variants_by_base.values():
            if len(variants) < 2:
                continue
            for from_id in variants:
                for to_id in variants:
                    if from_id == to_id:
                        continue
                    # Overwrites any real transfer time for the same pair.
                    self.graph.add_transfer(from_id, to_id, VARIANT_TRANSFER_MIN)
                    added += 1
        return added

    def _ensure_mutable(self) -> None:
        if self.graph.frozen:
            raise GraphFrozenError("Transit graph is frozen; build a new one per query")
