from __future__ import annotations

import heapq
import itertools
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from src.domain.models import PathResult, TransitGraph

logger = logging.getLogger(__name__)

DEFAULT_LINE_STEP_MIN = 3
PRUNE_FACTOR = 1.5


class SearchStrategy(str, Enum):
    FIFO = "fifo"
    DIJKSTRA = "dijkstra"


@dataclass(frozen=True, slots=True)
class _Candidate:
    stop: str
    path: tuple[str, ...]
    time_min: int
    transfers: int
    transfer_points: tuple[str, ...]
    last_trip: str | None

    def to_result(self) -> PathResult:
        return PathResult(
            path=self.path,
            total_time_min=self.time_min,
            transfers=self.transfers,
            transfer_points=self.transfer_points,
        )


@dataclass(slots=True)
class PathSearchEngine:
    """Per-pair path search over a built TransitGraph.

    The default FIFO strategy reproduces a breadth-first search with a
    visited-once rule and a relative 1.5x pruning bound. It is order-sensitive
    and can miss the cheapest path. DIJKSTRA orders the frontier by
    accumulated time instead; it changes results, so it is opt-in.
    """

    graph: TransitGraph
    strategy: SearchStrategy = SearchStrategy.FIFO

    def find_paths(
        self,
        origin_ids: Sequence[str],
        dest_ids: Sequence[str],
        max_paths: int = 5,
    ) -> list[PathResult]:
        logger.info(
            "Finding paths between %d origins and %d destinations",
            len(origin_ids),
            len(dest_ids),
        )
        if max_paths < 1:
            return []

        results: list[PathResult] = []
        for origin_id in origin_ids:
            for dest_id in dest_ids:
                if origin_id == dest_id:
                    continue

                result = self.find_shortest_path(origin_id, dest_id)
                if result is not None:
                    results.append(result)

                # Which pairs get explored depends on iteration order only.
                if len(results) >= max_paths:
                    break
            if len(results) >= max_paths:
                break

        results.sort(key=lambda r: r.total_time_min)
        return results[:max_paths]

    def find_shortest_path(self, start: str, end: str) -> PathResult | None:
        logger.debug("Finding path from %s to %s", start, end)

        if not self.graph.has_stop(start):
            logger.debug("Start stop %s not found in connections", start)
            return None

        if self.strategy is SearchStrategy.DIJKSTRA:
            return self._dijkstra(start, end)
        return self._fifo(start, end)

    def _fifo(self, start: str, end: str) -> PathResult | None:
        queue: deque[_Candidate] = deque([_initial(start)])
        visited: set[str] = set()
        best: PathResult | None = None

        while queue:
            current = queue.popleft()

            if best is not None and current.time_min > best.total_time_min * PRUNE_FACTOR:
                continue

            if current.stop == end:
                best = current.to_result()
                continue

            if current.stop in visited:
                continue
            visited.add(current.stop)

            queue.extend(self._expand(current))

        return best

    def _dijkstra(self, start: str, end: str) -> PathResult | None:
        counter = itertools.count()
        heap: list[tuple[int, int, _Candidate]] = [(0, next(counter), _initial(start))]
        visited: set[str] = set()

        while heap:
            _, _, current = heapq.heappop(heap)

            if current.stop == end:
                return current.to_result()

            if current.stop in visited:
                continue
            visited.add(current.stop)

            for nxt in self._expand(current):
                if nxt.stop in visited:
                    continue
                heapq.heappush(heap, (nxt.time_min, next(counter), nxt))

        return None

    def _expand(self, current: _Candidate) -> list[_Candidate]:
        out: list[_Candidate] = []
        for next_stop in self.graph.neighbors(current.stop):
            if next_stop in current.path:
                continue

            step = self._classify_step(current.stop, next_stop)
            if step is None:
                continue
            trip_id, minutes = step

            # A trip change after a defined trip is a transfer; the first
            # step of a path never is.
            changes_trip = current.last_trip is not None and trip_id != current.last_trip

            out.append(
                _Candidate(
                    stop=next_stop,
                    path=current.path + (next_stop,),
                    time_min=current.time_min + minutes,
                    transfers=current.transfers + (1 if changes_trip else 0),
                    transfer_points=(
                        current.transfer_points + (current.stop,)
                        if changes_trip
                        else current.transfer_points
                    ),
                    last_trip=trip_id,
                )
            )
        return out

    def _classify_step(self, stop: str, next_stop: str) -> tuple[str | None, int] | None:
        """(trip_id, minutes) for a line step, (None, minutes) for a transfer.

        Returns None when the edge is neither on a line nor a known transfer.
        """

        line = self.graph.line_for_step(stop, next_stop)
        if line is not None:
            minutes = line.travel_time(stop, next_stop)
            return line.trip_id, DEFAULT_LINE_STEP_MIN if minutes is None else minutes

        minutes = self.graph.transfer_time(stop, next_stop)
        if minutes is None:
            return None
        return None, minutes


def _initial(start: str) -> _Candidate:
    return _Candidate(
        stop=start,
        path=(start,),
        time_min=0,
        transfers=0,
        transfer_points=(),
        last_trip=None,
    )
