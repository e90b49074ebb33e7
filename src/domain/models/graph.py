from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx


@dataclass(slots=True)
class DirectLine:
    """Ordered stops of one scheduled trip with per-segment travel times."""

    trip_id: str
    stops: tuple[str, ...]
    travel_times_min: dict[tuple[str, str], int] = field(default_factory=dict)

    def are_adjacent(self, a: str, b: str) -> bool:
        # First occurrence of each stop, like a plain list.index lookup.
        try:
            return abs(self.stops.index(a) - self.stops.index(b)) == 1
        except ValueError:
            return False

    def travel_time(self, a: str, b: str) -> int | None:
        forward = self.travel_times_min.get((a, b))
        if forward is not None:
            return forward
        return self.travel_times_min.get((b, a))


@dataclass(slots=True)
class TransitGraph:
    """In-memory routing graph owned by a single query.

    - adjacency: directed stop graph; successors keep insertion order
    - direct_lines: one DirectLine per trip, in order of first appearance
    - travel_times_min: (trip_id, stop_a, stop_b) -> minutes
    - transfer_minutes: from_stop_id -> {to_stop_id: minutes}
    - source_stops: stops with outgoing adjacency (every stop-time stop and
      every transfer origin), in insertion order; transfer-only targets are
      nodes of `adjacency` but not sources
    """

    adjacency: nx.DiGraph = field(default_factory=nx.DiGraph)
    direct_lines: list[DirectLine] = field(default_factory=list)
    travel_times_min: dict[tuple[str, str, str], int] = field(default_factory=dict)
    transfer_minutes: dict[str, dict[str, int]] = field(default_factory=dict)
    lines_by_stop: dict[str, list[DirectLine]] = field(default_factory=dict)
    source_stops: dict[str, None] = field(default_factory=dict)
    frozen: bool = False

    def has_stop(self, stop_id: str) -> bool:
        return stop_id in self.source_stops

    def neighbors(self, stop_id: str) -> list[str]:
        if stop_id not in self.adjacency:
            return []
        return list(self.adjacency.successors(stop_id))

    def add_line(self, line: DirectLine) -> None:
        self.direct_lines.append(line)
        for stop_id in dict.fromkeys(line.stops):
            self.source_stops.setdefault(stop_id, None)
            self.lines_by_stop.setdefault(stop_id, []).append(line)

    def line_for_step(self, a: str, b: str) -> DirectLine | None:
        """First line (in trip order) on which a and b are neighbours."""

        for line in self.lines_by_stop.get(a, ()):
            if line.are_adjacent(a, b):
                return line
        return None

    def add_transfer(self, from_id: str, to_id: str, minutes: int) -> None:
        self.transfer_minutes.setdefault(from_id, {})[to_id] = minutes
        self.adjacency.add_edge(from_id, to_id)
        self.source_stops.setdefault(from_id, None)

    def transfer_time(self, a: str, b: str) -> int | None:
        return self.transfer_minutes.get(a, {}).get(b)

    @property
    def line_membership(self) -> dict[str, tuple[str, ...]]:
        return {line.trip_id: line.stops for line in self.direct_lines}

    def freeze(self) -> TransitGraph:
        """Mark the graph read-only so it can be shared between searches."""

        nx.freeze(self.adjacency)
        self.frozen = True
        return self
