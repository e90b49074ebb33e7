from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from src.domain.models import Stop

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_station_name(name: str) -> str:
    return _WHITESPACE_RE.sub(" ", name.lower()).strip()


@dataclass(slots=True)
class StationResolver:
    """Maps free-text station names (or stop ids) to the stop ids to search.

    Matching is broad: besides the exact normalized name, any
    station whose name contains the query is included, and parents pull in
    all of their child stops.
    """

    stops: tuple[Stop, ...]
    _ids_by_name: dict[str, list[str]] = field(init=False, default_factory=dict)
    _children: dict[str, list[str]] = field(init=False, default_factory=dict)
    _stop_ids: set[str] = field(init=False, default_factory=set)

    def __post_init__(self) -> None:
        for stop in self.stops:
            self._stop_ids.add(stop.id)
            self._ids_by_name.setdefault(normalize_station_name(stop.name), []).append(
                stop.id
            )
            if stop.parent_stop_id:
                self._children.setdefault(stop.parent_stop_id, []).append(stop.id)

    @classmethod
    def from_stops(cls, stops: Iterable[Stop]) -> StationResolver:
        return cls(stops=tuple(stops))

    def resolve(self, name_or_id: str) -> tuple[str, ...]:
        """Ordered, duplicate-free stop ids; empty when nothing matches."""

        result: dict[str, None] = {}

        raw = name_or_id.strip()
        if raw in self._stop_ids:
            self._add_with_children(result, [raw])
            return tuple(result)

        query = normalize_station_name(name_or_id)
        if not query:
            return ()

        exact = self._ids_by_name.get(query)
        if exact is not None:
            self._add_with_children(result, exact)
            for name, ids in self._ids_by_name.items():
                if name != query and query in name:
                    self._add_with_children(result, ids)
        else:
            for name, ids in self._ids_by_name.items():
                if name and (query in name or name in query):
                    self._add_with_children(result, ids)

        return tuple(result)

    def search(self, query: str, *, limit: int = 10) -> list[str]:
        """Distinct station names containing `query`, case-insensitively."""

        needle = query.strip().lower()
        if not needle or limit < 1:
            return []

        names: dict[str, None] = {}
        for stop in self.stops:
            if needle in stop.name.lower():
                names.setdefault(stop.name, None)
                if len(names) >= limit:
                    break
        return list(names)

    def children_of(self, stop_id: str) -> tuple[str, ...]:
        return tuple(self._children.get(stop_id, ()))

    def _add_with_children(self, result: dict[str, None], ids: Iterable[str]) -> None:
        for stop_id in ids:
            result.setdefault(stop_id, None)
            for child_id in self.children_of(stop_id):
                result.setdefault(child_id, None)
