from __future__ import annotations

import os
from dataclasses import dataclass

from src.domain.algorithms.path_search import SearchStrategy


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class RouteFinderSettings:
    gtfs_path: str
    max_paths: int
    search_strategy: SearchStrategy
    reveal_errors: bool

    @staticmethod
    def from_env() -> "RouteFinderSettings":
        max_paths = _env_int("MAX_PATHS", 5)
        if max_paths < 1:
            raise ValueError(f"MAX_PATHS must be at least 1, got {max_paths}")

        strategy_raw = (os.getenv("SEARCH_STRATEGY") or "fifo").strip().lower()
        try:
            strategy = SearchStrategy(strategy_raw)
        except ValueError as exc:
            choices = ", ".join(s.value for s in SearchStrategy)
            raise ValueError(
                f"SEARCH_STRATEGY must be one of {choices}, got {strategy_raw!r}"
            ) from exc

        return RouteFinderSettings(
            gtfs_path=(os.getenv("GTFS_PATH") or "data/gtfs").strip(),
            max_paths=max_paths,
            search_strategy=strategy,
            reveal_errors=env_bool("ROUTEFINDER_REVEAL_ERRORS", False),
        )
