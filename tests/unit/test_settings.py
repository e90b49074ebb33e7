from __future__ import annotations

import pytest

from src.adapters.settings import RouteFinderSettings, env_bool
from src.domain.algorithms.path_search import SearchStrategy

_VARS = ("GTFS_PATH", "MAX_PATHS", "SEARCH_STRATEGY", "ROUTEFINDER_REVEAL_ERRORS")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = RouteFinderSettings.from_env()

    assert settings.gtfs_path == "data/gtfs"
    assert settings.max_paths == 5
    assert settings.search_strategy is SearchStrategy.FIFO
    assert settings.reveal_errors is False


def test_values_are_read_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GTFS_PATH", " /srv/gtfs ")
    monkeypatch.setenv("MAX_PATHS", "2")
    monkeypatch.setenv("SEARCH_STRATEGY", "Dijkstra")
    monkeypatch.setenv("ROUTEFINDER_REVEAL_ERRORS", "yes")

    settings = RouteFinderSettings.from_env()

    assert settings.gtfs_path == "/srv/gtfs"
    assert settings.max_paths == 2
    assert settings.search_strategy is SearchStrategy.DIJKSTRA
    assert settings.reveal_errors is True


@pytest.mark.parametrize(
    ("name", "value"),
    [("MAX_PATHS", "many"), ("MAX_PATHS", "0"), ("SEARCH_STRATEGY", "astar")],
)
def test_invalid_values_are_rejected(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        RouteFinderSettings.from_env()


def test_env_bool(monkeypatch: pytest.MonkeyPatch) -> None:
    assert env_bool("ROUTEFINDER_REVEAL_ERRORS", True) is True
    monkeypatch.setenv("ROUTEFINDER_REVEAL_ERRORS", "off")
    assert env_bool("ROUTEFINDER_REVEAL_ERRORS", True) is False
