from __future__ import annotations

from src.cli import build_parser, format_plan
from src.domain.models import PathResult, RoutePlan


def _plan(*paths: PathResult) -> RoutePlan:
    return RoutePlan(
        origin="Alpha",
        destination="Gamma",
        origin_stop_ids=("A",),
        destination_stop_ids=("C",),
        paths=paths,
        station_names={"A": "Alpha", "B": "Beta", "C": "Gamma"},
    )


def test_format_plan_lists_each_route() -> None:
    text = format_plan(
        _plan(
            PathResult(path=("A", "C"), total_time_min=6),
            PathResult(path=("A", "B", "C"), total_time_min=8, transfers=1, transfer_points=("B",)),
        )
    )

    assert text.startswith("Found 2 routes from Alpha to Gamma:")
    assert "==== ROUTE 1 ====" in text
    assert "Stops (2): A → C" in text
    assert "Transfer Points: None (direct route)" in text
    assert "==== ROUTE 2 ====" in text
    assert "Total Travel Time: 8 minutes" in text
    assert "Number of Transfers: 1" in text
    assert "  B (Beta)" in text


def test_format_plan_without_routes() -> None:
    assert format_plan(_plan()) == "No routes found between Alpha and Gamma"


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.origin == "68 St-Hunter College"
    assert args.destination == "Cathedral Pkwy (110 St)"
    assert args.max_paths == 3
    assert args.strategy is None
