"""Command-line entry point: find transit routes between two stations."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from src.adapters.persistence.local_gtfs_repository import LocalGtfsScheduleRepository
from src.adapters.settings import RouteFinderSettings
from src.app.services.routing_service import RoutingService
from src.domain.algorithms.path_search import SearchStrategy
from src.domain.exceptions import RoutingError, StationNotFound
from src.domain.models import RoutePlan


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def format_plan(plan: RoutePlan) -> str:
    if not plan.paths:
        return f"No routes found between {plan.origin} and {plan.destination}"

    lines = [
        f"Found {len(plan.paths)} routes from {plan.origin} to {plan.destination}:"
    ]
    for i, path in enumerate(plan.paths, start=1):
        lines.append("")
        lines.append(f"==== ROUTE {i} ====")
        lines.append(f"Stops ({len(path.path)}): {' → '.join(path.path)}")
        lines.append(f"Total Travel Time: {path.total_time_min} minutes")
        lines.append(f"Number of Transfers: {path.transfers}")
        if path.transfer_points:
            lines.append("Transfer Points:")
            for stop_id in path.transfer_points:
                lines.append(f"  {stop_id} ({plan.station_name(stop_id)})")
        else:
            lines.append("Transfer Points: None (direct route)")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transit-routes",
        description="Find transit routes between two stations of a GTFS feed",
    )
    parser.add_argument("origin", nargs="?", default="68 St-Hunter College")
    parser.add_argument("destination", nargs="?", default="Cathedral Pkwy (110 St)")
    parser.add_argument("max_paths", nargs="?", type=int, default=3)
    parser.add_argument("--gtfs", default=None, help="GTFS directory (default: $GTFS_PATH)")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in SearchStrategy],
        default=None,
        help="Search strategy (default: $SEARCH_STRATEGY or fifo)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = RouteFinderSettings.from_env()
        service = RoutingService(
            schedule_repository=LocalGtfsScheduleRepository(
                base_path=args.gtfs or settings.gtfs_path
            ),
            max_paths=settings.max_paths,
            strategy=SearchStrategy(args.strategy) if args.strategy else settings.search_strategy,
        )
        plan = asyncio.run(
            service.find_routes(
                origin=args.origin,
                destination=args.destination,
                max_paths=args.max_paths,
            )
        )
    except StationNotFound as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (RoutingError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        logging.exception("Route finding failed")
        return 1

    print(format_plan(plan))
    return 0


if __name__ == "__main__":
    sys.exit(main())
