from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

STOPS = """\
stop_id,stop_name,stop_lat,stop_lon,location_type,parent_station
101,Harbor,40.70,-74.01,1,
101N,Harbor,40.70,-74.01,0,101
102,Central,40.75,-73.99,1,
102N,Central,40.75,-73.99,0,102
102S,Central,40.75,-73.99,0,102
103S,Uptown,,,0,
104,Depot,40.80,-73.95,,
"""

STOP_TIMES = """\
trip_id,arrival_time,departure_time,stop_id,stop_sequence
red_1,08:00:00,08:00:00,101N,1
red_1,08:06:00,08:06:30,102N,2
blue_1,,08:10:00,102S,1
blue_1,08:18:00,08:18:00,103S,2
ghost,09:00:00,09:00:00,104,1
ghost,09:05:00,09:05:00,101N,2
"""

TRIPS = """\
route_id,service_id,trip_id
RED,WKD,red_1
BLUE,WKD,blue_1
"""

TRANSFERS = """\
from_stop_id,to_stop_id,transfer_type,min_transfer_time
103S,104,2,240
104,103S,,
"""


FeedWriter = Callable[..., Path]


@pytest.fixture()
def write_feed(tmp_path: Path) -> FeedWriter:
    """Writes `<name>.txt` files into a fresh directory.

    Passing None for a file leaves it out; stops and stop_times default to
    the sample feed.
    """

    counter = iter(range(1_000))

    def _write(**files: str | None) -> Path:
        base = tmp_path / f"feed{next(counter)}"
        base.mkdir(parents=True)
        contents = {"stops": STOPS, "stop_times": STOP_TIMES, **files}
        for name, content in contents.items():
            if content is not None:
                (base / f"{name}.txt").write_text(content, encoding="utf-8")
        return base

    return _write


@pytest.fixture()
def gtfs_dir(write_feed: FeedWriter) -> Path:
    """A small two-line feed; the "ghost" trip is absent from trips.txt."""

    return write_feed(trips=TRIPS, transfers=TRANSFERS)
