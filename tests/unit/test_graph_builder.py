from __future__ import annotations

import pytest

from src.domain.algorithms.graph_builder import GraphBuilder, base_station_id
from src.domain.exceptions import GraphFrozenError, MalformedScheduleError
from src.domain.models import ScheduledStopVisit, Stop, TransferEdge


def _visits(trip_id: str, *stops: tuple[str, str]) -> list[ScheduledStopVisit]:
    return [
        ScheduledStopVisit(trip_id=trip_id, stop_id=s, arrival_time=t, stop_sequence=i)
        for i, (s, t) in enumerate(stops, start=1)
    ]


def test_ingest_stops_builds_name_index() -> None:
    builder = GraphBuilder()
    stops = [Stop(id="A", name="Alpha"), Stop(id="B", name="Beta")]

    loaded = builder.ingest_stops(stops)

    assert loaded == stops
    assert builder.station_names == {"A": "Alpha", "B": "Beta"}
    assert builder.graph.adjacency.number_of_nodes() == 0


def test_stop_times_build_direct_lines_and_travel_times() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(
        _visits("T1", ("S1", "08:00:00"), ("S2", "08:05:00"), ("S3", "08:12:00"))
    )

    graph = builder.graph
    assert list(graph.adjacency.edges) == [("S1", "S2"), ("S2", "S3")]
    assert graph.line_membership == {"T1": ("S1", "S2", "S3")}
    assert graph.direct_lines[0].travel_times_min == {("S1", "S2"): 5, ("S2", "S3"): 7}
    assert graph.travel_times_min[("T1", "S2", "S3")] == 7
    # The terminal stop is a node even without outgoing edges.
    assert graph.has_stop("S3")
    assert graph.neighbors("S3") == []


def test_stop_times_are_sorted_by_sequence_with_stable_ties() -> None:
    visits = [
        ScheduledStopVisit("T1", "C", "08:10:00", 3),
        ScheduledStopVisit("T1", "A", "08:00:00", 1),
        ScheduledStopVisit("T1", "B1", "08:05:00", 2),
        ScheduledStopVisit("T1", "B2", "08:06:00", 2),
    ]
    builder = GraphBuilder()
    builder.ingest_stop_times(visits)

    assert builder.graph.line_membership["T1"] == ("A", "B1", "B2", "C")


def test_travel_time_wraps_past_midnight() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(_visits("night", ("X", "23:58:00"), ("Y", "00:02:00")))

    assert builder.graph.travel_times_min[("night", "X", "Y")] == 4


def test_malformed_arrival_time_aborts_without_partial_graph() -> None:
    visits = _visits("T1", ("S1", "08:00:00"), ("S2", "08:05:00")) + _visits(
        "T2", ("S3", "08:00:00"), ("S4", "eight o'clock")
    )
    builder = GraphBuilder()

    with pytest.raises(MalformedScheduleError) as excinfo:
        builder.ingest_stop_times(visits)

    assert "T2" in str(excinfo.value)
    assert "S4" in str(excinfo.value)
    assert builder.graph.adjacency.number_of_nodes() == 0
    assert builder.graph.direct_lines == []


def test_transfers_use_rounded_minutes_or_default() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(_visits("T1", ("A", "08:00:00"), ("B", "08:05:00")))
    builder.ingest_transfers(
        [
            TransferEdge("A", "C", transfer_type=2, min_transfer_time=150),
            TransferEdge("B", "D", transfer_type=0),
        ]
    )

    graph = builder.graph
    assert graph.transfer_time("A", "C") == 3
    assert graph.transfer_time("B", "D") == 5
    assert graph.transfer_time("C", "A") is None
    assert graph.neighbors("A") == ["B", "C"]


def test_variant_stops_get_two_minute_transfers_both_ways() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(
        _visits("up", ("100N", "08:00:00"), ("101N", "08:03:00"))
        + _visits("down", ("101S", "08:00:00"), ("100S", "08:03:00"))
    )
    builder.ingest_transfers([])

    graph = builder.graph
    assert graph.transfer_time("101N", "101S") == 2
    assert graph.transfer_time("101S", "101N") == 2
    assert graph.adjacency.has_edge("101N", "101S")
    assert graph.adjacency.has_edge("101S", "101N")
    assert graph.transfer_time("100N", "101N") is None


def test_variant_transfer_overwrites_real_transfer_time() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(
        _visits("up", ("101N", "08:00:00"), ("102N", "08:03:00"))
        + _visits("down", ("101S", "08:00:00"), ("100S", "08:03:00"))
    )
    builder.ingest_transfers([TransferEdge("101N", "101S", min_transfer_time=600)])

    assert builder.graph.transfer_time("101N", "101S") == 2


def test_base_station_id_strips_one_direction_suffix() -> None:
    assert base_station_id("101N") == "101"
    assert base_station_id("101S") == "101"
    assert base_station_id("101") == "101"
    assert base_station_id("A12E") == "A12E"


def test_frozen_graph_rejects_further_ingestion() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(_visits("T1", ("A", "08:00:00"), ("B", "08:05:00")))
    builder.ingest_transfers([])
    builder.graph.freeze()

    with pytest.raises(GraphFrozenError):
        builder.ingest_transfers([TransferEdge("A", "Z")])


def test_transfer_only_target_gets_no_variant_transfers() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(
        _visits("T1", ("A", "08:00:00"), ("B", "08:05:00"))
        + _visits("T2", ("101S", "08:00:00"), ("C", "08:06:00"))
    )
    builder.ingest_transfers([TransferEdge("B", "101N")])

    graph = builder.graph
    assert graph.adjacency.has_node("101N")
    assert not graph.has_stop("101N")
    assert graph.transfer_time("101N", "101S") is None
    assert graph.transfer_time("101S", "101N") is None


def test_transfer_origin_becomes_a_source_stop() -> None:
    builder = GraphBuilder()
    builder.ingest_stop_times(_visits("T1", ("101S", "08:00:00"), ("102S", "08:05:00")))
    builder.ingest_transfers([TransferEdge("101N", "X")])

    graph = builder.graph
    assert graph.has_stop("101N")
    assert graph.transfer_time("101N", "101S") == 2
    assert graph.transfer_time("101S", "101N") == 2
