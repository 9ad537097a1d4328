import logging
from pathlib import Path

import pytest

from route_analyzer.errors import WaypointLoadError
from route_analyzer.geometry import Waypoint
from route_analyzer.waypoints import (
    iter_waypoints,
    parse_waypoint_fields,
    parse_waypoint_line,
    read_waypoints,
)

FIXTURES = Path(__file__).parent / "fixtures"


def write_csv(tmp_path, text, name="waypoints.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_parse_waypoint_line():
    assert parse_waypoint_line("1;45.0;7.0\n") == Waypoint(1, 45.0, 7.0)


def test_parse_waypoint_line_trims_fields():
    assert parse_waypoint_line(" 12 ; 45.5 ;  7.25 ") == Waypoint(12, 45.5, 7.25)


def test_parse_waypoint_line_wrong_field_count():
    assert parse_waypoint_line("1;45.0") is None
    assert parse_waypoint_line("1;45.0;7.0;100") is None


def test_parse_waypoint_fields_defaults_for_bad_values():
    assert parse_waypoint_fields(["abc", "north", "east"]) == Waypoint(0, 0.0, 0.0)


def test_parse_waypoint_fields_non_integer_timestamp():
    assert parse_waypoint_fields(["1.5", "45.0", "7.0"]) == Waypoint(0, 45.0, 7.0)


def test_iter_waypoints_skips_header():
    lines = ["timestamp;latitude;longitude\n", "1;45.0;7.0\n", "2;45.1;7.1\n"]
    assert list(iter_waypoints(lines)) == [
        Waypoint(1, 45.0, 7.0),
        Waypoint(2, 45.1, 7.1),
    ]


def test_iter_waypoints_without_header():
    lines = ["1;45.0;7.0\n", "2;45.1;7.1\n"]
    assert len(list(iter_waypoints(lines))) == 2


def test_iter_waypoints_only_first_line_can_be_header():
    lines = ["1;45.0;7.0\n", "x;lat;lon\n"]
    assert list(iter_waypoints(lines)) == [
        Waypoint(1, 45.0, 7.0),
        Waypoint(0, 0.0, 0.0),
    ]


def test_iter_waypoints_skips_blank_lines():
    lines = ["1;45.0;7.0\n", "\n", "   \n", "2;45.1;7.1\n"]
    assert len(list(iter_waypoints(lines))) == 2


def test_malformed_line_is_skipped_with_warning(caplog):
    lines = ["1;45.0;7.0\n", "2;45.1\n", "3;45.2;7.2;extra\n", "4;45.3;7.3\n"]
    with caplog.at_level(logging.WARNING):
        waypoints = list(iter_waypoints(lines, source="route.csv"))
    assert [w.timestamp for w in waypoints] == [1, 4]
    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("line 2 of route.csv" in m for m in messages)
    assert any("line 3 of route.csv" in m for m in messages)


def test_iter_waypoints_stray_quote_does_not_swallow_later_rows():
    lines = ["1;45.0;7.0\n", '2;"45.1;7.1\n', "3;45.2;7.2\n", "4;45.3;7.3\n"]
    waypoints = list(iter_waypoints(lines))
    assert [w.timestamp for w in waypoints] == [1, 2, 3, 4]
    assert waypoints[1] == parse_waypoint_line(lines[1])
    assert waypoints[3] == Waypoint(4, 45.3, 7.3)


def test_iter_waypoints_matches_parse_waypoint_line():
    lines = ['5;"45.0";7.0\n', "6;45.1;\"7.1\n"]
    assert list(iter_waypoints(lines)) == [parse_waypoint_line(line) for line in lines]


def test_read_waypoints_stray_quote(tmp_path):
    path = write_csv(tmp_path, '1;45.0;7.0\n2;"45.1;7.1\n3;45.2;7.2\n')
    assert [w.timestamp for w in read_waypoints(path)] == [1, 2, 3]


def test_read_waypoints(tmp_path):
    path = write_csv(
        tmp_path, "timestamp;latitude;longitude\n1;45.0;7.0\n2;45.1;7.1\n3;45.2;7.2\n"
    )
    waypoints = read_waypoints(path)
    assert len(waypoints) == 3
    assert waypoints[0].latitude == 45.0


def test_read_waypoints_fixture():
    waypoints = read_waypoints(str(FIXTURES / "waypoints.csv"))
    assert [w.timestamp for w in waypoints] == [1, 2, 3, 4, 5]


def test_read_waypoints_uppercase_extension(tmp_path):
    path = write_csv(tmp_path, "1;45.0;7.0\n", name="ROUTE.CSV")
    assert read_waypoints(path) == [Waypoint(1, 45.0, 7.0)]


def test_read_waypoints_wrong_extension(tmp_path):
    path = write_csv(tmp_path, "1;45.0;7.0\n", name="waypoints.txt")
    with pytest.raises(WaypointLoadError, match=".csv"):
        read_waypoints(path)


def test_read_waypoints_missing_file(tmp_path):
    with pytest.raises(WaypointLoadError, match="not found"):
        read_waypoints(str(tmp_path / "missing.csv"))


def test_read_waypoints_empty_file(tmp_path):
    with pytest.raises(WaypointLoadError, match="empty"):
        read_waypoints(write_csv(tmp_path, ""))


def test_read_waypoints_header_only(tmp_path):
    path = write_csv(tmp_path, "timestamp;latitude;longitude\n")
    with pytest.raises(WaypointLoadError, match="No valid waypoints"):
        read_waypoints(path)


def test_read_waypoints_reports_skipped_rows(tmp_path, caplog):
    path = write_csv(tmp_path, "timestamp;latitude;longitude\n1;45.0;7.0\nbroken\n")
    with caplog.at_level(logging.WARNING):
        waypoints = read_waypoints(path)
    assert waypoints == [Waypoint(1, 45.0, 7.0)]
    assert any("Skipped 1 of 2 rows" in r.getMessage() for r in caplog.records)
