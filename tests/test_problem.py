import math

import pytest

from vrptw_ga.problem import (
    Problem,
    Station,
    find_instance_files,
    load_problem,
    parse_problem,
)

INSTANCE = """2 100 2
0 0 0 0 0 1000 0
1 3 4 10 0 1000 5
2 6 8 15 20 300 7
"""


def test_parse_header_and_counts():
    problem = parse_problem(INSTANCE)
    assert problem.vehicle_max == 2
    assert problem.capacity_max == 100
    assert problem.station_count == 2
    assert len(problem.stations) == 3


def test_parse_station_fields():
    problem = parse_problem(INSTANCE)
    assert problem.stations[2] == Station(2, 6, 8, 15, 20.0, 300.0, 7)
    assert problem.depot.later == problem.horizon == 1000.0


def test_distances():
    problem = parse_problem(INSTANCE)
    assert problem.distance(0, 1) == 5.0
    assert problem.distance(0, 2) == 10.0
    assert math.isclose(
        problem.distance(0, 2), problem.distance(0, 1) + problem.distance(1, 2)
    )


def test_distance_symmetric_and_zero_on_diagonal():
    problem = parse_problem(INSTANCE)
    for a in range(3):
        assert problem.distance(a, a) == 0.0
        for b in range(3):
            assert problem.distance(a, b) == problem.distance(b, a)


def test_truncated_instance_raises():
    with pytest.raises(ValueError, match="ends before"):
        parse_problem("2 100 2\n0 0 0 0 0 1000 0\n1 3 4 10 0")


def test_bad_token_raises():
    with pytest.raises(ValueError, match="bad"):
        parse_problem("2 abc 2")


def test_zero_stations_rejected():
    with pytest.raises(ValueError):
        parse_problem("2 100 0\n0 0 0 0 0 1000 0\n")


def test_no_vehicles_rejected():
    depot = Station(0, 0, 0, 0, 0.0, 10.0, 0)
    station = Station(1, 1, 1, 1, 0.0, 10.0, 0)
    with pytest.raises(ValueError):
        Problem(0, 10, (depot, station))


def test_load_problem_reads_file(tmp_path):
    path = tmp_path / "instance.txt"
    path.write_text(INSTANCE)
    assert load_problem(path) == parse_problem(INSTANCE)


def test_find_instance_files(tmp_path):
    (tmp_path / "b.txt").write_text("")
    (tmp_path / "a.txt").write_text("")
    (tmp_path / "c.dat").write_text("")
    nested = tmp_path / "sub.txt"
    nested.mkdir()
    (nested / "d.txt").write_text("")
    plain = tmp_path / "plain"
    plain.mkdir()
    (plain / "e.txt").write_text("")
    found = find_instance_files(tmp_path, ".txt")
    assert found == [tmp_path / "a.txt", tmp_path / "b.txt", nested / "d.txt"]


def test_find_instance_files_missing_directory(tmp_path):
    assert find_instance_files(tmp_path / "absent", ".txt") == []