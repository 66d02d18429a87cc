import pytest

from vrptw_ga.cli import main

INSTANCE = """3 200 6
0 0 0 0 0 1000 0
1 3 7 10 0 1000 1
2 6 3 10 0 1000 1
3 9 10 10 0 1000 1
4 12 6 10 0 1000 1
5 15 2 10 0 1000 1
6 18 9 10 0 1000 1
"""

SMALL = ["--population", "6", "--generations", "3", "--seed", "1"]


@pytest.fixture
def instances(tmp_path):
    folder = tmp_path / "instances"
    folder.mkdir()
    (folder / "a.txt").write_text(INSTANCE)
    (folder / "b.txt").write_text(INSTANCE)
    (folder / "notes.md").write_text("ignored")
    return folder


def test_writes_one_summary_per_instance(instances, tmp_path, capsys):
    output = tmp_path / "results.txt"
    status = main([str(instances), "--output", str(output), *SMALL])
    assert status == 0
    lines = output.read_text().splitlines()
    assert [line.split()[0] for line in lines] == ["1", "2"]
    for line in lines:
        fields = line.split()
        assert len(fields) == 4
        assert fields[1] == fields[2]
        assert fields[3] == "0"
    assert capsys.readouterr().out.count("objective:") == 2


def test_output_is_appended(instances, tmp_path):
    output = tmp_path / "results.txt"
    output.write_text("previous\n")
    main([str(instances), "--output", str(output), *SMALL])
    lines = output.read_text().splitlines()
    assert lines[0] == "previous"
    assert len(lines) == 3


def test_summary_to_stdout_without_output(instances, capsys):
    status = main([str(instances), *SMALL, "--runs", "2"])
    assert status == 0
    out = capsys.readouterr().out.splitlines()
    summaries = [line for line in out if line.split()[0] in ("1", "2") and len(line.split()) == 4]
    assert len(summaries) == 2
    for line in summaries:
        best, average = float(line.split()[1]), float(line.split()[2])
        assert best <= average


def test_seed_makes_results_reproducible(instances, tmp_path):
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    main([str(instances), "--output", str(first), *SMALL])
    main([str(instances), "--output", str(second), *SMALL])
    assert first.read_text() == second.read_text()


def test_empty_directory_writes_nothing(tmp_path):
    output = tmp_path / "results.txt"
    empty = tmp_path / "empty"
    empty.mkdir()
    assert main([str(empty), "--output", str(output), *SMALL]) == 0
    assert not output.exists()


def test_unreadable_instance_is_reported(tmp_path, capsys):
    folder = tmp_path / "bad"
    folder.mkdir()
    (folder / "broken.txt").write_text("3 200")
    output = tmp_path / "results.txt"
    assert main([str(folder), "--output", str(output), *SMALL]) == 1
    assert "Failed to read the file" in capsys.readouterr().err
    assert not output.exists()


def test_rejects_zero_runs(instances):
    with pytest.raises(SystemExit):
        main([str(instances), "--runs", "0"])