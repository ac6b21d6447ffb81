# tests/integration/test_cli.py
"""
End-to-end runs of the command line interface: read input, cluster with
each local backend, write the report.
"""

import pytest

from dkmeans.cli import main
from dkmeans.io import read_symbols


def _write_points(path):
    path.write_text("0,0\n0,1\n10,10\n10,11\n")


def _clusters_in_report(path):
    """Report as a set of member tuples, cluster numbering ignored."""
    groups, current = [], None
    for line in path.read_text().splitlines():
        if line.startswith("Cluster "):
            current = []
            groups.append(current)
        else:
            assert line.startswith("\t")
            current.append(line[1:])
    return {tuple(g) for g in groups}


@pytest.mark.parametrize("backend", ["sequential", "thread", "process"])
def test_points_report(tmp_path, backend):
    data = tmp_path / "points.csv"
    out = tmp_path / "clusters.txt"
    _write_points(data)

    # the split depends on the seeded start; every point must be reported once
    code = main(["points", str(data), str(out), "-k", "2", "--backend", backend,
                 "--workers", "2", "--seed", "0", "--max-iter", "20"])
    assert code == 0

    clusters = _clusters_in_report(out)
    members = sorted(m for g in clusters for m in g)
    assert members == ["(0.0, 0.0)", "(0.0, 1.0)", "(10.0, 10.0)", "(10.0, 11.0)"]


def test_generate_then_cluster_dna(tmp_path):
    data = tmp_path / "dna.txt"
    out = tmp_path / "clusters.txt"

    assert main(["generate-dna", str(data), "--clusters", "3", "--per-cluster", "10",
                 "--length", "12", "--seed", "3"]) == 0
    strands = read_symbols(data)
    assert len(strands) == 30

    assert main(["dna", str(data), str(out), "-k", "3", "--backend", "thread",
                 "--workers", "3", "--seed", "1"]) == 0
    clusters = _clusters_in_report(out)
    assert sorted(m for g in clusters for m in g) == sorted(strands)


def test_verbose_summary(tmp_path, capsys):
    data = tmp_path / "points.csv"
    out = tmp_path / "clusters.txt"
    _write_points(data)

    assert main(["points", str(data), str(out), "-k", "1", "--backend", "sequential",
                 "-v"]) == 0
    captured = capsys.readouterr().out
    assert "converged after 2 rounds" in captured
    assert "inertia" in captured


def test_too_many_clusters_is_reported(tmp_path, capsys):
    data = tmp_path / "points.csv"
    _write_points(data)

    code = main(["points", str(data), str(tmp_path / "out.txt"), "-k", "5",
                 "--backend", "sequential"])
    assert code == 1
    assert "n_clusters" in capsys.readouterr().err
    assert not (tmp_path / "out.txt").exists()


def test_missing_input_is_reported(tmp_path):
    assert main(["dna", str(tmp_path / "nope.txt"), str(tmp_path / "out.txt"),
                 "-k", "2"]) == 1


def test_requires_subcommand():
    with pytest.raises(SystemExit):
        main([])


def test_dna_alphabet_option(tmp_path):
    data = tmp_path / "dna.txt"
    out = tmp_path / "clusters.txt"
    data.write_text("AG\nAT\nCC\n")

    assert main(["dna", str(data), str(out), "-k", "2", "--backend", "sequential",
                 "--alphabet", "ACTG", "--seed", "0"]) == 0
    clusters = _clusters_in_report(out)
    assert sorted(m for g in clusters for m in g) == ["AG", "AT", "CC"]

    # G is not in the alphabet
    assert main(["dna", str(data), str(out), "-k", "2", "--backend", "sequential",
                 "--alphabet", "ACT"]) == 1
