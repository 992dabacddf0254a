"""Tests for the command line entry point."""

import io

import pytest

from flower_tree.cli import main


DATA = "1,1,1,1,0\n1,1,1,1,0\n5,5,5,5,1\n5,5,5,5,1\n"


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "iris.data"
    path.write_text(DATA, encoding="utf-8")
    return path


def test_main_prints_report(data_file, capsys):
    assert main(["3", "4", "5", "--input", str(data_file), "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Validation Set:\tFlowers 3 to 3\nMaximum Depth:\t5\n")
    assert "Train Accuracy:\t3/3" in out
    assert "Test Accuracy:\t1/1" in out


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(DATA))
    assert main(["0", "1", "2", "LR"]) == 0
    assert "Position:\tLR\n" in capsys.readouterr().out


def test_main_saves_tree(data_file, tmp_path):
    assert main(["0", "0", "2", "--input", str(data_file), "--save", str(tmp_path / "out")]) == 0
    assert (tmp_path / "out" / "flower_tree.json").is_file()


def test_main_rejects_invalid_range(data_file, capsys):
    assert main(["2", "9", "5", "--input", str(data_file)]) == 2
    assert "error:" in capsys.readouterr().err


def test_main_malformed_input(tmp_path, capsys):
    path = tmp_path / "bad.data"
    path.write_text(DATA + "1,2,3\n", encoding="utf-8")
    assert main(["0", "1", "5", "--input", str(path)]) == 2
    assert "Line 5" in capsys.readouterr().err
    assert main(["0", "1", "5", "--input", str(path), "--skip-malformed"]) == 0


def test_main_rejects_bad_root_label(data_file):
    with pytest.raises(SystemExit):
        main(["0", "1", "5", "LQ", "--input", str(data_file)])


def test_main_missing_input_file(tmp_path, capsys):
    assert main(["0", "1", "5", "--input", str(tmp_path / "missing.data")]) == 2
    assert "error:" in capsys.readouterr().err
