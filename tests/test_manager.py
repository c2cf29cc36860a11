import json

import pytest

from benchtime.export.manager import ExportManager, ExportTarget, ExportType, write_to_file
from benchtime.export.markup import BenchmarkResult, MarkdownExporter, RankedResult
from benchtime.units import Unit


def _entries():
    result = BenchmarkResult(
        command="sleep 0.1",
        command_with_unused_parameters="sleep 0.1",
        mean=0.1057,
        stddev=0.0016,
        median=0.1057,
        user=0.0009,
        system=0.0011,
        min=0.1023,
        max=0.1080,
        times=[0.1, 0.1, 0.1],
        exit_codes=[0, 0, 0],
    )
    return [RankedResult(result, 1.0, None, True)]


def test_add_exporter_creates_empty_file(tmp_path):
    path = tmp_path / "out.md"
    manager = ExportManager()
    manager.add_exporter(ExportType.MARKDOWN, str(path))
    assert path.exists()
    assert path.read_bytes() == b""
    assert manager.targets == [ExportTarget(str(path))]


def test_dash_means_stdout(tmp_path):
    manager = ExportManager()
    manager.add_exporter(ExportType.JSON, "-")
    assert manager.targets[0].is_stdout


def test_add_exporter_fails_for_missing_directory(tmp_path):
    manager = ExportManager()
    with pytest.raises(OSError, match="Could not create export file"):
        manager.add_exporter(ExportType.CSV, str(tmp_path / "missing" / "out.csv"))


def test_intermediate_results_written_to_file(tmp_path):
    path = tmp_path / "out.md"
    manager = ExportManager(Unit.MILLISECOND)
    manager.add_exporter(ExportType.MARKDOWN, str(path))
    entries = _entries()
    manager.write_results(entries, intermediate=True)
    assert path.read_bytes() == MarkdownExporter().serialize(entries, Unit.MILLISECOND)
    assert "`sleep 0.1`" in path.read_text(encoding="utf-8")


def test_final_call_does_not_touch_files(tmp_path):
    path = tmp_path / "out.json"
    manager = ExportManager()
    manager.add_exporter(ExportType.JSON, str(path))
    manager.write_results(_entries(), intermediate=False)
    assert path.read_bytes() == b""


def test_stdout_only_on_final_call(capsys):
    manager = ExportManager()
    manager.add_exporter(ExportType.JSON, "-")
    manager.write_results(_entries(), intermediate=True)
    assert capsys.readouterr().out == ""
    manager.write_results(_entries(), intermediate=False)
    out = capsys.readouterr().out
    assert out.startswith("\n")
    assert json.loads(out)["results"][0]["command"] == "sleep 0.1"


def test_from_cli_arguments(tmp_path):
    csv_path = tmp_path / "r.csv"
    md_path = tmp_path / "r.md"
    matches = {"export-csv": str(csv_path), "export-markdown": str(md_path), "export-json": None}
    manager = ExportManager.from_cli_arguments(matches, None)
    assert manager.targets == [ExportTarget(str(csv_path)), ExportTarget(str(md_path))]
    assert csv_path.exists() and md_path.exists()


def test_write_to_file_requires_existing_file(tmp_path):
    with pytest.raises(OSError):
        write_to_file(str(tmp_path / "absent.txt"), b"data")


def test_write_to_file_overwrites_from_start(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"abcdef")
    write_to_file(str(path), b"XY")
    assert path.read_bytes() == b"XYcdef"