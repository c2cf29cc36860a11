import json

from benchtime.export.formats import CsvExporter, JsonExporter
from benchtime.export.markup import BenchmarkResult, RankedResult
from benchtime.units import Unit


def _entries():
    a = BenchmarkResult(
        command="command_a",
        command_with_unused_parameters="command_a",
        mean=1.0,
        stddev=2.0,
        median=1.0,
        user=3.0,
        system=4.0,
        min=5.0,
        max=6.0,
        times=[7.0, 8.0, 9.0],
        memory_usage_byte=None,
        exit_codes=[0, 0, 0],
        parameters={"foo": "one", "bar": "two"},
    )
    b = BenchmarkResult(
        command="command_b",
        command_with_unused_parameters="command_b",
        mean=11.0,
        stddev=12.0,
        median=11.0,
        user=13.0,
        system=14.0,
        min=15.0,
        max=16.5,
        times=[17.0, 18.0, 19.0],
        memory_usage_byte=None,
        exit_codes=[0, 0, 0],
        parameters={"foo": "one", "bar": "seven"},
    )
    return [RankedResult(a, 1.0, None, True), RankedResult(b, 11.0, 1.0, False)]


def test_csv():
    actual = CsvExporter().serialize(_entries(), Unit.SECOND).decode("utf-8")
    assert actual == (
        "command,mean,stddev,median,user,system,min,max,parameter_bar,parameter_foo\n"
        "command_a,1,2,1,3,4,5,6,two,one\n"
        "command_b,11,12,11,13,14,15,16.5,seven,one\n"
    )


def test_csv_empty_results_has_only_base_header():
    actual = CsvExporter().serialize([], None).decode("utf-8")
    assert actual == "command,mean,stddev,median,user,system,min,max\n"


def test_csv_missing_stddev_written_as_zero():
    entries = _entries()
    entries[0].result.stddev = None
    lines = CsvExporter().serialize(entries, None).decode("utf-8").splitlines()
    assert lines[1].split(",")[2] == "0"


def test_csv_small_values_have_no_exponent():
    entries = _entries()
    entries[0].result.mean = 0.00001
    lines = CsvExporter().serialize(entries, None).decode("utf-8").splitlines()
    mean = lines[1].split(",")[1]
    assert "e" not in mean
    assert float(mean) == 0.00001


def test_json_round_trip():
    entries = _entries()
    data = json.loads(JsonExporter().serialize(entries, None).decode("utf-8"))
    assert [r["command"] for r in data["results"]] == ["command_a", "command_b"]
    assert data["results"][1]["max"] == 16.5
    assert data["results"][0]["times"] == [7.0, 8.0, 9.0]
    assert data["results"][0]["parameters"] == {"bar": "two", "foo": "one"}


def test_json_is_pretty_and_ends_with_newline():
    output = JsonExporter().serialize(_entries(), None).decode("utf-8")
    assert output.endswith("}\n")
    assert output.startswith('{\n  "results": [')


def test_json_empty_results():
    data = json.loads(JsonExporter().serialize([], None))
    assert data == {"results": []}