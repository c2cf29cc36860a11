# benchtime

Building blocks for benchmarking commands: running and timing child
processes, spotting statistical outliers, expanding parameter lists and
ranges, holding benchmark settings, and exporting results as Markdown,
AsciiDoc, Emacs org-mode tables, CSV or JSON.

## Modules

| Module | Contents |
| --- | --- |
| `benchtime.units` | `Unit` (`SECOND`, `MILLISECOND`, `MICROSECOND`) with `short_name()` and `format()` |
| `benchtime.format` | `format_duration`, `format_duration_unit`, `format_duration_value` |
| `benchtime.stats` | `modified_zscores`, `num_outliers`, `OUTLIER_THRESHOLD`, `minimum`, `maximum` |
| `benchtime.parameters` | `tokenize`, `RangeStep`, `ParameterValue`, `format_number`, `ParameterScanError` |
| `benchtime.environment` | `extract_exit_code`, `randomized_offset_value` |
| `benchtime.timer` | `execute_and_measure`, `TimerResult`, `WallClockTimer`, `CPUTimer`, `get_cpu_times`, `cpu_time_interval` |
| `benchtime.warnings` | Warning texts: `fast_execution_time`, `non_zero_exit_code`, `slow_initial_run`, `outliers_detected` |
| `benchtime.options` | `Options`, `Shell`, `CommandInputPolicy`, `CommandOutputPolicy`, `SortOrder`, `OutputStyleOption`, `OptionsError` |
| `benchtime.progress` | `get_progress_bar` (a `tqdm` bar) |
| `benchtime.export.markup` | `BenchmarkResult`, `RankedResult`, `MarkdownExporter`, `AsciidocExporter`, `OrgmodeExporter` |
| `benchtime.export.formats` | `CsvExporter`, `JsonExporter` |
| `benchtime.export.manager` | `ExportManager`, `ExportType`, `ExportTarget`, `write_to_file` |

Install with `pip install .`; the tests run with `pip install .[test]`
followed by `pytest`.

## Formatting durations

Durations are given in seconds. Without an explicit unit, the unit is
chosen from the size of the value:

```python
from benchtime.format import format_duration, format_duration_unit
from benchtime.units import Unit

format_duration(1.3, None)                      # '1.300 s'
format_duration(0.999, None)                    # '999.0 ms'
format_duration(0.0005, None)                   # '500.0 µs'
format_duration_unit(1.3, Unit.MILLISECOND)     # ('1300.0 ms', Unit.MILLISECOND)
```

## Timing a command

`execute_and_measure` starts a process, waits for it and returns a
`TimerResult` with the wall clock time, the user and system CPU time of the
child, its peak memory use and its return code. Standard input and output
default to the null device; with `stdout=subprocess.PIPE` the output is read
and thrown away.

```python
from benchtime.timer import execute_and_measure
from benchtime.environment import extract_exit_code

result = execute_and_measure(["sh", "-c", "sleep 0.1"])
result.time_real             # about 0.1
extract_exit_code(result.status)  # 0
```

CPU times and memory come from `resource.getrusage`; where that module is
missing they are reported as zero. `extract_exit_code` maps a process killed
by signal N to 128 + N on POSIX systems.

## Parameter lists and ranges

Comma-separated parameter lists treat `\,` as a literal comma and `\\` as a
backslash:

```python
from benchtime.parameters import tokenize

tokenize(r"hello\, world!,baz")  # ['hello, world!', 'baz']
tokenize(r"foo,,bar")            # ['foo', '', 'bar']
```

`RangeStep` walks from a start value to an end value, both included, in
fixed steps. It works with integers and with `decimal.Decimal`:

```python
from decimal import Decimal
from benchtime.parameters import RangeStep

list(RangeStep(0, 10, 3))                               # [0, 3, 6, 9]
len(RangeStep(Decimal(0), Decimal(1), Decimal("0.1")))  # 11
```

An empty range, a step of zero, or a range of more than 100,000 values
raises `ParameterScanError`.

## Outliers

Outliers are found with modified Z-scores, which use the median and the
median absolute deviation; a point counts as an outlier when its score
exceeds `OUTLIER_THRESHOLD`:

```python
from benchtime.stats import num_outliers

num_outliers([-0.2, 0.0, 0.2, 4.0])  # 1
num_outliers([-0.2, 0.0, 0.2])       # 0
```

## Settings

`Options.from_cli_arguments` builds the settings of a session from a
mapping of already parsed option values, keyed by long option name
(`"runs"`, `"min-runs"`, `"max-runs"`, `"warmup"`, `"prepare"`,
`"conclude"`, `"setup"`, `"cleanup"`, `"reference"`, `"shell"`,
`"no-shell"`, `"output"`, `"show-output"`, `"input"`, `"style"`, `"sort"`,
`"time-unit"`, `"ignore-failure"`, `"min-benchmarking-time"`, ...). Invalid
values raise `OptionsError`, whose `kind` tells what went wrong.

```python
from benchtime.options import Options

options = Options.from_cli_arguments({"runs": "5", "shell": "bash -e"})
options.run_bounds            # RunBounds(min=5, max=5)
str(options.shell)            # 'bash -e'
options.validate_against_command_list(2)  # one output policy per command
```

## Exporting results

The exporters turn a list of `RankedResult` entries into bytes. The markup
exporters build a table with mean (± standard deviation), minimum, maximum
and the relative speed stored in each entry; without an explicit unit, the
unit of the first entry's mean is used for all rows.

```python
from benchtime.export.markup import BenchmarkResult, MarkdownExporter, RankedResult

result = BenchmarkResult(
    command="sleep 0.1", command_with_unused_parameters="sleep 0.1",
    mean=0.1057, stddev=0.0016, median=0.1057, user=0.0009, system=0.0011,
    min=0.1023, max=0.1080,
)
print(MarkdownExporter().serialize([RankedResult(result, 1.0, is_reference=True)]).decode())
# | Command | Mean [ms] | Min [ms] | Max [ms] | Relative |
# |:---|---:|---:|---:|---:|
# | `sleep 0.1` | 105.7 ± 1.6 | 102.3 | 108.0 | 1.00 |
```

`CsvExporter` writes one row per result with a `parameter_<name>` column
for each parameter; `JsonExporter` writes `{"results": [...]}` with every
field of each result.

`ExportManager` holds several exporters at once. `add_exporter` creates the
target file straight away, or uses standard output when the file name is
`-`. `write_results(entries, intermediate=True)` rewrites the file targets;
`write_results(entries, intermediate=False)` prints the standard-output
targets.

## What it does not do

There is no command to run. The package has no argument parser, no
scheduler that runs warmups, preparation commands and timing repetitions,
and no code that turns runs into a `BenchmarkResult` (mean, standard
deviation, median) or computes relative speeds between commands: callers
fill `BenchmarkResult` and `RankedResult` themselves.