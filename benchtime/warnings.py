"""Warning messages shown next to benchmark results."""

from __future__ import annotations

from dataclasses import dataclass

from benchtime.format import format_duration
from benchtime.units import Second


@dataclass(frozen=True)
class OutlierWarningOptions:
    """Which of the options that help against outliers are in use."""

    warmup_in_use: bool
    prepare_in_use: bool


def fast_execution_time(min_execution_time: Second) -> str:
    """Warning for commands faster than the shell calibration limit."""
    return (
        f"Command took less than {min_execution_time * 1e3:.0f} ms to complete. "
        "Note that the results might be inaccurate because benchtime can not "
        "calibrate the shell startup time much more precise than this limit. "
        "You can try to use the `-N`/`--shell=none` option to disable the shell "
        "completely."
    )


def non_zero_exit_code() -> str:
    """Warning for an ignored non-zero exit code."""
    return "Ignoring non-zero exit code."


_SLOW_INITIAL_RUN_HINTS = {
    (True, True): (
        "You are already using both the '--warmup' option as well as the "
        "'--prepare' option. Consider re-running the benchmark on a quiet system. "
        "Maybe it was a random outlier. Alternatively, consider increasing the "
        "warmup count."
    ),
    (True, False): (
        "You are already using the '--warmup' option which helps to fill these "
        "caches before the actual benchmark. You can either try to increase the "
        "warmup count further or re-run this benchmark on a quiet system in case "
        "it was a random outlier. Alternatively, consider using the '--prepare' "
        "option to clear the caches before each timing run."
    ),
    (False, True): (
        "You are already using the '--prepare' option which can be used to clear "
        "caches. If you did not use a cache-clearing command with '--prepare', you "
        "can either try that or consider using the '--warmup' option to fill those "
        "caches before the actual benchmark."
    ),
    (False, False): (
        "You should consider using the '--warmup' option to fill those caches "
        "before the actual benchmark. Alternatively, use the '--prepare' option to "
        "clear the caches before each timing run."
    ),
}


def slow_initial_run(time_first_run: Second, options: OutlierWarningOptions) -> str:
    """Warning for a first run that was much slower than the rest."""
    hints = _SLOW_INITIAL_RUN_HINTS[(options.warmup_in_use, options.prepare_in_use)]
    return (
        "The first benchmarking run for this command was significantly slower than "
        f"the rest ({format_duration(time_first_run, None)}). This could be caused "
        "by (filesystem) caches that were not filled until after the first run. "
        f"{hints}"
    )


def outliers_detected(options: OutlierWarningOptions) -> str:
    """Warning for statistical outliers among the timing runs."""
    if options.warmup_in_use and options.prepare_in_use:
        hint = ""
    else:
        hint = " It might help to use the '--warmup' or '--prepare' options."
    return (
        "Statistical outliers were detected. Consider re-running this benchmark on "
        "a quiet system without any interferences from other programs." + hint
    )