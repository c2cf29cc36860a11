"""Settings of a benchmark session and how they are read from the command line."""

from __future__ import annotations

import contextlib
import os
import re
import shlex
import subprocess
import sys
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from typing import IO, Any, Optional, Union

from benchtime.units import Second, Unit

DEFAULT_SHELL = "cmd.exe" if os.name == "nt" else "sh"

StreamSpec = Union[int, IO[Any], None]

_UNSIGNED_INT = re.compile(r"\+?[0-9]+")


class OptionsError(ValueError):
    """Raised when the given options are invalid.

    The ``kind`` attribute holds one of the class-level kind constants.
    """

    INT_PARSING = "int-parsing"
    FLOAT_PARSING = "float-parsing"
    EMPTY_RUNS_RANGE = "empty-runs-range"
    SHELL_PARSE = "shell-parse"
    EMPTY_SHELL = "empty-shell"
    UNKNOWN_OUTPUT_POLICY = "unknown-output-policy"
    STDIN_DATA_FILE_DOES_NOT_EXIST = "stdin-data-file-does-not-exist"
    UNKNOWN_SORT_ORDER = "unknown-sort-order"
    COMMAND_COUNT = "command-count"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class Shell:
    """Shell used to execute benchmarked commands.

    ``custom`` tells whether it was given explicitly with --shell.
    """

    cmdline: tuple[str, ...] = (DEFAULT_SHELL,)
    custom: bool = False

    @classmethod
    def parse_from_str(cls, s: str) -> Shell:
        """Parse a string as a shell command line."""
        try:
            words = shlex.split(s)
        except ValueError as exc:
            raise OptionsError(
                OptionsError.SHELL_PARSE, f"Could not parse the shell command line: {exc}"
            ) from exc
        if not words or not words[0]:
            raise OptionsError(OptionsError.EMPTY_SHELL, "Empty command at --shell option")
        return cls(tuple(words), custom=True)

    def command(self) -> list[str]:
        """The program and its arguments used to start the shell."""
        return list(self.cmdline)

    def __str__(self) -> str:
        if self.custom:
            return shlex.join(self.cmdline)
        return self.cmdline[0]


class CmdFailureAction(Enum):
    """Action to take when an executed command fails."""

    RAISE_ERROR = "raise-error"
    IGNORE = "ignore"


class OutputStyleOption(Enum):
    """How the terminal output is styled."""

    BASIC = "basic"
    FULL = "full"
    NO_COLOR = "nocolor"
    COLOR = "color"
    DISABLED = "none"


class SortOrder(Enum):
    """How benchmarks are ordered in comparisons and exports."""

    COMMAND = "command"
    MEAN_TIME = "mean-time"


@dataclass
class RunBounds:
    """Bounds for the number of benchmark runs."""

    min: int = 10
    max: Optional[int] = None


@dataclass(frozen=True)
class CommandInputPolicy:
    """Where the benchmarked command reads its input from; no path means the null device."""

    path: Optional[Path] = None

    @contextlib.contextmanager
    def open_stdin(self) -> Iterator[StreamSpec]:
        """Yield a stdin specification for subprocess, closing any opened file afterwards."""
        if self.path is None:
            yield subprocess.DEVNULL
            return
        with open(self.path, "rb") as stream:
            yield stream


@dataclass(frozen=True)
class CommandOutputPolicy:
    """What happens to the output of the benchmarked command.

    ``mode`` is one of "null", "pipe", "inherit" or "file"; the last one needs ``path``.
    """

    mode: str = "null"
    path: Optional[Path] = None

    @contextlib.contextmanager
    def open_streams(self) -> Iterator[tuple[StreamSpec, StreamSpec]]:
        """Yield (stdout, stderr) specifications for subprocess."""
        if self.mode == "null":
            yield subprocess.DEVNULL, subprocess.DEVNULL
        elif self.mode == "pipe":
            # Typically only stdout is performance-relevant, so just pipe that.
            yield subprocess.PIPE, subprocess.DEVNULL
        elif self.mode == "inherit":
            yield None, None
        elif self.mode == "file" and self.path is not None:
            with open(self.path, "wb") as stream:
                yield stream, subprocess.DEVNULL
        else:
            raise ValueError(f"invalid output policy: {self.mode!r}")


class ExecutorKind(Enum):
    """How benchmarked commands are run."""

    RAW = "raw"
    SHELL = "shell"
    MOCK = "mock"


def _path_component_count(arg: str) -> int:
    count = len(PurePath(arg).parts)
    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    if arg == "." or any(arg.startswith("." + sep) for sep in separators):
        count += 1
    return count


def _get_one(matches: Mapping[str, Any], name: str) -> Optional[str]:
    value = matches.get(name)
    return None if value is None else str(value)


def _get_many(matches: Mapping[str, Any], name: str) -> Optional[list[str]]:
    value = matches.get(name)
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def _get_flag(matches: Mapping[str, Any], name: str) -> bool:
    return bool(matches.get(name, False))


def _parse_u64(matches: Mapping[str, Any], name: str) -> Optional[int]:
    text = _get_one(matches, name)
    if text is None:
        return None
    if not _UNSIGNED_INT.fullmatch(text):
        raise OptionsError(
            OptionsError.INT_PARSING,
            f"Could not parse '--{name}' value {text!r} as a non-negative integer",
        )
    return int(text)


def _parse_float(name: str, text: str) -> float:
    if text != text.strip() or "_" in text:
        raise OptionsError(
            OptionsError.FLOAT_PARSING, f"Could not parse '--{name}' value {text!r} as a number"
        )
    try:
        return float(text)
    except ValueError as exc:
        raise OptionsError(
            OptionsError.FLOAT_PARSING, f"Could not parse '--{name}' value {text!r} as a number"
        ) from exc


def _stdout_is_terminal() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


_SORT_ORDERS = {
    None: (SortOrder.MEAN_TIME, SortOrder.COMMAND),
    "auto": (SortOrder.MEAN_TIME, SortOrder.COMMAND),
    "command": (SortOrder.COMMAND, SortOrder.COMMAND),
    "mean-time": (SortOrder.MEAN_TIME, SortOrder.MEAN_TIME),
}

_TIME_UNITS = {
    "microsecond": Unit.MICROSECOND,
    "millisecond": Unit.MILLISECOND,
    "second": Unit.SECOND,
}


@dataclass
class Options:
    """The main settings of a benchmark session."""

    run_bounds: RunBounds = field(default_factory=RunBounds)
    warmup_count: int = 0
    min_benchmarking_time: Second = 3.0
    command_failure_action: CmdFailureAction = CmdFailureAction.RAISE_ERROR
    reference_command: Optional[str] = None
    reference_name: Optional[str] = None
    preparation_command: Optional[list[str]] = None
    conclusion_command: Optional[list[str]] = None
    setup_command: Optional[str] = None
    cleanup_command: Optional[str] = None
    output_style: OutputStyleOption = OutputStyleOption.FULL
    sort_order_speed_comparison: SortOrder = SortOrder.MEAN_TIME
    sort_order_exports: SortOrder = SortOrder.COMMAND
    executor_kind: ExecutorKind = ExecutorKind.SHELL
    shell: Shell = field(default_factory=Shell)
    mock_shell: Optional[str] = None
    command_input_policy: CommandInputPolicy = field(default_factory=CommandInputPolicy)
    command_output_policies: list[CommandOutputPolicy] = field(
        default_factory=lambda: [CommandOutputPolicy("null")]
    )
    time_unit: Optional[Unit] = None

    @classmethod
    def from_cli_arguments(cls, matches: Mapping[str, Any]) -> Options:
        """Build options from parsed command-line values keyed by long option name."""
        options = cls()

        warmup = _parse_u64(matches, "warmup")
        if warmup is not None:
            options.warmup_count = warmup

        min_runs = _parse_u64(matches, "min-runs")
        max_runs = _parse_u64(matches, "max-runs")
        runs = _parse_u64(matches, "runs")
        if runs is not None:
            min_runs = max_runs = runs

        if min_runs is not None and max_runs is not None:
            if min_runs > max_runs:
                raise OptionsError(
                    OptionsError.EMPTY_RUNS_RANGE,
                    "Minimum number of runs is larger than the maximum number of runs",
                )
            options.run_bounds = RunBounds(min_runs, max_runs)
        elif min_runs is not None:
            options.run_bounds.min = min_runs
        elif max_runs is not None:
            # The minimum was not explicit, so lower it if max is below the default.
            options.run_bounds.min = min(options.run_bounds.min, max_runs)
            options.run_bounds.max = max_runs

        options.setup_command = _get_one(matches, "setup")
        options.reference_command = _get_one(matches, "reference")
        options.reference_name = _get_one(matches, "reference-name")
        options.preparation_command = _get_many(matches, "prepare")
        options.conclusion_command = _get_many(matches, "conclude")
        options.cleanup_command = _get_one(matches, "cleanup")

        options.command_output_policies = _output_policies(matches)
        options.output_style = _output_style(
            _get_one(matches, "style"), options.command_output_policies
        )

        sort = _get_one(matches, "sort")
        if sort not in _SORT_ORDERS:
            raise OptionsError(OptionsError.UNKNOWN_SORT_ORDER, f"Unknown sort order: {sort}")
        options.sort_order_speed_comparison, options.sort_order_exports = _SORT_ORDERS[sort]

        shell = _get_one(matches, "shell")
        if _get_flag(matches, "no-shell"):
            options.executor_kind = ExecutorKind.RAW
        elif _get_flag(matches, "debug-mode"):
            options.executor_kind = ExecutorKind.MOCK
            options.mock_shell = shell
        elif shell is None or shell == "default":
            options.executor_kind = ExecutorKind.SHELL
            options.shell = Shell()
        elif shell == "none":
            options.executor_kind = ExecutorKind.RAW
        else:
            options.executor_kind = ExecutorKind.SHELL
            options.shell = Shell.parse_from_str(shell)

        if _get_flag(matches, "ignore-failure"):
            options.command_failure_action = CmdFailureAction.IGNORE

        options.time_unit = _TIME_UNITS.get(_get_one(matches, "time-unit") or "")

        min_time = _get_one(matches, "min-benchmarking-time")
        if min_time is not None:
            options.min_benchmarking_time = _parse_float("min-benchmarking-time", min_time)

        input_path = _get_one(matches, "input")
        if input_path is None or input_path == "null":
            options.command_input_policy = CommandInputPolicy()
        else:
            path = Path(input_path)
            if not path.exists():
                raise OptionsError(
                    OptionsError.STDIN_DATA_FILE_DOES_NOT_EXIST,
                    f"The file '{input_path}' specified as '--input' does not exist",
                )
            options.command_input_policy = CommandInputPolicy(path)

        return options

    def validate_against_command_list(self, num_commands: int) -> None:
        """Check per-command options against the number of commands (reference included)."""
        for option, values in (
            ("prepare", self.preparation_command),
            ("conclude", self.conclusion_command),
        ):
            if values is not None and len(values) > 1 and len(values) != num_commands:
                raise OptionsError(OptionsError.COMMAND_COUNT, _count_message(option, num_commands))

        if len(self.command_output_policies) == 1:
            self.command_output_policies = self.command_output_policies * num_commands
        elif len(self.command_output_policies) != num_commands:
            raise OptionsError(OptionsError.COMMAND_COUNT, _count_message("output", num_commands))


def _count_message(option: str, num_commands: int) -> str:
    return (
        f"The '--{option}' option has to be provided just once or N times, where "
        f"N={num_commands} is the number of benchmark commands (including a potential "
        "reference)."
    )


def _output_policies(matches: Mapping[str, Any]) -> list[CommandOutputPolicy]:
    if _get_flag(matches, "show-output"):
        return [CommandOutputPolicy("inherit")]
    values = _get_many(matches, "output")
    if values is None:
        return [CommandOutputPolicy("null")]
    policies = []
    for value in values:
        if value in ("null", "pipe", "inherit"):
            policies.append(CommandOutputPolicy(value))
        elif _path_component_count(value) <= 1:
            raise OptionsError(
                OptionsError.UNKNOWN_OUTPUT_POLICY,
                f"Unknown output policy '{value}'. Use './{value}' to output to a file "
                "named that.",
            )
        else:
            policies.append(CommandOutputPolicy("file", Path(value)))
    return policies


def _output_style(
    style: Optional[str], policies: Sequence[CommandOutputPolicy]
) -> OutputStyleOption:
    if style is not None:
        try:
            return OutputStyleOption(style)
        except ValueError:
            pass
    if any(policy.mode == "inherit" for policy in policies) or not _stdout_is_terminal():
        return OutputStyleOption.BASIC
    term = os.environ.get("TERM")
    dumb_terminal = term in ("unknown", "dumb") if term is not None else os.name != "nt"
    if dumb_terminal or os.environ.get("NO_COLOR"):
        return OutputStyleOption.NO_COLOR
    return OutputStyleOption.FULL