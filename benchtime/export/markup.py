"""Table exports of benchmark results in markup formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from benchtime.format import format_duration_value
from benchtime.units import Second, Unit


@dataclass
class BenchmarkResult:
    """Summary of the timing runs of one benchmarked command."""

    command: str
    command_with_unused_parameters: str
    mean: Second
    stddev: Optional[Second]
    median: Second
    user: Second
    system: Second
    min: Second
    max: Second
    times: Optional[list[Second]] = None
    memory_usage_byte: Optional[list[int]] = None
    exit_codes: list[Optional[int]] = field(default_factory=list)
    parameters: dict[str, str] = field(default_factory=dict)


@dataclass
class RankedResult:
    """A benchmark result together with its speed relative to the reference."""

    result: BenchmarkResult
    relative_speed: float
    relative_speed_stddev: Optional[float] = None
    is_reference: bool = False


class Alignment(Enum):
    """Alignment of a table column."""

    LEFT = "left"
    RIGHT = "right"


_CELL_ALIGNMENTS = (
    Alignment.LEFT,
    Alignment.RIGHT,
    Alignment.RIGHT,
    Alignment.RIGHT,
    Alignment.RIGHT,
)


def determine_unit_from_results(results: Sequence[BenchmarkResult]) -> Unit:
    """Pick the unit for all entries from the mean of the first one; seconds if empty."""
    if results:
        return format_duration_value(results[0].mean, None)[1]
    return Unit.SECOND


class MarkupExporter(ABC):
    """Base class of exporters that write results as a markup table."""

    def table_results(self, entries: Sequence[RankedResult], unit: Unit) -> str:
        """Render the whole table for the given entries in the given unit."""
        notation = f"[{unit.short_name()}]"
        parts = [
            self.table_header(_CELL_ALIGNMENTS),
            self.table_row(
                [
                    "Command",
                    f"Mean {notation}",
                    f"Min {notation}",
                    f"Max {notation}",
                    "Relative",
                ]
            ),
            self.table_divider(_CELL_ALIGNMENTS),
        ]

        for entry in entries:
            measurement = entry.result
            cmd_str = measurement.command_with_unused_parameters.replace("|", "\\|")
            mean_str = format_duration_value(measurement.mean, unit)[0]
            if measurement.stddev is not None:
                stddev_str = f" ± {format_duration_value(measurement.stddev, unit)[0]}"
            else:
                stddev_str = ""
            min_str = format_duration_value(measurement.min, unit)[0]
            max_str = format_duration_value(measurement.max, unit)[0]
            rel_str = f"{entry.relative_speed:.2f}"
            if entry.is_reference or entry.relative_speed_stddev is None:
                rel_stddev_str = ""
            else:
                rel_stddev_str = f" ± {entry.relative_speed_stddev:.2f}"

            parts.append(
                self.table_row(
                    [
                        self.command(cmd_str),
                        f"{mean_str}{stddev_str}",
                        min_str,
                        max_str,
                        f"{rel_str}{rel_stddev_str}",
                    ]
                )
            )

        parts.append(self.table_footer(_CELL_ALIGNMENTS))
        return "".join(parts)

    @abstractmethod
    def table_row(self, cells: Sequence[str]) -> str:
        """Render one row of cells."""

    @abstractmethod
    def table_divider(self, alignments: Sequence[Alignment]) -> str:
        """Render the line between the header row and the data rows."""

    def table_header(self, alignments: Sequence[Alignment]) -> str:
        """Render what comes before the first row."""
        return ""

    def table_footer(self, alignments: Sequence[Alignment]) -> str:
        """Render what comes after the last row."""
        return ""

    @abstractmethod
    def command(self, cmd: str) -> str:
        """Render a command as inline code."""

    def serialize(self, entries: Sequence[RankedResult], unit: Optional[Unit] = None) -> bytes:
        """Render the table as UTF-8; the unit defaults to that of the first entry."""
        if unit is None:
            unit = determine_unit_from_results([entry.result for entry in entries])
        return self.table_results(entries, unit).encode("utf-8")


class AsciidocExporter(MarkupExporter):
    """Asciidoc tables."""

    def table_header(self, alignments: Sequence[Alignment]) -> str:
        cols = ",".join("<" if a is Alignment.LEFT else ">" for a in alignments)
        return f'[cols="{cols}"]\n|==='

    def table_footer(self, alignments: Sequence[Alignment]) -> str:
        return "|===\n"

    def table_row(self, cells: Sequence[str]) -> str:
        return "\n| " + " \n| ".join(cells) + " \n"

    def table_divider(self, alignments: Sequence[Alignment]) -> str:
        return ""

    def command(self, cmd: str) -> str:
        return f"`{cmd}`"


class MarkdownExporter(MarkupExporter):
    """Markdown tables."""

    def table_row(self, cells: Sequence[str]) -> str:
        return "| " + " | ".join(cells) + " |\n"

    def table_divider(self, alignments: Sequence[Alignment]) -> str:
        return "|" + "".join(":---|" if a is Alignment.LEFT else "---:|" for a in alignments) + "\n"

    def command(self, cmd: str) -> str:
        return f"`{cmd}`"


class OrgmodeExporter(MarkupExporter):
    """Emacs org-mode tables."""

    def table_row(self, cells: Sequence[str]) -> str:
        first, *rest = cells
        return f"| {first}  |  {' |  '.join(rest)} |\n"

    def table_divider(self, alignments: Sequence[Alignment]) -> str:
        return "|" + "--+" * (len(alignments) - 1) + "--|\n"

    def command(self, cmd: str) -> str:
        return f"={cmd}="