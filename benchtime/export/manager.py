"""Management of the exporters that write benchmark results to files or stdout."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from benchtime.export.formats import CsvExporter, JsonExporter
from benchtime.export.markup import (
    AsciidocExporter,
    MarkdownExporter,
    OrgmodeExporter,
    RankedResult,
)
from benchtime.units import Unit

Exporter = Union[AsciidocExporter, CsvExporter, JsonExporter, MarkdownExporter, OrgmodeExporter]


class ExportType(Enum):
    """The format an export is written in."""

    ASCIIDOC = "asciidoc"
    CSV = "csv"
    JSON = "json"
    MARKDOWN = "markdown"
    ORGMODE = "orgmode"


_EXPORTER_CLASSES = {
    ExportType.ASCIIDOC: AsciidocExporter,
    ExportType.CSV: CsvExporter,
    ExportType.JSON: JsonExporter,
    ExportType.MARKDOWN: MarkdownExporter,
    ExportType.ORGMODE: OrgmodeExporter,
}

_CLI_FLAGS = (
    ("export-asciidoc", ExportType.ASCIIDOC),
    ("export-json", ExportType.JSON),
    ("export-csv", ExportType.CSV),
    ("export-markdown", ExportType.MARKDOWN),
    ("export-orgmode", ExportType.ORGMODE),
)


@dataclass(frozen=True)
class ExportTarget:
    """Where an export goes: a file, or stdout when no filename is set."""

    filename: Optional[str] = None

    @property
    def is_stdout(self) -> bool:
        return self.filename is None


@dataclass(frozen=True)
class _ExporterWithTarget:
    exporter: Exporter
    target: ExportTarget


class ExportManager:
    """Handles several exporters, each with its own target."""

    def __init__(self, time_unit: Optional[Unit] = None) -> None:
        self.time_unit = time_unit
        self._exporters: list[_ExporterWithTarget] = []

    @property
    def targets(self) -> list[ExportTarget]:
        """The targets of all registered exporters, in order."""
        return [e.target for e in self._exporters]

    @classmethod
    def from_cli_arguments(
        cls, matches: Mapping[str, Any], time_unit: Optional[Unit] = None
    ) -> ExportManager:
        """Build a manager from parsed command-line values keyed by long option name."""
        manager = cls(time_unit)
        for flag, export_type in _CLI_FLAGS:
            filename = matches.get(flag)
            if filename is not None:
                manager.add_exporter(export_type, str(filename))
        return manager

    def add_exporter(self, export_type: ExportType, filename: str) -> None:
        """Add an exporter; "-" means stdout, otherwise the file is created right away."""
        exporter = _EXPORTER_CLASSES[export_type]()
        if filename == "-":
            target = ExportTarget()
        else:
            try:
                with open(filename, "wb"):
                    pass
            except OSError as exc:
                raise OSError(f"Could not create export file '{filename}'") from exc
            target = ExportTarget(filename)
        self._exporters.append(_ExporterWithTarget(exporter, target))

    def write_results(self, entries: Sequence[RankedResult], intermediate: bool) -> None:
        """Write results to all exporters.

        Intermediate calls update file targets only, so they stay current even
        if a later benchmark fails; the final call prints the stdout targets.
        """
        for e in self._exporters:
            if e.target.is_stdout:
                if not intermediate:
                    content = e.exporter.serialize(entries, self.time_unit)
                    print()
                    print(content.decode("utf-8"))
            elif intermediate:
                content = e.exporter.serialize(entries, self.time_unit)
                write_to_file(e.target.filename, content)


def write_to_file(filename: str, content: bytes) -> None:
    """Write content over the start of an existing file."""
    with open(filename, "r+b") as stream:
        try:
            stream.write(content)
        except OSError as exc:
            raise OSError(f"Failed to export results to '{filename}'") from exc