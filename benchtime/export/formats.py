"""CSV and JSON exports of benchmark results."""

from __future__ import annotations

import csv
import dataclasses
import io
import json
import math
from collections.abc import Sequence
from decimal import Decimal
from typing import Any, Optional

from benchtime.export.markup import BenchmarkResult, RankedResult
from benchtime.units import Unit

_CSV_BASE_HEADERS = ("command", "mean", "stddev", "median", "user", "system", "min", "max")


def _format_float(value: float) -> str:
    """Shortest round-tripping decimal text, without exponent and without a '.0' suffix."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


class CsvExporter:
    """Comma separated values; the lists of times and exit codes are left out."""

    def serialize(self, entries: Sequence[RankedResult], unit: Optional[Unit] = None) -> bytes:
        """Render the results as CSV encoded in UTF-8."""
        results = [entry.result for entry in entries]
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        headers = list(_CSV_BASE_HEADERS)
        if results:
            headers.extend(f"parameter_{name}" for name in sorted(results[0].parameters))
        writer.writerow(headers)

        for res in results:
            numbers = (
                res.mean,
                res.stddev if res.stddev is not None else 0.0,
                res.median,
                res.user,
                res.system,
                res.min,
                res.max,
            )
            row = [res.command]
            row.extend(_format_float(n) for n in numbers)
            row.extend(value for _, value in sorted(res.parameters.items()))
            writer.writerow(row)

        return buffer.getvalue().encode("utf-8")


def _result_to_json(result: BenchmarkResult) -> dict[str, Any]:
    data = dataclasses.asdict(result)
    data["parameters"] = dict(sorted(result.parameters.items()))
    return data


class JsonExporter:
    """A pretty-printed JSON document with a list of results."""

    def serialize(self, entries: Sequence[RankedResult], unit: Optional[Unit] = None) -> bytes:
        """Render the results as JSON encoded in UTF-8, ending in a newline."""
        summary = {"results": [_result_to_json(entry.result) for entry in entries]}
        return (json.dumps(summary, indent=2, ensure_ascii=False) + "\n").encode("utf-8")