"""Benchmark parameters: values, list tokenizing and numeric ranges."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

Number = Union[int, Decimal]

MAX_PARAMETERS = 100_000


class ParameterScanError(ValueError):
    """Raised when a parameter range cannot be scanned."""


def format_number(value: Number) -> str:
    """Render an integer or decimal without exponent notation."""
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


@dataclass(frozen=True)
class ParameterValue:
    """A parameter value: either free text or a number."""

    value: Union[str, int, Decimal]

    def __str__(self) -> str:
        if isinstance(self.value, str):
            return self.value
        return format_number(self.value)


ParameterNameAndValue = tuple[str, ParameterValue]


def tokenize(values: str) -> list[str]:
    """Split a comma separated list; a backslash escapes ',' and itself."""
    tokens: list[str] = []
    buf: list[str] = []
    chars = iter(values)
    for c in chars:
        if c == "\\":
            nxt = next(chars, None)
            if nxt in (",", "\\"):
                buf.append(nxt)
            elif nxt is None:
                buf.append("\\")
            else:
                buf.append("\\" + nxt)
        elif c == ",":
            tokens.append("".join(buf))
            buf = []
        else:
            buf.append(c)
    tokens.append("".join(buf))
    return tokens


class RangeStep:
    """The values start, start + step, ... up to and including end."""

    def __init__(self, start: Number, end: Number, step: Number) -> None:
        if end < start:
            raise ParameterScanError("Empty parameter range")
        if step == 0:
            raise ParameterScanError("Zero is not a valid parameter step")
        if step < 0 or (end - start + 1) // step > MAX_PARAMETERS:
            raise ParameterScanError("Parameter range is too large")
        self.start = start
        self.end = end
        self.step = step

    def __iter__(self) -> Iterator[Number]:
        state = self.start
        while state <= self.end:
            yield state
            state += self.step

    def __len__(self) -> int:
        return int((self.end - self.start) // self.step) + 1