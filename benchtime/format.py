"""Formatting of durations for display."""

from __future__ import annotations

from benchtime.units import Second, Unit


def format_duration(duration: Second, unit: Unit | None = None) -> str:
    """Format a duration, choosing the unit automatically unless one is given."""
    text, _ = format_duration_unit(duration, unit)
    return text


def format_duration_unit(duration: Second, unit: Unit | None = None) -> tuple[str, Unit]:
    """Like format_duration, but also return the unit used."""
    text, out_unit = format_duration_value(duration, unit)
    return f"{text} {out_unit.short_name()}", out_unit


def format_duration_value(duration: Second, unit: Unit | None = None) -> tuple[str, Unit]:
    """Format the bare value of a duration and return the unit it is expressed in."""
    if (duration < 0.001 and unit is None) or unit is Unit.MICROSECOND:
        chosen = Unit.MICROSECOND
    elif (duration < 1.0 and unit is None) or unit is Unit.MILLISECOND:
        chosen = Unit.MILLISECOND
    else:
        chosen = Unit.SECOND
    return chosen.format(duration), chosen