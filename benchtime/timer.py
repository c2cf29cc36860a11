"""Running a command and measuring its wall clock and CPU time."""

from __future__ import annotations

import subprocess
import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import IO, Any, Union

from benchtime.units import Second

try:
    import resource
except ImportError:  # not available on Windows
    resource = None  # type: ignore[assignment]

_CHUNK_SIZE = 64 << 10
_MICROSEC_PER_SEC = 1_000_000

StreamSpec = Union[int, IO[Any], None]


@dataclass(frozen=True)
class CPUTimes:
    """A snapshot of the CPU time used by finished child processes."""

    user_usec: int
    system_usec: int
    memory_usage_byte: int


@dataclass(frozen=True)
class CPUInterval:
    """CPU time spent between two snapshots."""

    user: Second
    system: Second


@dataclass(frozen=True)
class TimerResult:
    """Timing summary of one command execution."""

    time_real: Second
    time_user: Second
    time_system: Second
    memory_usage_byte: int
    status: int


def get_cpu_times() -> CPUTimes:
    """Read the user and system time of all waited-for child processes."""
    if resource is None:
        return CPUTimes(0, 0, 0)
    usage = resource.getrusage(resource.RUSAGE_CHILDREN)
    # Linux and the BSDs report maxrss in KiB, Darwin in bytes.
    if sys.platform == "darwin":
        max_rss_byte = usage.ru_maxrss
    else:
        max_rss_byte = usage.ru_maxrss * 1024
    return CPUTimes(
        user_usec=round(usage.ru_utime * _MICROSEC_PER_SEC),
        system_usec=round(usage.ru_stime * _MICROSEC_PER_SEC),
        memory_usage_byte=max(int(max_rss_byte), 0),
    )


def cpu_time_interval(start: CPUTimes, end: CPUTimes) -> CPUInterval:
    """Compute the CPU time spent between two snapshots, in seconds."""
    return CPUInterval(
        user=(end.user_usec - start.user_usec) * 1e-6,
        system=(end.system_usec - start.system_usec) * 1e-6,
    )


class CPUTimer:
    """Measures the CPU time used by child processes since creation."""

    def __init__(self) -> None:
        self._start = get_cpu_times()

    def stop(self) -> tuple[Second, Second, int]:
        """Return (user, system, peak memory in bytes) since the timer started."""
        end = get_cpu_times()
        interval = cpu_time_interval(self._start, end)
        return interval.user, interval.system, end.memory_usage_byte


class WallClockTimer:
    """Measures elapsed real time since creation."""

    def __init__(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> Second:
        """Return the seconds elapsed since the timer started."""
        return time.perf_counter() - self._start


def _discard(stream: IO[bytes]) -> None:
    while stream.read(_CHUNK_SIZE):
        pass


def execute_and_measure(
    args: Sequence[str],
    stdin: StreamSpec = subprocess.DEVNULL,
    stdout: StreamSpec = subprocess.DEVNULL,
    stderr: StreamSpec = subprocess.DEVNULL,
    env: Mapping[str, str] | None = None,
) -> TimerResult:
    """Run a command to completion and return its timing summary.

    If stdout is subprocess.PIPE, the output is read and thrown away.
    Errors starting the process propagate as OSError.
    """
    cpu_timer = CPUTimer()
    wall_clock_timer = WallClockTimer()
    with subprocess.Popen(
        list(args),
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
        env=dict(env) if env is not None else None,
    ) as process:
        if process.stdout is not None:
            _discard(process.stdout)
        status = process.wait()

    time_real = wall_clock_timer.stop()
    time_user, time_system, memory_usage_byte = cpu_timer.stop()
    return TimerResult(
        time_real=time_real,
        time_user=time_user,
        time_system=time_system,
        memory_usage_byte=memory_usage_byte,
        status=status,
    )