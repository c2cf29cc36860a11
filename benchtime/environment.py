"""Helpers about the environment benchmarked processes run in."""

from __future__ import annotations

import os
import random

_POSIX = os.name == "posix"


def extract_exit_code(returncode: int | None) -> int | None:
    """Map a subprocess return code to an exit code.

    On POSIX a process killed by signal N reports -N; it is mapped to
    128 + N, as shells do.
    """
    if returncode is None:
        return None
    if _POSIX and returncode < 0:
        return 128 - returncode
    return returncode


def randomized_offset_value() -> str:
    """A string of random length (0 to 4095) used to offset the environment size."""
    return "X" * random.randrange(4096)