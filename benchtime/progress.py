"""Progress bars shown while benchmarking."""

from __future__ import annotations

from tqdm import tqdm

from benchtime.options import OutputStyleOption

_BAR_FORMAT = " {desc:<30} {bar} ETA {remaining} "


def get_progress_bar(length: int, msg: str, option: OutputStyleOption) -> tqdm:
    """Return a pre-configured progress bar; it is hidden for the basic and color styles."""
    if option in (OutputStyleOption.BASIC, OutputStyleOption.COLOR):
        return tqdm(total=length, desc=msg, disable=True)
    return tqdm(
        total=length,
        desc=msg,
        bar_format=_BAR_FORMAT,
        dynamic_ncols=True,
        leave=False,
        mininterval=0.08,
    )