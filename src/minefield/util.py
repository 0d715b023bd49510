"""Progress reporting for the solver and the board search."""

from time import time
from typing import TextIO


def elapsed(start_time: float) -> str:
    """Time since `start_time`, as "HH:MM:SS.ss"."""
    hours, rem = divmod(time() - start_time, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def counted(n: int, noun: str) -> str:
    """`n` with thousands separators followed by `noun`, made plural unless n is 1."""
    return f"{n:,} {noun}" if n == 1 else f"{n:,} {noun}s"


def report(out: TextIO | None, message: str) -> None:
    """Write a progress line to `out`, if there is one."""
    if out is not None:
        print(message, file=out, flush=True)
