"""Elapsed-time helper used for run and rule durations."""

import time


class Timer:
    """Tracks elapsed milliseconds since construction.

    Examples
    --------
    >>> t = Timer()
    >>> t.duration_ms >= 0
    True
    """

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return (time.perf_counter() - self._start) * 1000
