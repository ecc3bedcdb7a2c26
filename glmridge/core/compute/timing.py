"""
Wall-clock timing for optimizer runs.

``minimize`` times its 'setup' and 'optimization' phases with a Timer
and stores ``Timer.result()`` on the returned Result, so every fitted
model can report where its fit time went.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall stopwatch plus named, accumulating sections.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('optimization'):
            opt = scipy.optimize.minimize(objective, w0, jac=True)
        timer.stop()
        timer.result()  # {'total_seconds': ..., 'optimization': ...}
    """

    def __init__(self) -> None:
        self._t0: float | None = None
        self._elapsed: float | None = None
        self._sections: dict[str, float] = {}

    def start(self) -> None:
        self._t0 = time.perf_counter()
        self._elapsed = None

    def stop(self) -> None:
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the block to section ``name``."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + time.perf_counter() - t0

    def result(self) -> dict[str, float]:
        """'total_seconds' plus one entry per section, in seconds."""
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a block of caller code.

    Usage:
        with timed() as timer:
            model = PoissonRegression(lambda_=0.1).fit(X, y)
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
