"""Periodic triggers driven by a wrapping counter clock."""

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]


def _monotonic_millis() -> int:
    return time.monotonic_ns() // 1_000_000


class Periodic:
    """Becomes ready once every ``period`` ticks of ``clock``.

    Counter arithmetic wraps at the width of the counter, so a counter that
    rolls over keeps measuring elapsed time correctly.
    """

    _mask = 0xFFFFFFFF

    def __init__(self, period: int = 1, clock: Clock | None = None) -> None:
        self._clock = clock if clock is not None else _monotonic_millis
        self.period = period & self._mask
        self.last = 0
        self.reset()

    def now(self) -> int:
        return int(self._clock()) & self._mask

    def elapsed(self) -> int:
        return (self.now() - self.last) & self._mask

    def remaining(self) -> int:
        return (self.period - self.elapsed()) & self._mask

    def ready(self) -> bool:
        """Return True once the period has passed, restarting the count."""
        is_ready = self.elapsed() >= self.period
        if is_ready:
            self.reset()
        return is_ready

    def reset(self) -> None:
        self.last = self.now()

    def trigger(self) -> None:
        """Make the next ``ready()`` call return True."""
        self.last = (self.now() - self.period) & self._mask

    def __bool__(self) -> bool:
        return self.ready()


class _Periodic16(Periodic):
    _mask = 0xFFFF


class _Periodic8(Periodic):
    _mask = 0xFF


def every_n_millis(period: int, clock: Clock | None = None) -> Periodic:
    """Trigger every ``period`` milliseconds of a millisecond ``clock``."""
    return Periodic(period, clock if clock is not None else _monotonic_millis)


def every_n_seconds(period: int, clock: Clock | None = None) -> Periodic:
    millis = clock if clock is not None else _monotonic_millis
    return _Periodic16(period, lambda: millis() // 1000)


def every_n_minutes(period: int, clock: Clock | None = None) -> Periodic:
    millis = clock if clock is not None else _monotonic_millis
    return _Periodic16(period, lambda: millis() // 60_000)


def every_n_hours(period: int, clock: Clock | None = None) -> Periodic:
    millis = clock if clock is not None else _monotonic_millis
    return _Periodic8(period, lambda: millis() // 3_600_000)