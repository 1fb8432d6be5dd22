"""Monotonic timestamps split into seconds and nanoseconds."""

from __future__ import annotations

import time
from dataclasses import dataclass

_NS_PER_SEC = 1_000_000_000
_U64_MASK = (1 << 64) - 1
# Carry limit used by the sub-second arithmetic helpers.
_SUBSEC_LIMIT = 1_000_000

_CLOCK = getattr(time, "CLOCK_MONOTONIC_RAW", getattr(time, "CLOCK_MONOTONIC", None))


@dataclass(frozen=True)
class Timestamp:
    """A point in time as whole seconds plus nanoseconds."""

    sec: int
    nsec: int


def now() -> Timestamp:
    """Current time of the raw monotonic clock."""
    if _CLOCK is not None and hasattr(time, "clock_gettime_ns"):
        total = time.clock_gettime_ns(_CLOCK)
    else:
        total = time.monotonic_ns()
    sec, nsec = divmod(total, _NS_PER_SEC)
    return Timestamp(sec, nsec)


def difftime(t0: Timestamp, t1: Timestamp) -> float:
    """Seconds elapsed from ``t0`` to ``t1``."""
    secdiff = float(t1.sec - t0.sec)
    if t1.nsec < t0.nsec:
        secdiff += (_NS_PER_SEC - t0.nsec + t1.nsec) / 1e9 - 1.0
    else:
        secdiff += (t1.nsec - t0.nsec) / 1e9
    return secdiff


def time_u64(t: Timestamp) -> int:
    """The timestamp as an unsigned 64-bit count of nanoseconds."""
    return (t.sec * _NS_PER_SEC + t.nsec) & _U64_MASK


def difftime_u64(t0: Timestamp, t1: Timestamp) -> int:
    """Nanoseconds from ``t0`` to ``t1`` as an unsigned 64-bit value."""
    return ((t1.sec - t0.sec) * _NS_PER_SEC + t1.nsec - t0.nsec) & _U64_MASK


def hmns_to_time(hour: int, minutes: int, nanosec: int) -> Timestamp:
    """Build a timestamp from hours, minutes and a sub-minute count."""
    return Timestamp(
        hour * 60 * 60 + 60 * minutes + nanosec // _SUBSEC_LIMIT,
        nanosec % _SUBSEC_LIMIT,
    )


def subtract_time(t0: Timestamp, t1: Timestamp) -> Timestamp:
    """``t0 - t1``, borrowing one second when the fraction goes negative."""
    if t0.nsec - t1.nsec < 0:
        return Timestamp(t0.sec - t1.sec - 1, t0.nsec - t1.nsec + _SUBSEC_LIMIT)
    return Timestamp(t0.sec - t1.sec, t0.nsec - t1.nsec)


def add_time(t0: Timestamp, t1: Timestamp) -> Timestamp:
    """``t0 + t1``, carrying one second when the fraction overflows."""
    if t0.nsec + t1.nsec > _SUBSEC_LIMIT:
        return Timestamp(t0.sec + t1.sec + 1, t0.nsec + t1.nsec - _SUBSEC_LIMIT)
    return Timestamp(t0.sec + t1.sec, t0.nsec + t1.nsec)