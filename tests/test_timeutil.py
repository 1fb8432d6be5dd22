import pytest

from gpumon.timeutil import (
    Timestamp,
    add_time,
    difftime,
    difftime_u64,
    hmns_to_time,
    now,
    subtract_time,
    time_u64,
)


def test_now_is_monotonic():
    first = now()
    second = now()
    assert time_u64(second) >= time_u64(first)
    assert 0 <= first.nsec < 1_000_000_000


def test_difftime_same_is_zero():
    t = Timestamp(10, 123)
    assert difftime(t, t) == 0.0


def test_difftime_simple():
    assert difftime(Timestamp(1, 0), Timestamp(2, 500_000_000)) == pytest.approx(1.5)


def test_difftime_borrow_matches_u64():
    t0 = Timestamp(1, 900_000_000)
    t1 = Timestamp(3, 100_000_000)
    assert difftime(t0, t1) == pytest.approx(difftime_u64(t0, t1) / 1e9)


def test_difftime_antisymmetric():
    a = Timestamp(4, 250_000_000)
    b = Timestamp(9, 750_000_000)
    assert difftime(a, b) == pytest.approx(-difftime(b, a))


def test_time_u64_combines_fields():
    assert time_u64(Timestamp(2, 5)) == 2 * 1_000_000_000 + 5


def test_difftime_u64_is_difference_of_u64():
    t0 = Timestamp(5, 999_999_999)
    t1 = Timestamp(7, 1)
    assert difftime_u64(t0, t1) == time_u64(t1) - time_u64(t0)


def test_difftime_u64_wraps_when_negative():
    t0 = Timestamp(7, 0)
    t1 = Timestamp(5, 0)
    assert difftime_u64(t0, t1) == (1 << 64) - difftime_u64(t1, t0)


def test_hmns_to_time_hours_and_minutes():
    assert hmns_to_time(1, 2, 0) == Timestamp(3720, 0)


def test_add_time_is_commutative():
    a = Timestamp(1, 700_000)
    b = Timestamp(2, 600_000)
    assert add_time(a, b) == add_time(b, a)


def test_timestamp_is_immutable():
    t = hmns_to_time(0, 1, 0)
    with pytest.raises(AttributeError):
        t.sec = 5
    assert t == Timestamp(60, 0)
    assert time_u64(t) == 60 * 1_000_000_000