import pytest

from flexbar.stats import (
    RateSampler,
    format_clock,
    format_float,
    format_int,
    format_rate,
    format_time,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (100, "100"),
        (1000, "1000"),
        (1001, "1K"),
        (12_345_678, "12M"),
        (3_000_000_000_000_000, "3000P"),
        (10**40 + 999, "1" + "0" * 25 + "P"),
        (-1500, "-1K"),
        (-2_999_999, "-2M"),
    ],
)
def test_format_int(value, expected):
    assert format_int(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.5, "0.50"),
        (5.5, "5.5"),
        (42.4, "42"),
        (999, "999"),
        (1500, "1.5K"),
        (2_500_000, "2.5M"),
        (750_000_000_000, "750G"),
    ],
)
def test_format_float(value, expected):
    assert format_float(value) == expected


def test_format_rate_placeholder_cases():
    """Zero delta or zero duration has no meaningful rate"""
    assert format_rate(0, 1.0) is None
    assert format_rate(10, 0.0) is None
    assert format_rate(30, 2.0) == "15"


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (-1, "--"),
        (0.4, "0s"),
        (42, "42s"),
        (180, "3m"),
        (185, "3m5s"),
        (7800, "2h10m"),
        (3 * 86400 + 4 * 3600, "3d4h"),
    ],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_format_clock():
    assert format_clock(0) == "00:00:00"
    assert format_clock(3725) == "01:02:05"
    assert format_clock(100 * 3600) == "100:00:00"


def test_rate_sampler_waits_for_window():
    """Samples are only taken once the window has passed, in between the last one holds"""
    sampler = RateSampler(start_time=0.0, window=0.5)
    assert sampler.update(10, 0.3) == (0.0, 0)
    duration, delta = sampler.update(20, 0.6)
    assert duration == pytest.approx(0.6)
    assert delta == 20
    assert sampler.update(25, 0.9) == (duration, delta)
    duration, delta = sampler.update(40, 1.2)
    assert duration == pytest.approx(0.6)
    assert delta == 20
