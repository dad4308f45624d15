import math

import pytest

from ev_dash.utils.numeric import clamp, clamp_floor, finite_or, round_half_up


@pytest.mark.parametrize(
    "value,expected",
    [(-0.2, 0.0), (0.0, 0.0), (55.5, 55.5), (100.0, 100.0), (100.2, 100.0)],
)
def test_clamp_keeps_value_in_range(value, expected):
    assert clamp(value, 0.0, 100.0) == expected


def test_clamp_floor_only_limits_from_below():
    assert clamp_floor(2.47, 2.5) == 2.5
    assert clamp_floor(6.0, 2.5) == 6.0


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, None, "abc", object()])
def test_finite_or_replaces_non_finite_values(bad):
    assert finite_or(bad) == 0.0
    assert finite_or(bad, default=25.0) == 25.0


def test_finite_or_accepts_numeric_strings_and_ints():
    assert finite_or("32") == 32.0
    assert finite_or(112) == 112.0


def test_round_half_up_sends_exact_ties_up():
    assert round_half_up(92.25, 1) == 92.3
    assert round_half_up(99.625, 2) == 99.63
    assert round_half_up(92.24, 1) == 92.2


def test_round_half_up_uses_the_stored_binary_value():
    # 2.675 is stored as 2.67499999..., so it is not a tie
    assert round_half_up(2.675, 2) == 2.67
