"""Tests for the shared rounding primitive."""

import pytest

from fitplan.planning.rounding import round_half_away_from_zero


@pytest.mark.parametrize(
    ("value", "decimals", "expected"),
    [
        (2.5, 0, 3.0),
        (3.5, 0, 4.0),
        (-2.5, 0, -3.0),
        (0.25, 1, 0.3),
        (12.34, 1, 12.3),
        (1999.6, 0, 2000.0),
        (0.0, 1, 0.0),
    ],
)
def test_round_half_away_from_zero(value, decimals, expected):
    assert round_half_away_from_zero(value, decimals) == expected


def test_never_returns_negative_zero():
    result = round_half_away_from_zero(-0.04, 1)
    assert result == 0.0
    assert str(result) == "0.0"
