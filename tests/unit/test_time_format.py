"""
Tests for transport time formatting.
"""
import math

import pytest

from src.utils.time_format import format_clock, format_transport


@pytest.mark.parametrize("seconds,expected", [
    (0, "00:00"),
    (59.9, "00:59"),
    (61, "01:01"),
    (3599, "59:59"),
    (3661, "01:01"),
    (None, "00:00"),
    (-3, "00:00"),
    (math.nan, "00:00"),
    (math.inf, "00:00"),
])
def test_format_clock(seconds, expected):
    assert format_clock(seconds) == expected


def test_format_transport():
    assert format_transport(75, 180) == "01:15 / 03:00"
    assert format_transport(0, None) == "00:00 / 00:00"
