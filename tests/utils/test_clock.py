"""Tests for the clock helpers."""

from __future__ import annotations

from unittest.mock import patch

from taskledger.utils.clock import FixedClock, system_clock


def test_system_clock_truncates_to_seconds():
    with patch("taskledger.utils.clock.time.time", return_value=1234.9):
        assert system_clock() == 1234


def test_fixed_clock_advance():
    clock = FixedClock(100)
    assert clock() == 100
    assert clock.advance(25) == 125
    assert clock() == 125


def test_fixed_clock_default_is_positive():
    assert FixedClock()() == 1
