"""Tests for rounding helpers."""

from __future__ import annotations

import numpy as np
import pytest

from yieldexec.numeric import (
    clamp,
    round_amount,
    round_half_up,
    round_price,
    round_to_total,
)


class TestRoundPrice:
    def test_six_decimals(self) -> None:
        assert round_price(1.23456789) == 1.234568

    def test_already_rounded(self) -> None:
        assert round_price(0.9998) == 0.9998


class TestRoundAmount:
    def test_two_decimals(self) -> None:
        assert round_amount(2.3449) == 2.34
        assert round_amount(1.006) == 1.01


class TestRoundHalfUp:
    def test_ties_round_up(self) -> None:
        assert round_half_up(5.5) == 6
        assert round_half_up(9.5) == 10

    def test_below_half(self) -> None:
        assert round_half_up(5.4) == 5


class TestClamp:
    def test_inside(self) -> None:
        assert clamp(0.5, 0.0, 1.0) == 0.5

    def test_bounds(self) -> None:
        assert clamp(-1.0, 0.0, 1.0) == 0.0
        assert clamp(2.0, 0.0, 1.0) == 1.0


class TestRoundToTotal:
    def test_residual_on_largest(self) -> None:
        result = round_to_total([1 / 3, 1 / 3, 1 / 3], 1.0)
        np.testing.assert_allclose(result, [0.34, 0.33, 0.33])

    def test_preserves_total(self) -> None:
        rng = np.random.default_rng(3)
        values = rng.dirichlet(np.ones(7)) * 1234.567
        result = round_to_total(values, 1234.567)
        assert result.sum() == pytest.approx(round(1234.567, 2), abs=1e-9)

    def test_empty(self) -> None:
        assert round_to_total([], 10.0).size == 0
