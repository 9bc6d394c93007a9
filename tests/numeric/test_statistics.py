"""Tests for summary statistics helpers."""

from __future__ import annotations

import pytest

from yieldexec.exceptions import NumericOverflowError
from yieldexec.numeric import (
    annualize_return,
    max_drawdown,
    sharpe_ratio,
    weighted_average,
)


class TestWeightedAverage:
    def test_equal_weights(self) -> None:
        assert weighted_average([1.0, 3.0], [1.0, 1.0]) == pytest.approx(2.0)

    def test_zero_weights_raise(self) -> None:
        with pytest.raises(NumericOverflowError):
            weighted_average([1.0, 3.0], [0.0, 0.0])


class TestMaxDrawdown:
    def test_peak_to_trough(self) -> None:
        assert max_drawdown([100.0, 120.0, 90.0, 130.0]) == pytest.approx(0.25)

    def test_monotone_path(self) -> None:
        assert max_drawdown([1.0, 2.0, 3.0]) == 0.0

    def test_short_path(self) -> None:
        assert max_drawdown([1.0]) == 0.0


class TestAnnualizeReturn:
    def test_full_year(self) -> None:
        assert annualize_return(0.1, 365, 365) == pytest.approx(0.1)

    def test_half_year(self) -> None:
        assert annualize_return(0.1, 180, 360) == pytest.approx(0.21)

    def test_total_loss(self) -> None:
        assert annualize_return(-1.0, 10) == -1.0

    def test_no_periods(self) -> None:
        assert annualize_return(0.1, 0) == 0.0


class TestSharpeRatio:
    def test_basic(self) -> None:
        assert sharpe_ratio(0.1, 0.2) == pytest.approx(0.5)

    def test_risk_free(self) -> None:
        assert sharpe_ratio(0.12, 0.2, risk_free_rate=0.02) == pytest.approx(0.5)

    def test_zero_std(self) -> None:
        assert sharpe_ratio(0.1, 0.0) == 0.0
