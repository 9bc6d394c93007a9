"""Tests for allocation constraints."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from yieldexec.allocation import (
    AllocConfig,
    enforce_constraints,
    enforce_emergency_cap,
    enforce_min_stable,
    enforce_single_pool_cap,
)
from yieldexec.market import Pool, RegimeParameters


@pytest.fixture()
def three_pools() -> list[Pool]:
    return [
        Pool(name="S", apy=0.1, is_stable=True),
        Pool(name="C", apy=0.3, correlation_with_reference=0.9),
        Pool(name="V", apy=0.2),
    ]


class TestEnforceMinStable:
    def test_lifts_stable_share(self, three_pools: list[Pool]) -> None:
        weights = np.array([0.1, 0.45, 0.45])
        result = enforce_min_stable(
            weights, three_pools, RegimeParameters(volatility=0.7), AllocConfig()
        )
        np.testing.assert_allclose(result, [0.2, 0.4, 0.4])

    def test_inactive_at_moderate_volatility(self, three_pools: list[Pool]) -> None:
        weights = np.array([0.1, 0.45, 0.45])
        result = enforce_min_stable(
            weights, three_pools, RegimeParameters(volatility=0.6), AllocConfig()
        )
        np.testing.assert_allclose(result, weights)


class TestEnforceSinglePoolCap:
    def test_caps(self) -> None:
        result = enforce_single_pool_cap(np.array([0.7, 0.2, 0.1]), AllocConfig())
        np.testing.assert_allclose(result, [0.4, 0.4, 0.2])

    def test_anchor_exempt(self) -> None:
        result = enforce_single_pool_cap(
            np.array([0.7, 0.2, 0.1]), AllocConfig(), anchor=0
        )
        np.testing.assert_allclose(result, [0.7, 0.2, 0.1])


class TestEnforceEmergencyCap:
    def test_staged_redistribution(self, three_pools: list[Pool]) -> None:
        weights = np.array([0.3, 0.4, 0.3])
        regime = RegimeParameters(external_market_change=-0.6)
        result = enforce_emergency_cap(weights, three_pools, regime, AllocConfig())
        np.testing.assert_allclose(result, [0.55, 0.05, 0.4])

    def test_inactive_on_mild_drop(self, three_pools: list[Pool]) -> None:
        weights = np.array([0.3, 0.4, 0.3])
        regime = RegimeParameters(external_market_change=-0.4)
        result = enforce_emergency_cap(weights, three_pools, regime, AllocConfig())
        np.testing.assert_allclose(result, weights)

    def test_negative_correlation_not_capped(self) -> None:
        pools = [
            Pool(name="S", apy=0.1, is_stable=True),
            Pool(name="H", apy=0.3, correlation_with_reference=-0.9),
        ]
        weights = np.array([0.6, 0.4])
        regime = RegimeParameters(external_market_change=-0.6)
        result = enforce_emergency_cap(weights, pools, regime, AllocConfig())
        np.testing.assert_allclose(result, weights)

    def test_all_correlated_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        pools = [
            Pool(name="A", apy=0.1, correlation_with_reference=0.9),
            Pool(name="B", apy=0.1, correlation_with_reference=0.8),
        ]
        regime = RegimeParameters(external_market_change=-0.7)
        with caplog.at_level(logging.WARNING, logger="yieldexec"):
            result = enforce_emergency_cap(
                np.array([0.5, 0.5]), pools, regime, AllocConfig()
            )
        assert result.sum() == pytest.approx(1.0)
        assert "infeasible" in caplog.text


class TestEnforceConstraints:
    def test_sum_preserved(self, mixed_pools: list[Pool]) -> None:
        rng = np.random.default_rng(0)
        weights = rng.dirichlet(np.ones(len(mixed_pools)))
        regime = RegimeParameters(volatility=0.7, external_market_change=-0.6)
        result = enforce_constraints(weights, mixed_pools, regime)
        assert result.sum() == pytest.approx(1.0)
        assert result[2] <= 0.05 + 1e-9
