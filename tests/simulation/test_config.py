"""Tests for simulation configs."""

from __future__ import annotations

import pytest

from yieldexec.market import Pool
from yieldexec.rebalancing import ThresholdType
from yieldexec.simulation import MarketSnapshot, MonteCarloConfig, PerformanceConfig


class TestMonteCarloConfig:
    def test_defaults(self) -> None:
        cfg = MonteCarloConfig()
        assert cfg.n_trials == 100
        assert cfg.n_days == 30
        assert cfg.volatility_range == (0.1, 0.96)
        assert cfg.sentiment_bounds == (0.1, 0.9)
        assert cfg.days_per_year == 365
        assert cfg.n_jobs is None
        assert cfg.random_state is None

    def test_frozen(self) -> None:
        cfg = MonteCarloConfig()
        with pytest.raises(AttributeError):
            cfg.n_trials = 5  # type: ignore[misc]

    def test_invalid_trials(self) -> None:
        with pytest.raises(ValueError, match="n_trials"):
            MonteCarloConfig(n_trials=0)

    def test_invalid_volatility_range(self) -> None:
        with pytest.raises(ValueError, match="volatility_range"):
            MonteCarloConfig(volatility_range=(0.8, 0.2))

    def test_sentiment_start_outside_bounds(self) -> None:
        with pytest.raises(ValueError, match="sentiment_start"):
            MonteCarloConfig(sentiment_start=0.95)

    def test_for_stress_test(self) -> None:
        cfg = MonteCarloConfig.for_stress_test()
        assert cfg.volatility_range == (0.7, 1.0)

    def test_for_calm_market(self) -> None:
        low, high = MonteCarloConfig.for_calm_market().volatility_range
        assert high <= 0.5


class TestPerformanceConfig:
    def test_defaults(self) -> None:
        cfg = PerformanceConfig()
        assert cfg.rebalance_interval == 7
        assert cfg.risk_free_rate == 0.02
        assert cfg.rebalance_threshold.threshold_type == ThresholdType.ABSOLUTE

    def test_invalid_interval(self) -> None:
        with pytest.raises(ValueError, match="rebalance_interval"):
            PerformanceConfig(rebalance_interval=0)

    def test_for_daily_rebalancing(self) -> None:
        cfg = PerformanceConfig.for_daily_rebalancing()
        assert cfg.rebalance_interval == 1
        assert cfg.rebalance_threshold.threshold == 0.02


class TestMarketSnapshot:
    def test_pools_become_tuple(self) -> None:
        snap = MarketSnapshot(pools=[Pool(name="P", apy=0.1)])  # type: ignore[arg-type]
        assert isinstance(snap.pools, tuple)

    def test_total_loss_bound(self) -> None:
        with pytest.raises(ValueError, match="below -100%"):
            MarketSnapshot(pools=(Pool(name="P", apy=0.1),), pool_returns={"P": -1.5})
