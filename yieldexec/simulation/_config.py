"""Configuration and inputs for allocation simulations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from yieldexec.market import Pool, RegimeParameters
from yieldexec.rebalancing import ThresholdRebalancingConfig


@dataclass(frozen=True)
class MonteCarloConfig:
    """Immutable configuration for :func:`run_monte_carlo`.

    Each trial walks ``n_days`` of synthetic market conditions: a
    volatility drawn uniformly from ``volatility_range`` every day and a
    sentiment random walk clipped to ``sentiment_bounds``.

    Parameters
    ----------
    n_trials : int
        Number of independent trials.
    n_days : int
        Days simulated per trial.
    volatility_range : tuple[float, float]
        Bounds of the daily volatility draw, inside ``[0, 1]``.
    sentiment_start : float
        Sentiment on the first day.
    sentiment_step : float
        Width of the daily sentiment move, drawn from
        ``[-step/2, step/2]``.
    sentiment_bounds : tuple[float, float]
        Clipping bounds of the sentiment walk.
    days_per_year : int
        Days used to turn an APY into a daily return.
    success_threshold : float
        Trial return above which a trial counts as a success.
    n_jobs : int or None
        Number of parallel jobs.  ``None`` runs in-process.
    random_state : int or None
        Random state for reproducibility.
    """

    n_trials: int = 100
    n_days: int = 30
    volatility_range: tuple[float, float] = (0.1, 0.96)
    sentiment_start: float = 0.5
    sentiment_step: float = 0.2
    sentiment_bounds: tuple[float, float] = (0.1, 0.9)
    days_per_year: int = 365
    success_threshold: float = 0.0
    n_jobs: int | None = None
    random_state: int | None = None

    def __post_init__(self) -> None:
        if self.n_trials < 1:
            raise ValueError(f"n_trials must be >= 1, got {self.n_trials}")
        if self.n_days < 1:
            raise ValueError(f"n_days must be >= 1, got {self.n_days}")
        low, high = self.volatility_range
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(
                f"volatility_range must satisfy 0 <= low <= high <= 1, "
                f"got {self.volatility_range}"
            )
        s_low, s_high = self.sentiment_bounds
        if not 0.0 <= s_low <= s_high <= 1.0:
            raise ValueError(
                f"sentiment_bounds must satisfy 0 <= low <= high <= 1, "
                f"got {self.sentiment_bounds}"
            )
        if not s_low <= self.sentiment_start <= s_high:
            raise ValueError(
                f"sentiment_start {self.sentiment_start} outside "
                f"sentiment_bounds {self.sentiment_bounds}"
            )
        if self.sentiment_step < 0:
            raise ValueError(
                f"sentiment_step must be non-negative, got {self.sentiment_step}"
            )
        if self.days_per_year < 1:
            raise ValueError(
                f"days_per_year must be >= 1, got {self.days_per_year}"
            )

    @classmethod
    def for_stress_test(cls) -> MonteCarloConfig:
        """Sustained high volatility with a wider sentiment walk."""
        return cls(volatility_range=(0.7, 1.0), sentiment_step=0.3)

    @classmethod
    def for_calm_market(cls) -> MonteCarloConfig:
        """Low volatility that never triggers the high-volatility branch."""
        return cls(volatility_range=(0.05, 0.4))


@dataclass(frozen=True)
class PerformanceConfig:
    """Immutable configuration for :func:`simulate_performance`.

    Parameters
    ----------
    rebalance_interval : int
        Steps between rebalancing reviews.
    rebalance_threshold : ThresholdRebalancingConfig
        Drift threshold checked at each review.
    days_per_year : int
        Steps per year used for annualisation.
    risk_free_rate : float
        Annual risk-free rate for the Sharpe ratio.
    """

    rebalance_interval: int = 7
    rebalance_threshold: ThresholdRebalancingConfig = field(
        default_factory=ThresholdRebalancingConfig
    )
    days_per_year: int = 365
    risk_free_rate: float = 0.02

    def __post_init__(self) -> None:
        if self.rebalance_interval < 1:
            raise ValueError(
                f"rebalance_interval must be >= 1, got {self.rebalance_interval}"
            )
        if self.days_per_year < 1:
            raise ValueError(
                f"days_per_year must be >= 1, got {self.days_per_year}"
            )

    @classmethod
    def for_daily_rebalancing(cls) -> PerformanceConfig:
        """Review every step with a 2pp drift threshold."""
        return cls(
            rebalance_interval=1,
            rebalance_threshold=ThresholdRebalancingConfig.for_absolute(0.02),
        )


@dataclass(frozen=True)
class MarketSnapshot:
    """One replay step: available pools, regime, and realised pool returns.

    Parameters
    ----------
    pools : tuple[Pool, ...]
        Pools available at this step.
    regime : RegimeParameters
        Market regime at this step.
    pool_returns : Mapping[str, float]
        Realised single-step return per pool name.  Missing pools are
        flat.  Returns below ``-1`` are rejected.
    """

    pools: tuple[Pool, ...]
    regime: RegimeParameters = field(default_factory=RegimeParameters)
    pool_returns: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pools", tuple(self.pools))
        for name, ret in self.pool_returns.items():
            if ret < -1.0:
                raise ValueError(f"return for pool {name!r} is below -100%: {ret}")
