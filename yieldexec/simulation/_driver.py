"""Monte Carlo and historical replay drivers for the capital allocator."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from yieldexec.allocation import AllocConfig, allocate, project_yield
from yieldexec.exceptions import DataError, InvalidCapitalError
from yieldexec.market import Pool, RegimeParameters
from yieldexec.numeric import annualize_return, max_drawdown, sharpe_ratio
from yieldexec.rebalancing import should_rebalance
from yieldexec.simulation._config import (
    MarketSnapshot,
    MonteCarloConfig,
    PerformanceConfig,
)
from yieldexec.simulation._statistics import MonteCarloSummary, summarize_trials

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Monte Carlo
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MonteCarloResult:
    """Per-trial table and summary of a Monte Carlo run.

    Attributes
    ----------
    trials : pd.DataFrame
        One row per trial, indexed by trial number, with columns
        ``total_return``, ``annualized_return``, ``final_capital``,
        ``mean_net_apy``, ``mean_volatility``, ``mean_sentiment`` and
        ``high_volatility_days``.
    summary : MonteCarloSummary
        Statistics over ``trials["total_return"]``.
    """

    trials: pd.DataFrame
    summary: MonteCarloSummary


def _run_trial(
    trial: int,
    capital: float,
    pools: Sequence[Pool],
    base_regime: RegimeParameters,
    config: MonteCarloConfig,
    alloc_config: AllocConfig,
    seed: np.random.SeedSequence,
) -> dict[str, Any]:
    rng = np.random.default_rng(seed)
    low, high = config.volatility_range
    s_low, s_high = config.sentiment_bounds

    volatilities = rng.uniform(low, high, size=config.n_days)
    moves = (rng.random(config.n_days) - 0.5) * config.sentiment_step

    value = capital
    sentiment = config.sentiment_start
    sentiments = np.empty(config.n_days)
    net_apys = np.empty(config.n_days)
    high_vol_days = 0

    for day in range(config.n_days):
        regime = replace(
            base_regime, volatility=float(volatilities[day]), sentiment=sentiment
        )
        allocation = allocate(value, pools, regime, alloc_config)
        projection = project_yield(allocation, regime, alloc_config)

        net_apys[day] = projection.net_apy
        sentiments[day] = sentiment
        high_vol_days += int(allocation.is_high_volatility)
        value *= 1.0 + projection.net_apy / config.days_per_year

        sentiment = float(np.clip(sentiment + moves[day], s_low, s_high))

    total_return = value / capital - 1.0
    return {
        "trial": trial,
        "total_return": total_return,
        "annualized_return": annualize_return(
            total_return, config.n_days, config.days_per_year
        ),
        "final_capital": value,
        "mean_net_apy": float(net_apys.mean()),
        "mean_volatility": float(volatilities.mean()),
        "mean_sentiment": float(sentiments.mean()),
        "high_volatility_days": high_vol_days,
    }


def run_monte_carlo(
    capital: float,
    pools: Sequence[Pool],
    config: MonteCarloConfig | None = None,
    *,
    alloc_config: AllocConfig | None = None,
    base_regime: RegimeParameters | None = None,
) -> MonteCarloResult:
    """Simulate the allocator over synthetic volatility and sentiment paths.

    Every trial re-allocates daily at that day's volatility and sentiment
    and compounds the projected net APY.  Trials run through a joblib
    worker pool; each receives its own generator spawned from one
    :class:`numpy.random.SeedSequence`, so results depend only on
    ``config.random_state`` and not on ``config.n_jobs``.

    Parameters
    ----------
    capital : float
        Starting capital of every trial.
    pools : Sequence[Pool]
        Pool set allocated over.
    config : MonteCarloConfig or None
        Simulation configuration.
    alloc_config : AllocConfig or None
        Allocator configuration used on every day.
    base_regime : RegimeParameters or None
        Regime whose volatility and sentiment are replaced each day;
        its other fields (e.g. ``external_market_change``) are kept.

    Returns
    -------
    MonteCarloResult

    Raises
    ------
    InvalidCapitalError
        If ``capital <= 0``.
    EmptyPoolSetError
        If *pools* is empty.
    """
    if config is None:
        config = MonteCarloConfig()
    if alloc_config is None:
        alloc_config = AllocConfig()
    if base_regime is None:
        base_regime = RegimeParameters()
    # Validates capital and pools once before any worker starts.
    allocate(capital, pools, base_regime, alloc_config)

    seeds = np.random.SeedSequence(config.random_state).spawn(config.n_trials)
    rows = Parallel(n_jobs=config.n_jobs)(
        delayed(_run_trial)(
            trial, capital, pools, base_regime, config, alloc_config, seed
        )
        for trial, seed in enumerate(seeds)
    )

    trials = pd.DataFrame(rows).set_index("trial")
    summary = summarize_trials(trials["total_return"], config.success_threshold)
    logger.info(
        "Monte Carlo: %d trials x %d days, mean return %.4f, success rate %.2f",
        config.n_trials,
        config.n_days,
        summary.mean,
        summary.success_rate,
    )
    return MonteCarloResult(trials=trials, summary=summary)


# ---------------------------------------------------------------------------
# Historical replay
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PerformanceResult:
    """Outcome of replaying an allocation strategy over market snapshots.

    Attributes
    ----------
    total_return : float
        Final over initial capital, minus one.
    annualized_return : float
        Total return compounded to one year.
    annualized_volatility : float
        Standard deviation of step returns scaled by ``sqrt(days_per_year)``.
    sharpe_ratio : float
        ``(annualized_return − risk_free_rate) / annualized_volatility``.
    max_drawdown : float
        Largest peak-to-trough decline of the capital path.
    n_rebalances : int
        Rebalances executed after the initial allocation.
    capital_history : pd.Series
        Capital before the first step and after each step.
    allocation_history : pd.DataFrame
        Weights held during each step, one column per pool.
    """

    total_return: float
    annualized_return: float
    annualized_volatility: float
    sharpe_ratio: float
    max_drawdown: float
    n_rebalances: int
    capital_history: pd.Series
    allocation_history: pd.DataFrame


def simulate_performance(
    initial_capital: float,
    snapshots: Sequence[MarketSnapshot],
    config: PerformanceConfig | None = None,
    *,
    alloc_config: AllocConfig | None = None,
) -> PerformanceResult:
    """Replay the allocator over a sequence of market snapshots.

    Capital is allocated at the first snapshot.  Holdings then drift with
    each snapshot's pool returns; every ``rebalance_interval`` steps a new
    target allocation is computed and adopted when
    :func:`should_rebalance` fires.  Once the capital is wiped out the
    replay holds nothing: later steps record zero weights and zero
    capital, and the return is -100%.

    Parameters
    ----------
    initial_capital : float
        Capital at the start of the replay.
    snapshots : Sequence[MarketSnapshot]
        Replay steps in chronological order.
    config : PerformanceConfig or None
        Replay configuration.
    alloc_config : AllocConfig or None
        Allocator configuration.

    Returns
    -------
    PerformanceResult

    Raises
    ------
    InvalidCapitalError
        If ``initial_capital <= 0``.
    DataError
        If *snapshots* is empty.
    """
    if config is None:
        config = PerformanceConfig()
    if alloc_config is None:
        alloc_config = AllocConfig()
    if initial_capital <= 0:
        raise InvalidCapitalError(
            f"initial_capital must be strictly positive, got {initial_capital}"
        )
    if len(snapshots) == 0:
        raise DataError("At least one market snapshot is required")

    holdings = pd.Series(dtype=np.float64)
    capital_path = [float(initial_capital)]
    weight_rows: list[pd.Series] = []
    n_rebalances = 0

    for step, snapshot in enumerate(snapshots):
        capital = capital_path[-1]
        if capital <= 0.0:
            if weight_rows and weight_rows[-1].sum() > 0.0:
                logger.warning(
                    "Capital exhausted before step %d; holding nothing for the "
                    "remaining %d step(s)",
                    step,
                    len(snapshots) - step,
                )
            holdings = holdings * 0.0
            weight_rows.append(holdings.rename(step))
            capital_path.append(0.0)
            continue

        if step == 0 or step % config.rebalance_interval == 0:
            target = allocate(capital, snapshot.pools, snapshot.regime, alloc_config)
            if step == 0:
                holdings = target.amounts
            elif should_rebalance(holdings / capital, target, config.rebalance_threshold):
                holdings = target.amounts
                n_rebalances += 1
                logger.debug("Rebalanced at step %d (capital %.2f)", step, capital)

        weight_rows.append((holdings / holdings.sum()).rename(step))
        returns = pd.Series(snapshot.pool_returns, dtype=np.float64)
        holdings = holdings * (1.0 + returns.reindex(holdings.index, fill_value=0.0))
        capital_path.append(max(float(holdings.sum()), 0.0))

    capital_history = pd.Series(capital_path, name="capital")
    capital_history.index.name = "step"
    allocation_history = pd.DataFrame(weight_rows).fillna(0.0)
    allocation_history.index.name = "step"

    path = np.asarray(capital_path, dtype=np.float64)
    previous = path[:-1]
    # A step starting from zero capital has nothing at risk and returns 0.
    step_returns = (
        np.divide(path[1:], previous, out=np.ones_like(previous), where=previous > 0.0)
        - 1.0
    )
    volatility = (
        float(np.std(step_returns, ddof=1) * np.sqrt(config.days_per_year))
        if step_returns.size > 1
        else 0.0
    )
    total_return = capital_path[-1] / initial_capital - 1.0
    annualized = annualize_return(total_return, len(snapshots), config.days_per_year)

    return PerformanceResult(
        total_return=total_return,
        annualized_return=annualized,
        annualized_volatility=volatility,
        sharpe_ratio=sharpe_ratio(annualized, volatility, config.risk_free_rate),
        max_drawdown=max_drawdown(capital_path),
        n_rebalances=n_rebalances,
        capital_history=capital_history,
        allocation_history=allocation_history,
    )
