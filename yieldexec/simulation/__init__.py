"""Simulation drivers for the capital allocator.

Monte Carlo trials over synthetic volatility and sentiment paths, run in
a joblib worker pool, and a historical replay with threshold
rebalancing.
"""

from yieldexec.simulation._config import (
    MarketSnapshot,
    MonteCarloConfig,
    PerformanceConfig,
)
from yieldexec.simulation._driver import (
    MonteCarloResult,
    PerformanceResult,
    run_monte_carlo,
    simulate_performance,
)
from yieldexec.simulation._statistics import MonteCarloSummary, summarize_trials

__all__ = [
    "MarketSnapshot",
    "MonteCarloConfig",
    "MonteCarloResult",
    "MonteCarloSummary",
    "PerformanceConfig",
    "PerformanceResult",
    "run_monte_carlo",
    "simulate_performance",
    "summarize_trials",
]
