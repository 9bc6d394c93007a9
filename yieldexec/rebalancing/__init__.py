"""Rebalancing between pool allocations.

Drift, turnover and cost computation, threshold-based rebalancing
decisions, and the trade list that moves one allocation to another.
"""

from yieldexec.rebalancing._config import (
    ActionType,
    RebalanceAction,
    ThresholdRebalancingConfig,
    ThresholdType,
)
from yieldexec.rebalancing._rebalancer import (
    compute_drifted_weights,
    compute_rebalancing_cost,
    compute_turnover,
    generate_rebalancing_actions,
    should_rebalance,
)

__all__ = [
    "ActionType",
    "RebalanceAction",
    "ThresholdRebalancingConfig",
    "ThresholdType",
    "compute_drifted_weights",
    "compute_rebalancing_cost",
    "compute_turnover",
    "generate_rebalancing_actions",
    "should_rebalance",
]
