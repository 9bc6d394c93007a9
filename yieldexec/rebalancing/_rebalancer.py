"""Rebalancing decision logic for pool allocations.

Weights are handled as :class:`pandas.Series` keyed by pool name.  Two
allocations over different pool sets are aligned on the union of their
names, missing pools counting as zero weight.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from yieldexec.allocation import AllocationVector
from yieldexec.rebalancing._config import (
    ActionType,
    RebalanceAction,
    ThresholdRebalancingConfig,
    ThresholdType,
)

logger = logging.getLogger(__name__)

# Amounts below one cent count as no position.
_MIN_POSITION: float = 1e-2


def _as_series(weights: AllocationVector | pd.Series) -> pd.Series:
    if isinstance(weights, AllocationVector):
        return weights.weights
    return weights.astype(np.float64)


def _align(
    current: AllocationVector | pd.Series,
    target: AllocationVector | pd.Series,
) -> tuple[pd.Series, pd.Series]:
    current_s, target_s = _as_series(current), _as_series(target)
    return current_s.align(target_s, join="outer", fill_value=0.0)


def compute_drifted_weights(
    weights: AllocationVector | pd.Series,
    returns: pd.Series,
) -> pd.Series:
    """Compute pool weights after one period of returns.

    Parameters
    ----------
    weights : AllocationVector or Series
        Current weights (must sum to 1).
    returns : Series
        Single-period pool returns indexed by pool name.  Pools without a
        return are treated as flat.

    Returns
    -------
    Series
        Drifted weights after applying returns.
    """
    w = _as_series(weights)
    r = returns.reindex(w.index, fill_value=0.0).astype(np.float64)
    grown = w * (1.0 + r)
    total = grown.sum()
    if total == 0.0:
        return grown
    return grown / total


def compute_turnover(
    current: AllocationVector | pd.Series,
    target: AllocationVector | pd.Series,
) -> float:
    """Compute one-way turnover between current and target weights.

    Returns
    -------
    float
        One-way turnover (sum of absolute weight changes / 2).
    """
    current_w, target_w = _align(current, target)
    return float((current_w - target_w).abs().sum() / 2.0)


def compute_rebalancing_cost(
    current: AllocationVector | pd.Series,
    target: AllocationVector | pd.Series,
    transaction_costs: float | pd.Series,
) -> float:
    """Compute the total transaction cost of rebalancing.

    Parameters
    ----------
    current : AllocationVector or Series
        Current weights.
    target : AllocationVector or Series
        Target weights.
    transaction_costs : float or Series
        Per-unit transaction cost (scalar for uniform costs, a Series
        keyed by pool name for pool-specific costs).

    Returns
    -------
    float
        Total rebalancing cost as a fraction of allocated capital.
    """
    current_w, target_w = _align(current, target)
    trades = (target_w - current_w).abs()
    if isinstance(transaction_costs, pd.Series):
        costs = transaction_costs.reindex(trades.index, fill_value=0.0)
        return float((costs * trades).sum())
    return float((transaction_costs * trades).sum())


def should_rebalance(
    current: AllocationVector | pd.Series,
    target: AllocationVector | pd.Series,
    config: ThresholdRebalancingConfig | None = None,
) -> bool:
    """Determine whether any pool breaches the drift threshold.

    Parameters
    ----------
    current : AllocationVector or Series
        Current (drifted) weights.
    target : AllocationVector or Series
        Target weights from the allocator.
    config : ThresholdRebalancingConfig or None
        Threshold configuration.  Defaults to absolute 5pp threshold.

    Returns
    -------
    bool
        ``True`` if at least one pool breaches the threshold.
    """
    if config is None:
        config = ThresholdRebalancingConfig()

    current_w, target_w = _align(current, target)
    drifts = (current_w - target_w).abs().to_numpy()
    targets = target_w.to_numpy()

    if config.threshold_type == ThresholdType.ABSOLUTE:
        return bool(np.any(drifts > config.threshold))

    # Relative threshold: drift / target (guard against zero targets)
    safe_targets = np.where(targets > 0, targets, np.inf)
    return bool(np.any(drifts / safe_targets > config.threshold))


def generate_rebalancing_actions(
    current: AllocationVector,
    target: AllocationVector,
    threshold: float = 0.05,
) -> list[RebalanceAction]:
    """List the trades that move *current* to *target*.

    Pools present only in *target* are entered and pools present only in
    *current* are exited.  A held pool is increased or reduced when its
    amount changes by more than ``threshold`` times its current amount.

    Parameters
    ----------
    current : AllocationVector
        Allocation currently held.
    target : AllocationVector
        Allocation to move to.
    threshold : float
        Relative amount change below which a held pool is left alone.

    Returns
    -------
    list[RebalanceAction]
        Actions ordered by pool name.
    """
    if threshold < 0:
        raise ValueError(f"threshold must be non-negative, got {threshold}")

    current_amounts, target_amounts = current.amounts.align(
        target.amounts, join="outer", fill_value=0.0
    )
    actions: list[RebalanceAction] = []
    for name in sorted(current_amounts.index):
        held = float(current_amounts[name])
        wanted = float(target_amounts[name])

        if held < _MIN_POSITION and wanted < _MIN_POSITION:
            continue
        if held < _MIN_POSITION:
            kind = ActionType.ENTER
        elif wanted < _MIN_POSITION:
            kind = ActionType.EXIT
        elif abs(wanted - held) > threshold * held:
            kind = ActionType.INCREASE if wanted > held else ActionType.REDUCE
        else:
            continue
        actions.append(
            RebalanceAction(
                pool=name, action=kind, current_amount=held, target_amount=wanted
            )
        )

    logger.debug("Generated %d rebalancing action(s)", len(actions))
    return actions
