"""Post-switch allocation constraints.

Applied in order, each leaving weights that sum to one:

1. minimum stable share under elevated volatility,
2. single-pool cap (the high-volatility anchor is exempt),
3. emergency cap on pools correlated with a crashing reference market.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from yieldexec.allocation._config import AllocConfig
from yieldexec.market import Pool, RegimeParameters
from yieldexec.numeric import cap_weights, normalize_weights, redistribute_proportionally

logger = logging.getLogger(__name__)

_TOL: float = 1e-12


def enforce_min_stable(
    weights: npt.NDArray[np.float64],
    pools: Sequence[Pool],
    regime: RegimeParameters,
    config: AllocConfig,
) -> npt.NDArray[np.float64]:
    """Lift the aggregate stable share to ``min_stable_allocation``.

    Only active above ``min_stable_volatility``.  Stable pools are scaled
    up together and the others scaled down proportionally.
    """
    stable = np.array([p.is_stable for p in pools], dtype=bool)
    if regime.volatility <= config.min_stable_volatility or not stable.any():
        return weights

    share = float(weights[stable].sum())
    target = config.min_stable_allocation
    if share >= target:
        return weights

    w = weights.copy()
    if share > 0.0:
        w[stable] *= target / share
    else:
        w[stable] = target / stable.sum()
    rest = float(weights[~stable].sum())
    if rest > 0.0:
        w[~stable] *= (1.0 - target) / rest
    logger.debug(
        "Raised stable share from %.4f to %.4f at volatility %.2f",
        share,
        target,
        regime.volatility,
    )
    return normalize_weights(w)


def enforce_single_pool_cap(
    weights: npt.NDArray[np.float64],
    config: AllocConfig,
    anchor: int | None = None,
) -> npt.NDArray[np.float64]:
    """Water-fill so no pool except *anchor* exceeds the single-pool cap."""
    free = np.ones(weights.size, dtype=bool)
    if anchor is not None:
        free[anchor] = False
    return cap_weights(weights, config.max_single_pool_allocation, free)


def enforce_emergency_cap(
    weights: npt.NDArray[np.float64],
    pools: Sequence[Pool],
    regime: RegimeParameters,
    config: AllocConfig,
) -> npt.NDArray[np.float64]:
    """Cap correlated pools while the reference market is crashing.

    When ``external_market_change < emergency_market_drop`` every pool
    with correlation above ``emergency_correlation`` is held to
    ``emergency_cap``.  The excess goes, in order, to uncorrelated stable
    pools and then to other uncorrelated pools (both within the
    single-pool cap), then to uncorrelated stable pools and finally to any
    uncorrelated pool without a cap.
    """
    if regime.external_market_change >= config.emergency_market_drop:
        return weights

    correlated = np.array(
        [p.correlation_with_reference > config.emergency_correlation for p in pools],
        dtype=bool,
    )
    over = correlated & (weights > config.emergency_cap)
    if not over.any():
        return weights

    w = weights.copy()
    excess = float((w[over] - config.emergency_cap).sum())
    w[over] = config.emergency_cap

    stable = np.array([p.is_stable for p in pools], dtype=bool)
    cap = config.max_single_pool_allocation
    stages = (
        (stable & ~correlated, cap),
        (~stable & ~correlated, cap),
        (stable & ~correlated, None),
        (~correlated, None),
    )
    for recipients, limit in stages:
        if excess <= _TOL:
            break
        if recipients.any():
            w, excess = redistribute_proportionally(w, excess, recipients, limit)

    if excess > _TOL:
        logger.warning(
            "Emergency cap of %.2f is infeasible: every pool is correlated "
            "above %.2f; returning %.4f to the correlated pools",
            config.emergency_cap,
            config.emergency_correlation,
            excess,
        )
        w, _ = redistribute_proportionally(w, excess, correlated)
    else:
        logger.debug(
            "Emergency cap applied to %d correlated pool(s) after a %.2f market move",
            int(over.sum()),
            regime.external_market_change,
        )
    return normalize_weights(w)


def enforce_constraints(
    weights: npt.NDArray[np.float64],
    pools: Sequence[Pool],
    regime: RegimeParameters,
    config: AllocConfig | None = None,
    anchor: int | None = None,
) -> npt.NDArray[np.float64]:
    """Apply the minimum-stable, single-pool and emergency constraints.

    Parameters
    ----------
    weights : ndarray, shape (n_pools,)
        Normalised weights from :func:`apply_regime_switch`.
    pools : Sequence[Pool]
        Pools aligned with *weights*.
    regime : RegimeParameters
        Market regime.
    config : AllocConfig or None
        Allocator configuration.
    anchor : int or None
        Index of the high-volatility anchor, exempt from the single-pool
        cap.

    Returns
    -------
    ndarray, shape (n_pools,)
        Constrained weights summing to one.
    """
    if config is None:
        config = AllocConfig()
    w = enforce_min_stable(weights, pools, regime, config)
    w = enforce_single_pool_cap(w, config, anchor)
    return enforce_emergency_cap(w, pools, regime, config)
