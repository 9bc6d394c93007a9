"""Per-pool base weights before the regime switch."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from yieldexec.allocation._config import AllocConfig
from yieldexec.market import Pool, RegimeParameters


def correlation_factor(
    pool: Pool,
    external_market_change: float,
    config: AllocConfig,
) -> float:
    """Multiplier reacting to a large move of the reference market.

    Only pools with ``|correlation| > correlation_threshold`` react, and
    only to moves larger than ``market_move_threshold``.  The move is
    signed by the correlation, so a drop shrinks positively correlated
    pools (``1 + 2·m``) and a rise boosts them (``1 + m``).
    """
    corr = pool.correlation_with_reference
    if abs(corr) <= config.correlation_threshold:
        return 1.0
    if abs(external_market_change) <= config.market_move_threshold:
        return 1.0
    move = external_market_change * float(np.sign(corr))
    if move < 0:
        return 1.0 + 2.0 * move
    return 1.0 + move


def compute_base_weights(
    pools: Sequence[Pool],
    regime: RegimeParameters,
    config: AllocConfig | None = None,
) -> npt.NDArray[np.float64]:
    """APY-driven raw weights adjusted for stability, eco, correlation, and risk.

    Parameters
    ----------
    pools : Sequence[Pool]
        Candidate pools.
    regime : RegimeParameters
        Supplies ``volatility`` and ``external_market_change``.
    config : AllocConfig or None
        Allocator configuration.  Defaults to ``AllocConfig()``.

    Returns
    -------
    ndarray, shape (n_pools,)
        Unnormalised weights, each at least ``config.weight_floor``.
    """
    if config is None:
        config = AllocConfig()

    vol = regime.volatility
    risk_skew = 1.0 + (config.risk_tolerance - 0.5) * 0.5
    weights = np.empty(len(pools), dtype=np.float64)

    for i, pool in enumerate(pools):
        w = pool.apy
        w *= (1.0 + vol) if pool.is_stable else (1.0 - 0.5 * vol)
        if vol > config.extreme_volatility:
            excess = vol - config.extreme_volatility
            w *= (1.0 + 3.0 * excess) if pool.is_stable else (1.0 - 2.0 * excess)
        if pool.is_eco:
            w *= 1.0 + config.eco_bonus
        w *= correlation_factor(pool, regime.external_market_change, config)
        w *= risk_skew
        weights[i] = max(config.weight_floor, w)

    return weights
