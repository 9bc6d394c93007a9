"""Volatility regime switch between the balanced and anchored branches."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from yieldexec.allocation._config import AllocConfig, AllocationRegime
from yieldexec.exceptions import ConfigurationError
from yieldexec.market import Pool, RegimeParameters
from yieldexec.numeric import normalize_weights

logger = logging.getLogger(__name__)


def select_anchor(pools: Sequence[Pool], config: AllocConfig) -> int | None:
    """Index of the stable anchor pool, or ``None`` when there is none.

    ``config.anchor_pool`` selects by name; otherwise the first stable
    pool is used.

    Raises
    ------
    ConfigurationError
        If ``config.anchor_pool`` names a pool that is not present.
    """
    if config.anchor_pool is not None:
        for i, pool in enumerate(pools):
            if pool.name == config.anchor_pool:
                return i
        raise ConfigurationError(
            f"anchor_pool {config.anchor_pool!r} not found among "
            f"{[p.name for p in pools]}"
        )
    for i, pool in enumerate(pools):
        if pool.is_stable:
            return i
    return None


def _high_volatility_shares(
    pools: Sequence[Pool],
    base_weights: npt.NDArray[np.float64],
    regime: RegimeParameters,
    config: AllocConfig,
) -> npt.NDArray[np.float64]:
    shares = base_weights.copy()
    sentiment = regime.sentiment
    for i, pool in enumerate(pools):
        if pool.is_eco:
            shares[i] *= config.eco_boost_multiplier
        if pool.tracks_sentiment and sentiment > config.sentiment_boost_threshold:
            shares[i] *= 1.0 + (sentiment - config.sentiment_boost_threshold) * 2.0
    return shares


def _balanced_shares(
    pools: Sequence[Pool],
    base_weights: npt.NDArray[np.float64],
    regime: RegimeParameters,
    config: AllocConfig,
) -> npt.NDArray[np.float64]:
    shares = base_weights.copy()
    for i, pool in enumerate(pools):
        if pool.is_eco:
            shares[i] *= config.eco_boost_multiplier - config.balanced_eco_discount
        if pool.tracks_sentiment:
            shares[i] *= 1.0 + (regime.sentiment - 0.5)
        if pool.is_stable:
            shares[i] *= config.stable_premium
    return shares


def apply_regime_switch(
    pools: Sequence[Pool],
    base_weights: npt.NDArray[np.float64],
    regime: RegimeParameters,
    config: AllocConfig | None = None,
) -> tuple[npt.NDArray[np.float64], AllocationRegime, int | None]:
    """Turn base weights into normalised weights for the active regime.

    Above ``high_vol_threshold`` the anchor pool receives
    ``anchor_fraction`` and the remainder is split over the other pools
    in proportion to eco- and sentiment-boosted base weights.  Otherwise
    every pool gets a proportional share with smaller eco / stability
    multipliers.  Without a stable pool the balanced branch is used.

    Parameters
    ----------
    pools : Sequence[Pool]
        Candidate pools.
    base_weights : ndarray, shape (n_pools,)
        Output of :func:`compute_base_weights`.
    regime : RegimeParameters
        Supplies ``volatility`` and ``sentiment``.
    config : AllocConfig or None
        Allocator configuration.

    Returns
    -------
    tuple[ndarray, AllocationRegime, int or None]
        Normalised weights, the branch taken, and the anchor index
        (``None`` in the balanced branch).
    """
    if config is None:
        config = AllocConfig()

    if regime.volatility > config.high_vol_threshold:
        anchor = select_anchor(pools, config)
        if anchor is None:
            logger.warning(
                "Volatility %.2f exceeds %.2f but no stable anchor pool exists; "
                "using the balanced allocation",
                regime.volatility,
                config.high_vol_threshold,
            )
        else:
            logger.debug(
                "High volatility (%.2f > %.2f): anchoring %.0f%% in %r",
                regime.volatility,
                config.high_vol_threshold,
                config.anchor_fraction * 100,
                pools[anchor].name,
            )
            weights = np.zeros(len(pools), dtype=np.float64)
            if len(pools) == 1:
                weights[anchor] = 1.0
                return weights, AllocationRegime.HIGH_VOLATILITY, anchor

            shares = _high_volatility_shares(pools, base_weights, regime, config)
            shares[anchor] = 0.0
            weights = (1.0 - config.anchor_fraction) * normalize_weights(shares)
            weights[anchor] = config.anchor_fraction
            return weights, AllocationRegime.HIGH_VOLATILITY, anchor

    shares = _balanced_shares(pools, base_weights, regime, config)
    return normalize_weights(shares), AllocationRegime.BALANCED, None
