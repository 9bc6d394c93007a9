"""Regime-adaptive split of capital across yield pools."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from yieldexec.allocation._config import AllocConfig, AllocationRegime
from yieldexec.allocation._constraints import enforce_constraints
from yieldexec.allocation._regime import apply_regime_switch
from yieldexec.allocation._weights import compute_base_weights
from yieldexec.exceptions import DataError, EmptyPoolSetError, InvalidCapitalError
from yieldexec.market import Pool, RegimeParameters
from yieldexec.numeric import normalize_weights, round_to_total

logger = logging.getLogger(__name__)

_SUM_TOL: float = 1e-6


@dataclass(frozen=True)
class PoolAllocation:
    """Capital assigned to one pool."""

    pool: Pool
    weight: float
    amount: float


@dataclass(frozen=True)
class AllocationVector:
    """Normalised allocation of *capital* over a pool set.

    Attributes
    ----------
    capital : float
        Allocated capital.
    allocations : tuple[PoolAllocation, ...]
        One entry per pool, in input order.  Weights sum to one and
        amounts (rounded to 2 decimals) sum to *capital*.
    regime : AllocationRegime
        Branch taken by the regime switch.
    anchor_pool : str or None
        Name of the high-volatility anchor, if any.
    """

    capital: float
    allocations: tuple[PoolAllocation, ...]
    regime: AllocationRegime = AllocationRegime.BALANCED
    anchor_pool: str | None = None

    def __len__(self) -> int:
        return len(self.allocations)

    def __iter__(self) -> Iterator[PoolAllocation]:
        return iter(self.allocations)

    def __getitem__(self, name: str) -> PoolAllocation:
        for allocation in self.allocations:
            if allocation.pool.name == name:
                return allocation
        raise KeyError(name)

    @property
    def pools(self) -> list[Pool]:
        return [a.pool for a in self.allocations]

    @property
    def weights(self) -> pd.Series:
        """Weights indexed by pool name."""
        return pd.Series(
            [a.weight for a in self.allocations],
            index=[a.pool.name for a in self.allocations],
            name="weight",
            dtype=np.float64,
        )

    @property
    def amounts(self) -> pd.Series:
        """Amounts indexed by pool name."""
        return pd.Series(
            [a.amount for a in self.allocations],
            index=[a.pool.name for a in self.allocations],
            name="amount",
            dtype=np.float64,
        )

    @property
    def stable_weight(self) -> float:
        """Aggregate weight of stable pools."""
        return float(sum(a.weight for a in self.allocations if a.pool.is_stable))

    @property
    def is_high_volatility(self) -> bool:
        return self.regime is AllocationRegime.HIGH_VOLATILITY

    def to_frame(self) -> pd.DataFrame:
        """One row per pool with its attributes, weight and amount."""
        return pd.DataFrame(
            {
                "apy": [a.pool.apy for a in self.allocations],
                "is_stable": [a.pool.is_stable for a in self.allocations],
                "is_eco": [a.pool.is_eco for a in self.allocations],
                "correlation": [
                    a.pool.correlation_with_reference for a in self.allocations
                ],
                "weight": [a.weight for a in self.allocations],
                "amount": [a.amount for a in self.allocations],
            },
            index=pd.Index([a.pool.name for a in self.allocations], name="pool"),
        )


def _validate_inputs(capital: float, pools: Sequence[Pool]) -> None:
    if not np.isfinite(capital) or capital <= 0:
        raise InvalidCapitalError(f"capital must be strictly positive, got {capital}")
    if len(pools) == 0:
        raise EmptyPoolSetError("At least one pool is required")
    names = [p.name for p in pools]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise DataError(f"Pool names must be unique, duplicated: {duplicates}")


def allocate(
    capital: float,
    pools: Sequence[Pool],
    regime: RegimeParameters | None = None,
    config: AllocConfig | None = None,
) -> AllocationVector:
    """Split *capital* across *pools* for the current market regime.

    Base weights are computed per pool, routed through the volatility
    regime switch, constrained (minimum stable share, single-pool cap,
    emergency cap) and normalised.

    Parameters
    ----------
    capital : float
        Capital to allocate.  Must be strictly positive.
    pools : Sequence[Pool]
        Candidate pools with unique names.
    regime : RegimeParameters or None
        Market regime.  Defaults to ``RegimeParameters()``.
    config : AllocConfig or None
        Allocator configuration.  Defaults to ``AllocConfig()``.

    Returns
    -------
    AllocationVector
        Weights summing to one and amounts summing to *capital*.

    Raises
    ------
    InvalidCapitalError
        If ``capital <= 0``.
    EmptyPoolSetError
        If *pools* is empty.
    DataError
        If two pools share a name.
    NumericOverflowError
        If the weights cannot be normalised.
    """
    if regime is None:
        regime = RegimeParameters()
    if config is None:
        config = AllocConfig()
    _validate_inputs(capital, pools)

    base = compute_base_weights(pools, regime, config)
    weights, branch, anchor = apply_regime_switch(pools, base, regime, config)
    weights = enforce_constraints(weights, pools, regime, config, anchor)

    total = float(weights.sum())
    assert abs(total - 1.0) <= _SUM_TOL, f"allocation weights sum to {total}"
    weights = normalize_weights(np.clip(weights, 0.0, None))

    amounts = round_to_total(weights * capital, capital)
    logger.debug(
        "Allocated %.2f over %d pools (%s regime)", capital, len(pools), branch.value
    )
    return AllocationVector(
        capital=float(capital),
        allocations=tuple(
            PoolAllocation(pool=p, weight=float(w), amount=float(a))
            for p, w, a in zip(pools, weights, amounts)
        ),
        regime=branch,
        anchor_pool=None if anchor is None else pools[anchor].name,
    )
