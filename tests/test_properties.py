"""Property-based tests for the yieldexec library using Hypothesis.

Each test encodes an invariant that must hold for all valid inputs.
Allocation tests use max_examples=100; annealing tests run a short
search budget with max_examples=25 and no deadline.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from yieldexec.allocation import allocate
from yieldexec.execution import OptConfig, optimize_orders
from yieldexec.market import OrderBookSnapshot, Pool, RegimeParameters
from yieldexec.numeric import cap_weights, round_to_total
from yieldexec.rebalancing import compute_drifted_weights, compute_turnover

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

_UNIT = st.floats(min_value=0.0, max_value=1.0, allow_nan=False, allow_infinity=False)

_POOL_ATTRS = st.tuples(
    st.floats(min_value=0.0, max_value=2.0, allow_nan=False, allow_infinity=False),
    st.booleans(),
    st.booleans(),
    st.floats(min_value=-1.0, max_value=1.0, allow_nan=False, allow_infinity=False),
    st.booleans(),
)


def _pools(min_size: int = 1, max_size: int = 8) -> st.SearchStrategy[list[Pool]]:
    """Return a strategy producing uniquely named pools."""

    def _build(attrs: list[tuple[float, bool, bool, float, bool]]) -> list[Pool]:
        return [
            Pool(
                name=f"POOL_{i}",
                apy=apy,
                is_stable=stable,
                is_eco=eco,
                correlation_with_reference=corr,
                tracks_sentiment=tracks,
            )
            for i, (apy, stable, eco, corr, tracks) in enumerate(attrs)
        ]

    return st.lists(_POOL_ATTRS, min_size=min_size, max_size=max_size).map(_build)


def _regime() -> st.SearchStrategy[RegimeParameters]:
    return st.builds(
        RegimeParameters,
        volatility=_UNIT,
        external_market_change=st.floats(
            min_value=-1.0, max_value=1.0, allow_nan=False, allow_infinity=False
        ),
        sentiment=_UNIT,
    )


def _weight_array(n: int) -> st.SearchStrategy[np.ndarray]:
    """Return a strategy producing a normalized long-only weight vector of length n."""

    def _normalize(vals: list[float]) -> np.ndarray:
        arr = np.array(vals, dtype=np.float64)
        if arr.sum() == 0.0:
            arr = np.ones(n, dtype=np.float64)
        return arr / arr.sum()

    return st.lists(_UNIT, min_size=n, max_size=n).map(_normalize)


def _book() -> OrderBookSnapshot:
    bids = [(round(1.0 - 0.001 * i, 6), 5000.0) for i in range(1, 11)]
    asks = [(round(1.0 + 0.001 * i, 6), 5000.0) for i in range(1, 11)]
    return OrderBookSnapshot.from_levels(1.0, bids=bids, asks=asks)


# ---------------------------------------------------------------------------
# Test 1: allocation weights sum to one, amounts sum to capital
# ---------------------------------------------------------------------------


@given(
    pools=_pools(),
    regime=_regime(),
    capital=st.floats(min_value=0.01, max_value=1e7, allow_nan=False),
)
@settings(max_examples=100)
def test_allocation_normalized(
    pools: list[Pool], regime: RegimeParameters, capital: float
) -> None:
    """Weights sum to 1 and rounded amounts sum to the capital."""
    result = allocate(capital, pools, regime)
    assert np.isclose(result.weights.sum(), 1.0, atol=1e-6)
    assert (result.weights >= 0.0).all()
    assert abs(result.amounts.sum() - capital) <= 1e-2 + 1e-9 * capital


# ---------------------------------------------------------------------------
# Test 2: single-pool cap
# ---------------------------------------------------------------------------


@given(pools=_pools(min_size=3), regime=_regime())
@settings(max_examples=100)
def test_single_pool_cap(pools: list[Pool], regime: RegimeParameters) -> None:
    """No pool except the high-volatility anchor exceeds the 0.4 cap.

    The emergency branch is excluded: with every pool correlated it may
    hand the capped excess back to correlated pools.
    """
    assume(regime.external_market_change >= -0.5)
    result = allocate(1000.0, pools, regime)
    weights = result.weights
    if result.anchor_pool is not None:
        weights = weights.drop(result.anchor_pool)
    assert weights.max() <= 0.4 + 1e-9


# ---------------------------------------------------------------------------
# Test 3: stable share is monotone in volatility
# ---------------------------------------------------------------------------


@given(pools=_pools(min_size=2, max_size=6), low=_UNIT, high=_UNIT)
@settings(max_examples=100)
def test_stable_share_monotone(pools: list[Pool], low: float, high: float) -> None:
    """Raising volatility never lowers the aggregate stable weight."""
    low, high = min(low, high), max(low, high)
    calm = allocate(1000.0, pools, RegimeParameters(volatility=low))
    rough = allocate(1000.0, pools, RegimeParameters(volatility=high))
    assert rough.stable_weight >= calm.stable_weight - 1e-9


# ---------------------------------------------------------------------------
# Test 4: emergency cap on correlated pools
# ---------------------------------------------------------------------------


@given(pools=_pools(min_size=2), volatility=_UNIT)
@settings(max_examples=100)
def test_emergency_cap(pools: list[Pool], volatility: float) -> None:
    """Pools correlated above 0.7 hold at most 5% during a crash."""
    correlated = [p.name for p in pools if p.correlation_with_reference > 0.7]
    assume(correlated and len(correlated) < len(pools))
    regime = RegimeParameters(volatility=volatility, external_market_change=-0.6)
    result = allocate(1000.0, pools, regime)
    assert (result.weights[correlated] <= 0.05 + 1e-9).all()


# ---------------------------------------------------------------------------
# Test 5: order set invariants
# ---------------------------------------------------------------------------


@given(
    target=st.floats(min_value=100.0, max_value=20_000.0, allow_nan=False),
    volatility=_UNIT,
    correlation=_UNIT,
    seed=st.integers(min_value=0, max_value=2**32 - 1),
)
@settings(max_examples=25, deadline=None)
def test_order_set_invariants(
    target: float, volatility: float, correlation: float, seed: int
) -> None:
    """Returned orders number 1..15, hold no dust and are price-sorted."""
    regime = RegimeParameters(volatility=volatility, external_correlation=correlation)
    cfg = OptConfig(max_iterations=60)
    orders = optimize_orders(_book(), target, regime, cfg, rng=seed)
    assert 1 <= len(orders) <= 15
    assert all(o.amount >= cfg.min_order_amount for o in orders)
    assert abs(sum(o.amount for o in orders) - target) <= 1e-2
    prices = [o.price for o in orders]
    assert prices == sorted(prices)


# ---------------------------------------------------------------------------
# Test 6: numeric helpers
# ---------------------------------------------------------------------------


@given(
    values=st.lists(
        st.floats(min_value=0.0, max_value=1e6, allow_nan=False),
        min_size=1,
        max_size=15,
    )
)
@settings(max_examples=100)
def test_round_to_total_preserves_total(values: list[float]) -> None:
    """Rounded values keep the rounded total of their inputs."""
    total = float(np.sum(values))
    rounded = round_to_total(values, total)
    assert abs(rounded.sum() - round(total, 2)) <= 1e-6


@given(
    n=st.integers(min_value=1, max_value=8).flatmap(
        lambda n: st.tuples(st.just(n), _weight_array(n))
    ),
    cap=st.floats(min_value=0.05, max_value=1.0, allow_nan=False),
)
@settings(max_examples=100)
def test_cap_weights_bounded(n: tuple[int, np.ndarray], cap: float) -> None:
    """Capped weights keep their total and respect the effective cap."""
    size, weights = n
    capped = cap_weights(weights, cap)
    assert np.isclose(capped.sum(), 1.0, atol=1e-9)
    assert capped.max() <= max(cap, 1.0 / size) + 1e-9


# ---------------------------------------------------------------------------
# Test 7: rebalancing over named weights
# ---------------------------------------------------------------------------


@given(
    n=st.integers(min_value=2, max_value=8).flatmap(
        lambda n: st.tuples(st.just(n), _weight_array(n), _weight_array(n))
    )
)
@settings(max_examples=100)
def test_turnover_bounded_and_symmetric(n: tuple[int, np.ndarray, np.ndarray]) -> None:
    """One-way turnover lies in [0, 1] and does not depend on direction."""
    size, first, second = n
    index = [f"POOL_{i}" for i in range(size)]
    a, b = pd.Series(first, index=index), pd.Series(second, index=index)
    turnover = compute_turnover(a, b)
    assert -1e-12 <= turnover <= 1.0 + 1e-12
    assert np.isclose(turnover, compute_turnover(b, a))


@given(
    n=st.integers(min_value=2, max_value=8).flatmap(
        lambda n: st.tuples(
            st.just(n),
            _weight_array(n),
            st.lists(
                st.floats(min_value=-0.99, max_value=5.0, allow_nan=False),
                min_size=n,
                max_size=n,
            ),
        )
    )
)
@settings(max_examples=100)
def test_drifted_weights_sum_to_one(n: tuple[int, np.ndarray, list[float]]) -> None:
    """Drifted weights stay normalized for returns above -100%."""
    size, weights, returns = n
    index = [f"POOL_{i}" for i in range(size)]
    drifted = compute_drifted_weights(
        pd.Series(weights, index=index), pd.Series(returns, index=index)
    )
    assert np.isclose(drifted.sum(), 1.0, atol=1e-10)
