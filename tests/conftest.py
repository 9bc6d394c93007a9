"""Shared test fixtures for the yieldexec test suite."""

from __future__ import annotations

import pytest

from yieldexec.market import OrderBookSnapshot, Pool, RegimeParameters


@pytest.fixture()
def deep_book() -> OrderBookSnapshot:
    """Synthetic 10-level book around mid 1.0, 5000 units per level."""
    bids = [(round(1.0 - 0.001 * i, 6), 5000.0) for i in range(1, 11)]
    asks = [(round(1.0 + 0.001 * i, 6), 5000.0) for i in range(1, 11)]
    return OrderBookSnapshot.from_levels(1.0, bids=bids, asks=asks)


@pytest.fixture()
def thin_book() -> OrderBookSnapshot:
    """One bid and one ask level."""
    return OrderBookSnapshot.from_levels(
        1.0, bids=[(0.99, 1000.0)], asks=[(1.01, 1000.0)]
    )


@pytest.fixture()
def calm_regime() -> RegimeParameters:
    return RegimeParameters(volatility=0.1)


@pytest.fixture()
def stable_volatile_pools() -> list[Pool]:
    """One stable and one volatile pool."""
    return [
        Pool(name="STABLE", apy=0.45, is_stable=True),
        Pool(name="VOLATILE", apy=0.65),
    ]


@pytest.fixture()
def mixed_pools() -> list[Pool]:
    """Stable, eco, correlated and sentiment-tracking pools."""
    return [
        Pool(name="USD-STABLE", apy=0.08, is_stable=True),
        Pool(name="ECO-LP", apy=0.25, is_eco=True),
        Pool(name="INDEX-LP", apy=0.30, correlation_with_reference=0.9),
        Pool(name="NATIVE-LP", apy=0.40, tracks_sentiment=True),
        Pool(name="ALT-LP", apy=0.20),
    ]
