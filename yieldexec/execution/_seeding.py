"""Deterministic seed order sets for the annealing search."""

from __future__ import annotations

from yieldexec.execution._config import OptConfig
from yieldexec.market import Order, OrderBookSnapshot, RegimeParameters
from yieldexec.numeric import clamp, round_half_up, round_price, round_to_total


def seed_spread(regime: RegimeParameters, config: OptConfig) -> float:
    """Total relative spread below mid covered by the seed orders."""
    base = config.base_spread * (1.0 + 2.0 * regime.volatility)
    adjustment = config.correlation_spread * max(
        0.0, regime.external_correlation - 0.5
    )
    return base + adjustment


def seed_order_count(volatility: float, config: OptConfig) -> int:
    """Number of seed orders: ``round(5·(1+volatility))`` within the seed bounds."""
    raw = round_half_up(5.0 * (1.0 + volatility))
    return int(clamp(raw, config.min_seed_orders, config.max_seed_orders))


def generate_seed_orders(
    book: OrderBookSnapshot,
    target_amount: float,
    regime: RegimeParameters,
    config: OptConfig | None = None,
) -> list[Order]:
    """Stagger an even split of *target_amount* linearly below mid.

    Order ``i`` of ``k`` is priced at ``mid·(1 − s·(i+1)/k)`` so the
    ladder runs from ``mid·(1 − s/k)`` down to ``mid·(1 − s)``.  No
    randomness is involved: identical inputs give identical seeds.

    Parameters
    ----------
    book : OrderBookSnapshot
        Market snapshot; only ``mid_price`` is used.
    target_amount : float
        Total amount to place.
    regime : RegimeParameters
        Volatility and correlation drive spread and order count.
    config : OptConfig or None
        Optimizer configuration.  Defaults to ``OptConfig()``.

    Returns
    -------
    list[Order]
        Seed orders, prices rounded to 6 and amounts to 2 decimals.
    """
    if config is None:
        config = OptConfig()

    spread = seed_spread(regime, config)
    k = seed_order_count(regime.volatility, config)
    mid = book.mid_price

    prices = [round_price(mid * (1.0 - spread * (i + 1) / k)) for i in range(k)]
    amounts = round_to_total([target_amount / k] * k, target_amount)

    return [Order(price=p, amount=float(a)) for p, a in zip(prices, amounts)]
