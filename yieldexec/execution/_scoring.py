"""Objective function for candidate order sets (higher is better)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from yieldexec.exceptions import NumericOverflowError
from yieldexec.execution._config import OptConfig
from yieldexec.market import Order, OrderBookSnapshot, RegimeParameters
from yieldexec.numeric import safe_divide


@dataclass(frozen=True)
class ScoreBreakdown:
    """Components of an order set's score.

    Attributes
    ----------
    slippage : float
        Relative distance of the amount-weighted average price from mid.
    execution_probability : float
        Amount-weighted mean fill probability.
    shallowness_penalty : float
        Penalty for consuming a large share of book liquidity.
    volatility_penalty : float
        ``volatility_penalty · volatility²``.
    correlation_penalty : float
        Penalty for correlation with the reference market above 0.5.
    multiplier : float
        Combined eco bonus / clawback penalty factor.
    score : float
        Final score.
    """

    slippage: float
    execution_probability: float
    shallowness_penalty: float
    volatility_penalty: float
    correlation_penalty: float
    multiplier: float
    score: float


def _as_arrays(
    orders: Sequence[Order],
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    prices = np.fromiter((o.price for o in orders), dtype=np.float64, count=len(orders))
    amounts = np.fromiter((o.amount for o in orders), dtype=np.float64, count=len(orders))
    total = amounts.sum()
    if total <= 0.0:
        raise NumericOverflowError(
            f"Order set has non-positive total amount {total!r}"
        )
    return prices, amounts


def compute_slippage(orders: Sequence[Order], mid_price: float) -> float:
    """``|weighted_avg_price − mid| / mid`` with amount weights."""
    prices, amounts = _as_arrays(orders)
    avg_price = float(np.dot(prices, amounts) / amounts.sum())
    return safe_divide(abs(avg_price - mid_price), mid_price, "slippage")


def compute_execution_probability(
    orders: Sequence[Order],
    mid_price: float,
    volatility: float,
) -> float:
    """Amount-weighted mean of per-order fill probabilities.

    Each order fills with ``clamp(1 − 10·d + 5·volatility·d, 0.01, 0.99)``
    where ``d`` is its relative distance from mid.
    """
    prices, amounts = _as_arrays(orders)
    deviation = np.abs(prices - mid_price) / mid_price
    per_order = np.clip(1.0 - 10.0 * deviation + 5.0 * volatility * deviation, 0.01, 0.99)
    return float(np.dot(per_order, amounts) / amounts.sum())


def compute_shallowness_penalty(
    orders: Sequence[Order],
    total_liquidity: float,
    config: OptConfig | None = None,
) -> float:
    """Penalty once the order set exceeds a share of resting liquidity."""
    if config is None:
        config = OptConfig()
    _, amounts = _as_arrays(orders)
    ratio = safe_divide(float(amounts.sum()), total_liquidity, "liquidity ratio")
    return max(0.0, (ratio - config.shallowness_threshold) * config.shallowness_penalty)


def score_breakdown(
    orders: Sequence[Order],
    book: OrderBookSnapshot,
    regime: RegimeParameters,
    config: OptConfig | None = None,
) -> ScoreBreakdown:
    """Score *orders* and return every component.

    ``score = (100·(1 − slippage)·P_exec − shallowness − vol_pen −
    corr_pen) · eco · clawback``.
    """
    if config is None:
        config = OptConfig()

    mid = book.mid_price
    vol = regime.volatility
    corr = regime.external_correlation

    slippage = compute_slippage(orders, mid)
    execution = compute_execution_probability(orders, mid, vol)
    shallowness = compute_shallowness_penalty(orders, book.total_liquidity, config)
    vol_penalty = config.volatility_penalty * vol * vol
    corr_penalty = config.correlation_penalty * (corr - 0.5) if corr > 0.5 else 0.0

    multiplier = 1.0
    if regime.is_eco_asset:
        multiplier *= config.eco_bonus
    if regime.is_clawback_enabled:
        multiplier *= config.clawback_penalty

    raw = 100.0 * (1.0 - slippage) * execution - shallowness - vol_penalty - corr_penalty

    return ScoreBreakdown(
        slippage=slippage,
        execution_probability=execution,
        shallowness_penalty=shallowness,
        volatility_penalty=vol_penalty,
        correlation_penalty=corr_penalty,
        multiplier=multiplier,
        score=raw * multiplier,
    )


def score_orders(
    orders: Sequence[Order],
    book: OrderBookSnapshot,
    regime: RegimeParameters,
    config: OptConfig | None = None,
) -> float:
    """Scalar score of *orders*; see :func:`score_breakdown`."""
    return score_breakdown(orders, book, regime, config).score
