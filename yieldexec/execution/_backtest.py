"""Replay the order placement optimizer over a sequence of book snapshots."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from yieldexec.exceptions import DataError
from yieldexec.execution._annealing import optimize_orders
from yieldexec.execution._config import OptConfig
from yieldexec.execution._scoring import (
    compute_execution_probability,
    compute_slippage,
)
from yieldexec.market import Order, OrderBookSnapshot, RegimeParameters
from yieldexec.numeric import safe_divide


@dataclass(frozen=True)
class BacktestSnapshot:
    """One historical observation for :func:`run_backtest`.

    Parameters
    ----------
    book : OrderBookSnapshot
        Order book at the observation time.
    regime : RegimeParameters
        Regime scalars at the observation time.
    baseline_slippage : float
        Slippage of the naive execution the optimizer is compared with.
    """

    book: OrderBookSnapshot
    regime: RegimeParameters = field(default_factory=RegimeParameters)
    baseline_slippage: float = 0.01


@dataclass(frozen=True)
class BacktestResult:
    """Outcome of :func:`run_backtest`.

    Attributes
    ----------
    mean_slippage : float
        Mean slippage of the optimized order sets.
    baseline_slippage : float
        Mean baseline slippage.
    slippage_reduction : float
        ``(1 − mean_slippage / baseline_slippage) · 100``.
    mean_execution_probability : float
        Mean modelled fill probability of the optimized order sets.
    per_snapshot : pd.DataFrame
        One row per snapshot with ``slippage``, ``baseline_slippage``,
        ``execution_probability`` and ``n_orders``.
    orders : list[list[Order]]
        Optimized order sets in snapshot order.
    """

    mean_slippage: float
    baseline_slippage: float
    slippage_reduction: float
    mean_execution_probability: float
    per_snapshot: pd.DataFrame
    orders: list[list[Order]]


def run_backtest(
    snapshots: Sequence[BacktestSnapshot],
    target_amount: float,
    config: OptConfig | None = None,
    *,
    rng: np.random.Generator | int | None = None,
) -> BacktestResult:
    """Optimize every snapshot and compare slippage with its baseline.

    Snapshots are processed sequentially from a single random stream,
    so a fixed *rng* seed makes the whole backtest reproducible.

    Raises
    ------
    DataError
        If *snapshots* is empty.
    NumericOverflowError
        If the mean baseline slippage is zero.
    """
    if not snapshots:
        raise DataError("run_backtest requires at least one snapshot")

    generator = np.random.default_rng(rng)
    rows = []
    all_orders: list[list[Order]] = []

    for snap in snapshots:
        orders = optimize_orders(
            snap.book, target_amount, snap.regime, config, rng=generator
        )
        all_orders.append(orders)
        rows.append(
            {
                "slippage": compute_slippage(orders, snap.book.mid_price),
                "baseline_slippage": snap.baseline_slippage,
                "execution_probability": compute_execution_probability(
                    orders, snap.book.mid_price, snap.regime.volatility
                ),
                "n_orders": len(orders),
            }
        )

    frame = pd.DataFrame(rows)
    mean_slippage = float(frame["slippage"].mean())
    baseline = float(frame["baseline_slippage"].mean())
    reduction = (1.0 - safe_divide(mean_slippage, baseline, "slippage reduction")) * 100.0

    return BacktestResult(
        mean_slippage=mean_slippage,
        baseline_slippage=baseline,
        slippage_reduction=reduction,
        mean_execution_probability=float(frame["execution_probability"].mean()),
        per_snapshot=frame,
        orders=all_orders,
    )
