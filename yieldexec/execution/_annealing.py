"""Simulated-annealing order placement over a limit order book.

The search walks the space of candidate order sets::

    seed → perturb → score → Metropolis accept → cool / reheat → …

and returns the best set visited.  Seeding is deterministic; every
random draw after it comes from one injectable
:class:`numpy.random.Generator`, so identical seeds reproduce identical
trajectories.

Usage example::

    from yieldexec.execution import OptConfig, optimize_orders
    from yieldexec.market import OrderBookSnapshot, RegimeParameters

    book = OrderBookSnapshot.from_levels(
        1.0, bids=[(0.999, 5000.0)], asks=[(1.001, 5000.0)]
    )
    orders = optimize_orders(
        book, 5000.0, RegimeParameters(volatility=0.3), rng=42
    )
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from yieldexec.exceptions import (
    InvalidAmountError,
    InvalidOrderBookError,
    NumericOverflowError,
)
from yieldexec.execution._config import OptConfig
from yieldexec.execution._perturbation import perturb_orders, rescale_to_target
from yieldexec.execution._scoring import score_orders
from yieldexec.execution._seeding import generate_seed_orders
from yieldexec.market import Order, OrderBookSnapshot, RegimeParameters
from yieldexec.numeric import round_amount, round_price, round_to_total

logger = logging.getLogger(__name__)

# Tolerance on Σ amount vs. target for a returned order set.
_AMOUNT_TOL: float = 1e-2


@dataclass(frozen=True)
class AnnealingProgress:
    """Snapshot of the search handed to a progress callback.

    Attributes
    ----------
    iteration : int
        Completed iterations.
    temperature : float
        Temperature after the last cooling step.
    current_score : float
        Score of the current state.
    best_score : float
        Best score seen so far.
    n_orders : int
        Order count of the current state.
    reheats : int
        Number of reheats so far.
    """

    iteration: int
    temperature: float
    current_score: float
    best_score: float
    n_orders: int
    reheats: int


ProgressCallback = Callable[[AnnealingProgress], None]


def acceptance_probability(
    current_score: float,
    candidate_score: float,
    temperature: float,
    regime: RegimeParameters,
) -> float:
    """Metropolis acceptance with regime-dependent scaling.

    Improvements are always accepted.  Otherwise the probability is
    ``exp(Δ/T)``, raised by ``1 + volatility − 0.7`` above 70% volatility
    and damped by 0.8 above 0.8 correlation, then capped at 1.
    """
    if candidate_score > current_score:
        return 1.0

    probability = math.exp((candidate_score - current_score) / temperature)
    if regime.volatility > 0.7:
        probability *= 1.0 + regime.volatility - 0.7
    if regime.external_correlation > 0.8:
        probability *= 0.8
    return min(1.0, probability)


def next_temperature(
    temperature: float,
    iteration: int,
    regime: RegimeParameters,
    config: OptConfig,
) -> tuple[float, bool]:
    """Apply one cooling step; return the new temperature and a reheat flag.

    Cooling is geometric, slowed above 70% volatility.  When the
    temperature drops below ``reheat_threshold · T₀`` during the first
    half of the iteration budget it is multiplied by
    ``reheat_factor · (1 + max(0, volatility − 0.5))``.
    """
    vol = regime.volatility
    temperature *= config.cooling_rate
    if vol > 0.7:
        temperature /= 0.95 + 0.1 * (vol - 0.7)

    reheated = False
    if (
        temperature < config.reheat_threshold * config.initial_temperature
        and iteration < config.max_iterations / 2
    ):
        temperature *= config.reheat_factor * (1.0 + max(0.0, vol - 0.5))
        reheated = True
    return temperature, reheated


def post_process_orders(
    orders: Sequence[Order],
    book: OrderBookSnapshot,
    target_amount: float,
    config: OptConfig | None = None,
) -> list[Order]:
    """Turn the best search state into a placeable order list.

    Orders are sorted by ascending price and those below
    ``min_order_amount`` are dropped, their amount going back to the
    survivors, so every returned order carries at least
    ``min_order_amount`` and a lone survivor takes the whole target.  If
    nothing survives a single order for the full target is placed at
    ``fallback_price_ratio · mid``.
    """
    if config is None:
        config = OptConfig()

    ranked = sorted(orders, key=lambda o: o.price)
    kept = [o for o in ranked if o.amount >= config.min_order_amount]

    if not kept:
        logger.debug(
            "No order above %.2f units survived; placing fallback order",
            config.min_order_amount,
        )
        return [
            Order(
                price=round_price(book.mid_price * config.fallback_price_ratio),
                amount=round_amount(target_amount),
            )
        ]

    amounts = rescale_to_target([o.amount for o in kept], target_amount)
    return [
        Order(price=round_price(o.price), amount=float(a))
        for o, a in zip(kept, amounts)
    ]


def _validate_inputs(book: OrderBookSnapshot, target_amount: float) -> None:
    if not book.bids or not book.asks:
        raise InvalidOrderBookError(
            "Order book must have at least one bid and one ask level, got "
            f"{len(book.bids)} bids and {len(book.asks)} asks"
        )
    if book.mid_price <= 0:
        raise InvalidOrderBookError(
            f"mid_price must be strictly positive, got {book.mid_price}"
        )
    if target_amount <= 0:
        raise InvalidAmountError(
            f"target_amount must be strictly positive, got {target_amount}"
        )
    if round_amount(target_amount) <= 0:
        raise InvalidAmountError(
            f"target_amount {target_amount} rounds to zero at 2-decimal precision"
        )
    if book.total_liquidity <= 0:
        raise NumericOverflowError(
            "Order book has zero total liquidity; cannot score order sets"
        )


def _enforce_invariants(
    orders: list[Order],
    target_amount: float,
    config: OptConfig,
) -> list[Order]:
    """Check order-count and total-amount invariants, repairing on failure."""
    n = len(orders)
    total = sum(o.amount for o in orders)
    assert config.min_orders <= n <= config.max_orders, (
        f"order count {n} outside [{config.min_orders}, {config.max_orders}]"
    )
    assert abs(total - target_amount) <= _AMOUNT_TOL, (
        f"order amounts sum to {total}, expected {target_amount}"
    )

    if n > config.max_orders:
        orders = sorted(orders, key=lambda o: o.amount, reverse=True)[: config.max_orders]
    while len(orders) < config.min_orders:
        largest = max(range(len(orders)), key=lambda i: orders[i].amount)
        half = orders[largest].amount / 2.0
        orders = [*orders, Order(price=orders[largest].price, amount=half)]
        orders[largest] = Order(price=orders[largest].price, amount=half)
    amounts = round_to_total([o.amount for o in orders], target_amount)
    return [Order(price=o.price, amount=float(a)) for o, a in zip(orders, amounts)]


def optimize_orders(
    book: OrderBookSnapshot,
    target_amount: float,
    regime: RegimeParameters | None = None,
    config: OptConfig | None = None,
    *,
    rng: np.random.Generator | int | None = None,
    progress_callback: ProgressCallback | None = None,
) -> list[Order]:
    """Find a low-slippage, high-fill-probability order set.

    Parameters
    ----------
    book : OrderBookSnapshot
        Market snapshot.  Never mutated.
    target_amount : float
        Total amount to place.  Must be strictly positive.
    regime : RegimeParameters or None
        Market regime.  Defaults to ``RegimeParameters()``.
    config : OptConfig or None
        Search configuration.  Defaults to ``OptConfig()``.
    rng : Generator, int, or None
        Random source for perturbation and acceptance.  An integer seeds
        a fresh :class:`numpy.random.Generator`.
    progress_callback : callable or None
        Receives an :class:`AnnealingProgress` every
        ``config.progress_interval`` iterations and once when the search
        stops.

    Returns
    -------
    list[Order]
        Orders sorted by ascending price, prices rounded to 6 and
        amounts to 2 decimals, amounts summing to *target_amount*.  Dust
        below ``min_order_amount`` is folded into the other orders, so a
        small target can come back as a single order.

    Raises
    ------
    InvalidOrderBookError
        If either book side is empty or ``mid_price <= 0``.
    InvalidAmountError
        If ``target_amount <= 0`` or it rounds to zero at 2 decimals.
    NumericOverflowError
        If the book holds no liquidity at all.
    """
    if regime is None:
        regime = RegimeParameters()
    if config is None:
        config = OptConfig()
    _validate_inputs(book, target_amount)
    generator = np.random.default_rng(rng)

    current = generate_seed_orders(book, target_amount, regime, config)
    current_score = score_orders(current, book, regime, config)
    best, best_score = current, current_score

    temperature = config.initial_temperature
    deadline = (
        time.monotonic() + config.time_budget if config.time_budget is not None else None
    )
    iteration = 0
    reheats = 0

    while iteration < config.max_iterations and temperature > config.min_temperature:
        if deadline is not None and time.monotonic() >= deadline:
            logger.debug("Time budget exhausted after %d iterations", iteration)
            break

        candidate = perturb_orders(current, book, target_amount, regime, config, generator)
        candidate_score = score_orders(candidate, book, regime, config)

        accept = acceptance_probability(current_score, candidate_score, temperature, regime)
        if generator.random() < accept:
            current = _enforce_invariants(candidate, target_amount, config)
            current_score = candidate_score
            if current_score > best_score:
                best, best_score = current, current_score

        temperature, reheated = next_temperature(temperature, iteration, regime, config)
        if reheated:
            reheats += 1
            logger.debug(
                "Reheated to T=%.4f at iteration %d", temperature, iteration
            )
        iteration += 1

        if progress_callback is not None and iteration % config.progress_interval == 0:
            progress_callback(
                AnnealingProgress(
                    iteration=iteration,
                    temperature=temperature,
                    current_score=current_score,
                    best_score=best_score,
                    n_orders=len(current),
                    reheats=reheats,
                )
            )

    if progress_callback is not None:
        progress_callback(
            AnnealingProgress(
                iteration=iteration,
                temperature=temperature,
                current_score=current_score,
                best_score=best_score,
                n_orders=len(current),
                reheats=reheats,
            )
        )

    logger.debug(
        "Annealing stopped after %d iterations (%d reheats), best score %.4f",
        iteration,
        reheats,
        best_score,
    )
    return post_process_orders(best, book, target_amount, config)
