"""Neighbourhood moves for the annealing search."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from yieldexec.execution._config import OptConfig
from yieldexec.market import Order, OrderBookSnapshot, RegimeParameters
from yieldexec.numeric import clamp, round_price, round_to_total


def price_bounds(
    mid_price: float,
    volatility: float,
    config: OptConfig,
) -> tuple[float, float]:
    """Lowest and highest admissible price around *mid_price*."""
    deviation = config.max_price_deviation * (1.0 + volatility)
    return mid_price * (1.0 - deviation), mid_price * (1.0 + deviation)


def rescale_to_target(
    amounts: npt.ArrayLike,
    target_amount: float,
) -> npt.NDArray[np.float64]:
    """Scale *amounts* so they sum to *target_amount* at 2-decimal precision."""
    arr = np.clip(np.asarray(amounts, dtype=np.float64), 0.0, None)
    total = float(arr.sum())
    if total <= 0.0:
        arr = np.full(arr.size, target_amount / arr.size)
    else:
        arr = arr * (target_amount / total)
    return round_to_total(arr, target_amount)


def random_split(
    target_amount: float,
    n_orders: int,
    rng: np.random.Generator,
) -> npt.NDArray[np.float64]:
    """Split *target_amount* across *n_orders* with uniform random weights."""
    weights = rng.random(n_orders)
    if weights.sum() <= 0.0:
        weights = np.ones(n_orders)
    return rescale_to_target(weights, target_amount)


def _floor_amounts(
    amounts: npt.NDArray[np.float64],
    target_amount: float,
    floor: float,
) -> npt.NDArray[np.float64]:
    """Lift amounts below *floor* and take the difference from the others.

    The lift is paid by every order in proportion to its headroom above
    *floor*, so the total stays at *target_amount*.  Amounts are returned
    unchanged when ``n·floor`` exceeds the target.
    """
    if amounts.size * floor > target_amount or (amounts >= floor).all():
        return amounts
    lifted = np.maximum(amounts, floor)
    headroom = lifted - floor
    excess = float(lifted.sum()) - target_amount
    room = float(headroom.sum())
    if room <= 0.0:
        return round_to_total(lifted, target_amount)
    scaled = floor + headroom * (1.0 - excess / room)
    return round_to_total(scaled, target_amount)


def perturb_order(
    order: Order,
    mid_price: float,
    regime: RegimeParameters,
    config: OptConfig,
    rng: np.random.Generator,
) -> Order:
    """Jitter one order's price and amount.

    The price move is uniform with a mixed scale: 1x with probability
    0.70, 3x with 0.15, 6x with 0.15.  Its magnitude grows with
    volatility and with correlation above 0.5, and the result is clamped
    to :func:`price_bounds`.  The amount moves by up to
    ``±amount_perturbation·(1 + 0.5·volatility)`` and is floored at
    ``min_order_amount``.
    """
    vol = regime.volatility
    magnitude = config.price_perturbation * (1.0 + 2.0 * vol)
    magnitude += config.correlation_perturbation * max(
        0.0, regime.external_correlation - 0.5
    )

    if rng.random() < 0.7:
        scale = 1.0
    elif rng.random() < 0.5:
        scale = 3.0
    else:
        scale = 6.0

    jitter = (rng.random() - 0.5) * magnitude * scale
    lower, upper = price_bounds(mid_price, vol, config)
    price = clamp(order.price * (1.0 + jitter), lower, upper)

    spread = config.amount_perturbation * (1.0 + 0.5 * vol)
    amount = order.amount * (1.0 + rng.uniform(-spread, spread))
    amount = max(config.min_order_amount, amount)

    return Order(price=round_price(price), amount=amount)


def perturb_orders(
    orders: Sequence[Order],
    book: OrderBookSnapshot,
    target_amount: float,
    regime: RegimeParameters,
    config: OptConfig,
    rng: np.random.Generator,
) -> list[Order]:
    """Build a neighbour of *orders* without mutating it.

    One uniformly chosen order is jittered.  Then, with probability
    ``redistribute_probability`` all amounts are redrawn; a single draw
    decides between deleting an order (while more than ``min_orders``
    remain) and splitting one (while fewer than ``max_orders`` exist).
    Amounts are rescaled to *target_amount* last and lifted back to
    ``min_order_amount`` where the target allows it, so the neighbour
    always carries the full target.
    """
    neighbour = list(orders)
    mid = book.mid_price

    idx = int(rng.integers(len(neighbour)))
    neighbour[idx] = perturb_order(neighbour[idx], mid, regime, config, rng)
    amounts = np.array([o.amount for o in neighbour], dtype=np.float64)

    if rng.random() < config.redistribute_probability:
        amounts = random_split(target_amount, len(neighbour), rng)

    draw = rng.random()
    if draw < config.delete_probability:
        if len(neighbour) > config.min_orders:
            drop = int(rng.integers(len(neighbour)))
            del neighbour[drop]
            amounts = random_split(target_amount, len(neighbour), rng)
    elif draw < config.delete_probability + config.split_probability:
        if len(neighbour) < config.max_orders:
            split = int(rng.integers(len(neighbour)))
            half = amounts[split] / 2.0
            amounts[split] = half
            variation = config.split_price_variation * (1.0 + regime.volatility)
            lower, upper = price_bounds(mid, regime.volatility, config)
            price = clamp(
                neighbour[split].price * (1.0 + (rng.random() - 0.5) * variation),
                lower,
                upper,
            )
            neighbour.append(Order(price=round_price(price), amount=half))
            amounts = np.append(amounts, half)

    amounts = rescale_to_target(amounts, target_amount)
    amounts = _floor_amounts(amounts, target_amount, config.min_order_amount)
    return [
        Order(price=o.price, amount=float(a)) for o, a in zip(neighbour, amounts)
    ]
