"""Rounding and clamping helpers shared by the optimizers."""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

PRICE_DECIMALS: int = 6
AMOUNT_DECIMALS: int = 2


def round_price(price: float) -> float:
    """Round a price to 6 decimal places."""
    return round(float(price), PRICE_DECIMALS)


def round_amount(amount: float) -> float:
    """Round an amount to 2 decimal places."""
    return round(float(amount), AMOUNT_DECIMALS)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Bound *value* to ``[lower, upper]``."""
    return max(lower, min(upper, value))


def round_to_total(
    values: npt.ArrayLike,
    total: float,
    decimals: int = AMOUNT_DECIMALS,
) -> npt.NDArray[np.float64]:
    """Round *values* to *decimals* places while preserving their total.

    Each value is rounded independently and the residual between the
    rounded sum and ``round(total, decimals)`` is carried by the largest
    entry.

    Parameters
    ----------
    values : array-like, shape (n,)
        Non-negative values that should sum to *total*.
    total : float
        Target sum.
    decimals : int
        Number of decimal places.

    Returns
    -------
    ndarray, shape (n,)
        Rounded values whose sum equals *total* up to ``10**-decimals``.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return arr.copy()
    rounded = np.round(arr, decimals)
    residual = round(float(total) - float(rounded.sum()), decimals)
    if residual != 0.0:
        idx = int(np.argmax(rounded))
        rounded[idx] = round(rounded[idx] + residual, decimals)
    return rounded
