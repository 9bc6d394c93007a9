"""Guarded normalisation and capped proportional redistribution."""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from yieldexec.exceptions import NumericOverflowError

_TOL: float = 1e-12


def safe_divide(numerator: float, denominator: float, what: str = "value") -> float:
    """Divide, raising instead of producing ``inf`` or ``NaN``.

    Raises
    ------
    NumericOverflowError
        If *denominator* is zero or the result is not finite.
    """
    if denominator == 0.0 or not np.isfinite(denominator):
        raise NumericOverflowError(
            f"Cannot compute {what}: denominator is {denominator!r}"
        )
    result = numerator / denominator
    if not np.isfinite(result):
        raise NumericOverflowError(f"Cannot compute {what}: result is {result!r}")
    return float(result)


def normalize_weights(weights: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Scale non-negative weights so they sum to one.

    Raises
    ------
    NumericOverflowError
        If the weights sum to zero or contain non-finite values.
    """
    arr = np.asarray(weights, dtype=np.float64)
    total = float(arr.sum())
    if not np.isfinite(total) or total <= 0.0:
        raise NumericOverflowError(
            f"Cannot normalise weights with total {total!r}"
        )
    return arr / total


def redistribute_proportionally(
    weights: npt.ArrayLike,
    amount: float,
    recipients: npt.NDArray[np.bool_],
    cap: float | None = None,
) -> tuple[npt.NDArray[np.float64], float]:
    """Hand *amount* to *recipients* in proportion to their current weight.

    Recipients that would exceed *cap* are pinned at the cap and their
    overflow is passed on to the remaining recipients.  Recipients with
    zero weight share equally when every recipient is at zero.

    Parameters
    ----------
    weights : array-like, shape (n,)
        Current weights.
    amount : float
        Non-negative weight to distribute.
    recipients : ndarray of bool, shape (n,)
        Mask of entries allowed to receive weight.
    cap : float or None
        Optional upper bound per recipient.

    Returns
    -------
    tuple[ndarray, float]
        Updated weights and the part of *amount* that could not be placed.
    """
    w = np.array(weights, dtype=np.float64)
    remaining = float(amount)
    limit = np.inf if cap is None else float(cap)

    while remaining > _TOL:
        open_ = recipients & (w < limit - _TOL)
        if not open_.any():
            break
        base = w[open_]
        shares = base / base.sum() if base.sum() > 0.0 else np.full(base.size, 1.0 / base.size)
        proposed = base + remaining * shares
        overflow = np.clip(proposed - limit, 0.0, None)
        w[open_] = np.minimum(proposed, limit)
        remaining = float(overflow.sum())

    return w, max(remaining, 0.0)


def cap_weights(
    weights: npt.ArrayLike,
    cap: float,
    free: npt.NDArray[np.bool_] | None = None,
) -> npt.NDArray[np.float64]:
    """Water-fill *weights* so no free entry exceeds *cap*.

    Entries outside *free* keep their weight and receive nothing.  If the
    cap is infeasible for the free budget (``n_free * cap < budget``) the
    effective cap is raised to ``budget / n_free``.

    Parameters
    ----------
    weights : array-like, shape (n,)
        Weights to constrain.
    cap : float
        Maximum weight per free entry.
    free : ndarray of bool or None
        Entries subject to the cap.  ``None`` means all entries.

    Returns
    -------
    ndarray, shape (n,)
        Capped weights with the same total as the input.
    """
    w = np.array(weights, dtype=np.float64)
    mask = np.ones(w.size, dtype=bool) if free is None else np.asarray(free, dtype=bool)
    n_free = int(mask.sum())
    if n_free == 0:
        return w

    budget = float(w[mask].sum())
    effective_cap = max(float(cap), budget / n_free)

    over = mask & (w > effective_cap)
    if not over.any():
        return w
    excess = float((w[over] - effective_cap).sum())
    w[over] = effective_cap
    w, _ = redistribute_proportionally(w, excess, mask & ~over, effective_cap)
    return w
