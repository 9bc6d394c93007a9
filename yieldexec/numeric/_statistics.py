"""Summary statistics used by yield projection and simulation."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from yieldexec.exceptions import NumericOverflowError


def weighted_average(
    values: npt.ArrayLike,
    weights: npt.ArrayLike,
) -> float:
    """Return ``Σ w·v / Σ w``.

    Raises
    ------
    NumericOverflowError
        If the weights sum to zero.
    """
    v = np.asarray(values, dtype=np.float64)
    w = np.asarray(weights, dtype=np.float64)
    total = float(w.sum())
    if total <= 0.0 or not np.isfinite(total):
        raise NumericOverflowError(
            f"Cannot compute weighted average with total weight {total!r}"
        )
    return float(np.dot(v, w) / total)


def max_drawdown(values: Sequence[float] | npt.NDArray[np.float64]) -> float:
    """Largest peak-to-trough decline of a value path, as a fraction of the peak.

    Non-positive peaks are skipped.  Returns 0.0 for paths shorter than 2.
    """
    path = np.asarray(values, dtype=np.float64)
    if path.size < 2:
        return 0.0
    peaks = np.maximum.accumulate(path)
    valid = peaks > 0.0
    if not valid.any():
        return 0.0
    drawdowns = (peaks[valid] - path[valid]) / peaks[valid]
    return float(drawdowns.max())


def annualize_return(
    total_return: float,
    n_periods: int,
    periods_per_year: int = 365,
) -> float:
    """Compound a total return over *n_periods* into an annual rate."""
    if n_periods <= 0:
        return 0.0
    if total_return <= -1.0:
        return -1.0
    return float((1.0 + total_return) ** (periods_per_year / n_periods) - 1.0)


def sharpe_ratio(mean: float, std: float, risk_free_rate: float = 0.0) -> float:
    """Excess return per unit of risk; 0.0 when *std* is not positive."""
    if std <= 0.0 or not np.isfinite(std):
        return 0.0
    return float((mean - risk_free_rate) / std)
