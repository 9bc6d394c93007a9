"""Distribution statistics over Monte Carlo trial returns."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from yieldexec.exceptions import DataError


@dataclass(frozen=True)
class MonteCarloSummary:
    """Summary of the trial return distribution.

    Attributes
    ----------
    mean, std, median, min, max : float
        Moments and extremes of the trial returns (population std).
    var_95 : float
        5th percentile of the returns (lower-tail value at risk).
    success_rate : float
        Fraction of trials with a return above the success threshold.
    sharpe_ratio : float
        ``mean / std`` when both are positive, else 0.
    """

    mean: float
    std: float
    median: float
    min: float
    max: float
    var_95: float
    success_rate: float
    sharpe_ratio: float


def summarize_trials(
    returns: npt.ArrayLike,
    success_threshold: float = 0.0,
) -> MonteCarloSummary:
    """Summarise trial returns.

    Raises
    ------
    DataError
        If *returns* is empty or contains non-finite values.
    """
    arr = np.asarray(returns, dtype=np.float64)
    if arr.size == 0:
        raise DataError("Cannot summarise an empty set of trial returns")
    if not np.all(np.isfinite(arr)):
        raise DataError("Trial returns contain non-finite values")

    ordered = np.sort(arr)
    mean = float(arr.mean())
    std = float(arr.std())
    sharpe = mean / std if mean > 0 and std > 0 else 0.0
    return MonteCarloSummary(
        mean=mean,
        std=std,
        median=float(np.median(arr)),
        min=float(ordered[0]),
        max=float(ordered[-1]),
        var_95=float(ordered[int(np.floor(0.05 * ordered.size))]),
        success_rate=float((arr > success_threshold).mean()),
        sharpe_ratio=float(sharpe),
    )
