"""Shared numeric utilities: rounding, normalisation, statistics."""

from yieldexec.numeric._rounding import (
    AMOUNT_DECIMALS,
    PRICE_DECIMALS,
    clamp,
    round_amount,
    round_half_up,
    round_price,
    round_to_total,
)
from yieldexec.numeric._statistics import (
    annualize_return,
    max_drawdown,
    sharpe_ratio,
    weighted_average,
)
from yieldexec.numeric._weights import (
    cap_weights,
    normalize_weights,
    redistribute_proportionally,
    safe_divide,
)

__all__ = [
    "AMOUNT_DECIMALS",
    "PRICE_DECIMALS",
    "annualize_return",
    "cap_weights",
    "clamp",
    "max_drawdown",
    "normalize_weights",
    "redistribute_proportionally",
    "round_amount",
    "round_half_up",
    "round_price",
    "round_to_total",
    "safe_divide",
    "sharpe_ratio",
    "weighted_average",
]
