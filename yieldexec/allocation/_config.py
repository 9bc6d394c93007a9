"""Configuration for the regime-adaptive capital allocator."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class AllocationRegime(str, Enum):
    """Allocation branch selected by the volatility regime switch."""

    BALANCED = "balanced"
    HIGH_VOLATILITY = "high_volatility"


class GovernanceProfile(str, Enum):
    """Parameter sets a governance vote can select.

    See :meth:`AllocConfig.from_governance` for the values each maps to.
    """

    HIGH_ANCHOR = "high_anchor"
    ECO_FOCUS = "eco_focus"
    BALANCED = "balanced"


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AllocConfig:
    """Immutable configuration for :func:`allocate`.

    Parameters
    ----------
    high_vol_threshold : float
        Volatility above which the high-volatility branch is used.
    anchor_fraction : float
        Share of capital given to the stable anchor pool in the
        high-volatility branch.
    eco_boost_multiplier : float
        Share multiplier for eco pools in the high-volatility branch;
        the balanced branch uses ``eco_boost_multiplier − balanced_eco_discount``.
    eco_bonus : float
        Base-weight bonus for eco pools (``×(1 + eco_bonus)``).
    risk_tolerance : float
        Caller risk appetite in ``[0, 1]``; 0.5 is neutral.
    weight_floor : float
        Lower bound on every base weight.
    min_stable_allocation : float
        Minimum aggregate weight of stable pools when volatility exceeds
        ``min_stable_volatility``.
    min_stable_volatility : float
        Volatility above which ``min_stable_allocation`` is enforced.
    max_single_pool_allocation : float
        Maximum weight of any single pool (the high-volatility anchor is
        exempt).
    emergency_market_drop : float
        Reference-market change below which the emergency cap applies.
    emergency_correlation : float
        Pools correlated above this are capped during an emergency.
    emergency_cap : float
        Maximum weight of a correlated pool during an emergency.
    correlation_threshold : float
        ``|correlation|`` above which market moves adjust base weights.
    market_move_threshold : float
        ``|external_market_change|`` above which correlated pools react.
    extreme_volatility : float
        Volatility above which base weights tilt further toward stable
        pools.
    balanced_eco_discount : float
        Subtracted from ``eco_boost_multiplier`` in the balanced branch.
    stable_premium : float
        Share multiplier for stable pools in the balanced branch.
    sentiment_boost_threshold : float
        Sentiment above which sentiment-tracking pools get a larger
        share in the high-volatility branch.
    anchor_pool : str or None
        Name of the anchor pool.  ``None`` selects the first stable pool.
    il_dampening : float
        Scale of the impermanent-loss drag in the yield projection.
    """

    high_vol_threshold: float = 0.5
    anchor_fraction: float = 0.8
    eco_boost_multiplier: float = 1.24
    eco_bonus: float = 0.05
    risk_tolerance: float = 0.5
    weight_floor: float = 0.01
    min_stable_allocation: float = 0.2
    min_stable_volatility: float = 0.6
    max_single_pool_allocation: float = 0.4
    emergency_market_drop: float = -0.5
    emergency_correlation: float = 0.7
    emergency_cap: float = 0.05
    correlation_threshold: float = 0.5
    market_move_threshold: float = 0.1
    extreme_volatility: float = 0.8
    balanced_eco_discount: float = 0.5
    stable_premium: float = 1.2
    sentiment_boost_threshold: float = 0.6
    anchor_pool: str | None = None
    il_dampening: float = 0.5

    def __post_init__(self) -> None:
        if not 0.0 <= self.high_vol_threshold <= 1.0:
            raise ValueError(
                f"high_vol_threshold must be in [0, 1], got {self.high_vol_threshold}"
            )
        if not 0.0 < self.anchor_fraction <= 1.0:
            raise ValueError(
                f"anchor_fraction must be in (0, 1], got {self.anchor_fraction}"
            )
        if self.eco_boost_multiplier <= self.balanced_eco_discount:
            raise ValueError(
                "eco_boost_multiplier must exceed balanced_eco_discount, got "
                f"{self.eco_boost_multiplier} <= {self.balanced_eco_discount}"
            )
        if not 0.0 <= self.risk_tolerance <= 1.0:
            raise ValueError(
                f"risk_tolerance must be in [0, 1], got {self.risk_tolerance}"
            )
        if self.weight_floor <= 0:
            raise ValueError(
                f"weight_floor must be strictly positive, got {self.weight_floor}"
            )
        if not 0.0 <= self.min_stable_allocation <= 1.0:
            raise ValueError(
                "min_stable_allocation must be in [0, 1], "
                f"got {self.min_stable_allocation}"
            )
        if not 0.0 < self.max_single_pool_allocation <= 1.0:
            raise ValueError(
                "max_single_pool_allocation must be in (0, 1], "
                f"got {self.max_single_pool_allocation}"
            )
        if not 0.0 < self.emergency_cap <= 1.0:
            raise ValueError(
                f"emergency_cap must be in (0, 1], got {self.emergency_cap}"
            )

    # -- factory methods -----------------------------------------------------

    @classmethod
    def from_governance(
        cls,
        profile: GovernanceProfile,
        **kwargs: object,
    ) -> AllocConfig:
        """Config for a governance-selected profile.

        ``HIGH_ANCHOR`` switches earlier (0.4) into a heavier anchor
        (0.9) with a smaller eco boost (1.15); ``ECO_FOCUS`` switches
        later (0.6) into a lighter anchor (0.7) with a larger eco boost
        (1.35); ``BALANCED`` keeps the defaults.
        """
        overrides = {
            GovernanceProfile.HIGH_ANCHOR: {
                "high_vol_threshold": 0.4,
                "anchor_fraction": 0.9,
                "eco_boost_multiplier": 1.15,
            },
            GovernanceProfile.ECO_FOCUS: {
                "high_vol_threshold": 0.6,
                "anchor_fraction": 0.7,
                "eco_boost_multiplier": 1.35,
            },
            GovernanceProfile.BALANCED: {
                "high_vol_threshold": 0.5,
                "anchor_fraction": 0.8,
                "eco_boost_multiplier": 1.24,
            },
        }[GovernanceProfile(profile)]
        return cls(**{**overrides, **kwargs})  # type: ignore[arg-type]

    def with_overrides(self, **kwargs: object) -> AllocConfig:
        """Copy of this config with selected fields replaced."""
        return replace(self, **kwargs)  # type: ignore[arg-type]
