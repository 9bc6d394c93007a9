"""Scalar market context supplied per optimisation call."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RegimeParameters:
    """Market regime scalars shared by both optimizers.

    Parameters
    ----------
    volatility : float
        Market volatility in ``[0, 1]``.
    external_correlation : float
        Correlation of the traded instrument with a reference market
        (e.g. index futures), in ``[0, 1]``.
    is_eco_asset : bool
        Whether the traded asset carries the eco preference.
    is_clawback_enabled : bool
        Whether the issuer can claw the asset back.
    external_market_change : float
        Signed fractional move of the reference market (``-0.6`` is a
        60% drop).  Drives correlation adjustments in the allocator.
    sentiment : float
        Sentiment score in ``[0, 1]``; ``0.5`` is neutral.
    """

    volatility: float = 0.5
    external_correlation: float = 0.0
    is_eco_asset: bool = False
    is_clawback_enabled: bool = False
    external_market_change: float = 0.0
    sentiment: float = 0.5

    def __post_init__(self) -> None:
        if not 0.0 <= self.volatility <= 1.0:
            raise ValueError(
                f"volatility must be in [0, 1], got {self.volatility}"
            )
        if not 0.0 <= self.external_correlation <= 1.0:
            raise ValueError(
                "external_correlation must be in [0, 1], "
                f"got {self.external_correlation}"
            )
        if not 0.0 <= self.sentiment <= 1.0:
            raise ValueError(f"sentiment must be in [0, 1], got {self.sentiment}")

    @classmethod
    def for_calm(cls, **kwargs: object) -> RegimeParameters:
        """Low-volatility preset (volatility 0.1)."""
        return cls(volatility=0.1, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def for_turbulent(cls, **kwargs: object) -> RegimeParameters:
        """High-volatility preset (volatility 0.9)."""
        return cls(volatility=0.9, **kwargs)  # type: ignore[arg-type]
