"""Yield-bearing pools targeted by the capital allocator."""

from __future__ import annotations

from dataclasses import dataclass

# Per-class risk constants blended into the allocation's risk estimate.
STABLE_POOL_RISK: float = 0.2
VOLATILE_POOL_RISK: float = 0.5
CORRELATION_RISK_SCALE: float = 0.5


@dataclass(frozen=True)
class Pool:
    """An allocation target with yield and risk attributes.

    Parameters
    ----------
    name : str
        Pool identity.  Must be unique within one allocation call.
    apy : float
        Current annual percentage yield as a fraction (``0.45`` = 45%).
    is_stable : bool
        Whether the pool holds pegged / stable assets.
    is_eco : bool
        Whether the pool carries the eco preference.
    correlation_with_reference : float
        Correlation with the external reference market, in ``[-1, 1]``.
    tracks_sentiment : bool
        Whether the pool's yield follows the native asset's sentiment.
    """

    name: str
    apy: float
    is_stable: bool = False
    is_eco: bool = False
    correlation_with_reference: float = 0.0
    tracks_sentiment: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must be a non-empty string")
        if self.apy < 0:
            raise ValueError(f"apy must be non-negative, got {self.apy}")
        if not -1.0 <= self.correlation_with_reference <= 1.0:
            raise ValueError(
                "correlation_with_reference must be in [-1, 1], "
                f"got {self.correlation_with_reference}"
            )

    @property
    def base_risk(self) -> float:
        """Risk constant derived from the stability class."""
        if self.is_stable:
            return STABLE_POOL_RISK
        return VOLATILE_POOL_RISK + CORRELATION_RISK_SCALE * abs(
            self.correlation_with_reference
        )
