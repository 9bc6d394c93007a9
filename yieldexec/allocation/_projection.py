"""Yield projection for an allocation and the combined allocate-and-project call."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from yieldexec.allocation._allocator import AllocationVector, allocate
from yieldexec.allocation._config import AllocConfig
from yieldexec.market import Pool, RegimeParameters
from yieldexec.numeric import safe_divide

# Impermanent-loss risk per pool class.
STABLE_IL_RISK: float = 0.05
CORRELATED_IL_BASE: float = 0.2
CORRELATED_IL_SLOPE: float = 0.3
VOLATILE_IL_BASE: float = 0.1
VOLATILE_IL_SLOPE: float = 0.2


@dataclass(frozen=True)
class YieldProjection:
    """Expected yield and risk of an allocation.

    Attributes
    ----------
    expected_apy : float
        Weighted regime-adjusted APY.
    impermanent_loss_risk : float
        Weighted impermanent-loss risk.
    net_apy : float
        Expected APY after the impermanent-loss drag, floored at zero.
    sharpe_ratio : float
        ``net_apy / risk_stddev``.
    risk_stddev : float
        Weighted pool base risk.
    projected_annual_yield : float
        ``net_apy · capital``.
    yield_boost : float
        ``net_apy / expected_apy`` (0 when nothing is expected).
    """

    expected_apy: float
    impermanent_loss_risk: float
    net_apy: float
    sharpe_ratio: float
    risk_stddev: float
    projected_annual_yield: float
    yield_boost: float


def adjusted_apy(pool: Pool, regime: RegimeParameters, config: AllocConfig) -> float:
    """Pool APY scaled for high volatility and bullish sentiment."""
    apy = pool.apy
    if regime.volatility > 0.7:
        apy *= 1.0 + 0.5 * regime.volatility
    if pool.tracks_sentiment and regime.sentiment > config.sentiment_boost_threshold:
        apy *= 1.0 + 0.8 * (regime.sentiment - config.sentiment_boost_threshold)
    return apy


def pool_il_risk(pool: Pool, regime: RegimeParameters, config: AllocConfig) -> float:
    """Impermanent-loss risk of one pool at the current volatility."""
    if pool.is_stable:
        return STABLE_IL_RISK
    vol = regime.volatility
    correlated = abs(pool.correlation_with_reference) > config.correlation_threshold
    if correlated or pool.tracks_sentiment:
        return CORRELATED_IL_BASE + CORRELATED_IL_SLOPE * vol
    return VOLATILE_IL_BASE + VOLATILE_IL_SLOPE * vol


def project_yield(
    allocation: AllocationVector,
    regime: RegimeParameters | None = None,
    config: AllocConfig | None = None,
) -> YieldProjection:
    """Project yield, impermanent-loss drag and risk-adjusted return.

    Parameters
    ----------
    allocation : AllocationVector
        Output of :func:`allocate`.
    regime : RegimeParameters or None
        Regime the allocation was computed for.
    config : AllocConfig or None
        Allocator configuration.

    Returns
    -------
    YieldProjection
    """
    if regime is None:
        regime = RegimeParameters()
    if config is None:
        config = AllocConfig()

    expected = 0.0
    il_risk = 0.0
    risk = 0.0
    for item in allocation:
        expected += item.weight * adjusted_apy(item.pool, regime, config)
        il_risk += item.weight * pool_il_risk(item.pool, regime, config)
        risk += item.weight * item.pool.base_risk

    net = max(0.0, expected - il_risk * regime.volatility * config.il_dampening)
    return YieldProjection(
        expected_apy=expected,
        impermanent_loss_risk=il_risk,
        net_apy=net,
        sharpe_ratio=safe_divide(net, risk, "sharpe ratio"),
        risk_stddev=risk,
        projected_annual_yield=net * allocation.capital,
        yield_boost=net / expected if expected > 0 else 0.0,
    )


@dataclass(frozen=True)
class AllocationResult:
    """Allocation together with its yield projection."""

    allocation: AllocationVector
    projection: YieldProjection

    @property
    def is_high_volatility(self) -> bool:
        return self.allocation.is_high_volatility


def optimize_allocation(
    capital: float,
    pools: Sequence[Pool],
    regime: RegimeParameters | None = None,
    config: AllocConfig | None = None,
) -> AllocationResult:
    """Allocate *capital* and project the resulting yield in one call."""
    if regime is None:
        regime = RegimeParameters()
    if config is None:
        config = AllocConfig()
    allocation = allocate(capital, pools, regime, config)
    return AllocationResult(
        allocation=allocation,
        projection=project_yield(allocation, regime, config),
    )
