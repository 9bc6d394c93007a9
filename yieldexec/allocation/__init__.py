"""Regime-adaptive capital allocation across yield pools.

Base weights from yield and risk attributes, a volatility regime switch
into a stable-anchored allocation, constraint enforcement, and a yield
projection.
"""

from yieldexec.allocation._allocator import (
    AllocationVector,
    PoolAllocation,
    allocate,
)
from yieldexec.allocation._config import (
    AllocationRegime,
    AllocConfig,
    GovernanceProfile,
)
from yieldexec.allocation._constraints import (
    enforce_constraints,
    enforce_emergency_cap,
    enforce_min_stable,
    enforce_single_pool_cap,
)
from yieldexec.allocation._projection import (
    AllocationResult,
    YieldProjection,
    adjusted_apy,
    optimize_allocation,
    pool_il_risk,
    project_yield,
)
from yieldexec.allocation._regime import apply_regime_switch, select_anchor
from yieldexec.allocation._weights import compute_base_weights, correlation_factor

__all__ = [
    "AllocConfig",
    "AllocationRegime",
    "AllocationResult",
    "AllocationVector",
    "GovernanceProfile",
    "PoolAllocation",
    "YieldProjection",
    "adjusted_apy",
    "allocate",
    "apply_regime_switch",
    "compute_base_weights",
    "correlation_factor",
    "enforce_constraints",
    "enforce_emergency_cap",
    "enforce_min_stable",
    "enforce_single_pool_cap",
    "optimize_allocation",
    "pool_il_risk",
    "project_yield",
    "select_anchor",
]
