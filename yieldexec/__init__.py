"""Order placement and capital allocation engine for volatile markets.

Modules
-------
market
    Market records: order book snapshots, orders, regime scalars, and
    yield pools.
numeric
    Rounding, guarded normalisation, capped redistribution, and
    summary statistics shared by the optimizers.
execution
    Simulated-annealing placement of limit orders over an order book,
    with deterministic seeding, a slippage / fill-probability score,
    and a snapshot backtest.
allocation
    Regime-adaptive capital allocation across yield pools, constraint
    enforcement, governance presets, and yield projection.
rebalancing
    Drift, turnover, cost, threshold rebalancing decisions, and the
    trade list between two allocations.
simulation
    Monte Carlo trials and historical replay of the allocator.
"""

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

logging.getLogger("yieldexec").addHandler(logging.NullHandler())

from yieldexec.exceptions import (
    ConfigurationError,
    DataError,
    EmptyPoolSetError,
    InvalidAmountError,
    InvalidCapitalError,
    InvalidOrderBookError,
    NumericOverflowError,
    YieldExecError,
)

__all__ = [
    "ConfigurationError",
    "DataError",
    "EmptyPoolSetError",
    "InvalidAmountError",
    "InvalidCapitalError",
    "InvalidOrderBookError",
    "NumericOverflowError",
    "YieldExecError",
]

try:
    __version__ = _pkg_version("yieldexec")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
