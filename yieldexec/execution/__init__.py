"""Order placement optimization over limit order books.

Deterministic seeding, a slippage / fill-probability score, and a
simulated-annealing search with volatility-adaptive cooling and
reheating.  Includes a snapshot backtest.
"""

from yieldexec.execution._annealing import (
    AnnealingProgress,
    ProgressCallback,
    acceptance_probability,
    next_temperature,
    optimize_orders,
    post_process_orders,
)
from yieldexec.execution._backtest import (
    BacktestResult,
    BacktestSnapshot,
    run_backtest,
)
from yieldexec.execution._config import OptConfig
from yieldexec.execution._perturbation import (
    perturb_order,
    perturb_orders,
    price_bounds,
    random_split,
    rescale_to_target,
)
from yieldexec.execution._scoring import (
    ScoreBreakdown,
    compute_execution_probability,
    compute_shallowness_penalty,
    compute_slippage,
    score_breakdown,
    score_orders,
)
from yieldexec.execution._seeding import (
    generate_seed_orders,
    seed_order_count,
    seed_spread,
)

__all__ = [
    "AnnealingProgress",
    "BacktestResult",
    "BacktestSnapshot",
    "OptConfig",
    "ProgressCallback",
    "ScoreBreakdown",
    "acceptance_probability",
    "compute_execution_probability",
    "compute_shallowness_penalty",
    "compute_slippage",
    "generate_seed_orders",
    "next_temperature",
    "optimize_orders",
    "perturb_order",
    "perturb_orders",
    "post_process_orders",
    "price_bounds",
    "random_split",
    "rescale_to_target",
    "run_backtest",
    "score_breakdown",
    "score_orders",
    "seed_order_count",
    "seed_spread",
]
