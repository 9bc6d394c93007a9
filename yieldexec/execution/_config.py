"""Configuration for the simulated-annealing order placement optimizer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OptConfig:
    """Immutable configuration for :func:`optimize_orders`.

    The scoring constants (eco bonus, volatility and correlation
    penalties, shallowness threshold) are empirical defaults kept
    overridable rather than treated as fixed truths.

    Parameters
    ----------
    initial_temperature : float
        Starting annealing temperature ``T₀``.
    cooling_rate : float
        Geometric cooling factor applied every iteration.
    min_temperature : float
        Search stops once the temperature falls below this value.
    max_iterations : int
        Hard iteration budget.
    reheat_threshold : float
        Reheat when ``T < reheat_threshold · T₀`` during the first half
        of the iteration budget.
    reheat_factor : float
        Base reheat multiplier.
    time_budget : float or None
        Optional wall-clock budget in seconds, checked once per iteration.
    base_spread : float
        Seed spread below mid at zero volatility (0.001 = 10 bp).
    correlation_spread : float
        Extra seed spread per unit of correlation above 0.5.
    min_seed_orders : int
        Lower bound on the number of seed orders.
    max_seed_orders : int
        Upper bound on the number of seed orders.
    min_orders : int
        Minimum order count maintained during search.
    max_orders : int
        Maximum order count maintained during search.
    min_order_amount : float
        Orders smaller than this are dropped; perturbed amounts are
        floored at it.
    price_perturbation : float
        Base price jitter magnitude at zero volatility.
    correlation_perturbation : float
        Extra price jitter per unit of correlation above 0.5.
    amount_perturbation : float
        Maximum relative amount jitter at zero volatility.
    split_price_variation : float
        Relative price spread of a newly split order.
    max_price_deviation : float
        Maximum relative distance from mid at zero volatility.
    redistribute_probability : float
        Probability of redrawing all amounts with random weights.
    delete_probability : float
        Probability of deleting an order.
    split_probability : float
        Probability of splitting an order (exclusive with deletion).
    eco_bonus : float
        Score multiplier for eco assets.
    clawback_penalty : float
        Score multiplier for clawback-enabled assets.
    volatility_penalty : float
        Coefficient of the ``volatility²`` score penalty.
    correlation_penalty : float
        Coefficient of the correlation-above-0.5 score penalty.
    shallowness_threshold : float
        Fraction of book liquidity the order set may consume for free.
    shallowness_penalty : float
        Penalty per unit of liquidity ratio above the threshold.
    fallback_price_ratio : float
        Price of the single fallback order as a fraction of mid.
    progress_interval : int
        Iterations between progress callback invocations.
    """

    initial_temperature: float = 100.0
    cooling_rate: float = 0.95
    min_temperature: float = 0.1
    max_iterations: int = 1000
    reheat_threshold: float = 0.01
    reheat_factor: float = 10.0
    time_budget: float | None = None
    base_spread: float = 0.001
    correlation_spread: float = 0.002
    min_seed_orders: int = 3
    max_seed_orders: int = 10
    min_orders: int = 2
    max_orders: int = 15
    min_order_amount: float = 1.0
    price_perturbation: float = 0.005
    correlation_perturbation: float = 0.003
    amount_perturbation: float = 0.10
    split_price_variation: float = 0.002
    max_price_deviation: float = 0.10
    redistribute_probability: float = 0.3
    delete_probability: float = 0.2
    split_probability: float = 0.2
    eco_bonus: float = 1.05
    clawback_penalty: float = 0.95
    volatility_penalty: float = 20.0
    correlation_penalty: float = 10.0
    shallowness_threshold: float = 0.10
    shallowness_penalty: float = 100.0
    fallback_price_ratio: float = 0.99
    progress_interval: int = 50

    def __post_init__(self) -> None:
        if not 0.0 < self.cooling_rate < 1.0:
            raise ValueError(
                f"cooling_rate must be in (0, 1), got {self.cooling_rate}"
            )
        if self.initial_temperature <= self.min_temperature:
            raise ValueError(
                "initial_temperature must exceed min_temperature, got "
                f"{self.initial_temperature} <= {self.min_temperature}"
            )
        if self.min_temperature <= 0:
            raise ValueError(
                f"min_temperature must be strictly positive, got {self.min_temperature}"
            )
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )
        if self.time_budget is not None and self.time_budget <= 0:
            raise ValueError(
                f"time_budget must be positive or None, got {self.time_budget}"
            )
        if not 1 <= self.min_orders <= self.max_orders:
            raise ValueError(
                "expected 1 <= min_orders <= max_orders, got "
                f"{self.min_orders} and {self.max_orders}"
            )
        if not (
            self.min_orders
            <= self.min_seed_orders
            <= self.max_seed_orders
            <= self.max_orders
        ):
            raise ValueError(
                "seed order bounds must lie within [min_orders, max_orders], got "
                f"[{self.min_seed_orders}, {self.max_seed_orders}]"
            )
        for name in (
            "redistribute_probability",
            "delete_probability",
            "split_probability",
        ):
            p = getattr(self, name)
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {p}")
        if self.delete_probability + self.split_probability > 1.0:
            raise ValueError(
                "delete_probability + split_probability must be <= 1, got "
                f"{self.delete_probability + self.split_probability}"
            )
        if self.progress_interval < 1:
            raise ValueError(
                f"progress_interval must be >= 1, got {self.progress_interval}"
            )

    @classmethod
    def for_fast(cls) -> OptConfig:
        """Short search with a 200-iteration budget."""
        return cls(max_iterations=200)

    @classmethod
    def for_thorough(cls) -> OptConfig:
        """Slower cooling (0.98) and a 5000-iteration budget."""
        return cls(cooling_rate=0.98, max_iterations=5000)
