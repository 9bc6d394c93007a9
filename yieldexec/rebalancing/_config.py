"""Configuration and action records for allocation rebalancing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ThresholdType(str, Enum):
    """How pool-weight drift is measured against the target allocation."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class ActionType(str, Enum):
    """Kind of position change needed to reach a target allocation."""

    ENTER = "enter"
    EXIT = "exit"
    INCREASE = "increase"
    REDUCE = "reduce"


@dataclass(frozen=True)
class ThresholdRebalancingConfig:
    """Immutable drift trigger for pool allocations.

    Rebalances only when a pool's weight has drifted past the limit,
    avoiding churn while yields move little.

    Parameters
    ----------
    threshold_type : ThresholdType
        Compare drift in weight units or as a fraction of the target.
    threshold : float
        Maximum tolerated drift of any pool.  ABSOLUTE compares
        ``|current − target|`` with it directly (0.05 = 5 points of weight);
        RELATIVE divides the drift by the target weight first.
    """

    threshold_type: ThresholdType = ThresholdType.ABSOLUTE
    threshold: float = 0.05

    def __post_init__(self) -> None:
        if self.threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {self.threshold}")

    @classmethod
    def for_absolute(cls, threshold: float = 0.05) -> ThresholdRebalancingConfig:
        """Trigger when a pool drifts more than *threshold* in weight."""
        return cls(threshold_type=ThresholdType.ABSOLUTE, threshold=threshold)

    @classmethod
    def for_relative(cls, threshold: float = 0.25) -> ThresholdRebalancingConfig:
        """Trigger when a pool drifts more than *threshold* of its target."""
        return cls(threshold_type=ThresholdType.RELATIVE, threshold=threshold)


@dataclass(frozen=True)
class RebalanceAction:
    """One position change moving a pool from its current to its target amount.

    Parameters
    ----------
    pool : str
        Pool name.
    action : ActionType
        Direction of the change.
    current_amount : float
        Amount currently held.
    target_amount : float
        Amount wanted after rebalancing.
    """

    pool: str
    action: ActionType
    current_amount: float
    target_amount: float

    @property
    def delta(self) -> float:
        """Signed amount to move into the pool."""
        return round(self.target_amount - self.current_amount, 2)
