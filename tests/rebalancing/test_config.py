"""Tests for rebalancing configs and action records."""

from __future__ import annotations

import pytest

from yieldexec.rebalancing import (
    ActionType,
    RebalanceAction,
    ThresholdRebalancingConfig,
    ThresholdType,
)


class TestThresholdType:
    def test_members(self) -> None:
        assert set(ThresholdType) == {
            ThresholdType.ABSOLUTE,
            ThresholdType.RELATIVE,
        }


class TestActionType:
    def test_members(self) -> None:
        assert {a.value for a in ActionType} == {"enter", "exit", "increase", "reduce"}


class TestThresholdRebalancingConfig:
    def test_defaults(self) -> None:
        cfg = ThresholdRebalancingConfig()
        assert cfg.threshold_type == ThresholdType.ABSOLUTE
        assert cfg.threshold == 0.05

    def test_frozen(self) -> None:
        cfg = ThresholdRebalancingConfig()
        with pytest.raises(AttributeError):
            cfg.threshold = 0.1  # type: ignore[misc]

    def test_for_absolute(self) -> None:
        cfg = ThresholdRebalancingConfig.for_absolute(threshold=0.03)
        assert cfg.threshold_type == ThresholdType.ABSOLUTE
        assert cfg.threshold == 0.03

    def test_for_relative(self) -> None:
        cfg = ThresholdRebalancingConfig.for_relative()
        assert cfg.threshold_type == ThresholdType.RELATIVE
        assert cfg.threshold == 0.25

    def test_negative_threshold(self) -> None:
        with pytest.raises(ValueError, match="threshold"):
            ThresholdRebalancingConfig(threshold=-0.1)


class TestRebalanceAction:
    def test_delta(self) -> None:
        action = RebalanceAction(
            pool="P", action=ActionType.REDUCE, current_amount=300.0, target_amount=250.5
        )
        assert action.delta == pytest.approx(-49.5)
