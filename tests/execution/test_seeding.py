"""Tests for deterministic seed order generation."""

from __future__ import annotations

import pytest

from yieldexec.execution import (
    OptConfig,
    generate_seed_orders,
    seed_order_count,
    seed_spread,
)
from yieldexec.market import OrderBookSnapshot, RegimeParameters


class TestSeedOrderCount:
    @pytest.mark.parametrize(
        ("volatility", "expected"),
        [(0.0, 5), (0.1, 6), (0.5, 8), (0.9, 10), (1.0, 10)],
    )
    def test_rounding(self, volatility: float, expected: int) -> None:
        assert seed_order_count(volatility, OptConfig()) == expected

    def test_clamped_to_seed_bounds(self) -> None:
        cfg = OptConfig(min_seed_orders=3, max_seed_orders=6)
        assert seed_order_count(1.0, cfg) == 6


class TestSeedSpread:
    def test_volatility_widens(self) -> None:
        cfg = OptConfig()
        assert seed_spread(RegimeParameters(volatility=0.5), cfg) == pytest.approx(0.002)

    def test_correlation_adds(self) -> None:
        regime = RegimeParameters(volatility=0.5, external_correlation=0.9)
        assert seed_spread(regime, OptConfig()) == pytest.approx(0.0028)

    def test_low_correlation_ignored(self) -> None:
        regime = RegimeParameters(volatility=0.5, external_correlation=0.4)
        assert seed_spread(regime, OptConfig()) == pytest.approx(0.002)


class TestGenerateSeedOrders:
    def test_ladder(
        self, deep_book: OrderBookSnapshot, calm_regime: RegimeParameters
    ) -> None:
        orders = generate_seed_orders(deep_book, 5000.0, calm_regime)
        assert len(orders) == 6
        expected = [round(1.0 - 0.0002 * (i + 1), 6) for i in range(6)]
        assert [o.price for o in orders] == pytest.approx(expected)
        assert all(o.price < deep_book.mid_price for o in orders)

    def test_amounts_sum_to_target(
        self, deep_book: OrderBookSnapshot, calm_regime: RegimeParameters
    ) -> None:
        orders = generate_seed_orders(deep_book, 5000.0, calm_regime)
        assert sum(o.amount for o in orders) == pytest.approx(5000.0, abs=1e-9)
        assert orders[0].amount == pytest.approx(833.35)
        assert all(o.amount == pytest.approx(833.33) for o in orders[1:])

    def test_idempotent(self, deep_book: OrderBookSnapshot) -> None:
        regime = RegimeParameters(volatility=0.7, external_correlation=0.8)
        first = generate_seed_orders(deep_book, 1234.56, regime)
        second = generate_seed_orders(deep_book, 1234.56, regime)
        assert first == second
