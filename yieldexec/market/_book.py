"""Order book snapshot and order records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PriceLevel:
    """One aggregated level of an order book side.

    Parameters
    ----------
    price : float
        Level price.  Must be strictly positive.
    amount : float
        Resting amount at this price.  Must be non-negative.
    """

    price: float
    amount: float

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError(f"price must be strictly positive, got {self.price}")
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")


@dataclass(frozen=True)
class OrderBookSnapshot:
    """Immutable view of a market at one instant.

    Bids are stored in descending and asks in ascending price order,
    whatever order they were supplied in.  Empty sides and a
    non-positive mid price are accepted here and rejected by the
    optimizer, which owns that precondition.

    Parameters
    ----------
    mid_price : float
        Reference mid price.
    bids : tuple[PriceLevel, ...]
        Bid levels.
    asks : tuple[PriceLevel, ...]
        Ask levels.
    """

    mid_price: float
    bids: tuple[PriceLevel, ...] = field(default_factory=tuple)
    asks: tuple[PriceLevel, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "bids", tuple(sorted(self.bids, key=lambda lvl: -lvl.price))
        )
        object.__setattr__(
            self, "asks", tuple(sorted(self.asks, key=lambda lvl: lvl.price))
        )

    @classmethod
    def from_levels(
        cls,
        mid_price: float,
        bids: Iterable[tuple[float, float]],
        asks: Iterable[tuple[float, float]],
    ) -> OrderBookSnapshot:
        """Build a snapshot from ``(price, amount)`` pairs."""
        return cls(
            mid_price=mid_price,
            bids=tuple(PriceLevel(p, a) for p, a in bids),
            asks=tuple(PriceLevel(p, a) for p, a in asks),
        )

    @property
    def best_bid(self) -> float | None:
        """Highest bid price, or ``None`` for an empty bid side."""
        return self.bids[0].price if self.bids else None

    @property
    def best_ask(self) -> float | None:
        """Lowest ask price, or ``None`` for an empty ask side."""
        return self.asks[0].price if self.asks else None

    @property
    def bid_liquidity(self) -> float:
        return float(sum(lvl.amount for lvl in self.bids))

    @property
    def ask_liquidity(self) -> float:
        return float(sum(lvl.amount for lvl in self.asks))

    @property
    def total_liquidity(self) -> float:
        """Resting amount across both sides."""
        return self.bid_liquidity + self.ask_liquidity


@dataclass(frozen=True)
class Order:
    """A limit order proposed by the placement optimizer."""

    price: float
    amount: float

    @property
    def notional(self) -> float:
        return self.price * self.amount
