"""Immutable market inputs: order books, regime scalars, and pools."""

from yieldexec.market._book import Order, OrderBookSnapshot, PriceLevel
from yieldexec.market._pools import Pool
from yieldexec.market._regime import RegimeParameters

__all__ = [
    "Order",
    "OrderBookSnapshot",
    "Pool",
    "PriceLevel",
    "RegimeParameters",
]
