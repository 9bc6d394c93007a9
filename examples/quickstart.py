"""Quickstart: place a large order, then allocate its proceeds across pools.

Builds a synthetic ten-level order book, splits a 5 000-unit order with
the annealing search, and allocates 10 000 units across five pools in a
calm and a turbulent regime.
"""

from yieldexec.allocation import optimize_allocation
from yieldexec.execution import OptConfig, compute_slippage, optimize_orders
from yieldexec.market import OrderBookSnapshot, Pool, RegimeParameters

# --- Synthetic order book around a mid price of 1.0 ---
bids = [(round(1.0 - 0.001 * i, 6), 5000.0) for i in range(1, 11)]
asks = [(round(1.0 + 0.001 * i, 6), 5000.0) for i in range(1, 11)]
book = OrderBookSnapshot.from_levels(1.0, bids=bids, asks=asks)

# --- Order placement ---
regime = RegimeParameters(volatility=0.3, external_correlation=0.4)
orders = optimize_orders(book, 5000.0, regime, OptConfig.for_fast(), rng=42)

print("Orders:")
for order in orders:
    print(f"  {order.amount:>10.2f} @ {order.price:.6f}")
print(f"Slippage: {compute_slippage(orders, book.mid_price):.6f}")
print()

# --- Pool allocation ---
pools = [
    Pool("USD-STABLE", apy=0.08, is_stable=True),
    Pool("ECO-LP", apy=0.25, is_eco=True),
    Pool("INDEX-LP", apy=0.30, correlation_with_reference=0.9),
    Pool("NATIVE-LP", apy=0.40, tracks_sentiment=True),
    Pool("ALT-LP", apy=0.20),
]

for label, market in (
    ("calm", RegimeParameters.for_calm()),
    ("turbulent", RegimeParameters.for_turbulent(external_market_change=-0.6)),
):
    result = optimize_allocation(10_000.0, pools, market)
    print(f"Allocation ({label}, {result.allocation.regime.value}):")
    print(result.allocation.to_frame()[["weight", "amount"]].round(4))
    print(f"Net APY: {result.projection.net_apy:.4f}")
    print()
