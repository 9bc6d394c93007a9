"""Monte Carlo stress test of the pool allocator.

Runs 200 thirty-day trials with stressed volatility on four workers and
prints the return distribution summary.
"""

from yieldexec.market import Pool
from yieldexec.simulation import MonteCarloConfig, run_monte_carlo

pools = [
    Pool("USD-STABLE", apy=0.08, is_stable=True),
    Pool("ECO-LP", apy=0.25, is_eco=True),
    Pool("NATIVE-LP", apy=0.40, tracks_sentiment=True),
    Pool("ALT-LP", apy=0.20),
]

config = MonteCarloConfig(
    n_trials=200,
    volatility_range=(0.7, 1.0),
    sentiment_step=0.3,
    n_jobs=4,
    random_state=7,
)
result = run_monte_carlo(10_000.0, pools, config)

print("Summary:")
print(result.summary)
print()
print("Worst trials:")
print(result.trials.nsmallest(5, "total_return"))
