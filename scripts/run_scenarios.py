"""Run the simulator over randomized portfolios and produce a benchmark CSV.

Usage:
    python scripts/run_scenarios.py                          # Protocol from configs/scenarios.yaml
    python scripts/run_scenarios.py --quick                  # Dev: 50 scenarios × 1 seed
"""

import argparse
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pandas as pd

from src.engine.scenario_sampler import ScenarioSampler
from src.engine.simulator import simulate_payoff
from src.utils.config import load_scenario_protocol
from src.utils.logging_config import configure_logging


def run_benchmark(
    num_scenarios: int = 1000,
    seeds: list[int] | None = None,
    output_dir: str = "results",
) -> pd.DataFrame:
    """Simulate sampled portfolios for every seed.

    Returns:
        DataFrame with one row per (seed, scenario).
    """
    if seeds is None:
        seeds = [42]

    sampler = ScenarioSampler()
    rows: list[dict] = []
    t0 = time.time()

    for seed in seeds:
        rng = np.random.default_rng(seed)
        for idx in range(num_scenarios):
            scenario = sampler.sample(rng)
            result = simulate_payoff(scenario.accounts, max_months=scenario.max_months)

            rows.append({
                "seed": seed,
                "scenario": idx,
                "num_accounts": scenario.num_accounts,
                "initial_debt": round(scenario.total_initial_debt, 2),
                "monthly_payment": round(scenario.total_monthly_payment, 2),
                "total_interest": round(result.total_interest, 2),
                "months": result.months,
            })

    elapsed = time.time() - t0
    print(f"Simulated {len(rows)} portfolios in {elapsed:.1f}s")

    df = pd.DataFrame(rows)
    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    csv_path = out_path / "scenarios.csv"
    df.to_csv(csv_path, index=False)
    print(f"Per-scenario results saved to {csv_path}")

    return df


def print_summary(df: pd.DataFrame) -> None:
    """Print summary stats grouped by portfolio size."""
    summary = df.groupby("num_accounts").agg(
        runs=("months", "size"),
        months_mean=("months", "mean"),
        months_max=("months", "max"),
        interest_mean=("total_interest", "mean"),
    )
    print("\n" + "=" * 60)
    print("  PAYOFF SCENARIOS — Summary by account count")
    print("=" * 60)
    print(summary.round(1).to_string())
    print()


def main():
    parser = argparse.ArgumentParser(description="Benchmark the payoff simulator")
    parser.add_argument("--config", type=str, default="configs/scenarios.yaml")
    parser.add_argument("--quick", action="store_true", help="Quick run: 50 scenarios, 1 seed")
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    configure_logging("WARNING")

    if args.quick:
        num_scenarios = 50
        seeds = [42]
    else:
        protocol = load_scenario_protocol(args.config)
        num_scenarios = protocol.get("num_scenarios", 1000)
        seeds = protocol.get("seeds", [42])
    print(f"{num_scenarios} scenarios × {len(seeds)} seed(s)")

    df = run_benchmark(num_scenarios=num_scenarios, seeds=seeds, output_dir=args.output)
    print_summary(df)


if __name__ == "__main__":
    main()
