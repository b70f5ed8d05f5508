"""Run a payoff simulation for one portfolio and print the summary.

Usage:
    python scripts/run_payoff.py
    python scripts/run_payoff.py --config configs/portfolio/single_card.yaml --schedule
    python scripts/run_payoff.py --output results
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import yaml

from src.engine.errors import PayoffError
from src.engine.simulator import PayoffSimulator
from src.evaluation.report import (
    payoff_message,
    schedule_frame,
    total_interest_message,
    write_reports,
)
from src.utils.config import load_simulation_config
from src.utils.logging_config import configure_logging


def main():
    parser = argparse.ArgumentParser(description="Simulate paying off a set of credit accounts")
    parser.add_argument("--config", type=str, default="configs/portfolio/default_3card.yaml")
    parser.add_argument("--schedule", action="store_true", help="Print every payment entry")
    parser.add_argument("--output", type=str, default=None, help="Directory for CSV output")
    parser.add_argument("--log-level", type=str, default=None, help="Override config log level")
    args = parser.parse_args()

    try:
        config = load_simulation_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: could not load {args.config}: {exc}")
        sys.exit(1)
    configure_logging(args.log_level or config.log_level)

    try:
        result = PayoffSimulator.from_config(config).run()
    except PayoffError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(f"\n{'='*60}")
    print(f"  {config.num_accounts} account(s), ${config.total_initial_debt:,.2f} owed")
    print(f"{'='*60}")
    for event in result.payoffs:
        print(f"  {payoff_message(event)}")
    print(f"  {'─'*56}")
    print(f"  {total_interest_message(result)}")

    if args.schedule:
        df = schedule_frame(result)
        for account, group in df.groupby("account", sort=False):
            print(f"\n  {account}")
            print(group.drop(columns="account").round(2).to_string(index=False))

    if args.output:
        schedule_path, payoff_path = write_reports(result, args.output)
        print(f"\nSchedule saved to {schedule_path}")
        print(f"Payoffs saved to {payoff_path}")


if __name__ == "__main__":
    main()
