"""Tabular views of a completed payoff simulation.

Turns SimulationResult records into pandas DataFrames and the one-line
summaries shown after a run. No formatting beyond rounding to cents.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from src.engine.simulator import PayoffEvent, SimulationResult

SCHEDULE_COLUMNS = ["account", "month", "interest", "payment", "balance"]
PAYOFF_COLUMNS = ["account", "months_to_payoff", "fixed_payment", "total_interest"]


def schedule_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per payment entry, grouped by account in portfolio order."""
    rows = [
        {
            "account": identifier,
            "month": e.month,
            "interest": e.interest,
            "payment": e.payment,
            "balance": e.balance,
        }
        for identifier, entries in result.schedules.items()
        for e in entries
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def payoff_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per payoff event, in settlement order."""
    rows = [
        {
            "account": p.identifier,
            "months_to_payoff": p.months_to_payoff,
            "fixed_payment": p.fixed_payment,
            "total_interest": p.total_interest,
        }
        for p in result.payoffs
    ]
    return pd.DataFrame(rows, columns=PAYOFF_COLUMNS)


def payoff_message(event: PayoffEvent) -> str:
    return (
        f"{event.identifier} paid off in {event.months_to_payoff} months at "
        f"${event.fixed_payment:,.2f} a month with ${event.total_interest:,.2f} "
        f"paid in interest."
    )


def total_interest_message(result: SimulationResult) -> str:
    return f"Total Interest Paid: ${result.total_interest:,.2f}"


def write_reports(result: SimulationResult, output_dir: str | Path) -> tuple[Path, Path]:
    """Write schedule and payoff CSVs to ``output_dir``.

    Returns:
        (schedule_csv_path, payoff_csv_path)
    """
    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    schedule_path = out_path / "payment_schedule.csv"
    payoff_path = out_path / "payoffs.csv"
    schedule_frame(result).round(2).to_csv(schedule_path, index=False)
    payoff_frame(result).round(2).to_csv(payoff_path, index=False)
    return schedule_path, payoff_path
