"""Payoff simulation engine."""

from src.engine.errors import (
    EmptyPortfolio,
    InvalidAccountInput,
    NonAmortizingPayment,
    PayoffError,
    SimulationLimitExceeded,
)
from src.engine.simulator import (
    MonthReport,
    PaymentEntry,
    PayoffEvent,
    PayoffSimulator,
    SimulationResult,
    simulate_payoff,
)
from src.engine.surplus import EqualSplitStrategy, SurplusStrategy

__all__ = [
    "PayoffSimulator",
    "simulate_payoff",
    "MonthReport",
    "PaymentEntry",
    "PayoffEvent",
    "SimulationResult",
    "SurplusStrategy",
    "EqualSplitStrategy",
    "PayoffError",
    "EmptyPortfolio",
    "InvalidAccountInput",
    "NonAmortizingPayment",
    "SimulationLimitExceeded",
]
