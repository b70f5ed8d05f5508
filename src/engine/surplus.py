"""Surplus redistribution strategies.

When an account settles with an overpayment, the overshoot is handed to the
accounts that are still open. This is the only step of the monthly cycle
where accounts interact, so it is isolated behind a small interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.ledger.account import AccountLedger


class SurplusStrategy(ABC):
    """Interface for splitting a settled account's surplus."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def allocate(self, surplus: float, recipients: list[AccountLedger]) -> list[float]:
        """Decide how much of ``surplus`` each recipient receives.

        Args:
            surplus: Amount to hand out (≥ 0).
            recipients: Unsettled ledgers in portfolio order (non-empty).

        Returns:
            One share per recipient, in the same order.
        """
        ...


class EqualSplitStrategy(SurplusStrategy):
    """Split the surplus evenly, ignoring rate and balance."""

    @property
    def name(self) -> str:
        return "EqualSplit"

    def allocate(self, surplus: float, recipients: list[AccountLedger]) -> list[float]:
        share = surplus / len(recipients)
        return [share] * len(recipients)
