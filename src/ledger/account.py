"""Account ledger for revolving-credit payoff simulation.

Implements the per-account financial math:
- APR (percent) → monthly periodic rate conversion
- Interest accrual and fixed payment application
- Payoff status tracking
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.utils.config import AccountConfig


def monthly_rate_from_apr(apr: float) -> float:
    """APR percent ÷ 100 ÷ 12, e.g. 22.99 → 0.0191583..."""
    return apr / 100.0 / 12.0


@dataclass
class AccountLedger:
    """Mutable state for a single credit account during simulation."""

    identifier: str
    balance: float              # Current principal owed; may dip below 0 on the payoff month
    apr: float                  # Annual percentage rate as entered (e.g., 22.99 for 22.99%)
    payment: float              # Fixed amount paid every active month
    cumulative_interest: float = 0.0
    is_settled: bool = False
    monthly_rate: float = field(init=False)

    def __post_init__(self) -> None:
        # Fixed for the lifetime of the ledger
        self.monthly_rate = monthly_rate_from_apr(self.apr)

    @classmethod
    def from_config(cls, cfg: AccountConfig) -> AccountLedger:
        return cls(
            identifier=cfg.name,
            balance=float(cfg.balance),
            apr=float(cfg.apr),
            payment=float(cfg.payment),
        )

    @property
    def is_active(self) -> bool:
        """Not settled and still carrying a positive balance."""
        return not self.is_settled and self.balance > 0

    def projected_interest(self) -> float:
        """Interest this month's payment would be charged against."""
        return self.balance * self.monthly_rate

    def accrue_and_pay(self, payment: float) -> float:
        """Advance one month: subtract payment, then add interest.

        Formula: B_{t+1} = B_t − P_t + B_t × r

        No check that the payment covers the interest is made here; the
        simulator rejects non-amortizing payments before calling this.

        Args:
            payment: Amount applied to this account this month.

        Returns:
            Interest charged this month (≥ 0 for non-negative balances).
        """
        interest = self.projected_interest()
        self.balance -= payment
        self.cumulative_interest += interest
        self.balance += interest
        return interest

    def apply_credit(self, amount: float) -> None:
        """Reduce balance by a redistributed surplus share (no interest)."""
        self.balance -= amount


def total_balance(ledgers: list[AccountLedger]) -> float:
    """Sum of positive balances across ledgers."""
    return sum(max(0.0, a.balance) for a in ledgers)


def count_unsettled(ledgers: list[AccountLedger]) -> int:
    return sum(1 for a in ledgers if not a.is_settled)
