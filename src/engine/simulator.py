"""PayoffSimulator — month-by-month payoff of a portfolio of credit accounts.

Each step represents one month. Every open account is charged interest and
pays its fixed amount; an account whose balance reached zero or below on an
earlier payment is flagged settled and its overshoot is split among the
accounts still open. The run ends once every account is settled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.engine.errors import NonAmortizingPayment, SimulationLimitExceeded
from src.engine.surplus import EqualSplitStrategy, SurplusStrategy
from src.engine.validation import check_amortizing, validate_portfolio
from src.ledger.account import AccountLedger, count_unsettled, total_balance
from src.utils.config import DEFAULT_MAX_MONTHS, AccountConfig, SimulationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentEntry:
    """One row of an account's payment history."""

    month: int
    interest: float
    payment: float
    balance: float      # Clamped at 0; the ledger itself may be negative


@dataclass(frozen=True)
class PayoffEvent:
    """Summary recorded the month an account is flagged settled."""

    identifier: str
    months_to_payoff: int
    fixed_payment: float
    total_interest: float


@dataclass
class MonthReport:
    """Everything that happened during one monthly cycle."""

    month: int
    interest: float = 0.0
    remaining_balance: float = 0.0
    entries: list[tuple[str, PaymentEntry]] = field(default_factory=list)
    payoffs: list[PayoffEvent] = field(default_factory=list)


@dataclass
class SimulationResult:
    """Outcome of a completed run."""

    total_interest: float
    months: int
    payoffs: list[PayoffEvent]
    schedules: dict[str, list[PaymentEntry]]
    ledgers: list[AccountLedger]

    @property
    def total_paid(self) -> float:
        return sum(e.payment for rows in self.schedules.values() for e in rows)


class PayoffSimulator:
    """Drives monthly cycles over an ordered portfolio until all accounts settle."""

    def __init__(
        self,
        accounts: list[AccountConfig],
        strategy: SurplusStrategy | None = None,
        max_months: int = DEFAULT_MAX_MONTHS,
    ):
        """Validate input and build fresh ledgers.

        Args:
            accounts: Account records in portfolio order.
            strategy: Surplus split rule. Equal split if None.
            max_months: Hard cap on simulated months.

        Raises:
            EmptyPortfolio, InvalidAccountInput: Bad input.
            NonAmortizingPayment: A payment cannot cover month-1 interest.
        """
        validate_portfolio(accounts)
        check_amortizing(accounts)

        self.strategy = strategy or EqualSplitStrategy()
        self.max_months = max_months
        self.ledgers = [AccountLedger.from_config(cfg) for cfg in accounts]
        self.schedules: dict[str, list[PaymentEntry]] = {a.identifier: [] for a in self.ledgers}
        self.payoffs: list[PayoffEvent] = []
        self.total_interest = 0.0
        # Month about to be simulated (1-based)
        self.month = 1

    @classmethod
    def from_config(
        cls, config: SimulationConfig, strategy: SurplusStrategy | None = None
    ) -> PayoffSimulator:
        return cls(config.accounts, strategy=strategy, max_months=config.max_months)

    @property
    def done(self) -> bool:
        return count_unsettled(self.ledgers) == 0

    # ──────────────────────────────────────────────────────────────────────
    # Monthly cycle
    # ──────────────────────────────────────────────────────────────────────

    def step(self) -> MonthReport:
        """Run one month across the portfolio, in portfolio order.

        Returns:
            MonthReport for the month just simulated.

        Raises:
            NonAmortizingPayment: Interest meets or exceeds an account's payment.
        """
        report = MonthReport(month=self.month)

        for ledger in self.ledgers:
            if ledger.is_settled:
                continue

            if ledger.is_active:
                interest = ledger.projected_interest()
                if interest >= ledger.payment:
                    raise NonAmortizingPayment(
                        ledger.identifier, self.month, interest, ledger.payment
                    )
                ledger.accrue_and_pay(ledger.payment)
                report.interest += interest
                self._record(report, ledger, interest, ledger.payment)
            else:
                ledger.is_settled = True
                event = PayoffEvent(
                    identifier=ledger.identifier,
                    months_to_payoff=self.month,
                    fixed_payment=ledger.payment,
                    total_interest=ledger.cumulative_interest,
                )
                report.payoffs.append(event)
                self.payoffs.append(event)
                logger.debug(
                    "%s settled in month %d with $%.2f interest",
                    ledger.identifier, self.month, ledger.cumulative_interest,
                )
                # max() turns -0.0 into 0.0 for exact payoffs
                self._distribute(report, max(0.0, -ledger.balance))

        report.remaining_balance = total_balance(self.ledgers)
        self.total_interest += report.interest
        self.month += 1
        return report

    def _distribute(self, report: MonthReport, surplus: float) -> None:
        """Hand a settled account's overshoot to every account still unsettled.

        Recipients are counted at the moment of settlement, so accounts that
        settle later in the same month still receive a share. A zero surplus
        still writes a $0.00 row for each recipient.
        """
        recipients = [a for a in self.ledgers if not a.is_settled]
        if not recipients:
            logger.debug("No open accounts; discarding surplus of $%.2f", surplus)
            return

        shares = self.strategy.allocate(surplus, recipients)
        if len(shares) != len(recipients):
            raise ValueError(
                f"{self.strategy.name} returned {len(shares)} shares "
                f"for {len(recipients)} recipients"
            )
        for ledger, share in zip(recipients, shares):
            ledger.apply_credit(share)
            self._record(report, ledger, 0.0, share)
        logger.debug(
            "%s distributed $%.2f across %d account(s) in month %d",
            self.strategy.name, surplus, len(recipients), self.month,
        )

    def _record(
        self, report: MonthReport, ledger: AccountLedger, interest: float, payment: float
    ) -> None:
        entry = PaymentEntry(
            month=self.month,
            interest=interest,
            payment=payment,
            balance=max(0.0, ledger.balance),
        )
        self.schedules[ledger.identifier].append(entry)
        report.entries.append((ledger.identifier, entry))

    # ──────────────────────────────────────────────────────────────────────
    # Full run
    # ──────────────────────────────────────────────────────────────────────

    def run(self) -> SimulationResult:
        """Step until every account is settled.

        Raises:
            NonAmortizingPayment: See step().
            SimulationLimitExceeded: More than max_months would be needed.
        """
        while not self.done:
            if self.month > self.max_months:
                unsettled = [a.identifier for a in self.ledgers if not a.is_settled]
                raise SimulationLimitExceeded(self.max_months, unsettled)
            self.step()

        months = self.month - 1
        logger.info(
            "Portfolio of %d account(s) settled after %d months; total interest $%.2f",
            len(self.ledgers), months, self.total_interest,
        )
        return SimulationResult(
            total_interest=self.total_interest,
            months=months,
            payoffs=list(self.payoffs),
            schedules={k: list(v) for k, v in self.schedules.items()},
            ledgers=self.ledgers,
        )


def simulate_payoff(
    accounts: list[AccountConfig],
    strategy: SurplusStrategy | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> SimulationResult:
    """Build a simulator for ``accounts`` and run it to completion."""
    return PayoffSimulator(accounts, strategy=strategy, max_months=max_months).run()
