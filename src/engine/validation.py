"""Entry checks run before the first simulated month."""

from __future__ import annotations

import math

from src.engine.errors import EmptyPortfolio, InvalidAccountInput, NonAmortizingPayment
from src.ledger.account import monthly_rate_from_apr
from src.utils.config import AccountConfig


def validate_account(cfg: AccountConfig) -> None:
    """Reject negative balances, negative rates, and non-positive payments."""
    for field_name in ("balance", "apr", "payment"):
        value = getattr(cfg, field_name)
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidAccountInput(cfg.name, field_name, value, "must be a finite number")

    if cfg.balance < 0:
        raise InvalidAccountInput(cfg.name, "balance", cfg.balance, "must be >= 0")
    if cfg.apr < 0:
        raise InvalidAccountInput(cfg.name, "apr", cfg.apr, "must be >= 0")
    if cfg.payment <= 0:
        raise InvalidAccountInput(cfg.name, "payment", cfg.payment, "must be > 0")


def validate_portfolio(accounts: list[AccountConfig]) -> None:
    """Validate every account and the collection as a whole.

    Raises:
        EmptyPortfolio: No accounts supplied.
        InvalidAccountInput: First offending account, in input order.
    """
    if not accounts:
        raise EmptyPortfolio()

    seen: set[str] = set()
    for cfg in accounts:
        if cfg.name in seen:
            raise InvalidAccountInput(cfg.name, "name", cfg.name, "is not unique")
        seen.add(cfg.name)
        validate_account(cfg)


def check_amortizing(accounts: list[AccountConfig]) -> None:
    """Pre-flight: every payment must exceed its first month's interest.

    Balances only shrink month over month once this holds (redistribution
    only lowers them further), so month 1 is the worst case.

    Raises:
        NonAmortizingPayment: reported against month 1.
    """
    for cfg in accounts:
        if cfg.balance <= 0:
            continue
        interest = cfg.balance * monthly_rate_from_apr(cfg.apr)
        if interest >= cfg.payment:
            raise NonAmortizingPayment(cfg.name, 1, interest, cfg.payment)
