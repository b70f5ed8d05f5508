"""Payoff simulation errors."""

from __future__ import annotations


class PayoffError(ValueError):
    """Base class for configuration errors surfaced by the simulator."""


class InvalidAccountInput(PayoffError):
    """An account record has a value the simulator cannot accept."""

    def __init__(self, identifier: str, field: str, value, reason: str):
        self.identifier = identifier
        self.field = field
        self.value = value
        super().__init__(f"Account {identifier!r}: {field}={value!r} {reason}")


class EmptyPortfolio(PayoffError):
    """No accounts were supplied."""

    def __init__(self, message: str = "Portfolio has no accounts to simulate"):
        super().__init__(message)


class NonAmortizingPayment(PayoffError):
    """A scheduled payment does not exceed the interest charged that month."""

    def __init__(self, identifier: str, month: int, interest: float, payment: float):
        self.identifier = identifier
        self.month = month
        self.interest = interest
        self.payment = payment
        super().__init__(
            f"Account {identifier!r} month {month}: interest ${interest:,.2f} "
            f"meets or exceeds payment ${payment:,.2f}; balance would never decrease"
        )


class SimulationLimitExceeded(PayoffError):
    """The run hit its month cap with accounts still unsettled."""

    def __init__(self, month: int, unsettled: list[str]):
        self.month = month
        self.unsettled = list(unsettled)
        super().__init__(
            f"Stopped after {month} months with {len(unsettled)} account(s) "
            f"unsettled: {', '.join(unsettled)}"
        )
