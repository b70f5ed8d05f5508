"""PortfolioBuilder — assembles the ordered account list handed to the simulator."""

from __future__ import annotations

from src.engine.errors import EmptyPortfolio, InvalidAccountInput
from src.utils.config import AccountConfig


class PortfolioBuilder:
    """Ordered collection of account records being entered by a user.

    Owns its own identifier counter, so generated names such as ``Card 3``
    are never reused after an account is removed.
    """

    def __init__(self, accounts: list[AccountConfig] | None = None):
        self._accounts: list[AccountConfig] = list(accounts or [])
        self._next_id = len(self._accounts) + 1

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, identifier: str) -> bool:
        return any(a.name == identifier for a in self._accounts)

    @property
    def identifiers(self) -> list[str]:
        return [a.name for a in self._accounts]

    def add_account(
        self,
        balance: float,
        apr: float,
        payment: float,
        identifier: str | None = None,
    ) -> AccountConfig:
        """Append an account and return its record.

        Raises:
            InvalidAccountInput: ``identifier`` is already in the portfolio.
        """
        if identifier is None:
            identifier = self._generate_id()
        elif identifier in self:
            raise InvalidAccountInput(identifier, "name", identifier, "is already in the portfolio")
        else:
            self._next_id += 1

        cfg = AccountConfig(name=identifier, balance=balance, apr=apr, payment=payment)
        self._accounts.append(cfg)
        return cfg

    def _generate_id(self) -> str:
        """Next unused ``Card <n>``; skips names already taken."""
        while True:
            candidate = f"Card {self._next_id}"
            self._next_id += 1
            if candidate not in self:
                return candidate

    def remove_account(self, identifier: str) -> AccountConfig:
        """Remove an account by identifier.

        Raises:
            KeyError: Unknown identifier.
            EmptyPortfolio: It is the only account left.
        """
        for i, cfg in enumerate(self._accounts):
            if cfg.name == identifier:
                break
        else:
            raise KeyError(identifier)

        if len(self._accounts) == 1:
            raise EmptyPortfolio("Cannot remove the last remaining account")

        return self._accounts.pop(i)

    def build(self) -> list[AccountConfig]:
        """Snapshot of the records in insertion order."""
        return list(self._accounts)
