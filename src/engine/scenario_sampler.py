"""ScenarioSampler — generates portfolios for benchmarking and property checks.

Produces random SimulationConfig instances with varied numbers of accounts
(1–5), APRs (0%–29.99%), balances ($0–$15,000) and fixed payments that
always exceed the first month's interest. Also provides named presets.
"""

from __future__ import annotations

import numpy as np

from src.ledger.account import monthly_rate_from_apr
from src.utils.config import DEFAULT_MAX_MONTHS, AccountConfig, SimulationConfig


_ACCOUNT_NAMES = [
    "Visa Platinum", "Mastercard Gold", "Store Card", "Rewards Card",
    "Travel Card", "Gas Card", "Medical Card", "Cash Back Card",
    "Student Card", "Department Store", "Airline Card", "Hotel Card",
]


class ScenarioSampler:
    """Generate randomized or preset amortizing portfolios."""

    def __init__(
        self,
        num_accounts_range: tuple[int, int] = (1, 5),
        apr_range: tuple[float, float] = (0.0, 29.99),
        balance_range: tuple[float, float] = (0.0, 15000.0),
        payment_margin_range: tuple[float, float] = (0.01, 0.10),
        payment_floor: float = 25.0,
        max_months: int = DEFAULT_MAX_MONTHS,
    ):
        """
        Args:
            payment_margin_range: Fraction of balance paid on top of the
                first month's interest.
            payment_floor: Smallest payment ever generated.
        """
        self.num_accounts_range = num_accounts_range
        self.apr_range = apr_range
        self.balance_range = balance_range
        self.payment_margin_range = payment_margin_range
        self.payment_floor = payment_floor
        self.max_months = max_months

    def sample(self, rng: np.random.Generator | None = None) -> SimulationConfig:
        """Sample a random portfolio.

        Args:
            rng: Numpy random Generator for reproducibility.

        Returns:
            A randomized SimulationConfig that passes the amortization check.
        """
        if rng is None:
            rng = np.random.default_rng()

        num_accounts = rng.integers(self.num_accounts_range[0], self.num_accounts_range[1] + 1)

        name_indices = rng.choice(len(_ACCOUNT_NAMES), size=num_accounts, replace=False)
        names = [_ACCOUNT_NAMES[i] for i in name_indices]

        accounts = []
        for name in names:
            apr = round(float(rng.uniform(*self.apr_range)), 2)
            balance = round(float(rng.uniform(*self.balance_range)), 2)
            interest = balance * monthly_rate_from_apr(apr)
            margin = balance * float(rng.uniform(*self.payment_margin_range))
            # Rounding up to the cent keeps payment strictly above interest
            payment = max(self.payment_floor, float(np.ceil((interest + margin) * 100) / 100) + 0.01)
            accounts.append(AccountConfig(name=name, balance=balance, apr=apr, payment=payment))

        return SimulationConfig(accounts=accounts, max_months=self.max_months)

    @staticmethod
    def preset(name: str) -> SimulationConfig:
        """Return a named preset portfolio.

        Available presets:
            - "single_card": $100 at 12% paying $34/month
            - "two_zero_rate": $50 and $200 at 0% paying $50 and $20
            - "three_card": Typical mix of store, rewards and platinum cards
            - "non_amortizing": $1000 at 24% paying $15 (rejected by the simulator)

        Raises:
            ValueError: If preset name is unknown.
        """
        presets = {
            "single_card": SimulationConfig(
                accounts=[AccountConfig("Card 1", balance=100, apr=12.0, payment=34)],
            ),
            "two_zero_rate": SimulationConfig(
                accounts=[
                    AccountConfig("A", balance=50, apr=0.0, payment=50),
                    AccountConfig("B", balance=200, apr=0.0, payment=20),
                ],
            ),
            "three_card": SimulationConfig(
                accounts=[
                    AccountConfig("Store Card", balance=800, apr=26.99, payment=60),
                    AccountConfig("Rewards Card", balance=3200, apr=16.99, payment=120),
                    AccountConfig("Visa Platinum", balance=6500, apr=21.99, payment=200),
                ],
            ),
            "non_amortizing": SimulationConfig(
                accounts=[AccountConfig("Card 1", balance=1000, apr=24.0, payment=15)],
            ),
        }

        if name not in presets:
            valid = ", ".join(sorted(presets.keys()))
            raise ValueError(f"Unknown preset {name!r}. Valid: {valid}")

        return presets[name]
