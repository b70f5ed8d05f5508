"""YAML configuration loader and dataclasses for payoff simulation setup."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_MAX_MONTHS = 1200


def _resolve_config_path(path: str | Path) -> Path:
    """Resolve a config path, anchoring relative paths to the project root.

    The project root is identified as the nearest ancestor directory that
    contains ``pyproject.toml``.  If the file exists as-is (e.g. an absolute
    path or the CWD happens to be the project root already), it is returned
    unchanged.
    """
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p

    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            # open() will give the descriptive FileNotFoundError if missing
            return parent / p

    return p


@dataclass
class AccountConfig:
    """Input record for a single credit account."""

    name: str = "Card"
    balance: float = 0.0
    apr: float = 0.0        # Percent, e.g. 22.99
    payment: float = 25.0


@dataclass
class SimulationConfig:
    """Full simulation configuration."""

    accounts: list[AccountConfig] = field(default_factory=list)
    max_months: int = DEFAULT_MAX_MONTHS
    log_level: str = "INFO"

    @property
    def num_accounts(self) -> int:
        return len(self.accounts)

    @property
    def total_initial_debt(self) -> float:
        return sum(a.balance for a in self.accounts)

    @property
    def total_monthly_payment(self) -> float:
        return sum(a.payment for a in self.accounts)


def parse_account(raw: dict[str, Any], index: int) -> AccountConfig:
    """Build an AccountConfig from one YAML mapping.

    Missing names fall back to ``Card <n>`` (1-based position).

    Raises:
        ValueError: A numeric field cannot be converted to a number.
    """
    name = str(raw.get("name", f"Card {index + 1}"))
    values: dict[str, float] = {}
    for key, default in (("balance", 0.0), ("apr", 0.0), ("payment", 25.0)):
        value = raw.get(key, default)
        try:
            values[key] = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Account {name!r}: {key}={value!r} is not a number") from None

    return AccountConfig(name=name, **values)


def config_from_dict(raw: dict[str, Any]) -> SimulationConfig:
    account_dicts = raw.get("accounts", []) or []
    accounts = [parse_account(ad, i) for i, ad in enumerate(account_dicts)]

    return SimulationConfig(
        accounts=accounts,
        max_months=int(raw.get("max_months", DEFAULT_MAX_MONTHS)),
        log_level=str(raw.get("log_level", "INFO")).upper(),
    )


def load_simulation_config(path: str | Path) -> SimulationConfig:
    """Load a SimulationConfig from a YAML file.

    Args:
        path: Path to a YAML config file (e.g., configs/portfolio/default_3card.yaml).

    Returns:
        Populated SimulationConfig instance.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    return config_from_dict(raw)


def load_scenario_protocol(path: str | Path) -> dict[str, Any]:
    """Load the benchmark protocol (scenario count, seeds) from a YAML file."""
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}
