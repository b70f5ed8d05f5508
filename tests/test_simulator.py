"""Unit tests for PayoffSimulator — monthly cycle, redistribution and termination."""

import numpy as np
import pytest

from src.engine.errors import (
    EmptyPortfolio,
    InvalidAccountInput,
    NonAmortizingPayment,
    SimulationLimitExceeded,
)
from src.engine.scenario_sampler import ScenarioSampler
from src.engine.simulator import PayoffSimulator, simulate_payoff
from src.engine.surplus import SurplusStrategy
from src.utils.config import AccountConfig, SimulationConfig


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def single_card() -> list[AccountConfig]:
    """$100 at 12% APR paying $34/month."""
    return [AccountConfig("Card 1", balance=100, apr=12.0, payment=34)]


@pytest.fixture
def two_zero_rate() -> list[AccountConfig]:
    return [
        AccountConfig("A", balance=50, apr=0.0, payment=50),
        AccountConfig("B", balance=200, apr=0.0, payment=20),
    ]


@pytest.fixture
def overpaying_first() -> list[AccountConfig]:
    """A overshoots by $20 in month 1; B and C stay open."""
    return [
        AccountConfig("A", balance=30, apr=0.0, payment=50),
        AccountConfig("B", balance=100, apr=0.0, payment=10),
        AccountConfig("C", balance=100, apr=0.0, payment=10),
    ]


# ── Single Account ───────────────────────────────────────────────────────

class TestSingleAccount:

    def test_first_month(self, single_card):
        sim = PayoffSimulator(single_card)
        report = sim.step()
        assert report.month == 1
        assert report.interest == pytest.approx(1.0)
        assert sim.ledgers[0].balance == pytest.approx(67.0)

    def test_full_run(self, single_card):
        result = simulate_payoff(single_card)
        expected_interest = 1.0 + 0.67 + 0.3367 + 0.000067
        assert result.total_interest == pytest.approx(expected_interest)
        # Four payments, settlement flagged the following month
        assert len(result.schedules["Card 1"]) == 4
        assert result.months == 5
        assert result.payoffs[0].months_to_payoff == 5
        assert result.ledgers[0].is_settled is True

    def test_reported_balance_clamped(self, single_card):
        result = simulate_payoff(single_card)
        last = result.schedules["Card 1"][-1]
        assert last.balance == 0.0
        assert result.ledgers[0].balance < 0  # Ledger value itself is not clamped

    def test_payoff_event(self, single_card):
        event = simulate_payoff(single_card).payoffs[0]
        assert event.identifier == "Card 1"
        assert event.fixed_payment == pytest.approx(34.0)
        assert event.total_interest == pytest.approx(2.006767)

    def test_surplus_discarded_when_nobody_left(self, single_card):
        """With no open accounts left, the final overshoot goes nowhere."""
        result = simulate_payoff(single_card)
        assert result.ledgers[0].balance == pytest.approx(-33.993233)
        # Nothing recorded in the settlement month
        assert result.schedules["Card 1"][-1].month == 4
        assert result.total_paid == pytest.approx(4 * 34.0)

    def test_zero_balance_settles_immediately(self):
        result = simulate_payoff([AccountConfig("Empty", balance=0, apr=20.0, payment=25)])
        assert result.months == 1
        assert result.total_interest == 0.0
        assert result.schedules["Empty"] == []


# ── Two Accounts ─────────────────────────────────────────────────────────

class TestTwoAccounts:

    def test_exact_payoff_zero_share(self, two_zero_rate):
        sim = PayoffSimulator(two_zero_rate)
        sim.step()
        assert sim.ledgers[0].balance == 0.0
        assert sim.ledgers[1].balance == pytest.approx(180.0)

        report = sim.step()
        assert [p.identifier for p in report.payoffs] == ["A"]
        # Zero surplus: B gets a $0.00 credit row, then its scheduled payment
        entries = [e for name, e in report.entries if name == "B"]
        assert [e.payment for e in entries] == [0.0, 20.0]
        assert [e.balance for e in entries] == [pytest.approx(180.0), pytest.approx(160.0)]
        assert all(e.interest == 0.0 for e in entries)
        assert sim.ledgers[1].balance == pytest.approx(160.0)

    def test_full_run(self, two_zero_rate):
        result = simulate_payoff(two_zero_rate)
        assert result.total_interest == 0.0
        assert len(result.schedules["B"]) == 11
        assert [e.payment for e in result.schedules["B"]].count(20) == 10
        assert result.months == 11
        assert [p.months_to_payoff for p in result.payoffs] == [2, 11]

    def test_remaining_balance(self, two_zero_rate):
        report = PayoffSimulator(two_zero_rate).step()
        assert report.remaining_balance == pytest.approx(180.0)

    def test_total_paid_zero_rate(self, two_zero_rate):
        """With no interest, everything paid equals what was owed."""
        assert simulate_payoff(two_zero_rate).total_paid == pytest.approx(250.0)


# ── Redistribution ───────────────────────────────────────────────────────

class TestRedistribution:

    def test_equal_split(self, overpaying_first):
        sim = PayoffSimulator(overpaying_first)
        sim.step()
        assert sim.ledgers[0].balance == pytest.approx(-20.0)

        report = sim.step()
        credits = [(n, e) for n, e in report.entries if e.interest == 0.0 and e.payment == 10.0]
        assert len(credits) == 4  # 2 credits + 2 scheduled payments at $10
        assert sim.ledgers[1].balance == pytest.approx(70.0)
        assert sim.ledgers[2].balance == pytest.approx(70.0)

    def test_credit_recorded_before_scheduled_payment(self, overpaying_first):
        result = simulate_payoff(overpaying_first)
        month_two = [e for e in result.schedules["B"] if e.month == 2]
        assert [e.balance for e in month_two] == [pytest.approx(80.0), pytest.approx(70.0)]

    def test_credit_adds_no_interest(self, overpaying_first):
        result = simulate_payoff(overpaying_first)
        assert result.total_interest == 0.0

    def test_credit_split_with_earlier_accounts(self):
        """Accounts earlier in order that already paid this month still share."""
        accounts = [
            AccountConfig("B", balance=100, apr=0.0, payment=10),
            AccountConfig("C", balance=100, apr=0.0, payment=10),
            AccountConfig("A", balance=30, apr=0.0, payment=50),
        ]
        sim = PayoffSimulator(accounts)
        sim.step()
        sim.step()
        assert sim.ledgers[0].balance == pytest.approx(70.0)
        assert sim.ledgers[1].balance == pytest.approx(70.0)

    def test_unflagged_zero_balance_receives_share(self):
        """Recipients are counted at each settlement, in portfolio order."""
        accounts = [
            AccountConfig("Y", balance=10, apr=0.0, payment=20),
            AccountConfig("X", balance=10, apr=0.0, payment=10),
            AccountConfig("Z", balance=100, apr=0.0, payment=10),
        ]
        sim = PayoffSimulator(accounts)
        sim.step()
        report = sim.step()

        # Y's $10 is split between X and Z; X then settles and passes $5 to Z
        assert [p.identifier for p in report.payoffs] == ["Y", "X"]
        assert sim.ledgers[1].balance == pytest.approx(-5.0)
        assert sim.ledgers[2].balance == pytest.approx(70.0)
        z_credits = [e.payment for n, e in report.entries if n == "Z"]
        assert z_credits == [pytest.approx(5.0), pytest.approx(5.0), pytest.approx(10.0)]

    def test_custom_strategy(self, overpaying_first):
        class FirstTakesAll(SurplusStrategy):
            @property
            def name(self) -> str:
                return "FirstTakesAll"

            def allocate(self, surplus, recipients):
                return [surplus] + [0.0] * (len(recipients) - 1)

        sim = PayoffSimulator(overpaying_first, strategy=FirstTakesAll())
        sim.step()
        sim.step()
        assert sim.ledgers[1].balance == pytest.approx(60.0)
        assert sim.ledgers[2].balance == pytest.approx(80.0)

    def test_strategy_share_count_mismatch(self, overpaying_first):
        class DropsLast(SurplusStrategy):
            @property
            def name(self) -> str:
                return "DropsLast"

            def allocate(self, surplus, recipients):
                return [surplus / len(recipients)] * (len(recipients) - 1)

        sim = PayoffSimulator(overpaying_first, strategy=DropsLast())
        sim.step()
        with pytest.raises(ValueError, match="DropsLast returned 1 shares for 2 recipients"):
            sim.step()


# ── Errors ───────────────────────────────────────────────────────────────

class TestErrors:

    def test_empty_portfolio(self):
        with pytest.raises(EmptyPortfolio):
            PayoffSimulator([])

    @pytest.mark.parametrize("field,value", [
        ("balance", -1.0),
        ("apr", -0.5),
        ("payment", 0.0),
        ("payment", -10.0),
    ])
    def test_invalid_input(self, field, value):
        cfg = AccountConfig("Bad", balance=100, apr=10.0, payment=25)
        setattr(cfg, field, value)
        with pytest.raises(InvalidAccountInput) as exc_info:
            PayoffSimulator([cfg])
        assert exc_info.value.identifier == "Bad"
        assert exc_info.value.field == field

    def test_duplicate_identifier(self):
        with pytest.raises(InvalidAccountInput):
            PayoffSimulator([
                AccountConfig("Same", balance=100, apr=0.0, payment=10),
                AccountConfig("Same", balance=50, apr=0.0, payment=10),
            ])

    def test_non_amortizing_rejected_up_front(self):
        config = ScenarioSampler.preset("non_amortizing")
        with pytest.raises(NonAmortizingPayment) as exc_info:
            PayoffSimulator.from_config(config)
        err = exc_info.value
        assert err.identifier == "Card 1"
        assert err.month == 1
        assert err.interest == pytest.approx(20.0)
        assert err.payment == pytest.approx(15.0)

    def test_payment_equal_to_interest_rejected(self):
        with pytest.raises(NonAmortizingPayment):
            PayoffSimulator([AccountConfig("Even", balance=1000, apr=24.0, payment=20)])

    def test_in_cycle_guard(self, single_card):
        sim = PayoffSimulator(single_card)
        sim.step()
        sim.ledgers[0].balance = 10000.0
        with pytest.raises(NonAmortizingPayment) as exc_info:
            sim.step()
        assert exc_info.value.month == 2

    def test_month_cap(self, two_zero_rate):
        with pytest.raises(SimulationLimitExceeded) as exc_info:
            simulate_payoff(two_zero_rate, max_months=3)
        assert exc_info.value.month == 3
        assert exc_info.value.unsettled == ["B"]

    def test_input_not_mutated(self, single_card):
        simulate_payoff(single_card)
        assert single_card[0].balance == 100


# ── Properties over sampled portfolios ───────────────────────────────────

class TestProperties:

    @pytest.fixture
    def scenarios(self) -> list[SimulationConfig]:
        rng = np.random.default_rng(7)
        sampler = ScenarioSampler()
        return [sampler.sample(rng) for _ in range(25)]

    def test_terminates_within_cap(self, scenarios):
        for config in scenarios:
            result = PayoffSimulator.from_config(config).run()
            assert result.months <= config.max_months
            assert all(a.is_settled for a in result.ledgers)

    def test_total_interest_matches_entries(self, scenarios):
        for config in scenarios:
            result = PayoffSimulator.from_config(config).run()
            recorded = sum(e.interest for rows in result.schedules.values() for e in rows)
            assert result.total_interest == pytest.approx(recorded)
            per_account = sum(a.cumulative_interest for a in result.ledgers)
            assert result.total_interest == pytest.approx(per_account)

    def test_monotonic_state(self, scenarios):
        for config in scenarios:
            sim = PayoffSimulator.from_config(config)
            prev_interest = [0.0] * len(sim.ledgers)
            prev_settled = [False] * len(sim.ledgers)
            while not sim.done:
                sim.step()
                for i, ledger in enumerate(sim.ledgers):
                    assert ledger.cumulative_interest >= prev_interest[i]
                    assert ledger.is_settled or not prev_settled[i]
                    prev_interest[i] = ledger.cumulative_interest
                    prev_settled[i] = ledger.is_settled

    def test_reported_values_non_negative(self, scenarios):
        for config in scenarios:
            result = PayoffSimulator.from_config(config).run()
            for rows in result.schedules.values():
                for e in rows:
                    assert e.month >= 1
                    assert e.interest >= 0
                    assert e.balance >= 0

    def test_one_payoff_per_account(self, scenarios):
        for config in scenarios:
            result = PayoffSimulator.from_config(config).run()
            ids = [p.identifier for p in result.payoffs]
            assert sorted(ids) == sorted(a.name for a in config.accounts)
