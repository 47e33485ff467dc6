"""Unit tests for the payoff simulator"""

import math
from datetime import date
from decimal import Decimal
from debt_planner.domain.amortization import months_to_payoff, simulate_payoff
from debt_planner.domain.models import PayoffFailure, PayoffPlan, Strategy

from conftest import make_debt, make_installment

TODAY = date(2025, 1, 15)


def test_zero_rate_months_is_ceil_of_balance_over_payment():
    for balance, minimum in [("1000", "150"), ("1000", "100"), ("999.99", "33.33"), ("50", "75")]:
        debt = make_debt(balance=balance, apr="0", minimum_payment=minimum)
        plan = simulate_payoff([debt], Decimal("0"), Strategy.AVALANCHE, today=TODAY)

        assert plan.months == math.ceil(Decimal(balance) / Decimal(minimum))
        assert plan.total_interest_paid == Decimal("0")


def test_single_card_with_extra_payment():
    """5000 at 19.9% paying 150 + 200 extra"""
    debt = make_debt(balance="5000", apr="19.9", minimum_payment="150")
    plan = simulate_payoff([debt], Decimal("200"), Strategy.AVALANCHE, today=TODAY)

    assert isinstance(plan, PayoffPlan)
    assert plan.months > 0
    assert plan.total_interest_paid > 0
    assert plan.months == months_to_payoff(Decimal("5000"), Decimal("19.9"), Decimal("350"))


def test_avalanche_sends_whole_extra_to_highest_rate_until_paid(sample_debts):
    plan = simulate_payoff(sample_debts, Decimal("100"), Strategy.AVALANCHE, today=TODAY)
    schedule = plan.schedule

    switch = next(i for i, m in enumerate(schedule) if m.extra_allocations.get("A", 0) < Decimal("100"))
    assert switch > 0
    for month in schedule[:switch]:
        assert month.extra_allocations == {"A": Decimal("100.00")}

    # The month A clears, whatever it does not need goes to B
    split = schedule[switch].extra_allocations
    assert abs(sum(split.values()) - Decimal("100")) <= Decimal("0.01")

    for month in schedule[switch + 1:-1]:
        assert month.extra_allocations == {"B": Decimal("100.00")}
    assert schedule[-1].remaining_balance == Decimal("0")


def test_snowball_sends_extra_to_smallest_balance():
    debts = [
        make_debt("big", balance="4000", apr="30", minimum_payment="150"),
        make_debt("small", balance="500", apr="5", minimum_payment="25"),
    ]
    plan = simulate_payoff(debts, Decimal("100"), Strategy.SNOWBALL, today=TODAY)

    assert plan.schedule[0].extra_allocations == {"small": Decimal("100.00")}


def test_focus_debt_receives_extra_first(sample_debts):
    plan = simulate_payoff(sample_debts, Decimal("100"), Strategy.AVALANCHE, focus_debt_id="B", today=TODAY)
    assert plan.schedule[0].extra_allocations == {"B": Decimal("100.00")}


def test_debt_free_date_is_today_plus_months():
    debt = make_debt(balance="1000", apr="0", minimum_payment="150")
    plan = simulate_payoff([debt], Decimal("0"), Strategy.AVALANCHE, today=date(2025, 1, 31))

    assert plan.months == 7
    assert plan.debt_free_date == date(2025, 8, 31)


def test_total_interest_never_negative():
    debt_sets = [
        [make_debt(balance="100", apr="0", minimum_payment="500")],
        [make_debt("x", balance="2500", apr="29.9", minimum_payment="90"), make_debt("y", balance="40", apr="3")],
        [make_debt(balance="0", apr="20")],
    ]
    for debts in debt_sets:
        for strategy in Strategy:
            plan = simulate_payoff(debts, Decimal("25"), strategy, today=TODAY)
            assert plan.total_interest_paid >= 0


def test_negative_amortization_reported_before_simulating():
    debt = make_debt(balance="10000", apr="24", minimum_payment="150")  # 200 interest a month
    result = simulate_payoff([debt], Decimal("0"), Strategy.AVALANCHE, today=TODAY)

    assert isinstance(result, PayoffFailure)
    assert result.reason == PayoffFailure.NEGATIVE_AMORTIZATION
    assert result.debt_ids == ("card",)


def test_minimum_equal_to_interest_is_negative_amortization():
    debt = make_debt(balance="12000", apr="12", minimum_payment="120")
    result = simulate_payoff([debt], Decimal("0"), Strategy.AVALANCHE, today=TODAY)
    assert result.reason == PayoffFailure.NEGATIVE_AMORTIZATION


def test_extra_payment_does_not_mask_low_minimum():
    """The minimum alone decides; 150 + 100 extra still leaves a 200 interest debt flagged"""
    debt = make_debt(balance="10000", apr="24", minimum_payment="150")
    result = simulate_payoff([debt], Decimal("100"), Strategy.AVALANCHE, today=TODAY)

    assert isinstance(result, PayoffFailure)
    assert result.reason == PayoffFailure.NEGATIVE_AMORTIZATION
    assert result.debt_ids == ("card",)


def test_zero_payment_zero_rate_is_negative_amortization():
    debt = make_debt(balance="100", apr="0", minimum_payment="0")
    result = simulate_payoff([debt], Decimal("0"), Strategy.SNOWBALL, today=TODAY)
    assert result.reason == PayoffFailure.NEGATIVE_AMORTIZATION


def test_month_cap_reports_unpayable():
    debt = make_debt(balance="10000", apr="0", minimum_payment="1")
    result = simulate_payoff([debt], Decimal("0"), Strategy.AVALANCHE, today=TODAY, max_months=12)

    assert isinstance(result, PayoffFailure)
    assert result.reason == PayoffFailure.UNPAYABLE
    assert result.debt_ids == ("card",)


def test_paid_and_installment_debts_are_not_simulated():
    debts = [make_debt("paid", balance="0", apr="20"), make_installment()]
    plan = simulate_payoff(debts, Decimal("100"), Strategy.AVALANCHE, today=TODAY)

    assert plan.months == 0
    assert plan.debt_free_date == TODAY
    assert plan.total_interest_paid == Decimal("0")
    assert plan.schedule == ()


def test_repeated_runs_share_no_state(sample_debts):
    first = simulate_payoff(sample_debts, Decimal("100"), Strategy.AVALANCHE, today=TODAY)
    second = simulate_payoff(sample_debts, Decimal("100"), Strategy.AVALANCHE, today=TODAY)

    assert first == second
    assert sample_debts[0].balance == Decimal("1000")


def test_months_to_payoff_closed_form():
    assert months_to_payoff(Decimal("1000"), Decimal("0"), Decimal("150")) == 7
    assert months_to_payoff(Decimal("0"), Decimal("20"), Decimal("10")) == 0
    assert months_to_payoff(Decimal("10000"), Decimal("24"), Decimal("200")) is None
    assert months_to_payoff(Decimal("100"), Decimal("0"), Decimal("0")) is None
