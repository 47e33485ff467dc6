"""Amortization simulator - core month-by-month debt payoff logic"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Union

from debt_planner.domain.models import (
    ZERO,
    Debt,
    PayoffFailure,
    PayoffMonth,
    PayoffPlan,
    Strategy,
    to_cents,
)
from debt_planner.domain.rates import RateTracker, effective_apr, monthly_interest, monthly_rate
from debt_planner.domain.strategy import RankedDebt, allocate_extra, order_debts
from debt_planner.utils.date_utils import CalendarMonth, add_months

logger = logging.getLogger(__name__)

DEFAULT_MAX_MONTHS = 1200  # 100 years

PayoffResult = Union[PayoffPlan, PayoffFailure]


@dataclass
class _WorkingDebt:
    """Mutable per-run copy of a debt; the input snapshot is never touched"""

    debt: Debt
    position: int
    balance: Decimal
    rates: RateTracker


def months_to_payoff(balance: Decimal, apr: Decimal, payment: Decimal) -> Optional[int]:
    """
    Months for a single debt to reach zero at a fixed payment and rate.

    Zero rate uses ceil(balance / payment) directly. Otherwise
    n = log(P / (P - B*r)) / log(1 + r). Returns None when the payment never
    reduces principal.
    """
    if balance <= ZERO:
        return 0

    rate = monthly_rate(apr)
    if rate == ZERO:
        if payment <= ZERO:
            return None
        return math.ceil(balance / payment)

    if payment <= balance * rate:
        return None

    n = (payment / (payment - balance * rate)).ln() / (1 + rate).ln()
    return math.ceil(n)


def simulation_candidates(debts: Sequence[Debt]) -> List[Debt]:
    """Interest-bearing debts that still owe money; installment debts are scheduled outflows"""
    return [d for d in debts if not d.is_paid and not d.is_installment]


def find_negative_amortization(debts: Sequence[Debt], month: CalendarMonth, day: int = 1) -> List[str]:
    """
    Debts whose minimum payment can never outrun their interest.

    Checked at the start month against the minimum alone: a debt that only
    shrinks while the extra payment reaches it is still reported.
    """
    stuck = []
    for debt in debts:
        interest = monthly_interest(debt.balance, effective_apr(debt, month, day))
        if debt.minimum_payment <= interest:
            stuck.append(debt.id)
    return stuck


def simulate_payoff(
    debts: Sequence[Debt],
    extra_payment: Decimal,
    strategy: Strategy,
    focus_debt_id: Optional[str] = None,
    today: Optional[date] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> PayoffResult:
    """
    Simulate repayment of every active debt until all balances reach zero.

    Each month:
    1. Accrue interest at the month's effective rate and pay
       min(minimum_payment, balance + interest) on every debt
    2. Distribute the extra payment by strategy across debts still owing
    3. Advance one calendar month

    Returns a PayoffFailure instead of a month count when a debt can never
    amortize or the month cap is reached.
    """
    today = today or date.today()
    start = CalendarMonth.from_date(today)
    candidates = simulation_candidates(debts)

    stuck = find_negative_amortization(candidates, start, today.day)
    if stuck:
        return PayoffFailure(reason=PayoffFailure.NEGATIVE_AMORTIZATION, debt_ids=tuple(stuck))

    working = [
        _WorkingDebt(debt=d, position=i, balance=d.balance, rates=RateTracker(d, today.day))
        for i, d in enumerate(candidates)
    ]
    original_total = sum((w.balance for w in working), ZERO)
    total_paid = ZERO
    schedule: List[PayoffMonth] = []
    month_index = 0

    while any(w.balance > ZERO for w in working):
        if month_index >= max_months:
            logger.warning(
                "Payoff simulation hit month cap",
                extra={"max_months": max_months, "debt_count": len(working)},
            )
            return PayoffFailure(
                reason=PayoffFailure.UNPAYABLE,
                debt_ids=tuple(w.debt.id for w in working if w.balance > ZERO),
            )

        month = start.plus(month_index)
        month_interest = ZERO
        rates: Dict[str, Decimal] = {}

        # 1. Interest and minimum payments
        for w in working:
            if w.balance <= ZERO:
                continue
            rate = w.rates.rate_for(month)
            rates[w.debt.id] = rate
            interest = monthly_interest(w.balance, rate)
            owed = w.balance + interest
            payment = min(w.debt.minimum_payment, owed)
            w.balance = owed - payment
            total_paid += payment
            month_interest += interest

        # 2. Extra payment by strategy
        ranked = [
            RankedDebt(debt_id=w.debt.id, balance=w.balance, rate=rates[w.debt.id], position=w.position)
            for w in working
            if w.balance > ZERO
        ]
        allocations = allocate_extra(order_debts(ranked, strategy, focus_debt_id), extra_payment)
        for w in working:
            paid = allocations.get(w.debt.id)
            if paid:
                w.balance -= paid
                total_paid += paid

        schedule.append(
            PayoffMonth(
                month=month,
                interest=to_cents(month_interest),
                remaining_balance=to_cents(sum((max(w.balance, ZERO) for w in working), ZERO)),
                extra_allocations={k: to_cents(v) for k, v in allocations.items()},
            )
        )

        # 3. Advance
        month_index += 1

    return PayoffPlan(
        months=month_index,
        debt_free_date=add_months(today, month_index),
        total_interest_paid=to_cents(max(ZERO, total_paid - original_total)),
        schedule=tuple(schedule),
    )
