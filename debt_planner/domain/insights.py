"""Rule-based debt insights: rate changes, consolidation candidates, extra-payment savings"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Union

from debt_planner.domain.amortization import DEFAULT_MAX_MONTHS, months_to_payoff, simulate_payoff
from debt_planner.domain.models import (
    ZERO,
    Debt,
    ExtraPaymentImpact,
    PayoffFailure,
    RateChangeAlert,
    Strategy,
)
from debt_planner.domain.rates import effective_apr
from debt_planner.utils.date_utils import CalendarMonth, add_months

DEFAULT_ALERT_WINDOW_MONTHS = 3
DEFAULT_HIGH_APR_THRESHOLD = Decimal(15)


def upcoming_rate_changes(
    debts: Sequence[Debt],
    today: date,
    within_months: int = DEFAULT_ALERT_WINDOW_MONTHS,
) -> List[RateChangeAlert]:
    """Promotional rates ending after today and no later than `within_months` ahead, soonest first"""
    horizon = add_months(today, within_months)
    alerts = [
        RateChangeAlert(
            debt_id=d.id,
            name=d.name,
            promotional_apr=d.promotional_apr,
            regular_apr=d.regular_apr,
            ends_on=d.promotional_apr_end_date,
        )
        for d in debts
        if d.has_promotion and not d.is_paid and today < d.promotional_apr_end_date <= horizon
    ]
    return sorted(alerts, key=lambda a: a.ends_on)


def high_rate_debts(
    debts: Sequence[Debt],
    month: CalendarMonth,
    threshold: Decimal = DEFAULT_HIGH_APR_THRESHOLD,
    day: int = 1,
) -> List[str]:
    """Ids of owing debts whose current rate makes them consolidation candidates"""
    return [
        d.id
        for d in debts
        if not d.is_paid and not d.is_installment and effective_apr(d, month, day) > threshold
    ]


def payoff_estimates(
    debts: Sequence[Debt],
    month: CalendarMonth,
    extra_payment: Decimal = ZERO,
    focus_debt_id: Optional[str] = None,
    day: int = 1,
) -> Dict[str, Optional[int]]:
    """
    Standalone months-to-payoff for each owing debt at its current rate.

    The focus debt gets the extra payment on top of its minimum. None marks a
    debt whose payment never covers its interest.
    """
    estimates: Dict[str, Optional[int]] = {}
    for d in debts:
        if d.is_paid or d.is_installment:
            continue
        payment = d.minimum_payment + (extra_payment if d.id == focus_debt_id else ZERO)
        estimates[d.id] = months_to_payoff(d.balance, effective_apr(d, month, day), payment)
    return estimates


def compare_extra_payment(
    debts: Sequence[Debt],
    extra_payment: Decimal,
    strategy: Strategy,
    focus_debt_id: Optional[str] = None,
    today: Optional[date] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> Union[ExtraPaymentImpact, PayoffFailure]:
    """Simulate minimums-only against minimums plus the extra; a failure of either run is returned as is"""
    today = today or date.today()
    baseline = simulate_payoff(debts, ZERO, strategy, focus_debt_id, today, max_months)
    if isinstance(baseline, PayoffFailure):
        return baseline

    accelerated = simulate_payoff(debts, extra_payment, strategy, focus_debt_id, today, max_months)
    if isinstance(accelerated, PayoffFailure):
        return accelerated

    return ExtraPaymentImpact(baseline=baseline, accelerated=accelerated)
