"""Effective interest rate resolution for promotional and installment debts"""

from decimal import Decimal

from debt_planner.domain.models import ZERO, Debt
from debt_planner.utils.date_utils import CalendarMonth

MONTHS_PER_YEAR = Decimal(12)
HUNDRED = Decimal(100)


def promotion_ended(debt: Debt, month: CalendarMonth, day: int = 1) -> bool:
    """Whether the simulated date (`day` of `month`, clamped) has reached the promotion end date"""
    return debt.has_promotion and month.day(day) >= debt.promotional_apr_end_date


def effective_apr(debt: Debt, month: CalendarMonth, day: int = 1) -> Decimal:
    """
    Annual rate (%) a debt accrues in the given calendar month.

    The simulated date is `day` of `month` (the run's start day carried
    forward, clamped to short months).

    - Installment debts are not interest-bearing: always 0.
    - Promotional debts use `promotional_apr` while the simulated date is
      before `promotional_apr_end_date`, and `regular_apr` once it reaches it
      (the boundary date is already regular).
    - Everything else uses `apr`.
    """
    if debt.is_installment:
        return ZERO

    if debt.has_promotion:
        if promotion_ended(debt, month, day):
            return debt.regular_apr
        return debt.promotional_apr

    return debt.apr


def monthly_rate(apr: Decimal) -> Decimal:
    """Convert an annual percentage rate into a monthly fraction"""
    return apr / HUNDRED / MONTHS_PER_YEAR


def monthly_interest(balance: Decimal, apr: Decimal) -> Decimal:
    return balance * monthly_rate(apr)


class RateTracker:
    """
    Resolves rates across consecutive simulated months for one debt.

    The promotional-to-regular transition only happens once per run: after a
    debt resolves to its regular rate it keeps that rate for every later month.
    """

    def __init__(self, debt: Debt, day: int = 1):
        self.debt = debt
        self.day = day
        self.transitioned = False

    def rate_for(self, month: CalendarMonth) -> Decimal:
        if self.transitioned:
            return self.debt.regular_apr

        rate = effective_apr(self.debt, month, self.day)
        if promotion_ended(self.debt, month, self.day):
            self.transitioned = True
        return rate
