"""Fixed-term installment debts: activity window, monthly contribution and schedule"""

from decimal import Decimal, ROUND_DOWN
from typing import List

from debt_planner.domain.models import CENTS, ZERO, Debt, Installment, to_cents
from debt_planner.utils.date_utils import CalendarMonth


def installment_amount(debt: Debt) -> Decimal:
    """Per-installment amount, derived from the plan total when not stored"""
    if debt.installment_amount is not None:
        return debt.installment_amount
    return to_cents(debt.total_amount / debt.number_of_installments)


def is_installment_active(debt: Debt, month: CalendarMonth) -> bool:
    """
    Whether an installment debt is payable in the given month.

    The window is start-inclusive at month granularity (the month holding
    `start_date` pays) and end-exclusive against the first day of the month
    (a plan ending 2026-01-01 pays through December 2025).
    """
    if not debt.is_installment:
        return False
    return CalendarMonth.from_date(debt.start_date) <= month and month.first_day < debt.end_date


def installment_due(debt: Debt, month: CalendarMonth, remaining_balance: Decimal) -> Decimal:
    """
    Cash an installment debt contributes in a month.

    Returns 0 outside the window. Inside it, never more than what is still owed,
    so the final payment truncates instead of overshooting.
    """
    if remaining_balance <= ZERO or not is_installment_active(debt, month):
        return ZERO
    return min(installment_amount(debt), remaining_balance)


def generate_installment_schedule(debt: Debt) -> List[Installment]:
    """
    Generate the monthly schedule of an installment debt.

    Requirements:
    - `number_of_installments` payments, one per month from `start_date`
    - Due on the debt's `payment_day`, clamped to short months
    - Equal amounts; the last installment absorbs the rounding remainder so the
      schedule sums exactly to `total_amount`

    Example:
        1000.00 over 3 → [333.33, 333.33, 333.34]
    """
    count = debt.number_of_installments or 0
    if not debt.is_installment or count <= 0 or debt.total_amount <= ZERO:
        return []

    base_amount = (debt.total_amount / count).quantize(CENTS, rounding=ROUND_DOWN)
    remainder = debt.total_amount - base_amount * count

    first_month = CalendarMonth.from_date(debt.start_date)
    installments = []
    for i in range(count):
        due_date = first_month.plus(i).day(debt.payment_day)

        # Last installment absorbs remainder to ensure exact total
        amount = base_amount + (remainder if i == count - 1 else ZERO)

        installments.append(Installment(number=i + 1, due_date=due_date, amount=amount))

    return installments
