"""Twelve-month forward cash-flow projection"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from debt_planner.domain.installments import installment_due
from debt_planner.domain.models import (
    ZERO,
    Debt,
    FixedExpense,
    FrequencyType,
    IncomeSource,
    MonthlyProjection,
    SavingsGoal,
    SavingsSettings,
    VariableExpense,
    active_debts,
)
from debt_planner.utils.date_utils import CalendarMonth

PROJECTION_MONTHS = 12


def fixed_outflow(expenses: Sequence[FixedExpense], month: CalendarMonth) -> Decimal:
    """Monthly expenses always; annual expenses only in their payment month"""
    total = ZERO
    for expense in expenses:
        if expense.frequency_type is FrequencyType.ANNUAL:
            if expense.payment_month == month.month:
                total += expense.amount
        else:
            total += expense.amount
    return total


def savings_outflow(goals: Sequence[SavingsGoal], settings: SavingsSettings, month: CalendarMonth) -> Decimal:
    """Active goals until their target date passes, plus the flat contributions"""
    total = settings.monthly_emergency_contribution + settings.monthly_general_savings
    for goal in goals:
        if not goal.is_active:
            continue
        if goal.target_date is not None and goal.target_date < month.first_day:
            continue
        total += goal.monthly_contribution
    return total


def project_cash_flow(
    income: Sequence[IncomeSource],
    debts: Sequence[Debt],
    fixed_expenses: Sequence[FixedExpense],
    variable_expenses: Sequence[VariableExpense],
    savings_goals: Sequence[SavingsGoal],
    savings_settings: SavingsSettings,
    today: Optional[date] = None,
    months: int = PROJECTION_MONTHS,
) -> Tuple[MonthlyProjection, ...]:
    """
    Project income and outflows for consecutive months from the current one.

    Regular debts contribute their full minimum payment every month, without
    checking whether they would already be paid off by then. Installment debts
    only pay inside their window and never beyond what they still owe.
    """
    start = CalendarMonth.from_date(today or date.today())
    owing = active_debts(list(debts))

    monthly_income = sum((s.amount for s in income), ZERO)
    monthly_variable = sum((e.amount for e in variable_expenses), ZERO)
    regular_minimums = sum((d.minimum_payment for d in owing if not d.is_installment), ZERO)

    # Running balances are local to this call
    installment_remaining: Dict[str, Decimal] = {d.id: d.balance for d in owing if d.is_installment}
    installment_debts: List[Debt] = [d for d in owing if d.is_installment]

    records = []
    for m in range(months):
        month = start.plus(m)

        debt_out = regular_minimums
        for debt in installment_debts:
            due = installment_due(debt, month, installment_remaining[debt.id])
            installment_remaining[debt.id] -= due
            debt_out += due

        fixed_out = fixed_outflow(fixed_expenses, month)
        savings_out = savings_outflow(savings_goals, savings_settings, month)

        records.append(
            MonthlyProjection(
                month=month,
                income=monthly_income,
                debt_outflow=debt_out,
                fixed_outflow=fixed_out,
                variable_outflow=monthly_variable,
                savings_outflow=savings_out,
                balance=monthly_income - (debt_out + fixed_out + monthly_variable + savings_out),
            )
        )

    return tuple(records)
