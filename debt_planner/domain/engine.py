"""Engine entry points: validate the snapshot, then compute"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from debt_planner.domain.amortization import DEFAULT_MAX_MONTHS, PayoffResult, simulate_payoff
from debt_planner.domain.installments import generate_installment_schedule
from debt_planner.domain.insights import (
    DEFAULT_ALERT_WINDOW_MONTHS,
    DEFAULT_HIGH_APR_THRESHOLD,
    compare_extra_payment,
    high_rate_debts,
    payoff_estimates,
    upcoming_rate_changes,
)
from debt_planner.domain.models import (
    ZERO,
    Debt,
    DebtInsights,
    FieldError,
    FixedExpense,
    IncomeSource,
    Installment,
    MonthlyProjection,
    SavingsGoal,
    SavingsSettings,
    Strategy,
    VariableExpense,
)
from debt_planner.domain.projection import project_cash_flow
from debt_planner.domain.rates import effective_apr
from debt_planner.domain.strategy import RankedDebt, order_debts, parse_strategy
from debt_planner.domain.validation import (
    debt_errors,
    ensure_valid,
    validate_debts,
    validate_fixed_expenses,
    validate_income,
    validate_savings,
    validate_variable_expenses,
)
from debt_planner.utils.date_utils import CalendarMonth


def _request_errors(
    debts: Sequence[Debt], extra_payment: Decimal, focus_debt_id: Optional[str]
) -> List[FieldError]:
    errors = validate_debts(debts)
    if extra_payment is None or extra_payment.is_nan() or extra_payment < ZERO:
        errors.append(FieldError("extra_payment", "must be >= 0"))
    if focus_debt_id is not None and focus_debt_id not in {d.id for d in debts}:
        errors.append(FieldError("focus_debt_id", "does not match any debt"))
    return errors


def compute_debt_free_date(
    debts: Sequence[Debt],
    extra_payment: Decimal,
    strategy,
    focus_debt_id: Optional[str] = None,
    today: Optional[date] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> PayoffResult:
    """
    Main entry point: when will every interest-bearing debt be paid off?

    Returns a PayoffPlan, or a PayoffFailure for unpayable and negatively
    amortizing debt sets.

    Raises:
        InvalidSnapshotError: On any invalid field, before simulating
        UnknownStrategyError: When strategy is not avalanche/snowball
    """
    strategy = parse_strategy(strategy)
    ensure_valid(_request_errors(debts, extra_payment, focus_debt_id))
    return simulate_payoff(debts, extra_payment, strategy, focus_debt_id, today, max_months)


def analyze_debts(
    debts: Sequence[Debt],
    extra_payment: Decimal,
    strategy,
    focus_debt_id: Optional[str] = None,
    today: Optional[date] = None,
    max_months: int = DEFAULT_MAX_MONTHS,
    alert_window_months: int = DEFAULT_ALERT_WINDOW_MONTHS,
    high_apr_threshold: Decimal = DEFAULT_HIGH_APR_THRESHOLD,
) -> DebtInsights:
    """Advice for the current month: rate changes, consolidation candidates and what the extra saves"""
    strategy = parse_strategy(strategy)
    ensure_valid(_request_errors(debts, extra_payment, focus_debt_id))

    today = today or date.today()
    month = CalendarMonth.from_date(today)
    return DebtInsights(
        rate_changes=tuple(upcoming_rate_changes(debts, today, alert_window_months)),
        high_rate_debt_ids=tuple(high_rate_debts(debts, month, high_apr_threshold, today.day)),
        payoff_estimates=payoff_estimates(debts, month, extra_payment, focus_debt_id, today.day),
        extra_payment_impact=compare_extra_payment(
            debts, extra_payment, strategy, focus_debt_id, today, max_months
        ),
    )


def installment_schedule(debt: Debt) -> List[Installment]:
    """Monthly schedule of an installment debt, validated like any other debt"""
    errors = debt_errors(debt, "debt")
    if not debt.is_installment:
        errors.append(FieldError("debt.is_installment", "schedule requires an installment debt"))
    ensure_valid(errors)
    return generate_installment_schedule(debt)


def prioritize_debts(debts: Sequence[Debt], strategy, today: Optional[date] = None) -> List[str]:
    """Ids of owing debts in the order the strategy would pay them this month"""
    strategy = parse_strategy(strategy)
    ensure_valid(validate_debts(debts))

    today = today or date.today()
    month = CalendarMonth.from_date(today)
    ranked = [
        RankedDebt(debt_id=d.id, balance=d.balance, rate=effective_apr(d, month, today.day), position=i)
        for i, d in enumerate(debts)
    ]
    return [c.debt_id for c in order_debts(ranked, strategy)]


def project_twelve_months(
    income: Sequence[IncomeSource],
    debts: Sequence[Debt],
    fixed_expenses: Sequence[FixedExpense],
    variable_expenses: Sequence[VariableExpense],
    savings_goals: Sequence[SavingsGoal],
    savings_settings: Optional[SavingsSettings] = None,
    today: Optional[date] = None,
) -> Tuple[MonthlyProjection, ...]:
    """Twelve monthly cash-flow records starting at the current calendar month"""
    savings_settings = savings_settings or SavingsSettings()
    ensure_valid(
        validate_income(income)
        + validate_debts(debts)
        + validate_fixed_expenses(fixed_expenses)
        + validate_variable_expenses(variable_expenses)
        + validate_savings(savings_goals, savings_settings)
    )
    return project_cash_flow(
        income,
        debts,
        fixed_expenses,
        variable_expenses,
        savings_goals,
        savings_settings,
        today=today,
    )


__all__ = [
    "Strategy",
    "analyze_debts",
    "compute_debt_free_date",
    "installment_schedule",
    "prioritize_debts",
    "project_twelve_months",
]
