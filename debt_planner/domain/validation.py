"""Up-front validation of input snapshots, reported per offending field"""

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from debt_planner.domain.exceptions import InvalidSnapshotError
from debt_planner.domain.models import (
    ZERO,
    Debt,
    FieldError,
    FixedExpense,
    FrequencyType,
    IncomeSource,
    SavingsGoal,
    SavingsSettings,
    VariableExpense,
)

MAX_APR = Decimal(100)


def _check_non_negative(errors: List[FieldError], path: str, value: Optional[Decimal]) -> None:
    if value is None:
        errors.append(FieldError(path, "is required"))
    elif value.is_nan():
        errors.append(FieldError(path, "must be a number"))
    elif value < ZERO:
        errors.append(FieldError(path, "must be >= 0"))


def _check_rate(errors: List[FieldError], path: str, value: Optional[Decimal]) -> None:
    if value is None:
        errors.append(FieldError(path, "is required"))
    elif value.is_nan():
        errors.append(FieldError(path, "must be a number"))
    elif not ZERO <= value <= MAX_APR:
        errors.append(FieldError(path, "must be between 0 and 100"))


def _check_day(errors: List[FieldError], path: str, value: int) -> None:
    if not 1 <= value <= 31:
        errors.append(FieldError(path, "must be between 1 and 31"))


def debt_errors(debt: Debt, path: str) -> List[FieldError]:
    errors: List[FieldError] = []

    _check_non_negative(errors, f"{path}.balance", debt.balance)
    _check_non_negative(errors, f"{path}.minimum_payment", debt.minimum_payment)
    _check_day(errors, f"{path}.payment_day", debt.payment_day)

    # Installment debts carry no interest; their apr is ignored
    if not debt.is_installment:
        _check_rate(errors, f"{path}.apr", debt.apr)

    if debt.has_promotion:
        count = len(errors)
        _check_rate(errors, f"{path}.promotional_apr", debt.promotional_apr)
        _check_rate(errors, f"{path}.regular_apr", debt.regular_apr)
        if debt.promotional_apr_end_date is None:
            errors.append(FieldError(f"{path}.promotional_apr_end_date", "is required with promotional_apr"))

        # apr mirrors the promotional rate, or the regular one once transitioned
        rates_valid = len(errors) == count and not debt.is_installment and not debt.apr.is_nan()
        if rates_valid and debt.apr not in (debt.promotional_apr, debt.regular_apr):
            errors.append(FieldError(f"{path}.apr", "must equal promotional_apr or regular_apr"))

    if debt.is_installment:
        if debt.total_amount is None:
            errors.append(FieldError(f"{path}.total_amount", "is required for installment debts"))
        else:
            _check_non_negative(errors, f"{path}.total_amount", debt.total_amount)

        if debt.number_of_installments is None:
            errors.append(FieldError(f"{path}.number_of_installments", "is required for installment debts"))
        elif debt.number_of_installments <= 0:
            errors.append(FieldError(f"{path}.number_of_installments", "must be > 0"))

        if debt.installment_amount is not None:
            _check_non_negative(errors, f"{path}.installment_amount", debt.installment_amount)

        if debt.start_date is None:
            errors.append(FieldError(f"{path}.start_date", "is required for installment debts"))
        if debt.end_date is None:
            errors.append(FieldError(f"{path}.end_date", "is required for installment debts"))
        if debt.start_date is not None and debt.end_date is not None and debt.end_date <= debt.start_date:
            errors.append(FieldError(f"{path}.end_date", "must be after start_date"))

    return errors


def validate_debts(debts: Sequence[Debt], path: str = "debts") -> List[FieldError]:
    errors: List[FieldError] = []
    seen = set()
    for i, debt in enumerate(debts):
        errors.extend(debt_errors(debt, f"{path}[{i}]"))
        if debt.id in seen:
            errors.append(FieldError(f"{path}[{i}].id", "duplicate debt id"))
        seen.add(debt.id)
    return errors


def validate_income(income: Iterable[IncomeSource], path: str = "income_sources") -> List[FieldError]:
    errors: List[FieldError] = []
    for i, source in enumerate(income):
        _check_non_negative(errors, f"{path}[{i}].amount", source.amount)
        _check_day(errors, f"{path}[{i}].payment_day", source.payment_day)
    return errors


def validate_fixed_expenses(expenses: Iterable[FixedExpense], path: str = "fixed_expenses") -> List[FieldError]:
    errors: List[FieldError] = []
    for i, expense in enumerate(expenses):
        _check_non_negative(errors, f"{path}[{i}].amount", expense.amount)
        if expense.frequency_type is FrequencyType.ANNUAL:
            if expense.payment_month is None:
                errors.append(FieldError(f"{path}[{i}].payment_month", "is required for annual expenses"))
            elif not 1 <= expense.payment_month <= 12:
                errors.append(FieldError(f"{path}[{i}].payment_month", "must be between 1 and 12"))
    return errors


def validate_variable_expenses(
    expenses: Iterable[VariableExpense], path: str = "variable_expenses"
) -> List[FieldError]:
    errors: List[FieldError] = []
    for i, expense in enumerate(expenses):
        _check_non_negative(errors, f"{path}[{i}].amount", expense.amount)
    return errors


def validate_savings(
    goals: Iterable[SavingsGoal],
    settings: SavingsSettings,
    path: str = "savings_goals",
) -> List[FieldError]:
    errors: List[FieldError] = []
    for i, goal in enumerate(goals):
        _check_non_negative(errors, f"{path}[{i}].target_amount", goal.target_amount)
        _check_non_negative(errors, f"{path}[{i}].current_amount", goal.current_amount)
        _check_non_negative(errors, f"{path}[{i}].monthly_contribution", goal.monthly_contribution)
    _check_non_negative(
        errors, "savings_settings.monthly_emergency_contribution", settings.monthly_emergency_contribution
    )
    _check_non_negative(errors, "savings_settings.monthly_general_savings", settings.monthly_general_savings)
    return errors


def ensure_valid(errors: List[FieldError]) -> None:
    """Raise with every collected error, or return when there are none"""
    if errors:
        raise InvalidSnapshotError(errors)
