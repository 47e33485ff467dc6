"""Unit tests for installment debt handling"""

from datetime import date
from decimal import Decimal
from debt_planner.domain.installments import (
    generate_installment_schedule,
    installment_amount,
    installment_due,
    is_installment_active,
)
from debt_planner.utils.date_utils import CalendarMonth

from conftest import make_debt, make_installment


def test_generate_installment_schedule_equal_split():
    """Test plan with evenly divisible amount"""
    installments = generate_installment_schedule(make_installment())

    assert len(installments) == 12
    assert all(inst.amount == Decimal("100") for inst in installments)  # Each 100
    assert sum(inst.amount for inst in installments) == Decimal("1200")


def test_generate_installment_schedule_rounding():
    """Test last installment absorbs remainder"""
    debt = make_installment(total_amount="1000", number_of_installments=3, balance="1000")
    installments = generate_installment_schedule(debt)

    assert [inst.amount for inst in installments] == [
        Decimal("333.33"),
        Decimal("333.33"),
        Decimal("333.34"),  # Last absorbs +1 cent
    ]
    assert sum(inst.amount for inst in installments) == Decimal("1000")


def test_generate_installment_schedule_dates():
    """Test monthly due dates on the payment day, clamped to short months"""
    debt = make_installment(
        number_of_installments=3, payment_day=31, start_date=date(2025, 1, 31), end_date=date(2025, 4, 30)
    )
    installments = generate_installment_schedule(debt)

    assert [inst.due_date for inst in installments] == [
        date(2025, 1, 31),
        date(2025, 2, 28),
        date(2025, 3, 31),
    ]
    assert [inst.number for inst in installments] == [1, 2, 3]


def test_generate_installment_schedule_non_installment():
    """Test handling of a revolving debt"""
    assert generate_installment_schedule(make_debt()) == []


def test_installment_amount_derived_from_total():
    assert installment_amount(make_installment()) == Decimal("100.00")
    assert installment_amount(make_installment(installment_amount="120")) == Decimal("120")


def test_active_window_is_start_inclusive_end_exclusive():
    debt = make_installment()  # 2025-01-01 .. 2026-01-01

    assert not is_installment_active(debt, CalendarMonth(2024, 12))
    assert is_installment_active(debt, CalendarMonth(2025, 1))
    assert is_installment_active(debt, CalendarMonth(2025, 12))
    assert not is_installment_active(debt, CalendarMonth(2026, 1))


def test_installment_due_outside_window_is_zero():
    debt = make_installment()
    assert installment_due(debt, CalendarMonth(2026, 2), Decimal("1200")) == Decimal("0")


def test_installment_due_truncates_to_remaining_balance():
    debt = make_installment()
    assert installment_due(debt, CalendarMonth(2025, 12), Decimal("40")) == Decimal("40")
    assert installment_due(debt, CalendarMonth(2025, 12), Decimal("0")) == Decimal("0")
