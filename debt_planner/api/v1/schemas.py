"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from debt_planner.domain.models import (
    Debt,
    ExtraPaymentImpact,
    FixedExpense,
    FrequencyType,
    IncomeSource,
    Installment,
    MonthlyProjection,
    PayoffFailure,
    PayoffMonth,
    PayoffPlan,
    RateChangeAlert,
    SavingsGoal,
    SavingsSettings,
    Strategy,
    VariableExpense,
    to_cents,
)


def _money(amount: Decimal) -> float:
    return float(to_cents(amount))


# -------------------------------
# Snapshot records
# -------------------------------


class DebtSchema(BaseModel):
    """Debt record supplied by the record store"""

    id: str = Field(..., min_length=1, description="Debt identifier")
    name: str = ""
    balance: Decimal
    apr: Decimal = Decimal(0)
    minimum_payment: Decimal = Decimal(0)
    payment_day: int = 1
    is_installment: bool = False
    promotional_apr: Optional[Decimal] = None
    promotional_apr_end_date: Optional[date] = None
    regular_apr: Optional[Decimal] = None
    installment_amount: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    number_of_installments: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def to_domain(self) -> Debt:
        return Debt(
            id=self.id,
            name=self.name or self.id,
            balance=self.balance,
            # Installments are not interest-bearing
            apr=Decimal(0) if self.is_installment else self.apr,
            minimum_payment=self.minimum_payment,
            payment_day=self.payment_day,
            is_installment=self.is_installment,
            promotional_apr=self.promotional_apr,
            promotional_apr_end_date=self.promotional_apr_end_date,
            regular_apr=self.regular_apr,
            installment_amount=self.installment_amount,
            total_amount=self.total_amount,
            number_of_installments=self.number_of_installments,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class IncomeSourceSchema(BaseModel):
    id: str
    amount: Decimal
    payment_day: int = 1

    def to_domain(self) -> IncomeSource:
        return IncomeSource(id=self.id, amount=self.amount, payment_day=self.payment_day)


class FixedExpenseSchema(BaseModel):
    id: str
    amount: Decimal
    frequency_type: FrequencyType = FrequencyType.MONTHLY
    payment_month: Optional[int] = None

    def to_domain(self) -> FixedExpense:
        return FixedExpense(
            id=self.id,
            amount=self.amount,
            frequency_type=self.frequency_type,
            payment_month=self.payment_month,
        )


class VariableExpenseSchema(BaseModel):
    id: str
    amount: Decimal

    def to_domain(self) -> VariableExpense:
        return VariableExpense(id=self.id, amount=self.amount)


class SavingsGoalSchema(BaseModel):
    id: str
    target_amount: Decimal
    current_amount: Decimal = Decimal(0)
    target_date: Optional[date] = None
    monthly_contribution: Decimal = Decimal(0)
    is_active: bool = True

    def to_domain(self) -> SavingsGoal:
        return SavingsGoal(
            id=self.id,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            monthly_contribution=self.monthly_contribution,
            is_active=self.is_active,
            target_date=self.target_date,
        )


class SavingsSettingsSchema(BaseModel):
    monthly_emergency_contribution: Decimal = Decimal(0)
    monthly_general_savings: Decimal = Decimal(0)

    def to_domain(self) -> SavingsSettings:
        return SavingsSettings(
            monthly_emergency_contribution=self.monthly_emergency_contribution,
            monthly_general_savings=self.monthly_general_savings,
        )


# -------------------------------
# Payoff
# -------------------------------


class PayoffRequest(BaseModel):
    """Request body for POST /v1/payoff and POST /v1/debts/insights"""

    debts: List[DebtSchema]
    extra_monthly_payment: Decimal = Decimal(0)
    strategy: Strategy = Strategy.AVALANCHE
    focus_debt_id: Optional[str] = None
    as_of: Optional[date] = Field(None, description="Simulation start date (default: today)")

    def domain_debts(self) -> List[Debt]:
        return [d.to_domain() for d in self.debts]


class PayoffMonthSchema(BaseModel):
    month: str
    interest: float
    remaining_balance: float
    extra_allocations: Dict[str, float]

    @classmethod
    def from_domain(cls, entry: PayoffMonth) -> "PayoffMonthSchema":
        return cls(
            month=entry.month.isoformat(),
            interest=_money(entry.interest),
            remaining_balance=_money(entry.remaining_balance),
            extra_allocations={k: _money(v) for k, v in entry.extra_allocations.items()},
        )


class PayoffResponse(BaseModel):
    """Response for POST /v1/payoff; `error` is set instead of the plan fields on failure"""

    months: Optional[int] = None
    debt_free_date: Optional[date] = None
    total_interest_paid: Optional[float] = None
    schedule: List[PayoffMonthSchema] = []
    error: Optional[str] = None
    debt_ids: List[str] = []

    @classmethod
    def from_domain(cls, result) -> "PayoffResponse":
        if isinstance(result, PayoffFailure):
            return cls(error=result.reason, debt_ids=list(result.debt_ids))
        return cls(
            months=result.months,
            debt_free_date=result.debt_free_date,
            total_interest_paid=_money(result.total_interest_paid),
            schedule=[PayoffMonthSchema.from_domain(m) for m in result.schedule],
        )


# -------------------------------
# Priority
# -------------------------------


class PriorityRequest(BaseModel):
    """Request body for POST /v1/debts/priority"""

    debts: List[DebtSchema]
    strategy: Strategy = Strategy.AVALANCHE
    as_of: Optional[date] = None


class PriorityResponse(BaseModel):
    strategy: Strategy
    debt_ids: List[str]


# -------------------------------
# Projection
# -------------------------------


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/projection"""

    income_sources: List[IncomeSourceSchema] = []
    debts: List[DebtSchema] = []
    fixed_expenses: List[FixedExpenseSchema] = []
    variable_expenses: List[VariableExpenseSchema] = []
    savings_goals: List[SavingsGoalSchema] = []
    savings_settings: SavingsSettingsSchema = SavingsSettingsSchema()
    as_of: Optional[date] = None


class MonthlyProjectionSchema(BaseModel):
    month: str
    income: float
    debt_outflow: float
    fixed_outflow: float
    variable_outflow: float
    savings_outflow: float
    total_outflow: float
    balance: float

    @classmethod
    def from_domain(cls, record: MonthlyProjection) -> "MonthlyProjectionSchema":
        return cls(
            month=record.month.isoformat(),
            income=_money(record.income),
            debt_outflow=_money(record.debt_outflow),
            fixed_outflow=_money(record.fixed_outflow),
            variable_outflow=_money(record.variable_outflow),
            savings_outflow=_money(record.savings_outflow),
            total_outflow=_money(record.total_outflow),
            balance=_money(record.balance),
        )


class ProjectionResponse(BaseModel):
    months: List[MonthlyProjectionSchema]


# -------------------------------
# Insights
# -------------------------------


class RateChangeSchema(BaseModel):
    debt_id: str
    name: str
    promotional_apr: float
    regular_apr: float
    ends_on: date

    @classmethod
    def from_domain(cls, alert: RateChangeAlert) -> "RateChangeSchema":
        return cls(
            debt_id=alert.debt_id,
            name=alert.name,
            promotional_apr=float(alert.promotional_apr),
            regular_apr=float(alert.regular_apr),
            ends_on=alert.ends_on,
        )


class InsightsResponse(BaseModel):
    """Response for POST /v1/debts/insights"""

    rate_changes: List[RateChangeSchema]
    high_rate_debt_ids: List[str]
    payoff_estimates: Dict[str, Optional[int]]
    months_saved: Optional[int] = None
    interest_saved: Optional[float] = None
    error: Optional[str] = None
    debt_ids: List[str] = []

    def with_impact(self, impact) -> "InsightsResponse":
        if isinstance(impact, ExtraPaymentImpact):
            return self.model_copy(
                update={"months_saved": impact.months_saved, "interest_saved": _money(impact.interest_saved)}
            )
        return self.model_copy(update={"error": impact.reason, "debt_ids": list(impact.debt_ids)})


# -------------------------------
# Installments
# -------------------------------


class InstallmentScheduleRequest(BaseModel):
    """Request body for POST /v1/installments/schedule"""

    debt: DebtSchema


class InstallmentSchema(BaseModel):
    """Single installment in a repayment schedule"""

    number: int
    due_date: date
    amount: float

    @classmethod
    def from_domain(cls, installment: Installment) -> "InstallmentSchema":
        return cls(number=installment.number, due_date=installment.due_date, amount=_money(installment.amount))


class InstallmentScheduleResponse(BaseModel):
    debt_id: str
    total_amount: float
    installments: List[InstallmentSchema]
