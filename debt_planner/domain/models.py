"""Domain models - immutable snapshots of the records the engine computes over"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from debt_planner.utils.date_utils import CalendarMonth

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_cents(amount: Decimal) -> Decimal:
    """Round a money amount to cents (half-up)"""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


class Strategy(str, Enum):
    """Order in which surplus payments are applied to debts"""

    AVALANCHE = "avalanche"  # highest rate first
    SNOWBALL = "snowball"  # smallest balance first


class FrequencyType(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


@dataclass(frozen=True)
class Debt:
    """Debt record as stored by the budget tracker"""

    id: str
    name: str
    balance: Decimal
    apr: Decimal
    minimum_payment: Decimal
    payment_day: int = 1
    is_installment: bool = False

    # Promotional rate; `apr` holds the promotional value until the end date
    promotional_apr: Optional[Decimal] = None
    promotional_apr_end_date: Optional[date] = None
    regular_apr: Optional[Decimal] = None

    # Fixed-term installment plan
    installment_amount: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    number_of_installments: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_paid(self) -> bool:
        return self.balance <= ZERO

    @property
    def has_promotion(self) -> bool:
        return self.promotional_apr is not None


@dataclass(frozen=True)
class IncomeSource:
    id: str
    amount: Decimal
    payment_day: int = 1


@dataclass(frozen=True)
class FixedExpense:
    id: str
    amount: Decimal
    frequency_type: FrequencyType = FrequencyType.MONTHLY
    payment_month: Optional[int] = None  # 1-12, annual expenses only


@dataclass(frozen=True)
class VariableExpense:
    id: str
    amount: Decimal


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    target_amount: Decimal
    current_amount: Decimal
    monthly_contribution: Decimal
    is_active: bool = True
    target_date: Optional[date] = None


@dataclass(frozen=True)
class SavingsSettings:
    """Flat monthly contributions outside of any goal"""

    monthly_emergency_contribution: Decimal = ZERO
    monthly_general_savings: Decimal = ZERO


@dataclass(frozen=True)
class Installment:
    """Single payment in an installment debt's schedule"""

    number: int
    due_date: date
    amount: Decimal


@dataclass(frozen=True)
class PayoffMonth:
    """One simulated month of a payoff plan"""

    month: CalendarMonth
    interest: Decimal
    remaining_balance: Decimal
    extra_allocations: Dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class PayoffPlan:
    """Successful simulation outcome"""

    months: int
    debt_free_date: date
    total_interest_paid: Decimal
    schedule: Tuple[PayoffMonth, ...] = ()


@dataclass(frozen=True)
class PayoffFailure:
    """Simulation outcome that cannot be expressed as a month count"""

    UNPAYABLE = "unpayable"
    NEGATIVE_AMORTIZATION = "negative_amortization"

    reason: str
    debt_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MonthlyProjection:
    """Projected cash flow for one forward month"""

    month: CalendarMonth
    income: Decimal
    debt_outflow: Decimal
    fixed_outflow: Decimal
    variable_outflow: Decimal
    savings_outflow: Decimal
    balance: Decimal

    @property
    def total_outflow(self) -> Decimal:
        return self.debt_outflow + self.fixed_outflow + self.variable_outflow + self.savings_outflow


@dataclass(frozen=True)
class RateChangeAlert:
    """Promotional rate that reverts to the regular rate soon"""

    debt_id: str
    name: str
    promotional_apr: Decimal
    regular_apr: Decimal
    ends_on: date


@dataclass(frozen=True)
class ExtraPaymentImpact:
    """Difference between paying minimums only and paying minimums plus an extra"""

    baseline: PayoffPlan
    accelerated: PayoffPlan

    @property
    def months_saved(self) -> int:
        return self.baseline.months - self.accelerated.months

    @property
    def interest_saved(self) -> Decimal:
        return max(ZERO, self.baseline.total_interest_paid - self.accelerated.total_interest_paid)


@dataclass(frozen=True)
class DebtInsights:
    rate_changes: Tuple[RateChangeAlert, ...]
    high_rate_debt_ids: Tuple[str, ...]
    payoff_estimates: Dict[str, Optional[int]]
    extra_payment_impact: Union[ExtraPaymentImpact, PayoffFailure]


@dataclass(frozen=True)
class FieldError:
    """Validation failure tied to one input field"""

    field: str
    message: str


def active_debts(debts: List[Debt]) -> List[Debt]:
    """Debts that still carry a balance"""
    return [d for d in debts if not d.is_paid]
