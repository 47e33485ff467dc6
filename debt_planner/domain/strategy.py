"""Debt ordering and surplus allocation for avalanche and snowball repayment"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from debt_planner.domain.exceptions import UnknownStrategyError
from debt_planner.domain.models import ZERO, Strategy


@dataclass(frozen=True)
class RankedDebt:
    """What the allocator needs to know about a debt in a given month"""

    debt_id: str
    balance: Decimal
    rate: Decimal
    position: int  # order in the caller's input


def parse_strategy(value) -> Strategy:
    if isinstance(value, Strategy):
        return value
    try:
        return Strategy(value)
    except ValueError as e:
        raise UnknownStrategyError(f"Unknown strategy: {value!r}") from e


def order_debts(
    candidates: Sequence[RankedDebt],
    strategy: Strategy,
    focus_debt_id: Optional[str] = None,
) -> List[RankedDebt]:
    """
    Sort debts with a positive balance into payment priority.

    - Avalanche: highest rate first; ties → larger balance, then input order
    - Snowball: smallest balance first; ties → higher rate, then input order
    - A focus debt, when given and present, goes to the head of the list
    """
    owing = [c for c in candidates if c.balance > ZERO]

    if strategy is Strategy.AVALANCHE:
        ordered = sorted(owing, key=lambda c: (-c.rate, -c.balance, c.position))
    elif strategy is Strategy.SNOWBALL:
        ordered = sorted(owing, key=lambda c: (c.balance, -c.rate, c.position))
    else:
        raise UnknownStrategyError(f"Unknown strategy: {strategy!r}")

    if focus_debt_id is not None:
        focused = [c for c in ordered if c.debt_id == focus_debt_id]
        ordered = focused + [c for c in ordered if c.debt_id != focus_debt_id]

    return ordered


def allocate_extra(ordered: Sequence[RankedDebt], extra: Decimal) -> Dict[str, Decimal]:
    """
    Walk the priority order, giving each debt as much of the extra as it can take.

    Debts not reached before the extra runs out are absent from the result.
    """
    allocations: Dict[str, Decimal] = {}
    remaining_extra = extra

    for candidate in ordered:
        if remaining_extra <= ZERO:
            break
        payment = min(remaining_extra, candidate.balance)
        if payment <= ZERO:
            continue
        allocations[candidate.debt_id] = payment
        remaining_extra -= payment

    return allocations
