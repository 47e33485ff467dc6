"""Domain-specific exceptions"""

from typing import Dict, List, Sequence

from debt_planner.domain.models import FieldError


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidSnapshotError(DomainException):
    """Input snapshot failed validation; carries every offending field"""

    def __init__(self, errors: Sequence[FieldError]):
        self.errors: List[FieldError] = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid input: {summary}")

    def to_detail(self) -> List[Dict[str, str]]:
        return [{"field": e.field, "message": e.message} for e in self.errors]


class UnknownStrategyError(DomainException):
    """Strategy tag is neither avalanche nor snowball"""

    pass
