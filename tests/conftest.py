"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from debt_planner.api.main import create_app
from debt_planner.domain.models import Debt


def make_debt(debt_id: str = "card", **overrides) -> Debt:
    """Build a debt snapshot; numeric overrides may be given as str/int"""
    fields = {
        "id": debt_id,
        "name": debt_id.title(),
        "balance": Decimal("1000"),
        "apr": Decimal("0"),
        "minimum_payment": Decimal("50"),
    }
    fields.update(overrides)
    for key in ("balance", "apr", "minimum_payment", "promotional_apr", "regular_apr",
                "installment_amount", "total_amount"):
        if fields.get(key) is not None:
            fields[key] = Decimal(str(fields[key]))
    return Debt(**fields)


def make_installment(debt_id: str = "sofa", **overrides) -> Debt:
    """Installment debt of 1200 in 12 payments over calendar 2025"""
    fields = {
        "balance": "1200",
        "minimum_payment": "100",
        "is_installment": True,
        "total_amount": "1200",
        "number_of_installments": 12,
        "start_date": date(2025, 1, 1),
        "end_date": date(2026, 1, 1),
    }
    fields.update(overrides)
    return make_debt(debt_id, **fields)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_debts() -> list[Debt]:
    """Two revolving debts from the avalanche example"""
    return [
        make_debt("A", balance="1000", apr="25", minimum_payment="50"),
        make_debt("B", balance="3000", apr="10", minimum_payment="80"),
    ]
