"""
E2E tests for household personas driving the full HTTP flow.

User personas:
- steady_payer: one card, pays well above the minimum
- overextended: minimums that never cover the interest
- promo_juggler: 0% balance transfer about to revert
- bnpl_shopper: installment purchases alongside salary and rent
- tight_budget: outflows exceed income for part of the year
"""

import pytest
from fastapi.testclient import TestClient


def _card(debt_id, balance, apr, minimum, **extra):
    return {"id": debt_id, "balance": balance, "apr": apr, "minimum_payment": minimum, **extra}


@pytest.mark.integration
def test_steady_payer_avalanche_beats_snowball_on_interest(client: TestClient):
    """
    steady_payer: small low-rate loan and a larger high-rate card
    Expected: avalanche pays less interest than snowball
    """
    debts = [_card("loan", 1000, 5, 50), _card("card", 3000, 25, 80)]
    results = {}
    for strategy in ("avalanche", "snowball"):
        response = client.post(
            "/v1/payoff",
            json={"debts": debts, "extra_monthly_payment": 200, "strategy": strategy, "as_of": "2025-01-01"},
        )
        assert response.status_code == 200
        results[strategy] = response.json()

    assert results["avalanche"]["schedule"][0]["extra_allocations"] == {"card": 200.0}
    assert results["snowball"]["schedule"][0]["extra_allocations"] == {"loan": 200.0}
    assert results["avalanche"]["total_interest_paid"] < results["snowball"]["total_interest_paid"]


@pytest.mark.integration
def test_overextended_gets_negative_amortization(client: TestClient):
    """
    overextended: two cards, one whose minimum is below its monthly interest
    Expected: failure naming only the offending debt
    """
    debts = [_card("ok", 500, 18, 40), _card("maxed", 12000, 29.9, 200)]
    response = client.post("/v1/payoff", json={"debts": debts, "strategy": "avalanche"})

    assert response.status_code == 200
    data = response.json()
    assert data["error"] == "negative_amortization"
    assert data["debt_ids"] == ["maxed"]

    # Extra payment does not hide a minimum below the interest
    response = client.post(
        "/v1/payoff", json={"debts": debts, "extra_monthly_payment": 300, "strategy": "avalanche"}
    )
    assert response.json()["error"] == "negative_amortization"

    # Raising the minimum above the interest makes it payable
    debts[1]["minimum_payment"] = 320
    response = client.post("/v1/payoff", json={"debts": debts, "strategy": "avalanche"})
    assert response.json()["error"] is None


@pytest.mark.integration
def test_promo_juggler_is_warned_before_rate_reverts(client: TestClient):
    """
    promo_juggler: 0% transfer ending in two months
    Expected: rate-change alert, and priority flips once the promotion ends
    """
    transfer = _card(
        "transfer",
        2400,
        0,
        100,
        promotional_apr=0,
        promotional_apr_end_date="2025-03-01",
        regular_apr=26.99,
    )
    debts = [transfer, _card("store", 600, 21, 30)]

    insights = client.post("/v1/debts/insights", json={"debts": debts, "as_of": "2025-01-10"}).json()
    assert insights["rate_changes"][0]["debt_id"] == "transfer"
    assert insights["rate_changes"][0]["ends_on"] == "2025-03-01"

    before = client.post("/v1/debts/priority", json={"debts": debts, "as_of": "2025-02-10"}).json()
    after = client.post("/v1/debts/priority", json={"debts": debts, "as_of": "2025-03-10"}).json()
    assert before["debt_ids"] == ["store", "transfer"]
    assert after["debt_ids"] == ["transfer", "store"]


@pytest.mark.integration
def test_bnpl_shopper_projection_tracks_installments(client: TestClient):
    """
    bnpl_shopper: two installment plans with different windows
    Expected: each plan contributes only inside its window
    """
    phone = {
        "id": "phone",
        "balance": 600,
        "minimum_payment": 100,
        "is_installment": True,
        "total_amount": 600,
        "number_of_installments": 6,
        "start_date": "2025-01-01",
        "end_date": "2025-07-01",
    }
    laptop = {
        "id": "laptop",
        "balance": 900,
        "minimum_payment": 150,
        "is_installment": True,
        "total_amount": 900,
        "number_of_installments": 6,
        "start_date": "2025-04-01",
        "end_date": "2025-10-01",
    }
    response = client.post(
        "/v1/projection",
        json={
            "income_sources": [{"id": "salary", "amount": 3000}],
            "debts": [phone, laptop],
            "fixed_expenses": [{"id": "rent", "amount": 1200}],
            "as_of": "2025-01-01",
        },
    )

    assert response.status_code == 200
    outflows = [m["debt_outflow"] for m in response.json()["months"]]
    assert outflows[:3] == [100.0] * 3  # phone only
    assert outflows[3:6] == [250.0] * 3  # both
    assert outflows[6:9] == [150.0] * 3  # laptop only
    assert outflows[9:] == [0.0] * 3


@pytest.mark.integration
def test_tight_budget_shows_negative_months(client: TestClient):
    """
    tight_budget: annual bill in December pushes the month below zero
    Expected: negative balance reported, not rejected
    """
    response = client.post(
        "/v1/projection",
        json={
            "income_sources": [{"id": "wages", "amount": 1800}],
            "debts": [_card("card", 2000, 24.9, 60)],
            "fixed_expenses": [
                {"id": "rent", "amount": 1300},
                {"id": "car_insurance", "amount": 900, "frequency_type": "annual", "payment_month": 12},
            ],
            "variable_expenses": [{"id": "groceries", "amount": 350}],
            "as_of": "2025-06-01",
        },
    )

    assert response.status_code == 200
    months = {m["month"]: m for m in response.json()["months"]}
    assert months["2025-06"]["balance"] == 90.0
    assert months["2025-12"]["balance"] == -810.0
