"""POST /v1/payoff - debt-free date for a strategy and extra payment"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from debt_planner.api.v1.schemas import PayoffRequest, PayoffResponse
from debt_planner.api.dependencies import get_request_id, get_settings
from debt_planner.config import Settings
from debt_planner.domain.engine import compute_debt_free_date
from debt_planner.domain.exceptions import InvalidSnapshotError
from debt_planner.domain.models import PayoffFailure
from debt_planner.infrastructure.observability.metrics import record_payoff, validation_failure_counter
from debt_planner.infrastructure.observability.logging import log_payoff

router = APIRouter()


@router.post("/payoff", response_model=PayoffResponse)
def compute_payoff(
    request_body: PayoffRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Simulate repayment of all interest-bearing debts.

    Flow:
    1. Map the snapshot to domain debts
    2. Validate every field up front
    3. Simulate month by month under the chosen strategy
    4. Return the plan, or the unpayable / negative amortization outcome
    """
    start_time = time.time()
    request_id = get_request_id(request)
    debts = request_body.domain_debts()

    try:
        result = compute_debt_free_date(
            debts,
            request_body.extra_monthly_payment,
            request_body.strategy,
            focus_debt_id=request_body.focus_debt_id,
            today=request_body.as_of,
            max_months=settings.max_simulation_months,
        )
    except InvalidSnapshotError as e:
        validation_failure_counter.labels(endpoint="payoff").inc()
        logging.warning(f"Invalid payoff request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.to_detail())

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    outcome = result.reason if isinstance(result, PayoffFailure) else "plan"
    months = None if isinstance(result, PayoffFailure) else result.months

    duration_ms = (time.time() - start_time) * 1000
    record_payoff(request_body.strategy.value, outcome, months)
    log_payoff(request_id, request_body.strategy.value, len(debts), outcome, months, duration_ms)

    return PayoffResponse.from_domain(result)
