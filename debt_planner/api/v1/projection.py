"""POST /v1/projection - twelve-month cash-flow projection"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from debt_planner.api.v1.schemas import MonthlyProjectionSchema, ProjectionRequest, ProjectionResponse
from debt_planner.api.dependencies import get_request_id
from debt_planner.domain.engine import project_twelve_months
from debt_planner.domain.exceptions import InvalidSnapshotError
from debt_planner.infrastructure.observability.metrics import record_projection, validation_failure_counter
from debt_planner.infrastructure.observability.logging import log_projection

router = APIRouter()


@router.post("/projection", response_model=ProjectionResponse)
def get_projection(request_body: ProjectionRequest, request: Request):
    """
    Project income, outflows and available balance for the next 12 months.

    Negative balances are valid output, not errors.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        records = project_twelve_months(
            [s.to_domain() for s in request_body.income_sources],
            [d.to_domain() for d in request_body.debts],
            [e.to_domain() for e in request_body.fixed_expenses],
            [e.to_domain() for e in request_body.variable_expenses],
            [g.to_domain() for g in request_body.savings_goals],
            request_body.savings_settings.to_domain(),
            today=request_body.as_of,
        )
    except InvalidSnapshotError as e:
        validation_failure_counter.labels(endpoint="projection").inc()
        logging.warning(f"Invalid projection request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.to_detail())

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    negative_months = sum(1 for r in records if r.balance < 0)
    duration_ms = (time.time() - start_time) * 1000
    record_projection(negative_months)
    log_projection(request_id, len(records), negative_months, duration_ms)

    return ProjectionResponse(months=[MonthlyProjectionSchema.from_domain(r) for r in records])
