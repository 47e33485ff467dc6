"""POST /v1/installments/schedule - payment schedule of an installment debt"""

import logging
from fastapi import APIRouter, HTTPException, Request

from debt_planner.api.v1.schemas import (
    InstallmentSchema,
    InstallmentScheduleRequest,
    InstallmentScheduleResponse,
)
from debt_planner.api.dependencies import get_request_id
from debt_planner.domain.engine import installment_schedule
from debt_planner.domain.exceptions import InvalidSnapshotError
from debt_planner.infrastructure.observability.metrics import validation_failure_counter

router = APIRouter()


@router.post("/installments/schedule", response_model=InstallmentScheduleResponse)
def get_installment_schedule(request_body: InstallmentScheduleRequest, request: Request):
    """
    Retrieve the monthly schedule of an installment debt.

    Returns:
        One entry per installment; the last absorbs any rounding remainder
    """
    request_id = get_request_id(request)
    debt = request_body.debt.to_domain()

    try:
        installments = installment_schedule(debt)
    except InvalidSnapshotError as e:
        validation_failure_counter.labels(endpoint="installments").inc()
        logging.warning(f"Invalid installment schedule request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.to_detail())

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return InstallmentScheduleResponse(
        debt_id=debt.id,
        total_amount=float(sum(i.amount for i in installments)),
        installments=[InstallmentSchema.from_domain(i) for i in installments],
    )
