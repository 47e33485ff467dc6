"""POST /v1/debts/priority - payment order for a strategy"""

import logging
from fastapi import APIRouter, HTTPException, Request

from debt_planner.api.v1.schemas import PriorityRequest, PriorityResponse
from debt_planner.api.dependencies import get_request_id
from debt_planner.domain.engine import prioritize_debts
from debt_planner.domain.exceptions import InvalidSnapshotError
from debt_planner.infrastructure.observability.metrics import validation_failure_counter

router = APIRouter()


@router.post("/debts/priority", response_model=PriorityResponse)
def get_priority(request_body: PriorityRequest, request: Request):
    """
    Order owing debts by the chosen strategy.

    Returns:
        Debt ids, first to receive any extra payment first
    """
    request_id = get_request_id(request)

    try:
        debt_ids = prioritize_debts(
            [d.to_domain() for d in request_body.debts],
            request_body.strategy,
            today=request_body.as_of,
        )
    except InvalidSnapshotError as e:
        validation_failure_counter.labels(endpoint="priority").inc()
        logging.warning(f"Invalid priority request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.to_detail())

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return PriorityResponse(strategy=request_body.strategy, debt_ids=debt_ids)
