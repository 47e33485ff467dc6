"""POST /v1/debts/insights - rule-based repayment advice"""

import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Request

from debt_planner.api.v1.schemas import InsightsResponse, PayoffRequest, RateChangeSchema
from debt_planner.api.dependencies import get_request_id, get_settings
from debt_planner.config import Settings
from debt_planner.domain.engine import analyze_debts
from debt_planner.domain.exceptions import InvalidSnapshotError
from debt_planner.infrastructure.observability.metrics import validation_failure_counter

router = APIRouter()


@router.post("/debts/insights", response_model=InsightsResponse)
def get_insights(
    request_body: PayoffRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Summarise what deserves attention in the debt set.

    Returns:
        Promotional rates ending soon, high-rate debts worth consolidating,
        standalone payoff estimates and the months/interest the extra saves
    """
    request_id = get_request_id(request)

    try:
        insights = analyze_debts(
            request_body.domain_debts(),
            request_body.extra_monthly_payment,
            request_body.strategy,
            focus_debt_id=request_body.focus_debt_id,
            today=request_body.as_of,
            max_months=settings.max_simulation_months,
            alert_window_months=settings.promo_alert_window_months,
            high_apr_threshold=Decimal(str(settings.high_apr_threshold)),
        )
    except InvalidSnapshotError as e:
        validation_failure_counter.labels(endpoint="insights").inc()
        logging.warning(f"Invalid insights request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.to_detail())

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    response = InsightsResponse(
        rate_changes=[RateChangeSchema.from_domain(a) for a in insights.rate_changes],
        high_rate_debt_ids=list(insights.high_rate_debt_ids),
        payoff_estimates=insights.payoff_estimates,
    )
    return response.with_impact(insights.extra_payment_impact)
