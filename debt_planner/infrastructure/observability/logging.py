"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from debt_planner.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_payoff(
    request_id: str,
    strategy: str,
    debt_count: int,
    outcome: str,
    months: Optional[int],
    duration_ms: float,
) -> None:
    """Log structured payoff simulation outcome"""
    logging.info(
        "Payoff computed",
        extra={
            "request_id": request_id,
            "step": "payoff_complete",
            "strategy": strategy,
            "debt_count": debt_count,
            "outcome": outcome,
            "months": months,
            "duration_ms": duration_ms,
        },
    )


def log_projection(request_id: str, months: int, negative_months: int, duration_ms: float) -> None:
    """Log structured projection outcome"""
    logging.info(
        "Projection computed",
        extra={
            "request_id": request_id,
            "step": "projection_complete",
            "months": months,
            "negative_months": negative_months,
            "duration_ms": duration_ms,
        },
    )
