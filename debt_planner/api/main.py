"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from debt_planner.api.middleware import RequestIDMiddleware, MetricsMiddleware
from debt_planner.api.v1 import installments, insights, payoff, priority, projection
from debt_planner.infrastructure.observability.logging import setup_logging
from debt_planner.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Debt Planner",
        description="Debt payoff simulation and cash-flow projection service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(payoff.router, prefix="/v1", tags=["payoff"])
    app.include_router(priority.router, prefix="/v1", tags=["debts"])
    app.include_router(insights.router, prefix="/v1", tags=["debts"])
    app.include_router(projection.router, prefix="/v1", tags=["projection"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])

    return app


app = create_app()
