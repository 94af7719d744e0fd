"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from household_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from household_ledger.api.v1 import bills, budgets, dashboard, installments, templates, transactions
from household_ledger.config import Settings, settings as default_settings
from household_ledger.domain.exceptions import (
    DomainException,
    InvalidStateError,
    NotFoundError,
    StoreUnavailableError,
    SummaryServiceError,
    ValidationError,
)
from household_ledger.infrastructure.database.session import create_session_factory
from household_ledger.infrastructure.observability.logging import setup_logging

# Most specific first: InvalidStateError is also a ValidationError
ERROR_STATUS = [
    (InvalidStateError, 409),
    (ValidationError, 422),
    (NotFoundError, 404),
    (StoreUnavailableError, 503),
    (SummaryServiceError, 503),
]

USER_MESSAGES = {
    "invalid_state": "This action is not allowed in the record's current state",
    "validation": "Some fields are missing or out of range",
    "not_found": "Record not found",
    "store_unavailable": "Storage is unavailable, please try again",
    "summary_unavailable": "Summary service is unavailable, please try again",
}


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Map domain errors to HTTP responses with a user-facing message category"""
    request_id = getattr(request.state, "request_id", "unknown")
    status_code = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 500)

    if status_code >= 500:
        logging.error(f"{type(exc).__name__}: {exc}", extra={"request_id": request_id})
    else:
        logging.warning(f"{type(exc).__name__}: {exc}", extra={"request_id": request_id})

    return JSONResponse(
        status_code=status_code,
        content={
            "category": exc.category,
            "message": USER_MESSAGES.get(exc.category, "Unexpected error"),
            "detail": str(exc),
        },
    )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app_settings = app_settings or default_settings

    # Setup structured logging
    setup_logging(app_settings.log_level, app_settings.service_name)

    app = FastAPI(
        title="Household Ledger",
        description="Ledger aggregation, budgets, installments and card bill tracking",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Store handle lives on the app, one session per request
    app.state.session_factory = create_session_factory(
        app_settings.database_url,
        create_tables=app_settings.create_tables,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainException, domain_exception_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": app_settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(budgets.router, prefix="/v1", tags=["budgets"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(bills.router, prefix="/v1", tags=["bills"])
    app.include_router(templates.router, prefix="/v1", tags=["templates"])

    return app
