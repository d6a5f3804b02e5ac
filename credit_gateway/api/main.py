"""FastAPI application factory"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_gateway.api.v1 import customers, loans, installments, payments
from credit_gateway.infrastructure.observability.logging import setup_logging
from credit_gateway.config import settings

setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Gateway",
        description="Installment loan origination and payment service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added = first executed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Schema failures answer 400 like INVALID_ARGUMENT; 422 is only for BUSINESS_RULE
    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(customers.router, prefix="/v1", tags=["customers"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
