"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credit_gateway.config import settings
from credit_gateway.domain.exceptions import DomainException, ErrorKind
from credit_gateway.domain.loans import LoanService
from credit_gateway.domain.payments import LoanPaymentService
from credit_gateway.infrastructure.database.repositories import (
    CustomerRepository,
    InstallmentRepository,
    LoanRepository,
)
from credit_gateway.infrastructure.database.session import get_db

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.BUSINESS_RULE: 422,
}


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_loan_service(db: Session = Depends(get_db)) -> LoanService:
    return LoanService(
        LoanRepository(db),
        InstallmentRepository(db),
        CustomerRepository(db),
        min_interest_rate=settings.min_interest_rate,
        max_interest_rate=settings.max_interest_rate,
    )


def get_payment_service(db: Session = Depends(get_db)) -> LoanPaymentService:
    return LoanPaymentService(
        LoanRepository(db),
        InstallmentRepository(db),
        CustomerRepository(db),
        horizon_months=settings.payment_horizon_months,
    )


def to_http_error(error: DomainException) -> HTTPException:
    """Map a domain failure to its HTTP status, keeping the message as detail"""
    return HTTPException(status_code=STATUS_BY_KIND.get(error.kind, 400), detail=error.message)
