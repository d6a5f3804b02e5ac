"""POST /v1/loans, GET /v1/loans - loan origination and listing"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from credit_gateway.api.v1.schemas import (
    CreateLoanRequest,
    CreateLoanResponse,
    ListLoanResponse,
    LoanSchema,
    PagingSchema,
)
from credit_gateway.api.dependencies import get_loan_service, get_request_id, to_http_error
from credit_gateway.config import settings
from credit_gateway.infrastructure.database.session import get_db
from credit_gateway.domain.exceptions import DomainException
from credit_gateway.domain.loans import LoanService
from credit_gateway.infrastructure.observability.metrics import record_loan_created
from credit_gateway.infrastructure.observability.logging import log_loan_created

router = APIRouter()


@router.post("/loans", response_model=CreateLoanResponse, status_code=201)
def create_loan(
    request_body: CreateLoanRequest,
    request: Request,
    db: Session = Depends(get_db),
    loan_service: LoanService = Depends(get_loan_service),
):
    """
    Open a loan and its monthly installment schedule.

    Flow:
    1. Validate installment count, interest rate and amount
    2. Check the customer's free credit limit covers the amount owed
    3. Persist loan + installments and reserve the credit limit
    4. Commit
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        loan = loan_service.create_loan(
            customer_id=request_body.customer_id,
            loan_amount=request_body.loan_amount,
            interest_rate=request_body.interest_rate,
            number_of_installment=request_body.number_of_installment,
        )
        db.commit()

    except DomainException as e:
        db.rollback()
        logging.warning(f"Loan creation rejected: {e}", extra={"request_id": request_id, "error_kind": e.kind.value})
        raise to_http_error(e)

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_loan_created(loan.number_of_installment)
    log_loan_created(
        request_id, loan.id, loan.customer_id, loan.loan_amount, loan.number_of_installment, duration_ms
    )

    return CreateLoanResponse(
        id=loan.id,
        insert_date=loan.create_date,
        customer_id=loan.customer_id,
        loan_amount=loan.loan_amount,
        number_of_installment=loan.number_of_installment,
    )


@router.get("/loans", response_model=ListLoanResponse)
def list_loans(
    request: Request,
    customer_id: int = Query(..., description="Customer identifier"),
    is_paid: bool | None = Query(None, description="Filter by paid state"),
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    loan_service: LoanService = Depends(get_loan_service),
):
    """Retrieve one page of a customer's loans"""
    try:
        result = loan_service.list_loans(customer_id, is_paid=is_paid, page=page, size=size)
    except DomainException as e:
        logging.warning(f"Loan listing failed: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)

    loans = [
        LoanSchema(
            id=loan.id,
            customer_id=loan.customer_id,
            loan_amount=loan.loan_amount,
            interest_rate=loan.interest_rate,
            number_of_installment=loan.number_of_installment,
            is_paid=loan.paid,
            create_date=loan.create_date,
        )
        for loan in result.items
    ]

    return ListLoanResponse(loans=loans, paging=PagingSchema.from_page(result))
