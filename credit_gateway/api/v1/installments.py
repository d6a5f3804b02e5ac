"""GET /v1/loans/{loan_id}/installments, GET /v1/installments/{installment_id}"""

import logging
from fastapi import APIRouter, Depends, Query, Request

from credit_gateway.api.v1.schemas import ListLoanInstallmentsResponse, LoanInstallmentSchema, PagingSchema
from credit_gateway.api.dependencies import get_loan_service, get_request_id, to_http_error
from credit_gateway.config import settings
from credit_gateway.domain.exceptions import DomainException
from credit_gateway.domain.loans import LoanService
from credit_gateway.domain.models import LoanInstallment

router = APIRouter()


def to_schema(installment: LoanInstallment) -> LoanInstallmentSchema:
    return LoanInstallmentSchema(
        id=installment.id,
        amount=installment.amount,
        paid_amount=installment.paid_amount,
        due_date=installment.due_date,
        payment_date=installment.payment_date,
        is_paid=installment.paid,
    )


@router.get("/loans/{loan_id}/installments", response_model=ListLoanInstallmentsResponse)
def list_loan_installments(
    loan_id: int,
    request: Request,
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    loan_service: LoanService = Depends(get_loan_service),
):
    """
    Retrieve a loan's installment schedule, earliest due first.

    Returns:
        One page of installments with paging metadata
    """
    try:
        result = loan_service.list_installments(loan_id, page=page, size=size)
    except DomainException as e:
        logging.warning(f"Installment listing failed: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)

    return ListLoanInstallmentsResponse(
        loan_id=loan_id,
        loan_installments=[to_schema(inst) for inst in result.items],
        paging=PagingSchema.from_page(result),
    )


@router.get("/installments/{installment_id}", response_model=LoanInstallmentSchema)
def get_installment(
    installment_id: int,
    request: Request,
    loan_service: LoanService = Depends(get_loan_service),
):
    try:
        installment = loan_service.get_installment(installment_id)
    except DomainException as e:
        logging.warning(f"Installment lookup failed: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)

    return to_schema(installment)
