"""POST /v1/loans/{loan_id}/payments - settle a payment against a loan"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credit_gateway.api.v1.schemas import PayLoanRequest, PayLoanResponse
from credit_gateway.api.dependencies import get_payment_service, get_request_id, to_http_error
from credit_gateway.infrastructure.database.session import get_db
from credit_gateway.domain.exceptions import DomainException
from credit_gateway.domain.payments import LoanPaymentService
from credit_gateway.infrastructure.observability.metrics import record_payment, record_payment_failure
from credit_gateway.infrastructure.observability.logging import log_payment

router = APIRouter()


@router.post("/loans/{loan_id}/payments", response_model=PayLoanResponse)
def pay_loan(
    loan_id: int,
    request_body: PayLoanRequest,
    request: Request,
    db: Session = Depends(get_db),
    payment_service: LoanPaymentService = Depends(get_payment_service),
):
    """
    Pay as many upcoming installments as the amount covers.

    Installment settlement, the loan paid flag and the customer's credit
    limit release are committed together or not at all.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = payment_service.pay_loan(loan_id, request_body.amount)
        db.commit()

    except DomainException as e:
        db.rollback()
        record_payment_failure(e.kind.value)
        logging.warning(f"Payment rejected: {e}", extra={"request_id": request_id, "error_kind": e.kind.value})
        raise to_http_error(e)

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_payment(result.paid_installment_count, result.total_amount_spent, result.loan_paid_completely)
    log_payment(
        request_id,
        result.loan_id,
        result.paid_installment_count,
        result.total_amount_spent,
        result.loan_paid_completely,
        duration_ms,
    )

    return PayLoanResponse(
        loan_id=result.loan_id,
        paid_installment_count=result.paid_installment_count,
        total_amount_spent=result.total_amount_spent,
        loan_paid_completely=result.loan_paid_completely,
    )
