"""POST /v1/customers, GET /v1/customers/{customer_id}"""

import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from credit_gateway.api.v1.schemas import CreateCustomerRequest, CustomerResponse
from credit_gateway.api.dependencies import get_request_id, to_http_error
from credit_gateway.infrastructure.database.session import get_db
from credit_gateway.infrastructure.database.repositories import CustomerRepository
from credit_gateway.domain.exceptions import DomainException
from credit_gateway.domain.models import Customer

router = APIRouter()


def to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        name=customer.name,
        surname=customer.surname,
        credit_limit=customer.credit_limit,
        used_credit_limit=customer.used_credit_limit,
    )


@router.post("/customers", response_model=CustomerResponse, status_code=201)
def create_customer(request_body: CreateCustomerRequest, db: Session = Depends(get_db)):
    """Register a customer with an unused credit limit"""
    customer = CustomerRepository(db).create_customer(
        name=request_body.name,
        surname=request_body.surname,
        credit_limit=request_body.credit_limit,
    )
    db.commit()
    return to_response(customer)


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, request: Request, db: Session = Depends(get_db)):
    try:
        customer = CustomerRepository(db).get_customer_by_id(customer_id)
    except DomainException as e:
        logging.warning(f"Customer lookup failed: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)

    return to_response(customer)
