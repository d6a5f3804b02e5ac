"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from credit_gateway.domain.models import Page


class CreateCustomerRequest(BaseModel):
    """Request body for POST /v1/customers"""

    name: str = Field(..., min_length=1)
    surname: str = Field(..., min_length=1)
    credit_limit: Decimal = Field(..., ge=0, decimal_places=2, description="Credit ceiling")


class CustomerResponse(BaseModel):
    """Customer with credit limit usage"""

    id: int
    name: str
    surname: str
    credit_limit: Decimal
    used_credit_limit: Decimal


class CreateLoanRequest(BaseModel):
    """Request body for POST /v1/loans"""

    customer_id: int = Field(..., gt=0)
    loan_amount: Decimal = Field(..., gt=0, decimal_places=2, description="Principal")
    interest_rate: Decimal = Field(..., ge=0, decimal_places=4, description="Fractional rate, 0.1 == 10%")
    number_of_installment: int = Field(..., description="One of 6, 9, 12, 24")


class CreateLoanResponse(BaseModel):
    """Response for POST /v1/loans"""

    id: int
    insert_date: Optional[datetime] = None
    customer_id: int
    loan_amount: Decimal
    number_of_installment: int


class LoanSchema(BaseModel):
    """Single loan in a listing"""

    id: int
    customer_id: int
    loan_amount: Decimal
    interest_rate: Decimal
    number_of_installment: int
    is_paid: bool
    create_date: Optional[datetime] = None


class PagingSchema(BaseModel):
    """Paging metadata (page is 0-based)"""

    page: int
    size: int
    total_items: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PagingSchema":
        return cls(page=page.page, size=page.size, total_items=page.total_items, total_pages=page.total_pages)


class ListLoanResponse(BaseModel):
    """Response for GET /v1/loans"""

    loans: List[LoanSchema]
    paging: PagingSchema


class LoanInstallmentSchema(BaseModel):
    """Single installment in a loan schedule"""

    id: int
    amount: Decimal
    paid_amount: Decimal
    due_date: date
    payment_date: Optional[date] = None
    is_paid: bool


class ListLoanInstallmentsResponse(BaseModel):
    """Response for GET /v1/loans/{loan_id}/installments"""

    loan_id: int
    loan_installments: List[LoanInstallmentSchema]
    paging: PagingSchema


class PayLoanRequest(BaseModel):
    """Request body for POST /v1/loans/{loan_id}/payments"""

    amount: Decimal = Field(..., gt=0, decimal_places=2, description="Money available for installments")


class PayLoanResponse(BaseModel):
    """Response for POST /v1/loans/{loan_id}/payments"""

    loan_id: int
    paid_installment_count: int
    total_amount_spent: Decimal
    loan_paid_completely: bool
