"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Customer:
    """Borrower with a credit ceiling and the part of it already consumed"""

    id: int
    name: str
    surname: str
    credit_limit: Decimal
    used_credit_limit: Decimal = Decimal("0.00")

    @property
    def available_credit_limit(self) -> Decimal:
        return self.credit_limit - self.used_credit_limit


@dataclass
class Loan:
    """Loan owned by a customer; paid flips to True once, when the last installment is settled"""

    customer_id: int
    loan_amount: Decimal
    interest_rate: Decimal  # Fraction, 0.1 == 10%
    number_of_installment: int
    paid: bool = False
    id: Optional[int] = None
    create_date: Optional[datetime] = None


@dataclass
class LoanInstallment:
    """Single monthly obligation of a loan"""

    loan_id: Optional[int]
    amount: Decimal
    due_date: date
    paid_amount: Decimal = Decimal("0.00")
    paid: bool = False
    payment_date: Optional[date] = None
    id: Optional[int] = None


@dataclass
class PayLoanResult:
    """Outcome of a single payment request"""

    loan_id: int
    paid_installment_count: int
    total_amount_spent: Decimal
    loan_paid_completely: bool


@dataclass
class Page(Generic[T]):
    """One page of a larger result set (page is 0-based)"""

    items: List[T] = field(default_factory=list)
    page: int = 0
    size: int = 10
    total_items: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_items / self.size)
