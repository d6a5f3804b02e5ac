"""Loan origination and read-side lookups"""

from datetime import date
from decimal import Decimal

from credit_gateway.domain.exceptions import CreditError, InvalidArgumentError
from credit_gateway.domain.installments import (
    calculate_amount_owed,
    check_number_of_installment_is_valid,
    create_installment_dates_by_installment_count,
    create_loan_installments,
)
from credit_gateway.domain.models import Customer, Loan, LoanInstallment, Page
from credit_gateway.domain.money import Number, to_decimal

DEFAULT_MIN_INTEREST_RATE = Decimal("0.1")
DEFAULT_MAX_INTEREST_RATE = Decimal("0.5")


def check_interest_rate_is_valid(
    interest_rate: Number,
    min_rate: Decimal = DEFAULT_MIN_INTEREST_RATE,
    max_rate: Decimal = DEFAULT_MAX_INTEREST_RATE,
) -> None:
    if not min_rate <= to_decimal(interest_rate) <= max_rate:
        raise InvalidArgumentError(f"Interest rate must be between {min_rate} and {max_rate}")


def check_customer_has_enough_credit_limit(customer: Customer, amount_owed: Decimal) -> None:
    if customer.used_credit_limit + amount_owed > customer.credit_limit:
        raise CreditError("Customer does not have enough credit limit for this loan")


class LoanService:
    """Creates loans with their installment schedule and serves loan/installment lookups"""

    def __init__(
        self,
        loan_repo,
        installment_repo,
        customer_repo,
        min_interest_rate: Decimal = DEFAULT_MIN_INTEREST_RATE,
        max_interest_rate: Decimal = DEFAULT_MAX_INTEREST_RATE,
    ):
        self.loan_repo = loan_repo
        self.installment_repo = installment_repo
        self.customer_repo = customer_repo
        self.min_interest_rate = min_interest_rate
        self.max_interest_rate = max_interest_rate

    def create_loan(
        self,
        customer_id: int,
        loan_amount: Number,
        interest_rate: Number,
        number_of_installment: int,
        today: date | None = None,
    ) -> Loan:
        """
        Open a loan for a customer.

        The customer's used credit limit grows by the full amount owed
        (sum of installments), which is what payments release again.

        Raises:
            InvalidArgumentError: Bad installment count, interest rate or amount
            ResourceNotFoundError: Unknown customer
            CreditError: Not enough free credit limit
        """
        check_number_of_installment_is_valid(number_of_installment)
        check_interest_rate_is_valid(interest_rate, self.min_interest_rate, self.max_interest_rate)
        if to_decimal(loan_amount) <= 0:
            raise InvalidArgumentError("Loan amount must be greater than zero")

        customer = self.customer_repo.get_customer_by_id(customer_id)
        amount_owed = calculate_amount_owed(loan_amount, number_of_installment, interest_rate)
        check_customer_has_enough_credit_limit(customer, amount_owed)

        loan = self.loan_repo.create_loan(
            customer_id=customer_id,
            loan_amount=to_decimal(loan_amount),
            interest_rate=to_decimal(interest_rate),
            number_of_installment=number_of_installment,
        )

        installment_dates = create_installment_dates_by_installment_count(number_of_installment, today)
        installments = create_loan_installments(
            loan, loan_amount, number_of_installment, installment_dates, interest_rate
        )
        self.installment_repo.add_installments(installments)
        self.customer_repo.increase_used_credit_limit(customer_id, amount_owed)

        return loan

    def list_loans(self, customer_id: int, is_paid: bool | None = None, page: int = 0, size: int = 10) -> Page[Loan]:
        self.customer_repo.get_customer_by_id(customer_id)
        return self.loan_repo.list_loans_by_customer(customer_id, is_paid=is_paid, page=page, size=size)

    def list_installments(self, loan_id: int, page: int = 0, size: int = 10) -> Page[LoanInstallment]:
        self.loan_repo.get_loan_by_id(loan_id)
        return self.installment_repo.get_paginated_by_loan_id(loan_id, page=page, size=size)

    def get_installment(self, installment_id: int) -> LoanInstallment:
        return self.installment_repo.get_installment_by_id(installment_id)

