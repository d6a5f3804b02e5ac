"""Loan amount calculation and monthly installment schedule generation"""

from datetime import date
from decimal import Decimal, ROUND_UP
from typing import List, Sequence

from credit_gateway.domain.exceptions import InvalidArgumentError
from credit_gateway.domain.models import Loan, LoanInstallment
from credit_gateway.domain.money import CENT, ZERO, Number, round_money, to_decimal
from credit_gateway.utils.date_utils import add_months, resolve_today

ALLOWED_INSTALLMENT_COUNTS = (6, 9, 12, 24)


def check_number_of_installment_is_valid(number_of_installment: int) -> None:
    """Raise InvalidArgumentError unless the count is one of the offered terms"""
    if number_of_installment not in ALLOWED_INSTALLMENT_COUNTS:
        raise InvalidArgumentError(
            f"Invalid number of installments. Must be: {list(ALLOWED_INSTALLMENT_COUNTS)}"
        )


def calculate_total_amount_to_be_paid(
    loan_amount: Number,
    number_of_installment: int,
    interest_rate: Number,
) -> Decimal:
    """
    Total payable with flat interest: principal * (1 + rate).

    Interest is charged once on the principal, independent of the number
    of installments.

    Example:
        1000 at 0.05 -> 1050.00
    """
    principal = to_decimal(loan_amount)
    rate = to_decimal(interest_rate)
    if principal < 0:
        raise InvalidArgumentError("Loan amount cannot be negative")
    if rate < 0:
        raise InvalidArgumentError("Interest rate cannot be negative")

    return round_money(principal * (Decimal("1") + rate))


def calculate_installment_amount(total_amount_to_be_paid: Number, number_of_installment: int) -> Decimal:
    """
    Even share of the total per installment, rounded up to the next cent.

    Rounding up means share * count is never below the total:
        1001 / 3 -> 333.67 (3 x 333.67 = 1001.01)
        1000 / 3 -> 333.34
    """
    if number_of_installment <= 0:
        raise InvalidArgumentError("Number of installments must be greater than zero")

    share = to_decimal(total_amount_to_be_paid) / Decimal(number_of_installment)
    return share.quantize(CENT, rounding=ROUND_UP)


def calculate_amount_owed(loan_amount: Number, number_of_installment: int, interest_rate: Number) -> Decimal:
    """Sum of all installment amounts the schedule will contain"""
    total = calculate_total_amount_to_be_paid(loan_amount, number_of_installment, interest_rate)
    return calculate_installment_amount(total, number_of_installment) * number_of_installment


def create_installment_dates_by_installment_count(
    number_of_installment: int,
    today: date | None = None,
) -> List[date]:
    """
    Monthly due dates: installment k (1-indexed) is due k calendar months after today.

    Each date is derived from today directly, so a loan opened on Jan 31 is
    due Feb 28, Mar 31, Apr 30, ...
    """
    start = resolve_today(today)
    return [add_months(start, k) for k in range(1, number_of_installment + 1)]


def create_loan_installments(
    loan: Loan,
    loan_amount: Number,
    number_of_installment: int,
    installment_dates: Sequence[date],
    interest_rate: Number,
) -> List[LoanInstallment]:
    """
    Build (but do not persist) one unpaid installment per due date.

    Every installment carries the same rounded-up share; the few cents of
    surplus stay spread across the schedule instead of being taken off the
    last installment.
    """
    total = calculate_total_amount_to_be_paid(loan_amount, number_of_installment, interest_rate)
    amount = calculate_installment_amount(total, number_of_installment)

    return [
        LoanInstallment(
            loan_id=loan.id,
            amount=amount,
            due_date=due_date,
            paid_amount=ZERO,
            paid=False,
        )
        for due_date in installment_dates
    ]
