"""Payment allocation - settles a payment across a loan's unpaid installments"""

from datetime import date

from credit_gateway.domain.eligibility import DEFAULT_HORIZON_MONTHS, find_eligible_installments
from credit_gateway.domain.exceptions import CreditError, InvalidArgumentError, ResourceNotFoundError
from credit_gateway.domain.models import PayLoanResult
from credit_gateway.domain.money import Number, sum_money, to_decimal
from credit_gateway.utils.date_utils import resolve_today


def check_payment_amount_more_than_installment_amount(installment_amount: Number, paid_amount: Number) -> None:
    """Reject negative payments and payments that do not cover the installment (equality passes)"""
    if to_decimal(paid_amount) < 0:
        raise InvalidArgumentError("Payment amount cannot be negative")
    if to_decimal(paid_amount) < to_decimal(installment_amount):
        raise CreditError(f"Installment amount exceeds paid amount: {installment_amount}")


class LoanPaymentService:
    """Orchestrates a loan payment over the installment, loan and customer stores"""

    def __init__(self, loan_repo, installment_repo, customer_repo, horizon_months: int = DEFAULT_HORIZON_MONTHS):
        self.loan_repo = loan_repo
        self.installment_repo = installment_repo
        self.customer_repo = customer_repo
        self.horizon_months = horizon_months

    def pay_loan(self, loan_id: int, paid_amount: Number, today: date | None = None) -> PayLoanResult:
        """
        Apply paid_amount to the loan's unpaid installments.

        Flow:
        1. Load unpaid installments (not found if none)
        2. Select eligible installments (business error if none)
        3. Check the first eligible installment is covered
        4. Settle eligible installments
        5. Release the settled amount from the customer's used credit limit
        6. Mark the loan paid when nothing is left unpaid

        Nothing is written unless steps 1-3 pass. Steps 4-6 must run inside
        the caller's transaction.
        """
        today = resolve_today(today)

        unpaid_installments = self.installment_repo.find_by_loan_id_and_is_paid(loan_id, False)
        if not unpaid_installments:
            raise ResourceNotFoundError(f"Unpaid installment could not found for given loan id: {loan_id}")

        eligible = find_eligible_installments(
            unpaid_installments, paid_amount, today=today, horizon_months=self.horizon_months
        )
        if not eligible:
            raise CreditError(f"No installments are eligible for payment for loanId: {loan_id}")

        check_payment_amount_more_than_installment_amount(eligible[0].amount, paid_amount)

        loan = self.loan_repo.get_loan_by_id(loan_id)

        self.installment_repo.pay_multiple_installments(
            [installment.id for installment in eligible], payment_date=today
        )

        total_amount_spent = sum_money(installment.amount for installment in eligible)
        self.customer_repo.decrease_used_credit_limit(loan.customer_id, total_amount_spent)

        loan_paid_completely = len(eligible) == len(unpaid_installments)
        if loan_paid_completely:
            self.loan_repo.update_loan_is_paid_status(loan_id, True)

        return PayLoanResult(
            loan_id=loan_id,
            paid_installment_count=len(eligible),
            total_amount_spent=total_amount_spent,
            loan_paid_completely=loan_paid_completely,
        )
