"""Selection of the unpaid installments a payment can settle"""

from datetime import date
from decimal import Decimal
from typing import List, Sequence

from credit_gateway.domain.models import LoanInstallment
from credit_gateway.domain.money import ZERO, Number, to_decimal
from credit_gateway.utils.date_utils import add_months, resolve_today

DEFAULT_HORIZON_MONTHS = 3


def check_installment_have_due_date_more_than_given_duration_in_months(
    due_date: date,
    months: int,
    today: date | None = None,
) -> bool:
    """True iff due_date falls strictly after today + months (the boundary itself is not "more than")"""
    return due_date > add_months(resolve_today(today), months)


def find_eligible_installments(
    unpaid_installments: Sequence[LoanInstallment],
    paid_amount: Number,
    today: date | None = None,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> List[LoanInstallment]:
    """
    Pick the installments a payment of paid_amount settles.

    Callers pass unpaid_installments ordered by due date, as
    InstallmentRepository.find_by_loan_id_and_is_paid returns them. An
    installment beyond the horizon ends the scan, so anything listed after
    it is never considered.

    Rules:
    - Installments due beyond the horizon cannot be paid early. The scan of
      the loaded installments ends at the first one due beyond the horizon.
    - Remaining installments are settled earliest due date first.
    - Settlement stops at the first installment that would push the running
      total above paid_amount; an exact match is still settled.

    Returns a (possibly empty) list in due-date order.
    """
    today = resolve_today(today)
    budget = to_decimal(paid_amount)

    within_horizon = []
    for installment in unpaid_installments:
        if check_installment_have_due_date_more_than_given_duration_in_months(
            installment.due_date, horizon_months, today
        ):
            break
        within_horizon.append(installment)

    eligible: List[LoanInstallment] = []
    cumulative: Decimal = ZERO
    for installment in sorted(within_horizon, key=lambda i: i.due_date):
        cumulative += installment.amount
        if cumulative > budget:
            break
        eligible.append(installment)

    return eligible
