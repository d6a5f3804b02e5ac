"""Data access layer for customers, loans and installments"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from credit_gateway.infrastructure.database.models import CustomerModel, LoanModel, LoanInstallmentModel
from credit_gateway.domain.exceptions import ResourceNotFoundError
from credit_gateway.domain.models import Customer, Loan, LoanInstallment, Page
from credit_gateway.domain.money import round_money


def to_customer(row: CustomerModel) -> Customer:
    return Customer(
        id=row.id,
        name=row.name,
        surname=row.surname,
        credit_limit=round_money(row.credit_limit),
        used_credit_limit=round_money(row.used_credit_limit),
    )


def to_loan(row: LoanModel) -> Loan:
    return Loan(
        id=row.id,
        customer_id=row.customer_id,
        loan_amount=round_money(row.loan_amount),
        interest_rate=Decimal(str(row.interest_rate)),
        number_of_installment=row.number_of_installment,
        paid=row.is_paid,
        create_date=row.create_date,
    )


def to_installment(row: LoanInstallmentModel) -> LoanInstallment:
    return LoanInstallment(
        id=row.id,
        loan_id=row.loan_id,
        amount=round_money(row.amount),
        paid_amount=round_money(row.paid_amount),
        due_date=row.due_date,
        paid=row.is_paid,
        payment_date=row.payment_date,
    )


class CustomerRepository:
    """Repository for customers and their credit limit usage"""

    def __init__(self, db: Session):
        self.db = db

    def create_customer(self, name: str, surname: str, credit_limit: Decimal) -> Customer:
        db_customer = CustomerModel(
            name=name,
            surname=surname,
            credit_limit=round_money(credit_limit),
            used_credit_limit=Decimal("0.00"),
        )
        self.db.add(db_customer)
        self.db.flush()  # Get ID without committing
        return to_customer(db_customer)

    def _get_row(self, customer_id: int) -> CustomerModel:
        row = self.db.get(CustomerModel, customer_id)
        if row is None:
            raise ResourceNotFoundError(f"Customer could not found for given id: {customer_id}")
        return row

    def get_customer_by_id(self, customer_id: int) -> Customer:
        return to_customer(self._get_row(customer_id))

    def increase_used_credit_limit(self, customer_id: int, amount: Decimal) -> None:
        row = self._get_row(customer_id)
        row.used_credit_limit = round_money(row.used_credit_limit + amount)
        self.db.flush()

    def decrease_used_credit_limit(self, customer_id: int, amount: Decimal) -> None:
        row = self._get_row(customer_id)
        row.used_credit_limit = round_money(row.used_credit_limit - amount)
        self.db.flush()


class LoanRepository:
    """Repository for loans"""

    def __init__(self, db: Session):
        self.db = db

    def create_loan(
        self,
        customer_id: int,
        loan_amount: Decimal,
        interest_rate: Decimal,
        number_of_installment: int,
    ) -> Loan:
        """Persist loan header; installments are added separately"""
        db_loan = LoanModel(
            customer_id=customer_id,
            loan_amount=round_money(loan_amount),
            interest_rate=interest_rate,
            number_of_installment=number_of_installment,
            is_paid=False,
        )
        self.db.add(db_loan)
        self.db.flush()
        self.db.refresh(db_loan)  # Load server-side create_date
        return to_loan(db_loan)

    def get_loan_by_id(self, loan_id: int) -> Loan:
        row = self.db.get(LoanModel, loan_id)
        if row is None:
            raise ResourceNotFoundError(f"Loan could not found for given id: {loan_id}")
        return to_loan(row)

    def list_loans_by_customer(
        self,
        customer_id: int,
        is_paid: Optional[bool] = None,
        page: int = 0,
        size: int = 10,
    ) -> Page[Loan]:
        """Fetch one page of a customer's loans, newest first"""
        query = self.db.query(LoanModel).filter(LoanModel.customer_id == customer_id)
        if is_paid is not None:
            query = query.filter(LoanModel.is_paid == is_paid)

        total = query.count()
        rows = (
            query.order_by(LoanModel.create_date.desc(), LoanModel.id.desc())
            .offset(page * size)
            .limit(size)
            .all()
        )
        return Page(items=[to_loan(r) for r in rows], page=page, size=size, total_items=total)

    def update_loan_is_paid_status(self, loan_id: int, is_paid: bool) -> None:
        row = self.db.get(LoanModel, loan_id)
        if row is None:
            raise ResourceNotFoundError(f"Loan could not found for given id: {loan_id}")
        row.is_paid = is_paid
        self.db.flush()


class InstallmentRepository:
    """Repository for loan installments"""

    def __init__(self, db: Session):
        self.db = db

    def add_installments(self, installments: Sequence[LoanInstallment]) -> List[LoanInstallment]:
        """Persist a freshly generated schedule"""
        rows = [
            LoanInstallmentModel(
                loan_id=inst.loan_id,
                amount=inst.amount,
                paid_amount=inst.paid_amount,
                due_date=inst.due_date,
                is_paid=inst.paid,
            )
            for inst in installments
        ]
        self.db.add_all(rows)
        self.db.flush()
        return [to_installment(r) for r in rows]

    def get_installment_by_id(self, installment_id: int) -> LoanInstallment:
        row = self.db.get(LoanInstallmentModel, installment_id)
        if row is None:
            raise ResourceNotFoundError(f"Loan installment could not found for given id: {installment_id}")
        return to_installment(row)

    def find_by_loan_id_and_is_paid(self, loan_id: int, is_paid: bool) -> List[LoanInstallment]:
        """Installments of a loan by paid state, earliest due first"""
        rows = (
            self.db.query(LoanInstallmentModel)
            .filter(LoanInstallmentModel.loan_id == loan_id, LoanInstallmentModel.is_paid == is_paid)
            .order_by(LoanInstallmentModel.due_date.asc(), LoanInstallmentModel.id.asc())
            .all()
        )
        return [to_installment(r) for r in rows]

    def get_paginated_by_loan_id(self, loan_id: int, page: int = 0, size: int = 10) -> Page[LoanInstallment]:
        query = self.db.query(LoanInstallmentModel).filter(LoanInstallmentModel.loan_id == loan_id)
        total = query.count()
        rows = (
            query.order_by(LoanInstallmentModel.due_date.asc(), LoanInstallmentModel.id.asc())
            .offset(page * size)
            .limit(size)
            .all()
        )
        return Page(items=[to_installment(r) for r in rows], page=page, size=size, total_items=total)

    def pay_multiple_installments(self, installment_ids: Sequence[int], payment_date: date | None = None) -> None:
        """Settle each installment in full; an empty list touches nothing"""
        if not installment_ids:
            return

        payment_date = payment_date or date.today()
        for installment_id in installment_ids:
            row = self.db.get(LoanInstallmentModel, installment_id)
            if row is None:
                raise ResourceNotFoundError(f"Loan installment could not found for given id: {installment_id}")
            row.is_paid = True
            row.paid_amount = row.amount
            row.payment_date = payment_date

        self.db.flush()
