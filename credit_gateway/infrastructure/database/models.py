"""SQLAlchemy ORM models for customers, loans and installments"""

from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime, Date, ForeignKey
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# Money columns: exact decimals, two fractional digits
MONEY = Numeric(12, 2, asdecimal=True)


class CustomerModel(Base):
    """Borrower and credit limit usage"""

    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    credit_limit = Column(MONEY, nullable=False)
    used_credit_limit = Column(MONEY, nullable=False, default=0)

    loans = relationship("LoanModel", back_populates="customer")


class LoanModel(Base):
    """Loan header"""

    __tablename__ = "loan"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    loan_amount = Column(MONEY, nullable=False)
    interest_rate = Column(Numeric(5, 4, asdecimal=True), nullable=False)
    number_of_installment = Column(Integer, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    create_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    customer = relationship("CustomerModel", back_populates="loans")
    installments = relationship("LoanInstallmentModel", back_populates="loan", cascade="all, delete-orphan")


class LoanInstallmentModel(Base):
    """Single monthly installment of a loan"""

    __tablename__ = "loan_installment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("loan.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    paid_amount = Column(MONEY, nullable=False, default=0)
    due_date = Column(Date, nullable=False)
    payment_date = Column(Date, nullable=True)
    is_paid = Column(Boolean, nullable=False, default=False)

    loan = relationship("LoanModel", back_populates="installments")
