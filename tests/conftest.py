"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_gateway.api.main import create_app
from credit_gateway.infrastructure.database.models import Base
from credit_gateway.infrastructure.database.session import get_db
from credit_gateway.domain.models import LoanInstallment
from credit_gateway.utils.date_utils import add_months


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def today() -> date:
    """Fixed business date so schedules are deterministic"""
    return date(2026, 1, 15)


@pytest.fixture
def make_installment(today: date):
    """Factory for unpaid installments due a number of months after today"""

    def _make(installment_id: int, amount, months_ahead: int, loan_id: int = 1) -> LoanInstallment:
        return LoanInstallment(
            id=installment_id,
            loan_id=loan_id,
            amount=Decimal(str(amount)),
            due_date=add_months(today, months_ahead),
        )

    return _make
