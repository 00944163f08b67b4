"""Pytest fixtures for testing"""

import os

# Point settings at SQLite before the application modules read them
TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["STORE_BACKEND"] = "database"

import pytest
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from underwriting_gateway.api.main import create_app
from underwriting_gateway.infrastructure.database.models import Base
from underwriting_gateway.infrastructure.database.session import get_db
from underwriting_gateway.domain.models import LoanApplication, Occupancy


# Test database
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
def app(db: Session):
    """FastAPI app wired to the test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)


@pytest.fixture
def application_payload() -> dict:
    """Request body of a clean primary-residence application"""
    return {
        "name": "Jane Borrower",
        "monthly_income": 6000,
        "monthly_debts": 1200,
        "loan_amount": 200000,
        "property_value": 250000,
        "credit_score": 750,
        "occupancy": "primary",
    }


@pytest.fixture
def make_application() -> Callable[..., LoanApplication]:
    """Factory for validated applications; keyword overrides replace defaults"""

    def _make(**overrides) -> LoanApplication:
        fields = {
            "name": "Jane Borrower",
            "monthly_income": Decimal("6000"),
            "monthly_debts": Decimal("1200"),
            "loan_amount": Decimal("200000"),
            "property_value": Decimal("250000"),
            "credit_score": 750,
            "occupancy": Occupancy.PRIMARY,
        }
        fields.update(overrides)
        return LoanApplication(**fields)

    return _make
