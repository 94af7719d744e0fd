"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from household_ledger.api.dependencies import get_summary_client
from household_ledger.api.main import create_app
from household_ledger.config import Settings
from household_ledger.domain.models import (
    Category,
    Owner,
    PaymentMethod,
    Transaction,
    TransactionType,
)
from household_ledger.engine import LedgerEngine
from household_ledger.infrastructure.database.models import Base
from household_ledger.infrastructure.database.session import create_session_factory, get_db


# Test database
TEST_DATABASE_URL = "sqlite://"
TestingSessionLocal = create_session_factory(TEST_DATABASE_URL)
test_engine = TestingSessionLocal.kw["bind"]


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=test_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def ledger(db: Session) -> LedgerEngine:
    """Ledger engine bound to the test session"""
    return LedgerEngine(db, request_id="test")


class FakeSummaryClient:
    """Records what it was asked and answers with fixed text"""

    def __init__(self, reply: str = "Spent mostly on food."):
        self.reply = reply
        self.calls = []

    async def summarize(self, transactions, month, year):
        self.calls.append((list(transactions), month, year))
        return self.reply


@pytest.fixture
def summary_client() -> FakeSummaryClient:
    return FakeSummaryClient()


@pytest.fixture
def client(db: Session, summary_client: FakeSummaryClient) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app(Settings(database_url=TEST_DATABASE_URL, log_level="WARNING"))

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_summary_client] = lambda: summary_client
    return TestClient(app)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for valid transactions; keyword overrides replace defaults"""
    base_time = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(**overrides) -> Transaction:
        counter["n"] += 1
        fields = dict(
            id=f"txn_{counter['n']}",
            day=1,
            month=3,
            year=2025,
            type=TransactionType.EXPENSE,
            description="Groceries",
            category=Category.FOOD,
            quantity=1,
            price_per_unit=Decimal("100"),
            owner=Owner.PURI,
            payment_method=PaymentMethod.CASH,
            created_at=base_time + timedelta(minutes=counter["n"]),
        )
        fields.update(overrides)
        if fields["type"] == TransactionType.INCOME and "payment_method" not in overrides:
            fields["payment_method"] = None
        if fields["type"] == TransactionType.INCOME and "category" not in overrides:
            fields["category"] = Category.SALARY
        return Transaction(**fields)

    return _make
