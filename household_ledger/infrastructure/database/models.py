"""SQLAlchemy ORM models for the ledger tables"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Numeric, DateTime, Text, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()

MONEY = Numeric(12, 2)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionRecord(Base):
    """Income or expense entry; total_price is stored redundantly for reporting"""

    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    day = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    type = Column(String(16), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(32), nullable=False)
    quantity = Column(Integer, nullable=False)
    price_per_unit = Column(MONEY, nullable=False)
    total_price = Column(MONEY, nullable=False)
    owner = Column(String(32), nullable=False, index=True)
    payment_method = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (Index("ix_transactions_period", "year", "month"),)


class BudgetRecord(Base):
    """Monthly limit per owner and category"""

    __tablename__ = "budgets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner = Column(String(32), nullable=False)
    category = Column(String(32), nullable=False)
    monthly_limit = Column(MONEY, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (UniqueConstraint("owner", "category", name="uq_budget_owner_category"),)


class InstallmentRecord(Base):
    """Multi-month payment plan"""

    __tablename__ = "installments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner = Column(String(32), nullable=False, index=True)
    title = Column(Text, nullable=False)
    total_amount = Column(MONEY, nullable=False)
    monthly_amount = Column(MONEY, nullable=False)
    total_months = Column(Integer, nullable=False)
    paid_months = Column(Integer, nullable=False, default=0)
    start_month = Column(Integer, nullable=False)
    start_year = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default="active")
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class CreditCardBillRecord(Base):
    """Card bill due in a given month"""

    __tablename__ = "credit_card_bills"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner = Column(String(32), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    due_month = Column(Integer, nullable=False)
    due_year = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default="pending")
    source_transaction_id = Column(Uuid, nullable=True)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (Index("ix_credit_card_bills_due", "status", "due_year", "due_month"),)


class RecurringTemplateRecord(Base):
    """Saved preset for quick entry"""

    __tablename__ = "recurring_templates"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner = Column(String(32), nullable=False)
    name = Column(Text, nullable=False)
    type = Column(String(16), nullable=False)
    category = Column(String(32), nullable=False)
    description = Column(Text, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price_per_unit = Column(MONEY, nullable=False)
    payment_method = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
