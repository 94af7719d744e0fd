"""Data access layer for ledger entities"""

import logging
import uuid
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from household_ledger.domain.exceptions import NotFoundError, StoreUnavailableError
from household_ledger.domain.filters import filter_criteria, sort_transactions
from household_ledger.domain.models import (
    ALL,
    BillStatus,
    Budget,
    Category,
    CreditCardBill,
    FilterOptions,
    Installment,
    InstallmentStatus,
    Owner,
    PaymentMethod,
    RecurringTemplate,
    Transaction,
    TransactionType,
)
from household_ledger.infrastructure.database.models import (
    BudgetRecord,
    CreditCardBillRecord,
    InstallmentRecord,
    RecurringTemplateRecord,
    TransactionRecord,
)
from household_ledger.infrastructure.observability.metrics import store_failures_counter

logger = logging.getLogger(__name__)


@contextmanager
def store_call(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise any SQLAlchemy failure as StoreUnavailableError"""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        store_failures_counter.labels(operation=operation).inc()
        logger.error("Store call failed", extra={"operation": operation, "error": str(e)})
        raise StoreUnavailableError(f"Store unavailable during {operation}") from e


def parse_id(record_id: str, entity: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(record_id))
    except ValueError as e:
        raise NotFoundError(f"{entity} {record_id} not found") from e


def _optional_id(value: Optional[uuid.UUID]) -> Optional[str]:
    return str(value) if value is not None else None


class _Repository:
    """Shared CRUD plumbing; subclasses provide the model and row coercion"""

    model = None
    entity = "record"

    def __init__(self, db: Session):
        self.db = db

    def _to_domain(self, row):
        raise NotImplementedError

    def _coerce(self, row):
        # Rows are validated on the way out; bad data is a store fault, not a caller fault
        try:
            return self._to_domain(row)
        except (ValueError, TypeError) as e:
            raise StoreUnavailableError(f"Malformed {self.entity} record {row.id}: {e}") from e

    def _row(self, record_id: str):
        with store_call(self.db, f"get_{self.entity}"):
            row = self.db.get(self.model, parse_id(record_id, self.entity))
        if row is None:
            raise NotFoundError(f"{self.entity} {record_id} not found")
        return row

    def get(self, record_id: str):
        return self._coerce(self._row(record_id))

    def insert(self, values: Dict[str, Any]):
        with store_call(self.db, f"insert_{self.entity}"):
            row = self.model(**values)
            self.db.add(row)
            self.db.flush()  # Get ID without committing
        return self._coerce(row)

    def update(self, record_id: str, values: Dict[str, Any]):
        """Apply a partial set of column values to an existing row"""
        row = self._row(record_id)
        with store_call(self.db, f"update_{self.entity}"):
            for name, value in values.items():
                setattr(row, name, value)
            self.db.flush()
        return self._coerce(row)

    def delete(self, record_id: str) -> None:
        row = self._row(record_id)
        with store_call(self.db, f"delete_{self.entity}"):
            self.db.delete(row)
            self.db.flush()

    def _all(self, statement) -> List:
        with store_call(self.db, f"query_{self.entity}"):
            rows = self.db.execute(statement).scalars().all()
        return [self._coerce(row) for row in rows]


class TransactionRepository(_Repository):
    """Ledger store: the only writer of transaction records"""

    model = TransactionRecord
    entity = "transaction"

    def _to_domain(self, row: TransactionRecord) -> Transaction:
        return Transaction(
            id=str(row.id),
            day=row.day,
            month=row.month,
            year=row.year,
            type=TransactionType(row.type),
            description=row.description,
            category=Category(row.category),
            quantity=row.quantity,
            price_per_unit=Decimal(row.price_per_unit),
            owner=Owner(row.owner),
            payment_method=PaymentMethod(row.payment_method) if row.payment_method else None,
            created_at=row.created_at,
        )

    @staticmethod
    def to_values(txn: Transaction) -> Dict[str, Any]:
        """Column values for a validated transaction, total_price recomputed"""
        return {
            "day": txn.day,
            "month": txn.month,
            "year": txn.year,
            "type": txn.type.value,
            "description": txn.description,
            "category": txn.category.value,
            "quantity": txn.quantity,
            "price_per_unit": txn.price_per_unit,
            "total_price": txn.total_price,
            "owner": txn.owner.value,
            "payment_method": txn.payment_method.value if txn.payment_method else None,
        }

    def add(self, txn: Transaction) -> Transaction:
        return self.insert(self.to_values(txn))

    def save(self, record_id: str, txn: Transaction) -> Transaction:
        return self.update(record_id, self.to_values(txn))

    def query(self, filters: FilterOptions) -> List[Transaction]:
        """Every transaction matching the filter, sorted per filters.sort_by"""
        criteria = {
            name: value.value if hasattr(value, "value") else value
            for name, value in filter_criteria(filters).items()
        }
        statement = (
            select(TransactionRecord)
            .filter_by(**criteria)
            .order_by(TransactionRecord.created_at.desc())
        )
        return sort_transactions(self._all(statement), filters.sort_by)


class BudgetRepository(_Repository):
    model = BudgetRecord
    entity = "budget"

    def _to_domain(self, row: BudgetRecord) -> Budget:
        return Budget(
            id=str(row.id),
            owner=Owner(row.owner),
            category=Category(row.category),
            monthly_limit=Decimal(row.monthly_limit),
        )

    def upsert(self, budget: Budget) -> Budget:
        """Insert or replace the limit keyed by (owner, category)"""
        with store_call(self.db, "upsert_budget"):
            row = self.db.execute(
                select(BudgetRecord).filter_by(owner=budget.owner.value, category=budget.category.value)
            ).scalar_one_or_none()
            if row is None:
                row = BudgetRecord(owner=budget.owner.value, category=budget.category.value)
                self.db.add(row)
            row.monthly_limit = budget.monthly_limit
            self.db.flush()
        return self._coerce(row)

    def list(self, owner: str = ALL) -> List[Budget]:
        statement = select(BudgetRecord).order_by(BudgetRecord.owner, BudgetRecord.category)
        if owner != ALL:
            statement = statement.filter_by(owner=Owner(owner).value)
        return self._all(statement)


class InstallmentRepository(_Repository):
    model = InstallmentRecord
    entity = "installment"

    def _to_domain(self, row: InstallmentRecord) -> Installment:
        return Installment(
            id=str(row.id),
            owner=Owner(row.owner),
            title=row.title,
            total_amount=Decimal(row.total_amount),
            monthly_amount=Decimal(row.monthly_amount),
            total_months=row.total_months,
            paid_months=row.paid_months,
            start_month=row.start_month,
            start_year=row.start_year,
            status=InstallmentStatus(row.status),
            note=row.note,
            created_at=row.created_at,
        )

    def add(self, installment: Installment) -> Installment:
        return self.insert(
            {
                "owner": installment.owner.value,
                "title": installment.title,
                "total_amount": installment.total_amount,
                "monthly_amount": installment.monthly_amount,
                "total_months": installment.total_months,
                "paid_months": installment.paid_months,
                "start_month": installment.start_month,
                "start_year": installment.start_year,
                "status": installment.status.value,
                "note": installment.note,
            }
        )

    def list(self, owner: str = ALL, status: Optional[InstallmentStatus] = None) -> List[Installment]:
        statement = select(InstallmentRecord).order_by(InstallmentRecord.created_at.desc())
        if owner != ALL:
            statement = statement.filter_by(owner=Owner(owner).value)
        if status is not None:
            statement = statement.filter_by(status=InstallmentStatus(status).value)
        return self._all(statement)


class CreditBillRepository(_Repository):
    model = CreditCardBillRecord
    entity = "credit_card_bill"

    def _to_domain(self, row: CreditCardBillRecord) -> CreditCardBill:
        return CreditCardBill(
            id=str(row.id),
            owner=Owner(row.owner),
            amount=Decimal(row.amount),
            due_month=row.due_month,
            due_year=row.due_year,
            status=BillStatus(row.status),
            source_transaction_id=_optional_id(row.source_transaction_id),
            note=row.note,
            created_at=row.created_at,
        )

    def add(self, bill: CreditCardBill) -> CreditCardBill:
        source_id = None
        if bill.source_transaction_id:
            source_id = parse_id(bill.source_transaction_id, "transaction")
        return self.insert(
            {
                "owner": bill.owner.value,
                "amount": bill.amount,
                "due_month": bill.due_month,
                "due_year": bill.due_year,
                "status": bill.status.value,
                "source_transaction_id": source_id,
                "note": bill.note,
            }
        )

    def list_pending(self, month: int, year: int, owner: str = ALL) -> List[CreditCardBill]:
        statement = (
            select(CreditCardBillRecord)
            .filter_by(status=BillStatus.PENDING.value, due_month=month, due_year=year)
            .order_by(CreditCardBillRecord.created_at.desc())
        )
        if owner != ALL:
            statement = statement.filter_by(owner=Owner(owner).value)
        return self._all(statement)


class TemplateRepository(_Repository):
    model = RecurringTemplateRecord
    entity = "template"

    def _to_domain(self, row: RecurringTemplateRecord) -> RecurringTemplate:
        return RecurringTemplate(
            id=str(row.id),
            owner=Owner(row.owner),
            name=row.name,
            type=TransactionType(row.type),
            category=Category(row.category),
            description=row.description,
            quantity=row.quantity,
            price_per_unit=Decimal(row.price_per_unit),
            payment_method=PaymentMethod(row.payment_method) if row.payment_method else None,
            created_at=row.created_at,
        )

    def add(self, template: RecurringTemplate) -> RecurringTemplate:
        return self.insert(
            {
                "owner": template.owner.value,
                "name": template.name,
                "type": template.type.value,
                "category": template.category.value,
                "description": template.description,
                "quantity": template.quantity,
                "price_per_unit": template.price_per_unit,
                "payment_method": template.payment_method.value if template.payment_method else None,
            }
        )

    def list(self, owner: str = ALL) -> List[RecurringTemplate]:
        statement = select(RecurringTemplateRecord).order_by(RecurringTemplateRecord.created_at.desc())
        if owner != ALL:
            statement = statement.filter_by(owner=Owner(owner).value)
        return self._all(statement)
