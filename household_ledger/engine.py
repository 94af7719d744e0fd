"""Ledger engine: domain operations bound to an explicit store session"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from household_ledger.domain import aggregation, budgets, credit_bills, installments, templates
from household_ledger.domain.exceptions import InvalidStateError
from household_ledger.domain.filters import owner_filter
from household_ledger.domain.models import (
    ALL,
    Budget,
    BudgetStatus,
    CreditCardBill,
    DailyEntry,
    FilterOptions,
    Installment,
    InstallmentStatus,
    LedgerSummary,
    ObligationSummary,
    RecurringTemplate,
    Transaction,
)
from household_ledger.domain.obligations import monthly_cash_obligation
from household_ledger.domain.transactions import apply_changes, validate_transaction
from household_ledger.infrastructure.database.repositories import (
    BudgetRepository,
    CreditBillRepository,
    InstallmentRepository,
    TemplateRepository,
    TransactionRepository,
    store_call,
)
from household_ledger.infrastructure.observability.logging import log_mutation
from household_ledger.infrastructure.observability.metrics import invalid_transition_counter, record_mutation


@dataclass
class InstallmentView:
    """Installment with its derived progress fields"""

    installment: Installment
    remaining_months: int
    progress_percent: float


@dataclass
class PendingBills:
    bills: List[CreditCardBill]
    total_due: Decimal


class LedgerEngine:
    """
    Entry point used by the presentation layer.

    Every mutation validates first, then performs one read-modify-write and
    commits; nothing is cached between calls, so derived figures always
    reflect the store at call time.
    """

    def __init__(self, db: Session, request_id: Optional[str] = None):
        self.db = db
        self.request_id = request_id
        self.transactions = TransactionRepository(db)
        self.budgets = BudgetRepository(db)
        self.installments = InstallmentRepository(db)
        self.bills = CreditBillRepository(db)
        self.templates = TemplateRepository(db)

    def _commit(self, entity: str, action: str, entity_id: Optional[str], **fields: Any) -> None:
        with store_call(self.db, f"commit_{entity}"):
            self.db.commit()
        record_mutation(entity, action)
        log_mutation(entity, action, entity_id, self.request_id, **fields)

    # Transactions

    def add_transaction(self, txn: Transaction) -> Transaction:
        saved = self.transactions.add(validate_transaction(txn))
        self._commit("transaction", "create", saved.id, total_price=str(saved.total_price))
        return saved

    def update_transaction(self, txn_id: str, changes: Dict[str, Any]) -> Transaction:
        current = self.transactions.get(txn_id)
        saved = self.transactions.save(txn_id, apply_changes(current, changes))
        self._commit("transaction", "update", saved.id, fields=sorted(changes))
        return saved

    def delete_transaction(self, txn_id: str) -> None:
        self.transactions.delete(txn_id)
        self._commit("transaction", "delete", txn_id)

    def list_transactions(self, filters: FilterOptions) -> List[Transaction]:
        return self.transactions.query(filters)

    # Aggregates

    def summary(self, filters: FilterOptions) -> LedgerSummary:
        return aggregation.summarize(self.transactions.query(filters))

    def daily_series(self, filters: FilterOptions, month: int, year: int) -> List[DailyEntry]:
        scoped = FilterOptions(
            month=month,
            year=year,
            owner=filters.owner,
            type=filters.type,
            category=filters.category,
        )
        return aggregation.daily_series(self.transactions.query(scoped), month, year)

    def obligation(self, month: int, year: int, owner: str = ALL) -> ObligationSummary:
        """Cash obligation for month/year, recomputed from all three sources"""
        owner = owner_filter(owner)
        month_transactions = self.transactions.query(FilterOptions(month=month, year=year, owner=owner))
        return monthly_cash_obligation(
            month_transactions,
            self.installments.list(owner=owner, status=InstallmentStatus.ACTIVE),
            self.bills.list_pending(month, year, owner=owner),
            month,
            year,
            owner,
        )

    # Budgets

    def upsert_budget(self, owner: str, category: str, monthly_limit) -> Budget:
        budget = budgets.build_budget(owner, category, monthly_limit)
        saved = self.budgets.upsert(budget)
        self._commit("budget", "upsert", saved.id, category=saved.category.value)
        return saved

    def evaluate_budgets(self, month: int, year: int, owner: str = ALL) -> List[BudgetStatus]:
        """
        Budgets of the selected owner(s) against that month's spend.

        Each budget is compared with the spend of its own owner, so with
        owner "all" one person's spending never eats into the other's limit.
        """
        owner = owner_filter(owner)
        month_transactions = self.transactions.query(FilterOptions(month=month, year=year, owner=owner))

        results: List[BudgetStatus] = []
        for budget in self.budgets.list(owner=owner):
            own_spend = aggregation.spend_by_category(t for t in month_transactions if t.owner == budget.owner)
            results.extend(budgets.evaluate_budgets([budget], own_spend))
        return results

    # Installments

    def create_installment(self, **fields: Any) -> Installment:
        saved = self.installments.add(installments.new_installment(**fields))
        self._commit("installment", "create", saved.id, status=saved.status.value)
        return saved

    def advance_installment(self, installment_id: str) -> Installment:
        current = self.installments.get(installment_id)
        try:
            advanced = installments.advance(current)
        except InvalidStateError:
            invalid_transition_counter.labels(entity="installment").inc()
            raise
        saved = self.installments.update(
            installment_id,
            {"paid_months": advanced.paid_months, "status": advanced.status.value},
        )
        self._commit("installment", "advance", installment_id, paid_months=saved.paid_months, status=saved.status.value)
        return saved

    def cancel_installment(self, installment_id: str) -> Installment:
        current = self.installments.get(installment_id)
        try:
            canceled = installments.cancel(current)
        except InvalidStateError:
            invalid_transition_counter.labels(entity="installment").inc()
            raise
        saved = self.installments.update(installment_id, {"status": canceled.status.value})
        self._commit("installment", "cancel", installment_id)
        return saved

    def list_installments(self, owner: str = ALL, status: Optional[str] = None) -> List[InstallmentView]:
        items = self.installments.list(owner=owner_filter(owner), status=status)
        return [
            InstallmentView(
                installment=i,
                remaining_months=installments.remaining_months(i),
                progress_percent=installments.progress_percent(i),
            )
            for i in items
        ]

    # Credit card bills

    def record_bill(self, **fields: Any) -> CreditCardBill:
        saved = self.bills.add(credit_bills.new_bill(**fields))
        self._commit("credit_card_bill", "create", saved.id, amount=str(saved.amount))
        return saved

    def mark_bill_paid(self, bill_id: str) -> CreditCardBill:
        current = self.bills.get(bill_id)
        try:
            paid = credit_bills.mark_paid(current)
        except InvalidStateError:
            invalid_transition_counter.labels(entity="credit_card_bill").inc()
            raise
        saved = self.bills.update(bill_id, {"status": paid.status.value})
        self._commit("credit_card_bill", "pay", bill_id)
        return saved

    def pending_bills(self, month: int, year: int, owner: str = ALL) -> PendingBills:
        owner = owner_filter(owner)
        bills = self.bills.list_pending(month, year, owner=owner)
        return PendingBills(bills=bills, total_due=credit_bills.due_pending(bills, month, year, owner))

    # Templates

    def create_template(self, template: RecurringTemplate) -> RecurringTemplate:
        saved = self.templates.add(templates.new_template(template))
        self._commit("template", "create", saved.id, template_name=saved.name)
        return saved

    def list_templates(self, owner: str = ALL) -> List[RecurringTemplate]:
        return self.templates.list(owner=owner_filter(owner))

    def apply_template(self, template_id: str, day: int, month: int, year: int) -> Transaction:
        """Save a new transaction copied from a template for the given date"""
        template = self.templates.get(template_id)
        return self.add_transaction(templates.to_transaction(template, day, month, year))
