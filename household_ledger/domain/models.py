"""Domain models - pure Python dataclasses representing household ledger entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Category(str, Enum):
    """Transaction categories; income and expense sets are disjoint"""

    # Expense
    FOOD = "food"
    HOUSEHOLD = "household"
    CHILD = "child"
    HOME = "home"
    CAR = "car"
    INVESTMENT = "investment"
    LUXURY = "luxury"
    # Income
    SALARY = "salary"
    INTEREST = "interest"
    CARD_CASH_ADVANCE = "card_cash_advance"
    BORROWED = "borrowed"
    OTHER_INCOME = "other_income"


EXPENSE_CATEGORIES: List[Category] = [
    Category.FOOD,
    Category.HOUSEHOLD,
    Category.CHILD,
    Category.HOME,
    Category.CAR,
    Category.INVESTMENT,
    Category.LUXURY,
]

INCOME_CATEGORIES: List[Category] = [
    Category.SALARY,
    Category.INTEREST,
    Category.CARD_CASH_ADVANCE,
    Category.BORROWED,
    Category.OTHER_INCOME,
]


def categories_for(type_: TransactionType) -> List[Category]:
    """Categories allowed for a transaction type; the first one is the form default"""
    return INCOME_CATEGORIES if type_ == TransactionType.INCOME else EXPENSE_CATEGORIES


def default_category(type_: TransactionType) -> Category:
    return categories_for(type_)[0]


class Owner(str, Enum):
    PURI = "puri"
    PHURITA = "phurita"


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    CREDIT_CARD = "credit_card"


class InstallmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELED = "canceled"


class BillStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELED = "canceled"


class SortOrder(str, Enum):
    DATE_DESC = "date_desc"
    PRICE_DESC = "price_desc"


ALL = "all"


@dataclass
class Transaction:
    """Single money movement; total_price is always derived from its factors"""

    day: int
    month: int
    year: int
    type: TransactionType
    description: str
    category: Category
    quantity: int
    price_per_unit: Decimal
    owner: Owner
    payment_method: Optional[PaymentMethod] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.price_per_unit


@dataclass
class Budget:
    """Monthly spending cap, unique per (owner, category)"""

    owner: Owner
    category: Category
    monthly_limit: Decimal
    id: Optional[str] = None


@dataclass
class BudgetStatus:
    """Budget evaluated against one month of spend"""

    owner: Owner
    category: Category
    monthly_limit: Decimal
    spent: Decimal
    percent: float
    near_limit: bool


@dataclass
class Installment:
    """Multi-month payment plan"""

    owner: Owner
    title: str
    total_amount: Decimal
    monthly_amount: Decimal
    total_months: int
    paid_months: int
    start_month: int
    start_year: int
    status: InstallmentStatus = InstallmentStatus.ACTIVE
    note: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class CreditCardBill:
    """Amount owed on a card, due in a (due_month, due_year) bucket"""

    owner: Owner
    amount: Decimal
    due_month: int
    due_year: int
    status: BillStatus = BillStatus.PENDING
    source_transaction_id: Optional[str] = None
    note: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class RecurringTemplate:
    """Named snapshot of transaction fields used to prefill new entries"""

    owner: Owner
    name: str
    type: TransactionType
    category: Category
    description: str
    quantity: int
    price_per_unit: Decimal
    payment_method: Optional[PaymentMethod] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class FilterOptions:
    """Transaction selection; None or "all" never excludes on that dimension"""

    month: Optional[int] = None
    year: Optional[int] = None
    owner: str = ALL
    type: str = ALL
    category: str = ALL
    sort_by: SortOrder = SortOrder.DATE_DESC


@dataclass
class Totals:
    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass
class CategoryTotal:
    category: Category
    total: Decimal


@dataclass
class CategoryShare:
    category: Category
    total: Decimal
    share: float


@dataclass
class DailyEntry:
    day: int
    income: Decimal
    expense: Decimal


@dataclass
class ObligationSummary:
    """Cash the household must produce for one month"""

    month: int
    year: int
    owner: str
    cash_expense: Decimal
    installment_due: Decimal
    card_bills_due: Decimal

    @property
    def total(self) -> Decimal:
        return self.cash_expense + self.installment_due + self.card_bills_due


@dataclass
class LedgerSummary:
    """Dashboard view-model for a filtered month"""

    totals: Totals
    top_categories: List[CategoryTotal] = field(default_factory=list)
    category_shares: List[CategoryShare] = field(default_factory=list)
    cash_expense: Decimal = Decimal("0")
    real_expense: Decimal = Decimal("0")
