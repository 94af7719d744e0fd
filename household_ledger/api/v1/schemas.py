"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from household_ledger.domain.models import (
    BillStatus,
    Category,
    InstallmentStatus,
    Owner,
    PaymentMethod,
    TransactionType,
)


class DomainModel(BaseModel):
    """Response base that reads attributes off domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


# Transactions


class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions"""

    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1)
    type: TransactionType
    description: str = Field(..., min_length=1)
    category: Category
    quantity: int = Field(1, gt=0)
    price_per_unit: Decimal = Field(..., ge=0)
    owner: Owner
    payment_method: Optional[PaymentMethod] = None


class TransactionUpdate(BaseModel):
    """Request body for PATCH /v1/transactions/{id}; only sent fields change"""

    day: Optional[int] = Field(None, ge=1, le=31)
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1)
    type: Optional[TransactionType] = None
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[Category] = None
    quantity: Optional[int] = Field(None, gt=0)
    price_per_unit: Optional[Decimal] = Field(None, ge=0)
    owner: Optional[Owner] = None
    payment_method: Optional[PaymentMethod] = None


class TransactionSchema(DomainModel):
    id: str
    day: int
    month: int
    year: int
    type: TransactionType
    description: str
    category: Category
    quantity: int
    price_per_unit: Decimal
    total_price: Decimal
    owner: Owner
    payment_method: Optional[PaymentMethod] = None
    created_at: Optional[datetime] = None


class TransactionList(BaseModel):
    transactions: List[TransactionSchema]
    count: int


# Dashboard


class TotalsSchema(DomainModel):
    income: Decimal
    expense: Decimal
    net: Decimal


class CategoryTotalSchema(DomainModel):
    category: Category
    total: Decimal


class CategoryShareSchema(DomainModel):
    category: Category
    total: Decimal
    share: float


class SummaryResponse(DomainModel):
    """Response for GET /v1/dashboard/summary"""

    totals: TotalsSchema
    top_categories: List[CategoryTotalSchema]
    category_shares: List[CategoryShareSchema]
    cash_expense: Decimal
    real_expense: Decimal


class DailyEntrySchema(DomainModel):
    day: int
    income: Decimal
    expense: Decimal


class DailySeriesResponse(BaseModel):
    month: int
    year: int
    days: List[DailyEntrySchema]


class ObligationResponse(DomainModel):
    """Response for GET /v1/dashboard/obligation"""

    month: int
    year: int
    owner: str
    cash_expense: Decimal
    installment_due: Decimal
    card_bills_due: Decimal
    total: Decimal


class InsightResponse(BaseModel):
    month: int
    year: int
    summary: str


# Budgets


class BudgetUpsert(BaseModel):
    """Request body for PUT /v1/budgets"""

    owner: Owner
    category: Category
    monthly_limit: Decimal


class BudgetSchema(DomainModel):
    id: str
    owner: Owner
    category: Category
    monthly_limit: Decimal


class BudgetStatusSchema(DomainModel):
    owner: Owner
    category: Category
    monthly_limit: Decimal
    spent: Decimal
    percent: float
    near_limit: bool


class BudgetEvaluationResponse(BaseModel):
    month: int
    year: int
    budgets: List[BudgetStatusSchema]


# Installments


class InstallmentCreate(BaseModel):
    """Request body for POST /v1/installments"""

    owner: Owner
    title: str = Field(..., min_length=1)
    total_amount: Decimal = Field(Decimal("0"), ge=0)
    monthly_amount: Decimal = Field(Decimal("0"), ge=0)
    total_months: int = Field(12, gt=0)
    paid_months: int = 0
    start_month: int
    start_year: int
    note: Optional[str] = None


class InstallmentSchema(DomainModel):
    id: str
    owner: Owner
    title: str
    total_amount: Decimal
    monthly_amount: Decimal
    total_months: int
    paid_months: int
    start_month: int
    start_year: int
    status: InstallmentStatus
    note: Optional[str] = None


class InstallmentViewSchema(DomainModel):
    installment: InstallmentSchema
    remaining_months: int
    progress_percent: float


class InstallmentList(BaseModel):
    installments: List[InstallmentViewSchema]


# Credit card bills


class BillCreate(BaseModel):
    """Request body for POST /v1/bills"""

    owner: Owner
    amount: Decimal = Field(..., ge=0)
    due_month: int = Field(..., ge=1, le=12)
    due_year: int
    source_transaction_id: Optional[str] = None
    note: Optional[str] = None


class BillSchema(DomainModel):
    id: str
    owner: Owner
    amount: Decimal
    due_month: int
    due_year: int
    status: BillStatus
    source_transaction_id: Optional[str] = None
    note: Optional[str] = None


class PendingBillsResponse(DomainModel):
    """Response for GET /v1/bills/pending"""

    bills: List[BillSchema]
    total_due: Decimal


# Templates


class TemplateCreate(BaseModel):
    """Request body for POST /v1/templates"""

    owner: Owner
    name: str = Field(..., min_length=1)
    type: TransactionType
    category: Category
    description: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0)
    price_per_unit: Decimal = Field(..., ge=0)
    payment_method: Optional[PaymentMethod] = None


class TemplateSchema(DomainModel):
    id: str
    owner: Owner
    name: str
    type: TransactionType
    category: Category
    description: str
    quantity: int
    price_per_unit: Decimal
    payment_method: Optional[PaymentMethod] = None


class TemplateList(BaseModel):
    templates: List[TemplateSchema]


class TemplateApply(BaseModel):
    """Request body for POST /v1/templates/{id}/apply"""

    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1)


class ErrorResponse(BaseModel):
    category: str
    detail: str
