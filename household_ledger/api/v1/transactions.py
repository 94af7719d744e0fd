"""Transaction endpoints - ledger store entry, edit, delete and filtered listing"""

from fastapi import APIRouter, Depends, status

from household_ledger.api.dependencies import get_engine, get_filters
from household_ledger.api.v1.schemas import (
    TransactionCreate,
    TransactionList,
    TransactionSchema,
    TransactionUpdate,
)
from household_ledger.domain.models import FilterOptions, Transaction
from household_ledger.engine import LedgerEngine

router = APIRouter()


@router.post("/transactions", response_model=TransactionSchema, status_code=status.HTTP_201_CREATED)
def create_transaction(body: TransactionCreate, engine: LedgerEngine = Depends(get_engine)):
    """
    Record an income or expense.

    total_price is computed from quantity and price_per_unit; expenses
    need a payment method, income never keeps one.
    """
    saved = engine.add_transaction(Transaction(**body.model_dump()))
    return TransactionSchema.model_validate(saved)


@router.get("/transactions", response_model=TransactionList)
def list_transactions(
    filters: FilterOptions = Depends(get_filters),
    engine: LedgerEngine = Depends(get_engine),
):
    """Every transaction matching the filters; no pagination"""
    items = engine.list_transactions(filters)
    return TransactionList(
        transactions=[TransactionSchema.model_validate(t) for t in items],
        count=len(items),
    )


@router.patch("/transactions/{transaction_id}", response_model=TransactionSchema)
def update_transaction(
    transaction_id: str,
    body: TransactionUpdate,
    engine: LedgerEngine = Depends(get_engine),
):
    saved = engine.update_transaction(transaction_id, body.model_dump(exclude_unset=True))
    return TransactionSchema.model_validate(saved)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: str, engine: LedgerEngine = Depends(get_engine)):
    engine.delete_transaction(transaction_id)
