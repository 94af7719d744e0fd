"""Installment endpoints - create, list with progress, advance and cancel"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from household_ledger.api.dependencies import get_engine
from household_ledger.api.v1.schemas import (
    InstallmentCreate,
    InstallmentList,
    InstallmentSchema,
    InstallmentViewSchema,
)
from household_ledger.domain.models import ALL, InstallmentStatus
from household_ledger.engine import LedgerEngine

router = APIRouter()


@router.post("/installments", response_model=InstallmentSchema, status_code=status.HTTP_201_CREATED)
def create_installment(body: InstallmentCreate, engine: LedgerEngine = Depends(get_engine)):
    saved = engine.create_installment(**body.model_dump())
    return InstallmentSchema.model_validate(saved)


@router.get("/installments", response_model=InstallmentList)
def list_installments(
    owner: str = Query(ALL),
    status_filter: Optional[InstallmentStatus] = Query(None, alias="status"),
    engine: LedgerEngine = Depends(get_engine),
):
    """Plans with remaining months and progress percent, newest first"""
    views = engine.list_installments(owner=owner, status=status_filter)
    return InstallmentList(installments=[InstallmentViewSchema.model_validate(v) for v in views])


@router.post("/installments/{installment_id}/advance", response_model=InstallmentSchema)
def advance_installment(installment_id: str, engine: LedgerEngine = Depends(get_engine)):
    """Mark one more month paid; 409 once the plan is completed or canceled"""
    return InstallmentSchema.model_validate(engine.advance_installment(installment_id))


@router.post("/installments/{installment_id}/cancel", response_model=InstallmentSchema)
def cancel_installment(installment_id: str, engine: LedgerEngine = Depends(get_engine)):
    return InstallmentSchema.model_validate(engine.cancel_installment(installment_id))
