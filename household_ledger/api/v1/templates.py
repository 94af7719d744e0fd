"""Recurring template endpoints"""

from fastapi import APIRouter, Depends, Query, status

from household_ledger.api.dependencies import get_engine
from household_ledger.api.v1.schemas import (
    TemplateApply,
    TemplateCreate,
    TemplateList,
    TemplateSchema,
    TransactionSchema,
)
from household_ledger.domain.models import ALL, RecurringTemplate
from household_ledger.engine import LedgerEngine

router = APIRouter()


@router.post("/templates", response_model=TemplateSchema, status_code=status.HTTP_201_CREATED)
def create_template(body: TemplateCreate, engine: LedgerEngine = Depends(get_engine)):
    saved = engine.create_template(RecurringTemplate(**body.model_dump()))
    return TemplateSchema.model_validate(saved)


@router.get("/templates", response_model=TemplateList)
def list_templates(owner: str = Query(ALL), engine: LedgerEngine = Depends(get_engine)):
    return TemplateList(templates=[TemplateSchema.model_validate(t) for t in engine.list_templates(owner)])


@router.post(
    "/templates/{template_id}/apply",
    response_model=TransactionSchema,
    status_code=status.HTTP_201_CREATED,
)
def apply_template(template_id: str, body: TemplateApply, engine: LedgerEngine = Depends(get_engine)):
    """Create a transaction for the given date from the template's fields"""
    saved = engine.apply_template(template_id, body.day, body.month, body.year)
    return TransactionSchema.model_validate(saved)
