"""Budget endpoints - upsert limits and evaluate them against a month's spend"""

from fastapi import APIRouter, Depends, Query

from household_ledger.api.dependencies import get_engine
from household_ledger.api.v1.schemas import (
    BudgetEvaluationResponse,
    BudgetSchema,
    BudgetStatusSchema,
    BudgetUpsert,
)
from household_ledger.domain.models import ALL
from household_ledger.engine import LedgerEngine

router = APIRouter()


@router.put("/budgets", response_model=BudgetSchema)
def upsert_budget(body: BudgetUpsert, engine: LedgerEngine = Depends(get_engine)):
    """Create or replace the limit for (owner, category); limits must be positive"""
    saved = engine.upsert_budget(body.owner, body.category, body.monthly_limit)
    return BudgetSchema.model_validate(saved)


@router.get("/budgets/evaluation", response_model=BudgetEvaluationResponse)
def evaluate_budgets(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1),
    owner: str = Query(ALL),
    engine: LedgerEngine = Depends(get_engine),
):
    """Consumed percent and near-limit flag (>= 80%) per budget"""
    results = engine.evaluate_budgets(month, year, owner)
    return BudgetEvaluationResponse(
        month=month,
        year=year,
        budgets=[BudgetStatusSchema.model_validate(r) for r in results],
    )
