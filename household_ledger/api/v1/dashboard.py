"""Dashboard endpoints - aggregates, daily series, obligation rollup and insight"""

from typing import List

from fastapi import APIRouter, Depends, Query

from household_ledger.api.dependencies import get_engine, get_filters, get_summary_client
from household_ledger.api.v1.schemas import (
    DailyEntrySchema,
    DailySeriesResponse,
    InsightResponse,
    ObligationResponse,
    SummaryResponse,
)
from household_ledger.domain.models import ALL, FilterOptions, Transaction, TransactionType
from household_ledger.engine import LedgerEngine
from household_ledger.infrastructure.clients.summary import SummaryClient

router = APIRouter()


@router.get("/dashboard/summary", response_model=SummaryResponse)
def get_summary(
    filters: FilterOptions = Depends(get_filters),
    engine: LedgerEngine = Depends(get_engine),
):
    """Totals, net, top-3 categories, category shares, and real vs cash-only expense"""
    return SummaryResponse.model_validate(engine.summary(filters))


@router.get("/dashboard/daily", response_model=DailySeriesResponse)
def get_daily_series(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1),
    owner: str = Query(ALL),
    engine: LedgerEngine = Depends(get_engine),
):
    """One entry per calendar day of month/year, zero-filled"""
    days = engine.daily_series(FilterOptions(owner=owner), month, year)
    return DailySeriesResponse(
        month=month,
        year=year,
        days=[DailyEntrySchema.model_validate(d) for d in days],
    )


@router.get("/dashboard/obligation", response_model=ObligationResponse)
def get_obligation(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1),
    owner: str = Query(ALL),
    engine: LedgerEngine = Depends(get_engine),
):
    """
    Cash the household must produce this month.

    cash-only expense + active installment dues + pending card bills due
    in month/year, recomputed on every request.
    """
    return ObligationResponse.model_validate(engine.obligation(month, year, owner))


def month_expenses(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1),
    owner: str = Query(ALL),
    engine: LedgerEngine = Depends(get_engine),
) -> List[Transaction]:
    """Month expenses for the insight call; sync so the store read stays off the event loop"""
    return engine.list_transactions(
        FilterOptions(month=month, year=year, owner=owner, type=TransactionType.EXPENSE.value)
    )


@router.post("/dashboard/insight", response_model=InsightResponse)
async def create_insight(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1),
    expenses: List[Transaction] = Depends(month_expenses),
    summary_client: SummaryClient = Depends(get_summary_client),
):
    """Hand the month's expense lines to the text-summary service and relay its reply"""
    text = await summary_client.summarize(expenses, month, year)
    return InsightResponse(month=month, year=year, summary=text)
