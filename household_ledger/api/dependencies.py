"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from household_ledger.domain.models import ALL, FilterOptions, SortOrder
from household_ledger.engine import LedgerEngine
from household_ledger.infrastructure.clients.summary import SummaryClient
from household_ledger.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_engine(request: Request, db: Session = Depends(get_db)) -> LedgerEngine:
    """Provide a ledger engine bound to this request's session"""
    return LedgerEngine(db, request_id=get_request_id(request))


def get_summary_client() -> SummaryClient:
    """Provide text-summary client instance"""
    return SummaryClient()


def get_filters(
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = Query(None, ge=1),
    owner: str = Query(ALL, description="Owner or 'all'"),
    type: str = Query(ALL, description="income, expense or 'all'"),
    category: str = Query(ALL, description="Category or 'all'"),
    sort_by: SortOrder = Query(SortOrder.DATE_DESC),
) -> FilterOptions:
    """Build FilterOptions from query parameters"""
    return FilterOptions(month=month, year=year, owner=owner, type=type, category=category, sort_by=sort_by)
