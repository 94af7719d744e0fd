"""Credit card bill endpoints - record, list pending for a month, mark paid"""

from fastapi import APIRouter, Depends, Query, status

from household_ledger.api.dependencies import get_engine
from household_ledger.api.v1.schemas import BillCreate, BillSchema, PendingBillsResponse
from household_ledger.domain.models import ALL
from household_ledger.engine import LedgerEngine

router = APIRouter()


@router.post("/bills", response_model=BillSchema, status_code=status.HTTP_201_CREATED)
def record_bill(body: BillCreate, engine: LedgerEngine = Depends(get_engine)):
    """Store a pending bill produced by the card billing collaborator"""
    return BillSchema.model_validate(engine.record_bill(**body.model_dump()))


@router.get("/bills/pending", response_model=PendingBillsResponse)
def list_pending_bills(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1),
    owner: str = Query(ALL),
    engine: LedgerEngine = Depends(get_engine),
):
    return PendingBillsResponse.model_validate(engine.pending_bills(month, year, owner))


@router.post("/bills/{bill_id}/pay", response_model=BillSchema)
def mark_bill_paid(bill_id: str, engine: LedgerEngine = Depends(get_engine)):
    """pending -> paid; paying twice returns 409"""
    return BillSchema.model_validate(engine.mark_bill_paid(bill_id))
