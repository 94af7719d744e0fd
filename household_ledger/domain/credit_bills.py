"""Credit-card bill tracker"""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional

from household_ledger.domain.exceptions import InvalidStateError, ValidationError
from household_ledger.domain.models import ALL, BillStatus, CreditCardBill, Owner
from household_ledger.domain.transactions import to_money


def new_bill(
    owner: Owner,
    amount,
    due_month: int,
    due_year: int,
    source_transaction_id: Optional[str] = None,
    note: Optional[str] = None,
) -> CreditCardBill:
    """Validate a bill handed over by the billing collaborator; it starts pending"""
    try:
        owner = Owner(owner)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    amount = to_money(amount, "amount")
    if amount < 0:
        raise ValidationError("Bill amount must not be negative")
    if not 1 <= due_month <= 12:
        raise ValidationError(f"due_month must be between 1 and 12, got {due_month}")

    return CreditCardBill(
        owner=owner,
        amount=amount,
        due_month=due_month,
        due_year=due_year,
        status=BillStatus.PENDING,
        source_transaction_id=source_transaction_id,
        note=note.strip() if note and note.strip() else None,
    )


def mark_paid(bill: CreditCardBill) -> CreditCardBill:
    """pending -> paid; any other source state is rejected"""
    if bill.status != BillStatus.PENDING:
        raise InvalidStateError(f"Cannot pay a {bill.status.value} bill")
    return replace(bill, status=BillStatus.PAID)


def is_due(bill: CreditCardBill, month: int, year: int, owner: str = ALL) -> bool:
    return (
        bill.status == BillStatus.PENDING
        and bill.due_month == month
        and bill.due_year == year
        and (owner == ALL or bill.owner == owner)
    )


def due_pending(bills: Iterable[CreditCardBill], month: int, year: int, owner: str = ALL) -> Decimal:
    """Sum of pending bills due exactly in month/year"""
    return sum((b.amount for b in bills if is_due(b, month, year, owner)), Decimal("0"))
