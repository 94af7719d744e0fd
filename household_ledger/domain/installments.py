"""Installment tracker - state machine and derived progress values"""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional

from household_ledger.domain.exceptions import InvalidStateError, ValidationError
from household_ledger.domain.models import ALL, Installment, InstallmentStatus, Owner
from household_ledger.domain.transactions import to_money


def clamp(value, low, high):
    return max(low, min(high, value))


def new_installment(
    owner: Owner,
    title: str,
    total_amount,
    monthly_amount,
    total_months: int,
    start_month: int,
    start_year: int,
    paid_months: int = 0,
    note: Optional[str] = None,
) -> Installment:
    """
    Validate and build a new plan.

    - title must be non-empty, total_months at least 1
    - paid_months is clamped to [0, total_months], start_month to [1, 12]
    - a plan created already fully paid starts out completed
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("Installment title must not be empty")
    if total_months is None or total_months <= 0:
        raise ValidationError("total_months must be greater than 0")

    total = to_money(total_amount, "total_amount")
    monthly = to_money(monthly_amount, "monthly_amount")
    if total < 0 or monthly < 0:
        raise ValidationError("Installment amounts must not be negative")

    try:
        owner = Owner(owner)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    paid = clamp(paid_months or 0, 0, total_months)
    note = note.strip() if note and note.strip() else None

    return Installment(
        owner=owner,
        title=title,
        total_amount=total,
        monthly_amount=monthly,
        total_months=total_months,
        paid_months=paid,
        start_month=clamp(start_month, 1, 12),
        start_year=start_year,
        status=InstallmentStatus.COMPLETED if paid >= total_months else InstallmentStatus.ACTIVE,
        note=note,
    )


def advance(installment: Installment) -> Installment:
    """Record one more paid month; the plan completes when the last month is paid"""
    if installment.status != InstallmentStatus.ACTIVE:
        raise InvalidStateError(f"Cannot advance a {installment.status.value} installment")

    next_paid = min(installment.total_months, installment.paid_months + 1)
    status = InstallmentStatus.COMPLETED if next_paid >= installment.total_months else InstallmentStatus.ACTIVE
    return replace(installment, paid_months=next_paid, status=status)


def cancel(installment: Installment) -> Installment:
    """Cancel an active plan; paid_months is kept as-is"""
    if installment.status != InstallmentStatus.ACTIVE:
        raise InvalidStateError(f"Cannot cancel a {installment.status.value} installment")
    return replace(installment, status=InstallmentStatus.CANCELED)


def remaining_months(installment: Installment) -> int:
    return max(0, installment.total_months - installment.paid_months)


def progress_percent(installment: Installment) -> float:
    if not installment.total_months:
        return 0.0
    return clamp(100.0 * installment.paid_months / installment.total_months, 0.0, 100.0)


def monthly_installment_contribution(installments: Iterable[Installment], owner: str = ALL) -> Decimal:
    """
    Monthly amount owed on installment plans.

    Every active plan counts in full, whatever its start month or how many
    months remain; completed and canceled plans never count.
    """
    return sum(
        (
            i.monthly_amount
            for i in installments
            if i.status == InstallmentStatus.ACTIVE and (owner == ALL or i.owner == owner)
        ),
        Decimal("0"),
    )
