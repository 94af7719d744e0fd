"""Query/filter layer: resolve FilterOptions into a transaction subset"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from household_ledger.domain.exceptions import ValidationError
from household_ledger.domain.models import (
    ALL,
    Category,
    FilterOptions,
    Owner,
    SortOrder,
    Transaction,
    TransactionType,
)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def filter_criteria(filters: FilterOptions) -> Dict[str, Any]:
    """
    Equality criteria for every field that actually restricts the selection.

    Absent month/year and the "all" sentinel are left out, so an empty
    dict means "every transaction". Values are coerced to their enums and
    rejected with ValidationError when they are not valid choices.
    """
    criteria: Dict[str, Any] = {}

    if filters.month is not None:
        if not 1 <= filters.month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {filters.month}")
        criteria["month"] = filters.month
    if filters.year is not None:
        criteria["year"] = filters.year

    try:
        if filters.owner and filters.owner != ALL:
            criteria["owner"] = Owner(filters.owner)
        if filters.type and filters.type != ALL:
            criteria["type"] = TransactionType(filters.type)
        if filters.category and filters.category != ALL:
            criteria["category"] = Category(filters.category)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    return criteria


def owner_filter(owner: str) -> str:
    """Validate an owner selector: either "all" or a known owner"""
    if not owner or owner == ALL:
        return ALL
    try:
        return Owner(owner).value
    except ValueError as e:
        raise ValidationError(str(e)) from e


def matches(txn: Transaction, criteria: Dict[str, Any]) -> bool:
    return all(getattr(txn, name) == value for name, value in criteria.items())


def _created_key(txn: Transaction) -> datetime:
    if txn.created_at is None:
        return _OLDEST
    if txn.created_at.tzinfo is None:
        return txn.created_at.replace(tzinfo=timezone.utc)
    return txn.created_at


def sort_transactions(transactions: Iterable[Transaction], sort_by: SortOrder) -> List[Transaction]:
    """Newest first for date_desc, largest total first for price_desc; ties keep input order"""
    if SortOrder(sort_by) == SortOrder.PRICE_DESC:
        return sorted(transactions, key=lambda t: t.total_price, reverse=True)
    return sorted(transactions, key=_created_key, reverse=True)


def filter_transactions(transactions: Iterable[Transaction], filters: FilterOptions) -> List[Transaction]:
    """In-memory equivalent of TransactionRepository.query"""
    criteria = filter_criteria(filters)
    selected = [t for t in transactions if matches(t, criteria)]
    return sort_transactions(selected, filters.sort_by)
