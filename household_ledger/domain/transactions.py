"""Transaction validation and in-place edits"""

from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from household_ledger.domain.exceptions import ValidationError
from household_ledger.domain.models import (
    Category,
    Owner,
    PaymentMethod,
    Transaction,
    TransactionType,
    categories_for,
    default_category,
)
from household_ledger.utils.date_utils import validate_calendar_day

# Fields that may never change after creation
IMMUTABLE_FIELDS = {"id", "created_at"}

# Only these may be cleared with None in an edit
NULLABLE_FIELDS = {"payment_method"}

# Stored as NUMERIC(12, 2)
CENT = Decimal("0.01")
MAX_MONEY = Decimal("9999999999.99")


def to_money(value: Any, field_name: str) -> Decimal:
    """Coerce a numeric input into a Decimal, rejecting garbage"""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from e
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be finite")
    if abs(amount) > MAX_MONEY:
        raise ValidationError(f"{field_name} must not exceed {MAX_MONEY}")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field_name} must have at most 2 decimal places, got {value!r}")
    return amount.quantize(CENT)


def validate_transaction(txn: Transaction) -> Transaction:
    """
    Check every field of a transaction and normalize it.

    Rules:
    - day must exist in month/year
    - description is non-empty after trimming
    - category belongs to the set for the transaction type
    - quantity is a positive integer, price_per_unit is non-negative
    - payment_method is required for expenses and dropped for income

    Returns a normalized copy; the input is not modified.
    """
    validate_calendar_day(txn.day, txn.month, txn.year)

    try:
        type_ = TransactionType(txn.type)
        category = Category(txn.category)
        owner = Owner(txn.owner)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    description = (txn.description or "").strip()
    if not description:
        raise ValidationError("Description must not be empty")

    if category not in categories_for(type_):
        raise ValidationError(f"Category '{category.value}' is not valid for {type_.value}")

    if isinstance(txn.quantity, bool) or not isinstance(txn.quantity, int) or txn.quantity <= 0:
        raise ValidationError(f"Quantity must be a positive integer, got {txn.quantity!r}")

    price = to_money(txn.price_per_unit, "price_per_unit")
    if price < 0:
        raise ValidationError("price_per_unit must not be negative")
    if price * txn.quantity > MAX_MONEY:
        raise ValidationError(f"Total price must not exceed {MAX_MONEY}")

    payment_method = None
    if type_ == TransactionType.EXPENSE:
        if txn.payment_method is None:
            raise ValidationError("payment_method is required for expenses")
        try:
            payment_method = PaymentMethod(txn.payment_method)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    return replace(
        txn,
        type=type_,
        category=category,
        owner=owner,
        description=description,
        price_per_unit=price,
        payment_method=payment_method,
    )


def apply_changes(txn: Transaction, changes: Dict[str, Any]) -> Transaction:
    """Merge a partial edit into an existing transaction and re-validate the result"""
    forbidden = IMMUTABLE_FIELDS.intersection(changes)
    if forbidden:
        raise ValidationError(f"Cannot modify {', '.join(sorted(forbidden))}")

    unknown = set(changes) - set(Transaction.__dataclass_fields__)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    cleared = sorted(name for name, value in changes.items() if value is None and name not in NULLABLE_FIELDS)
    if cleared:
        raise ValidationError(f"Cannot clear {', '.join(cleared)}")

    merged = replace(txn, **changes)

    # A type switch without a category falls back to the new type's default
    if "category" not in changes and merged.category not in categories_for(merged.type):
        merged = replace(merged, category=default_category(merged.type))

    # Switching to income drops the method; switching to expense keeps whatever was sent
    if merged.type == TransactionType.INCOME:
        merged = replace(merged, payment_method=None)

    return validate_transaction(merged)
