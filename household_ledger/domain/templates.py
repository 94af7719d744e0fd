"""Recurring templates: named presets that prefill a new transaction"""

from household_ledger.domain.exceptions import ValidationError
from household_ledger.domain.models import RecurringTemplate, Transaction, TransactionType
from household_ledger.domain.transactions import validate_transaction


def new_template(template: RecurringTemplate) -> RecurringTemplate:
    """Validate a template using the same rules as a transaction"""
    name = (template.name or "").strip()
    if not name:
        raise ValidationError("Template name must not be empty")

    # Any real date works; only the copied fields are checked here
    probe = validate_transaction(to_transaction(template, day=1, month=1, year=2000))
    return RecurringTemplate(
        owner=probe.owner,
        name=name,
        type=probe.type,
        category=probe.category,
        description=probe.description,
        quantity=probe.quantity,
        price_per_unit=probe.price_per_unit,
        payment_method=probe.payment_method,
    )


def to_transaction(template: RecurringTemplate, day: int, month: int, year: int) -> Transaction:
    """Copy the template's fields into a fresh, unsaved transaction"""
    return Transaction(
        day=day,
        month=month,
        year=year,
        type=template.type,
        description=template.description,
        category=template.category,
        quantity=template.quantity,
        price_per_unit=template.price_per_unit,
        owner=template.owner,
        payment_method=template.payment_method if template.type == TransactionType.EXPENSE else None,
    )
