"""Unit tests for the monthly cash obligation rollup"""

from decimal import Decimal
from household_ledger.domain.credit_bills import new_bill
from household_ledger.domain.installments import new_installment
from household_ledger.domain.models import Owner, PaymentMethod
from household_ledger.domain.obligations import monthly_cash_obligation


def test_obligation_combines_three_sources(make_transaction):
    transactions = [
        make_transaction(payment_method=PaymentMethod.CASH, price_per_unit=Decimal("300")),
        make_transaction(payment_method=PaymentMethod.CREDIT_CARD, price_per_unit=Decimal("700")),
    ]
    plans = [
        new_installment(Owner.PURI, "Sofa", 2400, 200, 12, 1, 2025),
        new_installment(Owner.PHURITA, "Laptop", 3000, 500, 6, 1, 2025),
    ]
    bills = [new_bill(Owner.PURI, 700, 3, 2025), new_bill(Owner.PHURITA, 50, 4, 2025)]

    result = monthly_cash_obligation(transactions, plans, bills, 3, 2025)

    assert result.cash_expense == Decimal("300")
    assert result.installment_due == Decimal("700")
    assert result.card_bills_due == Decimal("700")
    assert result.total == Decimal("1700")


def test_obligation_owner_scope(make_transaction):
    plans = [
        new_installment(Owner.PURI, "Sofa", 2400, 200, 12, 1, 2025),
        new_installment(Owner.PHURITA, "Laptop", 3000, 500, 6, 1, 2025),
    ]
    bills = [new_bill(Owner.PHURITA, 90, 3, 2025)]

    result = monthly_cash_obligation([], plans, bills, 3, 2025, owner="phurita")

    assert result.cash_expense == 0
    assert result.installment_due == Decimal("500")
    assert result.card_bills_due == Decimal("90")
    assert result.total == Decimal("590")


def test_obligation_is_deterministic(make_transaction):
    transactions = [make_transaction(price_per_unit=Decimal("42"))]

    first = monthly_cash_obligation(transactions, [], [], 3, 2025)
    second = monthly_cash_obligation(transactions, [], [], 3, 2025)

    assert first == second
