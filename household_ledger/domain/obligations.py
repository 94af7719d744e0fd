"""Monthly cash obligation rollup"""

from typing import Iterable

from household_ledger.domain.aggregation import cash_only_expense
from household_ledger.domain.credit_bills import due_pending
from household_ledger.domain.models import (
    ALL,
    CreditCardBill,
    Installment,
    ObligationSummary,
    Transaction,
)
from household_ledger.domain.installments import monthly_installment_contribution


def monthly_cash_obligation(
    transactions: Iterable[Transaction],
    installments: Iterable[Installment],
    bills: Iterable[CreditCardBill],
    month: int,
    year: int,
    owner: str = ALL,
) -> ObligationSummary:
    """
    Cash the household has to produce for month/year.

    cash expense + active installment dues + pending card bills due that
    month. `transactions` must already be scoped to month/year/owner;
    installments and bills are scoped here.
    """
    return ObligationSummary(
        month=month,
        year=year,
        owner=owner,
        cash_expense=cash_only_expense(transactions),
        installment_due=monthly_installment_contribution(installments, owner),
        card_bills_due=due_pending(bills, month, year, owner),
    )
