"""Aggregator - pure computations over a filtered transaction set"""

from decimal import Decimal
from typing import Dict, Iterable, List

from household_ledger.domain.models import (
    Category,
    CategoryShare,
    CategoryTotal,
    DailyEntry,
    LedgerSummary,
    PaymentMethod,
    Totals,
    Transaction,
    TransactionType,
)
from household_ledger.utils.date_utils import days_in_month

ZERO = Decimal("0")
TOP_CATEGORY_COUNT = 3


def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Income and expense sums; net is income - expense"""
    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income += txn.total_price
        else:
            expense += txn.total_price
    return Totals(income=income, expense=expense)


def category_breakdown(transactions: Iterable[Transaction]) -> List[CategoryTotal]:
    """
    Expense totals per category, largest first.

    Income is ignored. Equal sums keep the order in which their category
    first appeared in the input (dicts preserve insertion order and sorted
    is stable).
    """
    sums: Dict[Category, Decimal] = {}
    for txn in transactions:
        if txn.type != TransactionType.EXPENSE:
            continue
        sums[txn.category] = sums.get(txn.category, ZERO) + txn.total_price

    ranked = sorted(sums.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category=category, total=total) for category, total in ranked]


def top_categories(breakdown: List[CategoryTotal], limit: int = TOP_CATEGORY_COUNT) -> List[CategoryTotal]:
    return breakdown[:limit]


def category_shares(breakdown: List[CategoryTotal]) -> List[CategoryShare]:
    """Each category's fraction of total expense (0.0 everywhere when nothing was spent)"""
    grand_total = sum((c.total for c in breakdown), ZERO)
    return [
        CategoryShare(
            category=c.category,
            total=c.total,
            share=float(c.total / grand_total) if grand_total > 0 else 0.0,
        )
        for c in breakdown
    ]


def daily_series(transactions: Iterable[Transaction], month: int, year: int) -> List[DailyEntry]:
    """
    Dense per-day income/expense series for month/year.

    Always returns days_in_month(month, year) entries, days 1..N in order;
    days without activity are zero. Transactions from other months are
    not counted.
    """
    series = {day: DailyEntry(day=day, income=ZERO, expense=ZERO) for day in range(1, days_in_month(month, year) + 1)}

    for txn in transactions:
        if txn.month != month or txn.year != year:
            continue
        entry = series.get(txn.day)
        if entry is None:
            continue
        if txn.type == TransactionType.INCOME:
            entry.income += txn.total_price
        else:
            entry.expense += txn.total_price

    return list(series.values())


def cash_only_expense(transactions: Iterable[Transaction]) -> Decimal:
    """
    Expense not paid by credit card.

    Card spend is billed later through CreditCardBill, so it is excluded
    here. A missing payment method counts as cash.
    """
    return sum(
        (
            t.total_price
            for t in transactions
            if t.type == TransactionType.EXPENSE and t.payment_method != PaymentMethod.CREDIT_CARD
        ),
        ZERO,
    )


def real_expense(transactions: Iterable[Transaction]) -> Decimal:
    """All expense as incurred, whatever the payment method"""
    return sum((t.total_price for t in transactions if t.type == TransactionType.EXPENSE), ZERO)


def spend_by_category(transactions: Iterable[Transaction]) -> Dict[Category, Decimal]:
    return {c.category: c.total for c in category_breakdown(transactions)}


def summarize(transactions: List[Transaction]) -> LedgerSummary:
    """Dashboard view-model for one filtered transaction set"""
    breakdown = category_breakdown(transactions)
    return LedgerSummary(
        totals=compute_totals(transactions),
        top_categories=top_categories(breakdown),
        category_shares=category_shares(breakdown),
        cash_expense=cash_only_expense(transactions),
        real_expense=real_expense(transactions),
    )
