"""Budget tracker: limit validation and spend-vs-limit evaluation"""

from decimal import Decimal
from typing import Dict, Iterable, List

from household_ledger.domain.exceptions import ValidationError
from household_ledger.domain.models import (
    EXPENSE_CATEGORIES,
    Budget,
    BudgetStatus,
    Category,
    Owner,
)
from household_ledger.domain.transactions import to_money

# Fixed warning threshold, in percent of the monthly limit
NEAR_LIMIT_PERCENT = 80.0


def build_budget(owner: Owner, category: Category, monthly_limit) -> Budget:
    """Validate an upsert request; zero or negative limits are rejected"""
    try:
        owner = Owner(owner)
        category = Category(category)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    if category not in EXPENSE_CATEGORIES:
        raise ValidationError(f"Budgets apply to expense categories only, got '{category.value}'")

    limit = to_money(monthly_limit, "monthly_limit")
    if limit <= 0:
        raise ValidationError("monthly_limit must be greater than 0")

    return Budget(owner=owner, category=category, monthly_limit=limit)


def budget_percent(spent: Decimal, monthly_limit: Decimal) -> float:
    """Consumed percent clamped to [0, 100]; 0 when the limit is not positive"""
    if monthly_limit <= 0:
        return 0.0
    percent = float(Decimal(100) * spent / monthly_limit)
    return max(0.0, min(100.0, percent))


def evaluate_budgets(budgets: Iterable[Budget], spend: Dict[Category, Decimal]) -> List[BudgetStatus]:
    """
    Compare each budget with the spend recorded for its category.

    Read-only: nothing is persisted. A budget is near its limit once the
    consumed percent reaches NEAR_LIMIT_PERCENT.
    """
    results = []
    for budget in budgets:
        spent = spend.get(budget.category, Decimal("0"))
        percent = budget_percent(spent, budget.monthly_limit)
        results.append(
            BudgetStatus(
                owner=budget.owner,
                category=budget.category,
                monthly_limit=budget.monthly_limit,
                spent=spent,
                percent=percent,
                near_limit=percent >= NEAR_LIMIT_PERCENT,
            )
        )
    return results
