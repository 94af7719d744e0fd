"""Unit tests for budget validation and evaluation"""

import pytest
from decimal import Decimal
from household_ledger.domain.budgets import budget_percent, build_budget, evaluate_budgets
from household_ledger.domain.exceptions import ValidationError
from household_ledger.domain.models import Budget, Category, Owner


def test_near_limit_scenario():
    """Limit 1000 with 850 spent is 85% and near the limit"""
    budget = build_budget(Owner.PURI, Category.FOOD, 1000)

    [status] = evaluate_budgets([budget], {Category.FOOD: Decimal("850")})

    assert status.owner == Owner.PURI
    assert status.category == Category.FOOD
    assert status.monthly_limit == Decimal("1000")
    assert status.spent == Decimal("850")
    assert status.percent == 85.0
    assert status.near_limit is True


@pytest.mark.parametrize(
    "spent,expected_percent,near",
    [
        ("0", 0.0, False),
        ("799.99", 79.999, False),
        ("800", 80.0, True),
        ("1000", 100.0, True),
        ("2500", 100.0, True),
    ],
)
def test_percent_clamped_and_threshold(spent, expected_percent, near):
    budget = Budget(owner=Owner.PHURITA, category=Category.CAR, monthly_limit=Decimal("1000"))

    [status] = evaluate_budgets([budget], {Category.CAR: Decimal(spent)})

    assert status.percent == pytest.approx(expected_percent)
    assert 0.0 <= status.percent <= 100.0
    assert status.near_limit is near


def test_missing_spend_counts_as_zero():
    budget = Budget(owner=Owner.PURI, category=Category.HOME, monthly_limit=Decimal("500"))

    [status] = evaluate_budgets([budget], {Category.FOOD: Decimal("400")})

    assert status.spent == 0
    assert status.percent == 0.0
    assert status.near_limit is False


def test_zero_limit_never_divides():
    assert budget_percent(Decimal("100"), Decimal("0")) == 0.0


@pytest.mark.parametrize("limit", [0, -10, "0.00"])
def test_non_positive_limit_rejected(limit):
    with pytest.raises(ValidationError):
        build_budget(Owner.PURI, Category.FOOD, limit)


def test_income_category_rejected():
    with pytest.raises(ValidationError):
        build_budget(Owner.PURI, Category.SALARY, 1000)


def test_unknown_owner_rejected():
    with pytest.raises(ValidationError):
        build_budget("grandma", Category.FOOD, 1000)


def test_sub_cent_limit_rejected():
    with pytest.raises(ValidationError):
        build_budget(Owner.PURI, Category.FOOD, "0.001")
