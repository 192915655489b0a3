import pytest

from spendwise.budgets import clamp_percent, evaluate_budget, evaluate_budgets, over_budget
from spendwise.domain import Budget, Category


def test_single_goal_over_limit():
    b = Budget("b1", Category.FOOD, 50)
    status = evaluate_budget(b, {Category.FOOD: 100})

    assert status.spent == 100
    assert status.percent == 200
    assert status.is_over is True
    assert status.bar_percent == 100
    assert status.remaining == 0
    assert status.overspend == 50


def test_overlapping_goals_each_see_full_spend():
    budgets = (Budget("b1", Category.FOOD, 50), Budget("b2", Category.FOOD, 200))
    report = evaluate_budgets({Category.FOOD: 100}, budgets, 100)

    first, second = report.statuses
    assert first.spent == second.spent == 100
    assert first.is_over is True
    assert second.is_over is False
    assert second.percent == 50
    assert report.over == (first,)
    assert over_budget(report) == (first,)


def test_category_without_spend_defaults_to_zero():
    status = evaluate_budget(Budget("b1", Category.HEALTH, 80), {Category.FOOD: 30})

    assert status.spent == 0
    assert status.percent == 0
    assert status.is_over is False
    assert status.remaining == 80


def test_global_figures():
    budgets = (Budget("b1", Category.FOOD, 100), Budget("b2", Category.TRAVEL, 300))
    report = evaluate_budgets({Category.FOOD: 150, Category.TRAVEL: 50}, budgets, 250)

    assert report.global_limit == 400
    assert report.global_percent == pytest.approx(0.625)
    assert report.remaining == 150
    assert report.global_bar_percent == pytest.approx(62.5)


def test_remaining_never_negative():
    report = evaluate_budgets({Category.FOOD: 500}, (Budget("b1", Category.FOOD, 100),), 500)

    assert report.remaining == 0
    assert report.global_percent == pytest.approx(5)
    assert report.global_bar_percent == 100


def test_no_goals_divides_safely():
    report = evaluate_budgets({Category.FOOD: 10}, (), 10)

    assert report.statuses == ()
    assert report.global_limit == 0
    assert report.global_percent == 0
    assert report.remaining == 0


def test_zero_limit_goals_are_inactive():
    budgets = (Budget("b1", Category.FOOD, 0), Budget("b2", Category.FOOD, 40))
    report = evaluate_budgets({Category.FOOD: 10}, budgets, 10)

    assert [s.budget.id for s in report.statuses] == ["b2"]
    assert report.global_limit == 40


def test_over_matches_spent_above_limit():
    # rounds to 100% but is still more than the limit
    status = evaluate_budget(Budget("b1", Category.FOOD, 1000), {Category.FOOD: 1000.4})

    assert status.percent == 100
    assert status.is_over is True


def test_exact_limit_is_not_over():
    status = evaluate_budget(Budget("b1", Category.FOOD, 75), {Category.FOOD: 75})

    assert status.percent == 100
    assert status.is_over is False


def test_percent_rounds_half_up():
    status = evaluate_budget(Budget("b1", Category.FOOD, 200), {Category.FOOD: 25})

    assert status.percent == 13


def test_raw_percent_is_not_capped():
    status = evaluate_budget(Budget("b1", Category.FOOD, 70), {Category.FOOD: 100})

    assert status.percent == 143
    assert status.bar_percent == 100


@pytest.mark.parametrize("value, expected", [(-5, 0), (0, 0), (42.5, 42.5), (100, 100), (143, 100)])
def test_clamp_percent(value, expected):
    assert clamp_percent(value) == expected
