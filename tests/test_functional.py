import math
from datetime import datetime

import pytest

from spendwise.domain import Budget, Category, Transaction, TransactionType
from spendwise.functional import (
    Maybe, Some, Nothing, Either, Left, Right,
    parse_amount, pipe, safe_category, validate_budget, validate_transaction,
)


def test_maybe_map():
    doubled = Some(5).map(lambda x: x * 2)

    assert doubled.is_some()
    assert doubled.get_or_else(0) == 10

    mapped_nothing = Nothing().map(lambda x: x * 2)
    assert mapped_nothing.is_none()
    assert mapped_nothing.get_or_else(0) == 0


def test_maybe_bind():
    def safe_divide(x: int) -> Maybe[int]:
        if x == 0:
            return Nothing()
        return Some(10 // x)

    assert Some(2).bind(safe_divide).get_or_else(0) == 5
    assert Some(0).bind(safe_divide).is_none()
    assert Nothing().bind(safe_divide).is_none()


def test_either_bind():
    def safe_divide(x: int) -> Either[str, int]:
        if x == 0:
            return Left("Division by zero")
        return Right(10 // x)

    assert Right(2).bind(safe_divide).get_or_else(0) == 5

    result_error = Right(0).bind(safe_divide)
    assert result_error.is_left()
    assert result_error.get_error() == "Division by zero"

    result_left = Left("original error").bind(safe_divide)
    assert result_left.get_error() == "original error"

    with pytest.raises(ValueError):
        Right(1).get_error()


def test_safe_category_by_label_and_name():
    assert safe_category("Food & Groceries") == Some(Category.FOOD)
    assert safe_category("OTHER_INCOME") == Some(Category.OTHER_INCOME)
    assert safe_category("Groceries").is_none()


@pytest.mark.parametrize("raw, expected", [("12.50", 12.5), (" 1,200 ", 1200.0), (3, 3.0), ("0.01", 0.01)])
def test_parse_amount_accepts(raw, expected):
    result = parse_amount(raw)

    assert result.is_right()
    assert result.get_or_else(None) == expected


@pytest.mark.parametrize("raw, error", [
    ("", "amount_missing"),
    (None, "amount_missing"),
    ("abc", "amount_not_numeric"),
    ("0", "amount_not_positive"),
    ("-4", "amount_not_positive"),
    ("nan", "amount_not_positive"),
    ("inf", "amount_not_positive"),
])
def test_parse_amount_rejects(raw, error):
    result = parse_amount(raw)

    assert result.is_left()
    assert result.get_error()["error"] == error


def make_tx(amount, category, kind):
    return Transaction("t1", amount, category, datetime(2026, 1, 1), "note", kind)


def test_validate_transaction_success():
    result = validate_transaction(make_tx(20, Category.FOOD, TransactionType.EXPENSE))

    assert result.is_right()
    assert result.get_or_else(None).id == "t1"


def test_validate_transaction_category_type_mismatch():
    income_as_expense = validate_transaction(make_tx(20, Category.FOOD, TransactionType.INCOME))
    expense_as_income = validate_transaction(make_tx(20, Category.SALARY, TransactionType.EXPENSE))

    assert income_as_expense.get_error()["error"] == "category_type_mismatch"
    assert "expense category" in income_as_expense.get_error()["message"]
    assert expense_as_income.get_error()["error"] == "category_type_mismatch"
    assert "income category" in expense_as_income.get_error()["message"]


@pytest.mark.parametrize("amount", [0, -1, math.nan, True])
def test_validate_transaction_amount(amount):
    result = validate_transaction(make_tx(amount, Category.FOOD, TransactionType.EXPENSE))

    assert result.get_error()["error"] == "amount_not_positive"


def test_validate_budget():
    assert validate_budget(Budget("b1", Category.TRAVEL, 300)).is_right()
    assert validate_budget(Budget("b2", Category.SALARY, 300)).get_error()["error"] == "category_not_expense"
    assert validate_budget(Budget("b3", Category.TRAVEL, 0)).get_error()["error"] == "amount_not_positive"


def test_pipe_simple():
    def add1(x):
        return x + 1

    def mul2(x):
        return x * 2

    # pipe(3, add1, mul2) -> mul2(add1(3)) = 8
    assert pipe(3, add1, mul2) == 8
