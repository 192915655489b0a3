from datetime import date, datetime

from spendwise.aggregation import summarize
from spendwise.domain import Category, Transaction, TransactionType
from spendwise.filters import (
    by_category,
    by_date_range,
    by_type,
    history,
    in_month,
    matching,
    month_label,
    month_scope,
    newest_first,
    shift_month,
)


def make_tx(id, ts, note="", category=Category.FOOD, amount=10, kind=TransactionType.EXPENSE):
    return Transaction(id=id, amount=amount, category=category, timestamp=ts, note=note, type=kind)


LEDGER = (
    make_tx("t1", datetime(2026, 9, 30, 23, 59), "Dinner"),
    make_tx("t2", datetime(2026, 10, 1, 8, 0), "Weekly groceries", amount=80),
    make_tx("t3", datetime(2026, 10, 15, 18, 0), "Taxi home", Category.TRANSPORT, 25),
    make_tx("t4", datetime(2026, 10, 5, 9, 0), "Paycheck", Category.SALARY, 3000, TransactionType.INCOME),
    make_tx("t5", datetime(2025, 10, 3, 9, 0), "Last year"),
)


def test_in_month_checks_year_too():
    assert [t.id for t in LEDGER if in_month(2026, 10)(t)] == ["t2", "t3", "t4"]


def test_by_type_and_category():
    assert [t.id for t in filter(by_type(TransactionType.INCOME), LEDGER)] == ["t4"]
    assert [t.id for t in filter(by_category(Category.TRANSPORT), LEDGER)] == ["t3"]


def test_by_date_range_inclusive():
    pred = by_date_range(date(2026, 9, 30), date(2026, 10, 1))

    assert [t.id for t in LEDGER if pred(t)] == ["t1", "t2"]


def test_matching_note_and_category_case_insensitive():
    assert [t.id for t in LEDGER if matching("GROCER")(t)] == ["t1", "t2", "t5"]
    assert [t.id for t in LEDGER if matching("taxi")(t)] == ["t3"]
    assert all(matching("   ")(t) for t in LEDGER)


def test_newest_first():
    assert [t.id for t in newest_first(LEDGER)] == ["t3", "t4", "t2", "t1", "t5"]


def test_history_combines_month_search_and_order():
    assert [t.id for t in history(LEDGER, date(2026, 10, 1))] == ["t3", "t4", "t2"]
    assert [t.id for t in history(LEDGER, date(2026, 10, 1), "pay")] == ["t4"]
    assert history(LEDGER, date(2026, 11, 1)) == ()


def test_month_scope_then_summarize():
    month = summarize(month_scope(LEDGER, date(2026, 10, 20)))

    assert month.total_expense == 105
    assert month.total_income == 3000
    assert [b.category for b in month.breakdown] == [Category.FOOD, Category.TRANSPORT]


def test_shift_month_clamps_day():
    assert shift_month(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert shift_month(date(2026, 1, 15), -1) == date(2025, 12, 15)
    assert shift_month(datetime(2026, 12, 1, 10, 0), 1) == date(2027, 1, 1)


def test_month_label():
    assert month_label(date(2026, 10, 18)) == "October 2026"
