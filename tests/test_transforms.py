from datetime import datetime

from spendwise.domain import Budget, Category, Transaction, TransactionType, make_subscription
from spendwise.transforms import (
    add_budget,
    add_subscription,
    add_transaction,
    clear_transactions,
    expense_transactions,
    income_transactions,
    remove_budget,
    remove_subscription,
    remove_transaction,
    restore_samples,
    update_budget,
)


def make_tx(id, amount, category=Category.FOOD, kind=TransactionType.EXPENSE):
    return Transaction(id=id, amount=amount, category=category, timestamp=datetime(2026, 9, 1), type=kind)


def test_add_transaction_puts_newest_first():
    t1 = make_tx("t1", 100, Category.SALARY, TransactionType.INCOME)
    t2 = make_tx("t2", 50)

    transactions = (t1,)
    new_transactions = add_transaction(transactions, t2)

    assert new_transactions == (t2, t1)
    assert transactions == (t1,)


def test_remove_transaction():
    ledger = (make_tx("t1", 1), make_tx("t2", 2), make_tx("t3", 3))

    assert [t.id for t in remove_transaction(ledger, "t2")] == ["t1", "t3"]
    assert remove_transaction(ledger, "missing") == ledger
    assert len(ledger) == 3


def test_clear_and_restore():
    ledger = (make_tx("t1", 1),)
    now = datetime(2026, 10, 18, 9, 30)

    assert clear_transactions(ledger) == ()
    samples = restore_samples(now)
    assert len(samples) == 11
    assert all(t.timestamp == now for t in samples)
    assert sum(1 for t in samples if t.type is TransactionType.INCOME) == 1


def test_update_budget():
    b1 = Budget("b1", Category.FOOD, 300)
    b2 = Budget("b2", Category.TRAVEL, 150, name="Trip")

    budgets = (b1, b2)
    new_budgets = update_budget(budgets, "b2", 500)

    assert new_budgets[1].limit == 500
    assert new_budgets[1].name == "Trip"
    assert new_budgets[0] is b1
    assert budgets[1].limit == 150


def test_update_budget_renames():
    budgets = (Budget("b1", Category.FOOD, 300),)

    assert update_budget(budgets, "b1", 300, "Groceries")[0].label == "Groceries"


def test_add_and_remove_budget():
    b1 = Budget("b1", Category.FOOD, 300)
    b2 = Budget("b2", Category.FOOD, 50)

    budgets = add_budget(add_budget((), b1), b2)
    assert budgets == (b1, b2)
    assert remove_budget(budgets, "b1") == (b2,)


def test_add_and_remove_subscription():
    s = make_subscription("Spotify", 9.99, id="s1")

    subs = add_subscription((), s)
    assert subs == (s,)
    assert remove_subscription(subs, "s1") == ()


def test_split_by_type():
    ledger = (
        make_tx("t1", 100, Category.SALARY, TransactionType.INCOME),
        make_tx("t2", 40),
        make_tx("t3", 60),
    )

    assert [t.id for t in income_transactions(ledger)] == ["t1"]
    assert [t.id for t in expense_transactions(ledger)] == ["t2", "t3"]
