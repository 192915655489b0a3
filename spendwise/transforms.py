from dataclasses import replace
from datetime import datetime
from typing import Optional, Tuple

from spendwise.constants import sample_transactions
from spendwise.domain import Budget, Subscription, Transaction, TransactionType

# The ledger store only changes by whole-value replacement: every function
# here returns a new tuple and leaves its input untouched.


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    # newest entries sit at the front, matching the history view
    return (t,) + trans


def remove_transaction(
    trans: Tuple[Transaction, ...], tid: str
) -> Tuple[Transaction, ...]:
    return tuple(t for t in trans if t.id != tid)


def clear_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return ()


def restore_samples(now: Optional[datetime] = None) -> Tuple[Transaction, ...]:
    return sample_transactions(now)


def add_budget(budgets: Tuple[Budget, ...], b: Budget) -> Tuple[Budget, ...]:
    return budgets + (b,)


def update_budget(
    budgets: Tuple[Budget, ...], bid: str, new_limit: float, new_name: Optional[str] = None
) -> Tuple[Budget, ...]:
    return tuple(
        replace(b, limit=new_limit, name=new_name if new_name is not None else b.name)
        if b.id == bid else b
        for b in budgets
    )


def remove_budget(budgets: Tuple[Budget, ...], bid: str) -> Tuple[Budget, ...]:
    return tuple(b for b in budgets if b.id != bid)


def add_subscription(
    subs: Tuple[Subscription, ...], s: Subscription
) -> Tuple[Subscription, ...]:
    return subs + (s,)


def remove_subscription(
    subs: Tuple[Subscription, ...], sid: str
) -> Tuple[Subscription, ...]:
    return tuple(s for s in subs if s.id != sid)


def income_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.type is TransactionType.INCOME, trans))


def expense_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.type is TransactionType.EXPENSE, trans))
