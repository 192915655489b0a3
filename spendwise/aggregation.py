"""Ledger aggregation.

Every function here is a pure function of the transactions it is handed.
Month scoping and search happen upstream (see :mod:`spendwise.filters`),
so the same summation serves the all-time dashboard and the history view.

Amounts that are not strictly positive finite numbers are skipped rather
than raised on: percentages divide by the expense total, which is only
meaningful as a sum of positive values.
"""

import math
from typing import Dict, Iterable, Tuple

from spendwise.domain import (
    Category,
    CategoryBreakdown,
    LedgerSummary,
    Transaction,
    TransactionType,
    category_color,
)


def _countable(t: Transaction) -> bool:
    amount = t.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return math.isfinite(amount) and amount > 0


def income_total(trans: Iterable[Transaction]) -> float:
    return sum(
        (t.amount for t in trans if t.type is TransactionType.INCOME and _countable(t)),
        0.0,
    )


def expense_total(trans: Iterable[Transaction]) -> float:
    return sum(
        (t.amount for t in trans if t.type is TransactionType.EXPENSE and _countable(t)),
        0.0,
    )


def category_totals(trans: Iterable[Transaction]) -> Dict[Category, float]:
    """Expense sum per expense category, keyed in first-occurrence order.

    Expenses filed under an income category break the creation invariant;
    they still count towards the expense total but never towards a
    category bucket.
    """
    totals: Dict[Category, float] = {}
    for t in trans:
        if t.type is not TransactionType.EXPENSE or not _countable(t):
            continue
        if not t.category.is_expense():
            continue
        totals[t.category] = totals.get(t.category, 0.0) + t.amount
    return totals


def breakdown(totals: Dict[Category, float], total_expense: float) -> Tuple[CategoryBreakdown, ...]:
    """Sorted, filtered per-category summary.

    Only expense categories with a positive total are listed; ``sorted`` is
    stable, so equal amounts keep the insertion order of ``totals``.
    """
    if total_expense <= 0:
        return ()
    rows = [
        CategoryBreakdown(
            category=cat,
            amount=amount,
            percentage=100 * amount / total_expense,
            color=category_color(cat),
        )
        for cat, amount in totals.items()
        if amount > 0 and cat.is_expense()
    ]
    rows.sort(key=lambda row: row.amount, reverse=True)
    return tuple(rows)


def summarize(trans: Iterable[Transaction]) -> LedgerSummary:
    trans = tuple(trans)
    total_income = income_total(trans)
    total_expense = expense_total(trans)
    totals = category_totals(trans)
    return LedgerSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        category_totals=totals,
        breakdown=breakdown(totals, sum(totals.values(), 0.0)),
    )


def active_category_count(summary: LedgerSummary) -> int:
    return summary.active_categories
