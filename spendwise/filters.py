from datetime import date, datetime
from typing import Callable, Iterable, Tuple

from spendwise.domain import Category, Transaction, TransactionType, add_months
from spendwise.functional import pipe

Predicate = Callable[[Transaction], bool]


def by_type(kind: TransactionType) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.type is kind

    return _filter


def by_category(category: Category) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category is category

    return _filter


def in_month(year: int, month: int) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.timestamp.year == year and t.timestamp.month == month

    return _filter


def by_date_range(start: date, end: date) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return start <= t.timestamp.date() <= end

    return _filter


def matching(term: str) -> Predicate:
    """Case-insensitive search over the note and the category label."""
    needle = term.strip().lower()

    def _filter(t: Transaction) -> bool:
        if not needle:
            return True
        return needle in t.note.lower() or needle in t.category.value.lower()

    return _filter


def select(pred: Predicate) -> Callable[[Iterable[Transaction]], Tuple[Transaction, ...]]:
    def _select(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
        return tuple(t for t in trans if pred(t))

    return _select


def newest_first(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(sorted(trans, key=lambda t: t.timestamp, reverse=True))


def month_scope(trans: Iterable[Transaction], selected: date) -> Tuple[Transaction, ...]:
    """Pre-filter the ledger down to the month containing ``selected``."""
    return select(in_month(selected.year, selected.month))(trans)


def history(trans: Iterable[Transaction], selected: date, term: str = "") -> Tuple[Transaction, ...]:
    return pipe(
        trans,
        select(in_month(selected.year, selected.month)),
        select(matching(term)),
        newest_first,
    )


def shift_month(selected: date, delta: int) -> date:
    if isinstance(selected, datetime):
        selected = selected.date()
    return add_months(selected, delta)


def month_label(selected: date) -> str:
    return selected.strftime("%B %Y")
