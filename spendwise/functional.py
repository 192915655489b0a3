import math
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Callable

from spendwise.domain import Budget, Category, Transaction, TransactionType

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def safe_category(label: str) -> Maybe[Category]:
    """Look a category up by enum name or display label."""
    for cat in Category:
        if label in (cat.name, cat.value):
            return Some(cat)
    return Nothing()


def parse_amount(raw) -> Either[dict, float]:
    """Turn form input into a strictly positive, finite amount."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return Left({
            "error": "amount_missing",
            "message": "Amount is required",
        })
    try:
        value = float(str(raw).strip().replace(",", ""))
    except ValueError:
        return Left({
            "error": "amount_not_numeric",
            "message": f"Amount {raw!r} is not a number",
            "amount": raw,
        })
    if not math.isfinite(value) or value <= 0:
        return Left({
            "error": "amount_not_positive",
            "message": "Amount must be greater than zero",
            "amount": value,
        })
    return Right(value)


def validate_transaction(t: Transaction) -> Either[dict, Transaction]:

    if isinstance(t.amount, bool) or not isinstance(t.amount, (int, float)) or not math.isfinite(t.amount) or t.amount <= 0:
        return Left({
            "error": "amount_not_positive",
            "message": f"Transaction {t.id} must have a positive amount",
            "amount": t.amount,
        })

    if t.type is TransactionType.INCOME and not t.category.is_income():
        return Left({
            "error": "category_type_mismatch",
            "message": f"Income cannot be filed under expense category {t.category.value}",
            "category": t.category,
            "type": t.type,
        })
    if t.type is TransactionType.EXPENSE and not t.category.is_expense():
        return Left({
            "error": "category_type_mismatch",
            "message": f"Expense cannot be filed under income category {t.category.value}",
            "category": t.category,
            "type": t.type,
        })

    return Right(t)


def validate_budget(b: Budget) -> Either[dict, Budget]:
    if not b.category.is_expense():
        return Left({
            "error": "category_not_expense",
            "message": f"Goals can only track expense categories, got {b.category.value}",
            "category": b.category,
        })
    return parse_amount(b.limit).map(lambda _: b)


def pipe(x, *funcs):
    """Pipe a value through a series of functions.

    pipe(x, f, g, h) == h(g(f(x)))
    """
    res = x
    for f in funcs:
        res = f(res)
    return res
