import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Tuple
from uuid import uuid4


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Category(str, Enum):
    HOUSING = "Housing & Utilities"
    FOOD = "Food & Groceries"
    FINANCE = "Financial Commitments"
    TRAVEL = "Travel & Vacation"
    LIFESTYLE = "Personal & Lifestyle"
    HEALTH = "Health & Medical"
    EDUCATION = "Education & Learning"
    TRANSPORT = "Transportation"
    FAMILY = "Family & Social"
    ENTERTAINMENT = "Entertainment & Leisure"
    # income
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENTS = "Investments"
    GIFT = "Gift"
    OTHER_INCOME = "Other Income"

    def is_income(self) -> bool:
        return self in INCOME_CATEGORIES

    def is_expense(self) -> bool:
        return self in EXPENSE_CATEGORIES


class PaymentMethod(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    DEBIT_CARD = "Debit Card"
    CREDIT_CARD = "Credit Card"
    NET_BANKING = "Net Banking"


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def months(self) -> int:
        return CYCLE_MONTHS[self]


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    INR = "INR"
    GBP = "GBP"
    CAD = "CAD"
    AUD = "AUD"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


INCOME_CATEGORIES = frozenset({
    Category.SALARY,
    Category.FREELANCE,
    Category.INVESTMENTS,
    Category.GIFT,
    Category.OTHER_INCOME,
})

# declaration order is kept, it drives every category picker
EXPENSE_CATEGORIES = tuple(c for c in Category if c not in INCOME_CATEGORIES)


@dataclass(frozen=True)
class CategoryMeta:
    color: str
    icon: str   # icon name from the lucide set


CATEGORY_METADATA = {
    Category.HOUSING: CategoryMeta("#F8D548", "home"),
    Category.FOOD: CategoryMeta("#F38B3C", "shopping-cart"),
    Category.FINANCE: CategoryMeta("#E94D61", "credit-card"),
    Category.TRAVEL: CategoryMeta("#D63F8D", "plane"),
    Category.LIFESTYLE: CategoryMeta("#6B52B2", "shopping-bag"),
    Category.HEALTH: CategoryMeta("#3062C0", "heart-pulse"),
    Category.EDUCATION: CategoryMeta("#2898D2", "graduation-cap"),
    Category.TRANSPORT: CategoryMeta("#63C1B5", "car"),
    Category.FAMILY: CategoryMeta("#72BF44", "users"),
    Category.ENTERTAINMENT: CategoryMeta("#A5CF4C", "film"),
    Category.SALARY: CategoryMeta("#34C759", "banknote"),
    Category.FREELANCE: CategoryMeta("#5856D6", "briefcase"),
    Category.INVESTMENTS: CategoryMeta("#AF52DE", "trending-up"),
    Category.GIFT: CategoryMeta("#FF2D55", "gift"),
    Category.OTHER_INCOME: CategoryMeta("#8E8E8E", "coins"),
}

CYCLE_MONTHS = {
    BillingCycle.MONTHLY: 1,
    BillingCycle.QUARTERLY: 3,
    BillingCycle.YEARLY: 12,
}

CURRENCY_SYMBOLS = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.INR: "₹",
    Currency.GBP: "£",
    Currency.CAD: "C$",
    Currency.AUD: "A$",
}

# adding an enum member without a table row must break at import
for _table, _enum in ((CATEGORY_METADATA, Category), (CYCLE_MONTHS, BillingCycle), (CURRENCY_SYMBOLS, Currency)):
    _missing = set(_enum) - set(_table)
    if _missing:
        raise ImportError(f"{_enum.__name__} lookup table is missing {sorted(m.name for m in _missing)}")


def categories_for(kind: TransactionType) -> Tuple[Category, ...]:
    if kind is TransactionType.INCOME:
        return tuple(c for c in Category if c in INCOME_CATEGORIES)
    return EXPENSE_CATEGORIES


def category_color(category: Category) -> str:
    return CATEGORY_METADATA[category].color


def new_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float                 # always positive, direction comes from type
    category: Category
    timestamp: datetime
    note: str = ""
    type: TransactionType = TransactionType.EXPENSE
    payment_method: PaymentMethod = PaymentMethod.UPI


# A spending goal on one expense category
@dataclass(frozen=True)
class Budget:
    id: str
    category: Category
    limit: float
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.category.value


@dataclass(frozen=True)
class Subscription:
    id: str
    name: str
    amount: float
    billing_cycle: BillingCycle
    next_billing_date: date
    alert_enabled: bool = True
    alert_lead_days: int = 3
    category: Category = Category.ENTERTAINMENT


@dataclass(frozen=True)
class CategoryBreakdown:
    category: Category
    amount: float
    percentage: float
    color: str


@dataclass(frozen=True)
class LedgerSummary:
    total_income: float
    total_expense: float
    balance: float
    category_totals: dict = field(default_factory=dict)
    breakdown: tuple = ()

    @property
    def active_categories(self) -> int:
        return len(self.breakdown)


def round_half_up(value: float) -> int:
    # display rounding, 12.5 -> 13 rather than banker's 12
    return int(math.floor(value + 0.5))


def format_money(amount: float, currency: Currency = Currency.USD) -> str:
    return f"{CURRENCY_SYMBOLS[currency]}{round_half_up(amount):,}"


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the last day of the target month."""
    index = day.year * 12 + day.month - 1 + months
    year, month = divmod(index, 12)
    month += 1
    first_of_next = date(year + (month // 12), month % 12 + 1, 1)
    last_day = (first_of_next - timedelta(days=1)).day
    return date(year, month, min(day.day, last_day))


def make_subscription(
    name: str,
    amount: float,
    *,
    billing_cycle: BillingCycle = BillingCycle.MONTHLY,
    next_billing_date: Optional[date] = None,
    alert_enabled: bool = True,
    alert_lead_days: int = 3,
    category: Category = Category.ENTERTAINMENT,
    id: Optional[str] = None,
    today: Optional[date] = None,
) -> Subscription:
    """Build a Subscription from the required fields plus optional overrides.

    Defaults: monthly billing, first charge one cycle after ``today``
    (the current date when omitted), renewal alerts on with a three day
    lead, filed under Entertainment, and a freshly generated id.
    """
    if next_billing_date is None:
        next_billing_date = add_months(today or date.today(), billing_cycle.months)
    return Subscription(
        id=id or new_id(),
        name=name,
        amount=amount,
        billing_cycle=billing_cycle,
        next_billing_date=next_billing_date,
        alert_enabled=alert_enabled,
        alert_lead_days=alert_lead_days,
        category=category,
    )
