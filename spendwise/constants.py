from datetime import datetime
from typing import Optional, Tuple

from spendwise.domain import Category, PaymentMethod, Transaction, TransactionType

CATEGORY_TAGS = {
    Category.HOUSING: ("House rent", "Maintenance Charges", "Property Tax", "Electricity", "Water Bill"),
    Category.FOOD: ("Groceries", "Dining Out", "Coffee", "Snacks"),
    Category.FINANCE: ("Investment", "Loan EMI", "Insurance", "Savings"),
    Category.TRAVEL: ("Flight", "Hotel", "Taxi", "Sightseeing"),
    Category.LIFESTYLE: ("Clothing", "Personal Care", "Spa", "Gifts"),
    Category.HEALTH: ("Medicine", "Doctor Visit", "Gym", "Lab Test"),
    Category.EDUCATION: ("Course Fee", "Books", "Stationery"),
    Category.TRANSPORT: ("Fuel", "Parking", "Toll", "Repairs"),
    Category.FAMILY: ("Dining", "Gift", "Money Sent", "Event"),
    Category.ENTERTAINMENT: ("Netflix", "Movies", "Gaming", "Concert"),
    Category.SALARY: ("Monthly Pay", "Bonus", "Overtime"),
    Category.FREELANCE: ("Web Project", "Design Work", "Consultation"),
    Category.INVESTMENTS: ("Dividends", "Stock Sale", "Crypto Gain"),
    Category.GIFT: ("Birthday", "Holiday", "Red Envelope"),
    Category.OTHER_INCOME: ("Sold Item", "Refund", "Tax Return"),
}

# (name, monthly price, brand color)
QUICK_ADD_SUBSCRIPTIONS = (
    ("Netflix", 15.99, "#E50914"),
    ("Disney+", 7.99, "#006E99"),
    ("Amazon Prime", 14.99, "#FF9900"),
    ("Spotify", 9.99, "#1DB954"),
    ("YouTube Premium", 11.99, "#FF0000"),
    ("Apple Music", 10.99, "#FB233B"),
    ("ChatGPT Plus", 20.00, "#10a37f"),
    ("iCloud+", 0.99, "#007AFF"),
    ("Adobe CC", 54.99, "#FF0000"),
)

_SAMPLES = (
    ("0", 5000, Category.SALARY, "Monthly Salary", TransactionType.INCOME, PaymentMethod.NET_BANKING),
    ("1", 850, Category.HOUSING, "Rent", TransactionType.EXPENSE, PaymentMethod.NET_BANKING),
    ("2", 620, Category.FOOD, "Weekly Groceries", TransactionType.EXPENSE, PaymentMethod.UPI),
    ("3", 610, Category.FINANCE, "Credit Card Pay", TransactionType.EXPENSE, PaymentMethod.NET_BANKING),
    ("4", 380, Category.TRAVEL, "Hotel Booking", TransactionType.EXPENSE, PaymentMethod.CREDIT_CARD),
    ("5", 320, Category.LIFESTYLE, "New Clothes", TransactionType.EXPENSE, PaymentMethod.DEBIT_CARD),
    ("6", 250, Category.HEALTH, "Pharmacy", TransactionType.EXPENSE, PaymentMethod.UPI),
    ("7", 240, Category.EDUCATION, "Online Course", TransactionType.EXPENSE, PaymentMethod.CREDIT_CARD),
    ("8", 190, Category.TRANSPORT, "Gas", TransactionType.EXPENSE, PaymentMethod.UPI),
    ("9", 180, Category.FAMILY, "Dinner", TransactionType.EXPENSE, PaymentMethod.DEBIT_CARD),
    ("10", 150, Category.ENTERTAINMENT, "Cinema", TransactionType.EXPENSE, PaymentMethod.UPI),
)


def sample_transactions(now: Optional[datetime] = None) -> Tuple[Transaction, ...]:
    """The seeded ledger shown on first launch, all stamped ``now``."""
    ts = now or datetime.now()
    return tuple(
        Transaction(id=tid, amount=float(amount), category=cat, timestamp=ts, note=note, type=kind, payment_method=method)
        for tid, amount, cat, note, kind, method in _SAMPLES
    )
