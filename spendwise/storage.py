"""JSON persistence for the ledger, goals, subscriptions and preferences.

Each value lives in its own file under the data directory and is loaded
independently, so one corrupt file never takes the others down. A file
that is missing, unreadable or the wrong shape falls back to its default;
a bad record inside an otherwise valid list is dropped on its own.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from spendwise import config
from spendwise.constants import sample_transactions
from spendwise.domain import (
    BillingCycle,
    Budget,
    Currency,
    PaymentMethod,
    Subscription,
    Theme,
    Transaction,
    TransactionType,
    make_subscription,
    new_id,
)
from spendwise.functional import Either, Left, parse_amount, safe_category, validate_budget, validate_transaction
from spendwise.services import AppState

logger = logging.getLogger(__name__)

TRANSACTIONS_FILE = "transactions.json"
BUDGETS_FILE = "budgets.json"
SUBSCRIPTIONS_FILE = "subscriptions.json"
PREFERENCES_FILE = "preferences.json"

DEFAULT_PREFERENCES = {"currency": Currency.USD, "theme": Theme.LIGHT}


def parse_timestamp(raw: str) -> datetime:
    # browsers write a trailing Z, which fromisoformat only accepts on newer interpreters
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    ts = datetime.fromisoformat(text)
    if ts.tzinfo is not None:
        ts = ts.astimezone().replace(tzinfo=None)
    return ts


def _bad(kind: str, raw: Any, reason: str) -> Left:
    return Left({"error": f"invalid_{kind}", "message": reason, "record": raw})


def encode_transaction(t: Transaction) -> Dict[str, Any]:
    return {
        "id": t.id,
        "amount": t.amount,
        "category": t.category.value,
        "date": t.timestamp.isoformat(),
        "note": t.note,
        "type": t.type.value,
        "paymentMethod": t.payment_method.value,
    }


def decode_transaction(raw: Any) -> Either[dict, Transaction]:
    if not isinstance(raw, dict):
        return _bad("transaction", raw, "record is not an object")
    category = safe_category(str(raw.get("category", ""))).get_or_else(None)
    if category is None:
        return _bad("transaction", raw, f"unknown category {raw.get('category')!r}")
    try:
        kind = TransactionType(raw.get("type", TransactionType.EXPENSE.value))
        method = PaymentMethod(raw.get("paymentMethod") or raw.get("paymentType") or PaymentMethod.UPI.value)
        ts = parse_timestamp(str(raw["date"]))
    except (KeyError, ValueError) as e:
        return _bad("transaction", raw, str(e))
    return parse_amount(raw.get("amount")).bind(lambda amount: validate_transaction(Transaction(
        id=str(raw.get("id") or new_id()),
        amount=amount,
        category=category,
        timestamp=ts,
        note=str(raw.get("note") or ""),
        type=kind,
        payment_method=method,
    )))


def encode_budget(b: Budget) -> Dict[str, Any]:
    return {"id": b.id, "name": b.name, "category": b.category.value, "limit": b.limit}


def decode_budget(raw: Any) -> Either[dict, Budget]:
    # also reads the older one-goal-per-category shape, {category, limit} with no id
    if not isinstance(raw, dict):
        return _bad("budget", raw, "record is not an object")
    category = safe_category(str(raw.get("category", ""))).get_or_else(None)
    if category is None:
        return _bad("budget", raw, f"unknown category {raw.get('category')!r}")
    return parse_amount(raw.get("limit")).bind(lambda limit: validate_budget(Budget(
        id=str(raw.get("id") or new_id()),
        category=category,
        limit=limit,
        name=raw.get("name") or None,
    )))


def encode_subscription(s: Subscription) -> Dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "amount": s.amount,
        "billingCycle": s.billing_cycle.value,
        "nextBillingDate": s.next_billing_date.isoformat(),
        "alertEnabled": s.alert_enabled,
        "alertLeadDays": s.alert_lead_days,
        "category": s.category.value,
    }


def decode_subscription(raw: Any) -> Either[dict, Subscription]:
    if not isinstance(raw, dict) or not raw.get("name"):
        return _bad("subscription", raw, "record needs at least a name")
    overrides: Dict[str, Any] = {}
    try:
        if "billingCycle" in raw:
            overrides["billing_cycle"] = BillingCycle(str(raw["billingCycle"]).lower())
        if raw.get("nextBillingDate"):
            overrides["next_billing_date"] = date.fromisoformat(str(raw["nextBillingDate"])[:10])
        if "alertEnabled" in raw:
            overrides["alert_enabled"] = bool(raw["alertEnabled"])
        if "alertLeadDays" in raw:
            overrides["alert_lead_days"] = max(int(raw["alertLeadDays"]), 0)
    except (TypeError, ValueError) as e:
        return _bad("subscription", raw, str(e))
    if "category" in raw:
        category = safe_category(str(raw["category"])).get_or_else(None)
        if category is None:
            return _bad("subscription", raw, f"unknown category {raw['category']!r}")
        overrides["category"] = category
    return parse_amount(raw.get("amount")).map(lambda amount: make_subscription(
        str(raw["name"]), amount, id=raw.get("id") or None, **overrides,
    ))


def _decode_list(raw: Any, decode: Callable[[Any], Either], kind: str) -> Optional[Tuple]:
    if not isinstance(raw, list):
        logger.warning("Stored %s is not a list, using defaults", kind)
        return None
    kept = []
    for item in raw:
        result = decode(item)
        if result.is_right():
            kept.append(result.get_or_else(None))
        else:
            logger.warning("Dropping stored %s record: %s", kind, result.get_error()["message"])
    return tuple(kept)


class Storage:
    """Reads and writes the app state as independent JSON documents."""

    def __init__(self, data_dir: Path | str | None = None):
        self.data_dir = Path(data_dir or config.DATA_DIR)

    def _path(self, name: str) -> Path:
        return self.data_dir / name

    def _read(self, name: str) -> Any:
        path = self._path(name)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Failed to read %s, using defaults: %s", path, e)
            return None

    def _write(self, name: str, payload: Any) -> None:
        config.ensure_data_directory(self.data_dir)
        path = self._path(name)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        tmp.replace(path)

    def load_transactions(self) -> Tuple[Transaction, ...]:
        raw = self._read(TRANSACTIONS_FILE)
        if raw is None:
            return sample_transactions()
        decoded = _decode_list(raw, decode_transaction, "transaction")
        return sample_transactions() if decoded is None else decoded

    def save_transactions(self, trans: Tuple[Transaction, ...]) -> None:
        self._write(TRANSACTIONS_FILE, [encode_transaction(t) for t in trans])

    def load_budgets(self) -> Tuple[Budget, ...]:
        raw = self._read(BUDGETS_FILE)
        if raw is None:
            return ()
        return _decode_list(raw, decode_budget, "budget") or ()

    def save_budgets(self, budgets: Tuple[Budget, ...]) -> None:
        self._write(BUDGETS_FILE, [encode_budget(b) for b in budgets])

    def load_subscriptions(self) -> Tuple[Subscription, ...]:
        raw = self._read(SUBSCRIPTIONS_FILE)
        if raw is None:
            return ()
        return _decode_list(raw, decode_subscription, "subscription") or ()

    def save_subscriptions(self, subs: Tuple[Subscription, ...]) -> None:
        self._write(SUBSCRIPTIONS_FILE, [encode_subscription(s) for s in subs])

    def load_preferences(self) -> Dict[str, Any]:
        raw = self._read(PREFERENCES_FILE)
        prefs = dict(DEFAULT_PREFERENCES)
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Stored preferences are not an object, using defaults")
            return prefs
        for key, enum in (("currency", Currency), ("theme", Theme)):
            try:
                prefs[key] = enum(raw.get(key, prefs[key]))
            except ValueError:
                logger.warning("Unknown %s %r in preferences, using %s", key, raw.get(key), prefs[key].value)
        return prefs

    def save_preferences(self, currency: Currency, theme: Theme) -> None:
        self._write(PREFERENCES_FILE, {"currency": currency.value, "theme": theme.value})

    def load_state(self) -> AppState:
        prefs = self.load_preferences()
        return AppState(
            transactions=self.load_transactions(),
            budgets=self.load_budgets(),
            subscriptions=self.load_subscriptions(),
            currency=prefs["currency"],
            theme=prefs["theme"],
        )

    def save_state(self, state: AppState) -> None:
        self.save_transactions(state.transactions)
        self.save_budgets(state.budgets)
        self.save_subscriptions(state.subscriptions)
        self.save_preferences(state.currency, state.theme)
