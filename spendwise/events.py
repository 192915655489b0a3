from datetime import date, datetime
from typing import Callable, Dict, List, NamedTuple

from spendwise import config
from spendwise.aggregation import summarize
from spendwise.budgets import evaluate_budgets
from spendwise.domain import Currency, TransactionType, format_money
from spendwise.filters import month_scope
from spendwise.subscriptions import days_until, upcoming_renewals

__all__ = [
    'event_bus', 'Event', 'EventBus',
    'TRANSACTION_ADDED', 'TRANSACTION_REMOVED', 'LEDGER_RESET', 'BUDGET_ALERT', 'RENEWAL_ALERT',
    'check_budget_handler', 'check_renewals_handler', 'clear_alerts_handler', 'register_default_handlers',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event, dict], dict]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        handlers = self._subscribers.setdefault(name, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )

        return [handler(event, payload) for handler in list(self._subscribers[name])]

    def unsubscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_REMOVED = "TRANSACTION_REMOVED"
LEDGER_RESET = "LEDGER_RESET"
BUDGET_ALERT = "BUDGET_ALERT"
RENEWAL_ALERT = "RENEWAL_ALERT"

event_bus = EventBus()


def check_budget_handler(event: Event, payload: dict) -> dict:
    """Re-evaluate the goals on the new expense's category and report those now over.

    payload: transaction, transactions (ledger after the change), budgets,
    currency, and optionally scope ("lifetime" or "month") and today. Goals
    are measured over the same ledger the dashboard uses for that scope.
    """
    t = payload["transaction"]
    if t.type is not TransactionType.EXPENSE:
        return {}

    trans = payload.get("transactions", ())
    if payload.get("scope", config.BUDGET_SCOPE) == "month":
        trans = month_scope(trans, payload.get("today") or date.today())
    summary = summarize(trans)
    watching = [b for b in payload.get("budgets", ()) if b.category is t.category]
    report = evaluate_budgets(summary.category_totals, watching, summary.total_expense)
    currency = payload.get("currency", Currency.USD)
    alerts = [
        {
            "type": BUDGET_ALERT,
            "budget_id": s.budget.id,
            "message": (
                f"Goal '{s.budget.label}' exceeded: "
                f"{format_money(s.spent, currency)} / "
                f"{format_money(s.budget.limit, currency)} ({s.percent}%)"
            ),
            "spent": s.spent,
            "limit": s.budget.limit,
        }
        for s in report.over
    ]
    return {"alerts": alerts} if alerts else {}


def check_renewals_handler(event: Event, payload: dict) -> dict:
    """payload: subscriptions, today"""
    today = payload["today"]
    alerts = []
    for s in upcoming_renewals(payload.get("subscriptions", ()), today):
        days = days_until(s, today)
        when = "today" if days == 0 else f"in {days} day{'s' if days != 1 else ''}"
        alerts.append({
            "type": RENEWAL_ALERT,
            "subscription_id": s.id,
            "message": f"{s.name} renews {when}",
            "due": s.next_billing_date,
        })
    return {"alerts": alerts} if alerts else {}


def clear_alerts_handler(event: Event, payload: dict) -> dict:
    # goal alerts describe the ledger as it was before the change
    return {"clear_alerts": True, "reason": payload.get("reason", event.name)}


def register_default_handlers(bus: EventBus = event_bus) -> EventBus:
    bus.subscribe(TRANSACTION_ADDED, check_budget_handler)
    bus.subscribe(TRANSACTION_REMOVED, clear_alerts_handler)
    bus.subscribe(LEDGER_RESET, clear_alerts_handler)
    bus.subscribe(RENEWAL_ALERT, check_renewals_handler)
    return bus


register_default_handlers()
