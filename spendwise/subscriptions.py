from dataclasses import replace
from datetime import date
from typing import Iterable, Tuple

from spendwise.domain import Subscription, add_months


def monthly_equivalent(s: Subscription) -> float:
    """Billing amount spread over the months of its cycle (yearly / 12, quarterly / 3)."""
    return s.amount / s.billing_cycle.months


def total_monthly_cost(subs: Iterable[Subscription]) -> float:
    return sum((monthly_equivalent(s) for s in subs), 0.0)


def total_yearly_cost(subs: Iterable[Subscription]) -> float:
    return 12 * total_monthly_cost(subs)


def roll_forward(s: Subscription, today: date) -> Subscription:
    """Advance the next billing date by whole cycles until it is not in the past."""
    nxt = s.next_billing_date
    cycles = 0
    while nxt < today:
        cycles += 1
        # always offset from the original date so month-end days don't drift
        nxt = add_months(s.next_billing_date, cycles * s.billing_cycle.months)
    if nxt == s.next_billing_date:
        return s
    return replace(s, next_billing_date=nxt)


def days_until(s: Subscription, today: date) -> int:
    return (s.next_billing_date - today).days


def upcoming_renewals(subs: Iterable[Subscription], today: date) -> Tuple[Subscription, ...]:
    due = [
        s for s in subs
        if s.alert_enabled and 0 <= days_until(s, today) <= s.alert_lead_days
    ]
    return tuple(sorted(due, key=lambda s: s.next_billing_date))
