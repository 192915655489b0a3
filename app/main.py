import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date, datetime

import pandas as pd
import plotly.express as px
import streamlit as st

from spendwise import config
from spendwise.aggregation import summarize
from spendwise.constants import CATEGORY_TAGS, QUICK_ADD_SUBSCRIPTIONS
from spendwise.domain import (
    BillingCycle,
    Budget,
    CATEGORY_METADATA,
    Currency,
    EXPENSE_CATEGORIES,
    PaymentMethod,
    Theme,
    Transaction,
    TransactionType,
    categories_for,
    format_money,
    make_subscription,
    new_id,
)
from spendwise.events import (
    event_bus,
    TRANSACTION_ADDED,
    TRANSACTION_REMOVED,
    LEDGER_RESET,
    RENEWAL_ALERT,
)
from spendwise.figures import breakdown_frame, budget_frame, monthly_trend, ring_figure, transactions_frame, trend_figure
from spendwise.filters import history, month_label, month_scope, shift_month
from spendwise.functional import parse_amount, validate_budget, validate_transaction
from spendwise.services import DashboardService
from spendwise.storage import Storage
from spendwise.subscriptions import monthly_equivalent, roll_forward, total_monthly_cost, total_yearly_cost
from spendwise import transforms

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("spendwise.app")

st.set_page_config(page_title="SpendWise", layout="centered")

storage = Storage()
service = DashboardService()

NONE = "(none)"

if "state" not in st.session_state:
    state = storage.load_state()
    # bring stale renewal dates up to today before anything reads them
    state = state.with_subscriptions(roll_forward(s, date.today()) for s in state.subscriptions)
    st.session_state.state = state
if "selected_month" not in st.session_state:
    st.session_state.selected_month = date.today().replace(day=1)
if "alerts" not in st.session_state:
    st.session_state.alerts = []


def commit(new_state):
    """Swap in a new state snapshot and persist it."""
    st.session_state.state = new_state
    storage.save_state(new_state)


def money(amount):
    return format_money(amount, st.session_state.state.currency)


def apply_outcomes(outcomes):
    """Fold event handler results into the alert list shown on the Budget page."""
    for outcome in outcomes:
        if outcome.get("clear_alerts"):
            st.session_state.alerts = []
        st.session_state.alerts.extend(outcome.get("alerts", []))


state = st.session_state.state

menu = st.sidebar.radio("Menu", ["📊 Budget", "🗓 History", "🔁 Subscriptions", "⚙️ Settings"])

renewal_alerts = [
    a for r in event_bus.publish(RENEWAL_ALERT, {"subscriptions": state.subscriptions, "today": date.today()})
    for a in r.get("alerts", [])
]
for alert in renewal_alerts:
    st.sidebar.warning(f"🔔 {alert['message']}")

if menu == "📊 Budget":
    dash = service.build(state)
    summary = dash.summary

    k1, k2, k3 = st.columns(3)
    k1.metric("Income", money(summary.total_income))
    k2.metric("Spent", money(summary.total_expense))
    k3.metric("Balance", money(summary.balance))

    st.plotly_chart(ring_figure(dash.chart, state.theme), use_container_width=False)

    st.subheader("Categories")
    if summary.breakdown:
        for row in summary.breakdown:
            with st.expander(f"{row.category.value} · {money(row.amount)} · {row.percentage:.0f}%"):
                related = [
                    t for t in state.transactions
                    if t.category is row.category and t.type is TransactionType.EXPENSE
                ]
                st.table(transactions_frame(related)[["date", "amount", "note", "payment"]])
    else:
        st.info("No activity yet")

    st.subheader("🎯 Goals")
    report = dash.budgets
    if report.statuses:
        g1, g2, g3 = st.columns(3)
        g1.metric("Combined limit", money(report.global_limit))
        g2.metric("Used", f"{100 * report.global_percent:.0f}%")
        g3.metric("Left", money(report.remaining))
        st.progress(report.global_bar_percent / 100)
        for s in report.statuses:
            label = f"**{s.budget.label}** · {money(s.spent)} / {money(s.budget.limit)} ({s.percent}%)"
            if s.is_over:
                st.error(f"{label} · {money(s.overspend)} over")
            else:
                st.write(label)
            st.progress(s.bar_percent / 100)
    else:
        st.info("No goals yet")

    with st.form("add_goal", clear_on_submit=True):
        st.write("New goal")
        c1, c2, c3 = st.columns([2, 2, 1])
        goal_name = c1.text_input("Name (optional)")
        goal_cat = c2.selectbox("Category", EXPENSE_CATEGORIES, format_func=lambda c: c.value)
        goal_limit = c3.text_input("Limit")
        if st.form_submit_button("Add goal"):
            result = parse_amount(goal_limit).bind(
                lambda limit: validate_budget(Budget(id=new_id(), category=goal_cat, limit=limit, name=goal_name or None))
            )
            if result.is_right():
                commit(state.with_budgets(transforms.add_budget(state.budgets, result.get_or_else(None))))
                st.rerun()
            else:
                st.error(result.get_error()["message"])

    if state.budgets:
        goal_labels = {f"{b.label} ({money(b.limit)})": b.id for b in state.budgets}
        to_drop = st.selectbox("Remove goal", [NONE] + list(goal_labels))
        if to_drop != NONE and st.button("Delete goal"):
            commit(state.with_budgets(transforms.remove_budget(state.budgets, goal_labels[to_drop])))
            st.rerun()

    st.divider()
    st.subheader("➕ Add transaction")
    kind = st.radio("Type", [TransactionType.EXPENSE, TransactionType.INCOME],
                    format_func=lambda k: k.value.title(), horizontal=True)
    with st.form("add_transaction", clear_on_submit=True):
        c1, c2 = st.columns(2)
        amount_raw = c1.text_input("Amount")
        category = c2.selectbox("Category", categories_for(kind), format_func=lambda c: c.value)
        tag = st.selectbox("Quick note", [NONE] + list(CATEGORY_TAGS.get(category, ())))
        note = st.text_input("Note")
        method = st.selectbox("Payment method", list(PaymentMethod), format_func=lambda m: m.value)
        if st.form_submit_button("Add"):
            result = parse_amount(amount_raw).bind(lambda amount: validate_transaction(Transaction(
                id=new_id(),
                amount=amount,
                category=category,
                timestamp=datetime.now(),
                note=note or (tag if tag != NONE else category.value),
                type=kind,
                payment_method=method,
            )))
            if result.is_left():
                st.error(result.get_error()["message"])
            else:
                t = result.get_or_else(None)
                new_state = state.with_transaction(t)
                outcomes = event_bus.publish(TRANSACTION_ADDED, {
                    "transaction": t,
                    "transactions": new_state.transactions,
                    "budgets": new_state.budgets,
                    "currency": new_state.currency,
                    "scope": service.budget_scope,
                    "today": date.today(),
                })
                apply_outcomes(outcomes)
                commit(new_state)
                logger.info("Added %s of %s in %s", t.type.value, t.amount, t.category.value)
                st.rerun()

    for alert in st.session_state.alerts[-5:]:
        st.warning(f"⚠️ {alert['message']}")

    with st.expander("Breakdown table"):
        st.table(breakdown_frame(summary.breakdown, state.currency))
        st.table(budget_frame(report, state.currency))

elif menu == "🗓 History":
    st.title("🗓 History")
    selected = st.session_state.selected_month
    c_prev, c_label, c_next = st.columns([1, 3, 1])
    if c_prev.button("◀", key="prev_month"):
        st.session_state.selected_month = shift_month(selected, -1)
        st.rerun()
    c_label.markdown(f"### {month_label(selected)}")
    if c_next.button("▶", key="next_month"):
        st.session_state.selected_month = shift_month(selected, 1)
        st.rerun()

    month_summary = summarize(month_scope(state.transactions, selected))
    m1, m2, m3 = st.columns(3)
    m1.metric("Income", money(month_summary.total_income))
    m2.metric("Spent", money(month_summary.total_expense))
    m3.metric("Balance", money(month_summary.balance))

    term = st.text_input("Search notes or categories")
    rows = history(state.transactions, selected, term)
    if rows:
        for t in rows:
            sign = "+" if t.type is TransactionType.INCOME else "−"
            c1, c2 = st.columns([5, 1])
            c1.write(f"{t.timestamp:%d %b %H:%M} · **{t.note}** · {t.category.value} · {sign}{money(t.amount)}")
            if c2.button("🗑", key=f"del_{t.id}"):
                new_state = state.without_transaction(t.id)
                apply_outcomes(event_bus.publish(TRANSACTION_REMOVED, {"transaction": t}))
                commit(new_state)
                st.rerun()
        csv = transactions_frame(rows).to_csv(index=False)
        st.download_button("⬇ Download CSV", csv, file_name=f"transactions_{selected:%Y_%m}.csv")
    else:
        st.info("No transactions this month")

    trend = monthly_trend(state.transactions, pd.Timestamp(selected), periods=6)
    st.plotly_chart(trend_figure(trend), use_container_width=True)

elif menu == "🔁 Subscriptions":
    st.title("🔁 Subscriptions")
    m1, m2 = st.columns(2)
    m1.metric("Monthly cost", money(total_monthly_cost(state.subscriptions)),
              help="Quarterly and yearly plans are spread across their months")
    m2.metric("Yearly cost", money(total_yearly_cost(state.subscriptions)))

    if state.subscriptions:
        df = pd.DataFrame([
            {
                "Name": s.name,
                "Amount": money(s.amount),
                "Cycle": s.billing_cycle.value,
                "Per month": money(monthly_equivalent(s)),
                "Next billing": s.next_billing_date.isoformat(),
                "Alert": f"{s.alert_lead_days}d" if s.alert_enabled else "off",
            }
            for s in state.subscriptions
        ])
        st.table(df)
        costs = pd.DataFrame({
            "Name": [s.name for s in state.subscriptions],
            "Per month": [monthly_equivalent(s) for s in state.subscriptions],
        })
        fig = px.bar(costs, x="Name", y="Per month", title="Monthly-equivalent cost")
        st.plotly_chart(fig, use_container_width=True)
        names = {s.name: s.id for s in state.subscriptions}
        drop = st.selectbox("Remove subscription", [NONE] + list(names))
        if drop != NONE and st.button("Delete subscription"):
            commit(state.with_subscriptions(transforms.remove_subscription(state.subscriptions, names[drop])))
            st.rerun()
    else:
        st.info("No subscriptions tracked")

    st.subheader("Quick add")
    cols = st.columns(3)
    for i, (name, price, color) in enumerate(QUICK_ADD_SUBSCRIPTIONS):
        if cols[i % 3].button(f"{name} · {money(price)}", key=f"quick_{i}"):
            commit(state.with_subscriptions(transforms.add_subscription(state.subscriptions, make_subscription(name, price))))
            st.rerun()

    with st.form("add_subscription", clear_on_submit=True):
        st.write("Custom subscription")
        c1, c2, c3 = st.columns(3)
        name = c1.text_input("Name")
        amount_raw = c2.text_input("Amount")
        cycle = c3.selectbox("Billing cycle", list(BillingCycle), format_func=lambda c: c.value.title())
        next_date = st.date_input("Next billing date", value=None)
        alert_on = st.checkbox("Remind me", value=True)
        lead = st.number_input("Days before", min_value=0, max_value=30, value=3)
        if st.form_submit_button("Add subscription"):
            parsed = parse_amount(amount_raw)
            if not name.strip():
                st.error("Name is required")
            elif parsed.is_left():
                st.error(parsed.get_error()["message"])
            else:
                sub = make_subscription(
                    name.strip(),
                    parsed.get_or_else(0.0),
                    billing_cycle=cycle,
                    next_billing_date=next_date,
                    alert_enabled=alert_on,
                    alert_lead_days=int(lead),
                )
                commit(state.with_subscriptions(transforms.add_subscription(state.subscriptions, sub)))
                st.rerun()

elif menu == "⚙️ Settings":
    st.title("⚙️ Settings")
    currencies = list(Currency)
    currency = st.selectbox("Currency", currencies, index=currencies.index(state.currency), format_func=lambda c: c.value)
    themes = list(Theme)
    theme = st.radio("Chart theme", themes, index=themes.index(state.theme), format_func=lambda t: t.value.title(), horizontal=True)
    if currency is not state.currency or theme is not state.theme:
        commit(state.with_preferences(currency=currency, theme=theme))
        st.rerun()

    st.divider()
    st.subheader("Data")
    st.caption(f"Stored in {storage.data_dir}")
    confirm = st.checkbox("I understand this replaces my current transactions")
    c1, c2 = st.columns(2)
    if c1.button("Restore samples", disabled=not confirm):
        commit(state.with_samples())
        apply_outcomes(event_bus.publish(LEDGER_RESET, {"reason": "samples"}))
        st.rerun()
    if c2.button("Clear all data", type="primary", disabled=not confirm):
        commit(state.cleared())
        apply_outcomes(event_bus.publish(LEDGER_RESET, {"reason": "cleared"}))
        st.rerun()

    st.subheader("Category colors")
    st.table(pd.DataFrame([
        {"Category": c.value, "Kind": "income" if c.is_income() else "expense", "Color": meta.color, "Icon": meta.icon}
        for c, meta in CATEGORY_METADATA.items()
    ]))
