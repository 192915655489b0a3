"""Plotly figures and pandas frames built from engine output.

Nothing here computes money; it only lays out what the aggregation,
budget and chart modules already decided.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from spendwise.aggregation import summarize
from spendwise.budgets import BudgetReport
from spendwise.chart import RingChart
from spendwise.domain import CategoryBreakdown, Currency, Theme, Transaction, TransactionType, format_money
from spendwise.filters import month_scope

THEME_COLORS = {
    Theme.LIGHT: {"primary": "#1C1C1E", "secondary": "#8E8E93", "hole": "#FFFFFF", "empty": "#f3f4f6"},
    Theme.DARK: {"primary": "#FFFFFF", "secondary": "#8E8E93", "hole": "#1C1C1E", "empty": "#2C2C2E"},
}
ACCENT = "#007AFF"
EMPTY_TEXT = "#9ca3af"


def ring_figure(chart: RingChart, theme: Theme = Theme.LIGHT) -> go.Figure:
    """Draw a :class:`RingChart` with polygon path shapes and text annotations."""
    colors = THEME_COLORS[theme]
    fig = go.Figure()
    r = chart.outer_radius * 1.025

    if chart.is_empty:
        fig.add_shape(type="path", path=chart.empty.outline, fillcolor=colors["empty"], line_width=0)
        fig.add_annotation(x=0, y=0, text=f"<b>{chart.center.value}</b>", showarrow=False,
                           font=dict(size=16, color=EMPTY_TEXT))
    else:
        for seg in chart.segments:
            fig.add_shape(type="path", path=seg.outline, fillcolor=seg.color, line_width=0)
            if seg.label:
                x, y = seg.label_position
                fig.add_annotation(x=x, y=y, text=f"<b>{seg.label}</b>", showarrow=False,
                                   font=dict(size=13, color="white"))
        fig.add_annotation(x=0, y=-18, text=chart.center.title, showarrow=False,
                           font=dict(size=14, color=colors["secondary"]))
        fig.add_annotation(x=0, y=10, text=f"<b>{chart.center.value}</b>", showarrow=False,
                           font=dict(size=28, color=colors["primary"]))
        fig.add_annotation(x=0, y=42, text=chart.center.caption, showarrow=False,
                           font=dict(size=12, color=ACCENT))

    # screen coordinates: y grows downwards
    fig.update_xaxes(range=[-r, r], visible=False, fixedrange=True)
    fig.update_yaxes(range=[r, -r], visible=False, fixedrange=True, scaleanchor="x", scaleratio=1)
    fig.update_layout(
        width=400,
        height=400,
        margin=dict(t=0, b=0, l=0, r=0),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        showlegend=False,
    )
    return fig


def breakdown_frame(rows: Sequence[CategoryBreakdown], currency: Currency = Currency.USD) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=["Category", "Amount", "Share", "Color"])
    return pd.DataFrame([
        {
            "Category": r.category.value,
            "Amount": format_money(r.amount, currency),
            "Share": f"{r.percentage:.1f}%",
            "Color": r.color,
        }
        for r in rows
    ])


def budget_frame(report: BudgetReport, currency: Currency = Currency.USD) -> pd.DataFrame:
    if not report.statuses:
        return pd.DataFrame(columns=["Goal", "Category", "Spent", "Limit", "Used", "Status"])
    return pd.DataFrame([
        {
            "Goal": s.budget.label,
            "Category": s.budget.category.value,
            "Spent": format_money(s.spent, currency),
            "Limit": format_money(s.budget.limit, currency),
            "Used": f"{s.percent}%",
            "Status": "Over" if s.is_over else "On track",
        }
        for s in report.statuses
    ])


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "id": t.id,
            "date": pd.Timestamp(t.timestamp),
            "amount": t.amount,
            "signed": t.amount if t.type is TransactionType.INCOME else -t.amount,
            "category": t.category.value,
            "type": t.type.value,
            "payment": t.payment_method.value,
            "note": t.note,
        }
        for t in trans
    ]
    df = pd.DataFrame(rows, columns=["id", "date", "amount", "signed", "category", "type", "payment", "note"])
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    return df


def monthly_trend(trans: Iterable[Transaction], end: pd.Timestamp, periods: int = 6) -> pd.DataFrame:
    """Income and expense per calendar month for the ``periods`` months ending at ``end``."""
    months = pd.period_range(end=pd.Timestamp(end).to_period("M"), periods=periods, freq="M")
    trans = tuple(trans)
    # each month is summed by the engine, so it matches the dashboard totals
    summaries = [summarize(month_scope(trans, p.start_time.date())) for p in months]
    return pd.DataFrame({
        "month": months.strftime("%b %y"),
        "income": np.array([s.total_income for s in summaries], dtype=float),
        "expense": np.array([s.total_expense for s in summaries], dtype=float),
    })


def trend_figure(trend: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=trend["month"], y=trend["income"], mode="lines+markers", name="Income"))
    fig.add_trace(go.Scatter(x=trend["month"], y=trend["expense"], mode="lines+markers", name="Expense"))
    fig.update_layout(margin=dict(t=30, b=10, l=10, r=10))
    return fig
