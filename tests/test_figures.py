from datetime import datetime
import re

import pandas as pd
import plotly.graph_objects as go

from spendwise.aggregation import summarize
from spendwise.budgets import evaluate_budgets
from spendwise.chart import build_ring
from spendwise.domain import Budget, Category, Currency, Theme, Transaction, TransactionType
from spendwise.figures import breakdown_frame, budget_frame, monthly_trend, ring_figure, transactions_frame, trend_figure


def make_tx(id, amount, category, ts, kind=TransactionType.EXPENSE, note=""):
    return Transaction(id=id, amount=amount, category=category, timestamp=ts, note=note, type=kind)


LEDGER = (
    make_tx("t1", 900, Category.HOUSING, datetime(2026, 10, 2)),
    make_tx("t2", 60, Category.FOOD, datetime(2026, 10, 3)),
    make_tx("t3", 40, Category.HEALTH, datetime(2026, 8, 15)),
    make_tx("t4", 2000, Category.SALARY, datetime(2026, 9, 1), TransactionType.INCOME),
)


def test_ring_figure_draws_one_shape_per_segment():
    chart = build_ring(summarize(LEDGER).breakdown, 195, 113)
    fig = ring_figure(chart)

    assert isinstance(fig, go.Figure)
    assert len(fig.layout.shapes) == 3
    assert [s.fillcolor for s in fig.layout.shapes] == ["#F8D548", "#F38B3C", "#3062C0"]
    texts = [a.text for a in fig.layout.annotations]
    # only the 90% slice is wide enough for a label
    assert "<b>90%</b>" in texts
    assert "Total Spent" in texts
    assert "3 categories active" in texts


def test_ring_figure_shapes_have_no_arc_commands():
    # plotly shape paths only understand M L H V Q C T S Z
    for data in (summarize(LEDGER).breakdown, ()):
        fig = ring_figure(build_ring(data, 195, 113))
        for shape in fig.layout.shapes:
            assert set(re.findall(r"[A-Za-z]", shape.path)) <= {"M", "L", "Z"}


def test_ring_figure_empty_dark():
    fig = ring_figure(build_ring((), 195, 113), Theme.DARK)

    assert len(fig.layout.shapes) == 1
    assert fig.layout.shapes[0].fillcolor == "#2C2C2E"
    assert fig.layout.annotations[0].text == "<b>No activity yet</b>"


def test_breakdown_frame():
    df = breakdown_frame(summarize(LEDGER).breakdown, Currency.EUR)

    assert list(df["Category"]) == ["Housing & Utilities", "Food & Groceries", "Health & Medical"]
    assert list(df["Amount"]) == ["€900", "€60", "€40"]
    assert list(df["Share"]) == ["90.0%", "6.0%", "4.0%"]
    assert breakdown_frame(()).empty


def test_budget_frame():
    s = summarize(LEDGER)
    report = evaluate_budgets(s.category_totals, (Budget("b1", Category.FOOD, 50, name="Food"),), s.total_expense)

    df = budget_frame(report)
    assert df.iloc[0].to_dict() == {
        "Goal": "Food", "Category": "Food & Groceries", "Spent": "$60", "Limit": "$50", "Used": "120%", "Status": "Over",
    }


def test_transactions_frame_signs_amounts():
    df = transactions_frame(LEDGER)

    assert list(df["signed"]) == [-900, -60, -40, 2000]
    assert pd.api.types.is_datetime64_any_dtype(df["date"])
    assert transactions_frame(()).empty


def test_monthly_trend():
    trend = monthly_trend(LEDGER, pd.Timestamp("2026-10-31"), periods=3)

    assert list(trend["month"]) == ["Aug 26", "Sep 26", "Oct 26"]
    assert list(trend["income"]) == [0, 2000, 0]
    assert list(trend["expense"]) == [40, 0, 960]


def test_monthly_trend_empty_ledger():
    trend = monthly_trend((), pd.Timestamp("2026-10-31"), periods=2)

    assert list(trend["income"]) == [0, 0]
    assert len(trend_figure(trend).data) == 2


def test_monthly_trend_agrees_with_summarize():
    ledger = (
        make_tx("a", 100, Category.FOOD, datetime(2026, 10, 2)),
        make_tx("b", -60, Category.FOOD, datetime(2026, 10, 3)),
        make_tx("c", 40, Category.SALARY, datetime(2026, 10, 4)),
        make_tx("d", float("nan"), Category.GIFT, datetime(2026, 10, 5), TransactionType.INCOME),
    )

    trend = monthly_trend(ledger, pd.Timestamp("2026-10-31"), periods=1)
    s = summarize(ledger)

    assert list(trend["expense"]) == [s.total_expense] == [140]
    assert list(trend["income"]) == [s.total_income] == [0]
