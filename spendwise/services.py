from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Optional, Sequence, Tuple

from spendwise import config
from spendwise.aggregation import summarize
from spendwise.budgets import BudgetReport, evaluate_budgets
from spendwise.chart import RingChart, build_ring
from spendwise.constants import sample_transactions
from spendwise.domain import Budget, Currency, LedgerSummary, Subscription, Theme, Transaction
from spendwise.filters import month_scope
from spendwise.subscriptions import total_monthly_cost, upcoming_renewals
from spendwise import transforms


@dataclass(frozen=True)
class AppState:
    """Everything the shell owns. Engine functions only ever read it."""
    transactions: Tuple[Transaction, ...] = ()
    budgets: Tuple[Budget, ...] = ()
    subscriptions: Tuple[Subscription, ...] = ()
    currency: Currency = Currency.USD
    theme: Theme = Theme.LIGHT

    @classmethod
    def seeded(cls) -> "AppState":
        return cls(transactions=sample_transactions())

    def with_transaction(self, t: Transaction) -> "AppState":
        return replace(self, transactions=transforms.add_transaction(self.transactions, t))

    def without_transaction(self, tid: str) -> "AppState":
        return replace(self, transactions=transforms.remove_transaction(self.transactions, tid))

    def cleared(self) -> "AppState":
        return replace(self, transactions=transforms.clear_transactions(self.transactions))

    def with_samples(self) -> "AppState":
        return replace(self, transactions=transforms.restore_samples())

    def with_budgets(self, budgets: Sequence[Budget]) -> "AppState":
        return replace(self, budgets=tuple(budgets))

    def with_subscriptions(self, subs: Sequence[Subscription]) -> "AppState":
        return replace(self, subscriptions=tuple(subs))

    def with_preferences(self, currency: Optional[Currency] = None, theme: Optional[Theme] = None) -> "AppState":
        return replace(self, currency=currency or self.currency, theme=theme or self.theme)


@dataclass(frozen=True)
class Dashboard:
    summary: LedgerSummary
    budgets: BudgetReport
    chart: RingChart
    monthly_subscriptions: float
    renewals: Tuple[Subscription, ...]


class DashboardService:
    """Runs the engine stages over a state snapshot.

    Nothing is cached: every call recomputes from the snapshot it is given.
    ``budget_scope`` picks the ledger goals are measured against; ``"month"``
    pre-filters it to the month of ``today``.
    """

    def __init__(
        self,
        outer_radius: float = config.OUTER_RADIUS,
        inner_radius: float = config.INNER_RADIUS,
        pad_angle: float = config.PAD_ANGLE,
        label_threshold: float = config.LABEL_THRESHOLD,
        budget_scope: str = config.BUDGET_SCOPE,
        today: Callable[[], date] = date.today,
    ):
        if budget_scope not in ("lifetime", "month"):
            raise ValueError(f"unknown budget scope {budget_scope!r}")
        self.outer_radius = outer_radius
        self.inner_radius = inner_radius
        self.pad_angle = pad_angle
        self.label_threshold = label_threshold
        self.budget_scope = budget_scope
        self.today = today

    def budget_report(self, state: AppState) -> BudgetReport:
        trans = state.transactions
        if self.budget_scope == "month":
            trans = month_scope(trans, self.today())
        scoped = summarize(trans)
        return evaluate_budgets(scoped.category_totals, state.budgets, scoped.total_expense)

    def build(self, state: AppState, transactions: Optional[Sequence[Transaction]] = None) -> Dashboard:
        """``transactions`` overrides the ledger shown in the ring, e.g. a month slice."""
        summary = summarize(state.transactions if transactions is None else transactions)
        chart = build_ring(
            summary.breakdown,
            self.outer_radius,
            self.inner_radius,
            pad_angle=self.pad_angle,
            label_threshold=self.label_threshold,
            currency=state.currency,
        )
        return Dashboard(
            summary=summary,
            budgets=self.budget_report(state),
            chart=chart,
            monthly_subscriptions=total_monthly_cost(state.subscriptions),
            renewals=upcoming_renewals(state.subscriptions, self.today()),
        )
