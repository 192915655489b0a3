"""Budget (goal) evaluation against per-category spend.

Several goals may watch the same category. Each one is measured against
the category's full spend; spend is never split between them.

``BudgetStatus.percent`` is the raw consumption ratio and can exceed 100
("143% used"). Anything drawing a bounded indicator such as a progress bar
must size it with ``bar_percent`` (or :func:`clamp_percent`), which caps
at 100.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from spendwise.domain import Budget, Category, round_half_up


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


@dataclass(frozen=True)
class BudgetStatus:
    budget: Budget
    spent: float
    percent: int
    is_over: bool

    @property
    def remaining(self) -> float:
        return max(self.budget.limit - self.spent, 0.0)

    @property
    def overspend(self) -> float:
        return max(self.spent - self.budget.limit, 0.0)

    @property
    def bar_percent(self) -> float:
        return clamp_percent(self.percent)


@dataclass(frozen=True)
class BudgetReport:
    statuses: Tuple[BudgetStatus, ...]
    global_limit: float
    global_percent: float   # ratio, 1.0 means the combined limit is fully used
    remaining: float
    total_expense: float

    @property
    def over(self) -> Tuple[BudgetStatus, ...]:
        return tuple(s for s in self.statuses if s.is_over)

    @property
    def global_bar_percent(self) -> float:
        return clamp_percent(100 * self.global_percent)


def evaluate_budget(b: Budget, totals: Dict[Category, float]) -> BudgetStatus:
    spent = totals.get(b.category, 0.0)
    percent = round_half_up(100 * spent / b.limit) if b.limit > 0 else 0
    return BudgetStatus(budget=b, spent=spent, percent=percent, is_over=b.limit > 0 and spent > b.limit)


def active_budgets(budgets: Iterable[Budget]) -> Tuple[Budget, ...]:
    return tuple(b for b in budgets if b.limit > 0)


def evaluate_budgets(
    totals: Dict[Category, float],
    budgets: Iterable[Budget],
    total_expense: float,
) -> BudgetReport:
    active = active_budgets(budgets)
    global_limit = sum((b.limit for b in active), 0.0)
    return BudgetReport(
        statuses=tuple(evaluate_budget(b, totals) for b in active),
        global_limit=global_limit,
        global_percent=total_expense / global_limit if global_limit > 0 else 0.0,
        remaining=max(global_limit - total_expense, 0.0),
        total_expense=total_expense,
    )


def over_budget(report: BudgetReport) -> Tuple[BudgetStatus, ...]:
    return report.over
