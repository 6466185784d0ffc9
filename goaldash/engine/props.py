"""Widget prop resolvers.

Each resolver reads the goal snapshot, calls the metric library and returns
(props, warnings). Props are JSON-ready dicts; they are overlaid on the
widget's default props by the assembler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from goaldash.engine import metrics
from goaldash.engine.capability_status import CapabilityStatusProvider
from goaldash.engine.errors import DEGENERATE_INPUT
from goaldash.engine.models import (
    BudgetBreakdown,
    EngineWarning,
    Goal,
    GoalFeatures,
    Streak,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolveContext:
    as_of: date
    features: GoalFeatures
    deadline: date  # target_date, or the default deadline when the goal has none
    status_provider: CapabilityStatusProvider


PropsResult = tuple[dict[str, Any], list[EngineWarning]]
PropResolver = Callable[[Goal, ResolveContext], PropsResult]


def _degenerate(message: str) -> EngineWarning:
    return EngineWarning(code=DEGENERATE_INPUT, message=message)


# ---------------------------------------------------------------------------
# Financial
# ---------------------------------------------------------------------------

def savings_plan_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    plan = metrics.savings_plan(goal.estimated_cost, goal.current_saved, ctx.deadline, ctx.as_of)
    progress = metrics.savings_progress(goal.estimated_cost, goal.current_saved)

    warnings: list[EngineWarning] = []
    if plan.deadline_passed and plan.remaining > 0.0:
        warnings.append(_degenerate("Deadline has passed; savings rates assume one day left."))

    return {
        "estimated_cost": goal.estimated_cost or 0.0,
        "current_saved": goal.current_saved,
        "target_date": ctx.deadline.isoformat(),
        "savings_needed": plan.model_dump(mode="json"),
        "progress": progress.model_dump(mode="json"),
    }, warnings


def savings_progress_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    progress = metrics.savings_progress(goal.estimated_cost, goal.current_saved)
    days_until_target = (goal.target_date - ctx.as_of).days if goal.target_date else None
    return {
        "target_amount": goal.estimated_cost or 0.0,
        "current_saved": goal.current_saved,
        "progress": progress.model_dump(mode="json"),
        "days_until_target": days_until_target,
    }, []


def debt_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    dp = goal.domain_progress
    plan = metrics.debt_payoff_plan(dp.debts, dp.payoff_strategy, dp.extra_payment)

    warnings: list[EngineWarning] = []
    for line in plan.lines:
        if not line.payoff.resolvable:
            label = line.name or line.debt_id
            logger.info("Debt %s on goal %s never resolves at %.2f/month", label, goal.id, line.monthly_payment)
            warnings.append(_degenerate(f"Payment on '{label}' does not cover its interest; it never pays off."))

    return {
        "strategy": plan.strategy.value,
        "extra_payment": dp.extra_payment,
        "plan": plan.model_dump(mode="json"),
    }, warnings


def budget_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    categories = goal.domain_progress.budget_categories
    if categories:
        breakdown = metrics.budget_breakdown(categories)
    else:
        # Nothing itemized yet: the whole estimate is unspent budget
        breakdown = BudgetBreakdown(total=metrics.budget_variance(goal.estimated_cost or 0.0, 0.0))

    warnings: list[EngineWarning] = []
    unbudgeted = [line.category for line in breakdown.lines if line.estimated <= 0.0 and line.actual > 0.0]
    if unbudgeted:
        warnings.append(_degenerate(f"Spending without a budget: {', '.join(unbudgeted)}."))

    return {
        "total_budget": breakdown.total.estimated,
        "total_spent": breakdown.total.actual,
        "breakdown": breakdown.model_dump(mode="json"),
        "over_budget_categories": [line.category for line in breakdown.lines if line.over_budget],
    }, warnings


# ---------------------------------------------------------------------------
# Progress & tracking
# ---------------------------------------------------------------------------

def _financial_pct(goal: Goal) -> float | None:
    if not goal.estimated_cost or goal.estimated_cost <= 0.0:
        return None
    return metrics.savings_progress(goal.estimated_cost, goal.current_saved).percentage


def progress_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    dp = goal.domain_progress
    task_pct = metrics.task_completion_pct(dp.tasks)
    financial = _financial_pct(goal)
    if financial is None:
        overall = metrics.clamp_pct(task_pct)
    else:
        overall = metrics.overall_goal_progress(financial, task_pct)

    time_pct = metrics.time_progress_pct(goal.created_at, goal.target_date, ctx.as_of)
    return {
        "overall_progress": round(overall, 1),
        "financial_progress": round(financial, 1) if financial is not None else None,
        "over_saved": financial is not None and financial > 100.0,
        "task_completion": round(task_pct, 1),
        "time_progress": round(time_pct, 1),
        "schedule_status": metrics.schedule_status(goal.status.value, task_pct, time_pct),
        "milestones": metrics.percent_milestones(overall),
    }, []


def milestone_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    props, warnings = progress_props(goal, ctx)
    return {
        "target_date": ctx.deadline.isoformat(),
        "days_left": metrics.days_until(ctx.deadline, ctx.as_of),
        "overall_progress": props["overall_progress"],
        "milestones": props["milestones"],
    }, warnings


def deadline_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    return {
        "target_date": ctx.deadline.isoformat(),
        "has_deadline": ctx.features.has_deadline,
        "days_left": metrics.days_until(ctx.deadline, ctx.as_of),
    }, []


def task_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    tasks = goal.domain_progress.tasks
    return {
        "tasks": [t.model_dump(mode="json") for t in tasks],
        "completed": sum(1 for t in tasks if t.completed),
        "total": len(tasks),
        "completion_pct": round(metrics.task_completion_pct(tasks), 1),
    }, []


def streak_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    streak = goal.domain_progress.streak or Streak()
    milestone = metrics.progress_to_next_milestone(streak.current_streak)
    return {
        "current_streak": streak.current_streak,
        "longest_streak": streak.longest_streak,
        "unit": streak.unit,
        "last_activity_date": streak.last_activity_date.isoformat() if streak.last_activity_date else None,
        "level": milestone.level,
        "milestone": milestone.model_dump(mode="json"),
    }, []


def capability_status_props(goal: Goal, ctx: ResolveContext) -> PropsResult:
    capabilities = sorted(ctx.features.capabilities)
    return {
        "assigned_capabilities": capabilities,
        "capability_status": {c: ctx.status_provider.get_status(c) for c in capabilities},
    }, []
