"""Standalone calculators over the metric library."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from goaldash.engine import metrics
from goaldash.engine.models import (
    BudgetBreakdown,
    BudgetCategory,
    Debt,
    DebtPayoffPlan,
    PayoffStrategy,
    SavingsPlan,
    SavingsProgress,
    Streak,
    StreakMilestone,
)

router = APIRouter(prefix="/metrics", tags=["metrics"])


class SavingsRequest(BaseModel):
    target: float
    current: float = 0.0
    deadline: date
    as_of: date | None = None


class SavingsResponse(BaseModel):
    plan: SavingsPlan
    progress: SavingsProgress


class PayoffRequest(BaseModel):
    debts: list[Debt] = Field(default_factory=list)
    strategy: PayoffStrategy = PayoffStrategy.avalanche
    extra_payment: float = 0.0


class BudgetRequest(BaseModel):
    categories: list[BudgetCategory] = Field(default_factory=list)


class StreakActivityRequest(BaseModel):
    streak: Streak = Field(default_factory=Streak)
    day: date


@router.post("/savings", response_model=SavingsResponse)
async def savings(body: SavingsRequest) -> SavingsResponse:
    now = body.as_of or date.today()
    return SavingsResponse(
        plan=metrics.savings_plan(body.target, body.current, body.deadline, now),
        progress=metrics.savings_progress(body.target, body.current),
    )


@router.post("/payoff", response_model=DebtPayoffPlan)
async def payoff(body: PayoffRequest) -> DebtPayoffPlan:
    return metrics.debt_payoff_plan(body.debts, body.strategy, body.extra_payment)


@router.post("/budget", response_model=BudgetBreakdown)
async def budget(body: BudgetRequest) -> BudgetBreakdown:
    return metrics.budget_breakdown(body.categories)


@router.get("/streak/{current}", response_model=StreakMilestone)
async def streak_milestone(current: int) -> StreakMilestone:
    return metrics.progress_to_next_milestone(current)


@router.post("/streak/activity", response_model=Streak)
async def streak_activity(body: StreakActivityRequest) -> Streak:
    return metrics.record_streak_activity(body.streak, body.day)


@router.get("/progress")
async def progress(
    financial: float = Query(..., description="Financial progress percent"),
    tasks: float = Query(..., description="Task completion percent"),
    time: float = Query(default=0.0, description="Elapsed time percent"),
    status: str = Query(default="in_progress", description="planning | in_progress | completed"),
) -> dict:
    overall = metrics.overall_goal_progress(financial, tasks)
    return {
        "overall_progress": round(overall, 1),
        "schedule_status": metrics.schedule_status(status, tasks, time),
        "milestones": metrics.percent_milestones(overall),
    }
