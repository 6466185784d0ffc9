"""Pure stateless metric functions — math only, never raises.

Degenerate input is clamped rather than rejected. The one case a caller must
be able to tell apart from a number is a debt that never pays off; that is
reported through PayoffProjection.resolvable instead of a month count.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Iterable, Sequence

from goaldash.engine.models import (
    BudgetBreakdown,
    BudgetCategory,
    BudgetLine,
    BudgetVariance,
    Debt,
    DebtPayoffLine,
    DebtPayoffPlan,
    GoalTask,
    PayoffProjection,
    PayoffStrategy,
    SavingsPeriod,
    SavingsPlan,
    SavingsProgress,
    Streak,
    StreakMilestone,
)

PERIOD_DAYS: dict[str, int] = {"daily": 1, "weekly": 7, "monthly": 30}

# (threshold, level) ascending; level is the highest threshold <= current streak
STREAK_LEVELS: tuple[tuple[int, str], ...] = (
    (0, "Building"),
    (7, "Strong"),
    (14, "Pro"),
    (30, "Expert"),
    (50, "Master"),
    (100, "Legendary"),
)


def clamp_pct(value: float) -> float:
    """Clamp a percentage to [0, 100]. NaN becomes 0."""
    if value != value:
        return 0.0
    return min(max(value, 0.0), 100.0)


# ---------------------------------------------------------------------------
# Savings
# ---------------------------------------------------------------------------

def _align(a: date | datetime, b: date | datetime) -> tuple[date | datetime, date | datetime]:
    """Promote a bare date to midnight when the other side is a datetime."""
    if isinstance(a, datetime) and not isinstance(b, datetime):
        b = datetime.combine(b, time.min, tzinfo=a.tzinfo)
    elif isinstance(b, datetime) and not isinstance(a, datetime):
        a = datetime.combine(a, time.min, tzinfo=b.tzinfo)
    return a, b


def days_until(deadline: date | datetime, now: date | datetime) -> int:
    """Whole days left until deadline, never below 1.

    A deadline on or before `now` clamps to 1 day.
    """
    deadline, now = _align(deadline, now)
    delta: timedelta = deadline - now
    return max(1, math.ceil(delta.total_seconds() / 86400.0))


def required_periodic_savings(
    target: float | None,
    current: float,
    deadline: date | datetime,
    now: date | datetime,
    period: SavingsPeriod | str = SavingsPeriod.monthly,
) -> float:
    """Amount to put aside per period to reach `target` by `deadline`.

    Always >= 0; a goal already met yields 0 for every period.
    Unknown periods are treated as daily.
    """
    remaining = max(0.0, (target or 0.0) - current)
    if remaining == 0.0:
        return 0.0
    daily = remaining / days_until(deadline, now)
    key = period.value if isinstance(period, SavingsPeriod) else str(period)
    return daily * PERIOD_DAYS.get(key, 1)


def savings_plan(
    target: float | None,
    current: float,
    deadline: date | datetime,
    now: date | datetime,
) -> SavingsPlan:
    """Remaining amount plus the daily / weekly / monthly rates in one pass."""
    deadline, now = _align(deadline, now)
    remaining = max(0.0, (target or 0.0) - current)
    days_left = days_until(deadline, now)
    daily = remaining / days_left
    return SavingsPlan(
        remaining=remaining,
        days_left=days_left,
        daily=daily,
        weekly=daily * PERIOD_DAYS["weekly"],
        monthly=daily * PERIOD_DAYS["monthly"],
        deadline_passed=deadline <= now,
    )


def savings_progress(estimated: float | None, current: float) -> SavingsProgress:
    """Saved share of the estimated cost. Over-saving is reported, not capped."""
    if not estimated or estimated <= 0.0:
        return SavingsProgress(percentage=0.0, remaining=0.0, over=False)
    pct = (max(current, 0.0) / estimated) * 100.0
    return SavingsProgress(
        percentage=pct,
        remaining=max(0.0, estimated - current),
        over=current > estimated,
    )


# ---------------------------------------------------------------------------
# Debt payoff
# ---------------------------------------------------------------------------

def _projection(periods: float) -> PayoffProjection:
    # overflowed inputs give inf, which has no month count
    if not math.isfinite(periods):
        return PayoffProjection(months=None, resolvable=False)
    return PayoffProjection(months=math.ceil(periods), resolvable=True)


def amortized_payoff_periods(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
) -> PayoffProjection:
    """Months until an amortizing debt reaches zero.

    resolvable=False (months=None) when the payment never outpaces interest.
    """
    if balance <= 0.0:
        return PayoffProjection(months=0, resolvable=True)
    if monthly_payment <= 0.0:
        return PayoffProjection(months=None, resolvable=False)

    monthly_rate = max(annual_rate_percent, 0.0) / 100.0 / 12.0
    if monthly_rate == 0.0:
        return _projection(balance / monthly_payment)

    if monthly_payment <= balance * monthly_rate:
        return PayoffProjection(months=None, resolvable=False)

    return _projection(
        -math.log(1.0 - (balance * monthly_rate) / monthly_payment)
        / math.log(1.0 + monthly_rate)
    )


def allocate_extra_payment(debts: Sequence[Debt], extra_payment: float) -> list[float]:
    """Split `extra_payment` across debts by share of total outstanding balance."""
    total = sum(max(d.balance, 0.0) for d in debts)
    if total <= 0.0 or extra_payment <= 0.0:
        return [0.0 for _ in debts]
    return [extra_payment * (max(d.balance, 0.0) / total) for d in debts]


def sort_debts_by_strategy(
    debts: Iterable[Debt],
    strategy: PayoffStrategy | str = PayoffStrategy.avalanche,
) -> list[Debt]:
    """Avalanche: highest rate first. Snowball: smallest balance first.

    sorted() is stable, so equal keys keep their input order.
    Unknown strategies fall back to avalanche.
    """
    key = strategy.value if isinstance(strategy, PayoffStrategy) else str(strategy)
    if key == PayoffStrategy.snowball.value:
        return sorted(debts, key=lambda d: d.balance)
    return sorted(debts, key=lambda d: -d.interest_rate)


def debt_payoff_plan(
    debts: Sequence[Debt],
    strategy: PayoffStrategy | str = PayoffStrategy.avalanche,
    extra_payment: float = 0.0,
) -> DebtPayoffPlan:
    """Per-debt payoff projections, ordered by strategy, plus portfolio totals."""
    try:
        strat = PayoffStrategy(strategy)
    except ValueError:
        strat = PayoffStrategy.avalanche

    ordered = sort_debts_by_strategy(debts, strat)
    extras = allocate_extra_payment(ordered, extra_payment)

    lines: list[DebtPayoffLine] = []
    for debt, extra in zip(ordered, extras):
        payment = debt.minimum_payment + extra
        lines.append(
            DebtPayoffLine(
                debt_id=debt.id,
                name=debt.name,
                balance=debt.balance,
                interest_rate=debt.interest_rate,
                minimum_payment=debt.minimum_payment,
                extra_allocated=extra,
                monthly_payment=payment,
                payoff=amortized_payoff_periods(debt.balance, debt.interest_rate, payment),
            )
        )

    total_balance = sum(d.balance for d in ordered)
    total_original = sum(d.original_balance or 0.0 for d in ordered)
    total_paid = sum((d.original_balance or 0.0) - d.balance for d in ordered)
    progress = (total_paid / total_original) * 100.0 if total_original > 0.0 else 0.0

    all_resolvable = all(line.payoff.resolvable for line in lines)
    horizon = None
    if all_resolvable:
        horizon = max((line.payoff.months or 0 for line in lines), default=0)

    return DebtPayoffPlan(
        strategy=strat,
        lines=lines,
        total_balance=total_balance,
        total_minimum_payment=sum(d.minimum_payment for d in ordered),
        total_paid=total_paid,
        progress_pct=clamp_pct(progress),
        months_to_debt_free=horizon,
        all_resolvable=all_resolvable,
    )


# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------

def budget_variance(estimated: float, actual: float) -> BudgetVariance:
    """Actual vs estimated spend. Percentage is uncapped; inf when unbudgeted."""
    variance = actual - estimated
    if estimated > 0.0:
        pct = (actual / estimated) * 100.0
    elif actual > 0.0:
        pct = math.inf
    else:
        pct = 0.0
    return BudgetVariance(
        estimated=estimated,
        actual=actual,
        variance=variance,
        over_budget=variance > 0.0,
        percentage=pct,
    )


def budget_breakdown(categories: Sequence[BudgetCategory]) -> BudgetBreakdown:
    lines = [
        BudgetLine(category=c.category, **budget_variance(c.estimated, c.spent).model_dump())
        for c in categories
    ]
    total = budget_variance(
        sum(c.estimated for c in categories),
        sum(c.spent for c in categories),
    )
    return BudgetBreakdown(lines=lines, total=total)


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------

def streak_level(current_streak: int) -> str:
    """Highest level whose threshold is <= current_streak."""
    level = STREAK_LEVELS[0][1]
    for threshold, name in STREAK_LEVELS:
        if current_streak >= threshold:
            level = name
    return level


def progress_to_next_milestone(current_streak: int) -> StreakMilestone:
    """Progress between the previous and the next streak threshold.

    At or beyond the top threshold next_threshold is None and progress is 100.
    """
    current = max(current_streak, 0)
    previous = STREAK_LEVELS[0][0]
    for threshold, _ in STREAK_LEVELS:
        if threshold <= current:
            previous = threshold
        else:
            span = threshold - previous
            pct = ((current - previous) / span) * 100.0
            return StreakMilestone(
                level=streak_level(current),
                previous_threshold=previous,
                next_threshold=threshold,
                progress_pct=clamp_pct(pct),
            )
    return StreakMilestone(
        level=streak_level(current),
        previous_threshold=previous,
        next_threshold=None,
        progress_pct=100.0,
        is_max=True,
    )


def _period_index(day: date, unit: str) -> int:
    """Consecutive integer per streak period: calendar day, ISO week or calendar month."""
    key = unit.strip().lower()
    if key in ("week", "weeks", "weekly"):
        # Monday of the ISO week; Mondays are 7 ordinals apart
        return (day.toordinal() - day.weekday()) // 7
    if key in ("month", "months", "monthly"):
        return day.year * 12 + day.month - 1
    return day.toordinal()


def record_streak_activity(streak: Streak, day: date) -> Streak:
    """Return the streak after an activity on `day`.

    Periods follow `streak.unit` (days, weeks or months; anything else counts
    days). Same period or a backdated activity: unchanged. The period right
    after the last activity: +1. Otherwise restart at 1.
    """
    last = streak.last_activity_date
    if last is not None and day <= last:
        return streak.model_copy()

    current = 1
    if last is not None:
        gap = _period_index(day, streak.unit) - _period_index(last, streak.unit)
        if gap == 0:
            return streak.model_copy()
        if gap == 1:
            current = streak.current_streak + 1
    return Streak(
        current_streak=current,
        longest_streak=max(streak.longest_streak, current),
        unit=streak.unit,
        last_activity_date=day,
    )


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def overall_goal_progress(financial_progress_pct: float, task_completion_pct: float) -> float:
    """Equal-weighted average of the two inputs, each clamped to [0, 100]."""
    return (clamp_pct(financial_progress_pct) + clamp_pct(task_completion_pct)) / 2.0


def percent_milestones(
    progress_pct: float,
    thresholds: Sequence[int] = (25, 50, 75, 100),
) -> list[dict[str, float | bool]]:
    """Fixed percentage checkpoints, each marked achieved once progress reaches it."""
    return [{"threshold": float(t), "achieved": progress_pct >= t} for t in thresholds]


def task_completion_pct(tasks: Sequence[GoalTask]) -> float:
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.completed)
    return (done / len(tasks)) * 100.0


def time_progress_pct(
    start: date | None,
    deadline: date | None,
    now: date,
) -> float:
    """Elapsed share of the [start, deadline] window, clamped to [0, 100]."""
    if start is None or deadline is None:
        return 0.0
    total = (deadline - start).days
    if total <= 0:
        return 0.0
    return clamp_pct(((now - start).days / total) * 100.0)


def schedule_status(goal_status: str, task_pct: float, time_pct: float) -> str:
    """Map task completion vs elapsed time to on_track / at_risk / behind_schedule."""
    if goal_status == "completed":
        return "completed"
    if task_pct < time_pct - 20.0:
        return "behind_schedule"
    if task_pct < time_pct - 10.0:
        return "at_risk"
    return "on_track"
