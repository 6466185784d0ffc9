"""Tests for the pure metric library."""

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from goaldash.engine.metrics import (
    allocate_extra_payment,
    amortized_payoff_periods,
    budget_breakdown,
    budget_variance,
    clamp_pct,
    days_until,
    debt_payoff_plan,
    overall_goal_progress,
    percent_milestones,
    progress_to_next_milestone,
    record_streak_activity,
    required_periodic_savings,
    savings_plan,
    savings_progress,
    schedule_status,
    sort_debts_by_strategy,
    streak_level,
    task_completion_pct,
    time_progress_pct,
)
from goaldash.engine.models import BudgetCategory, Debt, GoalTask, PayoffStrategy, Streak

NOW = date(2026, 1, 1)


class TestClampPct:
    def test_bounds(self):
        assert clamp_pct(-5.0) == 0.0
        assert clamp_pct(150.0) == 100.0
        assert clamp_pct(42.0) == 42.0

    def test_nan(self):
        assert clamp_pct(float("nan")) == 0.0


class TestRequiredPeriodicSavings:
    def test_daily_rate(self):
        deadline = NOW + timedelta(days=500)
        assert required_periodic_savings(10000, 0, deadline, NOW, "daily") == pytest.approx(20.0)

    def test_monthly_is_thirty_days(self):
        deadline = NOW + timedelta(days=500)
        daily = required_periodic_savings(10000, 0, deadline, NOW, "daily")
        weekly = required_periodic_savings(10000, 0, deadline, NOW, "weekly")
        monthly = required_periodic_savings(10000, 0, deadline, NOW, "monthly")
        assert weekly == pytest.approx(7 * daily)
        assert monthly == pytest.approx(30 * daily)

    def test_goal_met_is_zero_for_every_period(self):
        deadline = NOW + timedelta(days=10)
        for period in ("daily", "weekly", "monthly"):
            assert required_periodic_savings(1000, 1500, deadline, NOW, period) == 0.0

    def test_past_deadline_clamps_to_one_day(self):
        deadline = NOW - timedelta(days=3)
        assert required_periodic_savings(300, 100, deadline, NOW, "daily") == pytest.approx(200.0)

    def test_missing_target(self):
        assert required_periodic_savings(None, 0, NOW + timedelta(days=5), NOW) == 0.0

    def test_unknown_period_is_daily(self):
        deadline = NOW + timedelta(days=10)
        assert required_periodic_savings(100, 0, deadline, NOW, "fortnightly") == pytest.approx(10.0)

    def test_partial_day_rounds_up(self):
        now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        deadline = datetime(2026, 1, 3, 0, 0, tzinfo=timezone.utc)
        assert days_until(deadline, now) == 2


class TestSavingsPlan:
    def test_rates(self):
        plan = savings_plan(10000, 0, NOW + timedelta(days=500), NOW)
        assert plan.remaining == 10000
        assert plan.days_left == 500
        assert plan.daily == pytest.approx(20.0)
        assert plan.weekly == pytest.approx(140.0)
        assert plan.monthly == pytest.approx(600.0)
        assert plan.deadline_passed is False

    def test_deadline_passed(self):
        plan = savings_plan(1000, 0, NOW - timedelta(days=1), NOW)
        assert plan.deadline_passed is True
        assert plan.days_left == 1

    def test_mixed_date_and_datetime(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        plan = savings_plan(100, 0, date(2026, 1, 11), now)
        assert plan.days_left == 10


class TestSavingsProgress:
    def test_over_saving_reports_true_percentage(self):
        p = savings_progress(1000, 1200)
        assert p.percentage == pytest.approx(120.0)
        assert p.over is True
        assert p.remaining == 0.0

    def test_partial(self):
        p = savings_progress(1000, 250)
        assert p.percentage == pytest.approx(25.0)
        assert p.remaining == 750.0
        assert p.over is False

    def test_no_estimate(self):
        p = savings_progress(None, 500)
        assert p.percentage == 0.0
        assert p.over is False


class TestAmortizedPayoffPeriods:
    def test_interest_exceeds_payment_never_resolves(self):
        proj = amortized_payoff_periods(10000, 12, 50)
        assert proj.resolvable is False
        assert proj.months is None

    def test_payment_equal_to_interest_never_resolves(self):
        proj = amortized_payoff_periods(10000, 12, 100)
        assert proj.resolvable is False

    def test_zero_rate(self):
        assert amortized_payoff_periods(10000, 0, 500).months == 20
        assert amortized_payoff_periods(1000, 0, 100).months == 10
        assert amortized_payoff_periods(1050, 0, 100).months == 11

    def test_zero_balance(self):
        proj = amortized_payoff_periods(0, 10, 100)
        assert proj.months == 0
        assert proj.resolvable is True

    def test_zero_payment(self):
        assert amortized_payoff_periods(1000, 0, 0).resolvable is False

    def test_extreme_values_do_not_raise(self):
        proj = amortized_payoff_periods(1e308, 0, 1e-300)
        assert proj.resolvable is False
        assert amortized_payoff_periods(1e12, 5, 1e11).resolvable is True

    def test_amortization_formula(self):
        # -ln(1 - 1000*0.01/100) / ln(1.01) = 10.59
        assert amortized_payoff_periods(1000, 12, 100).months == 11


class TestDebtOrdering:
    def test_avalanche_highest_rate_first(self, sample_debts):
        ordered = sort_debts_by_strategy(sample_debts, "avalanche")
        assert [d.interest_rate for d in ordered] == [18.9, 6.5, 4.2]

    def test_snowball_smallest_balance_first(self, sample_debts):
        ordered = sort_debts_by_strategy(sample_debts, PayoffStrategy.snowball)
        assert [d.balance for d in ordered] == [3200.0, 8900.0, 12500.0]

    def test_ties_keep_input_order(self):
        debts = [
            Debt(id="a", balance=100, interest_rate=5),
            Debt(id="b", balance=200, interest_rate=5),
            Debt(id="c", balance=100, interest_rate=5),
        ]
        assert [d.id for d in sort_debts_by_strategy(debts, "avalanche")] == ["a", "b", "c"]
        assert [d.id for d in sort_debts_by_strategy(debts, "snowball")] == ["a", "c", "b"]

    def test_unknown_strategy_falls_back_to_avalanche(self, sample_debts):
        ordered = sort_debts_by_strategy(sample_debts, "random")
        assert [d.id for d in ordered] == ["cc", "student", "car"]


class TestAllocateExtraPayment:
    def test_proportional_to_balance(self, sample_debts):
        extras = allocate_extra_payment(sample_debts, 246.0)
        assert extras == pytest.approx([32.0, 125.0, 89.0])
        assert sum(extras) == pytest.approx(246.0)

    def test_zero_total_balance(self):
        debts = [Debt(id="a", balance=0), Debt(id="b", balance=0)]
        assert allocate_extra_payment(debts, 100.0) == [0.0, 0.0]

    def test_no_extra(self, sample_debts):
        assert allocate_extra_payment(sample_debts, 0.0) == [0.0, 0.0, 0.0]


class TestDebtPayoffPlan:
    def test_totals(self, sample_debts):
        plan = debt_payoff_plan(sample_debts, "avalanche")
        assert plan.total_balance == pytest.approx(24600.0)
        assert plan.total_minimum_payment == pytest.approx(526.0)
        assert plan.total_paid == pytest.approx(32000.0 - 24600.0)
        assert plan.progress_pct == pytest.approx(7400.0 / 32000.0 * 100.0)

    def test_horizon_is_longest_payoff(self, sample_debts):
        plan = debt_payoff_plan(sample_debts, "snowball", extra_payment=100.0)
        assert plan.all_resolvable is True
        assert [line.debt_id for line in plan.lines] == ["cc", "car", "student"]
        assert plan.months_to_debt_free == max(line.payoff.months for line in plan.lines)

    def test_unresolvable_debt_has_no_horizon(self):
        debts = [
            Debt(id="ok", balance=1000, interest_rate=0, minimum_payment=100),
            Debt(id="stuck", balance=10000, interest_rate=12, minimum_payment=50),
        ]
        plan = debt_payoff_plan(debts)
        assert plan.all_resolvable is False
        assert plan.months_to_debt_free is None
        stuck = next(line for line in plan.lines if line.debt_id == "stuck")
        assert stuck.payoff.resolvable is False

    def test_invalid_strategy(self, sample_debts):
        plan = debt_payoff_plan(sample_debts, "nope")
        assert plan.strategy == PayoffStrategy.avalanche

    def test_empty(self):
        plan = debt_payoff_plan([])
        assert plan.lines == []
        assert plan.progress_pct == 0.0
        assert plan.months_to_debt_free == 0


class TestBudgetVariance:
    def test_over_budget(self):
        v = budget_variance(100, 150)
        assert v.variance == 50
        assert v.over_budget is True
        assert v.percentage == pytest.approx(150.0)

    def test_exactly_on_budget_is_not_over(self):
        assert budget_variance(100, 100).over_budget is False

    def test_unbudgeted_spend_is_unbounded(self):
        v = budget_variance(0, 50)
        assert math.isinf(v.percentage)
        assert v.over_budget is True

    def test_nothing_budgeted_nothing_spent(self):
        v = budget_variance(0, 0)
        assert v.percentage == 0.0
        assert v.over_budget is False

    def test_breakdown_total(self):
        breakdown = budget_breakdown([
            BudgetCategory(category="flights", estimated=800, spent=900),
            BudgetCategory(category="hotel", estimated=1200, spent=600),
        ])
        assert [line.category for line in breakdown.lines] == ["flights", "hotel"]
        assert breakdown.lines[0].over_budget is True
        assert breakdown.total.estimated == 2000
        assert breakdown.total.actual == 1500
        assert breakdown.total.over_budget is False


class TestStreaks:
    @pytest.mark.parametrize(
        "current,level",
        [(0, "Building"), (6, "Building"), (7, "Strong"), (13, "Strong"), (14, "Pro"),
         (30, "Expert"), (50, "Master"), (99, "Master"), (100, "Legendary"), (365, "Legendary")],
    )
    def test_level_thresholds(self, current, level):
        assert streak_level(current) == level

    def test_next_milestone_from_ten(self):
        m = progress_to_next_milestone(10)
        assert 0.0 < m.progress_pct < 100.0
        assert m.next_threshold == 14
        assert m.previous_threshold == 7
        assert m.progress_pct == pytest.approx(3 / 7 * 100)

    def test_next_milestone_from_zero(self):
        m = progress_to_next_milestone(0)
        assert m.next_threshold == 7
        assert m.progress_pct == 0.0

    def test_max_level(self):
        m = progress_to_next_milestone(120)
        assert m.next_threshold is None
        assert m.progress_pct == 100.0
        assert m.is_max is True

    def test_activity_next_day_extends(self):
        s = Streak(current_streak=3, longest_streak=5, last_activity_date=date(2026, 1, 10))
        updated = record_streak_activity(s, date(2026, 1, 11))
        assert updated.current_streak == 4
        assert updated.longest_streak == 5

    def test_activity_same_day_unchanged(self):
        s = Streak(current_streak=3, longest_streak=5, last_activity_date=date(2026, 1, 10))
        assert record_streak_activity(s, date(2026, 1, 10)) == s

    def test_activity_after_gap_restarts(self):
        s = Streak(current_streak=8, longest_streak=8, last_activity_date=date(2026, 1, 10))
        updated = record_streak_activity(s, date(2026, 1, 13))
        assert updated.current_streak == 1
        assert updated.longest_streak == 8

    def test_activity_raises_longest(self):
        s = Streak(current_streak=3, longest_streak=3, last_activity_date=date(2026, 1, 10))
        updated = record_streak_activity(s, date(2026, 1, 11))
        assert updated.longest_streak == 4

    def test_first_activity(self):
        updated = record_streak_activity(Streak(), date(2026, 1, 1))
        assert updated.current_streak == 1
        assert updated.last_activity_date == date(2026, 1, 1)

    def test_backdated_activity_keeps_streak(self):
        s = Streak(current_streak=20, longest_streak=20, last_activity_date=date(2026, 1, 10))
        updated = record_streak_activity(s, date(2026, 1, 5))
        assert updated.current_streak == 20
        assert updated.last_activity_date == date(2026, 1, 10)

    def test_weekly_next_week_extends(self):
        # 2026-01-05 is a Monday
        s = Streak(current_streak=3, unit="weeks", last_activity_date=date(2026, 1, 5))
        updated = record_streak_activity(s, date(2026, 1, 12))
        assert updated.current_streak == 4
        assert updated.unit == "weeks"

    def test_weekly_across_week_boundary(self):
        # Sunday then the following Monday: consecutive ISO weeks
        s = Streak(current_streak=2, unit="weeks", last_activity_date=date(2026, 1, 11))
        assert record_streak_activity(s, date(2026, 1, 12)).current_streak == 3

    def test_weekly_same_week_unchanged(self):
        s = Streak(current_streak=3, unit="weeks", last_activity_date=date(2026, 1, 5))
        assert record_streak_activity(s, date(2026, 1, 9)) == s

    def test_weekly_skipped_week_restarts(self):
        s = Streak(current_streak=3, longest_streak=3, unit="weeks", last_activity_date=date(2026, 1, 5))
        updated = record_streak_activity(s, date(2026, 1, 19))
        assert updated.current_streak == 1
        assert updated.longest_streak == 3

    def test_monthly_next_month_extends(self):
        s = Streak(current_streak=5, unit="months", last_activity_date=date(2026, 1, 31))
        assert record_streak_activity(s, date(2026, 2, 1)).current_streak == 6

    def test_monthly_same_month_unchanged(self):
        s = Streak(current_streak=5, unit="months", last_activity_date=date(2026, 1, 2))
        assert record_streak_activity(s, date(2026, 1, 30)) == s

    def test_monthly_year_rollover(self):
        s = Streak(current_streak=5, unit="months", last_activity_date=date(2025, 12, 15))
        assert record_streak_activity(s, date(2026, 1, 3)).current_streak == 6


class TestProgress:
    def test_overall_clamps_inputs(self):
        assert overall_goal_progress(150, 50) == pytest.approx(75.0)
        assert overall_goal_progress(-10, 40) == pytest.approx(20.0)

    def test_task_completion(self):
        tasks = [GoalTask(id="1", completed=True), GoalTask(id="2"), GoalTask(id="3"), GoalTask(id="4", completed=True)]
        assert task_completion_pct(tasks) == pytest.approx(50.0)
        assert task_completion_pct([]) == 0.0

    def test_time_progress(self):
        assert time_progress_pct(date(2026, 1, 1), date(2026, 1, 11), date(2026, 1, 6)) == pytest.approx(50.0)
        assert time_progress_pct(date(2026, 1, 1), date(2026, 1, 11), date(2026, 3, 1)) == 100.0
        assert time_progress_pct(None, date(2026, 1, 11), date(2026, 1, 6)) == 0.0
        assert time_progress_pct(date(2026, 1, 11), date(2026, 1, 1), date(2026, 1, 6)) == 0.0

    def test_schedule_status(self):
        assert schedule_status("in_progress", 20, 50) == "behind_schedule"
        assert schedule_status("in_progress", 35, 50) == "at_risk"
        assert schedule_status("in_progress", 45, 50) == "on_track"
        assert schedule_status("completed", 0, 100) == "completed"

    def test_percent_milestones(self):
        marks = percent_milestones(60)
        assert [m["threshold"] for m in marks] == [25.0, 50.0, 75.0, 100.0]
        assert [m["achieved"] for m in marks] == [True, True, False, False]
