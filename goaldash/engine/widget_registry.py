"""Static widget registry — configuration only.

Each WidgetDescriptor ties a widget id to the goal features it needs and to
the resolver that fills its props. Required widgets appear on every
dashboard; optional widgets appear when their requirements all hold.

Declaration order is the display order within each group, so keep it stable.
The registry is validated once, at import.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from goaldash.engine import props
from goaldash.engine.errors import RegistryMisconfiguration
from goaldash.engine.layout import SIZE_SPANS
from goaldash.engine.models import COST_BRACKET_ORDER, CostBracket, GoalCategory, GoalFeatures
from goaldash.engine.props import PropResolver

logger = logging.getLogger(__name__)

C = GoalCategory


@dataclass(frozen=True, slots=True)
class WidgetRequirements:
    goal_types: tuple[GoalCategory, ...] = ()
    capabilities: tuple[str, ...] = ()  # any one of these
    min_estimated_cost: float | None = None
    min_cost_bracket: CostBracket | None = None
    requires_deadline: bool = False

    @property
    def is_empty(self) -> bool:
        return (
            not self.goal_types
            and not self.capabilities
            and self.min_estimated_cost is None
            and self.min_cost_bracket is None
            and not self.requires_deadline
        )


@dataclass(frozen=True, slots=True)
class WidgetDescriptor:
    id: str
    title: str
    size: str = "medium"  # small | medium | large | extra_large
    required: bool = False
    requirements: WidgetRequirements = field(default_factory=WidgetRequirements)
    default_props: dict[str, Any] = field(default_factory=dict)
    resolver: PropResolver | None = None


WidgetRegistry = Mapping[str, WidgetDescriptor]


def is_eligible(widget: WidgetDescriptor, features: GoalFeatures) -> bool:
    """AND of every requirement the widget declares. Required widgets always pass."""
    if widget.required:
        return True
    req = widget.requirements
    if req.goal_types and features.category not in req.goal_types:
        return False
    if req.capabilities and not features.capabilities.intersection(req.capabilities):
        return False
    if req.min_estimated_cost is not None:
        if features.estimated_cost is None or features.estimated_cost < req.min_estimated_cost:
            return False
    if req.min_cost_bracket is not None:
        if COST_BRACKET_ORDER.index(features.cost_bracket) < COST_BRACKET_ORDER.index(req.min_cost_bracket):
            return False
    if req.requires_deadline and not features.has_deadline:
        return False
    return True


def build_registry(widgets: Iterable[WidgetDescriptor]) -> WidgetRegistry:
    """Validate descriptors and return them keyed by id, in declaration order.

    The result is read-only. Raises RegistryMisconfiguration on any inconsistency.
    """
    registry: dict[str, WidgetDescriptor] = {}
    for widget in widgets:
        if not widget.id:
            raise RegistryMisconfiguration("Widget with empty id")
        if widget.id in registry:
            raise RegistryMisconfiguration(f"Duplicate widget id: {widget.id}")
        if widget.size not in SIZE_SPANS:
            raise RegistryMisconfiguration(f"Widget {widget.id}: unknown size '{widget.size}'")
        if widget.required and not widget.requirements.is_empty:
            raise RegistryMisconfiguration(
                f"Widget {widget.id}: required widgets cannot declare eligibility requirements"
            )
        for goal_type in widget.requirements.goal_types:
            if not isinstance(goal_type, GoalCategory):
                raise RegistryMisconfiguration(f"Widget {widget.id}: unknown goal type '{goal_type}'")
        if widget.requirements.min_cost_bracket is not None and not isinstance(
            widget.requirements.min_cost_bracket, CostBracket
        ):
            raise RegistryMisconfiguration(f"Widget {widget.id}: unknown cost bracket")
        if widget.resolver is not None and not callable(widget.resolver):
            raise RegistryMisconfiguration(f"Widget {widget.id}: resolver is not callable")
        registry[widget.id] = widget

    if not registry:
        raise RegistryMisconfiguration("Widget registry is empty")
    if not any(w.required for w in registry.values()):
        raise RegistryMisconfiguration("Widget registry has no required widget")

    logger.debug("Widget registry built with %d widgets", len(registry))
    return MappingProxyType(registry)


ALL_CATEGORIES: tuple[GoalCategory, ...] = tuple(GoalCategory)

WIDGETS: WidgetRegistry = build_registry(
    [
        # -------------------------------------------------------------------
        # Required on every dashboard
        # -------------------------------------------------------------------
        WidgetDescriptor(
            id="completion_meter",
            title="Completion Meter",
            size="small",
            required=True,
            default_props={"animated": True, "show_percentage": True},
            resolver=props.progress_props,
        ),
        WidgetDescriptor(
            id="task_manager",
            title="Task Manager",
            size="medium",
            required=True,
            default_props={"show_completed": True, "allow_edit": True},
            resolver=props.task_props,
        ),
        WidgetDescriptor(
            id="agent_info",
            title="AI Agents",
            size="small",
            required=True,
            default_props={"show_agent_status": True, "show_recommendations": True},
            resolver=props.capability_status_props,
        ),
        # -------------------------------------------------------------------
        # Category dashboards
        # -------------------------------------------------------------------
        WidgetDescriptor(
            id="travel_dashboard",
            title="Travel Planning",
            size="extra_large",
            requirements=WidgetRequirements(goal_types=(C.travel,), capabilities=("travel", "weather")),
            resolver=props.deadline_props,
        ),
        WidgetDescriptor(
            id="learning_dashboard",
            title="Learning Path",
            size="extra_large",
            requirements=WidgetRequirements(goal_types=(C.language, C.education, C.skill_development, C.career)),
            default_props={"show_progress_chart": True, "show_skill_radar": True, "show_study_time": True},
            resolver=props.progress_props,
        ),
        WidgetDescriptor(
            id="health_dashboard",
            title="Health Tracking",
            size="extra_large",
            requirements=WidgetRequirements(goal_types=(C.weight_loss, C.fitness, C.wellness)),
            default_props={"show_weight_chart": True, "show_workout_log": True, "show_sleep_tracker": True},
            resolver=props.progress_props,
        ),
        WidgetDescriptor(
            id="business_dashboard",
            title="Business Metrics",
            size="extra_large",
            requirements=WidgetRequirements(goal_types=(C.business,)),
            default_props={"show_revenue_chart": True, "show_customer_metrics": True, "show_kpis": True},
            resolver=props.progress_props,
        ),
        WidgetDescriptor(
            id="career_dashboard",
            title="Career Progress",
            size="extra_large",
            requirements=WidgetRequirements(goal_types=(C.career,)),
            default_props={"show_applications": True, "show_networking": True, "show_skills": True},
            resolver=props.progress_props,
        ),
        # -------------------------------------------------------------------
        # Financial
        # -------------------------------------------------------------------
        WidgetDescriptor(
            id="investment_tracker",
            title="Investment Portfolio",
            size="large",
            requirements=WidgetRequirements(goal_types=(C.investment,), min_estimated_cost=1000.0),
            default_props={"show_portfolio_breakdown": True, "show_performance_chart": True},
            resolver=props.savings_progress_props,
        ),
        WidgetDescriptor(
            id="debt_payoff_tracker",
            title="Debt Payoff",
            size="medium",
            requirements=WidgetRequirements(goal_types=(C.debt_payoff,)),
            default_props={"show_progress": True},
            resolver=props.debt_props,
        ),
        WidgetDescriptor(
            id="simple_savings_tracker",
            title="Simple Savings Tracker",
            size="small",
            requirements=WidgetRequirements(goal_types=(C.savings,), min_cost_bracket=CostBracket.low),
            default_props={"show_chart": True, "allow_edit": True},
            resolver=props.savings_progress_props,
        ),
        WidgetDescriptor(
            id="financial_calculator",
            title="Financial Calculator",
            size="medium",
            requirements=WidgetRequirements(
                goal_types=(C.savings, C.investment, C.debt_payoff, C.travel, C.immigration, C.business, C.general),
                min_cost_bracket=CostBracket.low,
            ),
            default_props={"show_daily_view": True, "show_weekly_view": True, "show_monthly_view": True},
            resolver=props.savings_plan_props,
        ),
        WidgetDescriptor(
            id="budget_breakdown",
            title="Budget Breakdown",
            size="medium",
            requirements=WidgetRequirements(
                goal_types=(
                    C.savings, C.investment, C.debt_payoff, C.education, C.weight_loss,
                    C.travel, C.immigration, C.business, C.general,
                ),
                min_cost_bracket=CostBracket.low,
            ),
            default_props={"chart_type": "pie", "show_categories": True},
            resolver=props.budget_props,
        ),
        WidgetDescriptor(
            id="expense_tracker",
            title="Expense Tracker",
            size="medium",
            requirements=WidgetRequirements(
                goal_types=(C.savings, C.debt_payoff, C.travel, C.immigration, C.business),
                min_cost_bracket=CostBracket.low,
            ),
            default_props={"show_categories": True, "show_chart": True},
            resolver=props.budget_props,
        ),
        WidgetDescriptor(
            id="currency_converter",
            title="Currency Converter",
            size="small",
            requirements=WidgetRequirements(goal_types=(C.investment, C.travel), capabilities=("financial", "travel")),
            default_props={"show_favorites": True, "show_chart": True},
        ),
        WidgetDescriptor(
            id="weather_widget",
            title="Weather Forecast",
            size="small",
            requirements=WidgetRequirements(goal_types=(C.travel, C.fitness), capabilities=("weather",)),
            default_props={"show_forecast": True, "show_alerts": True},
            resolver=props.deadline_props,
        ),
        # -------------------------------------------------------------------
        # Progress
        # -------------------------------------------------------------------
        WidgetDescriptor(
            id="progress_chart",
            title="Progress Chart",
            size="large",
            requirements=WidgetRequirements(goal_types=tuple(c for c in ALL_CATEGORIES if c is not C.travel)),
            default_props={"chart_type": "line", "show_grid": True},
            resolver=props.progress_props,
        ),
        WidgetDescriptor(
            id="progress_dashboard",
            title="Progress Dashboard",
            size="medium",
            requirements=WidgetRequirements(
                goal_types=(
                    C.investment, C.language, C.skill_development, C.fitness, C.travel, C.immigration,
                    C.habits, C.creative, C.relationships, C.reading, C.general,
                ),
            ),
            default_props={"show_chart": True, "show_meter": True},
            resolver=props.progress_props,
        ),
        WidgetDescriptor(
            id="milestone_timeline",
            title="Milestone Timeline",
            size="large",
            requirements=WidgetRequirements(
                goal_types=tuple(c for c in ALL_CATEGORIES if c is not C.skill_development),
                requires_deadline=True,
            ),
            default_props={"show_progress": True, "allow_edit": True},
            resolver=props.milestone_props,
        ),
        WidgetDescriptor(
            id="smart_action_timeline",
            title="Smart Action Timeline",
            size="medium",
            requirements=WidgetRequirements(
                goal_types=(
                    C.savings, C.investment, C.debt_payoff, C.weight_loss, C.travel,
                    C.habits, C.relationships, C.general,
                ),
            ),
            default_props={"show_timeline": True, "allow_edit": True},
            resolver=props.task_props,
        ),
        # -------------------------------------------------------------------
        # Tracking
        # -------------------------------------------------------------------
        WidgetDescriptor(
            id="habit_tracker",
            title="Habit Tracker",
            size="small",
            requirements=WidgetRequirements(
                goal_types=(
                    C.savings, C.debt_payoff, C.language, C.skill_development, C.weight_loss, C.fitness,
                    C.wellness, C.habits, C.creative, C.relationships, C.reading, C.general,
                ),
            ),
            default_props={"show_calendar": True, "show_streaks": True},
            resolver=props.streak_props,
        ),
        WidgetDescriptor(
            id="streak_counter",
            title="Streak Counter",
            size="small",
            requirements=WidgetRequirements(
                goal_types=(
                    C.savings, C.language, C.skill_development, C.weight_loss, C.fitness,
                    C.wellness, C.habits, C.relationships, C.reading,
                ),
            ),
            default_props={"animated": True, "show_celebration": True},
            resolver=props.streak_props,
        ),
        WidgetDescriptor(
            id="weight_tracker",
            title="Weight Tracker",
            size="small",
            requirements=WidgetRequirements(goal_types=(C.weight_loss,)),
            resolver=props.progress_props,
        ),
        WidgetDescriptor(
            id="workout_tracker",
            title="Workout Log",
            size="large",
            requirements=WidgetRequirements(goal_types=(C.weight_loss, C.fitness, C.wellness)),
            default_props={"show_timer": True, "show_history": True},
            resolver=props.streak_props,
        ),
        WidgetDescriptor(
            id="mood_tracker",
            title="Mood Journal",
            size="small",
            requirements=WidgetRequirements(
                goal_types=(
                    C.debt_payoff, C.language, C.weight_loss, C.fitness, C.wellness,
                    C.habits, C.creative, C.relationships, C.reading,
                ),
            ),
            default_props={"show_calendar": True, "show_insights": True},
        ),
        WidgetDescriptor(
            id="reading_tracker",
            title="Reading Progress",
            size="large",
            requirements=WidgetRequirements(
                goal_types=(
                    C.investment, C.language, C.education, C.skill_development, C.wellness, C.career,
                    C.business, C.habits, C.creative, C.relationships, C.reading,
                ),
            ),
            default_props={"show_progress": True, "show_statistics": True},
            resolver=props.streak_props,
        ),
        WidgetDescriptor(
            id="skill_assessment",
            title="Skill Assessment",
            size="medium",
            requirements=WidgetRequirements(
                goal_types=(C.language, C.education, C.skill_development, C.career, C.creative, C.reading),
            ),
            default_props={"show_progress": True, "show_recommendations": True},
            resolver=props.progress_props,
        ),
        # -------------------------------------------------------------------
        # Planning
        # -------------------------------------------------------------------
        WidgetDescriptor(
            id="project_timeline",
            title="Project Timeline",
            size="large",
            requirements=WidgetRequirements(
                goal_types=(C.education, C.skill_development, C.immigration, C.career, C.business, C.creative, C.general),
            ),
            default_props={"view": "weeks", "show_progress": True},
            resolver=props.milestone_props,
        ),
        WidgetDescriptor(
            id="document_checklist",
            title="Document Checklist",
            size="medium",
            requirements=WidgetRequirements(goal_types=(C.education, C.travel, C.immigration, C.career, C.business)),
            default_props={"allow_edit": True, "show_progress": True},
            resolver=props.task_props,
        ),
        WidgetDescriptor(
            id="resource_library",
            title="Resources",
            size="medium",
            requirements=WidgetRequirements(
                goal_types=tuple(c for c in ALL_CATEGORIES if c not in (C.savings, C.debt_payoff, C.weight_loss)),
            ),
            default_props={"allow_add_resources": True, "show_progress": True},
        ),
        WidgetDescriptor(
            id="calendar_widget",
            title="Calendar",
            size="small",
            requirements=WidgetRequirements(requires_deadline=True),
            default_props={"show_upcoming": True, "allow_edit": True},
            resolver=props.deadline_props,
        ),
    ]
)


def get_widget(widget_id: str) -> WidgetDescriptor | None:
    return WIDGETS.get(widget_id)


def list_widgets() -> list[WidgetDescriptor]:
    return list(WIDGETS.values())


def required_widgets() -> list[WidgetDescriptor]:
    return [w for w in WIDGETS.values() if w.required]


def optional_widgets() -> list[WidgetDescriptor]:
    return [w for w in WIDGETS.values() if not w.required]
