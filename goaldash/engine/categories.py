"""Per-category defaults — configuration only.

Served as the category catalog (/dashboard/categories) so clients can
suggest a deadline, a budget and capability tags when creating a goal.
"""

from __future__ import annotations

from dataclasses import dataclass

from goaldash.engine.models import GoalCategory


@dataclass(frozen=True, slots=True)
class CategoryDefaults:
    category: GoalCategory
    label: str
    default_deadline_days: int
    default_estimated_cost: float
    suggested_capabilities: tuple[str, ...] = ()


CATEGORY_DEFAULTS: dict[GoalCategory, CategoryDefaults] = {
    GoalCategory.savings: CategoryDefaults(GoalCategory.savings, "Savings & Money", 180, 5000.0, ("financial",)),
    GoalCategory.investment: CategoryDefaults(
        GoalCategory.investment, "Investment & Wealth Building", 1825, 50000.0, ("financial", "research")
    ),
    GoalCategory.debt_payoff: CategoryDefaults(GoalCategory.debt_payoff, "Debt Elimination", 365, 25000.0, ("financial",)),
    GoalCategory.language: CategoryDefaults(GoalCategory.language, "Language Learning", 730, 500.0, ("learning", "research")),
    GoalCategory.education: CategoryDefaults(
        GoalCategory.education, "Education & Certification", 365, 2000.0, ("learning", "research")
    ),
    GoalCategory.skill_development: CategoryDefaults(
        GoalCategory.skill_development, "Skill Development", 180, 500.0, ("learning", "research")
    ),
    GoalCategory.weight_loss: CategoryDefaults(GoalCategory.weight_loss, "Weight Loss", 180, 1000.0, ("health", "research")),
    GoalCategory.fitness: CategoryDefaults(GoalCategory.fitness, "Fitness & Exercise", 90, 500.0, ("health",)),
    GoalCategory.wellness: CategoryDefaults(GoalCategory.wellness, "Health & Wellness", 365, 1500.0, ("health", "research")),
    GoalCategory.travel: CategoryDefaults(
        GoalCategory.travel, "Travel & Adventure", 365, 5000.0, ("travel", "financial", "weather")
    ),
    GoalCategory.immigration: CategoryDefaults(
        GoalCategory.immigration, "Immigration & Legal", 365, 5000.0, ("research", "legal")
    ),
    GoalCategory.career: CategoryDefaults(GoalCategory.career, "Career Development", 365, 2000.0, ("research", "learning")),
    GoalCategory.business: CategoryDefaults(
        GoalCategory.business, "Business & Entrepreneurship", 730, 10000.0, ("research", "financial", "business")
    ),
    GoalCategory.habits: CategoryDefaults(GoalCategory.habits, "Habit Building", 90, 100.0, ("research",)),
    GoalCategory.creative: CategoryDefaults(GoalCategory.creative, "Creative Projects", 180, 500.0, ("research",)),
    GoalCategory.reading: CategoryDefaults(GoalCategory.reading, "Reading & Literature", 365, 300.0, ("research",)),
    GoalCategory.relationships: CategoryDefaults(
        GoalCategory.relationships, "Relationships & Social", 180, 200.0, ("research",)
    ),
    GoalCategory.general: CategoryDefaults(GoalCategory.general, "General Goal", 90, 500.0, ("research",)),
}


def get_category_defaults(category: GoalCategory | str) -> CategoryDefaults:
    """Defaults for a category, falling back to general."""
    try:
        return CATEGORY_DEFAULTS[GoalCategory(category)]
    except ValueError:
        return CATEGORY_DEFAULTS[GoalCategory.general]


def list_categories() -> list[CategoryDefaults]:
    return list(CATEGORY_DEFAULTS.values())
