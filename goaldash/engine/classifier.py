"""Goal → GoalFeatures. Pure; unknown categories fall back to general."""

from __future__ import annotations

import logging
from datetime import date

from goaldash.config import settings
from goaldash.engine.models import CostBracket, Goal, GoalCategory, GoalFeatures

logger = logging.getLogger(__name__)

# Legacy / free-form category labels seen in goal data
CATEGORY_ALIASES: dict[str, GoalCategory] = {
    "finance": GoalCategory.savings,
    "financial": GoalCategory.savings,
    "money": GoalCategory.savings,
    "debt": GoalCategory.debt_payoff,
    "health": GoalCategory.wellness,
    "personal_development": GoalCategory.skill_development,
    "skills": GoalCategory.skill_development,
    "legal": GoalCategory.immigration,
    "outdoor": GoalCategory.fitness,
    "habit": GoalCategory.habits,
}


def _category_key(raw: str) -> str:
    return "_".join(raw.strip().lower().replace("-", " ").replace("_", " ").split())


def normalize_category(raw: str | None) -> tuple[GoalCategory, bool]:
    """Map a raw category string to the enumeration.

    Returns (category, recognized). Unrecognized input maps to general with
    recognized=False.
    """
    if not raw:
        return GoalCategory.general, False
    key = _category_key(raw)
    try:
        return GoalCategory(key), True
    except ValueError:
        pass
    if key in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[key], True
    return GoalCategory.general, False


def cost_bracket(cost: float | None) -> CostBracket:
    if cost is None or cost <= 0.0:
        return CostBracket.none
    if cost < settings.cost_bracket_low:
        return CostBracket.low
    if cost < settings.cost_bracket_medium:
        return CostBracket.medium
    if cost < settings.cost_bracket_high:
        return CostBracket.high
    return CostBracket.premium


def classify_goal(goal: Goal, as_of: date) -> GoalFeatures:
    category, recognized = normalize_category(goal.category)
    if not recognized:
        logger.warning("Goal %s has unknown category %r; using general", goal.id, goal.category)

    capabilities = frozenset(
        tag.strip().lower() for tag in goal.assigned_capabilities if tag and tag.strip()
    )

    ratio = 0.0
    if goal.estimated_cost and goal.estimated_cost > 0.0:
        ratio = goal.current_saved / goal.estimated_cost

    return GoalFeatures(
        category=category,
        category_recognized=recognized,
        has_deadline=goal.target_date is not None and goal.target_date > as_of,
        estimated_cost=goal.estimated_cost,
        cost_bracket=cost_bracket(goal.estimated_cost),
        capabilities=capabilities,
        progress_ratio=ratio,
    )
