"""Dashboard assembler — the engine entry point.

Classifies the goal, composes and places widgets, resolves each widget's
props through the metric library and returns a LayoutDescriptor.
Graceful degradation: degenerate input never raises, it shows up in
`warnings`.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from goaldash.config import settings
from goaldash.engine.capability_status import CapabilityStatusProvider, StaticCapabilityStatus
from goaldash.engine.classifier import classify_goal
from goaldash.engine.composer import compose
from goaldash.engine.errors import UNKNOWN_CATEGORY_FALLBACK
from goaldash.engine.layout import breakpoint_columns, resolve_breakpoint
from goaldash.engine.models import EngineWarning, Goal, LayoutDescriptor, PlacedWidget
from goaldash.engine.props import ResolveContext
from goaldash.engine.widget_registry import WidgetRegistry

logger = logging.getLogger(__name__)


def effective_deadline(goal: Goal, as_of: date) -> date:
    """The goal's target date, or the configured default horizon from creation."""
    if goal.target_date is not None:
        return goal.target_date
    start = goal.created_at or as_of
    return start + timedelta(days=settings.default_deadline_days)


def assemble_dashboard(
    goal: Goal,
    as_of: date | None = None,
    breakpoint_name: str | None = None,
    status_provider: CapabilityStatusProvider | None = None,
    registry: WidgetRegistry | None = None,
) -> LayoutDescriptor:
    as_of = as_of or date.today()
    bp_name, columns = resolve_breakpoint(breakpoint_name)
    features = classify_goal(goal, as_of)

    warnings: list[EngineWarning] = []
    if not features.category_recognized:
        warnings.append(
            EngineWarning(
                code=UNKNOWN_CATEGORY_FALLBACK,
                message=f"Unknown category '{goal.category}'; showing the general dashboard.",
            )
        )

    ctx = ResolveContext(
        as_of=as_of,
        features=features,
        deadline=effective_deadline(goal, as_of),
        status_provider=status_provider or StaticCapabilityStatus(),
    )

    placed: list[PlacedWidget] = []
    for item in compose(features, columns, registry):
        widget = item.descriptor
        props = dict(widget.default_props)
        if widget.resolver is not None:
            resolved, widget_warnings = widget.resolver(goal, ctx)
            props.update(resolved)
            warnings.extend(w.model_copy(update={"widget_id": widget.id}) for w in widget_warnings)
        placed.append(
            PlacedWidget(
                widget_id=widget.id,
                title=widget.title,
                required=widget.required,
                size=widget.size,
                position=item.position,
                props=props,
            )
        )

    logger.debug("Assembled %d widgets for goal %s (%s, %d cols)", len(placed), goal.id, bp_name, columns)

    return LayoutDescriptor(
        goal_id=goal.id,
        category=features.category,
        as_of=as_of,
        breakpoint=bp_name,
        columns=columns,
        breakpoints=breakpoint_columns(),
        widgets=placed,
        warnings=warnings,
    )
