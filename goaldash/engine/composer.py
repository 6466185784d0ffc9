"""Composition engine: pick the widgets for a goal and place them on the grid."""

from __future__ import annotations

from dataclasses import dataclass

from goaldash.engine.layout import place_widgets, span_for_size
from goaldash.engine.models import GoalFeatures, GridPosition
from goaldash.engine.widget_registry import WIDGETS, WidgetDescriptor, WidgetRegistry, is_eligible


@dataclass(frozen=True, slots=True)
class ComposedWidget:
    descriptor: WidgetDescriptor
    position: GridPosition


def select_widgets(
    features: GoalFeatures,
    registry: WidgetRegistry | None = None,
) -> list[WidgetDescriptor]:
    """Required widgets first, then eligible optional ones, each in declaration order.

    Every id appears at most once.
    """
    registry = WIDGETS if registry is None else registry
    seen: set[str] = set()
    selected: list[WidgetDescriptor] = []

    required = [w for w in registry.values() if w.required]
    optional = [w for w in registry.values() if not w.required and is_eligible(w, features)]
    for widget in required + optional:
        if widget.id in seen:
            continue
        seen.add(widget.id)
        selected.append(widget)
    return selected


def compose(
    features: GoalFeatures,
    columns: int,
    registry: WidgetRegistry | None = None,
) -> list[ComposedWidget]:
    widgets = select_widgets(features, registry)
    positions = place_widgets([span_for_size(w.size) for w in widgets], columns)
    return [ComposedWidget(descriptor=w, position=p) for w, p in zip(widgets, positions)]
