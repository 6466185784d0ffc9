"""Dashboard HTTP router — layout, widget catalog & category defaults."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query

from goaldash.engine.assembler import assemble_dashboard
from goaldash.engine.categories import CategoryDefaults, get_category_defaults, list_categories
from goaldash.engine.classifier import normalize_category
from goaldash.engine.models import Goal, LayoutDescriptor
from goaldash.engine.widget_registry import WidgetDescriptor, get_widget, list_widgets

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _parse_date(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


def _widget_dict(widget: WidgetDescriptor) -> dict:
    req = widget.requirements
    return {
        "id": widget.id,
        "title": widget.title,
        "size": widget.size,
        "required": widget.required,
        "requirements": {
            "goal_types": [c.value for c in req.goal_types],
            "capabilities": list(req.capabilities),
            "min_estimated_cost": req.min_estimated_cost,
            "min_cost_bracket": req.min_cost_bracket.value if req.min_cost_bracket else None,
            "requires_deadline": req.requires_deadline,
        },
        "default_props": dict(widget.default_props),
    }


def _category_dict(defaults: CategoryDefaults) -> dict:
    return {
        "id": defaults.category.value,
        "label": defaults.label,
        "default_deadline_days": defaults.default_deadline_days,
        "default_estimated_cost": defaults.default_estimated_cost,
        "suggested_capabilities": list(defaults.suggested_capabilities),
    }


# ---------------------------------------------------------------------------
# /dashboard/layout
# ---------------------------------------------------------------------------


@router.post("/layout", response_model=LayoutDescriptor)
async def dashboard_layout(
    goal: Goal,
    breakpoint_name: str | None = Query(default=None, alias="breakpoint", description="base | md | lg | xl"),
    as_of: str | None = Query(default=None, description="Evaluation date (YYYY-MM-DD), defaults to today"),
) -> LayoutDescriptor:
    day = _parse_date(as_of, "as_of") if as_of else None
    return assemble_dashboard(goal, as_of=day, breakpoint_name=breakpoint_name)


# ---------------------------------------------------------------------------
# /dashboard/widgets
# ---------------------------------------------------------------------------


@router.get("/widgets")
async def widgets_list() -> list[dict]:
    return [_widget_dict(w) for w in list_widgets()]


@router.get("/widgets/{widget_id}")
async def widget_detail(widget_id: str) -> dict:
    widget = get_widget(widget_id)
    if widget is None:
        raise HTTPException(status_code=404, detail=f"Unknown widget: {widget_id}")
    return _widget_dict(widget)


# ---------------------------------------------------------------------------
# /dashboard/categories
# ---------------------------------------------------------------------------


@router.get("/categories")
async def categories_list() -> list[dict]:
    return [_category_dict(c) for c in list_categories()]


@router.get("/categories/{category_id}")
async def category_detail(category_id: str) -> dict:
    category, recognized = normalize_category(category_id)
    if not recognized:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category_id}")
    return _category_dict(get_category_defaults(category))
