import logging

from fastapi import FastAPI

from goaldash.config import settings
from goaldash.engine.metrics_router import router as metrics_router
from goaldash.engine.router import router as dashboard_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="GoalDash", version="0.1.0")
app.include_router(dashboard_router)
app.include_router(metrics_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "dashboard": {
            "layout": "/dashboard/layout",
            "widgets": "/dashboard/widgets",
            "widgets_detail": "/dashboard/widgets/{id}",
            "categories": "/dashboard/categories",
            "categories_detail": "/dashboard/categories/{id}",
        },
        "metrics": {
            "savings": "/metrics/savings",
            "payoff": "/metrics/payoff",
            "budget": "/metrics/budget",
            "streak": "/metrics/streak/{current}",
            "streak_activity": "/metrics/streak/activity",
            "progress": "/metrics/progress",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
