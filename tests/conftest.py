"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from goaldash.engine.models import Debt, Goal
from goaldash.main import app

AS_OF = date(2026, 1, 1)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def sample_debts() -> list[Debt]:
    """Credit card, student loan and car loan, in that input order."""
    return [
        Debt(id="cc", name="Credit Card", balance=3200.0, original_balance=5000.0,
             interest_rate=18.9, minimum_payment=96.0, type="credit_card"),
        Debt(id="student", name="Student Loan", balance=12500.0, original_balance=15000.0,
             interest_rate=6.5, minimum_payment=145.0, type="student_loan"),
        Debt(id="car", name="Car Loan", balance=8900.0, original_balance=12000.0,
             interest_rate=4.2, minimum_payment=285.0, type="car_loan"),
    ]


def make_goal(
    category: str = "savings",
    estimated_cost: float | None = 10000.0,
    current_saved: float = 0.0,
    target_date: date | None = date(2027, 5, 16),
    progress: dict[str, Any] | None = None,
    **overrides: Any,
) -> Goal:
    """Helper to build a goal snapshot. `progress` fills smart_goal_data.progress.

    The default target date is 500 days after AS_OF.
    """
    data: dict[str, Any] = dict(
        id="goal-1",
        title="Test goal",
        category=category,
        estimated_cost=estimated_cost,
        current_saved=current_saved,
        target_date=target_date,
        created_at=date(2025, 12, 1),
        assigned_capabilities=["financial"],
    )
    if progress is not None:
        data["smart_goal_data"] = {"progress": progress}
    data.update(overrides)
    return Goal.model_validate(data)
