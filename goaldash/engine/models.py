"""Goal snapshot, metric results and LayoutDescriptor — Pydantic v2 models."""

from __future__ import annotations

import math
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, model_validator


class GoalCategory(str, Enum):
    savings = "savings"
    investment = "investment"
    debt_payoff = "debt_payoff"
    language = "language"
    education = "education"
    skill_development = "skill_development"
    weight_loss = "weight_loss"
    fitness = "fitness"
    wellness = "wellness"
    travel = "travel"
    immigration = "immigration"
    career = "career"
    business = "business"
    habits = "habits"
    creative = "creative"
    reading = "reading"
    relationships = "relationships"
    general = "general"


class GoalPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class GoalStatus(str, Enum):
    planning = "planning"
    in_progress = "in_progress"
    completed = "completed"


class CostBracket(str, Enum):
    none = "none"
    low = "low"
    medium = "medium"
    high = "high"
    premium = "premium"


# Ascending order, used for "at least this bracket" comparisons
COST_BRACKET_ORDER: tuple[CostBracket, ...] = (
    CostBracket.none,
    CostBracket.low,
    CostBracket.medium,
    CostBracket.high,
    CostBracket.premium,
)


class SavingsPeriod(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class PayoffStrategy(str, Enum):
    avalanche = "avalanche"
    snowball = "snowball"


class DebtType(str, Enum):
    credit_card = "credit_card"
    student_loan = "student_loan"
    car_loan = "car_loan"
    mortgage = "mortgage"
    personal_loan = "personal_loan"


# ---------------------------------------------------------------------------
# Goal snapshot
# ---------------------------------------------------------------------------


class Debt(BaseModel):
    id: str
    name: str = ""
    balance: float
    original_balance: float | None = None
    interest_rate: float = 0.0  # annual percentage
    minimum_payment: float = 0.0
    due_date: date | None = None
    type: DebtType = DebtType.personal_loan

    @model_validator(mode="after")
    def _original_covers_balance(self) -> Debt:
        if self.original_balance is None or self.original_balance < self.balance:
            self.original_balance = self.balance
        return self


class Streak(BaseModel):
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    unit: str = "days"
    last_activity_date: date | None = None

    @model_validator(mode="after")
    def _longest_covers_current(self) -> Streak:
        if self.longest_streak < self.current_streak:
            self.longest_streak = self.current_streak
        return self


class BudgetCategory(BaseModel):
    category: str
    estimated: float = 0.0
    spent: float = 0.0


class GoalTask(BaseModel):
    id: str
    title: str = ""
    completed: bool = False


class DomainProgress(BaseModel):
    """Per-domain progress payload nested inside smart_goal_data."""

    debts: list[Debt] = Field(default_factory=list)
    payoff_strategy: PayoffStrategy = PayoffStrategy.avalanche
    extra_payment: float = 0.0
    streak: Streak | None = None
    budget_categories: list[BudgetCategory] = Field(default_factory=list)
    tasks: list[GoalTask] = Field(default_factory=list)


class SmartGoalData(BaseModel):
    specific: str | None = None
    measurable: str | None = None
    achievable: str | None = None
    relevant: str | None = None
    timebound: str | None = None
    progress: DomainProgress | None = None


class Goal(BaseModel):
    """Fully-materialized goal snapshot handed in by the caller."""

    id: str
    title: str = ""
    category: str = GoalCategory.general.value  # raw; normalized by the classifier
    priority: GoalPriority = GoalPriority.medium
    status: GoalStatus = GoalStatus.planning
    estimated_cost: float | None = None
    current_saved: float = 0.0
    target_date: date | None = None
    created_at: date | None = None
    assigned_capabilities: list[str] = Field(default_factory=list)
    feasibility_score: float | None = None  # 0–100, opaque
    smart_goal_data: SmartGoalData | None = None

    @property
    def domain_progress(self) -> DomainProgress:
        if self.smart_goal_data is not None and self.smart_goal_data.progress is not None:
            return self.smart_goal_data.progress
        return DomainProgress()


# ---------------------------------------------------------------------------
# Metric results
# ---------------------------------------------------------------------------


class SavingsPlan(BaseModel):
    remaining: float
    days_left: int
    daily: float
    weekly: float
    monthly: float
    deadline_passed: bool = False


class SavingsProgress(BaseModel):
    percentage: float  # true value, may exceed 100
    remaining: float
    over: bool = False


class PayoffProjection(BaseModel):
    months: int | None = None  # None when the debt never resolves
    resolvable: bool = True


class DebtPayoffLine(BaseModel):
    debt_id: str
    name: str
    balance: float
    interest_rate: float
    minimum_payment: float
    extra_allocated: float
    monthly_payment: float
    payoff: PayoffProjection


class DebtPayoffPlan(BaseModel):
    strategy: PayoffStrategy
    lines: list[DebtPayoffLine] = Field(default_factory=list)
    total_balance: float = 0.0
    total_minimum_payment: float = 0.0
    total_paid: float = 0.0
    progress_pct: float = 0.0
    months_to_debt_free: int | None = None
    all_resolvable: bool = True


class BudgetVariance(BaseModel):
    estimated: float
    actual: float
    variance: float
    over_budget: bool
    # math.inf when nothing was budgeted but money was spent; null once it has been through JSON
    percentage: float | None

    @field_serializer("percentage", when_used="json")
    def _unbounded_as_null(self, value: float | None) -> float | None:
        if value is None or math.isinf(value):
            return None
        return value


class BudgetLine(BudgetVariance):
    category: str


class BudgetBreakdown(BaseModel):
    lines: list[BudgetLine] = Field(default_factory=list)
    total: BudgetVariance


class StreakMilestone(BaseModel):
    level: str
    previous_threshold: int
    next_threshold: int | None = None  # None once the top level is reached
    progress_pct: float
    is_max: bool = False


# ---------------------------------------------------------------------------
# Classification & layout
# ---------------------------------------------------------------------------


class GoalFeatures(BaseModel):
    category: GoalCategory
    category_recognized: bool = True
    has_deadline: bool = False
    estimated_cost: float | None = None
    cost_bracket: CostBracket = CostBracket.none
    capabilities: frozenset[str] = Field(default_factory=frozenset)
    progress_ratio: float = 0.0


class GridPosition(BaseModel):
    row: int
    col: int
    row_span: int = 1
    col_span: int = 1


class PlacedWidget(BaseModel):
    widget_id: str
    title: str
    required: bool
    size: str
    position: GridPosition
    props: dict[str, Any] = Field(default_factory=dict)


class EngineWarning(BaseModel):
    code: str  # "degenerate_input" | "unknown_category_fallback"
    message: str
    widget_id: str | None = None


class LayoutDescriptor(BaseModel):
    """Pure projection of a goal snapshot + registry; never persisted."""

    goal_id: str
    category: GoalCategory
    as_of: date
    breakpoint: str
    columns: int
    breakpoints: dict[str, int] = Field(default_factory=dict)
    widgets: list[PlacedWidget] = Field(default_factory=list)
    warnings: list[EngineWarning] = Field(default_factory=list)
