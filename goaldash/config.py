from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Responsive grid: breakpoint name -> column count
    breakpoint_columns: dict[str, int] = Field(
        default_factory=lambda: {"base": 1, "md": 2, "lg": 3, "xl": 4}
    )
    default_breakpoint: str = "lg"

    # Cost brackets (upper bounds, exclusive). Missing or <= 0 cost is "none".
    cost_bracket_low: float = 1000.0
    cost_bracket_medium: float = 10000.0
    cost_bracket_high: float = 50000.0  # >= this is "premium"

    # Deadline assumed by savings widgets when a goal has no target date
    default_deadline_days: int = 30

    # Reported for every capability tag when no status collaborator is wired in
    capability_default_status: str = "idle"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
