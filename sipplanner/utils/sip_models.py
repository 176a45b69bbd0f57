from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Goal(BaseModel):
    """A financial goal as supplied by callers.

    Only coerces types. Range checks live in ``sipplanner.utils.validators``
    so that unvalidated numbers still flow into the engine unchanged.
    Accepts the camelCase keys used by exported goal files.
    """

    model_config = ConfigDict(populate_by_name=True)

    goal_id: Optional[Union[int, str]] = Field(default=None, alias="id")
    name: str = ""
    current_price: float = Field(..., alias="currentPrice")
    inflation_rate: float = Field(..., alias="inflationRate", description="Annual %, e.g. 7 for 7%")
    years: float
    expected_return: float = Field(..., alias="expectedReturn", description="Annual nominal return %")
    stepup_rate: float = Field(default=0.0, alias="stepUpRate", description="Annual SIP increase %")

    @field_validator("stepup_rate", mode="before")
    @classmethod
    def _missing_stepup_is_zero(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.0
        return v


class GoalPlan(BaseModel):
    name: str
    future_value: float
    monthly_sip: float
    total_invested: float
    wealth_gain: float
    stepup_rate: float = 0.0
    is_stepup: bool = False


class PortfolioSummary(BaseModel):
    total_monthly_sip: float = 0.0
    total_future_value: float = 0.0
    total_invested: float = 0.0
    total_wealth_gain: float = 0.0
    goal_count: int = 0
    plans: List[GoalPlan] = Field(default_factory=list)


class GrowthSeries(BaseModel):
    goal_name: str
    years: List[int] = Field(default_factory=list)
    invested: List[float] = Field(default_factory=list)
    future_values: List[float] = Field(default_factory=list)
