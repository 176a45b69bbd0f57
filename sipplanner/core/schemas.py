from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sipplanner.utils.sip_models import Goal


# -------------------------
# Goal validation (boundary)
# -------------------------

class ValidGoal(BaseModel):
    kind: Literal["valid"] = "valid"
    goal: Goal


class InvalidGoal(BaseModel):
    kind: Literal["invalid"] = "invalid"
    reasons: List[str] = Field(default_factory=list)

    @property
    def reason(self) -> str:
        return "; ".join(self.reasons)


GoalValidation = Union[ValidGoal, InvalidGoal]


class ValidationIssue(BaseModel):
    level: str  # ERROR | WARN | INFO
    message: str
    location: Optional[str] = None


class ValidationReport(BaseModel):
    ok: bool
    goal_count: int = 0
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    def add_error(self, msg: str, location: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(level="ERROR", message=msg, location=location))

    def add_warning(self, msg: str, location: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(level="WARN", message=msg, location=location))

    def finalize(self) -> "ValidationReport":
        self.ok = len(self.errors) == 0
        return self


# -------------------------
# Templates
# -------------------------

class GoalTemplate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    template_id: str = Field(..., alias="id")
    name: str
    icon: str = ""
    description: str = ""
    current_price: float = Field(..., alias="currentPrice")
    inflation_rate: float = Field(..., alias="inflationRate")
    years: float
    expected_return: float = Field(..., alias="expectedReturn")


# -------------------------
# Errors
# -------------------------

class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
