from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from sipplanner.core.schemas import GoalTemplate
from sipplanner.utils.sip_models import Goal

_BUILTIN_TEMPLATES: List[Dict[str, Any]] = [
    {
        "id": "child-education",
        "name": "Child's Higher Education",
        "icon": "🎓",
        "description": "University education in India",
        "currentPrice": 2000000,
        "inflationRate": 8,
        "years": 15,
        "expectedReturn": 12,
    },
    {
        "id": "house-purchase",
        "name": "Buy a House",
        "icon": "🏠",
        "description": "Down payment for home",
        "currentPrice": 3000000,
        "inflationRate": 6,
        "years": 10,
        "expectedReturn": 12,
    },
    {
        "id": "retirement",
        "name": "Retirement Fund",
        "icon": "🌴",
        "description": "Build retirement corpus",
        "currentPrice": 10000000,
        "inflationRate": 7,
        "years": 25,
        "expectedReturn": 13,
    },
    {
        "id": "car-purchase",
        "name": "Buy a Car",
        "icon": "🚗",
        "description": "Mid-range car purchase",
        "currentPrice": 1500000,
        "inflationRate": 5,
        "years": 5,
        "expectedReturn": 10,
    },
    {
        "id": "wedding",
        "name": "Wedding Expenses",
        "icon": "💒",
        "description": "Wedding celebration",
        "currentPrice": 2500000,
        "inflationRate": 7,
        "years": 8,
        "expectedReturn": 11,
    },
    {
        "id": "vacation",
        "name": "Dream Vacation",
        "icon": "✈️",
        "description": "International trip",
        "currentPrice": 500000,
        "inflationRate": 6,
        "years": 3,
        "expectedReturn": 9,
    },
    {
        "id": "business",
        "name": "Start a Business",
        "icon": "💼",
        "description": "Business capital",
        "currentPrice": 5000000,
        "inflationRate": 7,
        "years": 10,
        "expectedReturn": 14,
    },
    {
        "id": "emergency-fund",
        "name": "Emergency Fund",
        "icon": "🏥",
        "description": "6 months expenses",
        "currentPrice": 500000,
        "inflationRate": 6,
        "years": 2,
        "expectedReturn": 8,
    },
]


class TemplateCatalog:
    """Built-in goal presets plus any custom ones added at runtime."""

    def __init__(self) -> None:
        self._templates: List[GoalTemplate] = [GoalTemplate.model_validate(t) for t in _BUILTIN_TEMPLATES]

    def all(self) -> List[GoalTemplate]:
        return list(self._templates)

    def get(self, template_id: str) -> Optional[GoalTemplate]:
        for t in self._templates:
            if t.template_id == template_id:
                return t
        return None

    def create_goal(self, template_id: str) -> Optional[Goal]:
        t = self.get(template_id)
        if t is None:
            return None
        return Goal(
            name=t.name,
            current_price=t.current_price,
            inflation_rate=t.inflation_rate,
            years=t.years,
            expected_return=t.expected_return,
        )

    def add_custom(self, template: Union[GoalTemplate, Dict[str, Any]]) -> bool:
        if isinstance(template, dict):
            if not template.get("id") or not template.get("name"):
                return False
            try:
                template = GoalTemplate.model_validate(template)
            except ValidationError:
                return False

        if not template.template_id or not template.name:
            return False
        if self.get(template.template_id) is not None:
            return False

        self._templates.append(template)
        return True
