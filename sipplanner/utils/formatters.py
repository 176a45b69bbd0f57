from __future__ import annotations

import math

from sipplanner.core.config import SETTINGS


def format_number(x: float) -> str:
    """Plain number text: whole floats lose their trailing ``.0``."""
    if isinstance(x, float) and math.isfinite(x) and x.is_integer():
        return str(int(x))
    return str(x)


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float, symbol: str | None = None) -> str:
    sym = SETTINGS.currency_symbol if symbol is None else symbol
    if math.isnan(amount):
        return f"{sym}NaN"
    if math.isinf(amount):
        return f"{'-' if amount < 0 else ''}{sym}∞"

    units = int(math.floor(abs(amount) + 0.5))
    sign = "-" if amount < 0 and units else ""
    return f"{sign}{sym}{_group_indian(str(units))}"


def format_percentage(percentage: float) -> str:
    return f"{format_number(percentage)}%"


def format_years(years: float) -> str:
    return "1 year" if years == 1 else f"{format_number(years)} years"
