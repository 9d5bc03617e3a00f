from __future__ import annotations

from typing import List, Tuple

from ..models.costs import AdHocCost, FixedCost, OpExLine, SeasonalCost, VariableCost
from ..models.results import OpExLineAmount


def is_active(line: OpExLine, year: int) -> bool:
    if line.start_year is not None and line.start_year > year:
        return False
    if line.is_one_time and line.one_time_year is not None and line.one_time_year != year:
        return False
    return True


def _compounding_base(line: OpExLine, year: int, base_year: int, base_amount: float) -> Tuple[int, float]:
    if line.y2_override is not None and base_year <= 2 < year:
        return 2, line.y2_override
    return base_year, base_amount


def opex_line_amount(line: OpExLine, year: int, revenue: float) -> float:
    if not is_active(line, year):
        return 0.0
    override = line.override_for(year)
    if override is not None:
        return max(0.0, override)

    behavior = line.behavior
    amount = line.prior_year_annual
    if isinstance(behavior, FixedCost):
        if behavior.monthly_amount is not None:
            start_year = line.start_year or 1
            base_year, base = _compounding_base(line, year, start_year, behavior.monthly_amount * 12)
            amount = base * (1 + behavior.annual_increase_pct / 100) ** (year - base_year)
    elif isinstance(behavior, VariableCost):
        percent = behavior.percent_for(year)
        if percent is not None:
            amount = revenue * percent / 100
    elif isinstance(behavior, SeasonalCost):
        if behavior.target_amount is not None:
            amount = behavior.target_amount
        elif behavior.growth_pct is not None:
            # compounds from the forecast start, not the line start
            base_year, base = _compounding_base(line, year, 0, line.prior_year_annual)
            amount = base * (1 + behavior.growth_pct / 100) ** (year - base_year)
    elif isinstance(behavior, AdHocCost):
        if behavior.expected_annual_amount is not None:
            amount = behavior.expected_annual_amount
    return max(0.0, amount)


def opex_amounts(lines: List[OpExLine], year: int, revenue: float) -> List[OpExLineAmount]:
    return [OpExLineAmount(id=line.id, name=line.name, amount=opex_line_amount(line, year, revenue)) for line in lines]


def total_opex(lines: List[OpExLine], year: int, revenue: float) -> float:
    return sum(opex_line_amount(line, year, revenue) for line in lines)
