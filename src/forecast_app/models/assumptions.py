from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from ..services.fiscal_calendar import month_keys_for_fiscal_year
from .capex import CapExItem
from .common import Goals, SeasonalityPattern
from .costs import COGSLine, OpExLine, OtherExpense
from .headcount import TeamPlan
from .prior_year import CurrentYTD, PriorYearData
from .revenue import RevenueLine, RevenuePattern


class ForecastAssumptions(BaseModel):
    fiscal_year_start: int = Field(..., description="Calendar year in which forecast year 1 begins (2025 => FY2026)")
    forecast_duration: Literal[1, 2, 3] = 1
    goals: Goals = Field(default_factory=Goals)
    revenue_pattern: RevenuePattern = RevenuePattern.SEASONAL
    revenue_lines: List[RevenueLine] = Field(default_factory=list)
    cogs_lines: List[COGSLine] = Field(default_factory=list)
    team: TeamPlan = Field(default_factory=TeamPlan)
    opex_lines: List[OpExLine] = Field(default_factory=list)
    capex_items: List[CapExItem] = Field(default_factory=list)
    other_expenses: List[OtherExpense] = Field(default_factory=list)
    seasonality_pattern: Optional[SeasonalityPattern] = None
    subscription_savings: float = Field(0.0, description="Annual savings carried forward into year 2 onwards")
    prior_year: Optional[PriorYearData] = None
    current_ytd: Optional[CurrentYTD] = None

    @model_validator(mode="after")
    def check_year1_keys(self) -> "ForecastAssumptions":
        allowed = set(self.month_keys())
        for line in self.revenue_lines:
            stray = sorted(set(line.year1_monthly) - allowed)
            if stray:
                raise ValueError(f"Revenue line {line.id} has months outside the first forecast year: {', '.join(stray)}")
        return self

    def month_keys(self) -> List[str]:
        return month_keys_for_fiscal_year(self.fiscal_year_start)

    def seasonality(self) -> SeasonalityPattern:
        if self.seasonality_pattern is not None:
            return self.seasonality_pattern
        if self.prior_year is not None:
            return self.prior_year.seasonality_pattern
        return SeasonalityPattern.flat()

    def locked_months(self) -> set:
        if self.current_ytd is None:
            return set()
        return self.current_ytd.locked_months()

    def years(self) -> List[int]:
        return list(range(1, self.forecast_duration + 1))

    def target_fiscal_year(self, year: int) -> int:
        return self.fiscal_year_start + year
