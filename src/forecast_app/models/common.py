from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, Field, conint, field_validator


DEFAULT_MONTH_WEIGHT = 100 / 12

ForecastYear = conint(ge=1, le=3)


def round_currency(value: float) -> float:
    return float(math.floor(value + 0.5))


def round_pct(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


class YearlyGoals(BaseModel):
    revenue: float = 0.0
    gross_profit_pct: Optional[float] = None
    net_profit_pct: Optional[float] = None
    headcount_target: Optional[int] = None


class Goals(BaseModel):
    year1: YearlyGoals = Field(default_factory=YearlyGoals)
    year2: Optional[YearlyGoals] = None
    year3: Optional[YearlyGoals] = None

    def for_year(self, year: int) -> Optional[YearlyGoals]:
        return {1: self.year1, 2: self.year2, 3: self.year3}.get(year)

    def revenue_for(self, year: int) -> float:
        goals = self.for_year(year)
        return goals.revenue if goals is not None else 0.0


class SeasonalityPattern(BaseModel):
    values: List[float] = Field(
        default_factory=lambda: [DEFAULT_MONTH_WEIGHT] * 12,
        description="Twelve fiscal-month weights (July first), ideally summing to 100",
    )

    @field_validator("values")
    @classmethod
    def twelve_non_negative(cls, values: List[float]) -> List[float]:
        cleaned = [max(0.0, float(v)) for v in values[:12]]
        cleaned.extend([DEFAULT_MONTH_WEIGHT] * (12 - len(cleaned)))
        return cleaned

    @classmethod
    def flat(cls) -> "SeasonalityPattern":
        return cls()

    def weight(self, month_index: int) -> float:
        return self.values[month_index % 12]

    def quarter_weights(self) -> List[float]:
        return [sum(self.values[q * 3:(q + 1) * 3]) for q in range(4)]
