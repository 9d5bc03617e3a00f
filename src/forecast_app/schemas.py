from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .models.assumptions import ForecastAssumptions
from .models.common import ForecastYear, SeasonalityPattern
from .models.prior_year import PriorYearData
from .models.results import ClassificationResult, ForecastResult, ForecastSummary, MonthlyPL, SuggestedValue, YearBudget
from .models.revenue import RevenueLine, RevenuePattern
from .services.fiscal_calendar import check_month_keys


class AssumptionsRequest(BaseModel):
    assumptions: ForecastAssumptions


class SummaryResponse(BaseModel):
    summary: ForecastSummary


class BudgetResponse(BaseModel):
    budget: List[YearBudget]


class RunResponse(BaseModel):
    result: ForecastResult


class MonthlyResponse(BaseModel):
    monthly: List[MonthlyPL]


class AllocateRequest(BaseModel):
    target: float
    fiscal_year_start: int
    seasonality: SeasonalityPattern = Field(default_factory=SeasonalityPattern.flat)
    existing: Dict[str, float] = Field(default_factory=dict)
    locked_months: List[str] = Field(default_factory=list)
    pattern: RevenuePattern = RevenuePattern.SEASONAL


class AllocateResponse(BaseModel):
    monthly: Dict[str, float]
    locked_total: float
    remaining_target: float


class LinePercentageRequest(BaseModel):
    assumptions: ForecastAssumptions
    line_id: str
    year: ForecastYear
    percent: float


class RevenueLinesResponse(BaseModel):
    revenue_lines: List[RevenueLine]
    percentages: Dict[str, float]


class ClassifyLine(BaseModel):
    id: str
    name: str
    prior_year_monthly: Optional[Dict[str, float]] = None
    prior_year_annual: float = 0.0

    @field_validator("prior_year_monthly")
    @classmethod
    def check_prior_year_monthly(cls, values: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        return check_month_keys(values) if values is not None else None


class ClassifyRequest(BaseModel):
    lines: List[ClassifyLine]
    industry: Optional[str] = None
    revenue_target: float = 0.0


class ClassifyResponse(BaseModel):
    classifications: Dict[str, ClassificationResult]
    suggestions: Dict[str, SuggestedValue]


class SeedRequest(BaseModel):
    prior_year: PriorYearData
    fiscal_year_start: int
