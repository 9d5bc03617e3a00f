from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .costs import COGSLine, CostBehavior, OpExLine
from .revenue import RevenueLine


class YearlySummary(BaseModel):
    revenue: float
    cogs: float
    gross_profit: float
    gross_profit_pct: float
    team_costs: float
    opex: float
    depreciation: float
    other_expenses: float
    net_profit: float
    net_profit_pct: float


class ForecastSummary(BaseModel):
    year1: YearlySummary
    year2: Optional[YearlySummary] = None
    year3: Optional[YearlySummary] = None

    def for_year(self, year: int) -> Optional[YearlySummary]:
        return {1: self.year1, 2: self.year2, 3: self.year3}.get(year)


class YearBudget(BaseModel):
    year: int
    revenue: float
    cogs: float
    team_costs: float
    target_profit: float
    target_profit_pct: float
    available_for_expenses: float
    opex_allocated: float
    capex_depreciation: float
    carried_savings: float
    total_allocated: float
    remaining: float
    utilization_pct: float
    is_over_budget: bool


class PLCategory(str, Enum):
    REVENUE = "revenue"
    COGS = "cogs"
    TEAM = "team"
    OPEX = "opex"
    DEPRECIATION = "depreciation"
    OTHER = "other"


class MonthlyLine(BaseModel):
    id: str
    name: str
    category: PLCategory
    annual_amount: float
    months: Dict[str, float]


class MonthlyPL(BaseModel):
    year: int
    fiscal_year: int
    lines: List[MonthlyLine]

    def total_for(self, category: PLCategory) -> float:
        return sum(sum(line.months.values()) for line in self.lines if line.category == category)


class ForecastResult(BaseModel):
    summary: ForecastSummary
    budget: List[YearBudget]
    monthly: List[MonthlyPL] = Field(default_factory=list)


class StaffCostBreakdown(BaseModel):
    existing: float
    planned_hires: float
    bonuses: float
    commissions: float
    total: float


class OpExLineAmount(BaseModel):
    id: str
    name: str
    amount: float


class AllocationResult(BaseModel):
    monthly: Dict[str, float]
    locked_total: float
    remaining_target: float


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ClassificationResult(BaseModel):
    behavior: CostBehavior
    confidence: Confidence
    reason: str
    is_team_cost: bool = False


class PatternAnalysis(BaseModel):
    suggested_behavior: Optional[CostBehavior] = None
    coefficient: float = 0.0
    is_spiky: bool = False
    has_seasonal: bool = False


class SuggestedValue(BaseModel):
    value: float
    unit: str


class SeededLines(BaseModel):
    revenue_lines: List[RevenueLine]
    cogs_lines: List[COGSLine]
    opex_lines: List[OpExLine]
