from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..services.fiscal_calendar import parse_month_key
from .common import ForecastYear


class CostBehavior(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"
    SEASONAL = "seasonal"
    ADHOC = "adhoc"


class ExpenseFrequency(str, Enum):
    ONCE = "once"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class COGSLine(BaseModel):
    id: str
    name: str
    cost_behavior: CostBehavior = Field(CostBehavior.VARIABLE, description="Only fixed and variable apply to COGS")
    monthly_amount: Optional[float] = None
    percent_of_revenue: Optional[float] = None
    annual_increase_pct: float = Field(0.0, description="Compounding applied to fixed lines from year 2")
    prior_year_total: Optional[float] = None
    account_id: Optional[str] = None
    notes: Optional[str] = None


class FixedCost(BaseModel):
    kind: Literal["fixed"] = "fixed"
    monthly_amount: Optional[float] = None
    annual_increase_pct: float = 0.0


class VariableCost(BaseModel):
    kind: Literal["variable"] = "variable"
    percent_of_revenue: Optional[float] = None
    y2_percent_override: Optional[float] = None
    y3_percent_override: Optional[float] = None

    def percent_for(self, year: int) -> Optional[float]:
        override = {2: self.y2_percent_override, 3: self.y3_percent_override}.get(year)
        return override if override is not None else self.percent_of_revenue


class SeasonalCost(BaseModel):
    kind: Literal["seasonal"] = "seasonal"
    growth_pct: Optional[float] = None
    target_amount: Optional[float] = Field(None, description="Annual amount used instead of a growth rate")


class AdHocCost(BaseModel):
    kind: Literal["adhoc"] = "adhoc"
    expected_annual_amount: Optional[float] = None
    expected_months: List[str] = Field(default_factory=list, description="YYYY-MM keys the amount lands in")

    @field_validator("expected_months")
    @classmethod
    def check_expected_months(cls, values: List[str]) -> List[str]:
        for key in values:
            parse_month_key(key)
        return values


OpExBehavior = Annotated[Union[FixedCost, VariableCost, SeasonalCost, AdHocCost], Field(discriminator="kind")]


class OpExLine(BaseModel):
    id: str
    name: str
    prior_year_annual: float = 0.0
    behavior: Optional[OpExBehavior] = None
    start_year: Optional[ForecastYear] = None
    is_one_time: bool = False
    one_time_year: Optional[ForecastYear] = None
    y2_override: Optional[float] = None
    y3_override: Optional[float] = None
    is_subscription: bool = False
    account_id: Optional[str] = None
    notes: Optional[str] = None

    def override_for(self, year: int) -> Optional[float]:
        return {2: self.y2_override, 3: self.y3_override}.get(year)


class OtherExpense(BaseModel):
    id: str
    description: str
    amount: float = 0.0
    frequency: ExpenseFrequency = ExpenseFrequency.ANNUAL
    notes: Optional[str] = None

    def annual_amount(self) -> float:
        if self.frequency == ExpenseFrequency.MONTHLY:
            return self.amount * 12
        if self.frequency == ExpenseFrequency.QUARTERLY:
            return self.amount * 4
        return self.amount
