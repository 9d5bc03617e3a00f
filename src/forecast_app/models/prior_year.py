from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..services.fiscal_calendar import check_month_keys
from .common import SeasonalityPattern


class PriorRevenueLine(BaseModel):
    id: str
    name: str
    total: float = 0.0
    by_month: Dict[str, float] = Field(default_factory=dict)

    @field_validator("by_month")
    @classmethod
    def check_by_month(cls, values: Dict[str, float]) -> Dict[str, float]:
        return check_month_keys(values)


class PriorCOGSLine(BaseModel):
    id: str
    name: str
    total: float = 0.0
    percent_of_revenue: float = 0.0


class PriorOpExLine(BaseModel):
    id: str
    name: str
    total: float = 0.0
    monthly_avg: Optional[float] = None
    by_month: Dict[str, float] = Field(default_factory=dict)
    is_one_off: bool = False

    @field_validator("by_month")
    @classmethod
    def check_by_month(cls, values: Dict[str, float]) -> Dict[str, float]:
        return check_month_keys(values)


class PriorRevenue(BaseModel):
    total: float = 0.0
    by_month: Dict[str, float] = Field(default_factory=dict)
    by_line: List[PriorRevenueLine] = Field(default_factory=list)

    @field_validator("by_month")
    @classmethod
    def check_by_month(cls, values: Dict[str, float]) -> Dict[str, float]:
        return check_month_keys(values)


class PriorCOGS(BaseModel):
    total: float = 0.0
    percent_of_revenue: float = 0.0
    by_line: List[PriorCOGSLine] = Field(default_factory=list)


class PriorOpEx(BaseModel):
    total: float = 0.0
    by_month: Dict[str, float] = Field(default_factory=dict)
    by_line: List[PriorOpExLine] = Field(default_factory=list)

    @field_validator("by_month")
    @classmethod
    def check_by_month(cls, values: Dict[str, float]) -> Dict[str, float]:
        return check_month_keys(values)


class PriorYearData(BaseModel):
    revenue: PriorRevenue = Field(default_factory=PriorRevenue)
    cogs: PriorCOGS = Field(default_factory=PriorCOGS)
    opex: PriorOpEx = Field(default_factory=PriorOpEx)
    seasonality_pattern: SeasonalityPattern = Field(default_factory=SeasonalityPattern.flat)


class CurrentYTD(BaseModel):
    revenue_by_month: Dict[str, float] = Field(default_factory=dict)
    total_revenue: float = 0.0
    months_count: int = 0

    @field_validator("revenue_by_month")
    @classmethod
    def check_revenue_by_month(cls, values: Dict[str, float]) -> Dict[str, float]:
        return check_month_keys(values)

    def locked_months(self) -> set:
        return set(self.revenue_by_month)
