from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, Field, field_validator

from ..services.fiscal_calendar import check_month_keys


class RevenuePattern(str, Enum):
    SEASONAL = "seasonal"
    STRAIGHT_LINE = "straight-line"
    MANUAL = "manual"


class QuarterlyValues(BaseModel):
    q1: float = 0.0
    q2: float = 0.0
    q3: float = 0.0
    q4: float = 0.0

    @classmethod
    def from_list(cls, values: List[float]) -> "QuarterlyValues":
        q1, q2, q3, q4 = values
        return cls(q1=q1, q2=q2, q3=q3, q4=q4)

    def as_list(self) -> List[float]:
        return [self.q1, self.q2, self.q3, self.q4]

    def total(self) -> float:
        return self.q1 + self.q2 + self.q3 + self.q4


class DerivedQuarters(BaseModel):
    mode: Literal["derived"] = "derived"


class ExplicitQuarters(BaseModel):
    mode: Literal["explicit"] = "explicit"
    values: QuarterlyValues = Field(default_factory=QuarterlyValues)


QuarterPlan = Annotated[Union[DerivedQuarters, ExplicitQuarters], Field(discriminator="mode")]


class RevenueLine(BaseModel):
    id: str
    name: str
    year1_monthly: Dict[str, float] = Field(default_factory=dict, description="Year-1 values keyed by YYYY-MM")
    year2: QuarterPlan = Field(default_factory=DerivedQuarters)
    year3: QuarterPlan = Field(default_factory=DerivedQuarters)

    @field_validator("year1_monthly")
    @classmethod
    def check_year1_monthly(cls, values: Dict[str, float]) -> Dict[str, float]:
        return check_month_keys(values)

    def year1_total(self) -> float:
        return sum(self.year1_monthly.values())

    def plan_for(self, year: int) -> Union[DerivedQuarters, ExplicitQuarters]:
        return self.year2 if year == 2 else self.year3
