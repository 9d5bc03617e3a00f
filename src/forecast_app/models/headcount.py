from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from ..services.fiscal_calendar import parse_month_key
from .common import round_currency


class EmploymentType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CASUAL = "casual"
    CONTRACTOR = "contractor"


class CommissionTiming(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


def calculate_new_salary(current_salary: float, increase_pct: float) -> float:
    return round_currency(current_salary * (1 + increase_pct / 100))


def calculate_levy(salary: float, employment_type: EmploymentType, levy_rate: float) -> float:
    if employment_type == EmploymentType.CONTRACTOR:
        return 0.0
    return salary * levy_rate


def _check_month(value: str) -> str:
    parse_month_key(value)
    return value


class TeamMember(BaseModel):
    id: str
    name: str
    role: str = ""
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    hours_per_week: float = 38.0
    current_salary: float = 0.0
    increase_pct: float = 0.0
    is_from_accounting: bool = False

    @computed_field
    @property
    def new_salary(self) -> float:
        return calculate_new_salary(self.current_salary, self.increase_pct)


class NewHire(BaseModel):
    id: str
    role: str
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    hours_per_week: float = 38.0
    start_month: str = Field(..., description="YYYY-MM of the first month employed")
    salary: float = 0.0

    @field_validator("start_month")
    @classmethod
    def check_start_month(cls, value: str) -> str:
        return _check_month(value)


class Departure(BaseModel):
    id: str
    team_member_id: str
    end_month: str = Field(..., description="YYYY-MM of the last month worked")

    @field_validator("end_month")
    @classmethod
    def check_end_month(cls, value: str) -> str:
        return _check_month(value)


class Bonus(BaseModel):
    id: str
    team_member_id: str
    amount: float = 0.0
    month: int = 12


class Commission(BaseModel):
    id: str
    team_member_id: str
    percent_of_revenue: float = 0.0
    revenue_line_id: Optional[str] = None
    timing: CommissionTiming = CommissionTiming.ANNUAL
    annual_amount: Optional[float] = Field(None, description="Flat annual cost; percent-of-revenue is not modelled")


class TeamPlan(BaseModel):
    existing: List[TeamMember] = Field(default_factory=list)
    planned_hires: List[NewHire] = Field(default_factory=list)
    departures: List[Departure] = Field(default_factory=list)
    bonuses: List[Bonus] = Field(default_factory=list)
    commissions: List[Commission] = Field(default_factory=list)
