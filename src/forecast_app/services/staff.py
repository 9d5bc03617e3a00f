from __future__ import annotations

import logging
from typing import Dict

from ..config import EngineSettings
from ..models.headcount import Departure, NewHire, TeamMember, TeamPlan, calculate_levy
from ..models.results import StaffCostBreakdown
from .fiscal_calendar import Boundary, fiscal_year_of, months_employed_in_fiscal_year

logger = logging.getLogger(__name__)


def existing_member_cost(
    member: TeamMember,
    year: int,
    target_fiscal_year: int,
    levy_rate: float,
    departure: Departure | None = None,
) -> float:
    salary = member.new_salary * (1 + member.increase_pct / 100) ** (year - 1)
    levy = calculate_levy(salary, member.employment_type, levy_rate)
    months = 12
    if departure is not None:
        months = months_employed_in_fiscal_year(departure.end_month, target_fiscal_year, Boundary.END)
    return max(0.0, (salary + levy) * months / 12)


def new_hire_cost(hire: NewHire, target_fiscal_year: int, levy_rate: float, increase_pct: float) -> float:
    hire_fiscal_year = fiscal_year_of(hire.start_month)
    if hire_fiscal_year > target_fiscal_year:
        return 0.0
    salary = hire.salary * (1 + increase_pct / 100) ** (target_fiscal_year - hire_fiscal_year)
    levy = calculate_levy(salary, hire.employment_type, levy_rate)
    months = months_employed_in_fiscal_year(hire.start_month, target_fiscal_year, Boundary.START)
    return max(0.0, (salary + levy) * months / 12)


def staff_costs(team: TeamPlan, year: int, target_fiscal_year: int, settings: EngineSettings) -> StaffCostBreakdown:
    departures: Dict[str, Departure] = {}
    for departure in team.departures:
        departures.setdefault(departure.team_member_id, departure)

    existing = sum(
        existing_member_cost(member, year, target_fiscal_year, settings.levy_rate, departures.get(member.id))
        for member in team.existing
    )
    hires = sum(
        new_hire_cost(hire, target_fiscal_year, settings.levy_rate, settings.new_hire_increase_pct)
        for hire in team.planned_hires
    )
    bonuses = sum(max(0.0, bonus.amount) for bonus in team.bonuses)
    commissions = sum(max(0.0, commission.annual_amount or 0.0) for commission in team.commissions)
    total = existing + hires + bonuses + commissions
    logger.debug(
        "FY%d staff cost: existing=%.0f hires=%.0f bonuses=%.0f commissions=%.0f",
        target_fiscal_year,
        existing,
        hires,
        bonuses,
        commissions,
    )
    return StaffCostBreakdown(
        existing=existing,
        planned_hires=hires,
        bonuses=bonuses,
        commissions=commissions,
        total=total,
    )
