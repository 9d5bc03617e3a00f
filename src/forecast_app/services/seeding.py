from __future__ import annotations

from typing import Dict, List

from ..models.common import round_currency
from ..models.costs import COGSLine, CostBehavior, FixedCost, OpExLine
from ..models.prior_year import PriorYearData
from ..models.results import SeededLines
from ..models.revenue import RevenueLine
from .fiscal_calendar import fiscal_month_number, month_keys_for_fiscal_year
from .revenue_allocator import distribute


def roll_forward(by_month: Dict[str, float], month_keys: List[str]) -> Dict[str, float]:
    rolled = {key: 0.0 for key in month_keys}
    for key, value in by_month.items():
        rolled[month_keys[fiscal_month_number(key) - 1]] += value
    return rolled


def seed_revenue_lines(prior: PriorYearData, month_keys: List[str]) -> List[RevenueLine]:
    if prior.revenue.by_line:
        return [
            RevenueLine(id=line.id, name=line.name, year1_monthly=roll_forward(line.by_month, month_keys))
            for line in prior.revenue.by_line
        ]
    if prior.revenue.total > 0:
        amounts = distribute(prior.revenue.total, prior.seasonality_pattern.values)
        return [RevenueLine(id="sales-revenue", name="Sales Revenue", year1_monthly=dict(zip(month_keys, amounts)))]
    return []


def seed_cogs_lines(prior: PriorYearData) -> List[COGSLine]:
    if prior.cogs.by_line:
        return [
            COGSLine(
                id=line.id,
                name=line.name,
                account_id=line.id,
                cost_behavior=CostBehavior.VARIABLE,
                percent_of_revenue=line.percent_of_revenue,
                prior_year_total=line.total,
            )
            for line in prior.cogs.by_line
        ]
    if prior.cogs.total > 0:
        return [
            COGSLine(
                id="default-cogs",
                name="Cost of Sales",
                account_id="default-cogs",
                cost_behavior=CostBehavior.VARIABLE,
                percent_of_revenue=prior.cogs.percent_of_revenue,
                prior_year_total=prior.cogs.total,
            )
        ]
    return []


def seed_opex_lines(prior: PriorYearData, default_increase_pct: float) -> List[OpExLine]:
    lines = []
    for line in prior.opex.by_line:
        monthly_avg = line.monthly_avg or line.total / 12
        lines.append(
            OpExLine(
                id=line.id,
                name=line.name,
                account_id=line.id,
                prior_year_annual=line.total,
                behavior=FixedCost(monthly_amount=round_currency(monthly_avg), annual_increase_pct=default_increase_pct),
            )
        )
    return lines


def seed_from_prior_year(prior: PriorYearData, fiscal_year_start: int, default_increase_pct: float = 3.0) -> SeededLines:
    month_keys = month_keys_for_fiscal_year(fiscal_year_start)
    return SeededLines(
        revenue_lines=seed_revenue_lines(prior, month_keys),
        cogs_lines=seed_cogs_lines(prior),
        opex_lines=seed_opex_lines(prior, default_increase_pct),
    )
