from __future__ import annotations

from typing import Dict, List, Sequence

from ..models.assumptions import ForecastAssumptions
from ..models.capex import CapExItem
from ..models.costs import AdHocCost, CostBehavior, SeasonalCost, VariableCost
from ..models.results import MonthlyLine, MonthlyPL, PLCategory
from ..models.revenue import RevenueLine, RevenuePattern
from .cogs import cogs_line_amount, total_cogs
from .fiscal_calendar import month_keys_for_fiscal_year
from .opex import opex_amounts
from .revenue_allocator import distribute, resolve_quarters


def spread(amount: float, month_keys: List[str], weights: Sequence[float]) -> Dict[str, float]:
    return dict(zip(month_keys, distribute(amount, weights)))


def spread_evenly(amount: float, month_keys: List[str]) -> Dict[str, float]:
    return spread(amount, month_keys, [1.0] * len(month_keys))


def spread_to_months(amount: float, expected_months: List[str], month_keys: List[str]) -> Dict[str, float]:
    # expected months outside this fiscal year are ignored
    targets = set(expected_months) & set(month_keys)
    if not targets:
        return spread_evenly(amount, month_keys)
    return spread(amount, month_keys, [1.0 if key in targets else 0.0 for key in month_keys])


def _revenue_months(
    line: RevenueLine,
    year: int,
    assumptions: ForecastAssumptions,
    month_keys: List[str],
    straight_line: bool,
) -> Dict[str, float]:
    if year == 1:
        return {key: line.year1_monthly.get(key, 0.0) for key in month_keys}
    seasonality = assumptions.seasonality()
    quarters = resolve_quarters(line, year, assumptions.revenue_lines, assumptions.goals, seasonality, straight_line)
    months: Dict[str, float] = {}
    for index, value in enumerate(quarters.as_list()):
        window = slice(index * 3, (index + 1) * 3)
        weights = [1.0] * 3 if straight_line else seasonality.values[window]
        months.update(spread(value, month_keys[window], weights))
    return months


def _depreciation_months(item: CapExItem, year: int, month_keys: List[str]) -> Dict[str, float]:
    if year > 1:
        return spread_evenly(item.annual_depreciation, month_keys)
    # first-year charge is booked from the purchase month on
    weights = [0.0 if index + 1 < item.month else 1.0 for index in range(len(month_keys))]
    return spread(item.annual_depreciation, month_keys, weights)


def monthly_pl(
    assumptions: ForecastAssumptions,
    year: int,
    revenue: float,
    cogs: float,
    team_costs: float,
) -> MonthlyPL:
    fiscal_year = assumptions.target_fiscal_year(year)
    month_keys = month_keys_for_fiscal_year(fiscal_year - 1)
    straight_line = assumptions.revenue_pattern == RevenuePattern.STRAIGHT_LINE
    weights = [1.0] * 12 if straight_line else assumptions.seasonality().values
    lines: List[MonthlyLine] = []

    for line in assumptions.revenue_lines:
        months = _revenue_months(line, year, assumptions, month_keys, straight_line)
        lines.append(
            MonthlyLine(
                id=line.id,
                name=line.name,
                category=PLCategory.REVENUE,
                annual_amount=sum(months.values()),
                months=months,
            )
        )
    if sum(line.annual_amount for line in lines) <= 0 and revenue > 0:
        lines.append(
            MonthlyLine(
                id="sales-revenue",
                name="Sales Revenue",
                category=PLCategory.REVENUE,
                annual_amount=revenue,
                months=spread(revenue, month_keys, weights),
            )
        )

    if total_cogs(assumptions.cogs_lines, year, revenue) > 0:
        for cogs_line in assumptions.cogs_lines:
            amount = cogs_line_amount(cogs_line, year, revenue)
            if cogs_line.cost_behavior == CostBehavior.FIXED:
                months = spread_evenly(amount, month_keys)
            else:
                months = spread(amount, month_keys, weights)
            lines.append(
                MonthlyLine(id=cogs_line.id, name=cogs_line.name, category=PLCategory.COGS, annual_amount=amount, months=months)
            )
    elif cogs > 0:
        lines.append(
            MonthlyLine(
                id="cost-of-sales",
                name="Cost of Sales",
                category=PLCategory.COGS,
                annual_amount=cogs,
                months=spread(cogs, month_keys, weights),
            )
        )

    if team_costs > 0:
        lines.append(
            MonthlyLine(
                id="salaries-wages",
                name="Salaries & Wages",
                category=PLCategory.TEAM,
                annual_amount=team_costs,
                months=spread_evenly(team_costs, month_keys),
            )
        )

    for opex_line, amount in zip(assumptions.opex_lines, opex_amounts(assumptions.opex_lines, year, revenue)):
        behavior = opex_line.behavior
        if isinstance(behavior, (VariableCost, SeasonalCost)):
            months = spread(amount.amount, month_keys, weights)
        elif isinstance(behavior, AdHocCost):
            months = spread_to_months(amount.amount, behavior.expected_months, month_keys)
        else:
            months = spread_evenly(amount.amount, month_keys)
        lines.append(
            MonthlyLine(id=amount.id, name=amount.name, category=PLCategory.OPEX, annual_amount=amount.amount, months=months)
        )

    for item in assumptions.capex_items:
        if item.annual_depreciation <= 0:
            continue
        lines.append(
            MonthlyLine(
                id=f"depreciation-{item.id}",
                name=f"Depreciation - {item.description}",
                category=PLCategory.DEPRECIATION,
                annual_amount=item.annual_depreciation,
                months=_depreciation_months(item, year, month_keys),
            )
        )

    for expense in assumptions.other_expenses:
        amount = max(0.0, expense.annual_amount())
        lines.append(
            MonthlyLine(
                id=expense.id,
                name=expense.description,
                category=PLCategory.OTHER,
                annual_amount=amount,
                months=spread_evenly(amount, month_keys),
            )
        )

    return MonthlyPL(year=year, fiscal_year=fiscal_year, lines=lines)
