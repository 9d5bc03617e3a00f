from __future__ import annotations

from ..models.common import round_currency
from ..models.results import YearBudget, YearlySummary


def year_budget(year: int, summary: YearlySummary, target_profit_pct: float, carried_savings: float = 0.0) -> YearBudget:
    revenue = summary.revenue
    target_profit = round_currency(revenue * target_profit_pct / 100)
    available = revenue - summary.cogs - summary.team_costs - target_profit
    savings = carried_savings if year >= 2 else 0.0
    total_allocated = summary.opex + summary.depreciation - savings
    remaining = available - total_allocated
    if available > 0:
        utilization = round_currency(total_allocated / available * 100)
    else:
        utilization = 100.0
    return YearBudget(
        year=year,
        revenue=round_currency(revenue),
        cogs=round_currency(summary.cogs),
        team_costs=round_currency(summary.team_costs),
        target_profit=target_profit,
        target_profit_pct=target_profit_pct,
        available_for_expenses=round_currency(available),
        opex_allocated=round_currency(summary.opex),
        capex_depreciation=round_currency(summary.depreciation),
        carried_savings=round_currency(savings),
        total_allocated=round_currency(total_allocated),
        remaining=round_currency(remaining),
        utilization_pct=utilization,
        is_over_budget=remaining < 0,
    )
