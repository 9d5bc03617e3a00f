from __future__ import annotations

from typing import List

from ..models.costs import COGSLine, CostBehavior


def cogs_line_amount(line: COGSLine, year: int, revenue: float) -> float:
    if line.cost_behavior == CostBehavior.FIXED:
        growth = (1 + line.annual_increase_pct / 100) ** (year - 1)
        amount = (line.monthly_amount or 0.0) * 12 * growth
    else:
        amount = revenue * (line.percent_of_revenue or 0.0) / 100
    return max(0.0, amount)


def total_cogs(lines: List[COGSLine], year: int, revenue: float) -> float:
    return sum(cogs_line_amount(line, year, revenue) for line in lines)
