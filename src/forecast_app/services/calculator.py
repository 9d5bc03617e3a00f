from __future__ import annotations

import logging
from typing import List, Optional

from ..config import EngineSettings, load_settings
from ..models.assumptions import ForecastAssumptions
from ..models.capex import total_depreciation
from ..models.common import round_currency, round_pct
from ..models.results import ForecastResult, ForecastSummary, MonthlyPL, YearBudget, YearlySummary
from ..models.revenue import RevenuePattern
from .budget import year_budget
from .cogs import total_cogs
from .monthly import monthly_pl
from .opex import total_opex
from .revenue_allocator import line_year_total
from .staff import staff_costs

logger = logging.getLogger(__name__)


class ForecastCalculator:
    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self.settings = settings or load_settings()

    def run(self, assumptions: ForecastAssumptions) -> ForecastResult:
        summary = self.summarize(assumptions)
        return ForecastResult(
            summary=summary,
            budget=self.budget(assumptions, summary),
            monthly=self.monthly(assumptions),
        )

    def summarize(self, assumptions: ForecastAssumptions) -> ForecastSummary:
        self._warn_unmodelled_commissions(assumptions)
        years = {f"year{year}": self._build_year_summary(assumptions, year) for year in assumptions.years()}
        return ForecastSummary(**years)

    def budget(self, assumptions: ForecastAssumptions, summary: Optional[ForecastSummary] = None) -> List[YearBudget]:
        if summary is None:
            summary = self.summarize(assumptions)
        budgets: List[YearBudget] = []
        for year in assumptions.years():
            goals = assumptions.goals.for_year(year)
            target_pct = (goals.net_profit_pct if goals is not None else None) or self.settings.default_net_profit_pct
            budgets.append(year_budget(year, summary.for_year(year), target_pct, assumptions.subscription_savings))
        return budgets

    def monthly(self, assumptions: ForecastAssumptions) -> List[MonthlyPL]:
        schedules: List[MonthlyPL] = []
        for year in assumptions.years():
            revenue = self._compute_revenue(assumptions, year)
            schedules.append(
                monthly_pl(
                    assumptions,
                    year,
                    revenue,
                    self._compute_cogs(assumptions, year, revenue),
                    self._compute_team_costs(assumptions, year),
                )
            )
        return schedules

    def _compute_revenue(self, assumptions: ForecastAssumptions, year: int) -> float:
        straight_line = assumptions.revenue_pattern == RevenuePattern.STRAIGHT_LINE
        seasonality = assumptions.seasonality()
        lines = assumptions.revenue_lines
        revenue = sum(
            line_year_total(line, year, lines, assumptions.goals, seasonality, straight_line) for line in lines
        )
        if revenue <= 0:
            revenue = assumptions.goals.revenue_for(year)
        return max(0.0, revenue)

    def _compute_cogs(self, assumptions: ForecastAssumptions, year: int, revenue: float) -> float:
        cogs = total_cogs(assumptions.cogs_lines, year, revenue)
        if cogs > 0:
            return cogs
        goals = assumptions.goals.for_year(year)
        gross_profit_pct = (goals.gross_profit_pct if goals is not None else None) or self.settings.default_gross_profit_pct
        return max(0.0, revenue * (100 - gross_profit_pct) / 100)

    def _compute_team_costs(self, assumptions: ForecastAssumptions, year: int) -> float:
        return staff_costs(assumptions.team, year, assumptions.target_fiscal_year(year), self.settings).total

    def _compute_other_expenses(self, assumptions: ForecastAssumptions) -> float:
        return sum(max(0.0, expense.annual_amount()) for expense in assumptions.other_expenses)

    def _build_year_summary(self, assumptions: ForecastAssumptions, year: int) -> YearlySummary:
        revenue = self._compute_revenue(assumptions, year)
        cogs = self._compute_cogs(assumptions, year, revenue)
        gross_profit = revenue - cogs
        team_costs = self._compute_team_costs(assumptions, year)
        opex = total_opex(assumptions.opex_lines, year, revenue)
        depreciation = total_depreciation(assumptions.capex_items)
        other_expenses = self._compute_other_expenses(assumptions)
        net_profit = gross_profit - team_costs - opex - depreciation - other_expenses

        gross_profit_pct = gross_profit / revenue * 100 if revenue > 0 else 0.0
        net_profit_pct = net_profit / revenue * 100 if revenue > 0 else 0.0
        logger.debug("Year %d: revenue=%.0f cogs=%.0f net=%.0f", year, revenue, cogs, net_profit)

        return YearlySummary(
            revenue=round_currency(revenue),
            cogs=round_currency(cogs),
            gross_profit=round_currency(gross_profit),
            gross_profit_pct=round_pct(gross_profit_pct),
            team_costs=round_currency(team_costs),
            opex=round_currency(opex),
            depreciation=round_currency(depreciation),
            other_expenses=round_currency(other_expenses),
            net_profit=round_currency(net_profit),
            net_profit_pct=round_pct(net_profit_pct),
        )

    def _warn_unmodelled_commissions(self, assumptions: ForecastAssumptions) -> None:
        unmodelled = [
            commission.id
            for commission in assumptions.team.commissions
            if commission.percent_of_revenue and commission.annual_amount is None
        ]
        if unmodelled:
            logger.warning(
                "Commissions %s are percent-of-revenue only; their cost is not included in staff cost",
                ", ".join(unmodelled),
            )
