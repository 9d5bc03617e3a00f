from __future__ import annotations

from .models.assumptions import ForecastAssumptions
from .models.capex import CapExItem
from .models.common import Goals, SeasonalityPattern, YearlyGoals
from .models.costs import (
    AdHocCost,
    COGSLine,
    CostBehavior,
    ExpenseFrequency,
    FixedCost,
    OpExLine,
    OtherExpense,
    SeasonalCost,
    VariableCost,
)
from .models.headcount import Bonus, Departure, EmploymentType, NewHire, TeamMember, TeamPlan
from .models.prior_year import CurrentYTD
from .models.revenue import RevenueLine, RevenuePattern
from .services.fiscal_calendar import month_keys_for_fiscal_year


def build_sample_assumptions() -> ForecastAssumptions:
    fiscal_year_start = 2025
    month_keys = month_keys_for_fiscal_year(fiscal_year_start)
    seasonality = SeasonalityPattern(values=[7, 7, 8, 9, 10, 12, 6, 7, 8, 8, 9, 9])

    services = RevenueLine(
        id="services",
        name="Consulting Services",
        year1_monthly={key: 60000.0 for key in month_keys},
    )
    products = RevenueLine(
        id="products",
        name="Product Sales",
        year1_monthly={key: 40000.0 for key in month_keys},
    )

    team = TeamPlan(
        existing=[
            TeamMember(id="tm-1", name="Alex Chen", role="Operations Manager", current_salary=110000, increase_pct=3),
            TeamMember(id="tm-2", name="Sam Patel", role="Senior Consultant", current_salary=95000, increase_pct=3),
            TeamMember(
                id="tm-3",
                name="Jordan Lee",
                role="Bookkeeper",
                employment_type=EmploymentType.CONTRACTOR,
                hours_per_week=16,
                current_salary=36000,
            ),
        ],
        planned_hires=[
            NewHire(id="nh-1", role="Sales Lead", start_month="2025-10", salary=90000),
            NewHire(id="nh-2", role="Junior Consultant", start_month="2026-07", salary=70000),
        ],
        departures=[Departure(id="dep-1", team_member_id="tm-2", end_month="2026-03")],
        bonuses=[Bonus(id="b-1", team_member_id="tm-1", amount=5000)],
    )

    return ForecastAssumptions(
        fiscal_year_start=fiscal_year_start,
        forecast_duration=3,
        goals=Goals(
            year1=YearlyGoals(revenue=1200000, gross_profit_pct=60, net_profit_pct=15),
            year2=YearlyGoals(revenue=1400000, gross_profit_pct=60, net_profit_pct=15),
            year3=YearlyGoals(revenue=1650000, gross_profit_pct=62, net_profit_pct=18),
        ),
        revenue_pattern=RevenuePattern.SEASONAL,
        revenue_lines=[services, products],
        cogs_lines=[
            COGSLine(id="cogs-1", name="Subcontractors", cost_behavior=CostBehavior.VARIABLE, percent_of_revenue=30),
            COGSLine(id="cogs-2", name="Platform Fees", cost_behavior=CostBehavior.FIXED, monthly_amount=2500),
        ],
        team=team,
        opex_lines=[
            OpExLine(id="ox-1", name="Office Rent", prior_year_annual=48000, behavior=FixedCost(monthly_amount=4000, annual_increase_pct=4)),
            OpExLine(id="ox-2", name="Marketing", prior_year_annual=30000, behavior=VariableCost(percent_of_revenue=2.5)),
            OpExLine(id="ox-3", name="Electricity", prior_year_annual=9000, behavior=SeasonalCost(growth_pct=5)),
            OpExLine(id="ox-4", name="Travel", prior_year_annual=12000, behavior=AdHocCost(expected_annual_amount=10000, expected_months=["2025-10", "2026-04"])),
            OpExLine(id="ox-5", name="Website Rebuild", prior_year_annual=0, behavior=AdHocCost(expected_annual_amount=25000), is_one_time=True, one_time_year=2),
        ],
        capex_items=[
            CapExItem(id="cx-1", description="Laptops", cost=15000, month=3, useful_life_years=3),
            CapExItem(id="cx-2", description="Fit-out", cost=60000, month=1, useful_life_years=10),
        ],
        other_expenses=[
            OtherExpense(id="oe-1", description="Loan interest", amount=800, frequency=ExpenseFrequency.MONTHLY),
        ],
        seasonality_pattern=seasonality,
        current_ytd=CurrentYTD(
            revenue_by_month={month_keys[0]: 58000.0, month_keys[1]: 61000.0},
            total_revenue=119000.0,
            months_count=2,
        ),
    )
