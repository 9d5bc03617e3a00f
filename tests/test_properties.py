from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from forecast_app.models.common import SeasonalityPattern, round_currency
from forecast_app.models.costs import FixedCost, OpExLine, SeasonalCost, VariableCost
from forecast_app.services.fiscal_calendar import month_keys_for_fiscal_year
from forecast_app.services.opex import opex_line_amount
from forecast_app.services.revenue_allocator import allocate_months, distribute


MONTHS = month_keys_for_fiscal_year(2025)

weights_strategy = st.lists(st.floats(min_value=0, max_value=100, allow_nan=False, allow_subnormal=False), min_size=1, max_size=24)
seasonality_strategy = st.lists(st.integers(min_value=0, max_value=40), min_size=12, max_size=12).map(
    lambda values: SeasonalityPattern(values=values)
)


@given(total=st.floats(min_value=0, max_value=10_000_000, allow_nan=False), weights=weights_strategy)
@settings(max_examples=200)
def test_distribute_conserves_total(total, weights):
    parts = distribute(total, weights)

    assert len(parts) == len(weights)
    assert sum(parts) == round_currency(total)
    assert all(part >= 0 for part in parts)


@given(
    target=st.integers(min_value=0, max_value=5_000_000),
    seasonality=seasonality_strategy,
    locked_indexes=st.sets(st.integers(min_value=0, max_value=11), max_size=11),
    actual=st.integers(min_value=0, max_value=200_000),
    straight_line=st.booleans(),
)
@settings(max_examples=200)
def test_allocation_keeps_actuals_and_conserves(target, seasonality, locked_indexes, actual, straight_line):
    locked = [MONTHS[index] for index in locked_indexes]
    existing = {key: float(actual) for key in locked}

    allocation = allocate_months(target, MONTHS, seasonality, existing=existing, locked=locked, straight_line=straight_line)

    assert all(allocation.monthly[key] == actual for key in locked)
    assert all(value >= 0 for value in allocation.monthly.values())
    assert sum(allocation.monthly.values()) == max(target, actual * len(locked))


@given(
    revenue=st.floats(min_value=0, max_value=10_000_000, allow_nan=False),
    amount=st.floats(min_value=-100_000, max_value=100_000, allow_nan=False),
    year=st.integers(min_value=1, max_value=3),
)
def test_opex_is_never_negative(revenue, amount, year):
    lines = [
        OpExLine(id="f", name="Fixed", behavior=FixedCost(monthly_amount=amount, annual_increase_pct=5)),
        OpExLine(id="v", name="Variable", behavior=VariableCost(percent_of_revenue=amount / 1000)),
        OpExLine(id="s", name="Seasonal", prior_year_annual=amount, behavior=SeasonalCost(growth_pct=3)),
        OpExLine(id="o", name="Override", prior_year_annual=1000, y2_override=amount, y3_override=amount),
    ]

    assert all(opex_line_amount(line, year, revenue) >= 0 for line in lines)
