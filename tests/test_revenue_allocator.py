from __future__ import annotations

import pytest

from forecast_app.models.assumptions import ForecastAssumptions
from forecast_app.models.common import Goals, SeasonalityPattern, YearlyGoals
from forecast_app.models.prior_year import CurrentYTD
from forecast_app.models.revenue import DerivedQuarters, ExplicitQuarters, RevenueLine, RevenuePattern
from forecast_app.services.fiscal_calendar import month_keys_for_fiscal_year
from forecast_app.services.revenue_allocator import (
    allocate_months,
    allocate_quarters,
    apply_revenue_pattern,
    distribute,
    line_percentages,
    reset_to_derived,
    resolve_quarters,
    set_line_percentage,
    set_quarter_value,
    split_by_percentages,
)


MONTHS = month_keys_for_fiscal_year(2025)


def _assumptions(**overrides) -> ForecastAssumptions:
    data = dict(
        fiscal_year_start=2025,
        forecast_duration=3,
        goals=Goals(
            year1=YearlyGoals(revenue=120000),
            year2=YearlyGoals(revenue=200000),
            year3=YearlyGoals(revenue=300000),
        ),
        revenue_lines=[
            RevenueLine(id="a", name="Services", year1_monthly={key: 5000.0 for key in MONTHS}),
            RevenueLine(id="b", name="Products", year1_monthly={key: 2500.0 for key in MONTHS}),
        ],
    )
    data.update(overrides)
    return ForecastAssumptions(**data)


def test_distribute_conserves_rounded_total():
    parts = distribute(100, [1, 1, 1])

    assert sum(parts) == 100
    assert sorted(parts) == [33, 33, 34]


def test_distribute_spreads_evenly_when_all_weights_zero():
    assert distribute(10, [0, 0]) == [5.0, 5.0]
    assert distribute(10, []) == []


def test_seasonal_weights_with_zero_months():
    pattern = SeasonalityPattern(values=[20, 20, 0, 0, 0, 0, 0, 0, 0, 0, 30, 30])

    allocation = allocate_months(120000, MONTHS, pattern)

    values = [allocation.monthly[key] for key in MONTHS]
    assert values[:2] == [24000, 24000]
    assert values[2:10] == [0] * 8
    assert values[10:] == [36000, 36000]
    assert allocation.locked_total == 0


def test_straight_line_around_locked_months():
    existing = {"2025-07": 14000.0, "2025-08": 16000.0}

    allocation = allocate_months(
        120000,
        MONTHS,
        SeasonalityPattern.flat(),
        existing=existing,
        locked=existing.keys(),
        straight_line=True,
    )

    assert allocation.monthly["2025-07"] == 14000
    assert allocation.monthly["2025-08"] == 16000
    assert allocation.locked_total == 30000
    assert allocation.remaining_target == 90000
    assert all(allocation.monthly[key] == 9000 for key in MONTHS[2:])


def test_locked_total_above_target_leaves_unlocked_months_empty():
    existing = {"2025-07": 80000.0}

    allocation = allocate_months(50000, MONTHS, SeasonalityPattern.flat(), existing=existing, locked=["2025-07"])

    assert allocation.remaining_target == 0
    assert allocation.monthly["2025-07"] == 80000
    assert sum(allocation.monthly.values()) == 80000


def test_quarters_follow_seasonality():
    pattern = SeasonalityPattern(values=[10, 10, 10, 5, 5, 5, 10, 10, 10, 5, 5, 15])

    quarters = allocate_quarters(1000, pattern)

    assert quarters.as_list() == [300, 150, 300, 250]
    assert allocate_quarters(1000, pattern, straight_line=True).as_list() == [250, 250, 250, 250]


def test_derived_year_uses_year1_share_of_goal():
    assumptions = _assumptions()
    line = assumptions.revenue_lines[0]

    quarters = resolve_quarters(line, 2, assumptions.revenue_lines, assumptions.goals, SeasonalityPattern.flat())

    # 60000 of 90000 in year 1 is two thirds of the 200000 goal
    assert quarters.total() == pytest.approx(133333, abs=1)


def test_editing_a_quarter_makes_the_year_explicit():
    assumptions = _assumptions()
    lines = assumptions.revenue_lines
    flat = SeasonalityPattern.flat()

    edited = set_quarter_value(lines[1], 2, 2, 50000, lines, assumptions.goals, flat)

    assert isinstance(edited.year2, ExplicitQuarters)
    assert isinstance(edited.year3, DerivedQuarters)
    assert edited.year2.values.q2 == 50000
    before = resolve_quarters(lines[1], 2, lines, assumptions.goals, flat)
    assert edited.year2.values.q1 == before.q1

    new_goals = Goals(year1=YearlyGoals(revenue=120000), year2=YearlyGoals(revenue=999999))
    assert resolve_quarters(edited, 2, lines, new_goals, flat) == edited.year2.values

    assert isinstance(reset_to_derived(edited, 2).year2, DerivedQuarters)


def test_line_percentages_sum_to_one_hundred():
    assumptions = _assumptions()

    year1 = line_percentages(assumptions, 1)
    year2 = line_percentages(assumptions, 2)

    assert year1 == {"a": 67.0, "b": 33.0}
    assert sum(year2.values()) == 100


def test_set_line_percentage_year2_replaces_only_that_line():
    assumptions = _assumptions()

    lines = set_line_percentage(assumptions, "b", 2, 25)

    assert lines[0] == assumptions.revenue_lines[0]
    assert isinstance(lines[1].year2, ExplicitQuarters)
    assert lines[1].year2.values.total() == 50000


def test_set_line_percentage_year1_respects_locked_months():
    assumptions = _assumptions(
        revenue_pattern=RevenuePattern.STRAIGHT_LINE,
        current_ytd=CurrentYTD(revenue_by_month={"2025-07": 5000.0}, total_revenue=5000.0, months_count=1),
    )

    lines = set_line_percentage(assumptions, "a", 1, 50)

    monthly = lines[0].year1_monthly
    assert monthly["2025-07"] == 5000
    assert sum(monthly.values()) == 60000
    assert all(monthly[key] == 5000 for key in MONTHS[1:])


def test_set_line_percentage_unknown_line():
    with pytest.raises(KeyError):
        set_line_percentage(_assumptions(), "missing", 1, 10)


def test_set_line_percentage_without_goal_is_a_no_op():
    assumptions = _assumptions(goals=Goals(year1=YearlyGoals(revenue=0)))

    assert set_line_percentage(assumptions, "a", 1, 40) == assumptions.revenue_lines


def test_split_by_percentages_adds_back_to_goal():
    assumptions = _assumptions()

    lines = split_by_percentages(assumptions, 3, {"a": 33.3, "b": 66.7})

    totals = [line.year3.values.total() for line in lines]
    assert sum(totals) == 300000


def test_apply_straight_line_pattern_keeps_actuals():
    assumptions = _assumptions(
        revenue_lines=[
            RevenueLine(id="a", name="Services", year1_monthly={"2025-07": 6000.0}),
            RevenueLine(
                id="b",
                name="Products",
                year1_monthly={"2025-07": 4000.0},
                year2=ExplicitQuarters(),
            ),
        ],
        current_ytd=CurrentYTD(revenue_by_month={"2025-07": 10000.0}, total_revenue=10000.0, months_count=1),
    )

    lines = apply_revenue_pattern(assumptions, RevenuePattern.STRAIGHT_LINE)

    for line, actual in zip(lines, [6000, 4000]):
        assert line.year1_monthly["2025-07"] == actual
        assert all(line.year1_monthly[key] == 5000 for key in MONTHS[1:])
        assert isinstance(line.year2, DerivedQuarters)


def test_manual_pattern_leaves_year1_alone():
    assumptions = _assumptions()

    lines = apply_revenue_pattern(assumptions, RevenuePattern.MANUAL)

    assert [line.year1_monthly for line in lines] == [line.year1_monthly for line in assumptions.revenue_lines]


def test_year1_keys_outside_forecast_year_are_rejected():
    with pytest.raises(ValueError):
        _assumptions(revenue_lines=[RevenueLine(id="a", name="Services", year1_monthly={"2024-07": 100.0})])
