from __future__ import annotations

import pytest

from forecast_app.config import EngineSettings, load_settings
from forecast_app.models.headcount import (
    Bonus,
    Commission,
    Departure,
    EmploymentType,
    NewHire,
    TeamMember,
    TeamPlan,
    calculate_levy,
)
from forecast_app.services.staff import existing_member_cost, new_hire_cost, staff_costs


LEVY = 0.12


def test_departure_mid_year_prorates_salary_and_levy():
    member = TeamMember(id="m1", name="Riley", current_salary=120000)
    departure = Departure(id="d1", team_member_id="m1", end_month="2025-12")

    assert existing_member_cost(member, 1, 2026, LEVY, departure) == pytest.approx(60000 + 7200)
    assert existing_member_cost(member, 2, 2027, LEVY, departure) == 0


def test_existing_member_compounds_increase():
    member = TeamMember(id="m1", name="Riley", current_salary=100000, increase_pct=3)

    assert member.new_salary == 103000
    assert existing_member_cost(member, 1, 2026, LEVY) == pytest.approx(103000 * 1.12)
    assert existing_member_cost(member, 2, 2027, LEVY) == pytest.approx(106090 * 1.12)


def test_contractor_pays_no_levy():
    member = TeamMember(id="m1", name="Kai", employment_type=EmploymentType.CONTRACTOR, current_salary=50000)

    assert existing_member_cost(member, 1, 2026, LEVY) == 50000


def test_new_hire_start_boundaries():
    july = NewHire(id="h1", role="Engineer", start_month="2025-07", salary=100000)
    june = NewHire(id="h2", role="Engineer", start_month="2026-06", salary=100000)
    later = NewHire(id="h3", role="Engineer", start_month="2026-07", salary=100000)

    assert new_hire_cost(july, 2026, LEVY, 3) == pytest.approx(112000)
    assert new_hire_cost(june, 2026, LEVY, 3) == pytest.approx(112000 / 12)
    assert new_hire_cost(later, 2026, LEVY, 3) == 0


def test_new_hire_gets_raise_in_following_years():
    hire = NewHire(id="h1", role="Engineer", start_month="2025-10", salary=100000)

    assert new_hire_cost(hire, 2026, LEVY, 3) == pytest.approx(112000 * 9 / 12)
    assert new_hire_cost(hire, 2027, LEVY, 3) == pytest.approx(103000 * 1.12)


def test_invalid_hire_month_is_rejected():
    with pytest.raises(ValueError):
        NewHire(id="h1", role="Engineer", start_month="Oct-25", salary=1)


def test_staff_costs_breakdown():
    team = TeamPlan(
        existing=[TeamMember(id="m1", name="Riley", current_salary=100000)],
        planned_hires=[NewHire(id="h1", role="Analyst", start_month="2026-01", salary=60000)],
        departures=[
            Departure(id="d1", team_member_id="m1", end_month="2026-03"),
            Departure(id="d2", team_member_id="m1", end_month="2025-08"),
        ],
        bonuses=[Bonus(id="b1", team_member_id="m1", amount=5000)],
        commissions=[
            Commission(id="c1", team_member_id="m1", annual_amount=2000),
            Commission(id="c2", team_member_id="m1", percent_of_revenue=5),
        ],
    )

    breakdown = staff_costs(team, 1, 2026, EngineSettings())

    assert breakdown.existing == pytest.approx(112000 * 9 / 12)
    assert breakdown.planned_hires == pytest.approx(67200 * 6 / 12)
    assert breakdown.bonuses == 5000
    assert breakdown.commissions == 2000
    assert breakdown.total == pytest.approx(84000 + 33600 + 5000 + 2000)


def test_levy_rate_comes_from_settings():
    team = TeamPlan(existing=[TeamMember(id="m1", name="Riley", current_salary=100000)])

    breakdown = staff_costs(team, 1, 2026, EngineSettings(levy_rate=0.1))

    assert breakdown.total == pytest.approx(110000)


def test_levy_follows_configured_rate(monkeypatch):
    monkeypatch.setenv("FORECAST_LEVY_RATE", "0.115")
    settings = load_settings()
    member = TeamMember(id="m1", name="Riley", current_salary=100000)
    team = TeamPlan(existing=[member])

    levy = calculate_levy(member.new_salary, member.employment_type, settings.levy_rate)

    assert levy == pytest.approx(11500)
    assert staff_costs(team, 1, 2026, settings).total == pytest.approx(member.new_salary + levy)
    assert calculate_levy(80000, EmploymentType.CONTRACTOR, settings.levy_rate) == 0
