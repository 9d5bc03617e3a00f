from __future__ import annotations

import pytest

from forecast_app.services.fiscal_calendar import (
    Boundary,
    fiscal_month_number,
    fiscal_year_of,
    month_keys_for_fiscal_year,
    months_employed_in_fiscal_year,
    parse_month_key,
    quarter_of_fiscal_month,
)


def test_month_keys_run_july_to_june():
    keys = month_keys_for_fiscal_year(2025)

    assert len(keys) == 12
    assert keys[0] == "2025-07"
    assert keys[5] == "2025-12"
    assert keys[6] == "2026-01"
    assert keys[-1] == "2026-06"


def test_fiscal_year_and_month_numbers():
    assert fiscal_year_of("2025-07") == 2026
    assert fiscal_year_of("2026-06") == 2026
    assert fiscal_month_number("2025-07") == 1
    assert fiscal_month_number("2026-06") == 12
    assert quarter_of_fiscal_month(1) == 1
    assert quarter_of_fiscal_month(6) == 2
    assert quarter_of_fiscal_month(12) == 4


def test_start_boundaries():
    assert months_employed_in_fiscal_year("2025-07", 2026, Boundary.START) == 12
    assert months_employed_in_fiscal_year("2026-06", 2026, Boundary.START) == 1
    assert months_employed_in_fiscal_year("2026-07", 2026, Boundary.START) == 0
    assert months_employed_in_fiscal_year("2024-11", 2026, Boundary.START) == 12


def test_end_boundaries():
    assert months_employed_in_fiscal_year("2025-12", 2026, Boundary.END) == 6
    assert months_employed_in_fiscal_year("2026-06", 2026, Boundary.END) == 12
    assert months_employed_in_fiscal_year("2027-01", 2026, Boundary.END) == 12
    assert months_employed_in_fiscal_year("2025-03", 2026, Boundary.END) == 0


@pytest.mark.parametrize("key", ["2025-13", "July 2025", "2025/07", ""])
def test_bad_month_keys_are_rejected(key):
    with pytest.raises(ValueError):
        parse_month_key(key)
