from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Tuple

from dateutil.relativedelta import relativedelta


FISCAL_START_MONTH = 7


class Boundary(str, Enum):
    START = "start"
    END = "end"


def parse_month_key(key: str) -> Tuple[int, int]:
    parsed = datetime.strptime(key.strip(), "%Y-%m")
    return parsed.year, parsed.month


def check_month_keys(values: Dict[str, float]) -> Dict[str, float]:
    for key in values:
        parse_month_key(key)
    return values


def month_key(value: date) -> str:
    return value.strftime("%Y-%m")


def fiscal_year_of(key: str) -> int:
    year, month = parse_month_key(key)
    return year + 1 if month >= FISCAL_START_MONTH else year


def fiscal_month_number(key: str) -> int:
    _, month = parse_month_key(key)
    return month - 6 if month >= FISCAL_START_MONTH else month + 6


def quarter_of_fiscal_month(fiscal_month: int) -> int:
    return (fiscal_month - 1) // 3 + 1


def month_keys_for_fiscal_year(fiscal_year_start: int) -> List[str]:
    start = date(fiscal_year_start, FISCAL_START_MONTH, 1)
    return [month_key(start + relativedelta(months=offset)) for offset in range(12)]


def months_employed_in_fiscal_year(key: str, target_fiscal_year: int, boundary: Boundary) -> int:
    key_fy = fiscal_year_of(key)
    if boundary == Boundary.START:
        if key_fy > target_fiscal_year:
            return 0
        if key_fy < target_fiscal_year:
            return 12
        return 13 - fiscal_month_number(key)
    if key_fy > target_fiscal_year:
        return 12
    if key_fy < target_fiscal_year:
        return 0
    return fiscal_month_number(key)
