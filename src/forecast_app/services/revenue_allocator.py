from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence

from ..models.assumptions import ForecastAssumptions
from ..models.common import Goals, SeasonalityPattern, round_currency
from ..models.results import AllocationResult
from ..models.revenue import DerivedQuarters, ExplicitQuarters, QuarterlyValues, RevenueLine, RevenuePattern

logger = logging.getLogger(__name__)


def distribute(total: float, weights: Sequence[float]) -> List[float]:
    # largest remainder, so the parts add up to the rounded total
    count = len(weights)
    units = int(round_currency(max(0.0, total)))
    if count == 0 or units == 0:
        return [0.0] * count
    weights = [max(0.0, w) for w in weights]
    weight_sum = sum(weights)
    if weight_sum <= 0:
        weights = [1.0] * count
        weight_sum = float(count)
    raw = [units * w / weight_sum for w in weights]
    parts = [math.floor(value) for value in raw]
    shortfall = units - sum(parts)
    by_remainder = sorted(range(count), key=lambda i: raw[i] - parts[i], reverse=True)
    for index in by_remainder[:shortfall]:
        parts[index] += 1
    return [float(part) for part in parts]


def _fill_unlocked(
    amount: float,
    month_keys: List[str],
    seasonality: SeasonalityPattern,
    existing: Dict[str, float],
    locked: set,
    straight_line: bool,
) -> Dict[str, float]:
    unlocked = [(index, key) for index, key in enumerate(month_keys) if key not in locked]
    if straight_line:
        weights = [1.0] * len(unlocked)
    else:
        weights = [seasonality.weight(index) for index, _ in unlocked]
        if amount > 0 and unlocked and sum(weights) <= 0:
            logger.debug("Unlocked months carry no seasonality weight; spreading %.0f evenly", amount)
    amounts = distribute(amount, weights)
    monthly: Dict[str, float] = {}
    allocated = dict(zip((key for _, key in unlocked), amounts))
    for key in month_keys:
        if key in locked:
            monthly[key] = existing.get(key, 0.0)
        else:
            monthly[key] = allocated[key]
    return monthly


def allocate_months(
    target: float,
    month_keys: List[str],
    seasonality: SeasonalityPattern,
    existing: Optional[Dict[str, float]] = None,
    locked: Optional[Iterable[str]] = None,
    straight_line: bool = False,
) -> AllocationResult:
    existing = existing or {}
    locked_keys = {key for key in (locked or ()) if key in month_keys}
    locked_total = sum(existing.get(key, 0.0) for key in locked_keys)
    remaining = max(0.0, target - locked_total)
    monthly = _fill_unlocked(remaining, month_keys, seasonality, existing, locked_keys, straight_line)
    return AllocationResult(monthly=monthly, locked_total=locked_total, remaining_target=remaining)


def allocate_quarters(target: float, seasonality: SeasonalityPattern, straight_line: bool = False) -> QuarterlyValues:
    weights = [1.0] * 4 if straight_line else seasonality.quarter_weights()
    return QuarterlyValues.from_list(distribute(target, weights))


def year1_share(line: RevenueLine, lines: List[RevenueLine]) -> float:
    if not lines:
        return 0.0
    year1_total = sum(other.year1_total() for other in lines)
    if year1_total > 0:
        return line.year1_total() / year1_total
    return 1 / len(lines)


def resolve_quarters(
    line: RevenueLine,
    year: int,
    lines: List[RevenueLine],
    goals: Goals,
    seasonality: SeasonalityPattern,
    straight_line: bool = False,
) -> QuarterlyValues:
    plan = line.plan_for(year)
    if isinstance(plan, ExplicitQuarters):
        return plan.values
    target = goals.revenue_for(year) * year1_share(line, lines)
    return allocate_quarters(target, seasonality, straight_line)


def line_year_total(
    line: RevenueLine,
    year: int,
    lines: List[RevenueLine],
    goals: Goals,
    seasonality: SeasonalityPattern,
    straight_line: bool = False,
) -> float:
    if year == 1:
        return line.year1_total()
    return resolve_quarters(line, year, lines, goals, seasonality, straight_line).total()


def _with_plan(line: RevenueLine, year: int, values: QuarterlyValues) -> RevenueLine:
    field = "year2" if year == 2 else "year3"
    return line.model_copy(update={field: ExplicitQuarters(values=values)})


def set_quarter_value(
    line: RevenueLine,
    year: int,
    quarter: int,
    value: float,
    lines: List[RevenueLine],
    goals: Goals,
    seasonality: SeasonalityPattern,
    straight_line: bool = False,
) -> RevenueLine:
    current = resolve_quarters(line, year, lines, goals, seasonality, straight_line).as_list()
    current[quarter - 1] = max(0.0, value)
    return _with_plan(line, year, QuarterlyValues.from_list(current))


def reset_to_derived(line: RevenueLine, year: int) -> RevenueLine:
    field = "year2" if year == 2 else "year3"
    return line.model_copy(update={field: DerivedQuarters()})


def reconcile_percentages(percentages: Dict[str, float], line_ids: List[str]) -> Dict[str, float]:
    reconciled = {line_id: percentages.get(line_id, 0.0) for line_id in line_ids}
    if line_ids:
        reconciled[line_ids[-1]] += 100 - sum(reconciled.values())
    return reconciled


def line_percentages(assumptions: ForecastAssumptions, year: int) -> Dict[str, float]:
    lines = assumptions.revenue_lines
    if not lines:
        return {}
    straight_line = assumptions.revenue_pattern == RevenuePattern.STRAIGHT_LINE
    seasonality = assumptions.seasonality()
    totals = {
        line.id: line_year_total(line, year, lines, assumptions.goals, seasonality, straight_line)
        for line in lines
    }
    grand_total = sum(totals.values())
    if grand_total > 0:
        raw = {line_id: float(round_currency(total / grand_total * 100)) for line_id, total in totals.items()}
    else:
        raw = {line.id: float(round_currency(100 / len(lines))) for line in lines}
    return reconcile_percentages(raw, [line.id for line in lines])


def _reallocate_line(
    line: RevenueLine,
    year: int,
    line_target: float,
    assumptions: ForecastAssumptions,
) -> RevenueLine:
    straight_line = assumptions.revenue_pattern == RevenuePattern.STRAIGHT_LINE
    seasonality = assumptions.seasonality()
    if year == 1:
        allocation = allocate_months(
            line_target,
            assumptions.month_keys(),
            seasonality,
            existing=line.year1_monthly,
            locked=assumptions.locked_months(),
            straight_line=straight_line,
        )
        return line.model_copy(update={"year1_monthly": allocation.monthly})
    return _with_plan(line, year, allocate_quarters(line_target, seasonality, straight_line))


def set_line_percentage(
    assumptions: ForecastAssumptions,
    line_id: str,
    year: int,
    percent: float,
) -> List[RevenueLine]:
    lines = assumptions.revenue_lines
    index = next((i for i, line in enumerate(lines) if line.id == line_id), None)
    if index is None:
        raise KeyError(line_id)
    year_target = assumptions.goals.revenue_for(year)
    if year_target <= 0:
        return list(lines)
    percent = max(0.0, min(100.0, percent))
    updated = list(lines)
    updated[index] = _reallocate_line(lines[index], year, year_target * percent / 100, assumptions)
    return updated


def split_by_percentages(
    assumptions: ForecastAssumptions,
    year: int,
    percentages: Dict[str, float],
) -> List[RevenueLine]:
    lines = assumptions.revenue_lines
    if not lines:
        return []
    year_target = round_currency(assumptions.goals.revenue_for(year))
    targets: List[float] = []
    for line in lines[:-1]:
        targets.append(round_currency(year_target * percentages.get(line.id, 0.0) / 100))
    targets.append(max(0.0, year_target - sum(targets)))
    return [_reallocate_line(line, year, target, assumptions) for line, target in zip(lines, targets)]


def apply_revenue_pattern(assumptions: ForecastAssumptions, pattern: RevenuePattern) -> List[RevenueLine]:
    lines = assumptions.revenue_lines
    if not lines:
        return []
    ytd_total = 0.0
    if assumptions.current_ytd is not None:
        ytd = assumptions.current_ytd
        ytd_total = ytd.total_revenue or sum(ytd.revenue_by_month.values())
    remaining = max(0.0, assumptions.goals.revenue_for(1) - ytd_total)
    line_amounts = distribute(remaining, [1.0] * len(lines))
    month_keys = assumptions.month_keys()
    locked = {key for key in assumptions.locked_months() if key in month_keys}
    seasonality = assumptions.seasonality()

    updated: List[RevenueLine] = []
    for line, amount in zip(lines, line_amounts):
        changes = {"year2": DerivedQuarters(), "year3": DerivedQuarters()}
        if pattern != RevenuePattern.MANUAL:
            changes["year1_monthly"] = _fill_unlocked(
                amount,
                month_keys,
                seasonality,
                line.year1_monthly,
                locked,
                straight_line=pattern == RevenuePattern.STRAIGHT_LINE,
            )
        updated.append(line.model_copy(update=changes))
    logger.debug("Applied %s pattern to %d revenue lines (remaining %.0f)", pattern.value, len(lines), remaining)
    return updated
