from __future__ import annotations

from typing import Dict

from fastapi import FastAPI, HTTPException

from .models.results import SeededLines
from .models.revenue import RevenuePattern
from .schemas import (
    AllocateRequest,
    AllocateResponse,
    AssumptionsRequest,
    BudgetResponse,
    ClassifyRequest,
    ClassifyResponse,
    LinePercentageRequest,
    MonthlyResponse,
    RevenueLinesResponse,
    RunResponse,
    SeedRequest,
    SummaryResponse,
)
from .services.calculator import ForecastCalculator
from .services.classifier import classify_expense, suggested_value
from .services.fiscal_calendar import month_keys_for_fiscal_year
from .services.revenue_allocator import allocate_months, line_percentages, set_line_percentage
from .services.seeding import seed_from_prior_year


app = FastAPI(title="Business Forecast Engine", version="0.1.0")

calculator = ForecastCalculator()


@app.post("/summary", response_model=SummaryResponse)
def summarize(payload: AssumptionsRequest) -> SummaryResponse:
    return SummaryResponse(summary=calculator.summarize(payload.assumptions))


@app.post("/budget", response_model=BudgetResponse)
def budget(payload: AssumptionsRequest) -> BudgetResponse:
    return BudgetResponse(budget=calculator.budget(payload.assumptions))


@app.post("/run", response_model=RunResponse)
def run_forecast(payload: AssumptionsRequest) -> RunResponse:
    return RunResponse(result=calculator.run(payload.assumptions))


@app.post("/monthly", response_model=MonthlyResponse)
def monthly(payload: AssumptionsRequest) -> MonthlyResponse:
    return MonthlyResponse(monthly=calculator.monthly(payload.assumptions))


@app.post("/revenue/allocate", response_model=AllocateResponse)
def allocate(payload: AllocateRequest) -> AllocateResponse:
    allocation = allocate_months(
        payload.target,
        month_keys_for_fiscal_year(payload.fiscal_year_start),
        payload.seasonality,
        existing=payload.existing,
        locked=payload.locked_months,
        straight_line=payload.pattern == RevenuePattern.STRAIGHT_LINE,
    )
    return AllocateResponse(**allocation.model_dump())


@app.post("/revenue/line-percentage", response_model=RevenueLinesResponse)
def update_line_percentage(payload: LinePercentageRequest) -> RevenueLinesResponse:
    try:
        lines = set_line_percentage(payload.assumptions, payload.line_id, payload.year, payload.percent)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Revenue line {payload.line_id} not found")
    updated = payload.assumptions.model_copy(update={"revenue_lines": lines})
    return RevenueLinesResponse(revenue_lines=lines, percentages=line_percentages(updated, payload.year))


@app.post("/opex/classify", response_model=ClassifyResponse)
def classify(payload: ClassifyRequest) -> ClassifyResponse:
    results = {line.id: classify_expense(line.name, line.prior_year_monthly, payload.industry) for line in payload.lines}
    suggestions = {
        line.id: suggested_value(
            results[line.id].behavior,
            line.prior_year_annual,
            payload.revenue_target,
            calculator.settings.default_opex_increase_pct,
        )
        for line in payload.lines
    }
    return ClassifyResponse(classifications=results, suggestions=suggestions)


@app.post("/prior-year/seed", response_model=SeededLines)
def seed(payload: SeedRequest) -> SeededLines:
    return seed_from_prior_year(
        payload.prior_year,
        payload.fiscal_year_start,
        calculator.settings.default_opex_increase_pct,
    )


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}
