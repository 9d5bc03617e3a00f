from __future__ import annotations

import os

from pydantic import BaseModel, Field


class EngineSettings(BaseModel):
    levy_rate: float = Field(0.12, description="Employer superannuation levy as decimal")
    new_hire_increase_pct: float = Field(3.0, description="Annual raise assumed for planned hires after their first year")
    default_gross_profit_pct: float = Field(50.0, description="Used to derive COGS when no COGS line produces a value")
    default_net_profit_pct: float = Field(15.0, description="Target net profit when a year's goal omits it")
    default_opex_increase_pct: float = Field(3.0, description="Increase applied to OpEx lines seeded from prior year")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def load_settings() -> EngineSettings:
    defaults = EngineSettings()
    return EngineSettings(
        levy_rate=_env_float("FORECAST_LEVY_RATE", defaults.levy_rate),
        new_hire_increase_pct=_env_float("FORECAST_NEW_HIRE_INCREASE_PCT", defaults.new_hire_increase_pct),
        default_gross_profit_pct=_env_float("FORECAST_DEFAULT_GROSS_PROFIT_PCT", defaults.default_gross_profit_pct),
        default_net_profit_pct=_env_float("FORECAST_DEFAULT_NET_PROFIT_PCT", defaults.default_net_profit_pct),
        default_opex_increase_pct=_env_float("FORECAST_DEFAULT_OPEX_INCREASE_PCT", defaults.default_opex_increase_pct),
    )
