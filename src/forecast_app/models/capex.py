from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, computed_field, conint

from .common import round_currency


class CapExItem(BaseModel):
    id: str
    description: str
    cost: float = 0.0
    month: conint(ge=1, le=12) = Field(1, description="Fiscal month of purchase, 1 = July")
    useful_life_years: float = 0.0

    @computed_field
    @property
    def annual_depreciation(self) -> float:
        if self.useful_life_years <= 0 or self.cost <= 0:
            return 0.0
        return round_currency(self.cost / self.useful_life_years)


def total_depreciation(items: List[CapExItem]) -> float:
    return sum(item.annual_depreciation for item in items)
