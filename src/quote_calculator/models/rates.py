from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

BUSINESS_DAYS_PER_MONTH = 20
DEFAULT_PERFORMER_RATE = 1000.0
MAX_MONTHLY_RATE = 1_000_000.0


class RateEntry(BaseModel):
    role: str
    monthly_rate: float = Field(ge=0)
    discount: float = Field(default=0.0, ge=0, le=100, description="Per-performer discount in percent")

    class Config:
        frozen = True
        allow_inf_nan = False
        populate_by_name = True
        alias_generator = to_camel
        json_schema_extra = {
            "example": {"role": "Frontend Developer", "monthlyRate": 5000, "discount": 0},
        }

    def without_discount(self) -> "RateEntry":
        return self.model_copy(update={"discount": 0.0})


__all__ = [
    "BUSINESS_DAYS_PER_MONTH",
    "DEFAULT_PERFORMER_RATE",
    "MAX_MONTHLY_RATE",
    "RateEntry",
]
