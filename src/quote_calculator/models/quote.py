from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ModuleStats(BaseModel):
    timeline_days: float = 0.0
    effort_days: float = 0.0

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel


class QuoteResult(BaseModel):
    design_days: float = 0.0
    development_days: float = 0.0
    total_days: float = 0.0
    design_cost: int = 0
    development_cost: int = 0
    total_quote: int = 0
    monthly_fee: float = 0.0
    # Same value as total_quote, kept for the published output shape.
    product_price: int = 0
    discount_amount: int = 0
    final_total: int = 0
    team_size_multiplier: int = 1

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel


class ModulePrice(BaseModel):
    module_id: str
    price: int
    timeline_days: float

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel


__all__ = ["ModulePrice", "ModuleStats", "QuoteResult"]
