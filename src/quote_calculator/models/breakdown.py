from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Sequence

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True
        alias_generator = to_camel


class PerformerCalculation(_CamelModel):
    performer: str
    performer_type: Literal["frontend", "backend", "other"]
    monthly_rate: float
    daily_rate: float
    discount: float = 0.0
    discounted_daily_rate: float
    days: float
    cost: float
    note: str | None = None
    calculation: str


class ModuleCalculation(_CamelModel):
    name: str
    is_enabled: bool
    design_days: float
    frontend_days: float
    backend_days: float
    development_days_used: float
    design_calculations: Sequence[PerformerCalculation] = Field(default_factory=list)
    development_calculations: Sequence[PerformerCalculation] = Field(default_factory=list)
    module_total_cost: float = 0.0


class DisabledModuleEffort(_CamelModel):
    name: str
    design_days: float
    frontend_days: float
    backend_days: float


class RateCalculation(_CamelModel):
    role: str
    monthly_rate: float
    daily_rate: float
    discount: float
    discounted_daily_rate: float


class PerformerDiscount(_CamelModel):
    role: str
    discount: float
    savings_per_day: float


class TimelineSummary(_CamelModel):
    total_days: float
    design_days: float
    development_days: float
    overlap: str
    total_effort_days: float


class ReportSummary(_CamelModel):
    total_quote: float
    discount_amount: float
    final_total: float
    timeline: TimelineSummary


class DiscountSummary(_CamelModel):
    per_performer_discounts: Sequence[PerformerDiscount] = Field(default_factory=list)
    total_rate_discount_amount: float = 0.0
    project_discount_amount: float = 0.0
    total_discounts: float = 0.0


class CostSummary(_CamelModel):
    design_cost: float
    development_cost: float
    total_before_discounts: float
    after_rate_discounts: float
    after_project_discount: float


class CalculationReport(_CamelModel):
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    currency: str = "$"
    summary: ReportSummary
    rates: Sequence[RateCalculation] = Field(default_factory=list)
    discounts: DiscountSummary = Field(default_factory=DiscountSummary)
    costs: CostSummary
    modules: Sequence[ModuleCalculation] = Field(default_factory=list)
    disabled_modules: Sequence[DisabledModuleEffort] = Field(default_factory=list)


__all__ = [
    "CalculationReport",
    "CostSummary",
    "DisabledModuleEffort",
    "DiscountSummary",
    "ModuleCalculation",
    "PerformerCalculation",
    "PerformerDiscount",
    "RateCalculation",
    "ReportSummary",
    "TimelineSummary",
]
