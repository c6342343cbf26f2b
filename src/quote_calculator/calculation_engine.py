"""Timeline and cost arithmetic for project quotes.

Every function here is pure: inputs are read, never mutated, and nothing is
logged or persisted. Missing rate-card entries price at zero instead of
raising, so a quote can always be produced from partially consistent data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from .models.project import ProjectModule
from .models.quote import ModulePrice, ModuleStats, QuoteResult
from .models.rates import BUSINESS_DAYS_PER_MONTH, RateEntry
from .performers import development_days_for

# Overlap value meaning design and development run fully in parallel.
FULLY_PARALLEL = math.inf


@dataclass(frozen=True)
class PhaseTotals:
    design: float
    frontend: float
    backend: float

    @property
    def development(self) -> float:
        # Front-end and back-end teams work concurrently.
        return max(self.frontend, self.backend)

    @property
    def max_overlap(self) -> float:
        return min(self.design, self.development)

    def timeline(self, overlap_days: float = FULLY_PARALLEL) -> float:
        actual_overlap = min(overlap_days, self.design, self.development)
        return self.design + self.development - actual_overlap


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def enabled_modules(modules: Iterable[ProjectModule]) -> list[ProjectModule]:
    return [module for module in modules if module.is_enabled]


def _rate_index(rates: Iterable[RateEntry]) -> dict[str, RateEntry]:
    index: dict[str, RateEntry] = {}
    for rate in rates:
        # First entry wins when a role is listed twice.
        index.setdefault(rate.role, rate)
    return index


def _daily_rate(role: str, rate_index: Mapping[str, RateEntry]) -> float:
    rate = rate_index.get(role)
    if rate is None:
        return 0.0
    return rate.monthly_rate * (1 - rate.discount / 100) / BUSINESS_DAYS_PER_MONTH


def daily_rate(role: str, rates: Sequence[RateEntry]) -> float:
    return _daily_rate(role, _rate_index(rates))


def phase_totals(modules: Iterable[ProjectModule]) -> PhaseTotals:
    design = frontend = backend = 0.0
    for module in enabled_modules(modules):
        design += module.design_days
        frontend += module.frontend_days
        backend += module.backend_days
    return PhaseTotals(design=design, frontend=frontend, backend=backend)


def max_overlap_days(modules: Sequence[ProjectModule]) -> float:
    return phase_totals(modules).max_overlap


def _design_cost(module: ProjectModule, rate_index: Mapping[str, RateEntry]) -> float:
    return sum(_daily_rate(performer, rate_index) * module.design_days for performer in module.design_performers)


def _development_cost(module: ProjectModule, rate_index: Mapping[str, RateEntry]) -> float:
    return sum(
        _daily_rate(performer, rate_index) * development_days_for(performer, module)
        for performer in module.development_performers
    )


def calculate_module_stats(
    modules: Sequence[ProjectModule],
    overlap_days: float = FULLY_PARALLEL,
) -> ModuleStats:
    enabled = enabled_modules(modules)
    totals = phase_totals(enabled)
    effort = sum(module.effort_days for module in enabled)
    return ModuleStats(timeline_days=totals.timeline(overlap_days), effort_days=effort)


def calculate_quote(
    rates: Sequence[RateEntry],
    modules: Sequence[ProjectModule],
    discount_percentage: float = 0,
    overlap_days: float = FULLY_PARALLEL,
) -> QuoteResult:
    """Build the whole-project quote from enabled modules.

    Design and development costs are rounded separately before being summed.
    The project discount is applied once to that sum; per-performer discounts
    are already folded into each daily rate. ``overlap_days`` only affects the
    timeline fields.
    """
    enabled = enabled_modules(modules)
    rate_index = _rate_index(rates)
    totals = phase_totals(enabled)

    design_cost = round_half_up(sum(_design_cost(module, rate_index) for module in enabled))
    development_cost = round_half_up(sum(_development_cost(module, rate_index) for module in enabled))
    total_quote = design_cost + development_cost
    discount_amount = round_half_up(total_quote * discount_percentage / 100)

    return QuoteResult(
        design_days=totals.design,
        development_days=totals.development,
        total_days=totals.timeline(overlap_days),
        design_cost=design_cost,
        development_cost=development_cost,
        total_quote=total_quote,
        monthly_fee=sum(rate.monthly_rate for rate in rates),
        product_price=total_quote,
        discount_amount=discount_amount,
        final_total=total_quote - discount_amount,
    )


def calculate_module_price(module: ProjectModule, rates: Sequence[RateEntry]) -> int:
    """Price of a single module, rounded once as a combined value.

    ``is_enabled`` is ignored here; callers decide which modules to price.
    """
    rate_index = _rate_index(rates)
    return round_half_up(_design_cost(module, rate_index) + _development_cost(module, rate_index))


def calculate_module_prices(modules: Sequence[ProjectModule], rates: Sequence[RateEntry]) -> list[ModulePrice]:
    return [
        ModulePrice(
            module_id=module.id,
            price=calculate_module_price(module, rates),
            timeline_days=max(module.design_days, module.frontend_days, module.backend_days),
        )
        for module in modules
    ]


def calculate_rate_discount_amount(rates: Sequence[RateEntry], modules: Sequence[ProjectModule]) -> float:
    """Amount saved by per-performer discounts across enabled modules."""
    discounted = [rate for rate in rates if rate.discount > 0]
    if not discounted:
        return 0.0
    enabled = enabled_modules(modules)
    savings = 0.0
    for rate in discounted:
        saved_per_day = rate.monthly_rate / BUSINESS_DAYS_PER_MONTH * rate.discount / 100
        days = 0.0
        for module in enabled:
            days += module.design_days * list(module.design_performers).count(rate.role)
            days += development_days_for(rate.role, module) * list(module.development_performers).count(rate.role)
        savings += saved_per_day * days
    return savings


__all__ = [
    "FULLY_PARALLEL",
    "PhaseTotals",
    "calculate_module_price",
    "calculate_module_prices",
    "calculate_module_stats",
    "calculate_quote",
    "calculate_rate_discount_amount",
    "daily_rate",
    "enabled_modules",
    "max_overlap_days",
    "phase_totals",
    "round_half_up",
]
