from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .calculation_engine import (
    FULLY_PARALLEL,
    calculate_module_prices,
    calculate_module_stats,
    calculate_quote,
    calculate_rate_discount_amount,
    enabled_modules,
    max_overlap_days,
)
from .models.project import ProjectModule
from .models.quote import ModulePrice, ModuleStats, QuoteResult
from .models.rates import RateEntry

logger = logging.getLogger(__name__)

WEEK_IN_DAYS = 5


def describe_overlap(overlap_days: float, max_overlap: float) -> str:
    if overlap_days >= max_overlap:
        return "Fully parallel work"
    if overlap_days == 0:
        return "Sequential work"
    weeks = int(overlap_days // WEEK_IN_DAYS)
    if weeks == 0:
        days = round(overlap_days, 1)
        return f"{days:g} day{'' if days == 1 else 's'} overlap"
    return f"{weeks} week{'' if weeks == 1 else 's'} overlap"


@dataclass
class QuoteBundle:
    quote: QuoteResult
    stats: ModuleStats
    module_prices: list[ModulePrice]
    modules: list[ProjectModule]
    rates: list[RateEntry]
    discount_percentage: float = 0
    overlap_days: float = FULLY_PARALLEL
    overlap_label: str = "Fully parallel work"
    rate_discount_amount: float = 0.0
    enabled_module_ids: list[str] = field(default_factory=list)

    @property
    def enabled_modules(self) -> list[ProjectModule]:
        return enabled_modules(self.modules)

    @property
    def disabled_modules(self) -> list[ProjectModule]:
        return [module for module in self.modules if not module.is_enabled]

    @property
    def has_rate_discounts(self) -> bool:
        return any(rate.discount > 0 for rate in self.rates)

    def model_dump(self) -> dict[str, object]:
        return {
            "quote": self.quote.model_dump(by_alias=True),
            "stats": self.stats.model_dump(by_alias=True),
            "modulePrices": [price.model_dump(by_alias=True) for price in self.module_prices],
            "discountPercentage": self.discount_percentage,
            # JSON has no infinity; null stands for fully parallel.
            "overlapDays": None if self.overlap_days == FULLY_PARALLEL else self.overlap_days,
            "overlapLabel": self.overlap_label,
            "rateDiscountAmount": round(self.rate_discount_amount, 2),
            "enabledModuleIds": list(self.enabled_module_ids),
        }


class QuoteAssembler:
    """Combines the aggregation results into the single shape callers consume."""

    def __init__(self, *, rates: Sequence[RateEntry] | None = None) -> None:
        self._rates = list(rates or ())

    def assemble(
        self,
        modules: Sequence[ProjectModule],
        *,
        rates: Sequence[RateEntry] | None = None,
        discount_percentage: float = 0,
        overlap_days: float | None = FULLY_PARALLEL,
    ) -> QuoteBundle:
        rate_card = list(rates) if rates is not None else list(self._rates)
        module_list = list(modules)
        overlap = FULLY_PARALLEL if overlap_days is None else overlap_days

        quote = calculate_quote(rate_card, module_list, discount_percentage, overlap)
        stats = calculate_module_stats(module_list, overlap)
        bundle = QuoteBundle(
            quote=quote,
            stats=stats,
            module_prices=calculate_module_prices(module_list, rate_card),
            modules=module_list,
            rates=rate_card,
            discount_percentage=discount_percentage,
            overlap_days=overlap,
            overlap_label=describe_overlap(overlap, max_overlap_days(module_list)),
            rate_discount_amount=calculate_rate_discount_amount(rate_card, module_list),
            enabled_module_ids=[module.id for module in enabled_modules(module_list)],
        )
        logger.debug(
            "Assembled quote",
            extra={
                "modules": len(module_list),
                "enabled_modules": len(bundle.enabled_module_ids),
                "total_quote": quote.total_quote,
                "final_total": quote.final_total,
            },
        )
        return bundle


__all__ = ["QuoteAssembler", "QuoteBundle", "describe_overlap"]
