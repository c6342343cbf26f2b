from __future__ import annotations

import json
from typing import Literal

from .calculation_engine import FULLY_PARALLEL, daily_rate, round_half_up
from .models.breakdown import (
    CalculationReport,
    CostSummary,
    DisabledModuleEffort,
    DiscountSummary,
    ModuleCalculation,
    PerformerCalculation,
    PerformerDiscount,
    RateCalculation,
    ReportSummary,
    TimelineSummary,
)
from .models.project import ProjectModule
from .models.rates import BUSINESS_DAYS_PER_MONTH, RateEntry
from .performers import PerformerType, classify_performer, development_days_for
from .quote_assembler import QuoteBundle

Currency = Literal["$", "€"]


def format_money(amount: float, currency: Currency = "$") -> str:
    return f"{currency}{round_half_up(amount):,}"


def _number(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def export_text(bundle: QuoteBundle, *, currency: Currency = "$") -> str:
    quote = bundle.quote
    lines = [
        "PROJECT QUOTE SUMMARY",
        "=====================",
        "",
        f"Total: ~{format_money(quote.final_total, currency)}",
        "",
        "WORK BREAKDOWN",
        "--------------",
        f"Total Working Days: {_number(quote.total_days)} days ({bundle.overlap_label})",
    ]
    if quote.design_days > 0:
        lines.append(f"  Design: {_number(quote.design_days)} days")
    if quote.development_days > 0:
        lines.append(f"  Development: {_number(quote.development_days)} days")
    lines += ["", "PRICE BREAKDOWN", "---------------"]
    if quote.design_days > 0:
        lines.append(f"Design Cost: {format_money(quote.design_cost, currency)}")
    if quote.development_days > 0:
        lines.append(f"Development Cost: {format_money(quote.development_cost, currency)}")
    if bundle.has_rate_discounts:
        lines.append(f"Per-Performer Discounts: -{format_money(bundle.rate_discount_amount, currency)}")
    if quote.discount_amount > 0:
        lines.append(f"Project Discount: -{format_money(quote.discount_amount, currency)}")
    lines += ["", f"Total: ~{format_money(quote.final_total, currency)}"]

    if bundle.enabled_modules:
        lines += ["", "MODULES", "-------"]
        for module in bundle.enabled_modules:
            lines += [
                "",
                module.name,
                f"  Design: {_number(module.design_days)} days",
                f"  Frontend: {_number(module.frontend_days)} days",
                f"  Backend: {_number(module.backend_days)} days",
            ]
    return "\n".join(lines) + "\n"


def export_markdown(bundle: QuoteBundle, *, currency: Currency = "$") -> str:
    quote = bundle.quote
    lines = [
        "# Project Quote Summary",
        "",
        f"## Total: ~{format_money(quote.final_total, currency)}",
        "",
        "## Work Breakdown",
        "",
        f"- **Total Working Days:** {_number(quote.total_days)} days ({bundle.overlap_label})",
    ]
    if quote.design_days > 0:
        lines.append(f"- **Design:** {_number(quote.design_days)} days")
    if quote.development_days > 0:
        lines.append(f"- **Development:** {_number(quote.development_days)} days")
    lines += ["", "## Price Breakdown", ""]
    if quote.design_days > 0:
        lines.append(f"- **Design Cost:** {format_money(quote.design_cost, currency)}")
    if quote.development_days > 0:
        lines.append(f"- **Development Cost:** {format_money(quote.development_cost, currency)}")
    if bundle.has_rate_discounts:
        lines.append(f"- **Per-Performer Discounts:** -{format_money(bundle.rate_discount_amount, currency)}")
    if quote.discount_amount > 0:
        lines.append(f"- **Project Discount:** -{format_money(quote.discount_amount, currency)}")
    lines += ["", f"**Total:** ~{format_money(quote.final_total, currency)}"]

    if bundle.enabled_modules:
        lines += ["", "## Modules"]
        for module in bundle.enabled_modules:
            lines += [
                "",
                f"### {module.name}",
                "",
                "| Type | Days |",
                "|------|------|",
                f"| Design | {_number(module.design_days)} |",
                f"| Frontend | {_number(module.frontend_days)} |",
                f"| Backend | {_number(module.backend_days)} |",
            ]
    return "\n".join(lines) + "\n"


def export_json(bundle: QuoteBundle, *, currency: Currency = "$") -> str:
    quote = bundle.quote
    data = {
        "summary": {"total": quote.final_total, "currency": currency, "totalDays": quote.total_days},
        "workBreakdown": {"designDays": quote.design_days, "developmentDays": quote.development_days},
        "priceBreakdown": {
            "designCost": quote.design_cost,
            "developmentCost": quote.development_cost,
            "rateDiscounts": round(bundle.rate_discount_amount, 2) if bundle.has_rate_discounts else 0,
            "projectDiscount": quote.discount_amount,
            "finalTotal": quote.final_total,
        },
        "modules": [
            module.model_dump(by_alias=True, exclude={"id", "is_enabled"}) for module in bundle.enabled_modules
        ],
        "rates": [rate.model_dump(by_alias=True) for rate in bundle.rates],
    }
    return json.dumps(data, ensure_ascii=False, indent=2)


def _cents(value: float) -> float:
    return round(value, 2)


def _rate_lookup(rates: list[RateEntry], role: str) -> RateEntry | None:
    return next((rate for rate in rates if rate.role == role), None)


def _performer_calculation(
    performer: str,
    days: float,
    rates: list[RateEntry],
    *,
    performer_type: PerformerType,
    note: str | None = None,
) -> PerformerCalculation:
    rate = _rate_lookup(rates, performer)
    monthly_rate = rate.monthly_rate if rate else 0.0
    discount = rate.discount if rate else 0.0
    base_daily_rate = monthly_rate / BUSINESS_DAYS_PER_MONTH
    discounted = daily_rate(performer, rates)
    cost = discounted * days
    discount_part = f" * {_number(1 - discount / 100)} (discount)" if discount > 0 else ""
    return PerformerCalculation(
        performer=performer,
        performer_type=performer_type.value,
        monthly_rate=monthly_rate,
        daily_rate=_cents(base_daily_rate),
        discount=discount,
        discounted_daily_rate=_cents(discounted),
        days=days,
        cost=_cents(cost),
        note=note,
        calculation=(
            f"{_number(monthly_rate)} / {BUSINESS_DAYS_PER_MONTH} = {_number(_cents(base_daily_rate))} per day"
            f"{discount_part} * {_number(days)} days = {_number(_cents(cost))}"
        ),
    )


def _development_note(performer_type: PerformerType, module: ProjectModule) -> str:
    if performer_type is PerformerType.frontend:
        return f"Frontend developer works {_number(module.frontend_days)}d"
    if performer_type is PerformerType.backend:
        return f"Backend developer works {_number(module.backend_days)}d"
    return f"Max of frontend ({_number(module.frontend_days)}d) and backend ({_number(module.backend_days)}d)"


def _module_calculation(module: ProjectModule, rates: list[RateEntry]) -> ModuleCalculation:
    design = [
        _performer_calculation(
            performer,
            module.design_days,
            rates,
            performer_type=classify_performer(performer),
        )
        for performer in module.design_performers
    ]
    development = []
    for performer in module.development_performers:
        performer_type = classify_performer(performer)
        development.append(
            _performer_calculation(
                performer,
                development_days_for(performer, module),
                rates,
                performer_type=performer_type,
                note=_development_note(performer_type, module),
            )
        )
    return ModuleCalculation(
        name=module.name,
        is_enabled=module.is_enabled,
        design_days=module.design_days,
        frontend_days=module.frontend_days,
        backend_days=module.backend_days,
        development_days_used=module.max_development_days,
        design_calculations=design,
        development_calculations=development,
        module_total_cost=_cents(sum(item.cost for item in [*design, *development])),
    )


def build_calculation_report(bundle: QuoteBundle, *, currency: Currency = "$") -> CalculationReport:
    """Itemise every performer's contribution behind a quote."""
    quote = bundle.quote
    rates = list(bundle.rates)
    rate_discount = bundle.rate_discount_amount if bundle.has_rate_discounts else 0.0
    overlap = "Fully parallel" if bundle.overlap_days == FULLY_PARALLEL else f"{_number(bundle.overlap_days)} days"

    return CalculationReport(
        currency=currency,
        summary=ReportSummary(
            total_quote=quote.total_quote,
            discount_amount=quote.discount_amount,
            final_total=quote.final_total,
            timeline=TimelineSummary(
                total_days=quote.total_days,
                design_days=quote.design_days,
                development_days=quote.development_days,
                overlap=overlap,
                total_effort_days=bundle.stats.effort_days,
            ),
        ),
        rates=[
            RateCalculation(
                role=rate.role,
                monthly_rate=rate.monthly_rate,
                daily_rate=_cents(rate.monthly_rate / BUSINESS_DAYS_PER_MONTH),
                discount=rate.discount,
                discounted_daily_rate=_cents(daily_rate(rate.role, [rate])),
            )
            for rate in rates
        ],
        discounts=DiscountSummary(
            per_performer_discounts=[
                PerformerDiscount(
                    role=rate.role,
                    discount=rate.discount,
                    savings_per_day=_cents(rate.monthly_rate / BUSINESS_DAYS_PER_MONTH * rate.discount / 100),
                )
                for rate in rates
                if rate.discount > 0
            ],
            total_rate_discount_amount=_cents(rate_discount),
            project_discount_amount=quote.discount_amount,
            total_discounts=_cents(rate_discount + quote.discount_amount),
        ),
        costs=CostSummary(
            design_cost=quote.design_cost,
            development_cost=quote.development_cost,
            total_before_discounts=_cents(quote.total_quote + rate_discount),
            after_rate_discounts=quote.total_quote,
            after_project_discount=quote.final_total,
        ),
        modules=[_module_calculation(module, rates) for module in bundle.enabled_modules],
        disabled_modules=[
            DisabledModuleEffort(
                name=module.name,
                design_days=module.design_days,
                frontend_days=module.frontend_days,
                backend_days=module.backend_days,
            )
            for module in bundle.disabled_modules
        ],
    )


__all__ = [
    "Currency",
    "build_calculation_report",
    "export_json",
    "export_markdown",
    "export_text",
    "format_money",
]
