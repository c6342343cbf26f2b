import math

import pytest

from quote_calculator.calculation_engine import (
    FULLY_PARALLEL,
    calculate_module_price,
    calculate_module_prices,
    calculate_module_stats,
    calculate_quote,
    calculate_rate_discount_amount,
    daily_rate,
    max_overlap_days,
    round_half_up,
)
from quote_calculator.models.project import ProjectModule
from quote_calculator.models.rates import RateEntry


def _role_attribution_rates():
    return [
        RateEntry(role="UI Designer", monthly_rate=4000),
        RateEntry(role="Frontend Developer", monthly_rate=5000),
        RateEntry(role="Backend Developer", monthly_rate=5000),
    ]


def test_module_stats_fully_parallel(modules):
    stats = calculate_module_stats(modules)

    # design 7, frontend 15, backend 14 -> development 15
    assert stats.timeline_days == 15
    assert stats.effort_days == 3 + 5 + 8 + 4 + 10 + 6


def test_module_stats_sequential_and_partial_overlap(modules):
    assert calculate_module_stats(modules, 0).timeline_days == 22
    assert calculate_module_stats(modules, 5).timeline_days == 17
    assert calculate_module_stats(modules, 2.5).timeline_days == 19.5


def test_module_stats_overlap_is_clamped(modules):
    limit = max_overlap_days(modules)
    assert limit == 7
    expected = calculate_module_stats(modules, limit).timeline_days
    for overlap in (7, 8, 100, 1e12, FULLY_PARALLEL):
        assert calculate_module_stats(modules, overlap).timeline_days == expected


def test_module_stats_non_increasing_in_overlap(modules):
    timelines = [calculate_module_stats(modules, overlap).timeline_days for overlap in range(0, 12)]
    assert all(later <= earlier for earlier, later in zip(timelines, timelines[1:]))


def test_module_stats_ignore_disabled_and_empty(modules):
    disabled = [module.model_copy(update={"is_enabled": False}) for module in modules]

    assert calculate_module_stats([]).model_dump() == {"timeline_days": 0, "effort_days": 0}
    assert calculate_module_stats(disabled).model_dump() == {"timeline_days": 0, "effort_days": 0}


def test_daily_rate_applies_performer_discount():
    rates = [RateEntry(role="UI Designer", monthly_rate=4000, discount=30)]

    assert daily_rate("UI Designer", rates) == pytest.approx(140)
    assert daily_rate("Nobody", rates) == 0


def test_module_price_role_attribution():
    module = ProjectModule(
        id="m",
        name="Authentication",
        design_days=3,
        frontend_days=5,
        backend_days=8,
        design_performers=["UI Designer"],
        development_performers=["Frontend Developer", "Backend Developer"],
    )

    assert calculate_module_price(module, _role_attribution_rates()) == 3850


def test_module_price_ignores_enabled_flag_and_unknown_performers():
    module = ProjectModule(
        id="m",
        name="Disabled",
        design_days=1,
        frontend_days=2,
        backend_days=0,
        design_performers=["UI Designer", "Ghost Designer"],
        development_performers=["Frontend Developer"],
        is_enabled=False,
    )

    assert calculate_module_price(module, _role_attribution_rates()) == 200 + 500


def test_other_roles_span_the_module_development():
    rates = [RateEntry(role="QA Engineer", monthly_rate=2000)]
    module = ProjectModule(
        id="m", name="QA", frontend_days=3, backend_days=6, development_performers=["QA Engineer"]
    )

    assert calculate_module_price(module, rates) == 600


def test_module_price_rounds_combined_value():
    rates = [RateEntry(role="UI Designer", monthly_rate=10), RateEntry(role="Frontend Developer", monthly_rate=10)]
    module = ProjectModule(
        id="m",
        name="Tiny",
        design_days=1,
        frontend_days=1,
        design_performers=["UI Designer"],
        development_performers=["Frontend Developer"],
    )

    # 0.5 + 0.5 rounded once is 1; the whole-project quote rounds each phase.
    assert calculate_module_price(module, rates) == 1
    quote = calculate_quote(rates, [module])
    assert (quote.design_cost, quote.development_cost, quote.total_quote) == (1, 1, 2)


def test_module_prices_cover_every_module(rates, modules):
    prices = calculate_module_prices(modules, rates)

    assert [(price.module_id, price.price, price.timeline_days) for price in prices] == [
        ("module-1", 3850, 8),
        ("module-2", 4800, 10),
        ("module-3", 4000, 9),
    ]


def test_quote_for_standard_fixture(rates, modules):
    quote = calculate_quote(rates, modules)

    assert quote.design_days == 7
    assert quote.development_days == 15
    assert quote.total_days == 15
    assert quote.design_cost == 1400
    assert quote.development_cost == 7250
    assert quote.total_quote == 8650
    assert quote.product_price == quote.total_quote
    assert quote.monthly_fee == 23000
    assert quote.discount_amount == 0
    assert quote.final_total == 8650
    assert quote.team_size_multiplier == 1


def test_quote_with_project_discount_and_sequential_timeline(rates, modules):
    discounted = calculate_quote(rates, modules, 10)
    sequential = calculate_quote(rates, modules, overlap_days=0)

    assert discounted.discount_amount == 865
    assert discounted.final_total == 7785
    assert sequential.total_days == 22


def test_cost_does_not_depend_on_overlap(rates, modules):
    totals = {calculate_quote(rates, modules, 15, overlap).total_quote for overlap in (0, 3, 7, FULLY_PARALLEL)}
    assert totals == {8650}


@pytest.mark.parametrize("discount", [0, 7.5, 10, 33, 100])
def test_discount_is_applied_once(rates, modules, discount):
    quote = calculate_quote(rates, modules, discount)

    assert quote.final_total == quote.total_quote - round_half_up(quote.total_quote * discount / 100)
    if discount == 0:
        assert quote.final_total == quote.total_quote
    if discount == 100:
        assert quote.final_total == 0


def test_performer_and_project_discounts_compound(modules):
    rates = [
        RateEntry(role="UI Designer", monthly_rate=4000, discount=30),
        RateEntry(role="Frontend Developer", monthly_rate=5000),
        RateEntry(role="Backend Developer", monthly_rate=5000),
    ]

    quote = calculate_quote(rates, modules, 10)

    assert quote.design_cost == 7 * 140
    assert quote.total_quote == 980 + 7250
    assert quote.discount_amount == round_half_up(8230 * 0.1)
    assert quote.final_total == 8230 - 823


def test_volunteers_cost_nothing():
    module = ProjectModule(
        id="m",
        name="Community",
        design_days=5,
        frontend_days=5,
        design_performers=["Volunteer Designer"],
        development_performers=["Volunteer Frontend"],
    )
    for discount in (0, 50, 100):
        rates = [
            RateEntry(role="Volunteer Designer", monthly_rate=0, discount=discount),
            RateEntry(role="Volunteer Frontend", monthly_rate=0),
        ]
        assert calculate_module_price(module, rates) == 0
        assert calculate_quote(rates, [module]).total_quote == 0


def test_quote_degenerate_inputs(rates, modules):
    empty_modules = calculate_quote(rates, [])
    empty_rates = calculate_quote([], modules)
    all_disabled = calculate_quote(rates, [module.model_copy(update={"is_enabled": False}) for module in modules])

    assert empty_modules.total_days == 0
    assert empty_modules.total_quote == 0
    assert empty_modules.monthly_fee == 23000
    assert empty_rates.monthly_fee == 0
    assert empty_rates.total_quote == 0
    assert empty_rates.final_total == 0
    for quote in (empty_modules, all_disabled):
        assert (quote.design_cost, quote.development_cost, quote.discount_amount, quote.final_total) == (0, 0, 0, 0)


def test_quote_is_deterministic(rates, modules):
    assert calculate_quote(rates, modules, 12, 3) == calculate_quote(rates, modules, 12, 3)


def test_rate_discount_amount(modules):
    rates = [
        RateEntry(role="UI Designer", monthly_rate=4000, discount=30),
        RateEntry(role="Frontend Developer", monthly_rate=5000, discount=10),
    ]

    # UI Designer: 60/day saved over 7 design days; Frontend: 25/day over 15 frontend days.
    assert calculate_rate_discount_amount(rates, modules) == pytest.approx(420 + 375)
    assert calculate_rate_discount_amount([rate.without_discount() for rate in rates], modules) == 0


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert math.isinf(FULLY_PARALLEL)
