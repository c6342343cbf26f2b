from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, timedelta

from .calculation_engine import round_half_up

WORKING_DAYS_PER_MONTH = 20
# Rough conversion from working days to calendar days.
CALENDAR_DAYS_PER_WORKING_DAY = 1.5


@dataclass(frozen=True)
class TimeToMarket:
    descriptive_date: str
    months: float
    end_date: date
    start_next_week: bool = True


def next_monday(today: date) -> date:
    return today + timedelta(days=7 - today.weekday())


def _add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def estimate_end_date(working_days: float, *, today: date | None = None) -> date:
    start = next_monday(today or date.today())
    months = working_days / WORKING_DAYS_PER_MONTH
    end = _add_months(start, int(math.floor(months)))
    remaining_days = (months % 1) * WORKING_DAYS_PER_MONTH
    return end + timedelta(days=round_half_up(remaining_days * CALENDAR_DAYS_PER_WORKING_DAY))


def describe_date(value: date) -> str:
    if value.day <= 10:
        period = "beginning"
    elif value.day <= 20:
        period = "middle"
    else:
        period = "end"
    return f"{period} of {calendar.month_name[value.month]}"


def calculate_time_to_market(working_days: float, *, today: date | None = None) -> TimeToMarket:
    """Estimate when a project of ``working_days`` ships if it starts next Monday."""
    end = estimate_end_date(working_days, today=today)
    months = round_half_up(working_days / WORKING_DAYS_PER_MONTH * 10) / 10
    return TimeToMarket(descriptive_date=describe_date(end), months=months, end_date=end)


__all__ = [
    "TimeToMarket",
    "calculate_time_to_market",
    "describe_date",
    "estimate_end_date",
    "next_monday",
]
