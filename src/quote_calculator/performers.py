from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, Sequence

from .models.project import ProjectModule
from .models.rates import DEFAULT_PERFORMER_RATE, RateEntry

_FRONTEND_TOKENS = re.compile(r"\b(fe|front)\b")
_BACKEND_TOKENS = re.compile(r"\b(be|back)\b")


class PerformerType(str, Enum):
    frontend = "frontend"
    backend = "backend"
    other = "other"


def classify_performer(label: str) -> PerformerType:
    """Map a free-text performer label to a coarse role category.

    Substrings ``front-end``/``frontend`` and standalone tokens ``fe``/``front``
    mean frontend; the ``back`` equivalents mean backend. A label matching
    both is treated as frontend.
    """
    name = label.lower()
    if "front-end" in name or "frontend" in name or _FRONTEND_TOKENS.search(name):
        return PerformerType.frontend
    if "back-end" in name or "backend" in name or _BACKEND_TOKENS.search(name):
        return PerformerType.backend
    return PerformerType.other


def development_days_for(performer: str, module: ProjectModule) -> float:
    performer_type = classify_performer(performer)
    if performer_type is PerformerType.frontend:
        return module.frontend_days
    if performer_type is PerformerType.backend:
        return module.backend_days
    # QA, PM and similar roles span the whole development phase of the module.
    return module.max_development_days


def has_performer_type(performers: Iterable[str], performer_type: PerformerType) -> bool:
    return any(classify_performer(performer) is performer_type for performer in performers)


def extract_unique_performers(modules: Sequence[ProjectModule]) -> list[str]:
    performers: set[str] = set()
    for module in modules:
        performers.update(module.design_performers)
        performers.update(module.development_performers)
    return sorted(performers)


def get_missing_performers(modules: Sequence[ProjectModule], existing_roles: Iterable[str]) -> list[str]:
    known = set(existing_roles)
    return [performer for performer in extract_unique_performers(modules) if performer not in known]


def rates_for_missing_performers(
    modules: Sequence[ProjectModule],
    rates: Sequence[RateEntry],
    *,
    monthly_rate: float = DEFAULT_PERFORMER_RATE,
) -> list[RateEntry]:
    missing = get_missing_performers(modules, (rate.role for rate in rates))
    return [RateEntry(role=role, monthly_rate=monthly_rate) for role in missing]


def visible_rates(rates: Sequence[RateEntry], modules: Sequence[ProjectModule]) -> list[RateEntry]:
    referenced = set(extract_unique_performers(modules))
    return [rate for rate in rates if rate.role in referenced]


__all__ = [
    "PerformerType",
    "classify_performer",
    "development_days_for",
    "extract_unique_performers",
    "get_missing_performers",
    "has_performer_type",
    "rates_for_missing_performers",
    "visible_rates",
]
