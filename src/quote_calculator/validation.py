from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

import pydantic

from .models.project import (
    CSV_BACKEND_DAYS,
    CSV_DESIGN_DAYS,
    CSV_DESIGN_PERFORMERS,
    CSV_DEVELOPMENT_PERFORMERS,
    CSV_FRONTEND_DAYS,
    CSV_MODULE,
    ProjectModule,
)
from .models.rates import MAX_MONTHLY_RATE, RateEntry
from .performers import PerformerType, has_performer_type

MAX_PHASE_DAYS = 1000


class ValidationError(ValueError):
    """Raised when input data cannot be turned into a valid quote input."""


class PerformerAssignmentError(ValidationError):
    def __init__(self, module_name: str, phase: PerformerType) -> None:
        self.module_name = module_name
        self.phase = phase
        super().__init__(
            f"Module '{module_name}' has {phase.value} days but no {phase.value} performer "
            f"among its development performers"
        )


def validate_performer_assignment(module: ProjectModule) -> ProjectModule:
    """Check that every development phase with days has a matching performer.

    Catches label typos such as "Fronted Developer" that would otherwise price
    the phase at zero. Never called by the calculation engine.
    """
    if module.frontend_days > 0 and not has_performer_type(module.development_performers, PerformerType.frontend):
        raise PerformerAssignmentError(module.name, PerformerType.frontend)
    if module.backend_days > 0 and not has_performer_type(module.development_performers, PerformerType.backend):
        raise PerformerAssignmentError(module.name, PerformerType.backend)
    return module


def find_performer_assignment_errors(modules: Sequence[ProjectModule]) -> list[PerformerAssignmentError]:
    errors: list[PerformerAssignmentError] = []
    for module in modules:
        for phase, days in ((PerformerType.frontend, module.frontend_days), (PerformerType.backend, module.backend_days)):
            if days > 0 and not has_performer_type(module.development_performers, phase):
                errors.append(PerformerAssignmentError(module.name, phase))
    return errors


def _first_error(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]


def validate_rate_entry(data: Any) -> RateEntry:
    if isinstance(data, RateEntry):
        entry = data
    else:
        try:
            entry = RateEntry.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Invalid rate configuration ({_first_error(exc)})") from exc
    if entry.monthly_rate > MAX_MONTHLY_RATE:
        raise ValidationError(
            f"Monthly rate must be between 0 and {MAX_MONTHLY_RATE:,.0f}. Got: {entry.monthly_rate:g}"
        )
    if not entry.role.strip():
        raise ValidationError("Role name cannot be empty")
    return entry


def validate_rate_entries(data: Any) -> list[RateEntry]:
    if not isinstance(data, (list, tuple)):
        raise ValidationError("Rate configs must be a list")
    entries: list[RateEntry] = []
    for index, item in enumerate(data):
        try:
            entries.append(validate_rate_entry(item))
        except ValidationError as exc:
            raise ValidationError(f"Invalid rate config at index {index}: {exc}") from exc
    return entries


def validate_project_module(data: Any) -> ProjectModule:
    if isinstance(data, ProjectModule):
        module = data
    else:
        try:
            module = ProjectModule.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Invalid project module ({_first_error(exc)})") from exc
    for label, days in (
        ("Design", module.design_days),
        ("Frontend", module.frontend_days),
        ("Backend", module.backend_days),
    ):
        if not math.isfinite(days) or days > MAX_PHASE_DAYS:
            raise ValidationError(f"{label} days must be between 0 and {MAX_PHASE_DAYS}. Got: {days:g}")
    if not module.name.strip():
        raise ValidationError("Module name cannot be empty")
    return module


def validate_csv_row(row: Any, row_index: int) -> Mapping[str, Any]:
    prefix = f"Row {row_index + 1}"
    if not isinstance(row, Mapping):
        raise ValidationError(f"{prefix}: Invalid row data")
    if not isinstance(row.get(CSV_MODULE), str):
        raise ValidationError(f"{prefix}: Missing or invalid '{CSV_MODULE}' field")
    for column in (CSV_DESIGN_DAYS, CSV_FRONTEND_DAYS, CSV_BACKEND_DAYS):
        value = row.get(column)
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValidationError(f"{prefix}: Missing or invalid '{column}' field")
    for column in (CSV_DESIGN_PERFORMERS, CSV_DEVELOPMENT_PERFORMERS):
        if not isinstance(row.get(column), str):
            raise ValidationError(f"{prefix}: Missing or invalid '{column}' field")
    return row


def _parse_days(row: Mapping[str, Any], column: str, label: str, index: int) -> float:
    raw = row[column]
    try:
        days = float(str(raw).strip())
    except ValueError:
        days = math.nan
    if not math.isfinite(days) or days < 0:
        raise ValidationError(f"Row {index + 1}: {label} days must be a positive number. Got: {raw}")
    return days


def split_performers(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def csv_row_to_module(row: Mapping[str, Any], index: int) -> ProjectModule:
    module = ProjectModule(
        id=f"module-{index}",
        name=str(row[CSV_MODULE]).strip(),
        design_days=_parse_days(row, CSV_DESIGN_DAYS, "Design", index),
        frontend_days=_parse_days(row, CSV_FRONTEND_DAYS, "Frontend", index),
        backend_days=_parse_days(row, CSV_BACKEND_DAYS, "Backend", index),
        design_performers=split_performers(row.get(CSV_DESIGN_PERFORMERS)),
        development_performers=split_performers(row.get(CSV_DEVELOPMENT_PERFORMERS)),
        is_enabled=True,
    )
    try:
        return validate_project_module(module)
    except ValidationError as exc:
        raise ValidationError(f"Row {index + 1}: {exc}") from exc


def validate_discount(discount: Any) -> float:
    if isinstance(discount, bool) or not isinstance(discount, (int, float)) or math.isnan(discount):
        raise ValidationError("Discount must be a number")
    if discount < 0 or discount > 100:
        raise ValidationError("Discount must be between 0 and 100")
    return float(discount)


__all__ = [
    "MAX_PHASE_DAYS",
    "PerformerAssignmentError",
    "ValidationError",
    "csv_row_to_module",
    "find_performer_assignment_errors",
    "split_performers",
    "validate_csv_row",
    "validate_discount",
    "validate_performer_assignment",
    "validate_project_module",
    "validate_rate_entries",
    "validate_rate_entry",
]
