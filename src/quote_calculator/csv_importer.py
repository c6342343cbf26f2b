from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .models.project import ProjectModule
from .models.rates import RateEntry
from .performers import rates_for_missing_performers
from .validation import (
    PerformerAssignmentError,
    ValidationError,
    csv_row_to_module,
    find_performer_assignment_errors,
    validate_csv_row,
)

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    modules: list[ProjectModule]
    new_rates: list[RateEntry] = field(default_factory=list)
    warnings: list[PerformerAssignmentError] = field(default_factory=list)


class ModuleCsvImporter:
    """Turns module CSV exports into validated ``ProjectModule`` lists."""

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict

    def parse_file(self, path: Path, *, rates: Sequence[RateEntry] = ()) -> ImportResult:
        if path.suffix.lower() != ".csv":
            raise ValidationError(f"Please upload a CSV file: {path.name}")
        if not path.exists():
            raise FileNotFoundError(f"Module CSV not found: {path}")
        return self.parse_text(path.read_text(encoding="utf-8-sig"), rates=rates)

    def parse_text(self, text: str, *, rates: Sequence[RateEntry] = ()) -> ImportResult:
        reader = csv.DictReader(io.StringIO(text), skipinitialspace=True)
        modules: list[ProjectModule] = []
        index = 0
        for row in reader:
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                continue
            validated = validate_csv_row(row, index)
            modules.append(csv_row_to_module(validated, index))
            index += 1

        if not modules:
            raise ValidationError("No valid data found in CSV file")

        warnings = find_performer_assignment_errors(modules)
        if warnings:
            if self._strict:
                raise warnings[0]
            for warning in warnings:
                logger.warning(
                    "Performer assignment problem",
                    extra={"module_name": warning.module_name, "phase": warning.phase.value},
                )

        new_rates = rates_for_missing_performers(modules, rates)
        logger.info(
            "Imported modules from CSV",
            extra={"modules": len(modules), "new_rates": len(new_rates), "warnings": len(warnings)},
        )
        return ImportResult(modules=modules, new_rates=new_rates, warnings=warnings)


__all__ = ["ImportResult", "ModuleCsvImporter"]
