from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, Sequence

from .models.rates import RateEntry
from .validation import ValidationError, validate_rate_entries

logger = logging.getLogger(__name__)

RATES_FILENAME = "rates.json"


class RateRepository(Protocol):
    def load(self) -> list[RateEntry]:
        ...

    def save(self, rates: Sequence[RateEntry]) -> None:
        ...


class LocalRateRepository:
    """Stores the rate card as JSON. Per-performer discounts are never written."""

    def __init__(self, *, base_path: Path) -> None:
        self._base_path = base_path

    @property
    def file_path(self) -> Path:
        return self._base_path / RATES_FILENAME

    def load(self) -> list[RateEntry]:
        if not self.file_path.exists():
            return []
        try:
            with self.file_path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Stored rate card is not valid JSON: {self.file_path}") from exc
        return [rate.without_discount() for rate in validate_rate_entries(data)]

    def save(self, rates: Sequence[RateEntry]) -> None:
        self._base_path.mkdir(parents=True, exist_ok=True)
        payload = [rate.model_dump(by_alias=True, exclude={"discount"}) for rate in rates]
        with self.file_path.open("w", encoding="utf-8") as fp:
            json.dump(payload, fp, ensure_ascii=False, indent=2)
        logger.info("Saved rate card", extra={"path": str(self.file_path), "rates": len(payload)})


__all__ = ["LocalRateRepository", "RATES_FILENAME", "RateRepository"]
