from __future__ import annotations

import json
from pathlib import Path

import pytest

from quote_calculator.models.project import ProjectModule
from quote_calculator.models.rates import RateEntry

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def load_rates() -> list[RateEntry]:
    payload = json.loads((DATA_DIR / "rates" / "rates.json").read_text(encoding="utf-8"))
    return [RateEntry.model_validate(item) for item in payload]


def sample_csv() -> str:
    return (DATA_DIR / "modules" / "sample.csv").read_text(encoding="utf-8")


def standard_modules() -> list[ProjectModule]:
    return [
        ProjectModule(
            id="module-1",
            name="Authentication",
            design_days=3,
            frontend_days=5,
            backend_days=8,
            design_performers=["UI Designer"],
            development_performers=["Frontend Developer", "Backend Developer"],
        ),
        ProjectModule(
            id="module-2",
            name="Dashboard",
            design_days=4,
            frontend_days=10,
            backend_days=6,
            design_performers=["UI Designer"],
            development_performers=["Frontend Developer", "Backend Developer"],
        ),
        ProjectModule(
            id="module-3",
            name="Reporting",
            design_days=2,
            frontend_days=7,
            backend_days=9,
            design_performers=["UX Designer"],
            development_performers=["Frontend Developer", "Backend Developer"],
            is_enabled=False,
        ),
    ]


@pytest.fixture
def rates() -> list[RateEntry]:
    return load_rates()


@pytest.fixture
def modules() -> list[ProjectModule]:
    return standard_modules()
