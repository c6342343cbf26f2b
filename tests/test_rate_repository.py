import json

import pytest

from quote_calculator.models.rates import RateEntry
from quote_calculator.rate_repository import LocalRateRepository
from quote_calculator.validation import ValidationError

from conftest import DATA_DIR


def test_load_missing_card_is_empty(tmp_path):
    assert LocalRateRepository(base_path=tmp_path / "nothing").load() == []


def test_save_strips_discounts(tmp_path):
    repository = LocalRateRepository(base_path=tmp_path / "rates")
    repository.save(
        [
            RateEntry(role="UI Designer", monthly_rate=4000, discount=30),
            RateEntry(role="Frontend Developer", monthly_rate=5000),
        ]
    )

    stored = json.loads(repository.file_path.read_text(encoding="utf-8"))
    assert stored == [
        {"role": "UI Designer", "monthlyRate": 4000},
        {"role": "Frontend Developer", "monthlyRate": 5000},
    ]

    loaded = repository.load()
    assert [(rate.role, rate.monthly_rate, rate.discount) for rate in loaded] == [
        ("UI Designer", 4000, 0),
        ("Frontend Developer", 5000, 0),
    ]


def test_load_ignores_stored_discounts(tmp_path):
    (tmp_path / "rates.json").write_text(
        json.dumps([{"role": "QA Engineer", "monthlyRate": 4000, "discount": 15}]), encoding="utf-8"
    )

    assert LocalRateRepository(base_path=tmp_path).load()[0].discount == 0


def test_bundled_rate_card_loads():
    rates = LocalRateRepository(base_path=DATA_DIR / "rates").load()

    assert sum(rate.monthly_rate for rate in rates) == 23000


def test_load_corrupt_card_raises_validation_error(tmp_path):
    (tmp_path / "rates.json").write_text("not json", encoding="utf-8")

    with pytest.raises(ValidationError, match="not valid JSON"):
        LocalRateRepository(base_path=tmp_path).load()
