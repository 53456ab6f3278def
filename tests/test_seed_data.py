"""Tests for advocates.seed_data and scripts/seed_advocates.py."""
from __future__ import annotations

import json
import random
from collections.abc import Iterator
from pathlib import Path

import pytest

from advocates import config
from advocates.seed_data import (
    DEGREES,
    SAMPLE_ADVOCATES,
    SPECIALTIES,
    build_seed_dataset,
    create_random_records,
)
from advocates.store import AdvocateStore
from scripts import seed_advocates


def test_sample_advocates_are_well_formed() -> None:
    assert len(SAMPLE_ADVOCATES) == 15
    for adv in SAMPLE_ADVOCATES:
        assert adv.degree in DEGREES
        assert adv.specialties
        assert set(adv.specialties) <= set(SPECIALTIES)
        assert adv.years_of_experience >= 0
        assert len(str(adv.phone_number)) == 10


def test_random_records_reproducible_with_seeded_rng() -> None:
    a = create_random_records(20, random.Random(7))
    b = create_random_records(20, random.Random(7))
    assert a == b
    assert len(a) == 20


def test_random_records_respect_vocabularies() -> None:
    for adv in create_random_records(200, random.Random(1)):
        assert adv.degree in DEGREES
        assert 1 <= len(adv.specialties) <= 5
        assert len(set(adv.specialties)) == len(adv.specialties)
        assert set(adv.specialties) <= set(SPECIALTIES)
        assert 1 <= adv.years_of_experience <= 30
        assert len(str(adv.phone_number)) == 10


def test_negative_count_yields_nothing() -> None:
    assert create_random_records(-5) == []


def test_seed_dataset_starts_with_sample() -> None:
    dataset = build_seed_dataset(3, random.Random(0))
    assert len(dataset) == len(SAMPLE_ADVOCATES) + 3
    assert tuple(dataset[: len(SAMPLE_ADVOCATES)]) == SAMPLE_ADVOCATES


# ───────────────────────────── CLI ──────────────────────────────────────


@pytest.fixture()
def dev_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("ADVOCATES_ENV", raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_seed_script_writes_db(dev_settings: None, tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    db = tmp_path / "advocates.duckdb"
    rc = seed_advocates.main(["--db", str(db), "--random-count", "4", "--seed", "3", "--json"])
    assert rc == 0

    out = json.loads(capsysbinary.readouterr().out)
    assert len(out) == len(SAMPLE_ADVOCATES) + 4
    with AdvocateStore(db) as store:
        assert store.advocate_count == len(out)


def test_seed_script_refuses_production(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ADVOCATES_ENV", "production")
    config.get_settings.cache_clear()
    try:
        rc = seed_advocates.main(["--db", str(tmp_path / "advocates.duckdb")])
    finally:
        config.get_settings.cache_clear()
    assert rc == 1
    assert not (tmp_path / "advocates.duckdb").exists()
