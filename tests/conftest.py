"""Shared fixtures for coffee-dex tests."""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from coffee_dex.core import MappingService
from coffee_dex.mapping import MappingAssembler
from coffee_dex.schema import Candidate, TastingRecord
from coffee_dex.scoring import CategoryEngine, load_rule_table
from coffee_dex.storage import InMemoryCandidateRepository

SMALL_POOL = (
    Candidate(id=1, name="Clefairy", categories=("fairy",)),
    Candidate(id=4, name="Charmander", categories=("fire",)),
    Candidate(id=5, name="Charmeleon", categories=("fire",)),
    Candidate(id=6, name="Charizard", categories=("fire", "flying")),
    Candidate(id=19, name="Rattata", categories=("normal",)),
    Candidate(id=16, name="Pidgey", categories=("normal", "flying")),
    Candidate(id=43, name="Oddish", categories=("grass", "poison")),
)


@pytest.fixture
def make_record():
    ids = count(1)

    def _make(record_id=None, *, notes=(), roast_level="unclear", processing_method=None, rating=7, **traits):
        return TastingRecord(
            id=record_id or f"coffee-{next(ids)}",
            name="Test Coffee",
            origin="Ethiopia",
            roast_level=roast_level,
            processing_method=processing_method,
            tasting_notes=list(notes),
            tasting_traits=traits,
            rating=rating,
        )

    return _make


@pytest.fixture
def sweet_record(make_record):
    """Sweet, aromatic, light washed coffee."""

    def _make(record_id=None):
        return make_record(
            record_id,
            sweetness=9,
            bitterness=1,
            aromatic_intensity=8,
            roast_level="light",
            processing_method="washed",
        )

    return _make


@pytest.fixture
def roasty_record(make_record):
    """Dark, roasty, bitter natural coffee."""

    def _make(record_id=None):
        return make_record(
            record_id,
            roast_intensity=9,
            bitterness=8,
            roast_level="dark",
            processing_method="natural",
        )

    return _make


@pytest.fixture
def rules():
    return load_rule_table()


@pytest.fixture
def engine(rules):
    return CategoryEngine(rules)


@pytest.fixture
def ticking_clock():
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    ticks = count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def small_repo():
    return InMemoryCandidateRepository(SMALL_POOL)


@pytest.fixture
def service(small_repo, engine, ticking_clock):
    return MappingService(
        small_repo,
        assembler=MappingAssembler(engine, clock=ticking_clock),
    )
