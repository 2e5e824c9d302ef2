"""Tests for the PostgreSQL storage backends with a mocked connection."""

from datetime import datetime, timezone

import psycopg
import pytest

from coffee_dex.exceptions import NotFoundError, PersistenceError
from coffee_dex.schema import MappingRecord, TraitAnnotation
from coffee_dex.storage import Reservation
from coffee_dex.storage.postgres import PostgresCandidateRepository, PostgresTastingRecordRepository

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def cursor(mocker):
    conn = mocker.MagicMock()
    conn.__enter__.return_value = conn
    cur = mocker.MagicMock()
    conn.cursor.return_value.__enter__.return_value = cur
    mocker.patch("coffee_dex.storage.postgres.psycopg.connect", return_value=conn)
    cur.conn = conn
    return cur


def _mapping(coffee_id="c1", candidate_id=4):
    return MappingRecord(
        id="m1",
        coffee_id=coffee_id,
        candidate_id=candidate_id,
        candidate_name="Charmander",
        level=35,
        confidence=0.9,
        description="roasty",
        trait_mapping=[TraitAnnotation(trait="bitterness", target_attribute="Attack", reasoning="x")],
        created_at=CREATED,
    )


def _row():
    return {
        "id": "m1",
        "coffee_id": "c1",
        "candidate_id": 4,
        "candidate_name": "Charmander",
        "nickname": None,
        "level": 35,
        "confidence": 0.9,
        "description": "roasty",
        "trait_mapping": '[{"trait": "bitterness", "target_attribute": "Attack", "reasoning": "x"}]',
        "created_at": "2026-01-01T00:00:00Z",
    }


def test_requires_database_url(small_repo):
    """PostgreSQL storage needs a database URL."""
    with pytest.raises(ValueError):
        PostgresCandidateRepository("", small_repo.candidates)


def test_reserve_inserts_and_commits(cursor, small_repo):
    """A successful insert commits and reports RESERVED."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchone.return_value = {"id": "m1"}

    assert repo.reserve_and_create(_mapping()) is Reservation.RESERVED

    insert_sql, params = cursor.execute.call_args.args
    assert "on conflict do nothing" in insert_sql
    assert params[1] == "c1"
    assert params[2] == 4
    cursor.conn.commit.assert_called_once()


def test_reserve_reports_used_candidate(cursor, small_repo):
    """A conflict on the candidate rolls back and reports CANDIDATE_USED."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchone.side_effect = [None, None]

    assert repo.reserve_and_create(_mapping()) is Reservation.CANDIDATE_USED
    cursor.conn.rollback.assert_called_once()
    cursor.conn.commit.assert_not_called()


def test_reserve_reports_mapped_coffee(cursor, small_repo):
    """A conflict on the coffee reports COFFEE_MAPPED."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchone.side_effect = [None, {"mapped": 1}]

    assert repo.reserve_and_create(_mapping()) is Reservation.COFFEE_MAPPED


def test_schema_is_created_once(cursor, small_repo):
    """Schema statements run only on the first query."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchone.return_value = None

    repo.is_used(4)
    repo.is_used(5)

    # Three schema statements, then one query per call.
    assert cursor.execute.call_count == 5


def test_get_mapping_parses_row(cursor, small_repo):
    """Rows are parsed into MappingRecord."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchone.return_value = _row()

    mapping = repo.get_mapping("c1")

    assert mapping.candidate_name == "Charmander"
    assert mapping.nickname == ""
    assert mapping.trait_mapping[0].target_attribute == "Attack"
    assert mapping.created_at == CREATED


def test_get_mapping_missing_raises(cursor, small_repo):
    """A missing mapping raises NotFoundError."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchone.return_value = None

    with pytest.raises(NotFoundError):
        repo.get_mapping("c1")


def test_used_candidate_ids(cursor, small_repo):
    """Used candidate ids are read from the mapping table."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchall.return_value = [{"candidate_id": 4}, {"candidate_id": 19}]

    assert repo.used_candidate_ids() == {4, 19}


def test_update_nickname_missing_raises(cursor, small_repo):
    """Renaming a missing mapping raises NotFoundError."""
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)
    cursor.fetchone.return_value = None

    with pytest.raises(NotFoundError):
        repo.update_nickname("c1", "Sparky")


def test_connection_failure_becomes_persistence_error(mocker, small_repo):
    """Driver errors surface as PersistenceError."""
    mocker.patch(
        "coffee_dex.storage.postgres.psycopg.connect",
        side_effect=psycopg.OperationalError("connection refused"),
    )
    repo = PostgresCandidateRepository("postgresql://test", small_repo.candidates)

    with pytest.raises(PersistenceError):
        repo.reserve_and_create(_mapping())
    with pytest.raises(PersistenceError):
        repo.is_used(4)


def test_record_repository_round_trip(cursor, make_record):
    """Stored records are read back unchanged."""
    repo = PostgresTastingRecordRepository("postgresql://test")
    record = make_record("kenya-1", sweetness=6, notes=["plum"])

    repo.add(record)
    cursor.fetchone.return_value = {"record_json": record.model_dump(mode="json")}

    assert repo.get_by_id("kenya-1") == record


def test_record_repository_missing(cursor):
    """A missing record raises NotFoundError."""
    repo = PostgresTastingRecordRepository("postgresql://test")
    cursor.fetchone.return_value = None

    with pytest.raises(NotFoundError):
        repo.get_by_id("nope")
