"""Tests for the in-memory storage backends."""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from coffee_dex.exceptions import NotFoundError
from coffee_dex.schema import MappingRecord
from coffee_dex.storage import InMemoryTastingRecordRepository, Reservation

START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _mapping(coffee_id, candidate_id, minutes=0):
    return MappingRecord(
        id=f"m-{coffee_id}",
        coffee_id=coffee_id,
        candidate_id=candidate_id,
        candidate_name="Someone",
        level=35,
        confidence=0.8,
        description="test",
        created_at=START + timedelta(minutes=minutes),
    )


def test_get_by_category_matches_any_tag(small_repo):
    """Category lookup matches any of a candidate's tags."""
    repo = small_repo

    assert [candidate.name for candidate in repo.get_by_category("Flying")] == ["Charizard", "Pidgey"]
    assert [candidate.id for candidate in repo.get_by_category("fire")] == [4, 5, 6]
    assert repo.get_by_category("dragon") == []
    assert repo.get_candidate(43).name == "Oddish"
    assert repo.get_candidate(999) is None


def test_reserve_marks_candidate_used(small_repo):
    """Reserving a candidate marks it used and stores the mapping."""
    repo = small_repo

    assert repo.reserve_and_create(_mapping("a", 4)) is Reservation.RESERVED
    assert repo.is_used(4)
    assert not repo.is_used(5)
    assert repo.used_candidate_ids() == {4}
    assert repo.get_mapping("a").candidate_id == 4


def test_reserve_rejects_used_candidate_and_mapped_coffee(small_repo):
    """Used candidates and already-mapped coffees are rejected."""
    repo = small_repo
    repo.reserve_and_create(_mapping("a", 4))

    assert repo.reserve_and_create(_mapping("b", 4)) is Reservation.CANDIDATE_USED
    assert repo.reserve_and_create(_mapping("a", 5)) is Reservation.COFFEE_MAPPED
    assert repo.used_candidate_ids() == {4}
    with pytest.raises(NotFoundError):
        repo.get_mapping("b")


def test_concurrent_reservations_have_one_winner(small_repo):
    """Racing reservations for one candidate have exactly one winner."""
    repo = small_repo
    barrier = threading.Barrier(10)
    outcomes = []

    def worker(index):
        barrier.wait()
        outcomes.append(repo.reserve_and_create(_mapping(f"c{index}", 1)))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count(Reservation.RESERVED) == 1
    assert outcomes.count(Reservation.CANDIDATE_USED) == 9


def test_list_mappings_newest_first(small_repo):
    """Mappings are listed newest first."""
    repo = small_repo
    repo.reserve_and_create(_mapping("old", 4, minutes=0))
    repo.reserve_and_create(_mapping("new", 5, minutes=5))
    repo.reserve_and_create(_mapping("mid", 6, minutes=2))

    assert [mapping.coffee_id for mapping in repo.list_mappings()] == ["new", "mid", "old"]


def test_returned_mappings_are_copies(small_repo):
    """Mutating a returned mapping does not change the store."""
    repo = small_repo
    repo.reserve_and_create(_mapping("a", 4))

    fetched = repo.get_mapping("a")
    fetched.nickname = "changed"

    assert repo.get_mapping("a").nickname == ""


def test_update_nickname(small_repo):
    """update_nickname() changes only the stored nickname."""
    repo = small_repo
    repo.reserve_and_create(_mapping("a", 4))

    updated = repo.update_nickname("a", "Sparky")

    assert updated.nickname == "Sparky"
    assert repo.get_mapping("a").nickname == "Sparky"
    with pytest.raises(NotFoundError):
        repo.update_nickname("missing", "x")


def test_record_repository(make_record):
    """Tasting records can be added and fetched by id."""
    record = make_record("kenya-1", sweetness=5)
    repo = InMemoryTastingRecordRepository([record])

    assert repo.get_by_id("kenya-1") == record
    repo.add(make_record("kenya-2"))
    assert repo.get_by_id("kenya-2").id == "kenya-2"
    with pytest.raises(NotFoundError):
        repo.get_by_id("nope")
