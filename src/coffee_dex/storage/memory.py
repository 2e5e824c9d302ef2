"""In-process storage guarded by a lock."""

from __future__ import annotations

import threading

from coffee_dex.exceptions import NotFoundError
from coffee_dex.schema import Candidate, MappingRecord, TastingRecord
from coffee_dex.storage.base import CandidateRepository, Reservation, TastingRecordRepository


class InMemoryTastingRecordRepository(TastingRecordRepository):
    def __init__(self, records: list[TastingRecord] | None = None):
        self._lock = threading.Lock()
        self._records: dict[str, TastingRecord] = {record.id: record for record in records or []}

    def get_by_id(self, record_id: str) -> TastingRecord:
        with self._lock:
            record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(f"coffee not found: {record_id}")
        return record

    def add(self, record: TastingRecord) -> TastingRecord:
        with self._lock:
            self._records[record.id] = record
        return record


class InMemoryCandidateRepository(CandidateRepository):
    """Registry kept in dictionaries; the lock makes reservation atomic."""

    def __init__(self, candidates: tuple[Candidate, ...]):
        super().__init__(candidates)
        self._lock = threading.Lock()
        self._by_coffee: dict[str, MappingRecord] = {}
        self._coffee_by_candidate: dict[int, str] = {}

    def is_used(self, candidate_id: int) -> bool:
        with self._lock:
            return candidate_id in self._coffee_by_candidate

    def used_candidate_ids(self) -> set[int]:
        with self._lock:
            return set(self._coffee_by_candidate)

    def reserve_and_create(self, mapping: MappingRecord) -> Reservation:
        with self._lock:
            if mapping.coffee_id in self._by_coffee:
                return Reservation.COFFEE_MAPPED
            if mapping.candidate_id in self._coffee_by_candidate:
                return Reservation.CANDIDATE_USED
            self._coffee_by_candidate[mapping.candidate_id] = mapping.coffee_id
            self._by_coffee[mapping.coffee_id] = mapping.model_copy(deep=True)
        return Reservation.RESERVED

    def get_mapping(self, coffee_id: str) -> MappingRecord:
        with self._lock:
            mapping = self._by_coffee.get(coffee_id)
        if mapping is None:
            raise NotFoundError(f"mapping not found for coffee: {coffee_id}")
        return mapping.model_copy(deep=True)

    def list_mappings(self) -> list[MappingRecord]:
        with self._lock:
            mappings = [mapping.model_copy(deep=True) for mapping in self._by_coffee.values()]
        return sorted(mappings, key=lambda mapping: mapping.created_at, reverse=True)

    def update_nickname(self, coffee_id: str, nickname: str) -> MappingRecord:
        with self._lock:
            mapping = self._by_coffee.get(coffee_id)
            if mapping is None:
                raise NotFoundError(f"mapping not found for coffee: {coffee_id}")
            updated = mapping.model_copy(update={"nickname": nickname})
            self._by_coffee[coffee_id] = updated
        return updated.model_copy(deep=True)
